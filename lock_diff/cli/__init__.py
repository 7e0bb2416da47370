"""Command line interface for LockDiff."""
