"""Tests for change classification."""

import dataclasses

import pytest

from lock_diff.core.classifier import ChangeClassifier, ChangeRecord, ClassifiedChanges
from lock_diff.core.parsers import LockfileDiffParser
from lock_diff.core.parsers.base import ResolvedEntry


def old(*specifiers):
    return ResolvedEntry(old=list(specifiers))


def new(*specifiers):
    return ResolvedEntry(new=list(specifiers))


@pytest.fixture
def classifier():
    """Create a change classifier."""
    return ChangeClassifier()


class TestBuckets:
    """Test bucket assignment."""

    def test_new_package_is_added(self, classifier):
        """Test a package present only after the change."""
        resolved = LockfileDiffParser().parse(['+"left-pad@1.0.0":', '  version "1.0.0"'])

        changes = classifier.classify(resolved)

        assert changes.added == [
            ChangeRecord(
                dependency="left-pad",
                added_versions=("1.0.0",),
                removed_versions=(),
                is_major_upgrade=False,
            )
        ]
        assert changes.removed == []
        assert changes.updated == []

    def test_dropped_package_is_removed(self, classifier):
        """Test a package present only before the change."""
        changes = classifier.classify({"bar": {"1.0.0": old("^1.0.0")}})

        assert [r.dependency for r in changes.removed] == ["bar"]
        assert changes.removed[0].removed_versions == ("1.0.0",)
        assert changes.added == [] and changes.updated == []

    def test_major_update(self, classifier):
        """Test a one-for-one swap across majors."""
        changes = classifier.classify({"foo": {"1.2.0": old("^1.0.0"), "2.0.0": new("^2.0.0")}})

        assert changes.updated == [ChangeRecord("foo", ("2.0.0",), ("1.2.0",), True)]

    def test_minor_update(self, classifier):
        """Test a one-for-one swap within a major."""
        changes = classifier.classify({"bar": {"1.2.0": old("^1.2.0"), "1.3.0": new("^1.3.0")}})

        assert changes.updated == [ChangeRecord("bar", ("1.3.0",), ("1.2.0",), False)]

    def test_extra_version_counts_as_added(self, classifier):
        """Test that more added than removed versions lands in added."""
        resolved = {
            "baz": {
                "1.0.0": old("^1.0.0"),
                "2.0.0": new("^2.0.0"),
                "3.0.0": new("^3.0.0"),
            }
        }

        changes = classifier.classify(resolved)

        assert len(changes.added) == 1
        record = changes.added[0]
        assert record.added_versions == ("2.0.0", "3.0.0")
        assert record.removed_versions == ("1.0.0",)
        assert record.is_major_upgrade is True

    def test_bucket_exclusivity(self, classifier):
        """Test that each record lands in exactly one bucket."""
        resolved = {
            "a": {"1.0.0": new("^1")},
            "b": {"1.0.0": old("^1")},
            "c": {"1.0.0": old("^1"), "1.1.0": new("^1.1")},
            "d": {"1.0.0": new("^1"), "2.0.0": new("^2")},
        }

        changes = classifier.classify(resolved)
        names = [r.dependency for bucket in (changes.added, changes.removed, changes.updated) for r in bucket]

        assert sorted(names) == ["a", "b", "c", "d"]
        assert [r.dependency for r in changes.added] == ["a", "d"]

    def test_order_preservation(self, classifier):
        """Test that records keep the map order within a bucket."""
        resolved = {
            "zeta": {"1.0.0": new("^1")},
            "mid": {"1.0.0": old("^1")},
            "alpha": {"1.0.0": new("^1")},
        }

        changes = classifier.classify(resolved)

        assert [r.dependency for r in changes.added] == ["zeta", "alpha"]


class TestNoOpFilter:
    """Test dropping dependencies without a net change."""

    def test_both_sides_on_one_version(self, classifier):
        """Test that a version reached from both snapshots is not a change."""
        changes = classifier.classify({"foo": {"2.0.0": ResolvedEntry(old=["^2.0.0"], new=["^1.0.0"])}})

        assert changes.is_empty()

    def test_reformatted_specifier(self, classifier):
        """Test that a rewritten range with the same resolution is dropped."""
        resolved = LockfileDiffParser().parse([
            '-"foo@^1.0.0":',
            '+"foo@^1.0.0", "foo@^1.1.0":',
            '   version "1.1.0"',
        ])

        assert classifier.classify(resolved).is_empty()

    def test_unchanged_entry_does_not_mask_a_change(self, classifier):
        """Test that an unchanged version is ignored next to a real change."""
        resolved = {
            "foo": {
                "1.0.0": ResolvedEntry(old=["^1.0.0"], new=["~1.0.0"]),
                "2.0.0": new("^2.0.0"),
            }
        }

        changes = classifier.classify(resolved)

        assert changes.added[0].added_versions == ("2.0.0",)
        assert changes.added[0].removed_versions == ()


class TestMajorUpgrade:
    """Test major upgrade detection on classified records."""

    def test_every_added_version_needs_a_smaller_removed_major(self, classifier):
        """Test a mixed change where one added version stays in its major."""
        resolved = {
            "foo": {
                "1.0.0": old("^1.0.0"),
                "3.0.0": old("^3.0.0"),
                "2.0.0": new("^2.0.0"),
                "1.5.0": new("^1.5.0"),
            }
        }

        record = classifier.classify(resolved).updated[0]

        assert record.is_major_upgrade is False

    def test_removed_versions_need_not_be_the_largest(self, classifier):
        """Test that a larger removed major does not block the upgrade."""
        resolved = {
            "foo": {
                "1.0.0": old("^1.0.0"),
                "5.0.0": old("^5.0.0"),
                "3.0.0": new("^3.0.0"),
                "2.0.0": new("^2.0.0"),
            }
        }

        record = classifier.classify(resolved).updated[0]

        assert record.is_major_upgrade is True

    def test_major_records_outgrow_a_removed_major(self, classifier):
        """Test that every major record has added majors above some removed one."""
        resolved = {
            "a": {"1.0.0": old("^1"), "2.0.0": new("^2")},
            "b": {"0.9.0": old("^0.9"), "1.0.0": new("^1"), "4.0.0": new("^4")},
            "c": {"3.0.0": old("^3"), "2.0.0": new("^2")},
        }

        changes = classifier.classify(resolved)
        records = changes.added + changes.removed + changes.updated

        for record in records:
            if record.is_major_upgrade:
                removed = [int(v.split(".")[0]) for v in record.removed_versions]
                for added in record.added_versions:
                    assert any(int(added.split(".")[0]) > r for r in removed)
        assert {r.dependency for r in records if r.is_major_upgrade} == {"a", "b"}


class TestChangeRecord:
    """Test the ChangeRecord and ClassifiedChanges models."""

    def test_record_is_immutable(self):
        """Test that a record cannot be modified after creation."""
        record = ChangeRecord("foo", ("2.0.0",), ("1.0.0",), True)

        with pytest.raises(dataclasses.FrozenInstanceError):
            record.is_major_upgrade = False

    def test_record_validation(self):
        """Test that the dependency name is required."""
        with pytest.raises(ValueError, match="Dependency name cannot be empty"):
            ChangeRecord("")

    def test_to_dict(self):
        """Test the JSON shape of a record."""
        record = ChangeRecord("foo", ("2.0.0",), ("1.0.0",), True)

        assert record.to_dict() == {
            "dependency": "foo",
            "addedVersions": ["2.0.0"],
            "removedVersions": ["1.0.0"],
            "isMajorUpgrade": True,
        }

    def test_major_and_minor_updates(self):
        """Test splitting updates by severity."""
        major = ChangeRecord("foo", ("2.0.0",), ("1.0.0",), True)
        minor = ChangeRecord("bar", ("1.3.0",), ("1.2.0",), False)
        changes = ClassifiedChanges(updated=[major, minor])

        assert changes.major_updates() == [major]
        assert changes.minor_updates() == [minor]
        assert not changes.is_empty()
        assert changes.to_dict()["updated"][1]["dependency"] == "bar"
