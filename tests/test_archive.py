"""Tests for archive merging and persistence."""

import copy
import json

import pytest

from src.settlement.archive import ArchiveFile, ArchiveStore, merge_archive
from src.settlement.config import SettlementConfig


def day_entry(venue: str, payout: int = 0) -> dict:
    return {
        "venue": venue,
        "totalRaces": 12,
        "hitRaces": 1 if payout else 0,
        "perfectHit": False,
        "totalPayout": payout,
        "recoveryRate": round(payout / 144 * 100),
        "races": [],
    }


@pytest.fixture
def existing() -> dict:
    """Archive with two months of data."""
    return {
        "2025": {"12": {"30": day_entry("大井", 3000)}},
        "2026": {
            "02": {
                "10": day_entry("川崎", 1200),
                "11": day_entry("川崎"),
            }
        },
    }


class TestMergeArchive:
    """Test merge_archive."""

    def test_adds_new_day(self, existing):
        fragment = {"2026": {"02": {"12": day_entry("大井", 4820)}}}

        merged = merge_archive(existing, fragment, "2026-02-12")

        assert merged["2026"]["02"]["12"] == day_entry("大井", 4820)
        assert merged["2026"]["02"]["10"] == existing["2026"]["02"]["10"]
        assert merged["2025"] == existing["2025"]

    def test_replaces_day_wholesale(self, existing):
        """The day entry is replaced, not merged key by key."""
        fragment = {"2026": {"02": {"10": {"venue": "船橋", "races": []}}}}

        merged = merge_archive(existing, fragment, "2026-02-10")

        assert merged["2026"]["02"]["10"] == {"venue": "船橋", "races": []}

    def test_creates_missing_branches(self):
        fragment = {"2027": {"01": {"05": day_entry("浦和")}}}

        merged = merge_archive({}, fragment, "2027-01-05")

        assert merged == fragment

    def test_creates_missing_month(self, existing):
        fragment = {"2026": {"03": {"01": day_entry("浦和")}}}

        merged = merge_archive(existing, fragment, "2026-03-01")

        assert merged["2026"]["03"] == {"01": day_entry("浦和")}
        assert merged["2026"]["02"] == existing["2026"]["02"]

    def test_other_branches_untouched(self, existing):
        """Everything outside [year][month][day] is unchanged."""
        fragment = {"2026": {"02": {"12": day_entry("大井", 900)}}}

        merged = merge_archive(existing, fragment, "2026-02-12")
        del merged["2026"]["02"]["12"]

        assert merged == existing

    def test_does_not_mutate_inputs(self, existing):
        before = copy.deepcopy(existing)
        fragment = {"2026": {"02": {"12": day_entry("大井", 900)}}}
        fragment_before = copy.deepcopy(fragment)

        merged = merge_archive(existing, fragment, "2026-02-12")
        merged["2026"]["02"]["12"]["venue"] = "changed"

        assert existing == before
        assert fragment == fragment_before

    def test_idempotent(self, existing):
        fragment = {"2026": {"02": {"12": day_entry("大井", 4820)}}}

        once = merge_archive(existing, fragment, "2026-02-12")
        twice = merge_archive(once, fragment, "2026-02-12")

        assert once == twice

    def test_only_target_day_taken_from_fragment(self, existing):
        """Other days in the fragment are ignored."""
        fragment = {"2026": {"02": {"12": day_entry("大井"), "13": day_entry("大井")}}}

        merged = merge_archive(existing, fragment, "2026-02-12")

        assert "13" not in merged["2026"]["02"]

    def test_fragment_missing_date(self, existing):
        with pytest.raises(ValueError):
            merge_archive(existing, {"2026": {"02": {}}}, "2026-02-12")

    def test_none_existing(self):
        fragment = {"2026": {"02": {"12": day_entry("大井")}}}

        assert merge_archive(None, fragment, "2026-02-12") == fragment


class TestArchiveStore:
    """Test the flat date-keyed archive."""

    def test_from_nested(self, existing):
        store = ArchiveStore.from_nested(existing)

        assert len(store) == 3
        assert "2026-02-10" in store
        assert store.get("2025-12-30")["venue"] == "大井"
        assert store.get("2026-01-01") is None

    def test_dates_sorted(self, existing):
        store = ArchiveStore.from_nested(existing)

        assert store.dates() == ["2025-12-30", "2026-02-10", "2026-02-11"]

    def test_nested_roundtrip(self, existing):
        assert ArchiveStore.from_nested(existing).to_nested() == existing

    def test_upsert_matches_merge(self, existing):
        """Upserting a day gives the same archive as merge_archive."""
        entry = day_entry("大井", 4820)
        fragment = {"2026": {"02": {"12": entry}}}

        store = ArchiveStore.from_nested(existing).upsert("2026-02-12", entry)

        assert store.to_nested() == merge_archive(existing, fragment, "2026-02-12")

    def test_upsert_invalid_date(self):
        with pytest.raises(ValueError):
            ArchiveStore().upsert("2026-2-1", {})


class TestArchiveFile:
    """Test archive persistence."""

    def test_load_missing_file(self, tmp_path):
        archive = ArchiveFile(path=tmp_path / "archiveResults.json")

        assert archive.load() == {}

    def test_save_and_load(self, tmp_path, existing):
        archive = ArchiveFile(path=tmp_path / "data" / "archiveResults.json")

        archive.save(existing)

        assert archive.load() == existing
        text = archive.path.read_text(encoding="utf-8")
        assert "大井" in text  # Not ASCII-escaped

    def test_merge_day(self, tmp_path, existing):
        archive = ArchiveFile(path=tmp_path / "archiveResults.json")
        archive.save(existing)
        fragment = {"2026": {"02": {"12": day_entry("大井", 4820)}}}

        merged = archive.merge_day(fragment, "2026-02-12")

        assert archive.load() == merged
        assert merged["2026"]["02"]["12"]["totalPayout"] == 4820

    def test_public_mirror(self, tmp_path, existing):
        archive = ArchiveFile(
            path=tmp_path / "src" / "archiveResults.json",
            public_path=tmp_path / "public" / "archiveResults.json",
        )

        archive.save(existing)

        with open(archive.public_path, "r", encoding="utf-8") as f:
            assert json.load(f) == existing

    def test_from_config(self, tmp_path):
        config = SettlementConfig(archive_path=tmp_path / "a.json")

        archive = ArchiveFile.from_config(config)

        assert archive.path == tmp_path / "a.json"
        assert archive.public_path is None
