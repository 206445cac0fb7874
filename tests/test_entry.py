"""Tests for playlist entries and difficulties."""

from datetime import datetime, timedelta, timezone

import pytest

from blist import Difficulty, Entry, Hash, InvalidField, InvalidIdentifier, Key, LevelID, MalformedManifest


class TestDifficulty:
    """Test difficulty descriptors."""

    def test_accepts_any_single_line_values(self) -> None:
        """Test that values outside the game's vocabulary are accepted."""
        difficulty = Difficulty("MadeUpCharacteristic", "Impossible+")
        assert difficulty.to_manifest() == {"characteristic": "MadeUpCharacteristic", "name": "Impossible+"}

    @pytest.mark.parametrize(
        "characteristic,name,field",
        [
            ("Standard", "", "name"),
            ("Standard", "Expert\n", "name"),
            ("Stan\rdard", "Expert", "characteristic"),
            ("", "Expert", "characteristic"),
        ],
    )
    def test_rejects_empty_or_multiline(self, characteristic: str, name: str, field: str) -> None:
        """Test that each field must be a non-empty single line."""
        with pytest.raises(InvalidField) as exc_info:
            Difficulty(characteristic, name)
        assert exc_info.value.field == field


class TestEntryConstruction:
    """Test entry construction and factories."""

    def test_direct_construction_has_no_timestamp(self) -> None:
        """Test that entries built directly are undated and empty."""
        entry = Entry(Key("1a2b"))
        assert entry.added_at is None
        assert entry.difficulties == []
        assert entry.custom_data == {}

    def test_factories_stamp_current_time(self, zero_hash: str) -> None:
        """Test that new_* factories default the timestamp to now."""
        before = datetime.now(timezone.utc)
        entries = [Entry.new_key("1a2b"), Entry.new_hash(zero_hash), Entry.new_level_id("custom_level_x")]
        after = datetime.now(timezone.utc)

        assert [type(e.identifier) for e in entries] == [Key, Hash, LevelID]
        for entry in entries:
            assert entry.added_at is not None
            assert before <= entry.added_at <= after

    def test_factories_validate_identifier(self) -> None:
        """Test that factories reject invalid identifiers."""
        with pytest.raises(InvalidIdentifier):
            Entry.new_hash("abc")
        with pytest.raises(InvalidIdentifier):
            Entry.new_level_id("two\nlines")

    def test_identifier_must_be_a_variant(self) -> None:
        """Test that a plain string can't stand in for an identifier."""
        with pytest.raises(TypeError):
            Entry("1a2b")  # type: ignore[arg-type]

    def test_identifier_can_be_replaced(self) -> None:
        """Test that identity changes by assigning a new variant."""
        entry = Entry(Key("1a2b"))
        entry.identifier = LevelID("custom_level_x")
        assert entry.identifier == LevelID("custom_level_x")


class TestEntryTimestamp:
    """Test timestamp accessors."""

    def test_naive_datetime_treated_as_utc(self) -> None:
        """Test that naive datetimes are stored as UTC."""
        entry = Entry(Key("1"), added_at=datetime(2021, 3, 4, 5, 6, 7))
        assert entry.added_at == datetime(2021, 3, 4, 5, 6, 7, tzinfo=timezone.utc)
        assert entry.added_at.tzinfo is timezone.utc

    def test_aware_datetime_converted_to_utc(self) -> None:
        """Test that offsets are normalized to UTC."""
        plus_two = timezone(timedelta(hours=2))
        entry = Entry(Key("1"), added_at=datetime(2021, 3, 4, 5, 6, 7, tzinfo=plus_two))
        assert entry.added_at == datetime(2021, 3, 4, 3, 6, 7, tzinfo=timezone.utc)

    def test_returned_value_does_not_alias_entry(self) -> None:
        """Test that deriving a new instant from the returned value leaves the entry unchanged."""
        stamp = datetime(2021, 3, 4, tzinfo=timezone.utc)
        entry = Entry(Key("1"), added_at=stamp)
        returned = entry.added_at
        assert returned is not None
        returned += timedelta(days=1)
        assert entry.added_at == stamp

    def test_setting_none_clears(self) -> None:
        """Test that assigning None removes the timestamp."""
        entry = Entry.new_key("1")
        entry.added_at = None
        assert entry.added_at is None


class TestEntryManifest:
    """Test conversion to and from manifest entries."""

    def test_minimal_entry(self) -> None:
        """Test that unset optional fields are omitted."""
        assert Entry(Key("1a2b")).to_manifest() == {"type": "key", "key": "1a2b"}

    def test_full_entry(self) -> None:
        """Test that every field is emitted, with the date at second precision."""
        entry = Entry(
            LevelID("custom_level_x"),
            added_at=datetime(2021, 3, 4, 5, 6, 7, 891011, tzinfo=timezone.utc),
            difficulties=[Difficulty("Standard", "Expert"), Difficulty("OneSaber", "Hard")],
            custom_data={"note": "fun", "nested": {"a": [1, 2]}},
        )
        assert entry.to_manifest() == {
            "type": "levelID",
            "levelID": "custom_level_x",
            "date": "2021-03-04T05:06:07Z",
            "difficulties": [
                {"characteristic": "Standard", "name": "Expert"},
                {"characteristic": "OneSaber", "name": "Hard"},
            ],
            "customData": {"note": "fun", "nested": {"a": [1, 2]}},
        }

    def test_from_manifest_without_date(self, zero_hash: str) -> None:
        """Test that a missing date stays missing."""
        entry = Entry.from_manifest({"type": "hash", "hash": zero_hash})
        assert entry.identifier == Hash(zero_hash)
        assert entry.added_at is None
        assert entry.difficulties == []

    @pytest.mark.parametrize(
        "text",
        [
            "2021-03-04T05:06:07Z",
            "2021-03-04T07:06:07+02:00",
            "2021-03-04T01:36:07-03:30",
            "2021-03-04T05:06:07.000Z",
            "2021-03-04T05:06:07.123456789Z",
            "2021-03-04t05:06:07z",
            "2021-03-04 05:06:07Z",
        ],
    )
    def test_from_manifest_parses_rfc3339(self, text: str) -> None:
        """Test that RFC-3339 variants are accepted."""
        entry = Entry.from_manifest({"type": "key", "key": "1", "date": text})
        assert entry.added_at is not None
        assert entry.added_at.replace(microsecond=0) == datetime(2021, 3, 4, 5, 6, 7, tzinfo=timezone.utc)

    def test_from_manifest_clamps_leap_second(self) -> None:
        """Test that a leap second is accepted and clamped to :59."""
        entry = Entry.from_manifest({"type": "key", "key": "1", "date": "2016-12-31T23:59:60Z"})
        assert entry.added_at == datetime(2016, 12, 31, 23, 59, 59, tzinfo=timezone.utc)

    @pytest.mark.parametrize(
        "text",
        [
            "yesterday",
            "2021-03-04T05:06:07",
            "2021-13-04T05:06:07Z",
            "20210304T050607Z",
            "2021-W09-4T05:06:07Z",
            "2021-03-04T05Z",
            "2021-03-04T05:06Z",
            "2021-03-04",
            "2021-03-04T05:06:07+0200",
            "2021-03-04T05:06:07+24:00",
            "2021-03-04T05:06:07+02:60",
            " 2021-03-04T05:06:07Z",
            "0001-01-01T00:00:00+01:00",
        ],
    )
    def test_from_manifest_rejects_bad_dates(self, text: str) -> None:
        """Test that dates outside the RFC-3339 profile are malformed."""
        with pytest.raises(MalformedManifest):
            Entry.from_manifest({"type": "key", "key": "1", "date": text})

    def test_round_trip(self) -> None:
        """Test that an entry survives manifest conversion."""
        entry = Entry(
            Key("ff"),
            added_at=datetime(2020, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
            difficulties=[Difficulty("Standard", "Easy")],
            custom_data={"x": 1},
        )
        assert Entry.from_manifest(entry.to_manifest()) == entry
