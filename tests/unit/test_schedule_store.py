"""
Unit tests for the in-memory schedule store.
"""

from models.slot import SlotStatus


class TestAddSlot:
    """Test slot insertion and upsert."""

    def test_add_creates_bucket(self, store):
        slot = store.add_slot("2026-03-15T14:00:00")

        assert slot.status == SlotStatus.AVAILABLE
        assert store.get_slots_for_date("2026-03-15") == [slot]

    def test_add_keeps_bucket_sorted(self, store):
        store.add_slot("2026-03-15T16:00:00")
        store.add_slot("2026-03-15T10:00:00")
        store.add_slot("2026-03-15T13:00:00")

        datetimes = [s.datetime for s in store.get_slots_for_date("2026-03-15")]
        assert datetimes == [
            "2026-03-15T10:00:00",
            "2026-03-15T13:00:00",
            "2026-03-15T16:00:00",
        ]

    def test_repeated_add_is_upsert(self, store):
        """Same datetime leaves one slot reflecting the last call."""
        store.add_slot("2026-03-15T14:00:00", 1, SlotStatus.AVAILABLE, "first")
        store.add_slot("2026-03-15T14:00:00", 2, SlotStatus.BLOCKED)
        last = store.add_slot("2026-03-15T14:00:00", 3, SlotStatus.BOOKED)

        slots = store.get_slots_for_date("2026-03-15")
        assert len(slots) == 1
        assert slots[0] is last
        assert last.duration == 3
        assert last.status == SlotStatus.BOOKED
        # Note survives calls that did not supply one
        assert last.note == "first"

    def test_upsert_replaces_note_when_given(self, store):
        store.add_slot("2026-03-15T14:00:00", note="old")
        store.add_slot("2026-03-15T14:00:00", note="new")

        assert store.get_slot("2026-03-15T14:00:00").note == "new"

    def test_datetime_kept_verbatim(self, store):
        store.add_slot("2026-03-15T14:00:00.000Z")

        slot = store.get_slots_for_date("2026-03-15")[0]
        assert slot.datetime == "2026-03-15T14:00:00.000Z"


class TestRemoveSlot:
    """Test slot removal."""

    def test_remove_existing(self, store):
        store.add_slot("2026-03-15T14:00:00")
        store.add_slot("2026-03-15T15:00:00")

        assert store.remove_slot("2026-03-15T14:00:00") is True
        assert [s.datetime for s in store.get_slots_for_date("2026-03-15")] == [
            "2026-03-15T15:00:00"
        ]

    def test_remove_last_slot_drops_bucket(self, store):
        store.add_slot("2026-03-15T14:00:00")

        assert store.remove_slot("2026-03-15T14:00:00") is True
        assert store.get_all_slots() == []
        assert store.date_keys() == []

    def test_remove_missing(self, store):
        store.add_slot("2026-03-15T14:00:00")

        assert store.remove_slot("2026-03-15T15:00:00") is False
        assert store.remove_slot("2026-03-16T14:00:00") is False
        assert store.slot_count() == 1


class TestSetSlotStatus:
    """Test status changes."""

    def test_set_status_and_note(self, store):
        store.add_slot("2026-03-15T14:00:00")

        slot = store.set_slot_status("2026-03-15T14:00:00", SlotStatus.BOOKED, "Ann")

        assert slot.status == SlotStatus.BOOKED
        assert slot.note == "Ann"

    def test_set_status_without_note_keeps_note(self, store):
        store.add_slot("2026-03-15T14:00:00", note="Ann")

        slot = store.set_slot_status("2026-03-15T14:00:00", SlotStatus.AVAILABLE)

        assert slot.status == SlotStatus.AVAILABLE
        assert slot.note == "Ann"

    def test_set_status_not_found(self, store):
        assert store.set_slot_status("2026-03-15T14:00:00", SlotStatus.BOOKED) is None

        store.add_slot("2026-03-15T10:00:00")
        assert store.set_slot_status("2026-03-15T14:00:00", SlotStatus.BOOKED) is None


class TestClearDayAndSnapshots:
    """Test clearing a day and full snapshots."""

    def test_clear_day_returns_count(self, store):
        for hour in (10, 11, 12):
            store.add_slot(f"2026-03-15T{hour}:00:00")

        assert store.clear_day("2026-03-15") == 3
        assert store.get_slots_for_date("2026-03-15") == []
        assert store.clear_day("2026-03-15") == 0

    def test_get_all_slots_sorted_by_date(self, store):
        store.add_slot("2026-04-01T10:00:00")
        store.add_slot("2026-03-15T10:00:00")
        store.add_slot("2026-03-20T10:00:00")

        assert [key for key, _ in store.get_all_slots()] == [
            "2026-03-15",
            "2026-03-20",
            "2026-04-01",
        ]

    def test_snapshot_list_is_a_copy(self, store):
        store.add_slot("2026-03-15T10:00:00")

        snapshot = store.get_slots_for_date("2026-03-15")
        snapshot.clear()

        assert store.slot_count() == 1
