"""
Unit tests for store and ledger invariants under worker-thread mutation.
"""

import threading
from concurrent.futures import ThreadPoolExecutor

from models.slot import SlotStatus

WORKERS = 8
ROUNDS = 200
DATETIMES = [f"2026-03-{day}T{hour}:00:00" for day in (14, 15) for hour in (10, 11, 12)]


def _assert_store_invariants(store):
    for date_key, slots in store.get_all_slots():
        datetimes = [s.datetime for s in slots]
        assert slots, f"empty bucket kept for {date_key}"
        assert len(datetimes) == len(set(datetimes))
        assert datetimes == sorted(datetimes)


class TestScheduleStoreThreads:
    def test_add_remove_churn_keeps_buckets_consistent(self, store):
        barrier = threading.Barrier(WORKERS)

        def churn(worker):
            for i in range(ROUNDS):
                dt = DATETIMES[(worker + i) % len(DATETIMES)]
                store.add_slot(dt, note=f"w{worker}")
                store.set_slot_status(dt, SlotStatus.BOOKED)
                store.remove_slot(dt)
            barrier.wait()
            for dt in DATETIMES:
                store.add_slot(dt)

        with ThreadPoolExecutor(max_workers=WORKERS) as pool:
            list(pool.map(churn, range(WORKERS)))

        _assert_store_invariants(store)
        assert store.date_keys() == ["2026-03-14", "2026-03-15"]
        assert store.slot_count() == len(DATETIMES)

    def test_remove_and_clear_leave_no_empty_buckets(self, store):
        def churn(worker):
            for i in range(ROUNDS):
                dt = DATETIMES[(worker * 3 + i) % len(DATETIMES)]
                store.add_slot(dt)
                if i % 5 == 0:
                    store.clear_day(dt.split("T")[0])
                else:
                    store.remove_slot(dt)

        with ThreadPoolExecutor(max_workers=WORKERS) as pool:
            list(pool.map(churn, range(WORKERS)))

        _assert_store_invariants(store)


class TestReservationLedgerThreads:
    def test_ids_unique_and_gapless(self, ledger, store):
        for dt in DATETIMES:
            store.add_slot(dt)

        def book(n):
            return ledger.create(f"Guest {n}", DATETIMES[n % len(DATETIMES)]).id

        with ThreadPoolExecutor(max_workers=WORKERS) as pool:
            ids = list(pool.map(book, range(ROUNDS)))

        assert sorted(ids) == list(range(1, ROUNDS + 1))
        # Listing order is creation order
        assert [r.id for r in ledger.list()] == list(range(1, ROUNDS + 1))
        assert all(
            slot.status == SlotStatus.BOOKED
            for _, slots in store.get_all_slots()
            for slot in slots
        )

    def test_create_and_cancel_interleaved(self, ledger):
        def book_then_cancel(n):
            reservation = ledger.create(f"Guest {n}", DATETIMES[n % len(DATETIMES)])
            ledger.cancel(reservation.id)
            return reservation.id

        with ThreadPoolExecutor(max_workers=WORKERS) as pool:
            ids = list(pool.map(book_then_cancel, range(ROUNDS)))

        assert sorted(ids) == list(range(1, ROUNDS + 1))
        assert ledger.create("Late", DATETIMES[0]).id == ROUNDS + 1
