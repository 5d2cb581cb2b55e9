"""Tests for id allocation and the deterministic clock."""

from datetime import datetime, timezone
from uuid import UUID

from payroll_kernel.domain.clock import DeterministicClock, SystemClock
from payroll_kernel.domain.identity import TimeBasedIdAllocator, UUIDAllocator

EPOCH_MS = "1704110400000"  # 2024-01-01T12:00:00Z


class TestTimeBasedIdAllocator:
    def test_epoch_milliseconds(self, deterministic_clock):
        allocator = TimeBasedIdAllocator(deterministic_clock)
        assert allocator.allocate(set()) == EPOCH_MS

    def test_bumps_past_collisions(self, deterministic_clock):
        allocator = TimeBasedIdAllocator(deterministic_clock)
        taken = {EPOCH_MS, "1704110400001"}
        assert allocator.allocate(taken) == "1704110400002"

    def test_advancing_clock_changes_id(self, deterministic_clock):
        allocator = TimeBasedIdAllocator(deterministic_clock)
        first = allocator.allocate(())
        deterministic_clock.advance(2)
        assert int(allocator.allocate(())) == int(first) + 2000


class TestUUIDAllocator:
    def test_returns_uuid_text(self):
        value = UUIDAllocator().allocate(())
        assert str(UUID(value)) == value

    def test_unique_over_many(self):
        allocator = UUIDAllocator()
        ids: set[str] = set()
        for _ in range(200):
            ids.add(allocator.allocate(ids))
        assert len(ids) == 200


class TestClocks:
    def test_deterministic_clock_is_stable(self):
        clock = DeterministicClock()
        assert clock.now() == clock.now()
        assert clock.now() == datetime(2024, 1, 1, 12, tzinfo=timezone.utc)

    def test_tick_and_set_time(self):
        clock = DeterministicClock()
        assert clock.tick() == datetime(2024, 1, 1, 12, 0, 1, tzinfo=timezone.utc)
        target = datetime(2025, 6, 30, tzinfo=timezone.utc)
        clock.set_time(target)
        assert clock.now() == target

    def test_system_clock_is_utc(self):
        assert SystemClock().now().tzinfo is timezone.utc
