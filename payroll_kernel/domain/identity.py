"""
Identity allocation for new roster records.

Responsibility:
    Supplies a fresh ``id`` on create that is unique among the ids currently
    stored.  Monotonicity is not required, only uniqueness.

Architecture position:
    Kernel > Domain -- pure apart from the injected Clock.

Failure modes:
    (none) -- the time-based allocator bumps past collisions.
"""

from __future__ import annotations

from collections.abc import Collection
from datetime import datetime, timedelta, timezone
from typing import Protocol
from uuid import uuid4

from payroll_kernel.domain.clock import Clock, SystemClock

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ONE_MS = timedelta(milliseconds=1)


class IdentityAllocator(Protocol):
    """Issues ids unique among ``existing_ids``."""

    def allocate(self, existing_ids: Collection[str]) -> str: ...


class TimeBasedIdAllocator:
    """
    Millisecond-timestamp ids, e.g. ``"1704110400000"``.

    Contract:
        Uses the epoch-millisecond value of ``clock.now()``.  If that value
        is already taken (same millisecond, or an older record that happens
        to share it) the candidate is incremented until it is free.
    """

    def __init__(self, clock: Clock | None = None):
        self._clock = clock or SystemClock()

    def allocate(self, existing_ids: Collection[str]) -> str:
        taken = set(existing_ids)
        candidate = (self._clock.now() - _EPOCH) // _ONE_MS
        while str(candidate) in taken:
            candidate += 1
        return str(candidate)


class UUIDAllocator:
    """Random UUID4 ids; regenerated on the (astronomically unlikely) collision."""

    def allocate(self, existing_ids: Collection[str]) -> str:
        taken = set(existing_ids)
        candidate = str(uuid4())
        while candidate in taken:
            candidate = str(uuid4())
        return candidate
