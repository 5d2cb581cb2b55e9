"""
Config -> Kernel Bridges.

Functions that turn a ``RosterConfig`` into kernel objects.  These live in
payroll_config (the producer) because the kernel must NEVER import
payroll_config.

Usage:
    from payroll_config import get_active_config
    from payroll_config.bridges import build_roster_service

    config = get_active_config("roster.yaml")
    service = build_roster_service(config)
"""

from __future__ import annotations

from collections.abc import Callable

from payroll_config.schema import RosterConfig
from payroll_kernel.db.engine import create_tables, init_engine_from_url
from payroll_kernel.domain.clock import Clock, SystemClock
from payroll_kernel.domain.identity import (
    IdentityAllocator,
    TimeBasedIdAllocator,
    UUIDAllocator,
)
from payroll_kernel.domain.summary import ApprovalDecision
from payroll_kernel.services.roster_service import RosterService
from payroll_kernel.services.roster_store import (
    InMemoryRosterStore,
    JsonFileRosterStore,
    RosterStore,
)
from payroll_kernel.services.sql_roster_store import SqlRosterStore


def build_store(config: RosterConfig) -> RosterStore:
    """Build the persistence collaborator named by ``store.backend``."""
    backend = config.store.backend
    if backend == "json":
        return JsonFileRosterStore(config.store.path)
    if backend == "sql":
        engine = init_engine_from_url(config.store.database_url)
        create_tables(engine)
        return SqlRosterStore(location=engine.url.render_as_string(hide_password=True))
    return InMemoryRosterStore()


def build_allocator(config: RosterConfig, clock: Clock) -> IdentityAllocator:
    if config.allocator == "uuid":
        return UUIDAllocator()
    return TimeBasedIdAllocator(clock)


def build_roster_service(
    config: RosterConfig,
    store: RosterStore | None = None,
    clock: Clock | None = None,
    on_approved: Callable[[ApprovalDecision], None] | None = None,
) -> RosterService:
    """
    Wire store, allocator and rule parameters into a ``RosterService``.

    ``store`` and ``clock`` override what the config would build (tests).
    """
    clock = clock or SystemClock()
    return RosterService(
        store if store is not None else build_store(config),
        allocator=build_allocator(config, clock),
        clock=clock,
        leave_day_rate=config.payroll.leave_day_rate,
        approval_profile=config.payroll.approval_profile,
        purge_profile=config.payroll.purge_profile,
        on_approved=on_approved,
    )
