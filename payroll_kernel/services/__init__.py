"""Roster services: the aggregator and its persistence collaborators."""

from payroll_kernel.services.roster_service import RosterService
from payroll_kernel.services.roster_store import (
    InMemoryRosterStore,
    JsonFileRosterStore,
    RosterStore,
)

__all__ = [
    "InMemoryRosterStore",
    "JsonFileRosterStore",
    "RosterService",
    "RosterStore",
]
