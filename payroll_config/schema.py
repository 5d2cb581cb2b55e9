"""
RosterConfig schema.

Typed, frozen settings for the roster engine.  YAML files are parsed into
these types by the loader; ``bridges`` turns them into kernel objects.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from pathlib import Path

VALID_BACKENDS = frozenset({"json", "sql", "memory"})
VALID_ALLOCATORS = frozenset({"time", "uuid"})
VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


@dataclass(frozen=True)
class StoreConfig:
    """Where the roster lives."""

    backend: str = "json"
    path: Path = Path("employees.json")
    database_url: str = "sqlite:///payroll_roster.db"


@dataclass(frozen=True)
class PayrollRules:
    """Rule parameters for validation and approval."""

    leave_day_rate: Decimal = Decimal("100")
    approval_profile: str = "activeOnly"
    purge_profile: str = "strict"


@dataclass(frozen=True)
class RosterConfig:
    """Complete engine configuration."""

    store: StoreConfig = field(default_factory=StoreConfig)
    payroll: PayrollRules = field(default_factory=PayrollRules)
    allocator: str = "time"
    log_level: str = "INFO"
    source: Path | None = None
