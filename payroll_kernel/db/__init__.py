"""Database layer - engine, base class, column types, roster table."""

from payroll_kernel.db.base import Base
from payroll_kernel.db.engine import (
    create_tables,
    drop_tables,
    get_engine,
    get_session,
    get_session_factory,
    init_engine_from_url,
    reset_engine,
    session_scope,
)
from payroll_kernel.db.types import DecimalString

__all__ = [
    "Base",
    "DecimalString",
    "create_tables",
    "drop_tables",
    "get_engine",
    "get_session",
    "get_session_factory",
    "init_engine_from_url",
    "reset_engine",
    "session_scope",
]
