"""
Module: payroll_kernel.db.base
Responsibility: Declarative base class for the roster's SQLAlchemy ORM
    models, with a type annotation map for consistent column types.
Architecture position: Kernel > DB.  This is the lowest-level import target
    within the kernel's database layer.  MUST NOT import from domain/ or
    services/.

Invariants enforced:
    - Decimal precision: type_annotation_map maps Python Decimal to
      DecimalString, exact decimal text.  NEVER use float for amounts.
"""

from decimal import Decimal
from typing import ClassVar

from sqlalchemy import String
from sqlalchemy.orm import DeclarativeBase

from payroll_kernel.db.types import DecimalString


class Base(DeclarativeBase):
    """
    Declarative base for all roster ORM models.

    Contract:
        Every ORM model inherits from Base.  Models declare their own
        primary key: roster ids are opaque strings issued by the identity
        allocator, not surrogate UUIDs.

    Guarantees:
        - Decimal maps to DecimalString (exact, SQLite-safe).
        - str maps to String(400).
    """

    type_annotation_map: ClassVar[dict] = {
        Decimal: DecimalString(),
        str: String(400),
    }
