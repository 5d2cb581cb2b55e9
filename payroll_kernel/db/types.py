"""
Module: payroll_kernel.db.types
Responsibility: Column types for the roster table, so money columns are
    declared identically everywhere.
Architecture position: Kernel > DB.  MUST NOT import from domain/ or
    services/.

Invariants enforced:
    - No floats for money.  Amounts are stored as exact decimal text
      (DecimalString), which survives SQLite's lack of a native DECIMAL.
    - Bank account numbers are text columns; leading zeros survive.
    - Non-finite amounts (NaN) are stored as NULL and read back as NaN.
"""

from decimal import Decimal, InvalidOperation

from sqlalchemy import String
from sqlalchemy.types import TypeDecorator


class DecimalString(TypeDecorator):
    """
    Decimal stored as its exact string form.

    Contract:
        Transparently converts between Python Decimal objects and their
        canonical string representation (e.g., "1000", "12.50").

    Guarantees:
        - process_bind_param: finite Decimal -> str; NaN/None -> NULL.
        - process_result_value: str -> Decimal; NULL -> Decimal("NaN").
        - cache_ok=True enables SQLAlchemy statement caching.
    """

    impl = String(64)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        """Convert Decimal to string when storing."""
        if value is None:
            return None
        value = Decimal(value)
        if not value.is_finite():
            return None
        return str(value)

    def process_result_value(self, value, dialect):
        """Convert string back to Decimal when loading."""
        if value is None:
            return Decimal("NaN")
        try:
            return Decimal(value)
        except InvalidOperation:
            return Decimal("NaN")

