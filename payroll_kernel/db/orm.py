"""
Module: payroll_kernel.db.orm
Responsibility: ORM model for the SQL-backed roster store.
Architecture position: Kernel > DB.  Consumed by
    ``payroll_kernel.services.sql_roster_store``.

Invariants enforced:
    - ``position`` preserves roster insertion order across save/load.
    - Values are stored verbatim (an invalid status or a stale net pay is
      persisted as-is; validity is decided on read, never stored).
"""

from decimal import Decimal

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from payroll_kernel.db.base import Base


class EmployeeRecordModel(Base):
    """One row per roster record."""

    __tablename__ = "payroll_employees"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    name: Mapped[str] = mapped_column(nullable=False, default="")
    status: Mapped[str] = mapped_column(String(64), nullable=False, default="")
    bank_account: Mapped[str] = mapped_column(String(64), nullable=False, default="")
    gross_pay: Mapped[Decimal] = mapped_column(nullable=True)
    unpaid_leave_days: Mapped[Decimal] = mapped_column(nullable=True)
    net_pay: Mapped[Decimal] = mapped_column(nullable=True)

    def to_wire(self) -> dict[str, object]:
        return {
            "id": self.id,
            "name": self.name,
            "status": self.status,
            "bankAccount": self.bank_account,
            "grossPay": self.gross_pay,
            "unpaidLeaveDays": self.unpaid_leave_days,
            "netPay": self.net_pay,
        }
