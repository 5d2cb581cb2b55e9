"""
Roster summary and approval value objects (``payroll_kernel.domain.summary``).

Responsibility
--------------
Folds a roster into summary totals and describes the outcome of a payroll
approval gate.

Architecture position
---------------------
**Kernel domain layer** -- pure.  ``summarize_records`` is a fold over an
already-loaded collection; the roster service owns loading.

Invariants enforced
-------------------
* Sums use exact ``Decimal`` arithmetic.  Rounding (half-up, to the cent)
  is applied once, when the summary is built, never mid-sum.
* ``totalNetPay`` sums the stored ``netPay`` of every record with no
  validity filtering.  Non-finite amounts contribute zero and are counted
  in ``skipped_amounts``.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal, localcontext

from payroll_kernel.domain.employee import DEFAULT_LEAVE_DAY_RATE, EmployeeRecord
from payroll_kernel.domain.money import (
    MONEY_CONTEXT,
    ZERO,
    format_amount,
    round_money,
)


@dataclass(frozen=True)
class RosterSummary:
    """
    Summary totals for the whole roster.

    ``skipped_amounts`` counts amounts, not records: a record whose
    ``netPay`` and leave deduction are both non-finite adds two.
    """
    total_employees: int
    total_net_pay: Decimal
    active_employees: int = 0
    total_deductions: Decimal = ZERO
    average_net_pay: Decimal = ZERO
    skipped_amounts: int = 0

    def to_wire(self, extended: bool = True) -> dict[str, object]:
        out: dict[str, object] = {
            "totalEmployees": self.total_employees,
            "totalNetPay": format_amount(self.total_net_pay),
        }
        if extended:
            out["activeEmployees"] = self.active_employees
            out["totalDeductions"] = format_amount(self.total_deductions)
            out["averageNetPay"] = format_amount(self.average_net_pay)
        return out


@dataclass(frozen=True)
class ApprovalDecision:
    """
    Outcome of a passed payroll approval gate.

    Nothing about the decision is persisted by the engine.
    """
    approved: bool
    checked_count: int
    profile: str
    decided_at: datetime

    def to_wire(self) -> dict[str, object]:
        return {
            "approved": self.approved,
            "checkedCount": self.checked_count,
            "profile": self.profile,
            "decidedAt": self.decided_at.isoformat(),
        }


def summarize_records(
    records: Iterable[EmployeeRecord],
    leave_day_rate: Decimal = DEFAULT_LEAVE_DAY_RATE,
) -> RosterSummary:
    """
    Compute roster totals.

    Postconditions:
        - ``total_employees`` counts every record.
        - ``total_net_pay`` / ``total_deductions`` are rounded half-up to
          the cent after exact summation.
        - ``average_net_pay`` is ``total / count`` (zero for an empty
          roster), computed from the unrounded total and rounded once.
    """
    count = 0
    active = 0
    skipped = 0
    net_total = ZERO
    deduction_total = ZERO

    with localcontext(MONEY_CONTEXT):
        for record in records:
            count += 1
            if record.is_active:
                active += 1
            if record.net_pay.is_finite():
                net_total += record.net_pay
            else:
                skipped += 1
            deduction = record.deductions(leave_day_rate)
            if deduction.is_finite():
                deduction_total += deduction
            else:
                skipped += 1

        average = net_total / count if count else ZERO

    return RosterSummary(
        total_employees=count,
        total_net_pay=round_money(net_total),
        active_employees=active,
        total_deductions=round_money(deduction_total),
        average_net_pay=round_money(average),
        skipped_amounts=skipped,
    )
