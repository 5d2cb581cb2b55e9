"""
Employee record validation (``payroll_kernel.domain.validation``).

Responsibility
--------------
Decides structural and business validity of one ``EmployeeRecord`` and
returns every applicable violation, not just the first.  Rules are plain
functions; a ``ValidationProfile`` is an explicit, ordered tuple of them.

Architecture position
---------------------
**Kernel domain layer** -- pure functions.  No I/O, no clock, no logging
on the hot path.  Called by ``RosterService`` and from tests.

Profiles
--------
* ``strict``     -- create, edit and purge.  Status, bank account and net
  pay consistency, then numeric sanity (name present, gross pay > 0,
  unpaid leave >= 0).
* ``activeOnly`` -- roster soundness and payroll approval.  Status, the
  "must be Active" badge rule, bank account and net pay consistency.

Invariants enforced
-------------------
* Deterministic: the same record always yields the same violations in the
  profile's rule order.
* Never raises on bad numeric input.  NaN or missing amounts fail with a
  reason; ordering comparisons are only made on finite Decimals.
* ``netPay`` is re-derived on every check, never trusted.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from decimal import Decimal

from payroll_kernel.domain.employee import (
    DEFAULT_LEAVE_DAY_RATE,
    VALID_STATUSES,
    EmployeeRecord,
    EmployeeStatus,
)
from payroll_kernel.domain.money import is_number
from payroll_kernel.exceptions import UnknownProfileError

# ASCII digits only; \d would also accept other Unicode decimal digits
BANK_ACCOUNT_PATTERN = re.compile(r"[0-9]{10,12}")


@dataclass(frozen=True)
class Violation:
    """A single reason a record fails validation."""
    field: str
    code: str
    message: str

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> dict[str, str]:
        return {"field": self.field, "code": self.code, "message": self.message}


Rule = Callable[[EmployeeRecord, Decimal], "Violation | None"]


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------


def check_status(record: EmployeeRecord, leave_day_rate: Decimal) -> Violation | None:
    if record.status in VALID_STATUSES:
        return None
    return Violation(
        "status",
        "STATUS_INVALID",
        "Status must be Active, Terminated, or OnBoarding",
    )


def check_status_active(record: EmployeeRecord, leave_day_rate: Decimal) -> Violation | None:
    # Unknown statuses are already reported by check_status
    if record.status not in VALID_STATUSES or record.is_active:
        return None
    return Violation("status", "STATUS_NOT_ACTIVE", "Employee must be active")


def check_bank_account(record: EmployeeRecord, leave_day_rate: Decimal) -> Violation | None:
    account = record.bank_account
    if isinstance(account, str) and BANK_ACCOUNT_PATTERN.fullmatch(account):
        return None
    return Violation(
        "bankAccount",
        "BANK_ACCOUNT_INVALID",
        "Bank account must be 10-12 digits",
    )


def check_net_pay(record: EmployeeRecord, leave_day_rate: Decimal) -> Violation | None:
    expected = record.expected_net_pay(leave_day_rate)
    if is_number(expected) and is_number(record.net_pay) and expected == record.net_pay:
        return None
    return Violation(
        "netPay",
        "NET_PAY_MISMATCH",
        "Net pay calculation is incorrect",
    )


def check_name(record: EmployeeRecord, leave_day_rate: Decimal) -> Violation | None:
    if isinstance(record.name, str) and record.name.strip():
        return None
    return Violation("name", "NAME_REQUIRED", "Name is required")


def check_gross_pay(record: EmployeeRecord, leave_day_rate: Decimal) -> Violation | None:
    if is_number(record.gross_pay) and record.gross_pay > 0:
        return None
    return Violation(
        "grossPay",
        "GROSS_PAY_NOT_POSITIVE",
        "Gross pay must be a positive number",
    )


def check_unpaid_leave(record: EmployeeRecord, leave_day_rate: Decimal) -> Violation | None:
    if is_number(record.unpaid_leave_days) and record.unpaid_leave_days >= 0:
        return None
    return Violation(
        "unpaidLeaveDays",
        "UNPAID_LEAVE_NEGATIVE",
        "Unpaid leave days must be a non-negative number",
    )


# ---------------------------------------------------------------------------
# Profiles
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ValidationProfile:
    """A named, ordered set of validation rules."""
    name: str
    rules: tuple[Rule, ...]
    description: str = ""


STRICT = ValidationProfile(
    name="strict",
    rules=(
        check_status,
        check_bank_account,
        check_net_pay,
        check_name,
        check_gross_pay,
        check_unpaid_leave,
    ),
    description="Create/edit validity: structure plus numeric sanity.",
)

ACTIVE_ONLY = ValidationProfile(
    name="activeOnly",
    rules=(
        check_status,
        check_status_active,
        check_bank_account,
        check_net_pay,
    ),
    description="Roster soundness: structure plus status must be Active.",
)

PROFILES: dict[str, ValidationProfile] = {
    STRICT.name: STRICT,
    ACTIVE_ONLY.name: ACTIVE_ONLY,
}

_ALIASES = {"active_only": ACTIVE_ONLY.name}


def get_profile(name: str | ValidationProfile) -> ValidationProfile:
    """
    Resolve a profile by name.

    Raises:
        UnknownProfileError: If ``name`` is not a registered profile.
    """
    if isinstance(name, ValidationProfile):
        return name
    key = _ALIASES.get(name, name)
    try:
        return PROFILES[key]
    except KeyError:
        raise UnknownProfileError(name, tuple(PROFILES)) from None


def validate(
    record: EmployeeRecord,
    profile: ValidationProfile | str = STRICT,
    leave_day_rate: Decimal = DEFAULT_LEAVE_DAY_RATE,
) -> list[Violation]:
    """
    Validate one record against a profile.

    Postconditions:
        - Returns an empty list iff the record is valid under ``profile``.
        - Violations appear in the profile's rule order.
    """
    resolved = get_profile(profile)
    violations: list[Violation] = []
    for rule in resolved.rules:
        violation = rule(record, leave_day_rate)
        if violation is not None:
            violations.append(violation)
    return violations


def is_valid(
    record: EmployeeRecord,
    profile: ValidationProfile | str = STRICT,
    leave_day_rate: Decimal = DEFAULT_LEAVE_DAY_RATE,
) -> bool:
    return not validate(record, profile, leave_day_rate)


__all__ = [
    "ACTIVE_ONLY",
    "BANK_ACCOUNT_PATTERN",
    "EmployeeStatus",
    "PROFILES",
    "STRICT",
    "ValidationProfile",
    "Violation",
    "get_profile",
    "is_valid",
    "validate",
]
