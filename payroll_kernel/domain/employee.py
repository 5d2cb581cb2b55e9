"""
Employee Domain Model (``payroll_kernel.domain.employee``).

Responsibility
--------------
The single roster entity, ``EmployeeRecord``, its wire mapping, and the
net-pay derivation that ties ``grossPay``, ``unpaidLeaveDays`` and
``netPay`` together.

Architecture position
---------------------
**Kernel domain layer** -- pure value objects.  ZERO I/O.  Consumed by the
validator, the roster service and every store.

Invariants enforced
-------------------
* ``netPay == grossPay - unpaidLeaveDays * leave_day_rate``.  The stored
  ``net_pay`` is a cache; ``derive_net_pay`` is the source of truth and the
  validator re-derives it on every check.
* All monetary fields use ``Decimal`` -- NEVER ``float``.
* ``bank_account`` is text; leading zeros are significant.
* Records are ``frozen=True``; edits produce a new record with the same id.

Failure modes
-------------
* Construction never raises on bad amounts.  Every constructor path,
  direct ones included, coerces amounts through ``coerce_amount``, so
  anything unparseable or out of range becomes ``Decimal("NaN")`` and the
  validator reports it.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal, localcontext
from enum import Enum
from typing import Any

from payroll_kernel.domain.money import (
    MONEY_CONTEXT,
    NAN,
    ZERO,
    coerce_amount,
    format_amount,
    is_number,
)

DEFAULT_LEAVE_DAY_RATE = Decimal("100")


class EmployeeStatus(str, Enum):
    """Employment states accepted by the roster."""
    ACTIVE = "Active"
    TERMINATED = "Terminated"
    ON_BOARDING = "OnBoarding"


VALID_STATUSES: frozenset[str] = frozenset(s.value for s in EmployeeStatus)

# Wire name -> attribute name, in wire order
WIRE_FIELDS: dict[str, str] = {
    "id": "id",
    "name": "name",
    "status": "status",
    "bankAccount": "bank_account",
    "grossPay": "gross_pay",
    "unpaidLeaveDays": "unpaid_leave_days",
    "netPay": "net_pay",
}

# Fields a caller may set on create/edit
EDITABLE_FIELDS: tuple[str, ...] = (
    "name",
    "status",
    "bankAccount",
    "grossPay",
    "unpaidLeaveDays",
)

_AMOUNT_FIELDS = frozenset({"grossPay", "unpaidLeaveDays", "netPay"})
_AMOUNT_ATTRS = ("gross_pay", "unpaid_leave_days", "net_pay")


def derive_net_pay(
    gross_pay: Decimal,
    unpaid_leave_days: Decimal,
    leave_day_rate: Decimal = DEFAULT_LEAVE_DAY_RATE,
) -> Decimal:
    """
    Compute net pay from its inputs.

    Postconditions:
        - Returns ``gross_pay - unpaid_leave_days * leave_day_rate`` exactly.
        - Returns ``Decimal("NaN")`` if either input does not coerce to a
          finite number.
    """
    gross_pay = coerce_amount(gross_pay)
    unpaid_leave_days = coerce_amount(unpaid_leave_days)
    if not (is_number(gross_pay) and is_number(unpaid_leave_days)):
        return NAN
    with localcontext(MONEY_CONTEXT):
        return gross_pay - unpaid_leave_days * leave_day_rate


def _coerce_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


@dataclass(frozen=True)
class EmployeeRecord:
    """One employee's payroll row."""
    id: str
    name: str
    status: str
    bank_account: str
    gross_pay: Decimal
    unpaid_leave_days: Decimal = ZERO
    net_pay: Decimal = NAN

    def __post_init__(self) -> None:
        # Amounts are always Decimal; ints, floats and text are coerced
        for attr in _AMOUNT_ATTRS:
            object.__setattr__(self, attr, coerce_amount(getattr(self, attr)))

    @classmethod
    def from_fields(
        cls,
        employee_id: str,
        fields: Mapping[str, Any],
        leave_day_rate: Decimal = DEFAULT_LEAVE_DAY_RATE,
    ) -> EmployeeRecord:
        """
        Build a record from caller-supplied wire fields.

        ``netPay`` is always derived here; a caller-supplied value is
        ignored.  A missing ``unpaidLeaveDays`` defaults to zero.
        """
        gross_pay = coerce_amount(fields.get("grossPay"))
        unpaid = coerce_amount(fields.get("unpaidLeaveDays", ZERO))
        return cls(
            id=employee_id,
            name=_coerce_text(fields.get("name")),
            status=_coerce_text(fields.get("status")),
            bank_account=_coerce_text(fields.get("bankAccount")),
            gross_pay=gross_pay,
            unpaid_leave_days=unpaid,
            net_pay=derive_net_pay(gross_pay, unpaid, leave_day_rate),
        )

    @classmethod
    def from_wire(cls, data: Mapping[str, Any]) -> EmployeeRecord:
        """
        Rebuild a stored record exactly as persisted.

        Unlike ``from_fields`` the stored ``netPay`` is kept verbatim so the
        validator can detect a stale value.
        """
        return cls(
            id=_coerce_text(data.get("id")),
            name=_coerce_text(data.get("name")),
            status=_coerce_text(data.get("status")),
            bank_account=_coerce_text(data.get("bankAccount")),
            gross_pay=coerce_amount(data.get("grossPay")),
            unpaid_leave_days=coerce_amount(data.get("unpaidLeaveDays")),
            net_pay=coerce_amount(data.get("netPay")),
        )

    def to_wire(self) -> dict[str, str]:
        """Serialize with the exact wire names; amounts as decimal strings."""
        out: dict[str, str] = {}
        for wire_name, attr in WIRE_FIELDS.items():
            value = getattr(self, attr)
            out[wire_name] = format_amount(value) if wire_name in _AMOUNT_FIELDS else value
        return out

    def merged_with(
        self,
        changes: Mapping[str, Any],
        leave_day_rate: Decimal = DEFAULT_LEAVE_DAY_RATE,
    ) -> EmployeeRecord:
        """
        Overlay caller changes on this record.

        Unspecified fields are retained, ``id`` never changes, and ``netPay``
        is recomputed from the merged gross pay and leave days.
        """
        fields: dict[str, Any] = {
            "name": self.name,
            "status": self.status,
            "bankAccount": self.bank_account,
            "grossPay": self.gross_pay,
            "unpaidLeaveDays": self.unpaid_leave_days,
        }
        for key in EDITABLE_FIELDS:
            if key in changes:
                fields[key] = changes[key]
        return EmployeeRecord.from_fields(self.id, fields, leave_day_rate)

    def expected_net_pay(
        self, leave_day_rate: Decimal = DEFAULT_LEAVE_DAY_RATE
    ) -> Decimal:
        return derive_net_pay(self.gross_pay, self.unpaid_leave_days, leave_day_rate)

    def deductions(
        self, leave_day_rate: Decimal = DEFAULT_LEAVE_DAY_RATE
    ) -> Decimal:
        """Unpaid leave deduction, or NaN when leave days are not a number."""
        if not is_number(self.unpaid_leave_days):
            return NAN
        with localcontext(MONEY_CONTEXT):
            return self.unpaid_leave_days * leave_day_rate

    @property
    def is_active(self) -> bool:
        return self.status == EmployeeStatus.ACTIVE.value


def unknown_fields(fields: Mapping[str, Any]) -> list[str]:
    """Keys a caller sent that are neither editable nor ignorable."""
    ignorable = {"id", "netPay"}
    return [
        key for key in fields
        if key not in EDITABLE_FIELDS and key not in ignorable
    ]
