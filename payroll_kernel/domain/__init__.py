"""Pure roster domain: records, validation profiles, summaries, identity."""

from payroll_kernel.domain.employee import (
    DEFAULT_LEAVE_DAY_RATE,
    EmployeeRecord,
    EmployeeStatus,
    derive_net_pay,
)
from payroll_kernel.domain.summary import ApprovalDecision, RosterSummary
from payroll_kernel.domain.validation import (
    ACTIVE_ONLY,
    STRICT,
    ValidationProfile,
    Violation,
    get_profile,
    is_valid,
    validate,
)

__all__ = [
    "ACTIVE_ONLY",
    "DEFAULT_LEAVE_DAY_RATE",
    "STRICT",
    "ApprovalDecision",
    "EmployeeRecord",
    "EmployeeStatus",
    "RosterSummary",
    "ValidationProfile",
    "Violation",
    "derive_net_pay",
    "get_profile",
    "is_valid",
    "validate",
]
