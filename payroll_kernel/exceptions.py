"""
Typed Exception Hierarchy for the Payroll Kernel.

===============================================================================
WHY TYPED EXCEPTIONS
===============================================================================

Callers of the roster engine (an HTTP layer, the CLI, tests) must map every
failure to a precise response. Parsing message strings is fragile, so:

  1. Every error has a TYPED exception class (catch by type, not message)
  2. Every exception has a CODE attribute (machine-readable, API-safe)
  3. Exceptions carry structured DATA (not just a message string)

Example - WRONG way to handle errors:
    try:
        service.create_employee(fields)
    except Exception as e:
        if "bank account" in str(e):  # FRAGILE - message might change
            ...

Example - RIGHT way (what this module enables):
    try:
        service.create_employee(fields)
    except RecordValidationError as e:
        return {"errors": e.reasons}

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

All exceptions inherit from PayrollKernelError:

    PayrollKernelError (base)
    |
    +-- RecordError
    |   +-- RecordValidationError
    |   +-- EmployeeNotFoundError
    |
    +-- ApprovalError
    |   +-- ApprovalDeniedError
    |
    +-- PersistenceError
    |
    +-- ConfigurationError
        +-- UnknownProfileError
        +-- InvalidConfigError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category        | Code                        | When Raised
----------------|-----------------------------|-----------------------------------------
Record          | VALIDATION_FAILED           | Create/edit payload violates a rule
                | EMPLOYEE_NOT_FOUND          | Employee ID doesn't exist
----------------|-----------------------------|-----------------------------------------
Approval        | APPROVAL_DENIED             | Roster contains invalid records
----------------|-----------------------------|-----------------------------------------
Persistence     | PERSISTENCE_FAILED          | Store load/save failed (not retried)
----------------|-----------------------------|-----------------------------------------
Configuration   | UNKNOWN_VALIDATION_PROFILE  | Profile name not registered
                | INVALID_CONFIG              | Config value missing or malformed

===============================================================================
HANDLING PATTERNS
===============================================================================

1. VALIDATION AND NOT-FOUND ARE CALLER ERRORS (never retried):

    except RecordValidationError as e:
        respond(400, errors=e.reasons)
    except EmployeeNotFoundError as e:
        respond(404, id=e.employee_id)

2. APPROVAL DENIAL IS A BULK DECISION:

    except ApprovalDeniedError as e:
        respond(400, invalid_count=e.invalid_count)

3. PERSISTENCE FAILURES PROPAGATE AS-IS:

    except PersistenceError:
        respond(500)  # nothing partial was written
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from payroll_kernel.domain.validation import Violation


class PayrollKernelError(Exception):
    """
    Base exception for all payroll kernel errors.

    All subclasses must have a `code` class attribute for machine-readable
    error identification.
    """

    code: str = "PAYROLL_KERNEL_ERROR"


# Record-related exceptions


class RecordError(PayrollKernelError):
    """Base exception for employee record errors."""

    code: str = "RECORD_ERROR"


class RecordValidationError(RecordError):
    """
    One or more validation rules rejected a record.

    Always recoverable: the caller corrects the input and retries.
    """

    code: str = "VALIDATION_FAILED"

    def __init__(
        self,
        violations: Sequence[Violation],
        employee_id: str | None = None,
        profile: str = "strict",
    ):
        self.violations = tuple(violations)
        self.employee_id = employee_id
        self.profile = profile
        super().__init__(
            f"Employee record failed {profile} validation: "
            + "; ".join(self.reasons)
        )

    @property
    def reasons(self) -> list[str]:
        """Human-readable violation messages in rule order."""
        return [v.message for v in self.violations]

    @property
    def fields(self) -> list[str]:
        return [v.field for v in self.violations]


class EmployeeNotFoundError(RecordError):
    """Employee with given ID was not found."""

    code: str = "EMPLOYEE_NOT_FOUND"

    def __init__(self, employee_id: str):
        self.employee_id = employee_id
        super().__init__(f"Employee not found: {employee_id}")


# Approval exceptions


class ApprovalError(PayrollKernelError):
    """Base exception for payroll approval errors."""

    code: str = "APPROVAL_ERROR"


class ApprovalDeniedError(ApprovalError):
    """
    Payroll approval refused because the roster holds invalid records.

    Carries the invalid count (always) and the offending IDs (when known).
    """

    code: str = "APPROVAL_DENIED"

    def __init__(
        self,
        invalid_count: int,
        invalid_ids: Sequence[str] = (),
        profile: str = "activeOnly",
    ):
        self.invalid_count = invalid_count
        self.invalid_ids = tuple(invalid_ids)
        self.profile = profile
        super().__init__(
            f"Cannot approve payroll with invalid employees: "
            f"{invalid_count} invalid under {profile} validation"
        )


# Persistence exceptions


class PersistenceError(PayrollKernelError):
    """
    The persistence collaborator failed to load or save the roster.

    Not retried by the engine. The prior stored contents remain readable.
    """

    code: str = "PERSISTENCE_FAILED"

    def __init__(self, operation: str, location: str, reason: str):
        self.operation = operation
        self.location = location
        self.reason = reason
        super().__init__(f"Roster {operation} failed for {location}: {reason}")


# Configuration exceptions


class ConfigurationError(PayrollKernelError):
    """Base exception for configuration errors."""

    code: str = "CONFIGURATION_ERROR"


class UnknownProfileError(ConfigurationError):
    """Validation profile name is not registered."""

    code: str = "UNKNOWN_VALIDATION_PROFILE"

    def __init__(self, profile_name: str, known: Sequence[str] = ()):
        self.profile_name = profile_name
        self.known = tuple(known)
        super().__init__(
            f"Unknown validation profile {profile_name!r}; "
            f"expected one of {sorted(self.known)}"
        )


class InvalidConfigError(ConfigurationError):
    """A configuration value is missing or malformed."""

    code: str = "INVALID_CONFIG"

    def __init__(self, key: str, value: object, reason: str):
        self.key = key
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid config {key}={value!r}: {reason}")


# Names used by callers that speak in the terms of the HTTP layer
ValidationError = RecordValidationError
NotFoundError = EmployeeNotFoundError
