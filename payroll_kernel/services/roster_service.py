"""
Roster Service (``payroll_kernel.services.roster_service``).

Responsibility
--------------
The roster aggregator: list, create, edit, delete, purge-invalid,
approve-payroll and summarize over the full collection of employee records,
delegating per-record decisions to the pure validator and all storage to a
``RosterStore``.

Architecture position
---------------------
**Kernel services layer** -- imperative shell.  ``RosterService`` is the
sole public entry point for roster operations.  It composes the validator
(``domain.validation``), the summary fold (``domain.summary``), an
``IdentityAllocator`` and a ``RosterStore``.

Invariants enforced
-------------------
* Every operation re-reads the store; there is no cached copy.
* Every operation holds the service lock for its whole read-modify-write
  sequence: at most one mutation is in flight per service.
* Create and edit always derive ``netPay``; a caller-supplied value is
  ignored.
* A failed operation leaves the store untouched (validation and lookup
  happen before ``save``; ``save`` itself is all-or-nothing).
* Approval is a gate.  Nothing is persisted on approve.

Failure modes
-------------
* ``RecordValidationError`` -- create/edit payload violates ``strict``.
* ``EmployeeNotFoundError`` -- edit/delete/get of an unknown id.
* ``ApprovalDeniedError``   -- at least one record fails the approval
  profile; carries the count and the ids.
* ``PersistenceError``      -- propagated from the store, never retried.

Usage::

    service = RosterService(JsonFileRosterStore("employees.json"))
    record = service.create_employee({
        "name": "A", "status": "Active", "bankAccount": "1234567890",
        "grossPay": "1000", "unpaidLeaveDays": "2",
    })
    service.approve_payroll()
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Mapping
from decimal import Decimal
from typing import Any

from payroll_kernel.domain.clock import Clock, SystemClock
from payroll_kernel.domain.employee import (
    DEFAULT_LEAVE_DAY_RATE,
    EmployeeRecord,
    unknown_fields,
)
from payroll_kernel.domain.identity import IdentityAllocator, TimeBasedIdAllocator
from payroll_kernel.domain.summary import (
    ApprovalDecision,
    RosterSummary,
    summarize_records,
)
from payroll_kernel.domain.validation import (
    ACTIVE_ONLY,
    STRICT,
    ValidationProfile,
    Violation,
    get_profile,
    validate,
)
from payroll_kernel.exceptions import (
    ApprovalDeniedError,
    EmployeeNotFoundError,
    RecordValidationError,
)
from payroll_kernel.logging_config import LogContext, get_logger
from payroll_kernel.services.roster_store import RosterStore

logger = get_logger("services.roster_service")


class RosterService:
    """
    Aggregates and mutates the employee roster.

    Contract
    --------
    * Mutating methods either persist the full resulting collection or
      raise before calling ``store.save``.
    * Read methods (``list_employees``, ``get_employee``, ``summarize``,
      ``validate_roster``) never write.

    Guarantees
    ----------
    * One ``threading.RLock`` serializes all operations on this instance.
    * Clock and identity allocator are injectable for deterministic tests.

    Non-goals
    ---------
    * Does NOT serialize two service instances sharing one store.
    * Does NOT persist approval state; ``on_approved`` is the hook for a
      caller that wants to.
    """

    def __init__(
        self,
        store: RosterStore,
        allocator: IdentityAllocator | None = None,
        clock: Clock | None = None,
        leave_day_rate: Decimal = DEFAULT_LEAVE_DAY_RATE,
        approval_profile: ValidationProfile | str = ACTIVE_ONLY,
        purge_profile: ValidationProfile | str = STRICT,
        on_approved: Callable[[ApprovalDecision], None] | None = None,
    ):
        self._store = store
        self._clock = clock or SystemClock()
        self._allocator = allocator or TimeBasedIdAllocator(self._clock)
        self._leave_day_rate = leave_day_rate
        self._approval_profile = get_profile(approval_profile)
        self._purge_profile = get_profile(purge_profile)
        self._on_approved = on_approved
        self._lock = threading.RLock()

    @property
    def approval_profile(self) -> ValidationProfile:
        return self._approval_profile

    @property
    def purge_profile(self) -> ValidationProfile:
        return self._purge_profile

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def list_employees(self) -> list[EmployeeRecord]:
        """Return the roster unchanged; no validation."""
        with self._lock:
            return self._store.load()

    def get_employee(self, employee_id: str) -> EmployeeRecord:
        with self._lock:
            records = self._store.load()
            return records[self._index_of(records, employee_id)]

    def validate_employee(
        self,
        record: EmployeeRecord,
        profile: ValidationProfile | str = STRICT,
    ) -> list[Violation]:
        return validate(record, profile, self._leave_day_rate)

    def validate_roster(
        self, profile: ValidationProfile | str = ACTIVE_ONLY
    ) -> list[tuple[EmployeeRecord, list[Violation]]]:
        """Per-record violations in roster order (the table's Valid/Invalid badge)."""
        resolved = get_profile(profile)
        with self._lock:
            records = self._store.load()
        return [(r, validate(r, resolved, self._leave_day_rate)) for r in records]

    def summarize(self) -> RosterSummary:
        """
        Roster totals over every record, with no validity filtering.

        Amounts are summed exactly and rounded half-up to the cent once.
        """
        with self._lock:
            records = self._store.load()
        summary = summarize_records(records, self._leave_day_rate)
        if summary.skipped_amounts:
            logger.warning(
                "roster_summary_skipped_amounts",
                extra={"skipped_amounts": summary.skipped_amounts},
            )
        logger.info(
            "roster_summarized",
            extra={
                "total_employees": summary.total_employees,
                "total_net_pay": summary.total_net_pay,
                "active_employees": summary.active_employees,
            },
        )
        return summary

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def create_employee(self, fields: Mapping[str, Any]) -> EmployeeRecord:
        """
        Create a record from caller fields.

        Raises:
            RecordValidationError: The new record fails ``strict``.  The
                store is not touched.
        """
        with self._lock, LogContext.bind(operation="create_employee"):
            self._log_ignored_fields(fields)
            records = self._store.load()
            employee_id = self._allocator.allocate({r.id for r in records})
            record = EmployeeRecord.from_fields(employee_id, fields, self._leave_day_rate)

            violations = validate(record, STRICT, self._leave_day_rate)
            if violations:
                logger.info(
                    "employee_create_rejected",
                    extra={"violations": [v.code for v in violations]},
                )
                raise RecordValidationError(violations, profile=STRICT.name)

            records.append(record)
            self._store.save(records)
            logger.info(
                "employee_created",
                extra={
                    "employee_id": record.id,
                    "status": record.status,
                    "net_pay": record.net_pay,
                },
            )
            return record

    def edit_employee(
        self, employee_id: str, changes: Mapping[str, Any]
    ) -> EmployeeRecord:
        """
        Merge ``changes`` over an existing record and replace it in place.

        Raises:
            EmployeeNotFoundError: ``employee_id`` is not in the roster.
            RecordValidationError: The merged record fails ``strict``.
        """
        with self._lock, LogContext.bind(
            operation="edit_employee", employee_id=employee_id
        ):
            self._log_ignored_fields(changes)
            records = self._store.load()
            index = self._index_of(records, employee_id)
            updated = records[index].merged_with(changes, self._leave_day_rate)

            violations = validate(updated, STRICT, self._leave_day_rate)
            if violations:
                logger.info(
                    "employee_edit_rejected",
                    extra={"violations": [v.code for v in violations]},
                )
                raise RecordValidationError(
                    violations, employee_id=employee_id, profile=STRICT.name
                )

            records[index] = updated
            self._store.save(records)
            logger.info(
                "employee_updated",
                extra={"status": updated.status, "net_pay": updated.net_pay},
            )
            return updated

    def delete_employee(self, employee_id: str) -> EmployeeRecord:
        """
        Remove one record.

        Raises:
            EmployeeNotFoundError: ``employee_id`` is not in the roster.
        """
        with self._lock, LogContext.bind(
            operation="delete_employee", employee_id=employee_id
        ):
            records = self._store.load()
            removed = records.pop(self._index_of(records, employee_id))
            self._store.save(records)
            logger.info("employee_deleted")
            return removed

    def purge_invalid(self) -> int:
        """
        Drop every record failing the purge profile.

        Idempotent: a second run removes nothing and does not rewrite the
        store.

        Returns:
            Number of records removed.
        """
        with self._lock, LogContext.bind(operation="purge_invalid"):
            records = self._store.load()
            kept = [
                r for r in records
                if not validate(r, self._purge_profile, self._leave_day_rate)
            ]
            removed = len(records) - len(kept)
            if removed:
                self._store.save(kept)
            logger.info(
                "roster_purged",
                extra={
                    "profile": self._purge_profile.name,
                    "before": len(records),
                    "after": len(kept),
                    "removed": removed,
                },
            )
            return removed

    # ------------------------------------------------------------------
    # Approval gate
    # ------------------------------------------------------------------

    def approve_payroll(self) -> ApprovalDecision:
        """
        Approve payroll if every record passes the approval profile.

        Raises:
            ApprovalDeniedError: At least one record is invalid.  Carries
                the exact invalid count and the offending ids.
        """
        with self._lock, LogContext.bind(operation="approve_payroll"):
            records = self._store.load()
            invalid_ids = [
                r.id for r in records
                if validate(r, self._approval_profile, self._leave_day_rate)
            ]
            if invalid_ids:
                logger.warning(
                    "payroll_approval_denied",
                    extra={
                        "profile": self._approval_profile.name,
                        "invalid_count": len(invalid_ids),
                        "checked_count": len(records),
                    },
                )
                raise ApprovalDeniedError(
                    len(invalid_ids), invalid_ids, self._approval_profile.name
                )

            decision = ApprovalDecision(
                approved=True,
                checked_count=len(records),
                profile=self._approval_profile.name,
                decided_at=self._clock.now(),
            )
            logger.info(
                "payroll_approved",
                extra={
                    "profile": decision.profile,
                    "checked_count": decision.checked_count,
                },
            )
            if self._on_approved is not None:
                self._on_approved(decision)
            return decision

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _index_of(records: list[EmployeeRecord], employee_id: str) -> int:
        for index, record in enumerate(records):
            if record.id == employee_id:
                return index
        raise EmployeeNotFoundError(employee_id)

    @staticmethod
    def _log_ignored_fields(fields: Mapping[str, Any]) -> None:
        ignored = unknown_fields(fields)
        if ignored:
            logger.debug("unknown_fields_ignored", extra={"fields": ignored})
