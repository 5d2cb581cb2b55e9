"""
Caller-facing operation surface for the roster engine.

Maps each ``RosterService`` operation to a status-coded response so that a
transport layer (HTTP handler, CLI, message consumer) can relay it without
knowing the exception hierarchy:

    validation failure  -> 400 {"errors": [...], "violations": [...]}
    not found           -> 404 {"message": ..., "id": ...}
    approval denied     -> 400 {"message": ..., "invalidCount": n, "invalidIds": [...]}
    unknown profile     -> 400 {"message": ...}
    success             -> 200/201 with the record, collection or summary
    anything else       -> 500 {"message": ...}; no partial state is exposed

Usage::

    surface = RosterOperationSurface(service)
    response = surface.create({"name": "A", ...})
    send(response.status_code, response.body)
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from payroll_kernel.exceptions import (
    ApprovalDeniedError,
    EmployeeNotFoundError,
    RecordValidationError,
    UnknownProfileError,
)
from payroll_kernel.logging_config import LogContext, get_logger
from payroll_kernel.services.roster_service import RosterService

logger = get_logger("services.operation_surface")


@dataclass(frozen=True)
class OperationResponse:
    """A transport-neutral response."""

    status_code: int
    body: Any

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class RosterOperationSurface:
    """Status-coded wrappers around every roster operation."""

    def __init__(self, service: RosterService):
        self._service = service

    def list(self) -> OperationResponse:
        return self._run(
            "list_employees",
            "Error fetching employees",
            lambda: OperationResponse(
                200, [r.to_wire() for r in self._service.list_employees()]
            ),
        )

    def get(self, employee_id: str) -> OperationResponse:
        return self._run(
            "get_employee",
            "Error fetching employee",
            lambda: OperationResponse(
                200, self._service.get_employee(employee_id).to_wire()
            ),
        )

    def create(self, fields: Mapping[str, Any]) -> OperationResponse:
        return self._run(
            "create_employee",
            "Error adding employee",
            lambda: OperationResponse(
                201, self._service.create_employee(fields).to_wire()
            ),
        )

    def edit(self, employee_id: str, changes: Mapping[str, Any]) -> OperationResponse:
        return self._run(
            "edit_employee",
            "Error updating employee",
            lambda: OperationResponse(
                200, self._service.edit_employee(employee_id, changes).to_wire()
            ),
        )

    def delete(self, employee_id: str) -> OperationResponse:
        def _delete() -> OperationResponse:
            self._service.delete_employee(employee_id)
            return OperationResponse(
                200, {"message": "Employee deleted successfully", "id": employee_id}
            )

        return self._run("delete_employee", "Error deleting employee", _delete)

    def purge_invalid(self) -> OperationResponse:
        def _purge() -> OperationResponse:
            removed = self._service.purge_invalid()
            return OperationResponse(
                200,
                {
                    "message": "Invalid employees deleted successfully",
                    "deletedCount": removed,
                },
            )

        return self._run("purge_invalid", "Error deleting invalid employees", _purge)

    def approve(self) -> OperationResponse:
        def _approve() -> OperationResponse:
            decision = self._service.approve_payroll()
            body = {"message": "Payroll approved successfully"}
            body.update(decision.to_wire())
            return OperationResponse(200, body)

        return self._run("approve_payroll", "Error approving payroll", _approve)

    def summary(self, extended: bool = True) -> OperationResponse:
        return self._run(
            "summarize",
            "Error getting payroll summary",
            lambda: OperationResponse(
                200, self._service.summarize().to_wire(extended=extended)
            ),
        )

    def validate(self, profile: str = "activeOnly") -> OperationResponse:
        def _validate() -> OperationResponse:
            report = self._service.validate_roster(profile)
            return OperationResponse(
                200,
                [
                    {
                        "id": record.id,
                        "valid": not violations,
                        "violations": [v.to_dict() for v in violations],
                    }
                    for record, violations in report
                ],
            )

        return self._run("validate_roster", "Error validating employees", _validate)

    # ------------------------------------------------------------------

    def _run(
        self,
        operation: str,
        failure_message: str,
        call: Callable[[], OperationResponse],
    ) -> OperationResponse:
        with LogContext.bind(operation=operation):
            try:
                return call()
            except RecordValidationError as exc:
                return OperationResponse(
                    400,
                    {
                        "errors": exc.reasons,
                        "violations": [v.to_dict() for v in exc.violations],
                    },
                )
            except EmployeeNotFoundError as exc:
                return OperationResponse(
                    404, {"message": "Employee not found", "id": exc.employee_id}
                )
            except ApprovalDeniedError as exc:
                return OperationResponse(
                    400,
                    {
                        "message": "Cannot approve payroll with invalid employees",
                        "invalidCount": exc.invalid_count,
                        "invalidIds": list(exc.invalid_ids),
                    },
                )
            except UnknownProfileError as exc:
                return OperationResponse(400, {"message": str(exc)})
            except Exception:
                logger.exception("operation_failed")
                return OperationResponse(500, {"message": failure_message})
