"""
Pytest fixtures for the payroll roster test suite.

Provides:
- Structured logging configuration and log capture
- Deterministic clock, in-memory and JSON-file roster stores
- A ``make_record`` factory for stored records (netPay derived unless given)
"""

import json
import logging
from decimal import Decimal
from io import StringIO

import pytest

from payroll_kernel.domain.clock import DeterministicClock
from payroll_kernel.domain.employee import EmployeeRecord, derive_net_pay
from payroll_kernel.domain.money import coerce_amount
from payroll_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)
from payroll_kernel.services.roster_service import RosterService
from payroll_kernel.services.roster_store import InMemoryRosterStore, JsonFileRosterStore


# =============================================================================
# Logging fixtures
# =============================================================================


@pytest.fixture(autouse=True, scope="session")
def _configure_test_logging():
    """Configure structured logging for the test suite."""
    reset_logging()
    configure_logging(level=logging.DEBUG)
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Clear LogContext between tests to prevent cross-test contamination."""
    LogContext.clear()
    yield
    LogContext.clear()


@pytest.fixture
def captured_logs():
    """
    Capture payroll_kernel logs as parsed JSON dicts.

    Usage::

        def test_something(captured_logs, service):
            service.purge_invalid()
            logs = captured_logs()
            assert any(r["message"] == "roster_purged" for r in logs)
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger("payroll_kernel")
    previous_level = root.level
    root.setLevel(logging.DEBUG)
    root.addHandler(handler)

    def _get_records() -> list[dict]:
        lines = stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    yield _get_records

    root.removeHandler(handler)
    root.setLevel(previous_level)


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "concurrency: thread-safety tests for the roster service lock"
    )
    config.addinivalue_line(
        "markers", "sql: tests that run against the SQLAlchemy store"
    )


# =============================================================================
# Roster fixtures
# =============================================================================


VALID_FIELDS = {
    "name": "A",
    "status": "Active",
    "bankAccount": "1234567890",
    "grossPay": "1000",
    "unpaidLeaveDays": "2",
}


@pytest.fixture
def valid_fields() -> dict:
    """Create-payload for a record that passes every profile."""
    return dict(VALID_FIELDS)


@pytest.fixture
def deterministic_clock():
    return DeterministicClock()


@pytest.fixture
def make_record():
    """
    Build a stored ``EmployeeRecord``.

    ``net_pay`` is derived from gross pay and leave days unless given, so
    a stale value can be injected deliberately.
    """

    def _make(
        employee_id: str = "1",
        name: str = "A",
        status: str = "Active",
        bank_account: str = "1234567890",
        gross_pay="1000",
        unpaid_leave_days="2",
        net_pay=None,
    ) -> EmployeeRecord:
        gross = coerce_amount(gross_pay)
        leave = coerce_amount(unpaid_leave_days)
        return EmployeeRecord(
            id=employee_id,
            name=name,
            status=status,
            bank_account=bank_account,
            gross_pay=gross,
            unpaid_leave_days=leave,
            net_pay=(
                derive_net_pay(gross, leave, Decimal("100"))
                if net_pay is None
                else coerce_amount(net_pay)
            ),
        )

    return _make


@pytest.fixture
def memory_store() -> InMemoryRosterStore:
    return InMemoryRosterStore()


@pytest.fixture
def json_store(tmp_path) -> JsonFileRosterStore:
    return JsonFileRosterStore(tmp_path / "employees.json")


@pytest.fixture
def service(memory_store, deterministic_clock) -> RosterService:
    """Roster service over an empty in-memory store with a fixed clock."""
    return RosterService(memory_store, clock=deterministic_clock)
