"""
Tests for RosterService: the roster aggregator.

Covers create/edit/delete, purge-invalid, the approval gate and summaries
over an in-memory store with a deterministic clock.
"""

from decimal import Decimal

import pytest

from payroll_kernel.domain.validation import STRICT
from payroll_kernel.exceptions import (
    ApprovalDeniedError,
    EmployeeNotFoundError,
    PersistenceError,
    RecordValidationError,
    UnknownProfileError,
)
from payroll_kernel.services.roster_service import RosterService
from payroll_kernel.services.roster_store import InMemoryRosterStore


class _FailingSaveStore(InMemoryRosterStore):
    def save(self, records):
        raise PersistenceError("save", "memory", "disk full")


class TestCreate:
    """create_employee."""

    def test_creates_with_derived_net_pay(self, service, valid_fields):
        record = service.create_employee(dict(valid_fields, netPay="5"))
        assert record.id == "1704110400000"
        assert record.net_pay == Decimal("800")
        assert service.list_employees() == [record]

    def test_ids_unique_at_same_instant(self, service, valid_fields):
        first = service.create_employee(valid_fields)
        second = service.create_employee(valid_fields)
        assert first.id != second.id

    def test_insertion_order_preserved(self, service, valid_fields, deterministic_clock):
        names = ["C", "A", "B"]
        for name in names:
            service.create_employee(dict(valid_fields, name=name))
            deterministic_clock.tick()
        assert [r.name for r in service.list_employees()] == names

    def test_invalid_payload_rejected_without_mutation(self, service, memory_store, valid_fields):
        payload = dict(valid_fields, bankAccount="123", status="Inactive")
        for _ in range(2):
            with pytest.raises(RecordValidationError) as exc_info:
                service.create_employee(payload)
            assert exc_info.value.reasons == [
                "Status must be Active, Terminated, or OnBoarding",
                "Bank account must be 10-12 digits",
            ]
            assert exc_info.value.fields == ["status", "bankAccount"]
        assert service.list_employees() == []
        assert memory_store.save_count == 0

    def test_strict_numeric_rules(self, service, valid_fields):
        with pytest.raises(RecordValidationError) as exc_info:
            service.create_employee(dict(valid_fields, grossPay="-1", unpaidLeaveDays="0"))
        assert [v.code for v in exc_info.value.violations] == ["GROSS_PAY_NOT_POSITIVE"]

    def test_non_active_status_allowed_on_create(self, service, valid_fields):
        record = service.create_employee(dict(valid_fields, status="OnBoarding"))
        assert record.status == "OnBoarding"

    def test_unknown_fields_ignored(self, service, valid_fields, captured_logs):
        record = service.create_employee(dict(valid_fields, salary="9999"))
        assert "salary" not in record.to_wire()
        ignored = [r for r in captured_logs() if r["message"] == "unknown_fields_ignored"]
        assert ignored and ignored[0]["fields"] == ["salary"]

    def test_persistence_failure_propagates(self, valid_fields):
        service = RosterService(_FailingSaveStore())
        with pytest.raises(PersistenceError):
            service.create_employee(valid_fields)
        assert service.list_employees() == []


class TestEdit:
    """edit_employee."""

    def test_recomputes_net_pay(self, service, valid_fields):
        created = service.create_employee(valid_fields)
        updated = service.edit_employee(created.id, {"grossPay": 500, "unpaidLeaveDays": 1})
        assert updated.net_pay == Decimal("400")
        assert service.get_employee(created.id).net_pay == Decimal("400")

    def test_keeps_position_and_id(self, service, valid_fields, deterministic_clock):
        ids = []
        for name in ("A", "B", "C"):
            ids.append(service.create_employee(dict(valid_fields, name=name)).id)
            deterministic_clock.tick()
        service.edit_employee(ids[1], {"name": "B2", "id": "other"})
        roster = service.list_employees()
        assert [r.id for r in roster] == ids
        assert [r.name for r in roster] == ["A", "B2", "C"]

    def test_unknown_id(self, service):
        with pytest.raises(EmployeeNotFoundError) as exc_info:
            service.edit_employee("missing", {"name": "X"})
        assert exc_info.value.employee_id == "missing"

    def test_invalid_edit_leaves_record(self, service, valid_fields):
        created = service.create_employee(valid_fields)
        with pytest.raises(RecordValidationError) as exc_info:
            service.edit_employee(created.id, {"bankAccount": "12"})
        assert exc_info.value.employee_id == created.id
        assert service.get_employee(created.id).bank_account == "1234567890"

    def test_edit_repairs_stale_record(self, make_record):
        store = InMemoryRosterStore([make_record(employee_id="7", net_pay="1")])
        service = RosterService(store)
        repaired = service.edit_employee("7", {})
        assert repaired.net_pay == Decimal("800")


class TestDelete:
    """delete_employee."""

    def test_delete(self, service, valid_fields):
        created = service.create_employee(valid_fields)
        removed = service.delete_employee(created.id)
        assert removed.id == created.id
        assert service.list_employees() == []

    def test_delete_unknown(self, service, memory_store):
        with pytest.raises(EmployeeNotFoundError):
            service.delete_employee("nope")
        assert memory_store.save_count == 0

    def test_get_unknown(self, service):
        with pytest.raises(EmployeeNotFoundError):
            service.get_employee("nope")


class TestPurgeInvalid:
    """purge_invalid."""

    def test_removes_only_invalid(self, make_record):
        store = InMemoryRosterStore(
            [
                make_record(employee_id="1"),
                make_record(employee_id="2", bank_account="123"),
                make_record(employee_id="3", status="Terminated"),
                make_record(employee_id="4", net_pay="0"),
            ]
        )
        service = RosterService(store)
        assert service.purge_invalid() == 2
        # strict keeps non-Active known statuses
        assert [r.id for r in service.list_employees()] == ["1", "3"]

    def test_idempotent(self, make_record):
        store = InMemoryRosterStore(
            [make_record(employee_id="1"), make_record(employee_id="2", status="Inactive")]
        )
        service = RosterService(store)
        assert service.purge_invalid() == 1
        saves = store.save_count
        assert service.purge_invalid() == 0
        assert store.save_count == saves

    def test_summary_after_purging_all_invalid(self, make_record):
        store = InMemoryRosterStore(
            [
                make_record(employee_id="1", bank_account="1"),
                make_record(employee_id="2", gross_pay="abc"),
            ]
        )
        service = RosterService(store)
        assert service.purge_invalid() == 2
        summary = service.summarize()
        assert summary.total_employees == 0
        assert summary.total_net_pay == Decimal("0")

    def test_purge_profile_configurable(self, make_record):
        store = InMemoryRosterStore(
            [make_record(employee_id="1"), make_record(employee_id="2", status="Terminated")]
        )
        service = RosterService(store, purge_profile="activeOnly")
        assert service.purge_invalid() == 1
        assert [r.id for r in service.list_employees()] == ["1"]

    def test_logs_counts(self, make_record, captured_logs):
        service = RosterService(InMemoryRosterStore([make_record(bank_account="1")]))
        service.purge_invalid()
        purged = [r for r in captured_logs() if r["message"] == "roster_purged"]
        assert purged[0]["removed"] == 1
        assert purged[0]["operation"] == "purge_invalid"


class TestApprovePayroll:
    """The approval gate."""

    def test_approves_clean_roster(self, service, valid_fields):
        service.create_employee(valid_fields)
        decision = service.approve_payroll()
        assert decision.approved
        assert decision.checked_count == 1
        assert decision.profile == "activeOnly"

    def test_empty_roster_approves(self, service):
        assert service.approve_payroll().checked_count == 0

    def test_denied_with_exact_count(self, make_record):
        store = InMemoryRosterStore(
            [
                make_record(employee_id="1"),
                make_record(employee_id="2", bank_account="123"),
                make_record(employee_id="3", status="Terminated"),
            ]
        )
        service = RosterService(store)
        with pytest.raises(ApprovalDeniedError) as exc_info:
            service.approve_payroll()
        assert exc_info.value.invalid_count == 2
        assert exc_info.value.invalid_ids == ("2", "3")
        assert store.save_count == 0

    def test_single_bad_bank_account(self, make_record):
        service = RosterService(InMemoryRosterStore([make_record(bank_account="123")]))
        with pytest.raises(ApprovalDeniedError) as exc_info:
            service.approve_payroll()
        assert exc_info.value.invalid_count == 1

    def test_strict_approval_profile(self, make_record):
        store = InMemoryRosterStore([make_record(status="Terminated")])
        assert RosterService(store, approval_profile=STRICT).approve_payroll().approved

    def test_on_approved_hook(self, make_record):
        seen = []
        hooked = RosterService(InMemoryRosterStore([make_record()]), on_approved=seen.append)
        decision = hooked.approve_payroll()
        assert seen == [decision]

    def test_unknown_profile_rejected_at_construction(self, memory_store):
        with pytest.raises(UnknownProfileError):
            RosterService(memory_store, approval_profile="nope")


class TestSummarizeAndValidate:
    """Read-only operations."""

    def test_scenario_single_record(self, service, valid_fields):
        service.create_employee(valid_fields)
        summary = service.summarize()
        assert summary.total_employees == 1
        assert summary.total_net_pay == Decimal("800")
        assert summary.to_wire(extended=False) == {"totalEmployees": 1, "totalNetPay": "800"}

    def test_validate_roster_report(self, make_record):
        service = RosterService(
            InMemoryRosterStore([make_record(employee_id="1"), make_record(employee_id="2", bank_account="1")])
        )
        report = service.validate_roster()
        assert [(r.id, [v.code for v in vs]) for r, vs in report] == [
            ("1", []),
            ("2", ["BANK_ACCOUNT_INVALID"]),
        ]

    def test_validate_employee_strict_default(self, service, make_record):
        assert service.validate_employee(make_record(name="")) != []

    def test_skipped_amounts_warn(self, make_record, captured_logs):
        service = RosterService(InMemoryRosterStore([make_record(gross_pay="x", net_pay="x")]))
        service.summarize()
        warnings = [r for r in captured_logs() if r["message"] == "roster_summary_skipped_amounts"]
        assert warnings and warnings[0]["level"] == "WARNING"

    def test_huge_amount_summarizes(self, service, valid_fields):
        service.create_employee(dict(valid_fields, grossPay="1e27", unpaidLeaveDays="0"))
        service.create_employee(valid_fields)
        summary = service.summarize()
        assert summary.total_employees == 2
        assert summary.to_wire(extended=False)["totalNetPay"] == "1" + "0" * 24 + "800"

    def test_out_of_range_amount_rejected_on_create(self, service, valid_fields):
        with pytest.raises(RecordValidationError) as exc_info:
            service.create_employee(dict(valid_fields, grossPay="1e400"))
        assert "GROSS_PAY_NOT_POSITIVE" in [v.code for v in exc_info.value.violations]
        assert service.list_employees() == []

    def test_leave_day_rate_applies_to_derivation(self, memory_store, valid_fields):
        service = RosterService(memory_store, leave_day_rate=Decimal("150"))
        record = service.create_employee(valid_fields)
        assert record.net_pay == Decimal("700")
        assert service.approve_payroll().approved


class TestErrorTaxonomy:
    """HTTP-layer names resolve to the typed kernel exceptions."""

    def test_aliases(self):
        from payroll_kernel.exceptions import NotFoundError, ValidationError

        assert ValidationError is RecordValidationError
        assert NotFoundError is EmployeeNotFoundError

    def test_codes(self):
        assert RecordValidationError([]).code == "VALIDATION_FAILED"
        assert EmployeeNotFoundError("1").code == "EMPLOYEE_NOT_FOUND"
        assert ApprovalDeniedError(1).code == "APPROVAL_DENIED"
        assert PersistenceError("save", "x", "y").code == "PERSISTENCE_FAILED"
