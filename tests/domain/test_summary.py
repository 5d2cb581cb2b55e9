"""Tests for the roster summary fold and approval decision."""

from datetime import datetime, timezone
from decimal import Decimal

from payroll_kernel.domain.summary import ApprovalDecision, summarize_records


class TestSummarizeRecords:
    """Totals over the whole roster, no validity filtering."""

    def test_empty_roster(self):
        summary = summarize_records([])
        assert summary.total_employees == 0
        assert summary.total_net_pay == Decimal("0")
        assert summary.average_net_pay == Decimal("0")
        assert summary.to_wire(extended=False) == {"totalEmployees": 0, "totalNetPay": "0"}

    def test_single_record(self, make_record):
        summary = summarize_records([make_record()])
        assert summary.total_employees == 1
        assert summary.total_net_pay == Decimal("800")
        assert summary.active_employees == 1
        assert summary.total_deductions == Decimal("200")

    def test_invalid_records_still_counted(self, make_record):
        records = [
            make_record(employee_id="1"),
            make_record(employee_id="2", bank_account="123", status="Terminated"),
            make_record(employee_id="3", net_pay="100"),
        ]
        summary = summarize_records(records)
        assert summary.total_employees == 3
        assert summary.active_employees == 2
        # Stored netPay is summed, even when stale
        assert summary.total_net_pay == Decimal("1700")

    def test_exact_sum_rounded_once(self, make_record):
        # Three thirds-of-a-cent: rounding each first would give 0.00
        records = [
            make_record(employee_id=str(i), gross_pay="0.004", unpaid_leave_days="0")
            for i in range(3)
        ]
        summary = summarize_records(records)
        assert summary.total_net_pay == Decimal("0.01")
        assert str(summary.total_net_pay) == "0.01"

    def test_average_from_unrounded_total(self, make_record):
        records = [
            make_record(employee_id="1", gross_pay="100", unpaid_leave_days="0"),
            make_record(employee_id="2", gross_pay="100.01", unpaid_leave_days="0"),
        ]
        summary = summarize_records(records)
        assert summary.average_net_pay == Decimal("100.01")  # 100.005 half-up

    def test_non_finite_amounts_skipped(self, make_record):
        records = [
            make_record(employee_id="1"),
            make_record(employee_id="2", gross_pay="abc", unpaid_leave_days="x"),
        ]
        summary = summarize_records(records)
        assert summary.total_employees == 2
        assert summary.total_net_pay == Decimal("800")
        assert summary.skipped_amounts == 2

    def test_skipped_counts_amounts_not_records(self, make_record):
        records = [
            make_record(employee_id="1", net_pay="NaN"),
            make_record(employee_id="2", gross_pay="x", unpaid_leave_days="y"),
        ]
        summary = summarize_records(records)
        assert summary.total_employees == 2
        assert summary.skipped_amounts == 3
        assert summary.total_deductions == Decimal("200")

    def test_amounts_beyond_default_precision(self, make_record):
        records = [
            make_record(employee_id="1", gross_pay="1e30", unpaid_leave_days="0"),
            make_record(employee_id="2", gross_pay="0.01", unpaid_leave_days="0"),
        ]
        summary = summarize_records(records)
        assert summary.total_net_pay == Decimal("1" + "0" * 30 + ".01")
        assert summary.to_wire()["totalNetPay"] == "1" + "0" * 30 + ".01"
        assert summary.average_net_pay == Decimal("5" + "0" * 29 + ".01")

    def test_rate_affects_deductions_only(self, make_record):
        summary = summarize_records([make_record()], Decimal("50"))
        assert summary.total_deductions == Decimal("100")
        assert summary.total_net_pay == Decimal("800")

    def test_extended_wire(self, make_record):
        wire = summarize_records([make_record()]).to_wire()
        assert wire == {
            "totalEmployees": 1,
            "totalNetPay": "800",
            "activeEmployees": 1,
            "totalDeductions": "200",
            "averageNetPay": "800",
        }


class TestApprovalDecision:
    def test_to_wire(self):
        decided_at = datetime(2024, 1, 1, 12, tzinfo=timezone.utc)
        decision = ApprovalDecision(True, 3, "activeOnly", decided_at)
        assert decision.to_wire() == {
            "approved": True,
            "checkedCount": 3,
            "profile": "activeOnly",
            "decidedAt": "2024-01-01T12:00:00+00:00",
        }
