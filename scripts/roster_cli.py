#!/usr/bin/env python3
"""
Command-line access to the payroll roster.

Usage:
    python3 scripts/roster_cli.py [--config roster.yaml] list
    python3 scripts/roster_cli.py show 1704110400000
    python3 scripts/roster_cli.py create --name "A" --status Active \\
        --bank-account 1234567890 --gross-pay 1000 --unpaid-leave-days 2
    python3 scripts/roster_cli.py edit 1704110400000 --gross-pay 1200
    python3 scripts/roster_cli.py delete 1704110400000
    python3 scripts/roster_cli.py purge-invalid
    python3 scripts/roster_cli.py approve
    python3 scripts/roster_cli.py summary
    python3 scripts/roster_cli.py validate [--profile strict]

Every command prints the JSON response body on stdout.  The exit code is 0
for a successful operation, 1 for a rejected one (validation failure,
unknown id, approval denied) and 2 for bad arguments or configuration.
"""

import argparse
import json
import sys
from pathlib import Path

# Add project root to path
ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

from payroll_config import get_active_config
from payroll_config.bridges import build_roster_service
from payroll_kernel.exceptions import ConfigurationError
from payroll_kernel.logging_config import configure_logging
from payroll_services import RosterOperationSurface

# CLI option dest -> wire field
_FIELD_OPTIONS = {
    "name": "name",
    "status": "status",
    "bank_account": "bankAccount",
    "gross_pay": "grossPay",
    "unpaid_leave_days": "unpaidLeaveDays",
}


def _add_field_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--name")
    parser.add_argument("--status", help="Active, Terminated or OnBoarding")
    parser.add_argument("--bank-account", help="10-12 digits")
    parser.add_argument("--gross-pay", help="Decimal amount, e.g. 1000 or 1000.50")
    parser.add_argument("--unpaid-leave-days", help="Decimal number of days")


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Manage the payroll employee roster.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="YAML settings file (default: packaged defaults)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("list", help="List every employee record")

    show = sub.add_parser("show", help="Show one employee record")
    show.add_argument("employee_id")

    create = sub.add_parser("create", help="Add an employee")
    _add_field_options(create)

    edit = sub.add_parser("edit", help="Change fields of an employee")
    edit.add_argument("employee_id")
    _add_field_options(edit)

    delete = sub.add_parser("delete", help="Remove an employee")
    delete.add_argument("employee_id")

    sub.add_parser("purge-invalid", help="Remove every invalid record")
    sub.add_parser("approve", help="Approve payroll if the roster is sound")

    summary = sub.add_parser("summary", help="Roster totals")
    summary.add_argument(
        "--basic",
        action="store_true",
        help="Only totalEmployees and totalNetPay",
    )

    validate = sub.add_parser("validate", help="Per-record validation report")
    validate.add_argument("--profile", default="activeOnly")

    return parser.parse_args(argv)


def _fields(args: argparse.Namespace) -> dict[str, str]:
    return {
        wire: getattr(args, dest)
        for dest, wire in _FIELD_OPTIONS.items()
        if getattr(args, dest) is not None
    }


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)

    try:
        config = get_active_config(args.config)
    except (FileNotFoundError, ConfigurationError) as exc:
        print(f"  ERROR: {exc}", file=sys.stderr)
        return 2

    configure_logging(level=config.log_level)
    surface = RosterOperationSurface(build_roster_service(config))

    command = args.command
    if command == "list":
        response = surface.list()
    elif command == "show":
        response = surface.get(args.employee_id)
    elif command == "create":
        response = surface.create(_fields(args))
    elif command == "edit":
        response = surface.edit(args.employee_id, _fields(args))
    elif command == "delete":
        response = surface.delete(args.employee_id)
    elif command == "purge-invalid":
        response = surface.purge_invalid()
    elif command == "approve":
        response = surface.approve()
    elif command == "summary":
        response = surface.summary(extended=not args.basic)
    else:
        response = surface.validate(args.profile)

    print(json.dumps(response.body, indent=2))
    return 0 if response.ok else 1


if __name__ == "__main__":
    sys.exit(main())
