"""
Configuration Loader (``payroll_config.loader``).

Responsibility
--------------
Loads a YAML settings file and parses it into a typed ``RosterConfig``.
Callers go through ``payroll_config.get_active_config()``; this module is
its implementation.

Architecture position
---------------------
**Config layer** -- infrastructure tooling.  No dependency on kernel
services or stores; only on kernel exceptions and profile names.

Invariants enforced
-------------------
* Every parse error raises ``InvalidConfigError`` naming the dotted key.
* Unknown backends, allocators, profiles and log levels are rejected at
  load time, not at first use.
* Relative store paths resolve against ``base_dir``.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

import yaml

from payroll_config.schema import (
    VALID_ALLOCATORS,
    VALID_BACKENDS,
    VALID_LOG_LEVELS,
    PayrollRules,
    RosterConfig,
    StoreConfig,
)
from payroll_kernel.domain.validation import get_profile
from payroll_kernel.exceptions import InvalidConfigError, UnknownProfileError


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Postconditions:
        - Returns a ``dict`` (empty if the YAML is empty).
    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
        InvalidConfigError: if the top level is not a mapping.
    """
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidConfigError("<root>", type(data).__name__, "expected a mapping")
    return data


def _section(data: dict[str, Any], key: str) -> dict[str, Any]:
    value = data.get(key) or {}
    if not isinstance(value, dict):
        raise InvalidConfigError(key, value, "expected a mapping")
    return value


def _choice(section: dict[str, Any], key: str, default: str, allowed: frozenset[str], dotted: str) -> str:
    value = section.get(key, default)
    if not isinstance(value, str) or value not in allowed:
        raise InvalidConfigError(dotted, value, f"expected one of {sorted(allowed)}")
    return value


def _profile_name(section: dict[str, Any], key: str, default: str) -> str:
    value = section.get(key, default)
    try:
        return get_profile(str(value)).name
    except UnknownProfileError as exc:
        raise InvalidConfigError(f"payroll.{key}", value, str(exc)) from exc


def parse_store(data: dict[str, Any], base_dir: Path) -> StoreConfig:
    """Parse the ``store`` section."""
    defaults = StoreConfig()
    backend = _choice(data, "backend", defaults.backend, VALID_BACKENDS, "store.backend")

    raw_path = data.get("path", str(defaults.path))
    if not isinstance(raw_path, str) or not raw_path.strip():
        raise InvalidConfigError("store.path", raw_path, "expected a non-empty path")
    path = Path(raw_path).expanduser()
    if not path.is_absolute():
        path = base_dir / path

    database_url = data.get("database_url", defaults.database_url)
    if not isinstance(database_url, str) or not database_url:
        raise InvalidConfigError("store.database_url", database_url, "expected a URL")

    return StoreConfig(backend=backend, path=path, database_url=database_url)


def parse_payroll(data: dict[str, Any]) -> PayrollRules:
    """Parse the ``payroll`` section."""
    defaults = PayrollRules()
    raw_rate = data.get("leave_day_rate", defaults.leave_day_rate)
    if isinstance(raw_rate, (bool, float)):
        # YAML floats would lose exactness; require text or an integer
        raise InvalidConfigError(
            "payroll.leave_day_rate", raw_rate, "expected an integer or a quoted decimal"
        )
    try:
        rate = Decimal(str(raw_rate))
    except InvalidOperation:
        raise InvalidConfigError(
            "payroll.leave_day_rate", raw_rate, "not a number"
        ) from None
    if not rate.is_finite() or rate < 0:
        raise InvalidConfigError(
            "payroll.leave_day_rate", raw_rate, "must be a non-negative number"
        )

    return PayrollRules(
        leave_day_rate=rate,
        approval_profile=_profile_name(data, "approval_profile", defaults.approval_profile),
        purge_profile=_profile_name(data, "purge_profile", defaults.purge_profile),
    )


def parse_config(
    data: dict[str, Any],
    base_dir: Path,
    source: Path | None = None,
) -> RosterConfig:
    """
    Parse a full settings mapping.

    Preconditions:
        - ``data`` is the mapping produced by ``load_yaml_file``.
    Postconditions:
        - Returns a frozen ``RosterConfig`` with every value validated.
    """
    identity = _section(data, "identity")
    logging_section = _section(data, "logging")

    level = str(logging_section.get("level", "INFO")).upper()
    if level not in VALID_LOG_LEVELS:
        raise InvalidConfigError("logging.level", level, f"expected one of {sorted(VALID_LOG_LEVELS)}")

    return RosterConfig(
        store=parse_store(_section(data, "store"), base_dir),
        payroll=parse_payroll(_section(data, "payroll")),
        allocator=_choice(identity, "allocator", "time", VALID_ALLOCATORS, "identity.allocator"),
        log_level=level,
        source=source,
    )
