"""
payroll_config -- single public entrypoint for roster engine settings.

Responsibility:
    Provides the ONLY way to obtain configuration at runtime through
    ``get_active_config()``.  Returns a frozen ``RosterConfig``.  YAML
    loading is internal to this package.

Architecture position:
    Configuration -- sits above ``payroll_kernel``.  The kernel MUST NEVER
    import from ``payroll_config``; ``bridges`` translates a config into
    kernel objects (store, allocator, service).

Failure modes:
    - ``FileNotFoundError`` -- an explicit config path does not exist.
    - ``yaml.YAMLError`` -- malformed YAML.
    - ``InvalidConfigError`` -- a value fails validation.

Audit relevance:
    Every successful ``get_active_config()`` call emits a
    ``ROSTER_CONFIG_TRACE`` log entry with the source file, backend and
    profile names.
"""

from __future__ import annotations

from pathlib import Path

from payroll_config.loader import load_yaml_file, parse_config
from payroll_config.schema import PayrollRules, RosterConfig, StoreConfig
from payroll_kernel.logging_config import get_logger

_logger = get_logger("config")

DEFAULT_CONFIG_PATH = Path(__file__).parent / "defaults" / "roster.yaml"


def get_active_config(config_path: str | Path | None = None) -> RosterConfig:
    """The ONLY public configuration entrypoint.

    Args:
        config_path: YAML settings file.  Relative store paths in it resolve
            against the file's directory.  When omitted, the packaged
            defaults are used and relative paths resolve against the
            current working directory.

    Returns:
        RosterConfig -- frozen, fully validated settings.

    Raises:
        FileNotFoundError: If ``config_path`` does not exist.
        InvalidConfigError: If any value fails validation.
    """
    if config_path is None:
        source = DEFAULT_CONFIG_PATH
        base_dir = Path.cwd()
    else:
        source = Path(config_path)
        base_dir = source.resolve().parent

    config = parse_config(load_yaml_file(source), base_dir=base_dir, source=source)

    _logger.info(
        "ROSTER_CONFIG_TRACE",
        extra={
            "trace_type": "ROSTER_CONFIG_TRACE",
            "source": str(source),
            "backend": config.store.backend,
            "approval_profile": config.payroll.approval_profile,
            "purge_profile": config.payroll.purge_profile,
            "leave_day_rate": config.payroll.leave_day_rate,
        },
    )
    return config


__all__ = [
    "DEFAULT_CONFIG_PATH",
    "PayrollRules",
    "RosterConfig",
    "StoreConfig",
    "get_active_config",
]
