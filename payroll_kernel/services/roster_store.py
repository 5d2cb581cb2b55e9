"""
Roster persistence collaborators (``payroll_kernel.services.roster_store``).

Responsibility
--------------
The ``RosterStore`` protocol the roster service reads from and writes
through, plus the file-backed and in-memory implementations.  The SQL
implementation lives in ``sql_roster_store``.

Architecture position
---------------------
**Kernel services layer** -- the imperative shell around the pure domain.
Stores know nothing about validation; they persist records verbatim.

Invariants enforced
-------------------
* Insertion order is preserved across ``save``/``load`` round-trips.
* ``save`` replaces the whole collection.  The JSON store writes a temp
  file beside the target and ``os.replace``s it, so a failed save leaves
  the previous contents readable.
* Every I/O or decode failure surfaces as ``PersistenceError``; nothing is
  retried here.
"""

from __future__ import annotations

import json
import os
import tempfile
from collections.abc import Sequence
from decimal import Decimal
from pathlib import Path
from typing import Protocol

from payroll_kernel.domain.employee import EmployeeRecord
from payroll_kernel.exceptions import PersistenceError
from payroll_kernel.logging_config import get_logger

logger = get_logger("services.roster_store")


class RosterStore(Protocol):
    """Ordered load/save of the full roster."""

    def load(self) -> list[EmployeeRecord]: ...

    def save(self, records: Sequence[EmployeeRecord]) -> None: ...


class InMemoryRosterStore:
    """
    List-backed store.

    Copies on both load and save so callers never share the backing list.
    """

    def __init__(self, records: Sequence[EmployeeRecord] = ()):
        self._records: list[EmployeeRecord] = list(records)
        self.save_count = 0

    def load(self) -> list[EmployeeRecord]:
        return list(self._records)

    def save(self, records: Sequence[EmployeeRecord]) -> None:
        self._records = list(records)
        self.save_count += 1


class JsonFileRosterStore:
    """
    Roster persisted as a JSON array of wire-format records.

    Contract:
        - A missing or blank file loads as an empty roster.
        - Amounts are written as decimal strings; numbers written by older
          tools are read back exactly (floats parse as ``Decimal``).
        - ``save`` is atomic with respect to readers of ``path``.
    """

    def __init__(self, path: str | os.PathLike[str]):
        self.path = Path(path)

    def load(self) -> list[EmployeeRecord]:
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.debug("roster_file_missing", extra={"path": str(self.path)})
            return []
        except OSError as exc:
            raise PersistenceError("load", str(self.path), str(exc)) from exc

        if not text.strip():
            return []

        try:
            data = json.loads(text, parse_float=Decimal)
        except ValueError as exc:
            raise PersistenceError("load", str(self.path), f"invalid JSON: {exc}") from exc

        if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
            raise PersistenceError(
                "load", str(self.path), "expected a JSON array of employee objects"
            )

        records = [EmployeeRecord.from_wire(item) for item in data]
        logger.debug(
            "roster_loaded",
            extra={"path": str(self.path), "record_count": len(records)},
        )
        return records

    def save(self, records: Sequence[EmployeeRecord]) -> None:
        payload = json.dumps([r.to_wire() for r in records], indent=2)
        tmp_name: str | None = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self.path.parent,
                prefix=f".{self.path.name}.",
                suffix=".tmp",
                delete=False,
            ) as tmp:
                tmp_name = tmp.name
                tmp.write(payload)
                tmp.write("\n")
                tmp.flush()
                os.fsync(tmp.fileno())
            os.replace(tmp_name, self.path)
            tmp_name = None
        except OSError as exc:
            raise PersistenceError("save", str(self.path), str(exc)) from exc
        finally:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)

        logger.debug(
            "roster_saved",
            extra={"path": str(self.path), "record_count": len(records)},
        )
