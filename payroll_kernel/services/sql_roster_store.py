"""
SQL-backed roster store (``payroll_kernel.services.sql_roster_store``).

Responsibility:
    Persists the roster in the ``payroll_employees`` table through a
    SQLAlchemy session factory.

Architecture position:
    Kernel > Services.  Uses ``db.engine.session_scope`` for the transaction
    boundary; the roster service never sees a session.

Invariants enforced:
    - ``save`` deletes and re-inserts the whole roster inside ONE
      transaction: it either fully succeeds or the prior rows remain.
    - Row order is the ``position`` column, so insertion order survives.

Failure modes:
    - Any ``SQLAlchemyError`` is wrapped in ``PersistenceError``.
"""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from payroll_kernel.db.engine import get_session_factory, session_scope
from payroll_kernel.db.orm import EmployeeRecordModel
from payroll_kernel.domain.employee import EmployeeRecord
from payroll_kernel.exceptions import PersistenceError
from payroll_kernel.logging_config import get_logger

logger = get_logger("services.sql_roster_store")


class SqlRosterStore:
    """
    Roster store over a SQLAlchemy session factory.

    Args:
        session_factory: Factory for sessions.  Defaults to the factory of
            the engine set up by ``init_engine_from_url``.
        location: Label used in errors and logs (e.g. the database URL
            without credentials).
    """

    def __init__(
        self,
        session_factory: sessionmaker[Session] | None = None,
        location: str = "payroll_employees",
    ):
        self._session_factory = session_factory or get_session_factory()
        self.location = location

    def load(self) -> list[EmployeeRecord]:
        try:
            with session_scope(self._session_factory) as session:
                rows = session.scalars(
                    select(EmployeeRecordModel).order_by(EmployeeRecordModel.position)
                ).all()
                records = [EmployeeRecord.from_wire(row.to_wire()) for row in rows]
        except SQLAlchemyError as exc:
            raise PersistenceError("load", self.location, str(exc)) from exc
        return records

    def save(self, records: Sequence[EmployeeRecord]) -> None:
        try:
            with session_scope(self._session_factory) as session:
                session.execute(delete(EmployeeRecordModel))
                session.add_all(
                    EmployeeRecordModel(
                        id=record.id,
                        position=position,
                        name=record.name,
                        status=record.status,
                        bank_account=record.bank_account,
                        gross_pay=record.gross_pay,
                        unpaid_leave_days=record.unpaid_leave_days,
                        net_pay=record.net_pay,
                    )
                    for position, record in enumerate(records)
                )
        except SQLAlchemyError as exc:
            raise PersistenceError("save", self.location, str(exc)) from exc

        logger.debug(
            "roster_saved",
            extra={"location": self.location, "record_count": len(records)},
        )
