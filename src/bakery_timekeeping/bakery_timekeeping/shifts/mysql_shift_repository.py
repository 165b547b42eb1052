from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, Iterable, Optional, Sequence

import mysql.connector

from ..core.enums import ShiftStatus
from ..core.exceptions import FatalIOError, TransientIOError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause, read_instant, write_instant
from .model import LegacyShiftRow, NewShift, ShiftInterval
from .repository import ShiftRepository

logger = logging.getLogger(__name__)

_COLUMNS = "shift_id, employee_id, start_at, end_at, location, status, notes"


def _to_shift(r: Dict[str, Any]) -> ShiftInterval:
    return ShiftInterval(
        shift_id=int(r["shift_id"]),
        employee_id=int(r["employee_id"]),
        start_instant=read_instant(r["start_at"]),
        end_instant=read_instant(r["end_at"]),
        location=r["location"],
        status=ShiftStatus(r["status"]),
        notes=r.get("notes"),
    )


class MySQLShiftRepository(ShiftRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, shift: NewShift) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO shifts(employee_id, start_at, end_at, location, status, notes)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(shift.employee_id),
                    write_instant(shift.start_instant),
                    write_instant(shift.end_instant),
                    shift.location,
                    shift.status.value,
                    shift.notes,
                ),
            )
            return int(cur.lastrowid)

    def get_by_id(self, shift_id: int) -> Optional[ShiftInterval]:
        # Rows still in legacy form are invisible until backfilled.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM shifts
                WHERE shift_id=%s AND start_at IS NOT NULL AND end_at IS NOT NULL
                """,
                (int(shift_id),),
            )
            r = fetchone(cur)
            return _to_shift(r) if r else None

    def list_range(
        self,
        *,
        employee_id: Optional[int] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        statuses: Optional[Iterable[ShiftStatus]] = None,
    ) -> Sequence[ShiftInterval]:
        clauses = ["start_at IS NOT NULL", "end_at IS NOT NULL"]
        params: list[object] = []

        if employee_id is not None:
            clauses.append("employee_id=%s")
            params.append(int(employee_id))
        if start is not None:
            clauses.append("start_at >= %s")
            params.append(write_instant(start))
        if end is not None:
            clauses.append("start_at < %s")
            params.append(write_instant(end))
        status_values = [s.value for s in (statuses or [])]
        if status_values:
            clauses.append(f"status IN ({in_clause(status_values)})")
            params.extend(status_values)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM shifts
                WHERE {where}
                ORDER BY start_at ASC, shift_id ASC
                """,
                tuple(params),
            )
            return [_to_shift(r) for r in fetchall(cur)]

    def update_status(self, shift_id: int, status: ShiftStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE shifts SET status=%s WHERE shift_id=%s", (status.value, int(shift_id)))
            return cur.rowcount > 0

    def delete(self, shift_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM shifts WHERE shift_id=%s", (int(shift_id),))
            return cur.rowcount > 0

    def list_raw(self) -> Sequence[LegacyShiftRow]:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    SELECT shift_id, employee_id, start_date, end_date, start_time, end_time, start_at, end_at
                    FROM shifts
                    ORDER BY shift_id
                    """
                )
                rows = fetchall(cur)
        except mysql.connector.Error as e:
            raise FatalIOError(f"cannot load shifts: {e}") from e

        return [
            LegacyShiftRow(
                shift_id=int(r["shift_id"]),
                employee_id=int(r["employee_id"]),
                start_date=r.get("start_date"),
                end_date=r.get("end_date"),
                start_time=r.get("start_time"),
                end_time=r.get("end_time"),
                start_instant=read_instant(r.get("start_at")),
                end_instant=read_instant(r.get("end_at")),
            )
            for r in rows
        ]

    def save_instants(
        self,
        shift_id: int,
        *,
        start_instant: datetime,
        end_instant: datetime,
        clear_legacy: bool = True,
    ) -> bool:
        sql = "UPDATE shifts SET start_at=%s, end_at=%s"
        if clear_legacy:
            sql += ", start_date=NULL, end_date=NULL, start_time=NULL, end_time=NULL"
        sql += " WHERE shift_id=%s"

        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(sql, (write_instant(start_instant), write_instant(end_instant), int(shift_id)))
                return cur.rowcount > 0
        except mysql.connector.Error as e:
            logger.warning("Write failed for shift %s: %s", shift_id, e)
            raise TransientIOError(f"cannot update shift {shift_id}: {e}") from e
