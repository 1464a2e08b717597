from __future__ import annotations

import uuid
from datetime import date
from typing import Any, Collection, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, dump_json, fetchall, fetchone, load_id_list
from .model import AttendanceLink, AttendanceRecord, RecordKey
from .repository import AttendanceLinkRepository, AttendanceRepository, MergeFn

_COLUMNS = """
    id, event_id, team_id, work_date, submitted_by, present_ids, absent_ids,
    start_time, end_time, notes, created_at, updated_at
"""


def _event_key(key: RecordKey) -> str:
    # Mirrors the generated event_key column: NULL event -> ''.
    return key.event_id or ""


def _to_record(r: Dict[str, Any]) -> AttendanceRecord:
    return AttendanceRecord(
        record_id=str(r["id"]),
        event_id=r.get("event_id") or None,
        team_id=str(r["team_id"]),
        work_date=r["work_date"],
        submitted_by=str(r["submitted_by"]),
        present_ids=tuple(load_id_list(r.get("present_ids"))),
        absent_ids=tuple(load_id_list(r.get("absent_ids"))),
        start_time=r.get("start_time"),
        end_time=r.get("end_time"),
        notes=r.get("notes"),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


def _select_for_key(cur, key: RecordKey, *, lock: bool) -> Optional[AttendanceRecord]:
    cur.execute(
        f"""
        SELECT {_COLUMNS}
        FROM attendance_records
        WHERE team_id=%s AND work_date=%s AND event_key=%s
        {"FOR UPDATE" if lock else ""}
        """,
        (key.team_id, key.work_date, _event_key(key)),
    )
    r = fetchone(cur)
    return _to_record(r) if r else None


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_records(
        self,
        *,
        event_id: Optional[str] = None,
        team_id: Optional[str] = None,
        team_ids: Optional[Collection[str]] = None,
        work_date: Optional[date] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        limit: int = 500,
    ) -> Sequence[AttendanceRecord]:
        clauses: list[str] = []
        params: list[object] = []

        if team_ids is not None:
            if not team_ids:
                return []
            clauses.append(f"team_id IN ({','.join(['%s'] * len(team_ids))})")
            params.extend(team_ids)
        if event_id:
            clauses.append("event_id=%s")
            params.append(event_id)
        if team_id:
            clauses.append("team_id=%s")
            params.append(team_id)
        if work_date is not None:
            clauses.append("work_date=%s")
            params.append(work_date)
        if date_from is not None:
            clauses.append("work_date>=%s")
            params.append(date_from)
        if date_to is not None:
            clauses.append("work_date<=%s")
            params.append(date_to)

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        params.append(int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                {where}
                ORDER BY work_date DESC, updated_at DESC
                LIMIT %s
                """,
                tuple(params),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def get_for_key(self, key: RecordKey) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            return _select_for_key(cur, key, lock=False)

    def upsert(self, *, key: RecordKey, merge: MergeFn, now: int) -> AttendanceRecord:
        record_id = uuid.uuid4().hex
        with db_cursor(self._conn_factory) as (_, cur):
            # Claim the key first. A concurrent writer on the same key blocks on the
            # unique index here instead of both taking gap locks on an empty range.
            self._insert_placeholder(cur, record_id, key, now)
            existing = _select_for_key(cur, key, lock=True)
            if existing is None:
                raise RuntimeError(f"attendance row for {key} vanished after insert")

            created = existing.record_id == record_id
            write = merge(None if created else existing)
            cur.execute(
                """
                UPDATE attendance_records
                SET submitted_by=%s, present_ids=%s, absent_ids=%s,
                    start_time=COALESCE(%s, start_time),
                    end_time=COALESCE(%s, end_time),
                    notes=COALESCE(%s, notes),
                    updated_at=%s
                WHERE id=%s
                """,
                (
                    write.submitted_by,
                    dump_json(list(write.present_ids)),
                    dump_json(list(write.absent_ids)),
                    write.start_time,
                    write.end_time,
                    write.notes,
                    now,
                    existing.record_id,
                ),
            )
            return AttendanceRecord(
                record_id=existing.record_id,
                event_id=existing.event_id,
                team_id=existing.team_id,
                work_date=existing.work_date,
                submitted_by=write.submitted_by,
                present_ids=write.present_ids,
                absent_ids=write.absent_ids,
                start_time=write.start_time if write.start_time is not None else existing.start_time,
                end_time=write.end_time if write.end_time is not None else existing.end_time,
                notes=write.notes if write.notes is not None else existing.notes,
                created_at=existing.created_at,
                updated_at=now,
            )

    @staticmethod
    def _insert_placeholder(cur, record_id: str, key: RecordKey, now: int) -> None:
        """Insert an empty row for ``key`` unless one exists; ``id=id`` makes the duplicate a no-op."""
        cur.execute(
            """
            INSERT INTO attendance_records(
                id, event_id, team_id, work_date, submitted_by, present_ids, absent_ids,
                created_at, updated_at
            )
            VALUES(%s,%s,%s,%s,'','[]','[]',%s,%s)
            ON DUPLICATE KEY UPDATE id=id
            """,
            (record_id, key.event_id, key.team_id, key.work_date, now, now),
        )


class MySQLAttendanceLinkRepository(AttendanceLinkRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, *, team_id: str, secret: str, expires_at: int, now: int) -> AttendanceLink:
        link_id = uuid.uuid4().hex
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_links(id, team_id, secret, expires_at, created_at)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (link_id, team_id, secret, int(expires_at), int(now)),
            )
        return AttendanceLink(link_id=link_id, team_id=team_id, secret=secret, expires_at=int(expires_at), created_at=int(now))

    def find(self, *, secret: str, team_id: str) -> Optional[AttendanceLink]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, team_id, secret, expires_at, created_at
                FROM attendance_links
                WHERE secret=%s AND team_id=%s
                LIMIT 1
                """,
                (secret, team_id),
            )
            r = fetchone(cur)
            if not r:
                return None
            return AttendanceLink(
                link_id=str(r["id"]),
                team_id=str(r["team_id"]),
                secret=r["secret"],
                expires_at=int(r["expires_at"]),
                created_at=int(r["created_at"]),
            )
