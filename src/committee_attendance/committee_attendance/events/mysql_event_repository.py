from __future__ import annotations

import uuid
from typing import Any, Dict, Mapping, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, dump_json, fetchall, fetchone, load_id_list, load_json
from .model import Event, parse_overrides
from .repository import EventRepository

_UPDATABLE = ("name", "date_from", "date_to", "team_ids", "team_overrides", "overall_start_time", "overall_end_time")
_JSON_COLUMNS = {"team_ids", "team_overrides"}
_COLUMNS = """
    id, name, date_from, date_to, team_ids, team_overrides,
    overall_start_time, overall_end_time, created_by, created_at, updated_at
"""


def _to_event(row: Dict[str, Any]) -> Event:
    return Event(
        event_id=str(row["id"]),
        name=row["name"],
        date_from=str(row["date_from"]),
        date_to=str(row["date_to"]),
        team_ids=tuple(load_id_list(row.get("team_ids"))),
        team_overrides=parse_overrides(load_json(row.get("team_overrides"), {})),
        overall_start_time=row.get("overall_start_time"),
        overall_end_time=row.get("overall_end_time"),
        created_by=row.get("created_by"),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )


class MySQLEventRepository(EventRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, event_id: str) -> Optional[Event]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM events
                WHERE id=%s
                """,
                (event_id,),
            )
            row = fetchone(cur)
            return _to_event(row) if row else None

    def list_recent(self, *, limit: int) -> Sequence[Event]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM events
                ORDER BY date_from DESC
                LIMIT %s
                """,
                (int(limit),),
            )
            return [_to_event(r) for r in fetchall(cur)]

    def create(
        self,
        *,
        name: str,
        date_from: str,
        date_to: str,
        team_ids: list[str],
        team_overrides: Mapping[str, Any],
        created_by: Optional[str],
        now: int,
    ) -> str:
        event_id = uuid.uuid4().hex
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO events(id, name, date_from, date_to, team_ids, team_overrides, created_by, created_at, updated_at)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (event_id, name, date_from, date_to, dump_json(team_ids), dump_json(dict(team_overrides)), created_by, now, now),
            )
        return event_id

    def update(self, *, event_id: str, changes: Mapping[str, Any], now: int) -> bool:
        columns = [c for c in _UPDATABLE if c in changes]
        assignments = [f"{c}=%s" for c in columns] + ["updated_at=%s"]
        params: list[object] = [dump_json(changes[c]) if c in _JSON_COLUMNS else changes[c] for c in columns]
        params += [now, event_id]

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"UPDATE events SET {', '.join(assignments)} WHERE id=%s", tuple(params))
            return cur.rowcount > 0

    def delete(self, *, event_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM events WHERE id=%s", (event_id,))
            return cur.rowcount > 0
