from __future__ import annotations

import uuid
from typing import Any, Dict, List, Mapping, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Team
from .repository import TeamRepository

_UPDATABLE = ("name", "leader_id", "day_of_week", "is_wrap_up")


def _to_team(row: Dict[str, Any], member_ids: List[str]) -> Team:
    return Team(
        team_id=str(row["id"]),
        name=row["name"],
        leader_id=row.get("leader_id"),
        member_ids=tuple(member_ids),
        day_of_week=row.get("day_of_week"),
        is_wrap_up=bool(row.get("is_wrap_up")),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )


class MySQLTeamRepository(TeamRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, team_id: str) -> Optional[Team]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, name, leader_id, day_of_week, is_wrap_up, created_at, updated_at
                FROM teams
                WHERE id=%s
                """,
                (team_id,),
            )
            row = fetchone(cur)
            if not row:
                return None
            cur.execute(
                "SELECT member_id FROM team_members WHERE team_id=%s ORDER BY position ASC",
                (team_id,),
            )
            return _to_team(row, [str(r["member_id"]) for r in fetchall(cur)])

    def list_all(self) -> Sequence[Team]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, name, leader_id, day_of_week, is_wrap_up, created_at, updated_at
                FROM teams
                ORDER BY name ASC
                """
            )
            rows = fetchall(cur)
            cur.execute("SELECT team_id, member_id FROM team_members ORDER BY team_id, position ASC")
            roster: dict[str, list[str]] = {}
            for r in fetchall(cur):
                roster.setdefault(str(r["team_id"]), []).append(str(r["member_id"]))
            return [_to_team(r, roster.get(str(r["id"]), [])) for r in rows]

    def create(self, *, name: str, now: int, day_of_week: Optional[int] = None, is_wrap_up: bool = False) -> str:
        team_id = uuid.uuid4().hex
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO teams(id, name, leader_id, day_of_week, is_wrap_up, created_at, updated_at)
                VALUES(%s,%s,NULL,%s,%s,%s,%s)
                """,
                (team_id, name, day_of_week, 1 if is_wrap_up else 0, now, now),
            )
        return team_id

    def update(self, *, team_id: str, changes: Mapping[str, Any], now: int) -> bool:
        columns = [c for c in _UPDATABLE if c in changes]
        assignments = [f"{c}=%s" for c in columns] + ["updated_at=%s"]
        params: list[object] = [changes[c] for c in columns] + [now, team_id]

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"UPDATE teams SET {', '.join(assignments)} WHERE id=%s", tuple(params))
            return cur.rowcount > 0

    def replace_members(self, *, team_id: str, member_ids: Sequence[str], now: int) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM team_members WHERE team_id=%s", (team_id,))
            if member_ids:
                cur.executemany(
                    "INSERT INTO team_members(team_id, member_id, position) VALUES(%s,%s,%s)",
                    [(team_id, mid, pos) for pos, mid in enumerate(member_ids)],
                )
            cur.execute("UPDATE teams SET updated_at=%s WHERE id=%s", (now, team_id))

    def delete(self, *, team_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM team_members WHERE team_id=%s", (team_id,))
            cur.execute("DELETE FROM teams WHERE id=%s", (team_id,))
            return cur.rowcount > 0
