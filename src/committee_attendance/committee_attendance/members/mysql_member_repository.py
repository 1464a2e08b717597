from __future__ import annotations

import uuid
from typing import Any, Dict, Iterable, Optional

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Member, compose_display_name
from .repository import MemberRepository

_COLUMNS = "id, email, name, title, first_name, last_name, phone, role, created_at, updated_at"


def _team_ids(cur, member_id: str) -> tuple[str, ...]:
    cur.execute("SELECT team_id FROM team_members WHERE member_id=%s ORDER BY team_id", (member_id,))
    return tuple(str(r["team_id"]) for r in fetchall(cur))


def _to_member(row: Dict[str, Any], team_ids: tuple[str, ...]) -> Member:
    email = row.get("email") or ""
    name = row.get("name")
    if name is None:
        name = compose_display_name(
            title=row.get("title") or "",
            first_name=row.get("first_name") or "",
            last_name=row.get("last_name") or "",
            email=email,
            fallback=str(row["id"]),
        )
    return Member(
        member_id=str(row["id"]),
        email=email,
        name=name,
        role=Role(row.get("role") or Role.MEMBER.value),
        title=row.get("title") or "",
        first_name=row.get("first_name") or "",
        last_name=row.get("last_name") or "",
        phone=row.get("phone") or "",
        team_ids=team_ids,
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )


class MySQLMemberRepository(MemberRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, member_id: str) -> Optional[Member]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM members WHERE id=%s", (member_id,))
            row = fetchone(cur)
            if not row:
                return None
            return _to_member(row, _team_ids(cur, str(row["id"])))

    def get_by_email(self, email: str) -> Optional[Member]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM members WHERE email=%s LIMIT 1", (email.lower(),))
            row = fetchone(cur)
            if not row:
                return None
            return _to_member(row, _team_ids(cur, str(row["id"])))

    def names_for(self, member_ids: Iterable[str]) -> dict[str, str]:
        ids = list(dict.fromkeys(member_ids))
        if not ids:
            return {}
        placeholders = ",".join(["%s"] * len(ids))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM members WHERE id IN ({placeholders})", tuple(ids))
            return {str(r["id"]): _to_member(r, ()).name for r in fetchall(cur)}

    def existing_ids(self, member_ids: Iterable[str]) -> set[str]:
        ids = list(dict.fromkeys(member_ids))
        if not ids:
            return set()
        placeholders = ",".join(["%s"] * len(ids))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT id FROM members WHERE id IN ({placeholders})", tuple(ids))
            return {str(r["id"]) for r in fetchall(cur)}

    def create_first_super_admin(self, *, email: str, name: str, now: int) -> Optional[Member]:
        member_id = uuid.uuid4().hex
        with db_cursor(self._conn_factory) as (_, cur):
            # Single statement: the emptiness check and the insert cannot interleave.
            cur.execute(
                """
                INSERT INTO members(id, email, name, title, first_name, last_name, phone, role, created_at, updated_at)
                SELECT %s, %s, %s, '', '', '', '', %s, %s, %s
                FROM DUAL
                WHERE NOT EXISTS (SELECT 1 FROM members)
                """,
                (member_id, email.lower(), name, Role.SUPER_ADMIN.value, now, now),
            )
            if cur.rowcount <= 0:
                return None
        return Member(
            member_id=member_id,
            email=email.lower(),
            name=name,
            role=Role.SUPER_ADMIN,
            created_at=now,
            updated_at=now,
        )

