from __future__ import annotations

from dataclasses import dataclass, field

from ..core.enums import Role


def compose_display_name(*, title: str = "", first_name: str = "", last_name: str = "", email: str = "", fallback: str = "") -> str:
    """"Title First Last" from the non-empty parts, then email, then fallback."""
    joined = " ".join(p.strip() for p in (title, first_name, last_name) if p and p.strip())
    return joined or email or fallback


@dataclass(frozen=True)
class Member:
    """Committee member.

    ``team_ids`` is derived from team rosters on read; teams own membership.
    """

    member_id: str
    email: str
    name: str
    role: Role
    title: str = ""
    first_name: str = ""
    last_name: str = ""
    phone: str = ""
    team_ids: tuple[str, ...] = field(default_factory=tuple)
    created_at: int | None = None
    updated_at: int | None = None

    def to_dict(self) -> dict:
        return {
            "id": self.member_id,
            "email": self.email,
            "name": self.name,
            "role": self.role.value,
            "title": self.title,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "phone": self.phone,
            "teamIds": list(self.team_ids),
        }


@dataclass(frozen=True)
class MemberRef:
    """Id + display name pair used when expanding rosters."""

    member_id: str
    name: str

    def to_dict(self) -> dict:
        return {"id": self.member_id, "name": self.name}
