from __future__ import annotations

from typing import Iterable, Optional, Protocol

from .model import Member


class MemberRepository(Protocol):
    """Member directory.

    Note (DIP): services depend on this interface, not on a concrete database.
    """

    def get_by_id(self, member_id: str) -> Optional[Member]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Member]:
        raise NotImplementedError

    def names_for(self, member_ids: Iterable[str]) -> dict[str, str]:
        """Display names keyed by id; unknown ids are omitted."""

        raise NotImplementedError

    def existing_ids(self, member_ids: Iterable[str]) -> set[str]:
        raise NotImplementedError

    def create_first_super_admin(self, *, email: str, name: str, now: int) -> Optional[Member]:
        """Insert a super_admin only if the member table is empty.

        Returns None when another member already exists. The emptiness check
        and the insert are one statement.
        """

        raise NotImplementedError
