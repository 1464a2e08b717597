from __future__ import annotations

import logging
from typing import Optional

from ..auth.tokens import Principal
from ..common.datetime_utils import now_ms
from ..core.exceptions import AuthorizationError
from .model import Member
from .repository import MemberRepository

logger = logging.getLogger(__name__)


class IdentityResolver:
    """Maps a verified principal to a registered Member.

    The first-super-admin escape hatch only fires on a completely empty member
    table and only for the configured email.
    """

    def __init__(self, members: MemberRepository, *, first_super_admin_email: Optional[str] = None):
        self._members = members
        self._first_super_admin_email = (first_super_admin_email or "").strip().lower() or None

    def resolve(self, principal: Principal) -> Member:
        email = (principal.email or "").strip().lower()
        if not email:
            raise AuthorizationError("No email in token", reason="no_email")

        member = self._members.get_by_email(email)
        if member:
            return member

        if self._first_super_admin_email and email == self._first_super_admin_email:
            name = principal.name or email.split("@")[0] or "Super Admin"
            created = self._members.create_first_super_admin(email=email, name=name, now=now_ms())
            if created:
                logger.info("Provisioned first super admin %s", email)
                return created

        raise AuthorizationError(
            "Your email is not in the member list. Contact an administrator.",
            reason="not_registered",
        )
