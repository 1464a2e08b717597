from __future__ import annotations

import hmac
import logging
from typing import Iterable, Optional

from ..common.datetime_utils import now_ms
from ..common.validators import require_non_empty
from ..core.exceptions import AuthorizationError, DomainError, ValidationError
from .model import Member, MemberRef
from .repository import MemberRepository

logger = logging.getLogger(__name__)


class BootstrapDisabledError(DomainError):
    status_code = 501
    default_reason = "bootstrap_disabled"


class MemberService:
    """Use case: member lookups needed around attendance, plus one-time bootstrap."""

    def __init__(self, members: MemberRepository, *, bootstrap_secret: Optional[str] = None):
        self._members = members
        self._bootstrap_secret = bootstrap_secret or None

    def refs_for(self, member_ids: Iterable[str]) -> list[MemberRef]:
        ids = list(member_ids)
        names = self._members.names_for(ids)
        return [MemberRef(member_id=mid, name=names.get(mid) or mid) for mid in ids]

    def refs_for_known(self, member_ids: Iterable[str]) -> list[MemberRef]:
        """Like refs_for, but drops ids with no member behind them."""
        ids = list(member_ids)
        names = self._members.names_for(ids)
        return [MemberRef(member_id=mid, name=names[mid]) for mid in ids if mid in names]

    def bootstrap_first_super_admin(self, *, secret: object, email: object, name: object = None) -> Member:
        if not self._bootstrap_secret:
            raise BootstrapDisabledError("Set BOOTSTRAP_SECRET to use bootstrap.")
        if not isinstance(secret, str) or not hmac.compare_digest(secret, self._bootstrap_secret):
            raise AuthorizationError("Invalid secret", reason="invalid_secret")

        email_s = require_non_empty(email, "email").lower()
        name_s = name.strip() if isinstance(name, str) and name.strip() else "Super Admin"

        created = self._members.create_first_super_admin(email=email_s, name=name_s, now=now_ms())
        if not created:
            raise ValidationError("Members already exist. Use the Members UI.", reason="members_exist")
        logger.info("Bootstrapped first super admin %s", email_s)
        return created
