from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Committee role used for authorization."""

    MEMBER = "member"
    ADMIN = "admin"
    SUPER_ADMIN = "super_admin"


class Operation(str, Enum):
    """Attendance operations checked by the policy."""

    READ = "read"
    FULL_SUBMIT = "full_submit"
    SELF_SUBMIT = "self_submit"
