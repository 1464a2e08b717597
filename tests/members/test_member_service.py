from __future__ import annotations

import pytest

from src.committee_attendance.committee_attendance.core.enums import Role
from src.committee_attendance.committee_attendance.core.exceptions import AuthorizationError, ValidationError
from src.committee_attendance.committee_attendance.members.model import compose_display_name
from src.committee_attendance.committee_attendance.members.service import BootstrapDisabledError


def test_bootstrap_disabled_without_secret(world):
    with pytest.raises(BootstrapDisabledError) as exc:
        world.container.member_service.bootstrap_first_super_admin(secret="x", email="a@example.com")

    assert exc.value.status_code == 501


def test_bootstrap_wrong_secret(make_world):
    world = make_world(bootstrap_secret="s3cret")

    with pytest.raises(AuthorizationError) as exc:
        world.container.member_service.bootstrap_first_super_admin(secret="nope", email="a@example.com")

    assert exc.value.reason == "invalid_secret"


def test_bootstrap_creates_super_admin_once(make_world):
    world = make_world(bootstrap_secret="s3cret")
    svc = world.container.member_service

    member = svc.bootstrap_first_super_admin(secret="s3cret", email=" Chair@Example.com ")
    assert member.role == Role.SUPER_ADMIN
    assert member.email == "chair@example.com"
    assert member.name == "Super Admin"

    with pytest.raises(ValidationError) as exc:
        svc.bootstrap_first_super_admin(secret="s3cret", email="second@example.com")
    assert exc.value.reason == "members_exist"


def test_bootstrap_requires_email(make_world):
    world = make_world(bootstrap_secret="s3cret")

    with pytest.raises(ValidationError) as exc:
        world.container.member_service.bootstrap_first_super_admin(secret="s3cret", email="")

    assert exc.value.reason == "email_required"


def test_refs_fall_back_to_id_for_unknown_members(world):
    world.member("m1", name="Alice")

    refs = world.container.member_service.refs_for(["m1", "ghost"])

    assert [r.to_dict() for r in refs] == [{"id": "m1", "name": "Alice"}, {"id": "ghost", "name": "ghost"}]


def test_display_name_composition():
    assert compose_display_name(title="Dr", first_name="Ada", last_name=" Lovelace ") == "Dr Ada Lovelace"
    assert compose_display_name(email="ada@example.com", fallback="id1") == "ada@example.com"
    assert compose_display_name(fallback="id1") == "id1"
