from __future__ import annotations

from datetime import date

import pytest

from src.committee_attendance.committee_attendance.core.enums import Role
from src.committee_attendance.committee_attendance.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from src.committee_attendance.committee_attendance.teams.defaults import DEFAULT_REGULAR_TEAM_NAMES, WRAP_UP_TEAMS


@pytest.fixture
def team_world(world):
    world.member("boss", Role.SUPER_ADMIN)
    world.member("lead", Role.ADMIN)
    world.member("m1")
    world.member("m2")
    world.team("t1", leader_id="lead", member_ids=["m1"])
    world.team("t2", member_ids=["m1", "m2"])
    return world


def _actor(world, member_id):
    return world.members.get_by_id(member_id)


def test_admin_lists_only_led_teams(team_world):
    svc = team_world.container.team_service

    assert [t.team_id for t in svc.list_for(_actor(team_world, "lead"))] == ["t1"]
    assert len(svc.list_for(_actor(team_world, "boss"))) == 2


def test_roster_update_keeps_member_back_references_in_sync(team_world):
    svc = team_world.container.team_service

    svc.update(actor=_actor(team_world, "lead"), team_id="t1", payload={"memberIds": ["m2", "m2"]})

    assert team_world.teams.get_by_id("t1").member_ids == ("m2",)
    assert team_world.members.get_by_id("m1").team_ids == ("t2",)
    assert team_world.members.get_by_id("m2").team_ids == ("t1", "t2")


def test_roster_update_rejects_unknown_members(team_world):
    with pytest.raises(ValidationError) as exc:
        team_world.container.team_service.update(
            actor=_actor(team_world, "boss"), team_id="t1", payload={"memberIds": ["m1", "ghost"]}
        )

    assert exc.value.reason == "unknown_member"
    assert team_world.teams.get_by_id("t1").member_ids == ("m1",)


def test_only_leader_or_super_admin_may_edit(team_world):
    with pytest.raises(AuthorizationError) as exc:
        team_world.container.team_service.update(actor=_actor(team_world, "lead"), team_id="t2", payload={"name": "X"})

    assert exc.value.reason == "not_team_leader"


def test_update_leader_and_wrap_up_fields(team_world):
    team = team_world.container.team_service.update(
        actor=_actor(team_world, "boss"),
        team_id="t2",
        payload={"leaderId": "m2", "dayOfWeek": 3, "isWrapUp": True, "name": " Stage "},
    )

    assert team.leader_id == "m2"
    assert team.day_of_week == 3
    assert team.is_wrap_up is True
    assert team.name == "Stage"


def test_unknown_leader_rejected(team_world):
    with pytest.raises(ValidationError) as exc:
        team_world.container.team_service.update(actor=_actor(team_world, "boss"), team_id="t2", payload={"leaderId": "ghost"})

    assert exc.value.reason == "unknown_leader"


def test_delete_cascades_to_member_team_ids(team_world):
    svc = team_world.container.team_service

    svc.delete(actor=_actor(team_world, "boss"), team_id="t2")

    assert team_world.members.get_by_id("m2").team_ids == ()
    assert team_world.members.get_by_id("m1").team_ids == ("t1",)
    with pytest.raises(NotFoundError):
        svc.get("t2")


def test_delete_requires_super_admin(team_world):
    with pytest.raises(AuthorizationError):
        team_world.container.team_service.delete(actor=_actor(team_world, "lead"), team_id="t1")


def test_create_requires_name(team_world):
    with pytest.raises(ValidationError) as exc:
        team_world.container.team_service.create(actor=_actor(team_world, "boss"), name="  ")

    assert exc.value.reason == "name_required"


def test_seed_creates_missing_defaults_once(world):
    boss = world.member("boss", Role.SUPER_ADMIN)
    world.team("existing", name=DEFAULT_REGULAR_TEAM_NAMES[0])
    svc = world.container.team_service

    created = svc.seed_defaults(actor=boss)

    assert created == len(DEFAULT_REGULAR_TEAM_NAMES) - 1 + len(WRAP_UP_TEAMS)
    assert svc.seed_defaults(actor=boss) == 0
    wrap_ups = sorted((t.day_of_week, t.name) for t in world.teams.list_all() if t.is_wrap_up)
    assert wrap_ups == sorted(WRAP_UP_TEAMS)


def test_eligible_teams_include_wrap_ups_for_weekdays_in_range(world):
    world.team("regular", name="Ushers")
    world.team("sun", name="Sunday Wrap-up", day_of_week=0, is_wrap_up=True)
    world.team("wed", name="Wednesday Wrap-up", day_of_week=3, is_wrap_up=True)

    # 2025-03-08 is a Saturday, 2025-03-09 a Sunday
    teams = world.container.team_service.eligible_for_range(date_from=date(2025, 3, 8), date_to=date(2025, 3, 9))

    assert {t.team_id for t in teams} == {"regular", "sun"}
