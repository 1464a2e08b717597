from __future__ import annotations

from datetime import date, timedelta
from urllib.parse import parse_qs, urlparse

import pytest

from src.committee_attendance.committee_attendance.attendance.model import RecordKey
from src.committee_attendance.committee_attendance.core.enums import Role
from src.committee_attendance.committee_attendance.core.exceptions import AuthorizationError, ValidationError

NOW = 1_700_000_000_000
DAY_MS = 24 * 60 * 60 * 1000


@pytest.fixture
def link_world(world):
    world.member("boss", Role.SUPER_ADMIN)
    world.member("admin", Role.ADMIN)
    world.member("m1", name="Alice")
    world.member("m2", name="Bob")
    world.team("t1", name="Ushers", member_ids=["m1", "m2", "gone"])
    return world


def _issue(world, actor_id="admin"):
    issued = world.container.link_service.issue(
        actor=world.members.get_by_id(actor_id),
        team_id="t1",
        base_url="https://committee.example/",
        now=NOW,
    )
    query = parse_qs(urlparse(issued.url).query)
    return issued, query["token"][0]


def test_issue_builds_submit_url_with_seven_day_expiry(link_world):
    issued, token = _issue(link_world)

    assert issued.url.startswith("https://committee.example/attendance/submit?")
    assert "teamId=t1" in issued.url
    assert len(token) == 64
    assert issued.expires_at == NOW + 7 * DAY_MS


def test_members_cannot_issue_links(link_world):
    with pytest.raises(AuthorizationError) as exc:
        _issue(link_world, actor_id="m1")

    assert exc.value.reason == "admins_only"


def test_read_lists_known_members_only(link_world):
    _, token = _issue(link_world)

    data = link_world.container.link_service.read(token=token, team_id="t1", now=NOW + 1, today=date(2025, 3, 10))

    assert data == {
        "teamName": "Ushers",
        "members": [{"id": "m1", "name": "Alice"}, {"id": "m2", "name": "Bob"}],
        "date": "2025-03-10",
    }


def test_submit_overwrites_and_marks_link_submitter(link_world, fixed_today):
    _, token = _issue(link_world)
    svc = link_world.container.link_service

    svc.submit(token=token, team_id="t1", present_ids=["m1"], absent_ids=["m2"], now=NOW + 1, today=fixed_today)
    record = svc.submit(token=token, team_id="t1", present_ids=["m2"], absent_ids=["m1"], now=NOW + 2, today=fixed_today)

    assert record.submitted_by == "link"
    assert record.present_ids == ("m2",)
    assert record.work_date == fixed_today
    assert link_world.attendance.get_for_key(RecordKey("t1", fixed_today)) == record


def test_submit_rejects_future_date(link_world, fixed_today):
    _, token = _issue(link_world)

    with pytest.raises(AuthorizationError) as exc:
        link_world.container.link_service.submit(
            token=token,
            team_id="t1",
            present_ids=[],
            absent_ids=[],
            work_date=fixed_today + timedelta(days=1),
            now=NOW + 1,
            today=fixed_today,
        )

    assert exc.value.reason == "future_date"


def test_expired_link_is_rejected(link_world, fixed_today):
    _, token = _issue(link_world)

    with pytest.raises(AuthorizationError) as exc:
        link_world.container.link_service.read(token=token, team_id="t1", now=NOW + 8 * DAY_MS, today=fixed_today)

    assert exc.value.reason == "link_expired"


def test_token_is_bound_to_its_team(link_world, fixed_today):
    link_world.team("t2")
    _, token = _issue(link_world)

    with pytest.raises(AuthorizationError) as exc:
        link_world.container.link_service.read(token=token, team_id="t2", now=NOW + 1, today=fixed_today)

    assert exc.value.reason == "invalid_link"


def test_missing_token_is_bad_request(link_world):
    with pytest.raises(ValidationError):
        link_world.container.link_service.read(token="", team_id="t1", now=NOW)
