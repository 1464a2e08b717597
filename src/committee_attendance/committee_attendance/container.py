from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from .attendance.factory import MergeStrategyFactory
from .attendance.geofence import GeofenceCheck, VenueConfig
from .attendance.link_service import AttendanceLinkService
from .attendance.membership import MembershipResolver
from .attendance.mysql_attendance_repository import MySQLAttendanceLinkRepository, MySQLAttendanceRepository
from .attendance.policy import AttendancePolicy
from .attendance.repository import AttendanceLinkRepository, AttendanceRepository
from .attendance.service import AttendanceService
from .auth.tokens import TokenVerifier
from .core.constants import DEFAULT_TOKEN_MAX_AGE_SECONDS
from .database.connection import DBConfig, DatabaseConnection
from .events.mysql_event_repository import MySQLEventRepository
from .events.repository import EventRepository
from .events.service import EventService
from .members.identity import IdentityResolver
from .members.mysql_member_repository import MySQLMemberRepository
from .members.repository import MemberRepository
from .members.service import MemberService
from .teams.mysql_team_repository import MySQLTeamRepository
from .teams.repository import TeamRepository
from .teams.service import TeamService


@dataclass(frozen=True)
class Container:
    members_repo: MemberRepository
    teams_repo: TeamRepository
    events_repo: EventRepository
    attendance_repo: AttendanceRepository
    links_repo: AttendanceLinkRepository

    tokens: TokenVerifier
    identity: IdentityResolver
    geofence: GeofenceCheck

    member_service: MemberService
    team_service: TeamService
    event_service: EventService
    attendance_service: AttendanceService
    link_service: AttendanceLinkService

    # Raises when the backing store is unreachable
    ping_database: Callable[[], None]
    app_url: str = ""


def assemble_container(
    *,
    members_repo: MemberRepository,
    teams_repo: TeamRepository,
    events_repo: EventRepository,
    attendance_repo: AttendanceRepository,
    links_repo: AttendanceLinkRepository,
    secret_key: str,
    token_max_age_seconds: int = DEFAULT_TOKEN_MAX_AGE_SECONDS,
    venue: Optional[VenueConfig] = None,
    first_super_admin_email: Optional[str] = None,
    bootstrap_secret: Optional[str] = None,
    app_url: str = "",
    ping_database: Optional[Callable[[], None]] = None,
) -> Container:
    """Wire services on top of any set of repositories (MySQL or in-memory)."""

    strategy_factory = MergeStrategyFactory()
    geofence = GeofenceCheck(venue or VenueConfig())

    member_service = MemberService(members_repo, bootstrap_secret=bootstrap_secret)
    attendance_service = AttendanceService(
        attendance_repo,
        teams_repo,
        events_repo,
        member_service,
        membership=MembershipResolver(teams_repo, events_repo),
        geofence=geofence,
        policy=AttendancePolicy(),
        strategy_factory=strategy_factory,
    )
    link_service = AttendanceLinkService(
        links_repo,
        attendance_repo,
        teams_repo,
        member_service,
        strategy_factory=strategy_factory,
    )

    return Container(
        members_repo=members_repo,
        teams_repo=teams_repo,
        events_repo=events_repo,
        attendance_repo=attendance_repo,
        links_repo=links_repo,
        tokens=TokenVerifier(secret_key, max_age_seconds=token_max_age_seconds),
        identity=IdentityResolver(members_repo, first_super_admin_email=first_super_admin_email),
        geofence=geofence,
        member_service=member_service,
        team_service=TeamService(teams_repo, members_repo),
        event_service=EventService(events_repo, teams_repo),
        attendance_service=attendance_service,
        link_service=link_service,
        app_url=app_url,
        ping_database=ping_database or (lambda: None),
    )


def build_container(*, db_config: dict, settings: object) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))

    return assemble_container(
        members_repo=MySQLMemberRepository(conn),
        teams_repo=MySQLTeamRepository(conn),
        events_repo=MySQLEventRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        links_repo=MySQLAttendanceLinkRepository(conn),
        secret_key=getattr(settings, "SECRET_KEY"),
        token_max_age_seconds=int(getattr(settings, "TOKEN_MAX_AGE_SECONDS", DEFAULT_TOKEN_MAX_AGE_SECONDS)),
        venue=VenueConfig.from_values(
            getattr(settings, "ATTENDANCE_VENUE_LAT", None),
            getattr(settings, "ATTENDANCE_VENUE_LNG", None),
            getattr(settings, "ATTENDANCE_VENUE_RADIUS_METERS", None),
        ),
        first_super_admin_email=getattr(settings, "FIRST_SUPER_ADMIN_EMAIL", None),
        bootstrap_secret=getattr(settings, "BOOTSTRAP_SECRET", None),
        app_url=str(getattr(settings, "APP_URL", "") or ""),
        ping_database=conn.ping,
    )
