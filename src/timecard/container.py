from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional

from .attendance.deriver import AttendanceDeriver
from .attendance.label_repository import StatusLabelRepository
from .attendance.label_service import StatusLabelService
from .attendance.model import StatusLabels
from .attendance.mysql_label_repository import MySQLStatusLabelRepository
from .attendance.service import AttendanceService
from .break_policy.mysql_break_policy_repository import MySQLBreakPolicyRepository
from .break_policy.repository import BreakPolicyRepository
from .break_policy.service import BreakPolicyService
from .daily_reports.mysql_daily_report_repository import MySQLDailyReportRepository
from .daily_reports.repository import DailyReportRepository
from .daily_reports.service import DailyReportService
from .database.connection import DatabaseConnection, DBConfig
from .locations.mysql_location_repository import MySQLLocationRepository
from .locations.repository import LocationRepository
from .locations.service import LocationService
from .punches.mysql_punch_repository import MySQLPunchRepository
from .punches.repository import PunchRepository
from .punches.service import PunchService
from .reports.kpi import KpiService
from .reports.service import AttendanceReportService
from .shift_templates.mysql_shift_template_repository import MySQLShiftTemplateRepository
from .shift_templates.repository import ShiftTemplateRepository
from .shift_templates.service import ShiftTemplateService
from .shifts.mysql_shift_repository import MySQLShiftRepository
from .shifts.repository import ShiftRepository
from .shifts.service import ShiftService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import UserService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    users_repo: UserRepository
    punches_repo: PunchRepository
    shifts_repo: ShiftRepository
    break_policies_repo: BreakPolicyRepository
    daily_reports_repo: DailyReportRepository
    locations_repo: LocationRepository
    shift_templates_repo: ShiftTemplateRepository
    status_labels_repo: Optional[StatusLabelRepository]

    user_service: UserService
    punch_service: PunchService
    shift_service: ShiftService
    break_policy_service: BreakPolicyService
    status_label_service: StatusLabelService
    attendance_service: AttendanceService
    report_service: AttendanceReportService
    daily_report_service: DailyReportService
    location_service: LocationService
    shift_template_service: ShiftTemplateService
    kpi_service: KpiService


def wire(
    *,
    users_repo: UserRepository,
    punches_repo: PunchRepository,
    shifts_repo: ShiftRepository,
    break_policies_repo: BreakPolicyRepository,
    daily_reports_repo: DailyReportRepository,
    locations_repo: LocationRepository,
    shift_templates_repo: ShiftTemplateRepository,
    status_labels_repo: Optional[StatusLabelRepository] = None,
    conn: Optional[DatabaseConnection] = None,
    grace_minutes: int = 0,
    status_labels: Optional[Mapping[str, str]] = None,
) -> Container:
    """Build services on top of any set of repositories."""

    status_label_service = StatusLabelService(status_labels_repo, base=StatusLabels.from_overrides(status_labels))
    attendance_service = AttendanceService(
        punches_repo,
        shifts_repo,
        break_policies_repo,
        deriver=AttendanceDeriver(grace_minutes=grace_minutes),
        label_service=status_label_service,
    )

    return Container(
        conn=conn,
        users_repo=users_repo,
        punches_repo=punches_repo,
        shifts_repo=shifts_repo,
        break_policies_repo=break_policies_repo,
        daily_reports_repo=daily_reports_repo,
        locations_repo=locations_repo,
        shift_templates_repo=shift_templates_repo,
        status_labels_repo=status_labels_repo,
        user_service=UserService(users_repo),
        punch_service=PunchService(punches_repo, users_repo, locations_repo),
        shift_service=ShiftService(shifts_repo),
        break_policy_service=BreakPolicyService(break_policies_repo),
        status_label_service=status_label_service,
        attendance_service=attendance_service,
        report_service=AttendanceReportService(attendance_service, users_repo),
        daily_report_service=DailyReportService(daily_reports_repo),
        location_service=LocationService(locations_repo, users_repo),
        shift_template_service=ShiftTemplateService(shift_templates_repo, shifts_repo, locations_repo, users_repo),
        kpi_service=KpiService(users_repo, punches_repo, shifts_repo, daily_reports_repo),
    )


def build_container(
    *,
    db_config: dict,
    grace_minutes: int = 0,
    status_labels: Optional[Mapping[str, str]] = None,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))

    return wire(
        conn=conn,
        users_repo=MySQLUserRepository(conn),
        punches_repo=MySQLPunchRepository(conn),
        shifts_repo=MySQLShiftRepository(conn),
        break_policies_repo=MySQLBreakPolicyRepository(conn),
        daily_reports_repo=MySQLDailyReportRepository(conn),
        locations_repo=MySQLLocationRepository(conn),
        shift_templates_repo=MySQLShiftTemplateRepository(conn),
        status_labels_repo=MySQLStatusLabelRepository(conn),
        grace_minutes=grace_minutes,
        status_labels=status_labels,
    )
