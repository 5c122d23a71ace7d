from __future__ import annotations

from datetime import date, datetime
from typing import Optional

import pytest

from timecard.attendance.model import StatusLabelSetting
from timecard.break_policy.model import BreakPolicy
from timecard.container import wire
from timecard.core.enums import PunchType, Role, ShiftStatus, ShiftType
from timecard.daily_reports.model import DailyReport
from timecard.locations.model import Location
from timecard.main import create_app
from timecard.punches.model import PunchEvent
from timecard.shift_templates.model import ShiftTemplate
from timecard.shifts.model import ShiftAssignment
from timecard.users.model import User


class InMemoryUsers:
    def __init__(self, users=()):
        self.users_by_id: dict[int, User] = {u.user_id: u for u in users}

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.users_by_id.get(int(user_id))

    def get_by_line_user_id(self, line_user_id: str) -> Optional[User]:
        return next((u for u in self.users_by_id.values() if u.line_user_id == line_user_id), None)

    def list_active(self):
        return [u for u in sorted(self.users_by_id.values(), key=lambda u: u.user_id) if u.is_active]


class InMemoryPunches:
    def __init__(self):
        self.items: list[PunchEvent] = []

    def create(self, *, user_id, punch_type, recorded_at, location_id=None, location_name=None, note=None) -> int:
        punch_id = len(self.items) + 1
        self.items.append(
            PunchEvent(
                punch_id=punch_id,
                user_id=user_id,
                punch_type=PunchType(punch_type),
                recorded_at=recorded_at,
                location_id=location_id,
                location_name=location_name,
                note=note,
            )
        )
        return punch_id

    def add(self, user_id: int, punch_type: PunchType, recorded_at: datetime, **kwargs) -> int:
        return self.create(user_id=user_id, punch_type=punch_type, recorded_at=recorded_at, **kwargs)

    def list_for_user_between(self, *, user_id, start, end):
        items = [p for p in self.items if p.user_id == user_id and start <= p.recorded_at < end]
        return sorted(items, key=lambda p: (p.recorded_at, p.punch_id))

    def list_between(self, *, start, end):
        items = [p for p in self.items if start <= p.recorded_at < end]
        return sorted(items, key=lambda p: (p.recorded_at, p.punch_id))

    def get_recent_for_user(self, user_id, limit):
        items = [p for p in self.items if p.user_id == user_id]
        items.sort(key=lambda p: (p.recorded_at, p.punch_id), reverse=True)
        return items[:limit]


class InMemoryShifts:
    def __init__(self):
        self.by_key: dict[tuple[int, date], ShiftAssignment] = {}
        self._id = 0

    def get_by_id(self, shift_id):
        return next((s for s in self.by_key.values() if s.shift_id == int(shift_id)), None)

    def get_for_user_and_date(self, *, user_id, shift_date):
        return self.by_key.get((int(user_id), shift_date))

    def list_for_user_between(self, *, user_id, start, end):
        return self.list_range(start=start, end=end, user_id=user_id)

    def list_range(self, *, start, end, user_id=None):
        items = [
            s for s in self.by_key.values()
            if start <= s.shift_date <= end and (user_id is None or s.user_id == user_id)
        ]
        return sorted(items, key=lambda s: (s.shift_date, s.user_id))

    def upsert(self, *, user_id, shift_date, shift_type, start_time, end_time, status, note=None) -> int:
        existing = self.by_key.get((user_id, shift_date))
        if existing:
            shift_id = existing.shift_id
        else:
            self._id += 1
            shift_id = self._id
        self.by_key[(user_id, shift_date)] = ShiftAssignment(
            shift_id=shift_id,
            user_id=user_id,
            shift_date=shift_date,
            shift_type=shift_type,
            start_time=start_time,
            end_time=end_time,
            status=status,
            note=note,
        )
        return shift_id

    def add(self, user_id, shift_date, start_time, end_time, shift_type=ShiftType.NORMAL, status=ShiftStatus.ADJUSTING) -> int:
        return self.upsert(
            user_id=user_id,
            shift_date=shift_date,
            shift_type=shift_type,
            start_time=start_time,
            end_time=end_time,
            status=status,
        )

    def set_status_range(self, *, start, end, status, user_id=None) -> int:
        count = 0
        for key, s in list(self.by_key.items()):
            if s in self.list_range(start=start, end=end, user_id=user_id) and s.status != status:
                self.by_key[key] = ShiftAssignment(**{**s.__dict__, "status": status})
                count += 1
        return count

    def delete(self, *, shift_id) -> bool:
        for key, s in list(self.by_key.items()):
            if s.shift_id == int(shift_id):
                del self.by_key[key]
                return True
        return False


class InMemoryBreakPolicies:
    def __init__(self, policies=()):
        self.by_id: dict[int, BreakPolicy] = {}
        for p in policies:
            self.save(p)

    def list_active(self):
        return [p for p in self.by_id.values() if p.is_active]

    def get_by_id(self, policy_id):
        return self.by_id.get(int(policy_id))

    def save(self, policy: BreakPolicy) -> int:
        policy_id = policy.policy_id or len(self.by_id) + 1
        self.by_id[policy_id] = BreakPolicy(**{**policy.__dict__, "policy_id": policy_id})
        return policy_id

    def deactivate(self, policy_id) -> bool:
        policy = self.by_id.get(int(policy_id))
        if not policy:
            return False
        self.by_id[int(policy_id)] = BreakPolicy(**{**policy.__dict__, "is_active": False})
        return True


class InMemoryDailyReports:
    def __init__(self):
        self.by_key: dict[tuple[int, date], DailyReport] = {}

    def upsert(self, *, user_id, report_date, sales_amount, customer_count, items_sold, checkout_time=None, notes=None) -> int:
        existing = self.by_key.get((user_id, report_date))
        report_id = existing.report_id if existing else len(self.by_key) + 1
        self.by_key[(user_id, report_date)] = DailyReport(
            report_id=report_id,
            user_id=user_id,
            report_date=report_date,
            sales_amount=sales_amount,
            customer_count=customer_count,
            items_sold=items_sold,
            checkout_time=checkout_time,
            notes=notes,
        )
        return report_id

    def list_range(self, *, start, end, user_id=None):
        items = [
            r for r in self.by_key.values()
            if start <= r.report_date <= end and (user_id is None or r.user_id == user_id)
        ]
        return sorted(items, key=lambda r: (r.report_date, r.user_id))


class InMemoryLocations:
    def __init__(self, locations=()):
        self.by_id: dict[int, Location] = {loc.location_id: loc for loc in locations}
        self.user_locations: dict[int, list[int]] = {}

    def get_by_id(self, location_id):
        return self.by_id.get(int(location_id))

    def get_by_code(self, code):
        return next((loc for loc in self.by_id.values() if loc.code == code), None)

    def list_active(self):
        return [loc for loc in sorted(self.by_id.values(), key=lambda loc: loc.location_id) if loc.is_active]

    def create(self, *, name, code, address=None) -> int:
        location_id = max(self.by_id, default=0) + 1
        self.by_id[location_id] = Location(location_id=location_id, name=name, code=code, address=address)
        return location_id

    def add(self, name: str, code: str, **kwargs) -> int:
        return self.create(name=name, code=code, **kwargs)

    def update(self, *, location_id, name, code, address=None) -> bool:
        existing = self.by_id.get(int(location_id))
        if not existing:
            return False
        self.by_id[int(location_id)] = Location(**{**existing.__dict__, "name": name, "code": code, "address": address})
        return True

    def deactivate(self, location_id) -> bool:
        existing = self.by_id.get(int(location_id))
        if not existing:
            return False
        self.by_id[int(location_id)] = Location(**{**existing.__dict__, "is_active": False})
        return True

    def list_location_ids_for_user(self, user_id):
        return list(self.user_locations.get(int(user_id), []))

    def replace_user_locations(self, *, user_id, location_ids) -> None:
        self.user_locations[int(user_id)] = list(location_ids)


class InMemoryShiftTemplates:
    def __init__(self):
        self.by_id: dict[int, ShiftTemplate] = {}

    def get_by_id(self, template_id):
        return self.by_id.get(int(template_id))

    def get_by_location_and_name(self, *, location_id, name):
        return next(
            (t for t in self.by_id.values() if t.location_id == location_id and t.name == name),
            None,
        )

    def list_for_location(self, location_id):
        items = [t for t in self.by_id.values() if t.location_id == int(location_id) and t.is_active]
        return sorted(items, key=lambda t: (t.shift_type.value, t.name))

    def create(self, template: ShiftTemplate) -> int:
        template_id = len(self.by_id) + 1
        self.by_id[template_id] = ShiftTemplate(**{**template.__dict__, "template_id": template_id})
        return template_id

    def deactivate(self, template_id) -> bool:
        existing = self.by_id.get(int(template_id))
        if not existing:
            return False
        self.by_id[int(template_id)] = ShiftTemplate(**{**existing.__dict__, "is_active": False})
        return True


class InMemoryStatusLabels:
    def __init__(self):
        self.by_date: dict[date, StatusLabelSetting] = {}

    def list_all(self):
        return sorted(self.by_date.values(), key=lambda s: s.applied_from)

    def save(self, *, labels, applied_from) -> int:
        existing = self.by_date.get(applied_from)
        setting_id = existing.setting_id if existing else len(self.by_date) + 1
        self.by_date[applied_from] = StatusLabelSetting(labels=dict(labels), applied_from=applied_from, setting_id=setting_id)
        return setting_id


STAFF = User(user_id=1, line_user_id="U-staff", display_name="Staff A", role=Role.STAFF)
ADMIN = User(user_id=2, line_user_id="U-admin", display_name="Admin", role=Role.ADMIN)


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 2, 2, 8, 25, 0)


@pytest.fixture
def users_repo():
    return InMemoryUsers([STAFF, ADMIN])


@pytest.fixture
def punches_repo():
    return InMemoryPunches()


@pytest.fixture
def shifts_repo():
    return InMemoryShifts()


@pytest.fixture
def policies_repo():
    return InMemoryBreakPolicies()


@pytest.fixture
def daily_reports_repo():
    return InMemoryDailyReports()


@pytest.fixture
def locations_repo():
    return InMemoryLocations()


@pytest.fixture
def templates_repo():
    return InMemoryShiftTemplates()


@pytest.fixture
def labels_repo():
    return InMemoryStatusLabels()


@pytest.fixture
def container(users_repo, punches_repo, shifts_repo, policies_repo, daily_reports_repo, locations_repo, templates_repo, labels_repo):
    return wire(
        users_repo=users_repo,
        punches_repo=punches_repo,
        shifts_repo=shifts_repo,
        break_policies_repo=policies_repo,
        daily_reports_repo=daily_reports_repo,
        locations_repo=locations_repo,
        shift_templates_repo=templates_repo,
        status_labels_repo=labels_repo,
    )


@pytest.fixture
def app(container):
    return create_app(settings_module="timecard.settings.testing", container=container)


@pytest.fixture
def client(app):
    return app.test_client()


def login(client, user: User) -> None:
    with client.session_transaction() as sess:
        sess["user_id"] = user.user_id
        sess["role"] = user.role.value


@pytest.fixture
def login_as(client):
    def _login(user: User) -> None:
        login(client, user)

    return _login


@pytest.fixture
def staff() -> User:
    return STAFF


@pytest.fixture
def admin() -> User:
    return ADMIN
