import pytest

from timecard.core.enums import Role
from timecard.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from timecard.locations.service import LocationService, resolve_punch_location


@pytest.fixture
def svc(locations_repo, users_repo):
    return LocationService(locations_repo, users_repo)


def test_save_creates_then_updates(svc, locations_repo):
    location_id = svc.save(current_role=Role.ADMIN, name=" Shibuya ", code="SBY")
    assert locations_repo.get_by_id(location_id).name == "Shibuya"

    assert svc.save(current_role=Role.ADMIN, name="Shibuya East", code="SBY", address="Tokyo", location_id=location_id) == location_id
    assert locations_repo.get_by_id(location_id).address == "Tokyo"


def test_save_rejects_duplicate_code_and_missing_location(svc):
    svc.save(current_role=Role.ADMIN, name="Shibuya", code="SBY")

    with pytest.raises(ValidationError):
        svc.save(current_role=Role.ADMIN, name="Other", code="SBY")
    with pytest.raises(NotFoundError):
        svc.save(current_role=Role.ADMIN, name="Ghost", code="GST", location_id=99)
    with pytest.raises(ValidationError):
        svc.save(current_role=Role.ADMIN, name="", code="X")


def test_only_admin_changes_locations(svc, locations_repo):
    shop = locations_repo.add("Shibuya", "SBY")

    with pytest.raises(AuthorizationError):
        svc.save(current_role=Role.STAFF, name="x", code="y")
    with pytest.raises(AuthorizationError):
        svc.deactivate(current_role=Role.STAFF, location_id=shop)
    with pytest.raises(AuthorizationError):
        svc.assign_user(current_role=Role.STAFF, user_id=1, location_ids=[shop])


def test_deactivated_location_is_hidden(svc, locations_repo):
    shop = locations_repo.add("Shibuya", "SBY")
    locations_repo.add("Ikebukuro", "IKB")

    svc.deactivate(current_role=Role.ADMIN, location_id=shop)

    assert [loc["code"] for loc in svc.list_active()] == ["IKB"]
    with pytest.raises(NotFoundError):
        svc.deactivate(current_role=Role.ADMIN, location_id=99)


def test_user_sees_assigned_locations_or_all(svc, locations_repo):
    shop = locations_repo.add("Shibuya", "SBY")
    locations_repo.add("Ikebukuro", "IKB")

    assert len(svc.list_for_user(1)) == 2

    assert svc.assign_user(current_role=Role.ADMIN, user_id=1, location_ids=[shop, shop]) == [shop]
    assert [loc["code"] for loc in svc.list_for_user(1)] == ["SBY"]


def test_assign_user_validates_user_and_locations(svc, locations_repo):
    shop = locations_repo.add("Shibuya", "SBY")
    locations_repo.deactivate(shop)

    with pytest.raises(NotFoundError):
        svc.assign_user(current_role=Role.ADMIN, user_id=99, location_ids=[])
    with pytest.raises(ValidationError):
        svc.assign_user(current_role=Role.ADMIN, user_id=1, location_ids=[shop])


def test_resolve_punch_location(locations_repo):
    shop = locations_repo.add("Shibuya", "SBY")
    other = locations_repo.add("Ikebukuro", "IKB")

    assert resolve_punch_location(locations_repo, user_id=1, location_id=None) is None
    assert resolve_punch_location(locations_repo, user_id=1, location_id=other).code == "IKB"

    locations_repo.replace_user_locations(user_id=1, location_ids=[shop])
    with pytest.raises(AuthorizationError):
        resolve_punch_location(locations_repo, user_id=1, location_id=other)

    locations_repo.deactivate(shop)
    with pytest.raises(NotFoundError):
        resolve_punch_location(locations_repo, user_id=1, location_id=shop)
