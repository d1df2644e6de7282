"""Tests for the client-side form rules."""
from datetime import date

import pytest

from vacation_portal.schemas.user import Role, UserCreate
from vacation_portal.services.validation import (
    MissingManagerError,
    VacationDatesError,
    ValidationFailed,
    manager_required,
    validate_new_user,
    validate_vacation_dates
)

TODAY = date(2024, 3, 10)


def test_valid_dates_pass():
    validate_vacation_dates(date(2024, 3, 10), date(2024, 3, 10), TODAY)
    validate_vacation_dates(date(2024, 3, 11), date(2024, 3, 20), TODAY)


def test_end_before_start_is_rejected():
    with pytest.raises(VacationDatesError) as exc_info:
        validate_vacation_dates(date(2024, 3, 20), date(2024, 3, 15), TODAY)
    assert "end date" in exc_info.value.message.lower()


def test_start_in_the_past_is_rejected():
    with pytest.raises(VacationDatesError) as exc_info:
        validate_vacation_dates(date(2024, 3, 9), date(2024, 3, 15), TODAY)
    assert "past" in exc_info.value.message


@pytest.mark.parametrize("role, required", [
    (Role.COLLABORATOR, True),
    (Role.MANAGER, False),
    (Role.ADMIN, False),
])
def test_manager_required_depends_only_on_role(role, required):
    assert manager_required(role) is required


def _user(role: Role, manager_id=None) -> UserCreate:
    return UserCreate(
        email="new.user@taskflow.com",
        password="secret123",
        name="New User",
        role=role,
        manager_id=manager_id,
    )


def test_collaborator_without_manager_is_rejected():
    with pytest.raises(MissingManagerError):
        validate_new_user(_user(Role.COLLABORATOR))


def test_collaborator_with_empty_manager_field_is_rejected():
    user = UserCreate.model_validate({
        "email": "new.user@taskflow.com",
        "password": "secret123",
        "name": "New User",
        "role": "COLLABORATOR",
        "managerId": "",
    })

    assert user.manager_id is None
    with pytest.raises(ValidationFailed):
        validate_new_user(user)


def test_collaborator_with_manager_passes():
    validate_new_user(_user(Role.COLLABORATOR, manager_id=2))


@pytest.mark.parametrize("role", [Role.MANAGER, Role.ADMIN])
@pytest.mark.parametrize("manager_id", [None, 2])
def test_managers_and_admins_pass_with_any_manager(role, manager_id):
    validate_new_user(_user(role, manager_id=manager_id))
