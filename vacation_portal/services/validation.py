"""Client-side form rules checked before any request is sent."""
from datetime import date

from vacation_portal.schemas.user import Role, UserCreate


class ValidationFailed(ValueError):
    """A form was rejected locally. The message is shown to the user."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class VacationDatesError(ValidationFailed):
    pass


class MissingManagerError(ValidationFailed):
    pass


def validate_vacation_dates(start_date: date, end_date: date, today: date) -> None:
    """
    Check the dates of a new vacation request.

    Raises:
        VacationDatesError: If the end is before the start or the start is in the past
    """
    if end_date < start_date:
        raise VacationDatesError("End date must be on or after the start date")
    if start_date < today:
        raise VacationDatesError("Start date cannot be in the past")


def manager_required(role: Role) -> bool:
    """Whether the manager field is required for `role`."""
    return role == Role.COLLABORATOR


def validate_new_user(fields: UserCreate) -> None:
    """
    Raises:
        MissingManagerError: If a collaborator has no manager assigned
    """
    if manager_required(fields.role) and fields.manager_id is None:
        raise MissingManagerError("Collaborators must have a manager assigned")
