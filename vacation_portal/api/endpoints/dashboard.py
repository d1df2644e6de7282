"""Dashboard endpoints"""
from datetime import date
from typing import Any, Callable, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from vacation_portal.api.deps import get_api_client, get_current_session, get_today
from vacation_portal.client.api import ApiClient
from vacation_portal.schemas.dashboard import ConfirmationKind
from vacation_portal.schemas.filters import VacationFilter
from vacation_portal.schemas.session import Session
from vacation_portal.schemas.user import UserCreate
from vacation_portal.schemas.vacation_request import VacationRequestCreate
from vacation_portal.services.dashboard import DashboardViewModel

router = APIRouter()


def parse_month(month: Optional[str]) -> Optional[date]:
    """Parse a `YYYY-MM` query value into the first day of that month."""
    if not month:
        return None
    try:
        year, month_number = month.split("-")
        return date(int(year), int(month_number), 1)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="month must be formatted as YYYY-MM",
        )


async def get_view_model(
    session: Session = Depends(get_current_session),
    api: ApiClient = Depends(get_api_client),
    today: Callable[[], date] = Depends(get_today),
) -> DashboardViewModel:
    """
    Build the dashboard state for the current session and load it.

    Vacations are always loaded; users only for admins.
    """
    view_model = DashboardViewModel(api, session, today=today)
    await view_model.load()
    return view_model


def view_response(view_model: DashboardViewModel, status_code: int = status.HTTP_200_OK) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=jsonable_encoder(view_model.to_view()))


def get_filters(
    employee: Optional[str] = None,
    start: Optional[str] = None,
    end: Optional[str] = None,
) -> VacationFilter:
    """Build the table filters from the query string. Blank values mean no filter."""
    try:
        return VacationFilter(employee=employee, start=start, end=end)
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=jsonable_encoder(e.errors(include_url=False, include_context=False)),
        )


def require_admin(view_model: DashboardViewModel) -> None:
    if not view_model.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only administrators can manage users",
        )


@router.get("")
async def read_dashboard(
    filters: VacationFilter = Depends(get_filters),
    month: Optional[str] = Query(default=None, description="Calendar month as YYYY-MM"),
    view_model: DashboardViewModel = Depends(get_view_model),
) -> Any:
    """
    Get the dashboard: filtered vacation list, calendar month and,
    for admins, the user list.

    Args:
        filters: Employee substring and date bounds, blank when unused
        month: Calendar month to show, defaults to the current one
        view_model: Loaded dashboard state

    Returns:
        The dashboard view
    """
    view_model.set_filters(employee=filters.employee, start=filters.start, end=filters.end)
    calendar_month = parse_month(month)
    if calendar_month is not None:
        view_model.go_to_month(calendar_month)
    return view_response(view_model)


@router.post("/vacations")
async def create_vacation(
    request_in: VacationRequestCreate,
    view_model: DashboardViewModel = Depends(get_view_model),
) -> Any:
    """
    Submit a vacation request for the current user.

    Date rules are checked before anything reaches the backend. On
    failure the response is 400 and the view carries the alert.
    """
    view_model.open_vacation_form()
    if await view_model.create_vacation(request_in):
        return view_response(view_model, status.HTTP_201_CREATED)
    return view_response(view_model, status.HTTP_400_BAD_REQUEST)


@router.post("/users")
async def create_user(
    user_in: UserCreate,
    view_model: DashboardViewModel = Depends(get_view_model),
) -> Any:
    """
    Create a user account.

    Only accessible to administrators. Collaborators need a manager.
    """
    require_admin(view_model)
    view_model.open_user_form()
    if await view_model.create_user(user_in):
        return view_response(view_model, status.HTTP_201_CREATED)
    return view_response(view_model, status.HTTP_400_BAD_REQUEST)


@router.put("/vacations/{vacation_id}/approve")
async def approve_vacation(
    vacation_id: int,
    view_model: DashboardViewModel = Depends(get_view_model),
) -> Any:
    """Approve a pending request. Managers and admins only."""
    if await view_model.approve(vacation_id):
        return view_response(view_model)
    return view_response(view_model, status.HTTP_400_BAD_REQUEST)


@router.put("/vacations/{vacation_id}/reject")
async def reject_vacation(
    vacation_id: int,
    view_model: DashboardViewModel = Depends(get_view_model),
) -> Any:
    """Reject a pending request. Managers and admins only."""
    if await view_model.reject(vacation_id):
        return view_response(view_model)
    return view_response(view_model, status.HTTP_400_BAD_REQUEST)


@router.delete("/vacations/{vacation_id}")
async def delete_vacation(
    vacation_id: int,
    view_model: DashboardViewModel = Depends(get_view_model),
) -> Any:
    """
    Delete a vacation request.

    The DELETE itself is the explicit confirmation.
    """
    view_model.request_delete_vacation(vacation_id)
    if await view_model.confirm():
        return view_response(view_model)
    return view_response(view_model, status.HTTP_400_BAD_REQUEST)


@router.delete("/users/{user_id}")
async def delete_user(
    user_id: int,
    cascade: bool = False,
    view_model: DashboardViewModel = Depends(get_view_model),
) -> Any:
    """
    Delete a user account.

    If the user still owns vacation requests, the response is 409 with
    the cascade prompt unless `cascade=true` was given, in which case the
    requests are deleted one by one before the user.

    Args:
        user_id: ID of the user to delete
        cascade: Confirm deleting the user's vacation requests too
        view_model: Loaded dashboard state
    """
    require_admin(view_model)
    view_model.request_delete_user(user_id)
    if await view_model.confirm():
        return view_response(view_model)

    pending = view_model.pending_confirmation
    if pending is not None and pending.kind == ConfirmationKind.DELETE_USER_CASCADE:
        if not cascade:
            return view_response(view_model, status.HTTP_409_CONFLICT)
        if await view_model.confirm():
            return view_response(view_model)
    return view_response(view_model, status.HTTP_400_BAD_REQUEST)
