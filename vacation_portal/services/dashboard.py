"""
Dashboard view model.

Owns the in-memory copies of the vacation list and, for admins, the user
list. Every successful mutation is followed by a full reload of the affected
list: local state is never patched, so concurrent edits from elsewhere are
resolved by whatever the backend returns next.
"""
from datetime import date
from typing import Callable, List, Optional

from vacation_portal.client.api import ApiClient
from vacation_portal.client.exceptions import ApiError
from vacation_portal.core.logging import get_logger
from vacation_portal.schemas.calendar import CalendarMonth
from vacation_portal.schemas.dashboard import (
    ConfirmationKind,
    DashboardView,
    Notice,
    NoticeKind,
    PendingConfirmation,
    ViewerInfo
)
from vacation_portal.schemas.filters import VacationFilter
from vacation_portal.schemas.session import Session
from vacation_portal.schemas.user import Role, User, UserCreate
from vacation_portal.schemas.vacation_request import (
    VacationRequest,
    VacationRequestCreate,
    VacationStatus
)
from vacation_portal.services import calendar as calendar_grid
from vacation_portal.services.filters import filter_vacations
from vacation_portal.services.validation import (
    ValidationFailed,
    manager_required,
    validate_new_user,
    validate_vacation_dates
)

logger = get_logger(__name__)

LOGIN_ROUTE = "/login"

CONFIRM_DELETE_VACATION = "Delete this vacation?"
CONFIRM_DELETE_USER = "Delete this user?"
CONFIRM_DELETE_USER_CASCADE = (
    "This user has vacation requests. Delete the user and all of their vacation requests?"
)
CANNOT_DELETE_SELF_MESSAGE = "You cannot delete your own account"


class DashboardViewModel:
    """
    State and actions behind the dashboard page.

    Args:
        api: Backend client, bound to `session`
        session: Authenticated session, or None when logged out
        today: Callable returning the current date
        month: Any date inside the calendar month to show first
    """

    def __init__(
        self,
        api: ApiClient,
        session: Optional[Session],
        today: Callable[[], date] = date.today,
        month: Optional[date] = None,
    ):
        self.api = api
        self.session = session
        self._today = today

        self.vacations: List[VacationRequest] = []
        self.users: List[User] = []
        self.filters = VacationFilter()
        self.calendar_month = calendar_grid.first_of_month(month or today())

        self.show_vacation_form = False
        self.show_user_form = False
        self.pending_confirmation: Optional[PendingConfirmation] = None
        self.toast: Optional[Notice] = None
        self.alert: Optional[str] = None
        self.loading = False
        self.redirect_to: Optional[str] = None

    # Derived state

    @property
    def role(self) -> Optional[Role]:
        return self.session.role if self.session else None

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    @property
    def can_approve(self) -> bool:
        return self.role in (Role.ADMIN, Role.MANAGER)

    @property
    def show_employee_filter(self) -> bool:
        return self.session is not None and self.role != Role.COLLABORATOR

    @property
    def manager_options(self) -> List[User]:
        return [user for user in self.users if user.role == Role.MANAGER]

    @staticmethod
    def manager_required(role: Role) -> bool:
        return manager_required(role)

    @property
    def effective_filters(self) -> VacationFilter:
        if self.show_employee_filter:
            return self.filters
        return self.filters.model_copy(update={"employee": ""})

    @property
    def filtered_vacations(self) -> List[VacationRequest]:
        return filter_vacations(self.vacations, self.effective_filters)

    @property
    def calendar(self) -> CalendarMonth:
        return calendar_grid.build_month(
            self.calendar_month, self.filtered_vacations, today=self._today()
        )

    def can_review(self, vacation: VacationRequest) -> bool:
        return self.can_approve and vacation.status == VacationStatus.PENDING

    def _find_vacation(self, vacation_id: int) -> Optional[VacationRequest]:
        return next((v for v in self.vacations if v.id == vacation_id), None)

    # Loading

    async def load(self) -> bool:
        """
        Initial load of the page.

        Redirects to the login page when there is no session. Vacations are
        always fetched, users only for admins.
        """
        if self.session is None:
            self.redirect_to = LOGIN_ROUTE
            return False
        await self.load_vacations()
        if self.is_admin:
            await self.load_users()
        return True

    async def load_vacations(self) -> bool:
        try:
            self.vacations = await self.api.get_vacations()
        except ApiError as e:
            logger.error(f"Failed to load vacations: {e.message}", extra={"data": {"status": e.status_code}})
            return False
        return True

    async def load_users(self) -> bool:
        try:
            self.users = await self.api.get_users()
        except ApiError as e:
            logger.error(f"Failed to load users: {e.message}", extra={"data": {"status": e.status_code}})
            return False
        return True

    # Filters and calendar navigation

    def set_filters(self, employee: Optional[str] = None, start: Optional[date] = None,
                    end: Optional[date] = None) -> None:
        self.filters = VacationFilter(employee=employee, start=start, end=end)

    def clear_filters(self) -> None:
        self.filters = VacationFilter()

    def previous_month(self) -> None:
        self.calendar_month = calendar_grid.previous_month(self.calendar_month)

    def next_month(self) -> None:
        self.calendar_month = calendar_grid.next_month(self.calendar_month)

    def go_to_month(self, month: date) -> None:
        self.calendar_month = calendar_grid.first_of_month(month)

    # Forms

    def open_vacation_form(self) -> None:
        self.show_vacation_form = True

    def close_vacation_form(self) -> None:
        self.show_vacation_form = False

    def open_user_form(self) -> None:
        if self.is_admin:
            self.show_user_form = True

    def close_user_form(self) -> None:
        self.show_user_form = False

    async def create_vacation(self, fields: VacationRequestCreate) -> bool:
        """
        Submit a new vacation request for the current user.

        Returns:
            True if the request was created and the list reloaded
        """
        if self.loading:
            logger.warning("Vacation submission ignored, another request is in flight")
            return False
        try:
            validate_vacation_dates(fields.start_date, fields.end_date, self._today())
        except ValidationFailed as e:
            logger.info(f"Vacation form rejected: {e.message}")
            self.alert = e.message
            return False

        self.loading = True
        try:
            created = await self.api.create_vacation(fields)
        except ApiError as e:
            logger.error(f"Failed to create vacation: {e.message}", extra={"data": {"status": e.status_code}})
            self.alert = "Failed to create vacation"
            return False
        finally:
            self.loading = False

        logger.info(f"Vacation {created.id} created for user {created.user_id}")
        self.show_vacation_form = False
        await self.load_vacations()
        return True

    async def create_user(self, fields: UserCreate) -> bool:
        """
        Create a user account. Admin only.

        Returns:
            True if the user was created and the user list reloaded
        """
        if not self.is_admin:
            logger.warning("User creation refused for non-admin viewer")
            self.alert = "Only administrators can create users"
            return False
        if self.loading:
            logger.warning("User submission ignored, another request is in flight")
            return False
        try:
            validate_new_user(fields)
        except ValidationFailed as e:
            logger.info(f"User form rejected: {e.message}")
            self.alert = e.message
            return False

        self.loading = True
        try:
            created = await self.api.create_user(fields)
        except ApiError as e:
            logger.error(f"Failed to create user: {e.message}", extra={"data": {"status": e.status_code}})
            self.alert = "Failed to create user"
            return False
        finally:
            self.loading = False

        logger.info(f"User {created.id} created with role {created.role.value}")
        self.show_user_form = False
        await self.load_users()
        return True

    # Review

    async def approve(self, vacation_id: int) -> bool:
        return await self._review(vacation_id, approve=True)

    async def reject(self, vacation_id: int) -> bool:
        return await self._review(vacation_id, approve=False)

    async def _review(self, vacation_id: int, approve: bool) -> bool:
        action = "approve" if approve else "reject"
        vacation = self._find_vacation(vacation_id)
        if vacation is None or not self.can_review(vacation):
            logger.warning(f"Cannot {action} vacation {vacation_id} from this view")
            return False
        try:
            if approve:
                await self.api.approve_vacation(vacation_id)
            else:
                await self.api.reject_vacation(vacation_id)
        except ApiError as e:
            logger.error(f"Failed to {action} vacation {vacation_id}: {e.message}")
            self.alert = f"Failed to {action}"
            return False

        logger.info(f"Vacation {vacation_id} {action}d")
        await self.load_vacations()
        return True

    # Deletion (two steps: request, then confirm)

    def request_delete_vacation(self, vacation_id: int) -> PendingConfirmation:
        self.pending_confirmation = PendingConfirmation(
            kind=ConfirmationKind.DELETE_VACATION,
            target_id=vacation_id,
            message=CONFIRM_DELETE_VACATION,
        )
        return self.pending_confirmation

    def request_delete_user(self, user_id: int) -> Optional[PendingConfirmation]:
        if not self.is_admin:
            logger.warning("User deletion refused for non-admin viewer")
            self.alert = "Only administrators can delete users"
            return None
        self.pending_confirmation = PendingConfirmation(
            kind=ConfirmationKind.DELETE_USER,
            target_id=user_id,
            message=CONFIRM_DELETE_USER,
        )
        return self.pending_confirmation

    def cancel(self) -> None:
        self.pending_confirmation = None

    async def confirm(self) -> bool:
        """
        Run the action waiting for confirmation.

        Deleting a user who still owns vacation requests does not fail
        outright: the confirmation is replaced by a cascade prompt and this
        returns False until that prompt is confirmed too.
        """
        pending = self.pending_confirmation
        if pending is None:
            return False
        self.pending_confirmation = None

        if pending.kind == ConfirmationKind.DELETE_VACATION:
            return await self._delete_vacation(pending.target_id)
        if pending.kind == ConfirmationKind.DELETE_USER:
            return await self._delete_user(pending.target_id)
        return await self._delete_user_cascade(pending.target_id)

    async def _delete_vacation(self, vacation_id: int) -> bool:
        try:
            await self.api.delete_vacation(vacation_id)
        except ApiError as e:
            logger.error(f"Failed to delete vacation {vacation_id}: {e.message}")
            self.toast = Notice(kind=NoticeKind.ERROR, message="Failed to delete vacation")
            return False

        await self.load_vacations()
        self.toast = Notice(kind=NoticeKind.SUCCESS, message="Vacation deleted")
        return True

    async def _delete_user(self, user_id: int) -> bool:
        try:
            await self.api.delete_user(user_id)
        except ApiError as e:
            if e.cannot_delete_self:
                logger.info(f"Refused to delete own account {user_id}")
                self.alert = CANNOT_DELETE_SELF_MESSAGE
                return False
            if e.has_vacations:
                logger.info(f"User {user_id} has vacation requests, asking to cascade")
                self.pending_confirmation = PendingConfirmation(
                    kind=ConfirmationKind.DELETE_USER_CASCADE,
                    target_id=user_id,
                    message=CONFIRM_DELETE_USER_CASCADE,
                )
                return False
            logger.error(f"Failed to delete user {user_id}: {e.message}")
            self.toast = Notice(kind=NoticeKind.ERROR, message="Failed to delete user")
            return False

        await self.load_users()
        self.toast = Notice(kind=NoticeKind.SUCCESS, message="User deleted")
        return True

    async def _delete_user_cascade(self, user_id: int) -> bool:
        try:
            owned = [v for v in await self.api.get_vacations() if v.user_id == user_id]
            for vacation in owned:
                await self.api.delete_vacation(vacation.id)
            await self.api.delete_user(user_id)
        except ApiError as e:
            if e.cannot_delete_self:
                self.alert = CANNOT_DELETE_SELF_MESSAGE
            else:
                logger.error(f"Cascade delete of user {user_id} failed: {e.message}")
                self.toast = Notice(kind=NoticeKind.ERROR, message="Failed to delete user")
            return False

        logger.info(
            f"User {user_id} deleted with {len(owned)} vacation requests",
            extra={"data": {"user_id": user_id, "vacations": len(owned)}}
        )
        await self.load_vacations()
        await self.load_users()
        self.toast = Notice(kind=NoticeKind.SUCCESS, message="User and vacations deleted")
        return True

    # Messages and session

    def dismiss_toast(self) -> None:
        self.toast = None

    def dismiss_alert(self) -> None:
        self.alert = None

    def logout(self) -> None:
        if self.session is not None:
            logger.info(f"Logout for {self.session.email}")
        self.session = None
        self.api.session = None
        self.vacations = []
        self.users = []
        self.pending_confirmation = None
        self.redirect_to = LOGIN_ROUTE

    def to_view(self) -> DashboardView:
        if self.session is None:
            raise ValueError("No session to render a dashboard for")
        return DashboardView(
            viewer=ViewerInfo(
                id=self.session.user_id,
                name=self.session.name,
                email=self.session.email,
                role=self.session.role.value,
            ),
            filters=self.effective_filters,
            vacations=self.filtered_vacations,
            total_vacations=len(self.vacations),
            users=self.users,
            manager_options=self.manager_options,
            calendar=self.calendar,
            can_approve=self.can_approve,
            is_admin=self.is_admin,
            show_employee_filter=self.show_employee_filter,
            show_vacation_form=self.show_vacation_form,
            show_user_form=self.show_user_form,
            loading=self.loading,
            pending_confirmation=self.pending_confirmation,
            toast=self.toast,
            alert=self.alert,
        )
