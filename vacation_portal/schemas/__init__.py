from vacation_portal.schemas.session import LoginRequest, Session
from vacation_portal.schemas.user import Role, User, UserCreate
from vacation_portal.schemas.vacation_request import (
    VacationRequest,
    VacationRequestCreate,
    VacationStatus
)
from vacation_portal.schemas.filters import VacationFilter
from vacation_portal.schemas.calendar import (
    CalendarCell,
    CalendarEntry,
    CalendarMonth
)
from vacation_portal.schemas.dashboard import (
    ConfirmationKind,
    DashboardView,
    Notice,
    NoticeKind,
    PendingConfirmation,
    ViewerInfo
)
