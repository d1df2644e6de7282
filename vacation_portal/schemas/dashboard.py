import enum
from typing import List, Optional

from pydantic import BaseModel

from vacation_portal.schemas.calendar import CalendarMonth
from vacation_portal.schemas.filters import VacationFilter
from vacation_portal.schemas.user import User
from vacation_portal.schemas.vacation_request import VacationRequest


class NoticeKind(str, enum.Enum):
    SUCCESS = "success"
    ERROR = "error"


class Notice(BaseModel):
    """Mensaje transitorio (toast) mostrado tras una acción."""
    kind: NoticeKind
    message: str


class ConfirmationKind(str, enum.Enum):
    DELETE_VACATION = "delete_vacation"
    DELETE_USER = "delete_user"
    DELETE_USER_CASCADE = "delete_user_cascade"


class PendingConfirmation(BaseModel):
    """Acción destructiva a la espera de confirmación explícita."""
    kind: ConfirmationKind
    target_id: int
    message: str


class ViewerInfo(BaseModel):
    id: int
    name: str
    email: str
    role: str


class DashboardView(BaseModel):
    """
    Instantánea serializable del dashboard.

    Es lo que devuelven las rutas del dashboard: la lista ya filtrada,
    el calendario del mes visible y el estado transitorio de la UI.
    """
    viewer: ViewerInfo
    filters: VacationFilter
    vacations: List[VacationRequest]
    total_vacations: int
    users: List[User]
    manager_options: List[User]
    calendar: CalendarMonth
    can_approve: bool
    is_admin: bool
    show_employee_filter: bool
    show_vacation_form: bool
    show_user_form: bool
    loading: bool
    pending_confirmation: Optional[PendingConfirmation] = None
    toast: Optional[Notice] = None
    alert: Optional[str] = None
