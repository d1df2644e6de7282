from typing import Iterable, List

from vacation_portal.schemas.filters import VacationFilter
from vacation_portal.schemas.vacation_request import VacationRequest


def matches(vacation: VacationRequest, filters: VacationFilter) -> bool:
    """
    Check a single row against the active filters.

    Empty filter values match everything. The employee filter is a
    case-insensitive substring match on the requester's name; the date
    filters bound the start date from below and the end date from above.
    """
    if filters.employee and filters.employee.lower() not in vacation.user_name.lower():
        return False
    if filters.start is not None and vacation.start_date < filters.start:
        return False
    if filters.end is not None and vacation.end_date > filters.end:
        return False
    return True


def filter_vacations(
    vacations: Iterable[VacationRequest], filters: VacationFilter
) -> List[VacationRequest]:
    """Return the rows passing `filters`, keeping their relative order."""
    return [vacation for vacation in vacations if matches(vacation, filters)]
