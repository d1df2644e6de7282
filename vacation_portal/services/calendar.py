"""
Month grid for the vacations calendar.

The grid has 7 columns starting on Sunday. Day 1 is preceded by as many
blank cells as its weekday offset, so February 2024 (Feb 1 is a Thursday)
opens with 4 blanks followed by 29 day cells.
"""
import calendar
from datetime import date, timedelta
from typing import Iterable, List, Optional

from vacation_portal.core.config import settings
from vacation_portal.schemas.calendar import CalendarCell, CalendarEntry, CalendarMonth
from vacation_portal.schemas.vacation_request import VacationRequest

MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]
WEEKDAY_NAMES = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]


def first_of_month(day: date) -> date:
    return day.replace(day=1)


def days_in_month(month: date) -> int:
    return calendar.monthrange(month.year, month.month)[1]


def first_weekday_offset(month: date) -> int:
    """Blank cells before day 1 in a Sunday-first week (0 = Sunday)."""
    # date.weekday() is Monday-first
    return (first_of_month(month).weekday() + 1) % 7


def previous_month(month: date) -> date:
    return first_of_month(first_of_month(month) - timedelta(days=1))


def next_month(month: date) -> date:
    return first_of_month(first_of_month(month) + timedelta(days=31))


def vacations_on(day: date, vacations: Iterable[VacationRequest]) -> List[VacationRequest]:
    """Vacations whose inclusive [start_date, end_date] contains `day`."""
    return [vacation for vacation in vacations if vacation.covers(day)]


def _entry(vacation: VacationRequest) -> CalendarEntry:
    # Only the first name fits in a day cell
    label = vacation.user_name.split(" ")[0] if vacation.user_name else ""
    return CalendarEntry(
        vacation_id=vacation.id,
        user_name=vacation.user_name,
        label=label,
        status=vacation.status,
    )


def build_month(
    month: date,
    vacations: Iterable[VacationRequest],
    today: Optional[date] = None,
    max_entries: Optional[int] = None,
) -> CalendarMonth:
    """
    Lay out the calendar grid for the month containing `month`.

    Args:
        month: Any date inside the month to display
        vacations: Already loaded vacation requests; nothing is fetched here
        today: Date to flag as today, if it falls in this month
        max_entries: Entries shown per day before the overflow counter

    Returns:
        The month grid with leading blanks and one cell per day
    """
    if max_entries is None:
        max_entries = settings.CALENDAR_MAX_ENTRIES
    month = first_of_month(month)
    vacations = list(vacations)
    offset = first_weekday_offset(month)
    total_days = days_in_month(month)

    cells = [CalendarCell() for _ in range(offset)]
    for day_number in range(1, total_days + 1):
        current = month.replace(day=day_number)
        on_day = vacations_on(current, vacations)
        cells.append(
            CalendarCell(
                day=day_number,
                calendar_date=current,
                is_today=current == today,
                entries=[_entry(v) for v in on_day[:max_entries]],
                overflow=max(len(on_day) - max_entries, 0),
            )
        )

    return CalendarMonth(
        month=month,
        title=f"{MONTH_NAMES[month.month - 1]} {month.year}",
        days_in_month=total_days,
        first_weekday_offset=offset,
        weekday_names=WEEKDAY_NAMES,
        cells=cells,
    )
