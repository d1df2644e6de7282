from datetime import date
from typing import List, Optional

from pydantic import BaseModel

from vacation_portal.schemas.vacation_request import VacationStatus


class CalendarEntry(BaseModel):
    vacation_id: int
    user_name: str
    label: str
    status: VacationStatus


class CalendarCell(BaseModel):
    # day is None for the leading blanks and the padding of the last week
    day: Optional[int] = None
    calendar_date: Optional[date] = None
    is_today: bool = False
    entries: List[CalendarEntry] = []
    overflow: int = 0

    @property
    def is_blank(self) -> bool:
        return self.day is None

    @property
    def vacation_count(self) -> int:
        return len(self.entries) + self.overflow


class CalendarMonth(BaseModel):
    month: date
    title: str
    days_in_month: int
    first_weekday_offset: int
    weekday_names: List[str]
    cells: List[CalendarCell]

    @property
    def day_cells(self) -> List[CalendarCell]:
        return [cell for cell in self.cells if not cell.is_blank]

    @property
    def weeks(self) -> List[List[CalendarCell]]:
        """Cells grouped in rows of 7, padding the last row with blanks."""
        cells = list(self.cells)
        while len(cells) % 7:
            cells.append(CalendarCell())
        return [cells[i:i + 7] for i in range(0, len(cells), 7)]

    def cell_for(self, day: int) -> CalendarCell:
        return self.cells[self.first_weekday_offset + day - 1]
