from datetime import date
from typing import Optional

from pydantic import BaseModel, validator


class VacationFilter(BaseModel):
    """Valores activos de los filtros de la tabla de solicitudes."""
    employee: str = ""
    start: Optional[date] = None
    end: Optional[date] = None

    @validator("employee", pre=True)
    def none_is_empty(cls, v):
        return "" if v is None else v

    @validator("start", "end", pre=True)
    def blank_date_is_none(cls, v):
        if v == "":
            return None
        return v

    @property
    def is_empty(self) -> bool:
        return not self.employee and self.start is None and self.end is None
