import enum
from datetime import date

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class VacationStatus(str, enum.Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


# Propiedades compartidas
class VacationRequestBase(BaseModel):
    start_date: date
    end_date: date

    class Config:
        alias_generator = to_camel
        populate_by_name = True


# Propiedades para enviar en la creación.
# El orden de fechas se valida en el cliente antes de enviar, no aquí.
class VacationRequestCreate(VacationRequestBase):
    pass


# Propiedades devueltas por el backend
class VacationRequest(VacationRequestBase):
    id: int
    user_id: int
    user_name: str
    status: VacationStatus = VacationStatus.PENDING

    @property
    def days_requested(self) -> int:
        """Número de días solicitados, inclusivo en ambos extremos."""
        return (self.end_date - self.start_date).days + 1

    def covers(self, day: date) -> bool:
        """Indica si el día cae dentro de [start_date, end_date]."""
        return self.start_date <= day <= self.end_date
