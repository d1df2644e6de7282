import enum
from typing import Optional

from pydantic import BaseModel, EmailStr, validator
from pydantic.alias_generators import to_camel


class Role(str, enum.Enum):
    ADMIN = "ADMIN"
    MANAGER = "MANAGER"
    COLLABORATOR = "COLLABORATOR"


# Propiedades compartidas
class UserBase(BaseModel):
    email: EmailStr
    name: str
    role: Role = Role.COLLABORATOR
    manager_id: Optional[int] = None

    # El formulario envía "" cuando no se elige manager
    @validator("manager_id", pre=True)
    def empty_manager_is_none(cls, v):
        if v == "":
            return None
        return v

    class Config:
        alias_generator = to_camel
        populate_by_name = True


# Propiedades para enviar en la creación
class UserCreate(UserBase):
    password: str


# Propiedades devueltas por el backend
class User(UserBase):
    id: int
