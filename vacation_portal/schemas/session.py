from pydantic import BaseModel
from pydantic.alias_generators import to_camel

from vacation_portal.schemas.user import Role


class LoginRequest(BaseModel):
    """
    Credenciales enviadas a POST /auth/login.
    """
    email: str
    password: str


class Session(BaseModel):
    """
    Respuesta del login: token bearer opaco y datos del usuario autenticado.

    Vive mientras dure la sesión del navegador y se destruye en el logout.
    """
    token: str
    user_id: int
    email: str
    name: str
    role: Role

    class Config:
        alias_generator = to_camel
        populate_by_name = True

    @property
    def authorization_header(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}
