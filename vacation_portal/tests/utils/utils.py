import random
import string
from datetime import date, timedelta
from typing import Dict

from vacation_portal.core.config import settings
from vacation_portal.core.security import create_session_token
from vacation_portal.schemas.session import Session


def random_lower_string(length: int = 32) -> str:
    """
    Genera una cadena aleatoria de letras minúsculas.

    Args:
        length: Longitud de la cadena a generar

    Returns:
        Cadena aleatoria de letras minúsculas
    """
    letters = string.ascii_lowercase
    return "".join(random.choice(letters) for _ in range(length))


def random_email() -> str:
    """
    Genera una dirección de correo electrónico aleatoria.

    Returns:
        Dirección de correo electrónico aleatoria
    """
    return f"{random_lower_string(8)}@{random_lower_string(6)}.com"


def days_from_today(days: int) -> date:
    return date.today() + timedelta(days=days)


def session_cookie_headers(session: Session) -> Dict[str, str]:
    """
    Cabecera Cookie con la sesión firmada, como la enviaría el navegador.

    Args:
        session: Sesión emitida por el backend

    Returns:
        Diccionario de cabeceras para el cliente HTTP
    """
    return {"Cookie": f"{settings.SESSION_COOKIE_NAME}={create_session_token(session)}"}
