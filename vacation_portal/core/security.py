from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import jwt
from jose.exceptions import JWTError
from pydantic import ValidationError

from vacation_portal.core.config import settings
from vacation_portal.schemas.session import Session


def create_session_token(
    session: Session, expires_delta: Optional[timedelta] = None
) -> str:
    """Firma la sesión del backend en un JWT para la cookie del navegador.

    Args:
        session: Sesión devuelta por el login del backend.
        expires_delta: Tiempo de vida de la cookie.

    Returns:
        El token JWT codificado.
    """
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(
            minutes=settings.SESSION_EXPIRE_MINUTES
        )
    to_encode = session.model_dump(mode="json")
    to_encode.update({"exp": expire, "sub": str(session.user_id)})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def get_session_from_token(token: str) -> Session:
    """Reconstruye la sesión a partir del JWT de la cookie.

    Args:
        token: Token JWT codificado.

    Returns:
        La sesión con el token bearer del backend.

    Raises:
        JWTError: Si el token es inválido, ha expirado o no contiene una sesión.
    """
    payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    payload.pop("exp", None)
    payload.pop("sub", None)
    try:
        return Session.model_validate(payload)
    except ValidationError as e:
        raise JWTError("Token no contiene una sesión válida") from e
