import json
import secrets
from typing import Annotated, Any, Dict, Optional, List
from pydantic import validator, AnyHttpUrl

from pydantic_settings import BaseSettings, NoDecode

class Settings(BaseSettings):
    # Información del proyecto
    PROJECT_NAME: str = "Vacation Portal"
    VERSION: str = "1.0.0"

    # Entorno (development/staging/production)
    ENVIRONMENT: str = "production"

    # Backend remoto que expone /auth, /users y /vacations
    API_URL: str = "http://localhost:8080/api"
    # Sin timeout explícito: una petición colgada deja la UI en estado de carga
    API_TIMEOUT: Optional[float] = None

    @validator("API_URL", pre=True)
    def strip_trailing_slash(cls, v: Optional[str]) -> str:
        if not v:
            raise ValueError("API_URL is required")
        return v.rstrip("/")

    # Configuración de seguridad
    SECRET_KEY: str = secrets.token_urlsafe(32)
    # Generación por defecto de clave segura en caso de que no se proporcione
    @validator("SECRET_KEY", pre=True, always=True)
    def set_secret_key(cls, v: Optional[str], values: Dict[str, Any]) -> str:
        if not v or len(v) < 32:
            # Warning: Secret key not defined or very weak
            if values.get("ENVIRONMENT") == "production":
                raise ValueError("SECRET_KEY should be configured in production with at least 32 characters")
            # For development/staging, generate a default key (not recommended for production)
            return secrets.token_urlsafe(32)
        return v

    # Cookie de sesión firmada (JWT)
    SESSION_COOKIE_NAME: str = "vacation_session"
    SESSION_COOKIE_SECURE: bool = False
    SESSION_EXPIRE_MINUTES: int = 60 * 8  # una jornada laboral
    ALGORITHM: str = "HS256"

    # Entradas visibles por día en el calendario antes del contador "+N"
    CALENDAR_MAX_ENTRIES: int = 3

    # Opciones de CORS (Cross-Origin Resource Sharing)
    # Lista de orígenes permitidos para conectarse al dashboard
    # Acepta JSON o una lista separada por comas, sin decodificar antes del validador
    BACKEND_CORS_ORIGINS: Annotated[List[AnyHttpUrl], NoDecode] = []

    @validator("BACKEND_CORS_ORIGINS", pre=True)
    def assemble_cors_origins(cls, v: str | list[str]) -> list[str]:
        if isinstance(v, str) and not v.startswith("["):
            return [i.strip() for i in v.split(",") if i.strip()]
        elif isinstance(v, str):
            return json.loads(v)
        elif isinstance(v, list):
            return v
        raise ValueError(v)

    # Configuración de logging
    LOG_LEVEL: str = "info"
    LOG_DIR: str = "logs"

    class Config:
        case_sensitive = True
        env_file = ".env"  # Habilitar carga desde archivo .env
        env_file_encoding = "utf-8"

settings = Settings()
