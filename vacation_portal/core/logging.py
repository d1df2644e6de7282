import logging
import logging.handlers
import os
import sys
import json
from pathlib import Path

from vacation_portal.core.config import settings

# Configuración básica de niveles de logging
LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}

# Directorio para los logs
LOG_DIR = Path(os.getenv("LOG_DIR", settings.LOG_DIR))
LOG_DIR.mkdir(exist_ok=True, parents=True)

# Formatos de log
CONSOLE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s"

# Caché de loggers ya configurados
_loggers = {}

# Determinar el nivel de log global a partir de la configuración
LOG_LEVEL = LOG_LEVELS.get(settings.LOG_LEVEL.lower(), logging.INFO)


class JsonFormatter(logging.Formatter):
    """Formatea cada registro como una línea JSON"""

    def format(self, record):
        log_data = {
            "timestamp": self.formatTime(record, "%Y-%m-%d %H:%M:%S"),
            "name": record.name,
            "level": record.levelname,
            "message": record.getMessage(),
            "path": f"{record.pathname}:{record.lineno}"
        }

        # Añadir los campos extra si existen
        data = getattr(record, "data", None)
        if isinstance(data, dict):
            log_data.update(data)

        # Añadir información de excepción si existe
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


def get_console_handler():
    """Crea un handler para logs en consola"""
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    return console_handler

def get_file_handler(log_file):
    """Crea un handler para logs en archivo con rotación"""
    file_path = LOG_DIR / log_file
    file_handler = logging.handlers.RotatingFileHandler(
        filename=file_path,
        maxBytes=10 * 1024 * 1024,  # 10 MB
        backupCount=5,
        encoding="utf8"
    )
    file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
    return file_handler

def get_json_file_handler(log_file="portal.json.log"):
    """Crea un handler para logs en formato JSON con rotación"""
    json_path = LOG_DIR / log_file
    json_handler = logging.handlers.RotatingFileHandler(
        filename=json_path,
        maxBytes=10 * 1024 * 1024,  # 10 MB
        backupCount=5,
        encoding="utf8"
    )
    json_handler.setFormatter(JsonFormatter())
    return json_handler

class JsonAdapter(logging.LoggerAdapter):
    """Adaptador para añadir campos extra a los logs en formato JSON"""
    def process(self, msg, kwargs):
        extra = kwargs.get('extra', {})
        if extra:
            kwargs["extra"] = extra
        return msg, kwargs

def get_logger(name):
    """
    Obtiene o crea un logger con el nombre especificado.

    Args:
        name: Nombre del módulo o componente para el logger

    Returns:
        Un logger configurado
    """
    # Si ya tenemos este logger configurado, lo devolvemos
    if name in _loggers:
        return _loggers[name]

    # Obtener el nivel de log de la variable de entorno o usar INFO por defecto
    log_level_name = os.getenv("LOG_LEVEL", "info").lower()
    log_level = LOG_LEVELS.get(log_level_name, logging.INFO)

    logger = logging.getLogger(name)
    logger.setLevel(log_level)

    # Limpiar handlers existentes
    if logger.handlers:
        logger.handlers.clear()

    logger.addHandler(get_console_handler())
    logger.addHandler(get_file_handler(f"{name.split('.')[-1]}.log"))
    logger.addHandler(get_json_file_handler(f"{name.split('.')[-1]}.json.log"))

    # Evitar propagación para prevenir logs duplicados
    logger.propagate = False

    adapter = JsonAdapter(logger, {})

    _loggers[name] = adapter
    return adapter

def _setup_library_logging(name, log_file):
    library_logger = logging.getLogger(name)
    library_logger.setLevel(LOG_LEVEL)
    if library_logger.handlers:
        library_logger.handlers.clear()
    for handler in [get_console_handler(), get_file_handler(log_file)]:
        library_logger.addHandler(handler)
    library_logger.propagate = False

def setup_fastapi_logging():
    """Configura el logging para FastAPI"""
    _setup_library_logging("fastapi", "fastapi.log")

def setup_uvicorn_logging():
    """Configura el logging para Uvicorn"""
    _setup_library_logging("uvicorn", "uvicorn.log")

def setup_httpx_logging():
    """Configura el logging para las peticiones salientes de httpx"""
    _setup_library_logging("httpx", "httpx.log")

def setup_logging(log_level=None):
    """
    Configura todos los loggers principales del sistema

    Args:
        log_level: Nivel de logging opcional (debug, info, warning, error, critical)
    """
    global LOG_LEVEL

    if log_level:
        os.environ["LOG_LEVEL"] = log_level
        LOG_LEVEL = LOG_LEVELS.get(log_level.lower(), logging.INFO)
        # Los loggers cacheados conservan su nivel anterior
        for adapter in _loggers.values():
            adapter.logger.setLevel(LOG_LEVEL)

    LOG_DIR.mkdir(exist_ok=True, parents=True)

    root_logger = logging.getLogger()
    root_logger.setLevel(LOG_LEVEL)

    if root_logger.handlers:
        root_logger.handlers.clear()

    root_logger.addHandler(get_console_handler())
    root_logger.addHandler(get_file_handler("portal.log"))

    setup_fastapi_logging()
    setup_uvicorn_logging()
    setup_httpx_logging()

    portal_logger = get_logger("vacation_portal")
    portal_logger.info(f"Logging configurado con nivel: {logging.getLevelName(LOG_LEVEL)}")

    return portal_logger

# Configurar logging al importar el módulo
logger = setup_logging()
