"""
Configuração de logging.

Toda linha de log leva o X-Request-ID da requisição em andamento (ou "-"
fora de requisições, como em tasks Celery).
"""
import logging
import sys
from contextvars import ContextVar
from pathlib import Path
from football_hub.core.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

request_id_var: ContextVar[str] = ContextVar("request_id", default="-")


class RequestIdFilter(logging.Filter):
    """Injeta request_id no registro de log"""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get()
        return True


def setup_logging():
    """Configura logging da aplicação (stdout e, fora de debug, arquivo)"""
    handlers = [logging.StreamHandler(sys.stdout)]

    if settings.LOG_TO_FILE and not settings.DEBUG:
        log_path = Path(settings.LOG_FILE)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    request_filter = RequestIdFilter()
    for handler in handlers:
        handler.addFilter(request_filter)

    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        handlers=handlers,
    )

    # Bibliotecas barulhentas
    for name in ("uvicorn.access", "sqlalchemy.engine", "httpx"):
        logging.getLogger(name).setLevel(logging.WARNING)

    logger = logging.getLogger(__name__)
    logger.info(f"Logging configurado (nível {settings.LOG_LEVEL})")
    return logger
