# app/utils/logger.py

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from app.config.settings import LOG_DIR as SETTINGS_LOG_DIR, LOG_LEVEL

# Caminho da pasta logs/
BASE_DIR = Path(__file__).resolve().parent.parent
LOG_DIR = Path(SETTINGS_LOG_DIR) if SETTINGS_LOG_DIR else BASE_DIR / "logs"
LOG_DIR.mkdir(parents=True, exist_ok=True)

# Instância do logger
logger = logging.getLogger("app_logger")
logger.setLevel(getattr(logging, LOG_LEVEL, logging.INFO))


class PrometheusLogHandler(logging.Handler):
    """Handler customizado para registrar logs nas métricas Prometheus."""

    def emit(self, record):
        from app.utils.prometheus_metrics import record_log
        record_log(record.levelname)


# Evita duplicar handlers se importar várias vezes
if not logger.handlers:
    # Formatação
    formatter = logging.Formatter("[%(asctime)s] [%(levelname)s] %(name)s: %(message)s")

    # Handler para arquivo com rotação
    file_handler = RotatingFileHandler(
        filename=LOG_DIR / "app.log",
        maxBytes=5 * 1024 * 1024,
        backupCount=3,
        encoding="utf-8"
    )
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    # Handler opcional para console
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    logger.addHandler(PrometheusLogHandler())
