"""Logging-Konfiguration (Console + rotierende Log-Datei)"""
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

# Externe Libraries, die auf INFO zu gesprächig sind
NOISY_LOGGERS = ('sqlalchemy.engine', 'sqlalchemy.pool', 'uvicorn.access')


def setup_logging(debug: bool = False, log_file: Optional[str] = "helferboerse.log") -> None:
    """
    Konfiguriert den Root-Logger mit Console- und optionalem File-Handler.

    Args:
        debug: Wenn True, wird DEBUG-Level verwendet, sonst INFO
        log_file: Pfad zur Log-Datei (None = nur Console)

    Die Log-Datei rotiert bei 10 MB, es werden 5 Backups behalten.
    Mehrfacher Aufruf ersetzt die vorhandenen Handler.
    """
    level = logging.DEBUG if debug else logging.INFO

    # Format: "2025-01-15 14:30:45 - app.services.task_service - INFO - Task 3 erstellt"
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    handlers: list[logging.Handler] = []

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    handlers.append(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            filename=log_file,
            maxBytes=10 * 1024 * 1024,  # 10 MB
            backupCount=5,
            encoding='utf-8'
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    for handler in handlers:
        root_logger.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    root_logger.info(f"Logging initialisiert (Level: {logging.getLevelName(level)})")
    if log_file:
        root_logger.info(f"Log-Datei: {Path(log_file).absolute()}")
