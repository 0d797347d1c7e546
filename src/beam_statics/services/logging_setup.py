# path: src/beam_statics/services/logging_setup.py
from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def setup_logging(
    log_dir: str = "logs",
    log_name: str = "beam_statics.log",
    level: int = logging.INFO,
    console: bool = True,
) -> logging.Logger:
    """
    Configura el logger raíz del paquete ("beam_statics") una sola vez:
    archivo rotativo (2 MB x 3) y, opcionalmente, salida por consola.
    Los módulos usan logging.getLogger(__name__) y heredan estos handlers.
    """
    logger = logging.getLogger("beam_statics")
    logger.setLevel(level)

    # Evitar duplicar handlers si se llama más de una vez
    if logger.handlers:
        return logger

    os.makedirs(log_dir, exist_ok=True)
    log_path = os.path.join(log_dir, log_name)
    fmt = logging.Formatter(LOG_FORMAT)

    handlers = [RotatingFileHandler(log_path, maxBytes=2_000_000, backupCount=3, encoding="utf-8")]
    if console:
        handlers.append(logging.StreamHandler())

    for h in handlers:
        h.setLevel(level)
        h.setFormatter(fmt)
        logger.addHandler(h)

    logger.info("Logging inicializado. Archivo: %s", log_path)
    return logger
