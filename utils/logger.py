import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

DEFAULT_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'


def setup_logger(
    log_file: Optional[str] = "logs/dashboard.log",
    level: str = "INFO",
    fmt: str = DEFAULT_FORMAT,
    datefmt: Optional[str] = None,
    max_bytes: int = 10_000_000,
    backup_count: int = 5,
):
    logger = logging.getLogger()
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    formatter = logging.Formatter(fmt, datefmt=datefmt)

    # повторный вызов не должен дублировать хендлеры
    for handler in list(logger.handlers):
        if getattr(handler, "_dashboard_handler", False):
            logger.removeHandler(handler)
            handler.close()

    console = logging.StreamHandler()
    console.setFormatter(formatter)
    console._dashboard_handler = True
    logger.addHandler(console)

    if log_file:
        Path(log_file).parent.mkdir(exist_ok=True, parents=True)
        handler = RotatingFileHandler(log_file, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8")
        handler.setFormatter(formatter)
        handler._dashboard_handler = True
        logger.addHandler(handler)
    return logger
