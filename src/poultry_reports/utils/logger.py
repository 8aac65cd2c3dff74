# utils/logger.py
"""
Package logging: one shared file handler under config.LOG_DIR plus a console
handler. Levels and paths come from Config, so .env is only read there.
"""
import logging
from pathlib import Path

from poultry_reports.utils.config import config

Path(config.LOG_DIR).mkdir(parents=True, exist_ok=True)

formatter = logging.Formatter(
    fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(filename)s:%(lineno)d | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S"
)

file_handler = logging.FileHandler(config.LOG_FILE, encoding="utf-8")
file_handler.setLevel(config.LOG_LEVEL)
file_handler.setFormatter(formatter)

# Console only shows INFO+ regardless of LOG_LEVEL
console_handler = logging.StreamHandler()
console_handler.setLevel(logging.INFO)
console_handler.setFormatter(formatter)


def get_logger(name: str = "poultry_reports") -> logging.Logger:
    """
    Logger for a package module, e.g. get_logger(__name__).

    Handlers are attached to the "poultry_reports" root logger only; module
    loggers propagate to it, so records are written once.
    """
    root = logging.getLogger("poultry_reports")
    if not root.handlers:
        root.setLevel(config.LOG_LEVEL)
        root.addHandler(file_handler)
        root.addHandler(console_handler)

    return logging.getLogger(name)
