"""Logging setup for applications using translatable models."""

import logging
import logging.handlers
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional, TextIO

# Per-logger levels applied by setup_logging
LOGGING_CONFIG = {
    "translatable": logging.INFO,
    "translatable.core": logging.INFO,
    "translatable.infra": logging.WARNING,

    # SQL echo is opt-in through debug
    "sqlalchemy": logging.WARNING,
    "sqlalchemy.engine": logging.WARNING,
}

CONSOLE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s - %(message)s"
FILE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s (%(filename)s:%(lineno)d) - %(message)s"


class ColoredFormatter(logging.Formatter):
    """Console formatter that colours the level name."""

    COLORS = {
        'DEBUG': '\033[36m',
        'INFO': '\033[32m',
        'WARNING': '\033[33m',
        'ERROR': '\033[31m',
        'CRITICAL': '\033[35m',
    }
    RESET = '\033[0m'

    def format(self, record: logging.LogRecord) -> str:
        original = record.levelname
        color = self.COLORS.get(original)
        if color:
            record.levelname = f"{color}{original}{self.RESET}"
        try:
            return super().format(record)
        finally:
            # other handlers see the plain name
            record.levelname = original


def _is_tty(stream: TextIO) -> bool:
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def setup_logging(log_file: bool = False, debug: bool = False, log_dir: Optional[Path] = None) -> None:
    """Replace the root handlers with a console handler and, optionally, a rotating file."""
    level = logging.DEBUG if debug else logging.INFO

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    stream = sys.stdout
    console_handler = logging.StreamHandler(stream)
    console_handler.setLevel(level)
    formatter_cls = ColoredFormatter if _is_tty(stream) else logging.Formatter
    console_handler.setFormatter(formatter_cls(CONSOLE_FORMAT, datefmt="%H:%M:%S"))
    root_logger.addHandler(console_handler)

    log_path = None
    if log_file:
        log_dir = Path(log_dir or "logs")
        log_dir.mkdir(parents=True, exist_ok=True)
        log_path = log_dir / f"translatable_{datetime.now().strftime('%Y%m%d')}.log"
        file_handler = logging.handlers.RotatingFileHandler(
            log_path,
            maxBytes=10*1024*1024,
            backupCount=5,
            encoding='utf-8'
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        root_logger.addHandler(file_handler)

    for logger_name, logger_level in LOGGING_CONFIG.items():
        if debug and logger_name.startswith("translatable"):
            logger_level = logging.DEBUG
        logging.getLogger(logger_name).setLevel(logger_level)

    logging.getLogger(__name__).info(
        f"Logging configured (console={logging.getLevelName(level)}, file={log_path or 'DISABLED'})"
    )
