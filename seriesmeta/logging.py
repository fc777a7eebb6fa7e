import logging
from concurrent_log_handler import ConcurrentRotatingFileHandler
from pathlib import Path
from typing import Optional

from seriesmeta.config import settings

LOGGER_NAME = "seriesmeta"

FORMATTER = logging.Formatter(
    '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)


class LogConfig:
    """
    Owns the handlers of the package logger.

    Every store, service and exception logs through a child of
    ``seriesmeta``, so configuring that one logger covers them all.
    Paths and level come from settings unless given explicitly.
    """

    def __init__(self, log_dir: Optional[Path] = None, log_file: Optional[str] = None):
        self.log_dir = Path(log_dir or settings.log_dir)
        self.log_file = log_file or settings.log_file
        self.logger = logging.getLogger(LOGGER_NAME)

    @property
    def log_path(self) -> Path:
        return self.log_dir / self.log_file

    def setup_logging(self, log_level: Optional[str] = None) -> logging.Logger:
        log_level = (log_level or settings.log_level).upper()
        self.log_dir.mkdir(parents=True, exist_ok=True)

        self.logger.setLevel(getattr(logging, log_level))

        # Re-running setup replaces handlers instead of stacking them
        for handler in list(self.logger.handlers):
            self.logger.removeHandler(handler)
            handler.close()

        # File locking keeps several processes sharing one log from clobbering it
        file_handler = ConcurrentRotatingFileHandler(
            filename=self.log_path,
            maxBytes=settings.log_max_bytes,
            backupCount=settings.log_backup_count,
            encoding="utf-8",
            use_gzip=True
        )
        console_handler = logging.StreamHandler()

        for handler in (file_handler, console_handler):
            handler.setFormatter(FORMATTER)
            self.logger.addHandler(handler)

        self.logger.debug(f"Logging to {self.log_path} at {log_level}")
        return self.logger

    def update_log_level(self, log_level: str):
        self.logger.setLevel(getattr(logging, log_level.upper()))
        self.logger.info(f"Log level updated to {log_level}")


log_config = LogConfig()


def configure_logging(log_level: Optional[str] = None) -> logging.Logger:
    """Apply the configured handlers and level to the package logger"""
    return log_config.setup_logging(log_level)
