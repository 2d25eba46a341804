"""
Logging Configuration

Sets up the "table_explorer" logger with a console handler and daily rotated,
zipped log files (app.log for everything, error.log for errors only).
"""

import logging
import logging.handlers
import sys
import zipfile
import os
from pathlib import Path
from datetime import datetime
from typing import Optional, Union

from table_explorer.config.settings import settings

LOGGER_NAME = "table_explorer"

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s'


class ZipRotatingFileHandler(logging.handlers.TimedRotatingFileHandler):
    """
    Daily rotating file handler that zips the file it just rotated and
    keeps at most ``backupCount`` archives.
    """

    def __init__(self, filename, when='midnight', interval=1, backupCount=30,
                 encoding='utf-8', delay=False, utc=False, atTime=None):
        super().__init__(
            filename=filename,
            when=when,
            interval=interval,
            backupCount=backupCount,
            encoding=encoding,
            delay=delay,
            utc=utc,
            atTime=atTime
        )

    def doRollover(self):
        if self.stream:
            self.stream.close()
            self.stream = None

        super().doRollover()

        if self.backupCount > 0:
            self._zip_rotated_files()
            self._cleanup_old_zips()

    def _zip_rotated_files(self):
        """Compress every plain rotated file (app.log.2024-01-15) next to the base log."""
        base_path = Path(self.baseFilename)
        for rotated_file in base_path.parent.glob(f"{base_path.name}.*"):
            if rotated_file.suffix == ".zip":
                continue
            zip_filename = f"{rotated_file}.zip"
            try:
                with zipfile.ZipFile(zip_filename, 'w', zipfile.ZIP_DEFLATED) as zipf:
                    zipf.write(str(rotated_file), rotated_file.name)
                os.remove(str(rotated_file))
            except OSError as e:
                # Logging must not take the process down
                print(f"Warning: Failed to zip log file {rotated_file}: {e}")

    def _cleanup_old_zips(self):
        """Remove archives beyond backupCount, newest first."""
        base_path = Path(self.baseFilename)
        zip_files = sorted(base_path.parent.glob(f"{base_path.name}.*.zip"), reverse=True)
        for old_zip in zip_files[self.backupCount:]:
            try:
                old_zip.unlink()
            except OSError:
                pass


def setup_logger(
    name: str = LOGGER_NAME,
    level: Union[int, str] = logging.INFO,
    log_dir: Optional[Union[str, Path]] = None,
    log_to_console: bool = True,
    log_to_file: bool = True,
    retention_days: int = 30
) -> logging.Logger:
    """
    Set up the application logger.

    Args:
        name: Logger name
        level: Logging level (int or name such as "DEBUG")
        log_dir: Directory for log files (default: logs/ at the project root)
        log_to_console: Whether to log to stdout
        log_to_file: Whether to write app.log / error.log
        retention_days: Days of zipped logs to keep

    Returns:
        Configured logger instance
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Avoid adding handlers multiple times
    if logger.handlers:
        return logger

    formatter = logging.Formatter(LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S')

    if log_to_console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if log_to_file:
        if log_dir is None:
            log_dir = Path(__file__).parent.parent.parent / "logs"
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)

        file_handler = ZipRotatingFileHandler(
            filename=str(log_dir / "app.log"),
            backupCount=retention_days,
        )
        file_handler.setLevel(logging.DEBUG)  # Capture all levels in file
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

        error_handler = ZipRotatingFileHandler(
            filename=str(log_dir / "error.log"),
            backupCount=retention_days,
        )
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(formatter)
        logger.addHandler(error_handler)

    return logger


def configure_from_settings() -> logging.Logger:
    """Configure the application logger from Settings."""
    return setup_logger(
        level=settings.LOG_LEVEL,
        log_dir=settings.LOG_DIR,
        log_to_console=settings.LOG_TO_CONSOLE,
        log_to_file=settings.LOG_TO_FILE,
        retention_days=settings.LOG_RETENTION_DAYS,
    )
