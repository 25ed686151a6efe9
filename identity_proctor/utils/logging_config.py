"""
Logging setup for the Identity Proctor service

Console output always goes to stdout. With file logging on, every record
lands in a dated rotating log and errors are copied to a second file so
failed checks and enrollments can be reviewed without the request noise.
"""
import logging
import logging.handlers
import sys
from pathlib import Path
from datetime import datetime
from typing import List, Optional

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)-32s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# AWS SDK loggers flood DEBUG with wire dumps
QUIET_LOGGERS = ("botocore", "boto3", "urllib3", "s3transfer")

MAIN_LOG_BYTES = 10 * 1024 * 1024
ERROR_LOG_BYTES = 5 * 1024 * 1024


def _rotating_handler(path: Path, max_bytes: int, backups: int, level: int) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        path,
        maxBytes=max_bytes,
        backupCount=backups,
        encoding="utf-8"
    )
    handler.setLevel(level)
    return handler


def _file_handlers(service_name: str, log_dir: Path) -> List[logging.Handler]:
    """Dated main log plus an errors-only log"""
    log_dir.mkdir(parents=True, exist_ok=True)
    today = datetime.now().strftime("%Y-%m-%d")

    return [
        _rotating_handler(log_dir / f"{service_name}_{today}.log", MAIN_LOG_BYTES, 5, logging.DEBUG),
        _rotating_handler(log_dir / f"{service_name}_errors.log", ERROR_LOG_BYTES, 3, logging.ERROR),
    ]


def setup_logging(
    service_name: str = "identity-proctor",
    level: str = "INFO",
    log_to_file: bool = False,
    log_to_console: bool = True,
    log_dir: Optional[str] = None
) -> logging.Logger:
    """
    Install the service's handlers on the root logger, replacing any present.

    Args:
        service_name: Prefix of the log file names and name of the returned logger
        level: Root log level name; unknown names fall back to INFO
        log_to_file: Also write rotating log files under log_dir
        log_to_console: Write to stdout
        log_dir: Directory for log files (default: ./logs)

    Returns:
        Logger named after the service
    """
    handlers: List[logging.Handler] = []
    if log_to_console:
        console = logging.StreamHandler(sys.stdout)
        console.setLevel(logging.DEBUG)
        handlers.append(console)

    log_path = Path(log_dir or "logs")
    if log_to_file:
        handlers.extend(_file_handlers(service_name, log_path))

    formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)
    for handler in handlers:
        handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    root_logger.handlers = handlers

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logger = logging.getLogger(service_name)
    logger.info(f"Log level: {level.upper()}")
    if log_to_file:
        logger.info(f"Log directory: {log_path.resolve()}")
    return logger
