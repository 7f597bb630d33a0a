"""
Error Logging Service

Error logging for the RexOS boundaries (persistence and export) that:
- Writes to rotating log files when file logging is enabled
- Stores errors in the local database for later inspection
- Captures context and traceback
- Makes context JSON-safe and truncates long messages

Usage:
    from rexos.services.error_logging import error_logger

    try:
        persister.save(state)
    except PersistenceError as e:
        error_logger.log_error(e, severity="warning", context={"operation": "save"})
"""

import logging
import traceback
import json
import sys
from datetime import datetime, timezone
from typing import Optional, Callable, Dict
from uuid import UUID
from pathlib import Path
from logging.handlers import RotatingFileHandler

from sqlalchemy.orm import Session

from rexos.core.config import settings
from rexos.models.error_log import ErrorLog


logger = logging.getLogger("rexos.error_logging")


def configure_logging(
    log_dir: Optional[str] = None,
    file_logging: Optional[bool] = None,
    debug: Optional[bool] = None
) -> bool:
    """
    Configure root logging: console always, rotating files when enabled.

    File handlers are only attached when the log directory is writable;
    otherwise logging falls back to the console.

    Returns:
        True if file logging is active
    """
    debug = settings.DEBUG if debug is None else debug
    file_logging = settings.FILE_LOGGING if file_logging is None else file_logging
    logs_dir = Path(log_dir or settings.LOG_DIR)

    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logging.basicConfig(
            level=logging.DEBUG if debug else logging.INFO,
            format='%(asctime)s | %(levelname)s | %(name)s | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

    if not file_logging:
        return False

    try:
        logs_dir.mkdir(parents=True, exist_ok=True)
        # Test if we can write to the directory
        test_file = logs_dir / ".write_test"
        test_file.touch()
        test_file.unlink()
    except OSError as e:
        logger.warning(f"Cannot write to logs directory {logs_dir}: {e}. File logging disabled.")
        return False

    # Errors only
    file_handler = RotatingFileHandler(
        logs_dir / "errors.log",
        maxBytes=10 * 1024 * 1024,  # 10 MB
        backupCount=10,
        encoding='utf-8'
    )
    file_handler.setLevel(logging.ERROR)
    file_handler.setFormatter(logging.Formatter(
        '%(asctime)s | %(levelname)s | %(name)s | %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    ))

    # All levels
    detailed_handler = RotatingFileHandler(
        logs_dir / "app_detailed.log",
        maxBytes=10 * 1024 * 1024,  # 10 MB
        backupCount=5,
        encoding='utf-8'
    )
    detailed_handler.setLevel(logging.DEBUG)
    detailed_handler.setFormatter(logging.Formatter(
        '%(asctime)s | %(levelname)s | %(name)s | %(funcName)s:%(lineno)d | %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    ))

    root_logger.addHandler(file_handler)
    root_logger.addHandler(detailed_handler)
    return True


def truncate_string(s: str, max_length: int = 10000) -> str:
    """Truncate string to max length."""
    if len(s) > max_length:
        return s[:max_length] + f"... [TRUNCATED, total {len(s)} chars]"
    return s


class ErrorLogger:
    """
    Error logging service that writes to the log and, once configured, the database.
    """

    def __init__(self):
        self.db_session_factory: Optional[Callable[[], Session]] = None

    def set_db_session_factory(self, factory: Optional[Callable[[], Session]]):
        """Set (or clear) the database session factory for DB logging."""
        self.db_session_factory = factory

    def log_error(
        self,
        error: BaseException,
        severity: str = "error",
        context: Optional[Dict] = None,
        save_to_db: bool = True
    ) -> Optional[UUID]:
        """
        Log an error with its context.

        Args:
            error: The exception that occurred
            severity: debug, info, warning, error, critical
            context: Additional context data
            save_to_db: Whether to save to database

        Returns:
            UUID of the error log entry if saved to DB, None otherwise
        """
        timestamp = datetime.now(timezone.utc)

        error_type = type(error).__name__
        error_message = str(error)

        # Location of the innermost frame, when the error carries a traceback
        module = function = line_number = None
        exc_tb = error.__traceback__ or sys.exc_info()[2]
        if exc_tb:
            stack_trace = ''.join(traceback.format_exception(type(error), error, exc_tb))
            tb_info = traceback.extract_tb(exc_tb)
            if tb_info:
                last_frame = tb_info[-1]
                module = last_frame.filename
                function = last_frame.name
                line_number = str(last_frame.lineno)
        else:
            stack_trace = None

        # Non-JSON values (UUIDs, paths, dates) are stored as strings
        context_data = json.loads(json.dumps(context, default=str)) if context else None

        log_message = f"{error_type}: {error_message}"
        if context_data:
            log_message += f" | Context: {json.dumps(context_data)}"

        if severity == "critical":
            logger.critical(log_message)
        elif severity == "error":
            logger.error(log_message)
        elif severity == "warning":
            logger.warning(log_message)
        else:
            logger.info(log_message)

        # Save to database
        error_log_id = None
        if save_to_db and self.db_session_factory:
            try:
                db = self.db_session_factory()
                try:
                    error_log = ErrorLog(
                        timestamp=timestamp,
                        error_type=error_type,
                        severity=severity,
                        module=module,
                        function=function,
                        line_number=line_number,
                        message=truncate_string(error_message, 1000),
                        stack_trace=truncate_string(stack_trace, 20000) if stack_trace else None,
                        context_data=context_data,
                    )
                    db.add(error_log)
                    db.commit()
                    db.refresh(error_log)
                    error_log_id = error_log.id
                    logger.debug(f"Error logged to DB with ID: {error_log_id}")
                finally:
                    db.close()
            except Exception as db_err:
                logger.error(f"Failed to save error to database: {db_err}")

        return error_log_id


# Singleton instance
error_logger = ErrorLogger()


def configure_error_logging(db_session_factory: Optional[Callable[[], Session]]):
    """
    Configure the error logging system with database support.
    Call this during app startup.
    """
    error_logger.set_db_session_factory(db_session_factory)
    logger.info("Error logging system configured")
