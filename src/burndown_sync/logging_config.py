import logging
import os
import sys
import time
from functools import wraps


def setup_logger(name: str = "burndown_sync") -> logging.Logger:
    """Set up logging configuration for the application."""

    logger = logging.getLogger(name)

    # Avoid duplicate handlers
    if logger.handlers:
        return logger

    log_level = os.getenv("LOG_LEVEL", "INFO").upper()
    logger.setLevel(getattr(logging, log_level, logging.INFO))

    formatter = logging.Formatter(
        fmt='%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    # stderr keeps stdout clean for command output and the MCP stdio transport
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    log_file = os.getenv("LOG_FILE")
    if log_file:
        try:
            file_handler = logging.FileHandler(log_file)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)
            logger.info(f"File logging enabled: {log_file}")
        except OSError as e:
            logger.warning(f"Could not create file handler for {log_file}: {e}")

    logger.debug(f"Logger initialized - Level: {log_level}")

    return logger


def log_function_call(logger: logging.Logger, slow_after: float = 2.0):
    """Log entry, duration and failure of each call."""
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            func_name = func.__qualname__
            logger.debug(f"Calling {func_name}")
            start_time = time.monotonic()

            try:
                result = func(*args, **kwargs)
            except Exception as e:
                logger.error(f"{func_name} failed after {time.monotonic() - start_time:.3f}s - Error: {e}")
                raise

            execution_time = time.monotonic() - start_time
            logger.info(f"{func_name} completed in {execution_time:.3f}s")
            if execution_time > slow_after:
                logger.warning(f"SLOW OPERATION: {func_name} took {execution_time:.3f}s")
            return result

        return wrapper
    return decorator
