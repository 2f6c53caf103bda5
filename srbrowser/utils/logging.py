import inspect
import logging
import sys

from loguru import logger

from srbrowser.core.config import settings


class InterceptHandler(logging.Handler):
    """Route records emitted through the standard logging module into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find the caller from where the logged message originated
        frame, depth = inspect.currentframe(), 0
        while frame and (depth == 0 or frame.f_code.co_filename == logging.__file__):
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def setup_logging(filename: str) -> None:
    level = "DEBUG" if settings.is_dev else settings.log_level

    logger.remove()
    logger.add(sys.stderr, level=level)
    logger.add(filename, level=level, rotation="32 MB", retention=5, encoding="utf-8")

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access", "httpx", "sqlalchemy"):
        std_logger = logging.getLogger(name)
        std_logger.handlers = [InterceptHandler()]
        std_logger.propagate = False
