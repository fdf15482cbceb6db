from __future__ import annotations
import logging
import sys
from loguru import logger

# ---- stdlib logging -> loguru intercept ----
class InterceptHandler(logging.Handler):
    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        logger.opt(depth=6, exception=record.exc_info).log(level, record.getMessage())

def _hook_stdlib_logging() -> None:
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    # Third-party loggers keep their own levels but route through loguru
    for noisy in ("uvicorn", "uvicorn.access", "uvicorn.error", "aiohttp", "asyncio"):
        l = logging.getLogger(noisy)
        l.handlers = [InterceptHandler()]
        l.propagate = False

# ---- console format (human friendly, extra hidden) ----
DEV_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level:<7}</level> | "
    "<cyan>{extra[name]}</cyan> | "
    "<cyan>{file}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)

def setup_logging(log_level: str = "INFO", json: bool = False) -> None:
    """
    Initializes loguru sinks.
    - colored console output, or one JSON object per line when `json` is set
    - absorbs stdlib logging
    """
    logger.remove()  # drop the default sink
    logger.configure(extra={"name": "reliefhub"})
    if json:
        logger.add(
            sink=sys.stdout,
            serialize=True,
            backtrace=False,
            diagnose=False,
            level=log_level.upper(),
            enqueue=False,
        )
    else:
        logger.add(
            sink=lambda m: print(m, end=""),
            format=DEV_FORMAT,
            colorize=True,
            backtrace=True,
            diagnose=False,
            level=log_level.upper(),
            enqueue=False,
        )
    _hook_stdlib_logging()

def get_logger(name: str = "reliefhub", **ctx):
    """Returns a logger bound to `name` and optional context."""
    return logger.bind(name=name, **ctx)

def with_context(**ctx):
    """Context manager that attaches temporary context to every record."""
    return logger.contextualize(**ctx)
