"""Logging setup and failure formatting helpers."""

import logging
import traceback

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
LOG_DATEFMT = "%Y-%m-%dT%H:%M:%SZ"

SEPARATOR = "----------"


def configure_logging(level: str = "INFO") -> None:
    """Install the root handler once; later calls only adjust the level."""
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=LOG_DATEFMT)
    logging.getLogger().setLevel(level)


def _cause_of(exc: BaseException) -> BaseException | None:
    if exc.__cause__ is not None:
        return exc.__cause__
    if exc.__suppress_context__:
        return None
    return exc.__context__


def describe_exception(exc: BaseException) -> str:
    """
    Render the exception and every exception in its cause chain.

    One block per level with the exception type, message and stack, outermost
    first. Cycles in the chain are cut at the first repeat.
    """
    lines: list[str] = []
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        stack = "".join(traceback.format_tb(current.__traceback__)).rstrip()
        lines.append(SEPARATOR)
        lines.append(f"Source: {type(current).__module__}.{type(current).__qualname__}")
        lines.append(f"Message: {current}")
        lines.append(f"Stack Trace: {stack or '(none)'}")
        lines.append(SEPARATOR)
        current = _cause_of(current)
    return "\n".join(lines)


def log_failure(
    logger: logging.Logger,
    message: str,
    exc: BaseException | None = None,
) -> None:
    """Log message at ERROR; with exc, append its full cause chain."""
    if exc is None:
        logger.error(message)
        return
    logger.error("%s\n%s", message, describe_exception(exc))
