import logging
import sys
from typing import Optional

PACKAGE_LOGGER = "ai_context_schema"

_HANDLER_MARK = "_ai_context_schema_handler"


class _BelowLevelFilter(logging.Filter):
    """Pass only records strictly below *threshold*."""

    def __init__(self, threshold: int) -> None:
        super().__init__()
        self._threshold = threshold

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < self._threshold


def _make_handler(stream, level: int, formatter: logging.Formatter) -> logging.Handler:
    handler = logging.StreamHandler(stream=stream)
    handler.setLevel(level)
    handler.setFormatter(formatter)
    setattr(handler, _HANDLER_MARK, True)
    return handler


def configure_cli_logging(
    *,
    level: int = logging.INFO,
    stderr_level: int = logging.WARNING,
    formatter: Optional[logging.Formatter] = None,
) -> logging.Logger:
    """Attach stdout/stderr handlers to the package logger.

    Records below ``stderr_level`` are written to stdout (next to the CLI
    report), the rest to stderr. With ``--json`` the CLIs raise ``level`` so
    only the JSON document reaches stdout.

    Only handlers installed by a previous call are replaced; the root logger
    and any handlers added by the host application are left alone.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in [h for h in logger.handlers if getattr(h, _HANDLER_MARK, False)]:
        logger.removeHandler(handler)

    logger.setLevel(level)
    logger.propagate = False

    if formatter is None:
        formatter = logging.Formatter("%(name)s - %(levelname)s - %(message)s")
    stderr_level = max(stderr_level, logging.DEBUG)

    stdout_handler = _make_handler(sys.stdout, logging.DEBUG, formatter)
    stdout_handler.addFilter(_BelowLevelFilter(stderr_level))
    logger.addHandler(stdout_handler)
    logger.addHandler(_make_handler(sys.stderr, stderr_level, formatter))

    return logger
