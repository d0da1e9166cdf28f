"""
Logging setup.

params_coerce emits structlog events at DEBUG level: ``coercion_resolved``,
``coercion_miss``, ``coercion_rejected_result`` and ``module_loaded``.
Applications configure structlog themselves; configure_logging() is a
shortcut for scripts and tests that just want to read those events.
"""
import logging
import sys

import structlog


def configure_logging(*, json_output: bool = False, level: str = "INFO", stream=None) -> None:
    """
    Print params_coerce events, one line each, to stream (sys.stdout by default).

    Args:
        json_output: JSON lines if True, plain key=value text otherwise.
        level: DEBUG, INFO, WARNING, ERROR.
        stream: File-like object written to.
    """
    if json_output:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, level.upper())),
        logger_factory=structlog.PrintLoggerFactory(file=stream or sys.stdout),
        # module loggers are created at import time, they must see later calls
        cache_logger_on_first_use=False,
    )
