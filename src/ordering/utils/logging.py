"""Logging configuration for the Ordering domain."""

import logging
import sys

import structlog

# Suppress noisy library loggers
logging.getLogger("protean").setLevel(logging.WARNING)


def _static_fields(**fields):
    """structlog processor adding fixed deployment fields to every event."""

    def processor(_logger, _method_name, event_dict):
        for key, value in fields.items():
            event_dict.setdefault(key, value)
        return event_dict

    return processor


def configure_logging(level: str = "INFO", json_logs: bool = True, region: str | None = None) -> None:
    """Emit one structured line per event on stdout.

    JSON lines in deployed environments, a readable console layout locally.
    Every event carries the deployment ``region`` when one is given.
    """
    log_level = logging.getLevelName(level.upper())
    if not isinstance(log_level, int):
        log_level = logging.INFO

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=log_level)

    renderer = structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer()
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]
    if region:
        processors.append(_static_fields(region=region))
    processors += [structlog.processors.format_exc_info, renderer]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=False,
    )
