# bulkbridge/core/logging_config.py
import logging
import sys

import structlog

# Externe libs die op INFO te veel praten tijdens een upload
_NOISY_LOGGERS = ("botocore", "boto3", "urllib3", "httpx", "httpcore")


def _level_number(level: str) -> int:
    number = logging.getLevelName(level.upper())
    if not isinstance(number, int):
        raise ValueError(f"unknown log level: {level!r}")
    return number


def setup_logging(level: str = "INFO", json_logs: bool = True) -> None:
    """
    structlog voor bulkbridge, stdlib logging voor boto3/uvicorn.

    `level` filtert in structlog zelf (make_filtering_bound_logger), dus
    debug-events kosten niets als ze uit staan. `json_logs=False` geeft
    leesbare console-output, handig voor de CLI.
    """
    number = _level_number(level)

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=number)
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(number, logging.WARNING))

    renderer = structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer()
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(number),
        logger_factory=structlog.stdlib.LoggerFactory(),
        # niet cachen: CLI en server configureren met een ander level
        cache_logger_on_first_use=False,
    )


logger = structlog.get_logger("bulkbridge", service="bulkbridge")
