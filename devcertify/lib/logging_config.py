"""JSON logging configuration for devcertify."""

import logging

from pythonjsonlogger import jsonlogger

LOGGER_NAME = "devcertify"

CONSOLE_FIELDS = frozenset({"timestamp", "level", "message", "exc_info"})
DEBUG_FIELDS = CONSOLE_FIELDS | {"funcName", "lineno"}


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """JSON formatter that keeps only the fields an operator needs.

    Console runs show timestamp, level, message and exc_info. With
    ``verbose`` the source location (funcName, lineno) is kept as well.
    """

    def __init__(self, *args, verbose: bool = False, **kwargs):
        super().__init__(*args, **kwargs)
        self.verbose = verbose

    def add_fields(self, log_record, record, message_dict):
        """Rename levelname and drop everything outside the field set.

        Args:
            log_record: Dict to be logged as JSON
            record: LogRecord object from logging framework
            message_dict: Dict containing message and args
        """
        super().add_fields(log_record, record, message_dict)

        if "levelname" in log_record:
            log_record["level"] = log_record.pop("levelname")

        kept = DEBUG_FIELDS if self.verbose else CONSOLE_FIELDS
        for key in [key for key in log_record if key not in kept]:
            del log_record[key]


def _build_formatter(verbose: bool) -> CustomJsonFormatter:
    return CustomJsonFormatter(
        fmt="%(timestamp)s %(levelname)s %(funcName)s %(lineno)d %(message)s",
        timestamp=True,
        verbose=verbose,
    )


def _setup_logger() -> logging.Logger:
    """Initialize and configure singleton logger.

    Returns:
        Logger writing JSON lines to stderr at INFO
    """
    logger = logging.getLogger(LOGGER_NAME)

    # Module may be reloaded in tests
    if logger.handlers:
        return logger

    handler = logging.StreamHandler()
    handler.setFormatter(_build_formatter(verbose=False))

    logger.setLevel(logging.INFO)
    logger.addHandler(handler)
    logger.propagate = False

    return logger


def configure_log_level(verbose: bool) -> None:
    """Switch the singleton logger between INFO and DEBUG.

    DEBUG also logs every command line before it runs and adds the
    source location to each record.
    """
    LOGGER.setLevel(logging.DEBUG if verbose else logging.INFO)
    for handler in LOGGER.handlers:
        handler.setFormatter(_build_formatter(verbose))


LOGGER = _setup_logger()
