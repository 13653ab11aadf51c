import enum
import logging
from typing import Optional

from colorlog import ColoredFormatter

SPECRUN_LOGGER_NAME = "specrun"


@enum.unique
class LogLevel(enum.Enum):
    debug = logging.DEBUG
    info = logging.INFO
    warning = logging.WARNING
    error = logging.ERROR


def get_loglevel(user_specification: Optional[str], default: int) -> int:
    if user_specification is None:
        return default
    try:
        ret: int = LogLevel[user_specification.lower()].value
    except KeyError:
        return default
    return ret


def _general_formatter(pretty: bool) -> logging.Formatter:
    if pretty:
        ret: logging.Formatter = ColoredFormatter(
            "%(log_color)s%(levelname)s%(reset)s %(message)s"
        )
        return ret
    else:
        return logging.Formatter("%(levelname)s %(message)s")


def setup_logger(loglevel: int, pretty: bool = True) -> None:
    root_logger = logging.getLogger(SPECRUN_LOGGER_NAME)
    root_logger.setLevel(loglevel)
    root_logger.handlers.clear()

    handler = logging.StreamHandler()
    handler.setFormatter(_general_formatter(pretty))
    root_logger.addHandler(handler)
