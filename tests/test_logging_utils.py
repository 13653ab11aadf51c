import logging

import colorlog

from specrun import logging_utils


def test_get_loglevel() -> None:
    assert logging_utils.get_loglevel(None, logging.WARNING) == logging.WARNING
    assert logging_utils.get_loglevel("debug", logging.WARNING) == logging.DEBUG
    assert logging_utils.get_loglevel("INFO", logging.WARNING) == logging.INFO
    assert logging_utils.get_loglevel("error", logging.INFO) == logging.ERROR
    assert logging_utils.get_loglevel("verbose", logging.INFO) == logging.INFO


def test_setup_logger() -> None:
    logger = logging.getLogger(logging_utils.SPECRUN_LOGGER_NAME)
    saved_handlers = list(logger.handlers)
    saved_level = logger.level
    try:
        logging_utils.setup_logger(logging.DEBUG, pretty=True)
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0].formatter, colorlog.ColoredFormatter)

        # calling it again replaces the handler instead of stacking another one
        logging_utils.setup_logger(logging.ERROR, pretty=False)
        assert logger.level == logging.ERROR
        assert len(logger.handlers) == 1
        formatter = logger.handlers[0].formatter
        assert formatter is not None
        assert not isinstance(formatter, colorlog.ColoredFormatter)
    finally:
        logger.handlers[:] = saved_handlers
        logger.setLevel(saved_level)
