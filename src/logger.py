import logging
import sys
import traceback

from colorlog import ColoredFormatter

LOGGER_NAME = "ruhe_infra"


def colored_handlers(logger):
    """Stdout handlers installed by ``setup_logger`` on ``logger``."""
    return [
        handler for handler in logger.handlers
        if isinstance(handler, logging.StreamHandler)
        and isinstance(handler.formatter, ColoredFormatter)
    ]


def setup_logger(debug_mode=False):
    """
    Configure the package logger with a colored stdout handler.

    Child loggers created with ``logging.getLogger("src.<module>")`` are
    attached as well, so module-level ``logger = logging.getLogger(__name__)``
    picks up the same formatting.

    Args:
        debug_mode: Log at DEBUG instead of INFO.

    Returns:
        The configured ``ruhe_infra`` logger.
    """
    level = logging.DEBUG if debug_mode else logging.INFO

    # Create colored formatter
    formatter = ColoredFormatter(
        "%(log_color)s[%(levelname)s] %(message)s",
        log_colors={
            "DEBUG":    "cyan",
            "INFO":     "green",
            "WARNING":  "yellow",
            "ERROR":    "red",
            "CRITICAL": "red,bg_white",
        }
    )

    logger = None
    for name in (LOGGER_NAME, "src"):
        current = logging.getLogger(name)
        current.setLevel(level)
        # Other handlers (e.g. test capture) may already be attached
        if not colored_handlers(current):
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(formatter)
            current.addHandler(handler)
        for handler in colored_handlers(current):
            handler.setLevel(level)
        current.propagate = False
        if logger is None:
            logger = current

    return logger


def print_stack_trace():
    """Log the current exception's stack trace when debug logging is active."""
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(traceback.format_exc())


# Logger defaults to INFO unless reconfigured later.
logger = setup_logger(debug_mode=False)


def configure_logger(debug_mode):
    """Re-setup the logger once stack settings are known (``StackSettings.debug_mode``)."""
    global logger
    logger = setup_logger(debug_mode=debug_mode)
    if debug_mode:
        logger.debug("Debug mode is active.")
    return logger
