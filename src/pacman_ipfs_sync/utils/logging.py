import logging
import sys
import threading

TRACE_LEVEL_NUM = logging.DEBUG - 5

# per-thread nesting depth of log_section blocks
_section_depth = threading.local()


def _depth() -> int:
    return getattr(_section_depth, "value", 0)


class log_section:
    """Logs a title, then indents everything logged inside the block"""

    def __init__(self, title: str, level: int = logging.DEBUG) -> None:
        self.title = title
        self.level = level
        self.logger = logging.getLogger(__name__)

    def __enter__(self) -> None:
        self.logger.log(self.level, self.title)
        _section_depth.value = _depth() + 1

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:  # noqa: ANN001
        _section_depth.value = max(0, _depth() - 1)


def compute_log_level(verbose_count: int, quiet_count: int) -> int:
    """Maps -v/-q counts to a level. No flags means INFO."""
    levels = [
        logging.CRITICAL,
        logging.ERROR,
        logging.WARNING,
        logging.INFO,
        logging.DEBUG,
        TRACE_LEVEL_NUM,
    ]
    index = levels.index(logging.INFO) + verbose_count - quiet_count
    return levels[max(0, min(index, len(levels) - 1))]


class SectionFormatter(logging.Formatter):
    """INFO records print as the bare message, others as `LEVEL: message`"""

    def format(self, record):
        if record.levelno == logging.INFO:
            text = record.getMessage()
        else:
            text = super().format(record)
        return "  " * _depth() + text


def _trace(self, message, *args, **kwargs):
    if self.isEnabledFor(TRACE_LEVEL_NUM):
        self._log(TRACE_LEVEL_NUM, message, args, **kwargs)


def _ensure_trace_level() -> None:
    """Registers the TRACE level and `Logger.trace` once"""
    if getattr(logging, "TRACE", None) == TRACE_LEVEL_NUM:
        return
    logging.addLevelName(TRACE_LEVEL_NUM, "TRACE")
    logging.TRACE = TRACE_LEVEL_NUM  # type: ignore[attr-defined]
    logging.getLoggerClass().trace = _trace  # type: ignore[attr-defined]


def get_logger(name: str) -> logging.Logger:
    """Returns a logger that supports the `trace` level"""
    _ensure_trace_level()
    return logging.getLogger(name)


def configure_logger(level: int) -> None:
    """Attaches a stderr handler to the package logger.

    Any handlers from a previous call are removed first.
    """
    package_logger = logging.getLogger(__name__.split(".")[0])
    package_logger.handlers.clear()
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(SectionFormatter(fmt="%(levelname)s: %(message)s"))
    package_logger.addHandler(handler)
    package_logger.setLevel(level)
    package_logger.propagate = False
