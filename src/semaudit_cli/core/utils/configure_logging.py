import logging
import sys
from typing import Dict, Optional, TextIO, Union

from tqdm import tqdm

LOG_FORMAT = "%(asctime)s - %(levelname)s - [%(name)s:%(lineno)d] - %(message)s"

Level = Union[int, str]


class LogWithTqdm(logging.Handler):
    """
    Logging handler that writes through `tqdm.write()`, so log lines printed
    during a batch run land above the progress bar instead of breaking it.
    The stream is looked up per record; stderr is used when none is given.
    """

    def __init__(self, stream: Optional[TextIO] = None, level: int = logging.NOTSET):
        super().__init__(level)
        self.stream = stream

    def emit(self, record: logging.LogRecord) -> None:
        try:
            tqdm.write(self.format(record), file=self.stream or sys.stderr)
        except Exception:
            self.handleError(record)


def to_level(level: Optional[Level], fallback: int) -> int:
    """Maps 'debug'/'INFO'/20 to a logging level; unknown names give `fallback`."""
    if level is None:
        return fallback
    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level).upper())
    return value if isinstance(value, int) else fallback


def configure_logger(
        general_level: Level = "WARNING",
        module_levels: Optional[Dict[str, Level]] = None,
        stream: Optional[TextIO] = None,
) -> LogWithTqdm:
    """
    Routes all logging through one LogWithTqdm handler on the root logger.

    Args:
        general_level: Level for the root logger (settings key `debug.level`).
        module_levels: Per-logger levels (settings key `debug.modules`), e.g.
                       {"semaudit.engine": "DEBUG"} to trace rule loading only.
        stream: Target stream; stderr when omitted.

    Returns:
        The installed handler.
    """
    handler = LogWithTqdm(stream)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root_logger = logging.getLogger()
    root_logger.setLevel(to_level(general_level, logging.WARNING))
    root_logger.handlers.clear()
    root_logger.addHandler(handler)

    for name, level in (module_levels or {}).items():
        logging.getLogger(name).setLevel(to_level(level, logging.NOTSET))

    return handler
