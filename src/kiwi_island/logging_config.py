import logging
import os
from typing import Optional, Union

ENV_VAR = "KIWI_LOG_LEVEL"
LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s: %(message)s"


def _parse_level(value: Union[int, str, None]) -> Optional[int]:
    if value is None or isinstance(value, int):
        return value
    level = logging.getLevelName(value.strip().upper())
    return level if isinstance(level, int) else None


def configure_logging(default_level: Union[int, str] = logging.INFO) -> int:
    """Set up the root logger for command line use and return the level chosen.

    ``KIWI_LOG_LEVEL`` wins over ``default_level``; an unknown name in either
    place falls back to INFO with a warning.
    """
    requested = os.getenv(ENV_VAR) or default_level
    level = _parse_level(requested)
    logging.basicConfig(level=level if level is not None else logging.INFO, format=LOG_FORMAT)
    if level is None:
        logging.getLogger(__name__).warning("Unknown log level %r; using INFO", requested)
        level = logging.INFO
    return level
