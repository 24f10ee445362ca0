"""Root logger configuration."""

import logging
from typing import Union

from pythonjsonlogger import jsonlogger


def setup_logger(level: Union[int, str] = logging.INFO) -> None:
    """Send log records from every module to stderr as JSON lines."""
    root = logging.getLogger()
    if any(getattr(h, '_interface_core', False) for h in root.handlers):
        root.setLevel(level)
        return

    logHandler = logging.StreamHandler()
    formatter = jsonlogger.JsonFormatter('%(asctime)s %(levelname)s %(name)s %(message)s',
                                         rename_fields={'levelname': 'level', 'asctime': 'timestamp'})
    logHandler.setFormatter(formatter)
    logHandler._interface_core = True   # type: ignore
    root.addHandler(logHandler)
    root.setLevel(level)
