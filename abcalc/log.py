from __future__ import annotations

import logging
from typing import Optional, Union

from . import config


def configure_logging(level: Optional[Union[str, int]] = None) -> None:
    """Set up root logging once; later calls only adjust the level."""
    if level is None:
        level = config.LOG_LEVEL
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    root = logging.getLogger()
    if root.handlers:
        root.setLevel(level)
        return
    logging.basicConfig(level=level, format=config.LOG_FORMAT)
