import logging
from typing import Union

_configured = False


def configure_logging(level: Union[int, str] = logging.INFO) -> None:
    """Attach a basic console handler once; later calls only adjust the level."""
    global _configured
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    if not _configured:
        logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
        _configured = True
    logging.getLogger("component_meta").setLevel(level)
