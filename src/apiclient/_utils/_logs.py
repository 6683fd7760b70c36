import logging

from rich.console import Console
from rich.logging import RichHandler

from .constants import LOGGER_NAME

logger = logging.getLogger(LOGGER_NAME)


def setup_logging(should_debug: bool = False) -> None:
    """Attach a rich stderr handler to the ``apiclient`` logger.

    Calling it again only updates the level, so composing several clients in
    one process does not duplicate output.
    """
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(
            console=Console(stderr=True),
            show_path=False,
            markup=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)

    logger.setLevel(logging.DEBUG if should_debug else logging.INFO)
