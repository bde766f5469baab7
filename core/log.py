import logging

from rich.console import Console
from rich.logging import RichHandler

# stdout carries protocol frames, so logs always go to stderr.
_CONSOLE = Console(stderr=True)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[
            RichHandler(
                console=_CONSOLE,
                rich_tracebacks=True,
                show_path=False,
            )
        ],
        force=True,
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
