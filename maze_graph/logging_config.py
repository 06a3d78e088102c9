import logging
import sys

LOG_FORMAT: str = "%(asctime)s %(levelname)s %(message)s"
LOG_DATEFMT: str = "%Y-%m-%d %H:%M:%S"


def configure_logging(verbose: bool = False) -> None:
    """apply a basic config to the root logger, which all loggers in the logging module inherit

    library modules only ever log, so this is called once by entry points.
    `verbose` also shows the per-maze debug messages from the generators.
    """
    logging.basicConfig(
        stream=sys.stdout,
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
        force=True,
    )
