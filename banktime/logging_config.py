"""
Logging setup for the command line front-end.
"""

import logging


LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "WARNING") -> None:
    """Configure the root logger once, at the given level name."""
    numeric_level = getattr(logging, level.upper(), logging.WARNING)
    logging.basicConfig(level=numeric_level, format=LOG_FORMAT)
    logging.getLogger("banktime").setLevel(numeric_level)
