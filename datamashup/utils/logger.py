"""
DataMashup Logger - Centralized Logging Utility
"""
import logging
import sys

def setup_logger(level: str = "INFO"):
    # Create a custom logger
    logger = logging.getLogger("datamashup")
    logger.setLevel(logging.DEBUG)

    # Create handlers
    c_handler = logging.StreamHandler(sys.stdout)
    c_handler.setLevel(getattr(logging, str(level).upper(), logging.INFO))

    # Create formatters and add it to handlers
    c_format = logging.Formatter('%(message)s') # Clean output for callers
    c_handler.setFormatter(c_format)

    # Add handlers to the logger
    if not logger.handlers:
        logger.addHandler(c_handler)

    return logger


def set_level(level: str):
    """Change the console handler level, e.g. set_level('DEBUG')"""
    for handler in logger.handlers:
        handler.setLevel(getattr(logging, str(level).upper(), logging.INFO))

# Initialize singleton
logger = setup_logger()

__all__ = ["logger", "set_level"]
