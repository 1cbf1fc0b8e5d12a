from .logger import logger
from .text import TextCodec
from .checksum import calculate_bytes_checksum

__all__ = [
    "logger",
    "TextCodec",
    "calculate_bytes_checksum"
]
