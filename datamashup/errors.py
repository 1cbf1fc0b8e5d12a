"""
DataMashup Errors
Exceptions raised by the layout layer and the outcome value returned
by the public parse functions.
"""
from enum import Enum
from typing import Optional


class DataMashupError(ValueError):
    """Base class for malformed DataMashup content"""


class ParseRootError(DataMashupError):
    """Root binary stream shorter than its declared layout"""


class ParseMetadataError(ParseRootError):
    """Metadata block shorter than its declared layout"""


class ParseError(str, Enum):
    DATAMASHUP_NOT_FOUND = 'DataMashupNotFound'
    BASE64_DECODE_ERROR = 'Base64DecodeError'
    PARSE_ROOT_ERROR = 'ParseRootError'
    PARSE_METADATA_ERROR = 'ParseMetadataError'
    XML_DECODE_ERROR = 'XmlDecodeError'


class ParseOutcome:
    """
    Result of parse_datamashup_xml.

    Exactly one of container / error is set. payload holds the base64 text
    found between the tags (None when the tag was missing) so callers can
    look at what was found even when parsing failed.
    """

    def __init__(self, container=None, error: Optional[ParseError] = None,
                 payload: Optional[str] = None, message: str = ''):
        self.container = container
        self.error = error
        self.payload = payload
        self.message = message

    @property
    def ok(self) -> bool:
        return self.error is None and self.container is not None

    def __repr__(self):
        if self.ok:
            return f"ParseOutcome(container=<version {self.container.version}>)"
        return f"ParseOutcome(error={self.error.value!r}, message={self.message!r})"


__all__ = [
    "DataMashupError",
    "ParseRootError",
    "ParseMetadataError",
    "ParseError",
    "ParseOutcome"
]
