"""
DataMashup
Decode and re-encode the Power Query container embedded in Excel workbooks.
"""

__version__ = "1.0.0"

from .archive import Entry, EntryKind, BytesPayload, TextPayload, ZipCodec
from .container import RootContainer, DEFAULT_PERMISSIONS, parse_datamashup_xml
from .errors import ParseError, ParseOutcome, DataMashupError, ParseRootError, ParseMetadataError
from .extractor import extract_datamashup, replace_datamashup
from .layout import MetadataBlock
from .packager import SpreadsheetPackage, open_spreadsheet_package
from .utils.text import TextCodec

__all__ = [
    "__version__",
    "Entry",
    "EntryKind",
    "BytesPayload",
    "TextPayload",
    "ZipCodec",
    "RootContainer",
    "DEFAULT_PERMISSIONS",
    "parse_datamashup_xml",
    "ParseError",
    "ParseOutcome",
    "DataMashupError",
    "ParseRootError",
    "ParseMetadataError",
    "extract_datamashup",
    "replace_datamashup",
    "MetadataBlock",
    "SpreadsheetPackage",
    "open_spreadsheet_package",
    "TextCodec"
]
