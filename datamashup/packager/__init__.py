from .spreadsheet import SpreadsheetPackage, DataMashupPart, open_spreadsheet_package

__all__ = [
    "SpreadsheetPackage",
    "DataMashupPart",
    "open_spreadsheet_package"
]
