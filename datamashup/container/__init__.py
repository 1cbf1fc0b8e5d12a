from .container import RootContainer, DEFAULT_PERMISSIONS, parse_datamashup_xml

__all__ = [
    "RootContainer",
    "DEFAULT_PERMISSIONS",
    "parse_datamashup_xml"
]
