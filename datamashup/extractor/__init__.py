from .tag_extractor import TagMatch, find_datamashup, extract_datamashup, replace_datamashup

__all__ = [
    "TagMatch",
    "find_datamashup",
    "extract_datamashup",
    "replace_datamashup"
]
