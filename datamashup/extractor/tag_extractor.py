"""
DataMashup Tag Extractor
Finds the DataMashup element in custom XML and splices new bodies into it.

A single regex scan for the start/end tag pair, not an XML parser:
input is assumed to be well-formed Office output.
"""
import re
from typing import NamedTuple, Optional

DATAMASHUP_PATTERN = re.compile(
    r'<DataMashup(?:\s[^>]*?)?(?<!/)>(.*?)</DataMashup\s*>',
    re.DOTALL
)


class TagMatch(NamedTuple):
    body: str   # trimmed
    start: int  # offset of the raw body in the document
    end: int


def find_datamashup(xml_text: str) -> Optional[TagMatch]:
    match = DATAMASHUP_PATTERN.search(xml_text)
    if not match:
        return None
    return TagMatch(match.group(1).strip(), match.start(1), match.end(1))


def extract_datamashup(xml_text: str) -> Optional[str]:
    """Trimmed base64 body of the DataMashup element, or None"""
    match = find_datamashup(xml_text)
    return match.body if match else None


def replace_datamashup(xml_text: str, body: str) -> str:
    """Replace only the text between the DataMashup tags"""
    match = find_datamashup(xml_text)
    if match is None:
        raise ValueError("No DataMashup element to replace")
    return xml_text[:match.start] + body + xml_text[match.end:]


__all__ = [
    "TagMatch",
    "find_datamashup",
    "extract_datamashup",
    "replace_datamashup"
]
