"""
DataMashup Container
In-memory form of one DataMashup binary stream, with formula access,
permission reset and serialization back to base64.
"""
import base64
import binascii
from typing import List, Optional
from ..archive.entry import Entry
from ..archive.zip_codec import ZipCodec
from ..config import config
from ..errors import ParseError, ParseMetadataError, ParseOutcome, ParseRootError
from ..extractor.tag_extractor import extract_datamashup
from ..layout.metadata_layout import MetadataBlock
from ..layout.root_layout import RootLayout
from ..utils.logger import logger
from ..utils.text import TextCodec


DEFAULT_PERMISSIONS = (
    '<?xml version="1.0" encoding="utf-8"?>\r\n'
    '<PermissionList xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance">\r\n'
    '\t<CanEvaluateFuturePackages>false</CanEvaluateFuturePackages>\r\n'
    '\t<FirewallEnabled>true</FirewallEnabled>\r\n'
    '\t<WorkbookGroupType xsi:nil="true" />\r\n'
    '</PermissionList>'
)


class RootContainer:
    def __init__(
        self,
        version: int = 0,
        package_parts: List[Entry] = None,
        permissions: str = DEFAULT_PERMISSIONS,
        metadata: MetadataBlock = None,
        permission_bindings: bytes = b'',
        codec: TextCodec = None,
        zip_codec: ZipCodec = None
    ):
        self.version = version
        self.package_parts: List[Entry] = package_parts if package_parts is not None else []
        self.permissions = permissions
        self.metadata = metadata if metadata is not None else MetadataBlock()
        self.permission_bindings = bytes(permission_bindings)

        self.codec = codec or TextCodec()
        self.layout = RootLayout(self.codec, zip_codec)
        self.formula_section = config.formula_section

    @classmethod
    def from_bytes(cls, data: bytes, codec: TextCodec = None, zip_codec: ZipCodec = None) -> 'RootContainer':
        """Build from a raw root stream; raises ParseRootError"""
        codec = codec or TextCodec()
        fields = RootLayout(codec, zip_codec).decode(data)
        return cls(codec=codec, zip_codec=zip_codec, **fields)

    # ── Formula ────────────────────────────────────────────────────────────

    def find_formula_entry(self) -> Optional[Entry]:
        for entry in self.package_parts:
            if entry.is_file and self.formula_section in entry.path:
                return entry
        return None

    def _formula_entry(self) -> Entry:
        entry = self.find_formula_entry()
        if entry is None:
            logger.info(f"No {self.formula_section} in package parts — creating it")
            entry = Entry.file(self.formula_section, '')
            self.package_parts.append(entry)
        return entry

    def get_formula(self) -> Optional[str]:
        entry = self.find_formula_entry()
        if entry is None:
            return None
        if entry.text is None:
            logger.warning(f"{entry.path} is not valid UTF-8 — decoding with replacement")
            return entry.data.decode('utf-8', errors='replace')
        return entry.text

    def set_formula(self, formula: str):
        """
        Replace the formula text, creating Section1.m when missing.
        Permissions are left alone; call reset_permissions() after this.
        """
        entry = self._formula_entry()
        entry.set_text(formula)
        logger.debug(f"Formula set in {entry.path} ({entry.size} bytes)")

    def reset_permissions(self):
        self.permissions = DEFAULT_PERMISSIONS

    # ── Serialization ──────────────────────────────────────────────────────

    def to_bytes(self) -> bytes:
        return self.layout.encode(self)

    def save(self) -> str:
        """Serialize and base64 encode; permission bindings pass through as-is"""
        data = self.to_bytes()
        logger.debug(f"Serialized DataMashup: {len(data)} bytes")
        return base64.b64encode(data).decode('ascii')

    def __repr__(self):
        return (
            f"RootContainer(version={self.version}, {len(self.package_parts)} parts, "
            f"{len(self.permission_bindings)} bytes of bindings)"
        )


def parse_datamashup_xml(xml_text: str, codec: TextCodec = None, zip_codec: ZipCodec = None) -> ParseOutcome:
    """
    Parse the DataMashup element of a custom XML document.

    Never raises for malformed content; the returned ParseOutcome
    carries either the container or the error plus the payload found.
    """
    payload = extract_datamashup(xml_text)
    if not payload:
        logger.debug("No DataMashup element found")
        return ParseOutcome(error=ParseError.DATAMASHUP_NOT_FOUND)

    try:
        data = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        logger.warning(f"DataMashup payload is not valid base64: {e}")
        return ParseOutcome(error=ParseError.BASE64_DECODE_ERROR, payload=payload, message=str(e))

    try:
        container = RootContainer.from_bytes(data, codec=codec, zip_codec=zip_codec)
    except ParseMetadataError as e:
        logger.warning(f"Malformed DataMashup metadata: {e}")
        return ParseOutcome(error=ParseError.PARSE_METADATA_ERROR, payload=payload, message=str(e))
    except ParseRootError as e:
        logger.warning(f"Malformed DataMashup: {e}")
        return ParseOutcome(error=ParseError.PARSE_ROOT_ERROR, payload=payload, message=str(e))

    logger.info(
        f"✅ Parsed DataMashup v{container.version}: {len(container.package_parts)} package parts, "
        f"{len(container.metadata.content)} metadata entries"
    )
    return ParseOutcome(container=container, payload=payload)


__all__ = ["RootContainer", "DEFAULT_PERMISSIONS", "parse_datamashup_xml"]
