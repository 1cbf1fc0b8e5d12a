"""
DataMashup Spreadsheet Package
Opens a whole .xlsx/.xlsm archive, finds the custom XML part holding the
DataMashup element and writes formula edits back into the archive.
"""
import os
import shutil
import tempfile
from pathlib import Path
from typing import BinaryIO, List, Optional, Union
from ..archive.entry import Entry
from ..archive.zip_codec import ZipCodec
from ..config import config
from ..container.container import parse_datamashup_xml
from ..errors import ParseError, ParseOutcome
from ..extractor.tag_extractor import replace_datamashup
from ..utils.logger import logger
from ..utils.text import TextCodec


DATAMASHUP_MARKERS = ('<DataMashup ', '<DataMashup>')


class DataMashupPart:
    """The custom XML entry that holds the DataMashup, as found"""

    def __init__(self, entry: Entry, xml: str, encoding: str, outcome: ParseOutcome):
        self.entry = entry
        self.xml = xml
        self.encoding = encoding
        self.outcome = outcome

    @property
    def container(self):
        return self.outcome.container

    @property
    def error(self) -> Optional[ParseError]:
        return self.outcome.error


class SpreadsheetPackage:
    def __init__(self, entries: List[Entry], codec: TextCodec = None, zip_codec: ZipCodec = None):
        self.entries = entries
        self.codec = codec or TextCodec()
        self.zip_codec = zip_codec or ZipCodec()
        self.datamashup: Optional[DataMashupPart] = None

    @classmethod
    def open(cls, data: Union[bytes, BinaryIO], codec: TextCodec = None, zip_codec: ZipCodec = None) -> 'SpreadsheetPackage':
        zip_codec = zip_codec or ZipCodec()
        package = cls(zip_codec.unpack(data), codec=codec, zip_codec=zip_codec)
        package._load_datamashup()
        return package

    @classmethod
    def from_file(cls, path: str, codec: TextCodec = None) -> 'SpreadsheetPackage':
        logger.info(f"Opening: {path}")
        with open(path, 'rb') as f:
            return cls.open(f, codec=codec)

    # ── Loading ────────────────────────────────────────────────────────────

    def _marker_encoding(self, data: bytes) -> Optional[str]:
        for marker in DATAMASHUP_MARKERS:
            if self.codec.encode_utf8(marker) in data:
                return TextCodec.UTF8
        for marker in DATAMASHUP_MARKERS:
            if self.codec.encode_utf16le(marker) in data:
                return TextCodec.UTF16LE
        return None

    def find_datamashup_entry(self):
        """(entry, encoding) of the first custom XML part with a DataMashup"""
        hints = config.custom_xml_hints
        for entry in self.entries:
            if not entry.is_file or not all(hint in entry.path for hint in hints):
                continue
            encoding = self._marker_encoding(entry.data)
            if encoding:
                return entry, encoding
        return None, None

    def _load_datamashup(self):
        entry, encoding = self.find_datamashup_entry()
        if entry is None:
            logger.info("No Power Query found in package")
            return

        logger.info(f"Found DataMashup in {entry.path} ({encoding})")
        try:
            xml = self.codec.decode(entry.data, encoding)
        except UnicodeDecodeError as e:
            logger.warning(f"Could not decode {entry.path} as {encoding}: {e}")
            outcome = ParseOutcome(error=ParseError.XML_DECODE_ERROR, message=str(e))
            self.datamashup = DataMashupPart(entry, '', encoding, outcome)
            return

        outcome = parse_datamashup_xml(xml, codec=self.codec, zip_codec=self.zip_codec)
        self.datamashup = DataMashupPart(entry, xml, encoding, outcome)

    # ── Formula ────────────────────────────────────────────────────────────

    @property
    def container(self):
        if self.datamashup is None:
            return None
        return self.datamashup.container

    def get_formula(self) -> Optional[str]:
        if self.container is None:
            return None
        return self.container.get_formula()

    def set_formula(self, formula: str):
        """Set the formula and reset permissions to the defaults"""
        container = self.container
        if container is None:
            logger.warning("No parsed DataMashup in package — formula not set")
            return
        container.set_formula(formula)
        container.reset_permissions()

    # ── Saving ─────────────────────────────────────────────────────────────

    def save(self) -> bytes:
        """Repack the archive with the current DataMashup spliced in"""
        part = self.datamashup
        if part is None or part.container is None:
            return self.zip_codec.pack(self.entries)

        binary_string = part.container.save()
        part.xml = replace_datamashup(part.xml, binary_string)
        part.entry.set_data(self.codec.encode(part.xml, part.encoding))
        return self.zip_codec.pack(self.entries)

    def save_to(self, output_path: str) -> dict:
        """Write save() output to disk through a temp file in the same directory"""
        tmp_path = None
        try:
            data = self.save()
            if not data:
                raise ValueError("Packing produced an empty archive")

            tmp_fd, tmp_path = tempfile.mkstemp(
                suffix='.xlsx.tmp',
                dir=Path(output_path).resolve().parent
            )
            with os.fdopen(tmp_fd, 'wb') as out_f:
                out_f.write(data)

            shutil.move(tmp_path, output_path)
            tmp_path = None

            logger.info(f"✅ Saved: {output_path}")
            return {
                'success': True,
                'output_file': str(output_path),
                'size': len(data),
                'has_datamashup': self.container is not None
            }

        except Exception as e:
            logger.error(f"Save failed: {e}", exc_info=True)
            raise
        finally:
            if tmp_path and os.path.exists(tmp_path):
                os.remove(tmp_path)


def open_spreadsheet_package(data: Union[bytes, BinaryIO], codec: TextCodec = None) -> SpreadsheetPackage:
    return SpreadsheetPackage.open(data, codec=codec)


__all__ = ["SpreadsheetPackage", "DataMashupPart", "open_spreadsheet_package"]
