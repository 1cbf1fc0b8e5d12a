"""
DataMashup Zip Codec
Unpacks ZIP archives into Entry lists and packs them back.
Failures are recovered here: unpack gives [] and pack gives b''.
"""
import io
import struct
import zipfile
import zlib
from typing import BinaryIO, Iterable, List, Optional, Tuple, Union
from ..config import config
from ..utils.logger import logger
from .entry import Entry, EntryKind

UNPACK_ERRORS = (
    zipfile.BadZipFile,
    zipfile.LargeZipFile,
    zlib.error,
    NotImplementedError,
    RuntimeError,
    EOFError,
    ValueError,
    IndexError,
    KeyError,
    struct.error,
    OSError
)

PACK_ERRORS = (
    zipfile.LargeZipFile,
    zlib.error,
    ValueError,
    TypeError
)

# drwxrwxr-x plus the MS-DOS directory flag
DIRECTORY_ATTR = (0o40775 << 16) | 0x10


class ZipCodec:
    def __init__(
        self,
        compression: int = None,
        compresslevel: Optional[int] = None,
        chunk_size: int = None
    ):
        self.compression = config.compression if compression is None else compression
        self.compresslevel = config.compresslevel if compresslevel is None else compresslevel
        self.chunk_size = chunk_size or config.chunk_size

    def _read_chunks(self, source: Union[bytes, bytearray, BinaryIO]) -> bytes:
        """Accumulate the whole source before handing it to zipfile"""
        if isinstance(source, (bytes, bytearray, memoryview)):
            source = io.BytesIO(bytes(source))

        buffer = io.BytesIO()
        while chunk := source.read(self.chunk_size):
            buffer.write(chunk)
        return buffer.getvalue()

    def unpack(
        self,
        source: Union[bytes, bytearray, BinaryIO],
        text_suffixes: Tuple[str, ...] = ()
    ) -> List[Entry]:
        """
        Unpack an archive into entries, in archive order.

        Files whose path ends with one of text_suffixes are decoded to
        UTF-8 text; undecodable ones stay as bytes.
        """
        data = self._read_chunks(source)
        if not data:
            logger.debug("Empty archive buffer — no entries")
            return []

        entries = []
        try:
            with zipfile.ZipFile(io.BytesIO(data)) as thezip:
                for info in thezip.infolist():
                    if not info.filename:
                        logger.warning("Skipping archive member with an empty name")
                        continue
                    entries.append(self._read_entry(thezip, info, text_suffixes))
        except UNPACK_ERRORS as e:
            logger.error(f"Failed to unpack archive ({len(data)} bytes): {e}")
            return []

        logger.debug(f"Unpacked {len(entries)} entries from {len(data)} bytes")
        return entries

    def _read_entry(self, thezip: zipfile.ZipFile, info: zipfile.ZipInfo,
                    text_suffixes: Tuple[str, ...]) -> Entry:
        attrs = {
            'date_time': info.date_time,
            'compress_type': info.compress_type,
            'external_attr': info.external_attr
        }
        if info.filename.endswith('/'):
            return Entry(info.filename, EntryKind.DIRECTORY, **attrs)

        entry = Entry.file(info.filename, thezip.read(info), **attrs)
        if text_suffixes and info.filename.endswith(text_suffixes):
            try:
                entry.to_text()
            except UnicodeDecodeError:
                logger.warning(f"{info.filename} is not valid UTF-8 — kept as bytes")
        return entry

    def pack(self, entries: Iterable[Entry]) -> bytes:
        """Pack entries in order, each in its current representation"""
        out_data = io.BytesIO()
        count = 0
        try:
            with zipfile.ZipFile(out_data, 'w', compression=self.compression) as zipwrite:
                for entry in entries:
                    self._write_entry(zipwrite, entry)
                    count += 1
        except PACK_ERRORS as e:
            logger.error(f"Failed to pack archive: {e}")
            return b''

        logger.debug(f"Packed {count} entries into {out_data.tell()} bytes")
        return out_data.getvalue()

    def _write_entry(self, zipwrite: zipfile.ZipFile, entry: Entry):
        info = zipfile.ZipInfo(entry.path, date_time=entry.date_time)
        if entry.compress_type is not None:
            info.compress_type = entry.compress_type
        else:
            info.compress_type = self.compression

        if entry.kind is EntryKind.DIRECTORY:
            if not info.filename.endswith('/'):
                info.filename += '/'
            info.compress_type = zipfile.ZIP_STORED
            info.external_attr = entry.external_attr or DIRECTORY_ATTR
            zipwrite.writestr(info, b'')
            return

        info.external_attr = entry.external_attr
        if self.compresslevel is not None:
            zipwrite.writestr(info, entry.data, compresslevel=self.compresslevel)
        else:
            zipwrite.writestr(info, entry.data)


__all__ = ["ZipCodec"]
