"""
DataMashup Metadata Layout
Nested block stored in the root metadata field:

    version            uint32 LE
    metadataXmlLength  uint32 LE
    metadataXml        UTF-8 text
    contentLength      uint32 LE
    content            ZIP archive
"""
from typing import List
from ..archive.entry import Entry
from ..archive.zip_codec import ZipCodec
from ..config import config
from ..errors import ParseMetadataError
from ..utils.logger import logger
from ..utils.text import TextCodec
from .reader import LayoutReader, LayoutWriter


class MetadataBlock:
    def __init__(self, version: int = 0, metadata_text: str = '', content: List[Entry] = None):
        self.version = version
        self.metadata_text = metadata_text
        self.content: List[Entry] = content if content is not None else []

    def __repr__(self):
        return f"MetadataBlock(version={self.version}, {len(self.content)} entries)"


class MetadataLayout:
    def __init__(self, codec: TextCodec, zip_codec: ZipCodec = None, text_suffixes: tuple = None):
        self.codec = codec
        self.zip_codec = zip_codec or ZipCodec()
        self.text_suffixes = text_suffixes or config.text_suffixes

    def decode(self, data: bytes) -> MetadataBlock:
        reader = LayoutReader(data, error_class=ParseMetadataError)
        version = reader.read_uint32('metadataVersion')
        metadata_xml = reader.read_prefixed('metadataXml')
        content = reader.read_prefixed('content')

        if reader.remaining:
            logger.warning(f"Ignoring {reader.remaining} trailing bytes after metadata content")

        try:
            metadata_text = self.codec.decode_utf8(metadata_xml)
        except UnicodeDecodeError as e:
            raise ParseMetadataError(f"metadataXml is not valid UTF-8: {e}")

        entries = self.zip_codec.unpack(content, text_suffixes=self.text_suffixes)
        logger.debug(f"Metadata v{version}: {len(metadata_xml)} bytes XML, {len(entries)} content entries")
        return MetadataBlock(version, metadata_text, entries)

    def encode(self, block: MetadataBlock) -> bytes:
        writer = LayoutWriter()
        writer.write_uint32(block.version)
        writer.write_prefixed(self.codec.encode_utf8(block.metadata_text))
        writer.write_prefixed(self.zip_codec.pack(block.content))
        return writer.getvalue()


__all__ = ["MetadataBlock", "MetadataLayout"]
