"""
DataMashup Root Layout
Top-level binary stream found inside the DataMashup element:

    version                   uint32 LE
    packagePartsLength        uint32 LE
    packageParts              ZIP archive
    permissionsLength         uint32 LE
    permissions               UTF-8 XML
    metadataLength            uint32 LE
    metadata                  nested block (see metadata_layout)
    permissionBindingsLength  uint32 LE
    permissionBindings        opaque bytes
"""
from ..archive.zip_codec import ZipCodec
from ..config import config
from ..errors import ParseRootError
from ..utils.logger import logger
from ..utils.text import TextCodec
from .metadata_layout import MetadataLayout
from .reader import LayoutReader, LayoutWriter


class RootLayout:
    def __init__(self, codec: TextCodec, zip_codec: ZipCodec = None, text_suffixes: tuple = None):
        self.codec = codec
        self.zip_codec = zip_codec or ZipCodec()
        self.text_suffixes = text_suffixes or config.text_suffixes
        self.metadata_layout = MetadataLayout(codec, self.zip_codec, self.text_suffixes)

    def decode(self, data: bytes) -> dict:
        """
        Parse the root stream into its fields.

        Raises ParseRootError (or ParseMetadataError for the nested block)
        when a declared length runs past the end of the buffer.
        """
        reader = LayoutReader(data)
        version = reader.read_uint32('version')
        package_parts = reader.read_prefixed('packageParts')
        permissions = reader.read_prefixed('permissions')
        metadata = reader.read_prefixed('metadata')
        permission_bindings = reader.read_prefixed('permissionBindings')

        if reader.remaining:
            logger.warning(f"Ignoring {reader.remaining} trailing bytes after permission bindings")

        logger.debug(
            f"Root v{version}: packageParts={len(package_parts)} permissions={len(permissions)} "
            f"metadata={len(metadata)} permissionBindings={len(permission_bindings)}"
        )

        try:
            permissions_text = self.codec.decode_utf8(permissions)
        except UnicodeDecodeError as e:
            raise ParseRootError(f"permissions is not valid UTF-8: {e}")

        return {
            'version': version,
            'package_parts': self.zip_codec.unpack(package_parts, text_suffixes=self.text_suffixes),
            'permissions': permissions_text,
            'metadata': self.metadata_layout.decode(metadata),
            'permission_bindings': permission_bindings
        }

    def encode(self, root) -> bytes:
        """Serialize any object carrying the decoded root fields"""
        writer = LayoutWriter()
        writer.write_uint32(root.version)
        writer.write_prefixed(self.zip_codec.pack(root.package_parts))
        writer.write_prefixed(self.codec.encode_utf8(root.permissions))
        writer.write_prefixed(self.metadata_layout.encode(root.metadata))
        writer.write_prefixed(bytes(root.permission_bindings))
        return writer.getvalue()


__all__ = ["RootLayout"]
