from .reader import LayoutReader, LayoutWriter
from .metadata_layout import MetadataBlock, MetadataLayout
from .root_layout import RootLayout

__all__ = [
    "LayoutReader",
    "LayoutWriter",
    "MetadataBlock",
    "MetadataLayout",
    "RootLayout"
]
