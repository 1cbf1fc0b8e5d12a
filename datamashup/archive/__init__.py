from .entry import Entry, EntryKind, BytesPayload, TextPayload
from .zip_codec import ZipCodec

__all__ = [
    "Entry",
    "EntryKind",
    "BytesPayload",
    "TextPayload",
    "ZipCodec"
]
