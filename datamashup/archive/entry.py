"""
DataMashup Archive Entry
One file or directory unpacked from a ZIP archive.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union


# Timestamp given to entries that were not read from an archive
DEFAULT_DATE_TIME = (1980, 1, 1, 0, 0, 0)


class EntryKind(Enum):
    FILE = 'File'
    DIRECTORY = 'Directory'


@dataclass(frozen=True)
class BytesPayload:
    data: bytes

    def to_bytes(self) -> bytes:
        return self.data


@dataclass(frozen=True)
class TextPayload:
    text: str

    def to_bytes(self) -> bytes:
        return self.text.encode('utf-8')


Payload = Union[BytesPayload, TextPayload]


class Entry:
    def __init__(
        self,
        path: str,
        kind: EntryKind = EntryKind.FILE,
        payload: Payload = None,
        date_time: Tuple[int, ...] = DEFAULT_DATE_TIME,
        compress_type: Optional[int] = None,
        external_attr: int = 0
    ):
        self.path: str = path
        self.kind: EntryKind = kind
        self.payload: Payload = payload if payload is not None else BytesPayload(b'')

        # ZIP member attributes, kept so untouched members repack the same
        self.date_time = tuple(date_time)
        self.compress_type = compress_type
        self.external_attr = external_attr

    @classmethod
    def file(cls, path: str, data: Union[bytes, str] = b'', **kwargs) -> 'Entry':
        if isinstance(data, str):
            payload = TextPayload(data)
        else:
            payload = BytesPayload(bytes(data))
        return cls(path, EntryKind.FILE, payload, **kwargs)

    @classmethod
    def directory(cls, path: str, **kwargs) -> 'Entry':
        if not path.endswith('/'):
            path += '/'
        return cls(path, EntryKind.DIRECTORY, BytesPayload(b''), **kwargs)

    @property
    def is_file(self) -> bool:
        return self.kind is EntryKind.FILE

    @property
    def is_text(self) -> bool:
        return isinstance(self.payload, TextPayload)

    @property
    def text(self) -> Optional[str]:
        """Text payload, or None while the entry holds raw bytes"""
        if isinstance(self.payload, TextPayload):
            return self.payload.text
        return None

    @property
    def data(self) -> bytes:
        return self.payload.to_bytes()

    @property
    def size(self) -> int:
        return len(self.data)

    def set_text(self, text: str):
        self.payload = TextPayload(text)

    def set_data(self, data: bytes):
        self.payload = BytesPayload(bytes(data))

    def to_text(self, encoding: str = 'utf-8') -> 'Entry':
        """Switch a bytes payload to text; raises UnicodeDecodeError"""
        if isinstance(self.payload, BytesPayload):
            self.payload = TextPayload(self.payload.data.decode(encoding))
        return self

    def __repr__(self):
        form = 'text' if self.is_text else 'bytes'
        return f"Entry({self.path!r}, {self.kind.value}, {self.size} bytes, {form})"


__all__ = [
    "Entry",
    "EntryKind",
    "BytesPayload",
    "TextPayload",
    "Payload",
    "DEFAULT_DATE_TIME"
]
