"""
DataMashup Text Codec
UTF-8 and UTF-16LE conversions used by the layout and package layers.
Stateless; build one and pass it to whoever needs it.
"""


class TextCodec:
    UTF8 = 'utf-8'
    UTF16LE = 'utf-16-le'

    def encode_utf8(self, text: str) -> bytes:
        return text.encode(self.UTF8)

    def decode_utf8(self, data: bytes) -> str:
        return bytes(data).decode(self.UTF8)

    def encode_utf16le(self, text: str) -> bytes:
        return text.encode(self.UTF16LE)

    def decode_utf16le(self, data: bytes) -> str:
        return bytes(data).decode(self.UTF16LE)

    def encode(self, text: str, encoding: str) -> bytes:
        """Encode with one of the two supported encodings"""
        if encoding == self.UTF16LE:
            return self.encode_utf16le(text)
        return self.encode_utf8(text)

    def decode(self, data: bytes, encoding: str) -> str:
        if encoding == self.UTF16LE:
            return self.decode_utf16le(data)
        return self.decode_utf8(data)


__all__ = ["TextCodec"]
