"""
DataMashup Permission Bindings Cipher
AES-GCM protection of the permission-bindings field.

Not used when saving: the container copies permission bindings through
untouched. This is for callers that want to inspect or rebuild the field.
"""
import os
import struct
from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC
from .checksum import calculate_bytes_digest
from .logger import logger


class PermissionBindingsCipher:
    DEFAULT_SCOPE = 'Current user'
    DEFAULT_ENTROPY = b'DataExplorer Package Components'
    ITERATIONS = 100000
    IV_SIZE = 12
    TAG_SIZE = 16

    def __init__(self, scope: str = None, entropy: bytes = None):
        self.scope = scope or self.DEFAULT_SCOPE
        self.entropy = entropy or self.DEFAULT_ENTROPY
        self.key = self._derive_key(self.entropy, self.scope)
        self.cipher = AESGCM(self.key)

    def _derive_key(self, entropy: bytes, scope: str) -> bytes:
        kdf = PBKDF2HMAC(
            algorithm=hashes.SHA256(),
            length=32,
            salt=scope.encode('utf-8'),
            iterations=self.ITERATIONS,
        )
        return kdf.derive(entropy)

    @staticmethod
    def build_plaintext(package_parts: bytes, permissions: bytes) -> bytes:
        """Length-prefixed SHA-256 of package parts followed by permissions"""
        out = b''
        for digest in (calculate_bytes_digest(package_parts), calculate_bytes_digest(permissions)):
            out += struct.pack('<I', len(digest)) + digest
        return out

    def encrypt_bytes(self, data: bytes, iv: bytes = None) -> bytes:
        # Layout: iv | tag | ciphertext
        iv = iv or os.urandom(self.IV_SIZE)
        sealed = self.cipher.encrypt(iv, data, None)
        ciphertext, tag = sealed[:-self.TAG_SIZE], sealed[-self.TAG_SIZE:]
        return iv + tag + ciphertext

    def decrypt_bytes(self, data: bytes) -> bytes:
        if len(data) < self.IV_SIZE + self.TAG_SIZE:
            raise ValueError(f"Permission bindings too short: {len(data)} bytes")

        iv = data[:self.IV_SIZE]
        tag = data[self.IV_SIZE:self.IV_SIZE + self.TAG_SIZE]
        ciphertext = data[self.IV_SIZE + self.TAG_SIZE:]
        try:
            return self.cipher.decrypt(iv, ciphertext + tag, None)
        except InvalidTag:
            logger.warning("Permission bindings failed authentication")
            raise ValueError("Permission bindings failed authentication")

    def compute_bindings(self, package_parts: bytes, permissions: bytes, iv: bytes = None) -> bytes:
        return self.encrypt_bytes(self.build_plaintext(package_parts, permissions), iv=iv)

    def verify_bindings(self, bindings: bytes, package_parts: bytes, permissions: bytes) -> bool:
        """True when bindings decrypt to the hashes of the given fields"""
        try:
            plain = self.decrypt_bytes(bindings)
        except ValueError:
            return False
        return plain == self.build_plaintext(package_parts, permissions)

__all__ = ["PermissionBindingsCipher"]
