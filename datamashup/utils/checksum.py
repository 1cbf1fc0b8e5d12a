"""
DataMashup Checksum Utility
Calculates SHA-256 hashes of container fields.
"""
import hashlib
from typing import Union

def calculate_bytes_checksum(data: Union[bytes, str]) -> str:
    """
    Calculates the SHA-256 checksum of a byte string or text string.
    
    Args:
        data: The input data (bytes or string)
        
    Returns:
        str: The hexadecimal hash string
    """
    if isinstance(data, str):
        data = data.encode('utf-8')
    
    return calculate_bytes_digest(data).hex()

def calculate_bytes_digest(data: bytes) -> bytes:
    """Raw 32-byte SHA-256 digest"""
    sha256_hash = hashlib.sha256()
    sha256_hash.update(data)
    return sha256_hash.digest()

__all__ = ["calculate_bytes_checksum", "calculate_bytes_digest"]
