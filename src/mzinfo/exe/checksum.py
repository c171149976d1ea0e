"""
MZ Word Checksum
================

The header word at offset 0x12 is a checksum chosen so that the 16-bit
sum of every little-endian word in the file, checksum included, is zero.
Linkers rarely fill it in and DOS never checks it, so this module only
reports on it.

An odd-length file is summed as if padded with a single zero byte.
"""

from dataclasses import dataclass
import struct


@dataclass
class ChecksumAnalysis:
    """
    Result of checking the MZ word checksum.

    Attributes:
        stored_checksum: The checksum word stored in the header
        word_sum: 16-bit sum of every word in the file
        expected_checksum: The value the checksum word would need to hold
    """
    stored_checksum: int
    word_sum: int
    expected_checksum: int

    @property
    def is_valid(self) -> bool:
        return self.word_sum == 0

    @property
    def is_unset(self) -> bool:
        return self.stored_checksum == 0


def calculate_word_sum(data: bytes) -> int:
    """
    Sum all little-endian 16-bit words of data, modulo 0x10000.

    Example:
        >>> calculate_word_sum(bytes([0x01, 0x00, 0xFF, 0xFF]))
        0
    """
    if len(data) % 2:
        data = data + b"\x00"
    return sum(word for (word,) in struct.iter_unpack("<H", data)) & 0xFFFF


def analyze_checksum(data: bytes, stored_checksum: int) -> ChecksumAnalysis:
    """
    Check the MZ checksum of a complete file image.

    Args:
        data: The whole file contents
        stored_checksum: The header's checksum field
    """
    word_sum = calculate_word_sum(data)
    # Sum of everything except the checksum word, negated
    expected = (-(word_sum - stored_checksum)) & 0xFFFF
    return ChecksumAnalysis(
        stored_checksum=stored_checksum,
        word_sum=word_sum,
        expected_checksum=expected,
    )


def verify_checksum(data: bytes) -> bool:
    """Return True if the word sum of the file is zero."""
    return calculate_word_sum(data) == 0
