"""
mzinfo Error Hierarchy
======================

This module defines the exception hierarchy for the whole package.
All exceptions inherit from MZError, allowing callers to catch every
inspection error with a single except clause.

Exception Hierarchy
-------------------
MZError (base)
├── ExeIOError - file cannot be opened or read
├── ExeFormatError (structural decode failures)
│   ├── TruncatedHeaderError - fewer than 28 header bytes
│   ├── InvalidSignatureError - signature is not "MZ"
│   └── TruncatedRelocationTableError - relocation table cut short
├── RelocationBufferError - relocation table buffer cannot be allocated
└── UnresolvedTargetError - a single relocation target cannot be read

Structural errors are fatal for a run. UnresolvedTargetError is the only
recoverable one: the relocation resolver catches it and skips the entry.
"""

from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class MZError(Exception):
    """
    Base exception for all mzinfo errors.

        try:
            parser = ExeParser.from_file("game.exe")
        except MZError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# I/O Exceptions
# =============================================================================

class ExeIOError(MZError):
    """
    The executable cannot be opened or read.

    Wraps the underlying OSError so that the message carries the
    operating system's error text.

    Attributes:
        path: The path that failed to open
        reason: The system error text (e.g. "No such file or directory")
    """

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"cannot open '{path}': {reason}")


# =============================================================================
# Format Exceptions
# =============================================================================

class ExeFormatError(MZError):
    """Base exception for malformed executable structure."""
    pass


class TruncatedHeaderError(ExeFormatError):
    """
    Fewer than 28 bytes were available for the MZ header.

    No partially decoded header is ever returned.
    """

    def __init__(self, available: int, required: int = 28):
        self.available = available
        self.required = required
        super().__init__(
            f"header truncated: need {required} bytes, got {available}"
        )


class InvalidSignatureError(ExeFormatError):
    """
    The signature word is not 0x5A4D ("MZ").

    Raised before any other header field is interpreted.
    """

    def __init__(self, signature: int, path: Optional[str] = None):
        self.signature = signature
        self.path = path
        where = f"'{path}' " if path else ""
        super().__init__(
            f"file {where}is not a valid DOS executable "
            f"(signature 0x{signature:04X})"
        )


class TruncatedRelocationTableError(ExeFormatError):
    """
    The relocation table ended before all declared entries were read.

    Attributes:
        declared: Number of entries the header declares
        read: Number of complete entries actually present
        table_offset: File offset of the relocation table
    """

    def __init__(self, declared: int, read: int, table_offset: int):
        self.declared = declared
        self.read = read
        self.table_offset = table_offset
        super().__init__(
            f"relocation table truncated at entry {read} of {declared} "
            f"(table offset {table_offset})"
        )


# =============================================================================
# Resource Exceptions
# =============================================================================

class RelocationBufferError(MZError):
    """The in-memory buffer for the relocation table cannot be allocated."""

    def __init__(self, count: int):
        self.count = count
        super().__init__(f"cannot allocate relocation table for {count} entries")


# =============================================================================
# Recoverable Exceptions
# =============================================================================

class UnresolvedTargetError(MZError):
    """
    A relocation target could not be read.

    The computed file offset lies beyond the end of the file or fewer
    than two bytes remain there. The resolver treats this as "not
    reportable" and moves on to the next entry.
    """

    def __init__(self, file_offset: int, available: int = 0):
        self.file_offset = file_offset
        self.available = available
        super().__init__(
            f"relocation target at offset {file_offset} is unreadable "
            f"({available} of 2 bytes available)"
        )
