"""
MZ Relocation Table
===================

This module reads the relocation table of an MZ executable and resolves
what each entry points to.

Relocation Entry Format
-----------------------
Each entry is 4 bytes, little-endian:

    Offset  Size    Description
    ------  ----    -----------
    0       2       Offset within the segment
    2       2       Segment, relative to the start of the load image

An entry names a word in the load image that holds a segment value the
loader would adjust. The file offset of that word is:

    (segment << 4) + offset + header_size

Failure Policy
--------------
The two stages fail differently:

- Reading the table is all-or-nothing. A short table means the file is
  truncated and TruncatedRelocationTableError aborts the run.
- Resolving a target is per entry. A target outside the file raises
  UnresolvedTargetError, which resolve_relocations() catches; the entry
  is left out of the result and counted as skipped.
"""

from dataclasses import dataclass, field
from typing import BinaryIO, Iterable
import io
import logging
import struct

from mzinfo.errors import (
    RelocationBufferError,
    TruncatedRelocationTableError,
    UnresolvedTargetError,
)

logger = logging.getLogger(__name__)


RELOCATION_ENTRY_SIZE = 4
RELOCATION_ENTRY_FORMAT = "<HH"
TARGET_WORD_SIZE = 2


# =============================================================================
# Data Structures
# =============================================================================

@dataclass(frozen=True)
class RelocationEntry:
    """One 4-byte relocation table entry."""
    offset: int
    segment: int

    @classmethod
    def from_bytes(cls, data: bytes, pos: int = 0) -> "RelocationEntry":
        offset, segment = struct.unpack_from(RELOCATION_ENTRY_FORMAT, data, pos)
        return cls(offset=offset, segment=segment)

    def to_bytes(self) -> bytes:
        return struct.pack(RELOCATION_ENTRY_FORMAT, self.offset, self.segment)

    def __str__(self) -> str:
        return f"{self.segment:04X}:{self.offset:04X}"


@dataclass(frozen=True)
class ResolvedRelocation:
    """
    A relocation entry together with the word stored at its target.

    Attributes:
        index: Position of the entry in the relocation table
        segment: Entry segment (relative to the load image)
        offset: Entry offset within the segment
        file_offset: Absolute file offset of the target word
        value: The 16-bit little-endian word found there
    """
    index: int
    segment: int
    offset: int
    file_offset: int
    value: int


@dataclass
class RelocationReport:
    """
    Result of resolving a relocation table.

    Attributes:
        resolved: Entries whose target could be read, in table order
        skipped: Number of entries whose target could not be read
    """
    resolved: tuple[ResolvedRelocation, ...] = field(default_factory=tuple)
    skipped: int = 0

    def __len__(self) -> int:
        return len(self.resolved)

    def __iter__(self):
        return iter(self.resolved)


# =============================================================================
# Table Reading
# =============================================================================

def read_relocation_table(
    stream: BinaryIO, count: int, table_offset: int
) -> tuple[RelocationEntry, ...]:
    """
    Read the whole relocation table into memory.

    Args:
        stream: Seekable binary stream over the executable
        count: Number of entries declared by the header
        table_offset: File offset of the first entry

    Returns:
        The entries in table order

    Raises:
        RelocationBufferError: If the table buffer cannot be allocated
        TruncatedRelocationTableError: If any entry is incomplete
    """
    if count == 0:
        return ()

    size = count * RELOCATION_ENTRY_SIZE
    stream.seek(table_offset, io.SEEK_SET)
    try:
        data = stream.read(size)
    except MemoryError as e:
        raise RelocationBufferError(count) from e

    if len(data) < size:
        raise TruncatedRelocationTableError(
            declared=count,
            read=len(data) // RELOCATION_ENTRY_SIZE,
            table_offset=table_offset,
        )

    entries = tuple(
        RelocationEntry(offset=offset, segment=segment)
        for offset, segment in struct.iter_unpack(RELOCATION_ENTRY_FORMAT, data)
    )
    logger.debug(f"Read {len(entries)} relocation entries from offset {table_offset}")
    return entries


# =============================================================================
# Target Resolution
# =============================================================================

def target_offset(entry: RelocationEntry, header_size: int) -> int:
    """
    File offset of the word a relocation entry refers to.

    Segment 0 starts immediately after the header, so the header size is
    added to the real-mode (segment << 4) + offset address.
    """
    return (entry.segment << 4) + entry.offset + header_size


def resolve_target(stream: BinaryIO, file_offset: int) -> int:
    """
    Read the 16-bit word stored at file_offset.

    Raises:
        UnresolvedTargetError: If fewer than two bytes are available there
    """
    stream.seek(file_offset, io.SEEK_SET)
    data = stream.read(TARGET_WORD_SIZE)
    if len(data) < TARGET_WORD_SIZE:
        raise UnresolvedTargetError(file_offset, len(data))
    (value,) = struct.unpack("<H", data)
    return value


def resolve_relocations(
    stream: BinaryIO,
    entries: Iterable[RelocationEntry],
    header_size: int,
) -> RelocationReport:
    """
    Resolve every relocation entry, skipping unreadable targets.

    Each entry is looked up independently. An entry whose target cannot
    be read is left out of the result; the others are unaffected.

    Args:
        stream: Seekable binary stream over the executable
        entries: Entries as returned by read_relocation_table()
        header_size: Header size in bytes (header_paragraphs * 16)

    Returns:
        A RelocationReport with the resolved entries in table order
    """
    resolved = []
    skipped = 0

    for index, entry in enumerate(entries):
        file_offset = target_offset(entry, header_size)
        try:
            value = resolve_target(stream, file_offset)
        except UnresolvedTargetError as e:
            logger.debug(f"Skipping relocation [{index}] {entry}: {e}")
            skipped += 1
            continue

        resolved.append(ResolvedRelocation(
            index=index,
            segment=entry.segment,
            offset=entry.offset,
            file_offset=file_offset,
            value=value,
        ))

    return RelocationReport(resolved=tuple(resolved), skipped=skipped)
