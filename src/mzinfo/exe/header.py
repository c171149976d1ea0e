"""
MZ Header Definitions
=====================

This module decodes the fixed 28-byte header at the start of an MS-DOS
"MZ" executable and derives its geometry.

Header Structure
----------------
Every field is an unsigned little-endian 16-bit word:

    Offset  Field                   Description
    ------  -----                   -----------
    00      signature               "MZ" (0x5A4D)
    02      bytes_in_last_block     Bytes used in the last 512-byte block (0 = all)
    04      blocks_in_file          512-byte blocks in the file, header included
    06      num_relocs              Relocation entries (may be zero)
    08      header_paragraphs       Header size in 16-byte paragraphs
    0A      min_extra_paragraphs    Minimum extra memory (like BSS)
    0C      max_extra_paragraphs    Maximum extra memory
    0E      stack_segment           Initial SS, relative to load segment
    10      stack_pointer           Initial SP
    12      checksum                Word checksum (usually zero)
    14      instruction_pointer     Initial IP
    16      code_segment            Initial CS, relative to load segment
    18      reloc_table_offset      File offset of the relocation table
    1A      overlay_number          Overlay number (0 = main program)

The program image starts immediately after the header, so segment 0 of
the load image sits at file offset header_paragraphs * 16.

Reference
---------
- http://www.delorie.com/djgpp/doc/exe/
- http://www.tavi.co.uk/phobos/exeformat.html
"""

from dataclasses import dataclass
from typing import BinaryIO
import logging
import struct

from mzinfo.errors import InvalidSignatureError, TruncatedHeaderError

logger = logging.getLogger(__name__)


# =============================================================================
# Format Constants
# =============================================================================

MZ_SIGNATURE = 0x5A4D       # "MZ" read as a little-endian word
BLOCK_SIZE = 512            # Unit of bytes_in_last_block / blocks_in_file
PARAGRAPH_SIZE = 16         # Unit of header and memory size fields
HEADER_SIZE = 28            # 14 words

HEADER_FORMAT = "<14H"


# =============================================================================
# Executable Header
# =============================================================================

@dataclass(frozen=True)
class ExeHeader:
    """
    Decoded MZ executable header.

    Instances are immutable once decoded. Derived geometry is exposed as
    properties and computed on access.
    """
    signature: int = MZ_SIGNATURE
    bytes_in_last_block: int = 0
    blocks_in_file: int = 0
    num_relocs: int = 0
    header_paragraphs: int = 0
    min_extra_paragraphs: int = 0
    max_extra_paragraphs: int = 0
    stack_segment: int = 0
    stack_pointer: int = 0
    checksum: int = 0
    instruction_pointer: int = 0
    code_segment: int = 0
    reloc_table_offset: int = 0
    overlay_number: int = 0

    @classmethod
    def from_bytes(cls, data: bytes) -> "ExeHeader":
        """
        Decode a header from the first 28 bytes of data.

        Args:
            data: Raw bytes starting at file offset 0

        Returns:
            The decoded header

        Raises:
            TruncatedHeaderError: If fewer than 28 bytes are given
            InvalidSignatureError: If the signature is not 0x5A4D
        """
        if len(data) < HEADER_SIZE:
            raise TruncatedHeaderError(len(data), HEADER_SIZE)

        # Check the signature before trusting anything else
        (signature,) = struct.unpack_from("<H", data, 0)
        if signature != MZ_SIGNATURE:
            raise InvalidSignatureError(signature)

        return cls(*struct.unpack_from(HEADER_FORMAT, data, 0))

    def to_bytes(self) -> bytes:
        """Serialize the header back to its 28-byte form."""
        return struct.pack(
            HEADER_FORMAT,
            self.signature,
            self.bytes_in_last_block,
            self.blocks_in_file,
            self.num_relocs,
            self.header_paragraphs,
            self.min_extra_paragraphs,
            self.max_extra_paragraphs,
            self.stack_segment,
            self.stack_pointer,
            self.checksum,
            self.instruction_pointer,
            self.code_segment,
            self.reloc_table_offset,
            self.overlay_number,
        )

    # =========================================================================
    # Derived Geometry
    # =========================================================================

    @property
    def header_size(self) -> int:
        """Header size in bytes; also the file offset of load segment 0."""
        return self.header_paragraphs * PARAGRAPH_SIZE

    @property
    def file_size(self) -> int:
        """
        Whole file size in bytes as declared by the block fields.

        A zero bytes_in_last_block means the last block is fully used.
        """
        if self.bytes_in_last_block == 0:
            return self.blocks_in_file * BLOCK_SIZE
        return (self.blocks_in_file - 1) * BLOCK_SIZE + self.bytes_in_last_block

    @property
    def load_size(self) -> int:
        """Size of the load image (whole file minus header)."""
        return self.file_size - self.header_size

    @property
    def min_extra_bytes(self) -> int:
        return self.min_extra_paragraphs * PARAGRAPH_SIZE

    @property
    def max_extra_bytes(self) -> int:
        return self.max_extra_paragraphs * PARAGRAPH_SIZE

    def get_registers(self) -> dict[str, int]:
        """Initial register values, segments relative to the load segment."""
        return {
            "ss": self.stack_segment,
            "sp": self.stack_pointer,
            "cs": self.code_segment,
            "ip": self.instruction_pointer,
        }


def read_header(stream: BinaryIO) -> ExeHeader:
    """
    Read and decode the header from a binary stream.

    Consumes exactly 28 bytes (or whatever is left, if less) from the
    stream's current position.

    Raises:
        TruncatedHeaderError: If fewer than 28 bytes are available
        InvalidSignatureError: If the signature is not 0x5A4D
    """
    data = stream.read(HEADER_SIZE)
    header = ExeHeader.from_bytes(data)
    logger.debug(
        f"Header: {header.header_size} header bytes, {header.file_size} file bytes, "
        f"{header.num_relocs} relocations at offset {header.reloc_table_offset}"
    )
    return header
