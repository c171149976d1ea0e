"""
MZ Executable Parser
====================

This module ties the header decoder and the relocation resolver together
into one pass over a single open file.

ExeParser
---------
The ExeParser class opens an executable, decodes and validates its
header, reads the relocation table and resolves each entry's target.
The file handle is owned by the parser for the duration of the pass and
is closed on every exit path.

Usage Examples
--------------
Inspecting an executable:
    >>> from mzinfo.exe import ExeParser
    >>> parser = ExeParser.from_file("GAME.EXE")
    >>> print(f"Load image: {parser.header.load_size} bytes")
    >>> for reloc in parser.resolved:
    ...     print(f"[{reloc.index}] {reloc.segment:04X}:{reloc.offset:04X} -> {reloc.value:04X}")

Parsing from memory:
    >>> parser = ExeParser.from_bytes(data)
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO, Optional, Union
import io
import logging

from mzinfo.errors import ExeIOError, InvalidSignatureError, MZError
from mzinfo.exe.checksum import ChecksumAnalysis, analyze_checksum
from mzinfo.exe.header import ExeHeader, read_header
from mzinfo.exe.relocations import (
    RelocationEntry,
    RelocationReport,
    ResolvedRelocation,
    read_relocation_table,
    resolve_relocations,
)

logger = logging.getLogger(__name__)


@dataclass
class ExeParser:
    """
    Parsed view of an MZ executable.

    Attributes:
        header: The decoded header
        relocations: Every relocation table entry, in table order
        report: Resolution result (resolved entries and skipped count)
        path: The source file, when parsed from disk
        checksum: Word checksum analysis, when requested
    """
    header: ExeHeader
    relocations: tuple[RelocationEntry, ...] = field(default_factory=tuple)
    report: RelocationReport = field(default_factory=RelocationReport)
    path: Optional[Path] = None
    checksum: Optional[ChecksumAnalysis] = None

    @classmethod
    def from_stream(
        cls,
        stream: BinaryIO,
        path: Optional[Path] = None,
        checksum: bool = False,
    ) -> "ExeParser":
        """
        Parse an executable from a seekable binary stream positioned at 0.

        When checksum is True the word checksum is computed from the same
        stream after the relocations are resolved.

        Raises:
            TruncatedHeaderError: If the header is shorter than 28 bytes
            InvalidSignatureError: If the signature is not "MZ"
            TruncatedRelocationTableError: If the relocation table is cut short
            RelocationBufferError: If the relocation table cannot be allocated
        """
        try:
            header = read_header(stream)
            relocations = read_relocation_table(
                stream, header.num_relocs, header.reloc_table_offset
            )
        except MZError as e:
            logger.debug(f"Failed to parse {path or '<stream>'}: {e}")
            raise

        report = resolve_relocations(stream, relocations, header.header_size)
        logger.debug(
            f"Resolved {len(report.resolved)} of {len(relocations)} relocations "
            f"({report.skipped} skipped)"
        )

        analysis = None
        if checksum:
            stream.seek(0, io.SEEK_SET)
            analysis = analyze_checksum(stream.read(), header.checksum)

        return cls(
            header=header,
            relocations=relocations,
            report=report,
            path=path,
            checksum=analysis,
        )

    @classmethod
    def from_file(cls, filepath: Union[str, Path], checksum: bool = False) -> "ExeParser":
        """
        Open and parse an executable from disk.

        Raises:
            ExeIOError: If the file cannot be opened or read
            ExeFormatError: If the header or relocation table is malformed
        """
        filepath = Path(filepath)
        try:
            with filepath.open("rb") as stream:
                return cls.from_stream(stream, path=filepath, checksum=checksum)
        except InvalidSignatureError as e:
            raise InvalidSignatureError(e.signature, str(filepath)) from None
        except OSError as e:
            raise ExeIOError(str(filepath), e.strerror or str(e)) from e

    @classmethod
    def from_bytes(cls, data: bytes, checksum: bool = False) -> "ExeParser":
        """Parse an executable held in memory."""
        return cls.from_stream(io.BytesIO(data), checksum=checksum)

    # =========================================================================
    # Public Query Methods
    # =========================================================================

    @property
    def resolved(self) -> tuple[ResolvedRelocation, ...]:
        """Relocations whose target word could be read, in table order."""
        return self.report.resolved

    @property
    def skipped(self) -> int:
        """Number of relocations whose target could not be read."""
        return self.report.skipped

    def get_info(self) -> dict:
        """
        Get summary information about the executable.

        Returns:
            Dictionary with header geometry and relocation counts
        """
        header = self.header
        return {
            "header_size": header.header_size,
            "file_size": header.file_size,
            "load_size": header.load_size,
            "min_extra_bytes": header.min_extra_bytes,
            "max_extra_bytes": header.max_extra_bytes,
            "registers": header.get_registers(),
            "checksum": f"0x{header.checksum:04X}",
            "overlay_number": header.overlay_number,
            "relocation_count": header.num_relocs,
            "relocation_table_offset": header.reloc_table_offset,
            "resolved_count": len(self.resolved),
            "skipped_count": self.skipped,
        }


# =============================================================================
# Convenience Functions
# =============================================================================

def parse_exe(data: bytes) -> ExeParser:
    """Parse an MZ executable from bytes."""
    return ExeParser.from_bytes(data)


def parse_exe_file(filepath: Union[str, Path]) -> ExeParser:
    """Parse an MZ executable from disk."""
    return ExeParser.from_file(filepath)
