"""
MS-DOS MZ Executable Handling
=============================

This module reads the structure of MS-DOS "MZ" executables without
loading or running them.

Overview
--------
An MZ executable starts with a 28-byte header, followed (usually) by a
relocation table and then the load image. This module provides:
- **ExeHeader**: The decoded header and its derived geometry
- **Relocation table**: Reading entries and resolving the words they point to
- **ExeParser**: One-pass inspection of a file from disk or memory
- **Checksum utilities**: Informational word checksum analysis
- **Report formatting**: The textual report printed by the CLI

Quick Start
-----------
    >>> from mzinfo.exe import ExeParser
    >>> parser = ExeParser.from_file("GAME.EXE")
    >>> print(parser.header.file_size, parser.header.load_size)
    >>> for entry in parser.relocations:
    ...     print(entry)

Units
-----
- Block: 512 bytes (file size fields)
- Paragraph: 16 bytes (header and memory size fields)

Reference
---------
- http://www.delorie.com/djgpp/doc/exe/
- http://www.tavi.co.uk/phobos/exeformat.html
"""

# =============================================================================
# Public API Exports
# =============================================================================

from mzinfo.exe.header import (
    MZ_SIGNATURE,
    BLOCK_SIZE,
    PARAGRAPH_SIZE,
    HEADER_SIZE,
    ExeHeader,
    read_header,
)

from mzinfo.exe.relocations import (
    RELOCATION_ENTRY_SIZE,
    RelocationEntry,
    ResolvedRelocation,
    RelocationReport,
    read_relocation_table,
    target_offset,
    resolve_target,
    resolve_relocations,
)

from mzinfo.exe.checksum import (
    ChecksumAnalysis,
    calculate_word_sum,
    analyze_checksum,
    verify_checksum,
)

from mzinfo.exe.parser import (
    ExeParser,
    parse_exe,
    parse_exe_file,
)

from mzinfo.exe.report import (
    format_report,
    format_relocation,
    format_checksum,
)

__all__ = [
    # Constants
    "MZ_SIGNATURE",
    "BLOCK_SIZE",
    "PARAGRAPH_SIZE",
    "HEADER_SIZE",
    "RELOCATION_ENTRY_SIZE",
    # Header
    "ExeHeader",
    "read_header",
    # Relocations
    "RelocationEntry",
    "ResolvedRelocation",
    "RelocationReport",
    "read_relocation_table",
    "target_offset",
    "resolve_target",
    "resolve_relocations",
    # Checksum
    "ChecksumAnalysis",
    "calculate_word_sum",
    "analyze_checksum",
    "verify_checksum",
    # Parser
    "ExeParser",
    "parse_exe",
    "parse_exe_file",
    # Report
    "format_report",
    "format_relocation",
    "format_checksum",
]
