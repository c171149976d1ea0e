"""
mzinfo - MS-DOS MZ Executable Inspector
=======================================

This package reports the structural metadata of MS-DOS "MZ" executables:
header geometry, memory requirements, initial CPU registers, and the
words referenced by each entry of the segment relocation table.

It only reads files. Nothing is loaded, executed, relocated or written.

Main Components
---------------
- **exe**: Header decoder, relocation resolver, checksum and report
- **cli**: The `mzinfo` command-line tool

Quick Start
-----------
Inspect an executable:
    >>> from mzinfo import ExeParser
    >>> parser = ExeParser.from_file("GAME.EXE")
    >>> print(parser.header.header_size, parser.header.load_size)
    >>> for reloc in parser.resolved:
    ...     print(reloc.index, hex(reloc.value))

Or use the command-line tool:
    $ mzinfo GAME.EXE

Version History
---------------
1.0.0 - Initial release with header decoding and relocation resolution
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from mzinfo.errors import (
    MZError,
    ExeIOError,
    ExeFormatError,
    TruncatedHeaderError,
    InvalidSignatureError,
    TruncatedRelocationTableError,
    RelocationBufferError,
    UnresolvedTargetError,
)

from mzinfo.exe import (
    MZ_SIGNATURE,
    BLOCK_SIZE,
    PARAGRAPH_SIZE,
    HEADER_SIZE,
    ExeHeader,
    RelocationEntry,
    ResolvedRelocation,
    RelocationReport,
    ExeParser,
    parse_exe,
    parse_exe_file,
    format_report,
)

__all__ = [
    "__version__",
    # Exception hierarchy
    "MZError",
    "ExeIOError",
    "ExeFormatError",
    "TruncatedHeaderError",
    "InvalidSignatureError",
    "TruncatedRelocationTableError",
    "RelocationBufferError",
    "UnresolvedTargetError",
    # Format constants
    "MZ_SIGNATURE",
    "BLOCK_SIZE",
    "PARAGRAPH_SIZE",
    "HEADER_SIZE",
    # Data structures
    "ExeHeader",
    "RelocationEntry",
    "ResolvedRelocation",
    "RelocationReport",
    # Parser
    "ExeParser",
    "parse_exe",
    "parse_exe_file",
    "format_report",
]
