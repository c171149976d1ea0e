"""
Textual report for a parsed MZ executable.

The line order is fixed: geometry, memory limits, initial registers,
relocation table summary, then one line per resolved relocation.
"""

from mzinfo.exe.checksum import ChecksumAnalysis
from mzinfo.exe.parser import ExeParser
from mzinfo.exe.relocations import ResolvedRelocation


def format_relocation(reloc: ResolvedRelocation) -> str:
    return (
        f"\t[{reloc.index}]: segment: 0x{reloc.segment:04x}, "
        f"offset: 0x{reloc.offset:04x} -> [0x{reloc.value:04x}]"
    )


def format_report(parser: ExeParser) -> list[str]:
    """Build the report lines for a parsed executable."""
    header = parser.header
    lines = [
        f"header size: {header.header_size}",
        f"whole file size: {header.file_size}",
        f"load memory size is whole file size - header size: {header.load_size}",
        f"memory limit: {header.min_extra_bytes} ~ {header.max_extra_bytes}",
        f"relative SS: {header.stack_segment:04x}   SP: {header.stack_pointer:04x}",
        f"relative CS: {header.code_segment:04x}   IP: {header.instruction_pointer:04x}",
        f"relocs: {header.num_relocs}   offset: {header.reloc_table_offset}",
    ]
    lines.extend(format_relocation(reloc) for reloc in parser.resolved)
    return lines


def format_checksum(analysis: ChecksumAnalysis) -> str:
    if analysis.is_valid:
        status = "valid"
    elif analysis.is_unset:
        status = "not set"
    else:
        status = f"MISMATCH (expected 0x{analysis.expected_checksum:04x})"
    return f"checksum: 0x{analysis.stored_checksum:04x} {status}"
