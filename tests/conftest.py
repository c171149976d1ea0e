"""
Shared fixtures for building MZ executable images in tests.
"""

import struct

import pytest

from mzinfo.exe import ExeHeader


def build_exe(
    relocs: tuple[tuple[int, int], ...] | list[tuple[int, int]] = (),
    image: bytes = b"",
    header_paragraphs: int | None = None,
    num_relocs: int | None = None,
    reloc_table_offset: int = 0x1C,
    **fields,
) -> bytes:
    """
    Build an MZ executable image.

    Args:
        relocs: (offset, segment) pairs written at reloc_table_offset
        image: Load image bytes placed after the header
        header_paragraphs: Header size; defaults to the smallest that
            holds the header and relocation table
        num_relocs: Declared relocation count; defaults to len(relocs)
        **fields: Any other ExeHeader field

    The block fields are filled in from the final length unless given.
    """
    table = b"".join(struct.pack("<HH", offset, segment) for offset, segment in relocs)
    if header_paragraphs is None:
        header_paragraphs = -(-(reloc_table_offset + len(table)) // 16)

    header_len = header_paragraphs * 16
    total = max(header_len, 28) + len(image)

    fields.setdefault("blocks_in_file", -(-total // 512))
    fields.setdefault("bytes_in_last_block", total % 512)
    header = ExeHeader(
        num_relocs=len(relocs) if num_relocs is None else num_relocs,
        header_paragraphs=header_paragraphs,
        reloc_table_offset=reloc_table_offset,
        **fields,
    )

    data = bytearray(max(header_len, 28))
    data[0:28] = header.to_bytes()
    data[reloc_table_offset:reloc_table_offset + len(table)] = table
    data.extend(image)
    return bytes(data)


@pytest.fixture
def make_exe():
    """Factory fixture returning build_exe()."""
    return build_exe


@pytest.fixture
def sample_exe_data() -> bytes:
    """
    A small executable with two resolvable relocations.

    The table at 0x1C holds two entries, so the header takes 3
    paragraphs (48 bytes).

        [0] 0000:0001 -> word at 48 + 1   = 0x1234
        [1] 0001:0002 -> word at 48 + 18  = 0xABCD
    """
    image = bytearray(64)
    image[1:3] = struct.pack("<H", 0x1234)
    image[18:20] = struct.pack("<H", 0xABCD)
    return build_exe(
        relocs=[(0x0001, 0x0000), (0x0002, 0x0001)],
        image=bytes(image),
        min_extra_paragraphs=0x10,
        max_extra_paragraphs=0xFFFF,
        stack_segment=0x0002,
        stack_pointer=0x0100,
        instruction_pointer=0x0010,
        code_segment=0x0000,
    )


@pytest.fixture
def sample_exe_file(tmp_path, sample_exe_data):
    path = tmp_path / "sample.exe"
    path.write_bytes(sample_exe_data)
    return path
