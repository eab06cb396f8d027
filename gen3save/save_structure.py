"""
Gen 3 Save Decoder - Save Structure Module
Handles block footers, validation, copy selection and section unpacking
"""

import logging
import struct

from .constants import (
    BLOCK_COUNT,
    BLOCK_LENGTH,
    FOOTER_FORMAT,
    FOOTER_LENGTH,
    FOOTER_MARK,
    PACKED_SIZE,
    SAVE_SECTION,
    SECTION_SIZES,
    UNPACKED_BLOCK_LENGTH,
    UNPACKED_SIZE,
)
from .data_types import Footer, SaveSlot
from .exceptions import (
    CorruptSectionIdError,
    InvalidMarkError,
    InvalidSizeError,
    OutOfRangeError,
)

log = logging.getLogger(__name__)


def footer_offset(copy_offset, block):
    """Absolute offset of the footer of `block` within the copy at `copy_offset`."""
    return copy_offset + (block + 1) * BLOCK_LENGTH - FOOTER_LENGTH


def read_footer(data, copy_offset, block):
    """
    Read the footer of one physical block.

    Args:
        data: Save image
        copy_offset: Base offset of the copy (0x0000 or 0xE000)
        block: Physical block index (0-13)

    Returns:
        Footer: Decoded footer fields

    Raises:
        OutOfRangeError: If `block` is not 0-13 or the footer does not fit inside `data`
    """
    if not 0 <= block < BLOCK_COUNT:
        raise OutOfRangeError(f"Block index {block} is outside 0-{BLOCK_COUNT - 1}")
    offset = footer_offset(copy_offset, block)
    if offset < 0 or offset + FOOTER_LENGTH > len(data):
        raise OutOfRangeError(
            f"Footer of block {block} at 0x{offset:X} is outside a {len(data)} byte buffer"
        )
    return Footer(*struct.unpack_from(FOOTER_FORMAT, data, offset))


def validate_save(data):
    """
    Check the image size and the footer mark of block 0 in copy A.

    Copy B is never inspected here, and nothing beyond the mark is
    checked: a buffer that passes may still hold corrupt blocks.

    Raises:
        InvalidSizeError: Image is not PACKED_SIZE bytes
        InvalidMarkError: Footer mark of block 0 is wrong
    """
    if len(data) != PACKED_SIZE:
        raise InvalidSizeError(len(data), PACKED_SIZE)

    mark = read_footer(data, 0, 0).mark
    if mark != FOOTER_MARK:
        raise InvalidMarkError(mark, FOOTER_MARK)


def select_copy_offset(data, slot):
    """
    Resolve a logical slot to the base offset of a physical copy.

    The copy with the strictly higher save index is the most recent one.
    MAIN maps to the most recent copy and BACKUP to the other. On a tie
    (including two zero counters) both slots resolve to copy A.

    Args:
        data: Validated save image
        slot: SaveSlot.MAIN or SaveSlot.BACKUP

    Returns:
        int: 0x0000 or 0xE000
    """
    save_index_a = read_footer(data, 0, 0).save_index
    save_index_b = read_footer(data, SAVE_SECTION, 0).save_index

    if slot == SaveSlot.MAIN:
        if save_index_b > save_index_a:
            return SAVE_SECTION
        return 0
    if save_index_a > save_index_b:
        return SAVE_SECTION
    return 0


def unpack_sections(data, copy_offset, strict=False):
    """
    Reassemble the 14 blocks of one copy into the logical buffer.

    Each block's payload is copied to section_id * 0xF80, whatever its
    physical position.

    Args:
        data: Validated save image
        copy_offset: Base offset of the selected copy
        strict: Reject duplicate section ids instead of letting the last
            block win

    Returns:
        tuple: (bytearray logical buffer, tuple of section ids in physical order)

    Raises:
        CorruptSectionIdError: Section id >= 14, or duplicate id in strict mode
    """
    unpacked = bytearray(UNPACKED_SIZE)
    order = []

    for block in range(BLOCK_COUNT):
        section_id = read_footer(data, copy_offset, block).section_id

        if section_id >= BLOCK_COUNT:
            raise CorruptSectionIdError(
                f"Block {block} names section {section_id} (expected 0-{BLOCK_COUNT - 1})",
                block,
                section_id,
            )
        if section_id in order:
            if strict:
                raise CorruptSectionIdError(
                    f"Block {block} repeats section {section_id}", block, section_id
                )
            log.warning(f"Block {block} repeats section {section_id}, overwriting")

        order.append(section_id)

        src = copy_offset + block * BLOCK_LENGTH
        dst = section_id * UNPACKED_BLOCK_LENGTH
        unpacked[dst : dst + UNPACKED_BLOCK_LENGTH] = data[src : src + UNPACKED_BLOCK_LENGTH]

    return unpacked, tuple(order)


def section_checksum(payload, section_id):
    """
    Compute the checksum the game stores in a block footer.

    Sums the little-endian 32-bit words over the section's used size and
    folds the 32-bit total to 16 bits.

    Args:
        payload: Section payload (at least SECTION_SIZES[section_id] bytes)
        section_id: Logical section id (selects the summed length)

    Returns:
        int: 16-bit checksum
    """
    size = SECTION_SIZES.get(section_id, UNPACKED_BLOCK_LENGTH)
    if len(payload) < size:
        raise OutOfRangeError(f"Section {section_id} needs {size} bytes, got {len(payload)}")

    checksum = sum(struct.unpack_from(f"<{size // 4}I", payload, 0)) & 0xFFFFFFFF
    return ((checksum >> 16) + (checksum & 0xFFFF)) & 0xFFFF


def verify_checksums(data, copy_offset):
    """
    Compare stored and computed checksums for every block of a copy.

    Blocks whose section id is out of range are reported as failures.

    Returns:
        list: Section ids (or raw ids for bad blocks) whose checksum differs
    """
    bad = []
    for block in range(BLOCK_COUNT):
        footer = read_footer(data, copy_offset, block)
        if footer.section_id >= BLOCK_COUNT:
            bad.append(footer.section_id)
            continue

        start = copy_offset + block * BLOCK_LENGTH
        payload = data[start : start + UNPACKED_BLOCK_LENGTH]
        if section_checksum(payload, footer.section_id) != footer.checksum:
            bad.append(footer.section_id)

    return bad
