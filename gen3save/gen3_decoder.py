"""
Gen 3 Save Decoder - Main Module
Ties validation, copy selection, unpacking and decryption together
"""

import logging
from pathlib import Path

from .crypto import crypt, detect_version
from .data_types import DecodedSave, SaveSlot, Version
from .exceptions import ChecksumMismatchError, Gen3SaveError
from .items import read_bag_items, read_money
from .save_structure import (
    read_footer,
    select_copy_offset,
    unpack_sections,
    validate_save,
    verify_checksums,
)

log = logging.getLogger(__name__)


def load(data, slot=SaveSlot.MAIN, strict=False):
    """
    Decode one copy of a Gen 3 save image.

    Args:
        data: Raw save image (bytes-like, PACKED_SIZE bytes). Never modified.
        slot: SaveSlot.MAIN for the most recent copy, SaveSlot.BACKUP for the other
        strict: Also require unique section ids and matching checksums

    Returns:
        DecodedSave: Detected version and decrypted logical buffer

    Raises:
        InvalidSizeError, InvalidMarkError: Image rejected before decoding
        CorruptSectionIdError: A block names a section that cannot be placed
        ChecksumMismatchError: Strict mode only
        ValueError: `slot` is not a SaveSlot value
    """
    slot = SaveSlot(slot)
    validate_save(data)

    copy_offset = select_copy_offset(data, slot)
    save_index = read_footer(data, copy_offset, 0).save_index
    log.debug(
        f"Slot {slot.name} -> copy {'A' if copy_offset == 0 else 'B'} "
        f"(offset 0x{copy_offset:X}, save index {save_index})"
    )

    unpacked, order = unpack_sections(data, copy_offset, strict=strict)

    if strict:
        bad = verify_checksums(data, copy_offset)
        if bad:
            raise ChecksumMismatchError(bad)

    version = detect_version(unpacked)
    log.debug(f"Detected version: {version.game_name}")
    crypt(unpacked, version)

    return DecodedSave(
        version=version,
        data=bytes(unpacked),
        order=order,
        save_index=save_index,
        copy_offset=copy_offset,
        slot=slot,
    )


def load_file(save_path, slot=SaveSlot.MAIN, strict=False):
    """
    Read a .sav file and decode it.

    Args:
        save_path: Path to the save file
        slot: Logical slot to decode
        strict: See load()

    Returns:
        DecodedSave
    """
    data = Path(save_path).read_bytes()
    log.debug(f"Read {len(data)} bytes from {save_path}")
    return load(data, slot=slot, strict=strict)


def get_save_info(data, slot=SaveSlot.MAIN):
    """
    Get basic information about a save image.

    Decode errors are reported in the result instead of raised.

    Args:
        data: Raw save image
        slot: Logical slot to describe

    Returns:
        dict: Save file information
    """
    try:
        decoded = load(data, slot=slot)
    except Gen3SaveError as e:
        return {
            "valid": False,
            "error": str(e),
        }

    return {
        "valid": True,
        "version": decoded.version,
        "game_name": decoded.version.game_name,
        "slot": decoded.copy_name,
        "save_index": decoded.save_index,
        "money": read_money(decoded),
        "bag_items": len(read_bag_items(decoded)),
        "section_order": list(decoded.order),
        "bad_checksums": verify_checksums(data, decoded.copy_offset),
        "recognized": decoded.version != Version.UNKNOWN,
    }
