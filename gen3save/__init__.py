"""
Gen 3 Pokemon Save Decoder Package

Decodes Game Boy Advance save images from Ruby, Sapphire, Emerald,
FireRed and LeafGreen into the contiguous logical buffer the game
works with, with money and bag quantities decrypted.

Usage:
    from gen3save import SaveSlot, load_file

    save = load_file("path/to/save.sav", SaveSlot.MAIN)
    print(save.version.game_name, len(save.data))
"""

# Constants (commonly used)
from .constants import (
    BLOCK_COUNT,
    FOOTER_MARK,
    PACKED_SIZE,
    SAVE_SECTION,
    UNPACKED_BLOCK_LENGTH,
    UNPACKED_SIZE,
)

# Crypto utilities
from .crypto import crypt, detect_version, get_security_key

# Types
from .data_types import (
    ITEM_LAYOUTS,
    DecodedSave,
    Footer,
    Item,
    ItemLayout,
    SaveSlot,
    Version,
)

# Errors
from .exceptions import (
    ChecksumMismatchError,
    CorruptSectionIdError,
    Gen3SaveError,
    InvalidMarkError,
    InvalidSizeError,
    OutOfRangeError,
)

# Main entry points
from .gen3_decoder import get_save_info, load, load_file

# Item utilities
from .items import read_bag_items, read_item, read_money, read_pc_items

# Save structure
from .save_structure import (
    read_footer,
    section_checksum,
    select_copy_offset,
    unpack_sections,
    validate_save,
    verify_checksums,
)

__version__ = "1.0.0"

__all__ = [
    "load",
    "load_file",
    "get_save_info",
    "DecodedSave",
    "Version",
    "SaveSlot",
    "Footer",
    "Item",
    "ItemLayout",
    "ITEM_LAYOUTS",
    "Gen3SaveError",
    "InvalidSizeError",
    "InvalidMarkError",
    "OutOfRangeError",
    "CorruptSectionIdError",
    "ChecksumMismatchError",
    "detect_version",
    "crypt",
    "get_security_key",
    "read_footer",
    "validate_save",
    "select_copy_offset",
    "unpack_sections",
    "section_checksum",
    "verify_checksums",
    "read_item",
    "read_money",
    "read_pc_items",
    "read_bag_items",
    "BLOCK_COUNT",
    "FOOTER_MARK",
    "PACKED_SIZE",
    "SAVE_SECTION",
    "UNPACKED_BLOCK_LENGTH",
    "UNPACKED_SIZE",
]
