"""
Gen 3 Save Data Types.

Value types produced by the decoder: the block footer, item records,
the per-version item storage layout and the final decoded save.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional

from .constants import (
    BLOCK_COUNT,
    E_ITEM_COUNT,
    FRLG_ITEM_COUNT,
    FRLG_PC_ITEM_COUNT,
    FRLG_SECKEY_OFFSET,
    FRLG_STORAGE,
    RS_ITEM_COUNT,
    RSE_PC_ITEM_COUNT,
    RSE_SECKEY_OFFSET,
    RSE_STORAGE,
    UNPACKED_BLOCK_LENGTH,
)


class Version(IntEnum):
    """Game release a save was written by. Inferred, never stored."""

    UNKNOWN = 0
    RUBY_SAPPHIRE = 1
    EMERALD = 2
    FIRERED_LEAFGREEN = 3

    @property
    def game_name(self) -> str:
        return _GAME_NAMES[self]


_GAME_NAMES = {
    Version.UNKNOWN: "Unknown",
    Version.RUBY_SAPPHIRE: "Ruby/Sapphire",
    Version.EMERALD: "Emerald",
    Version.FIRERED_LEAFGREEN: "FireRed/LeafGreen",
}


class SaveSlot(IntEnum):
    """
    Logical slot requested by the caller.

    MAIN is the copy with the higher save index, BACKUP the other one.
    """

    MAIN = 0
    BACKUP = 1


@dataclass(frozen=True)
class Footer:
    """Trailing 12 bytes of a physical block."""

    section_id: int
    checksum: int
    mark: int
    save_index: int


@dataclass(frozen=True)
class Item:
    """A 4-byte item record: u16 item index followed by u16 quantity."""

    index: int
    amount: int

    @property
    def is_empty(self) -> bool:
        return self.index == 0


@dataclass(frozen=True)
class ItemLayout:
    """Where a release keeps money, items and its security key."""

    storage_offset: int
    key_offset: int
    pc_item_count: int
    item_count: int
    encrypted: bool


ITEM_LAYOUTS: dict[Version, ItemLayout] = {
    Version.RUBY_SAPPHIRE: ItemLayout(
        storage_offset=RSE_STORAGE,
        key_offset=RSE_SECKEY_OFFSET,
        pc_item_count=RSE_PC_ITEM_COUNT,
        item_count=RS_ITEM_COUNT,
        encrypted=False,
    ),
    Version.EMERALD: ItemLayout(
        storage_offset=RSE_STORAGE,
        key_offset=RSE_SECKEY_OFFSET,
        pc_item_count=RSE_PC_ITEM_COUNT,
        item_count=E_ITEM_COUNT,
        encrypted=True,
    ),
    Version.FIRERED_LEAFGREEN: ItemLayout(
        storage_offset=FRLG_STORAGE,
        key_offset=FRLG_SECKEY_OFFSET,
        pc_item_count=FRLG_PC_ITEM_COUNT,
        item_count=FRLG_ITEM_COUNT,
        encrypted=True,
    ),
}


@dataclass(frozen=True)
class DecodedSave:
    """
    Result of decoding one copy of a save image.

    Attributes:
        version: Detected game release
        data: Logical buffer (UNPACKED_SIZE bytes), money and bag items decrypted
        order: Section id of each physical block, in physical order
        save_index: Save counter of the selected copy
        copy_offset: 0x0000 (copy A) or 0xE000 (copy B)
        slot: Slot that was requested
    """

    version: Version
    data: bytes
    order: tuple[int, ...]
    save_index: int
    copy_offset: int
    slot: SaveSlot

    @property
    def layout(self) -> Optional[ItemLayout]:
        return ITEM_LAYOUTS.get(self.version)

    @property
    def copy_name(self) -> str:
        return "A" if self.copy_offset == 0 else "B"

    def section(self, section_id: int) -> bytes:
        """Return the payload of one logical section."""
        if not 0 <= section_id < BLOCK_COUNT:
            raise ValueError(f"section_id must be 0-{BLOCK_COUNT - 1}, got {section_id}")
        start = section_id * UNPACKED_BLOCK_LENGTH
        return self.data[start : start + UNPACKED_BLOCK_LENGTH]
