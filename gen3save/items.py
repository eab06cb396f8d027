"""
Gen 3 Save Decoder - Items Module
Reads money and item records from a decoded save
"""

from .constants import ITEM_RECORD_LENGTH, ITEM_RECORD_START
from .crypto import read_u16, read_u32
from .data_types import Item


def read_item(unpacked, offset):
    """
    Read one 4-byte item record.

    Args:
        unpacked: Logical buffer
        offset: Offset of the record

    Returns:
        Item: (index, amount)
    """
    return Item(index=read_u16(unpacked, offset), amount=read_u16(unpacked, offset + 2))


def _read_range(decoded, start, stop):
    layout = decoded.layout
    items = []
    for i in range(start, stop):
        offset = layout.storage_offset + ITEM_RECORD_START + i * ITEM_RECORD_LENGTH
        item = read_item(decoded.data, offset)
        if not item.is_empty:
            items.append(item)
    return items


def read_pc_items(decoded):
    """
    Get the items stored in the PC.

    Args:
        decoded: DecodedSave

    Returns:
        list: Non-empty Item records, empty for unknown saves
    """
    layout = decoded.layout
    if layout is None:
        return []
    return _read_range(decoded, 0, layout.pc_item_count)


def read_bag_items(decoded):
    """
    Get every bag item (all pockets, in storage order).

    Args:
        decoded: DecodedSave

    Returns:
        list: Non-empty Item records with decrypted amounts
    """
    layout = decoded.layout
    if layout is None:
        return []
    return _read_range(decoded, layout.pc_item_count, layout.item_count)


def read_money(decoded):
    """Get the player's money, or None when the release is unknown."""
    layout = decoded.layout
    if layout is None:
        return None
    return read_u32(decoded.data, layout.storage_offset)
