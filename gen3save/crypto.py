"""
Gen 3 Save Decoder - Crypto Module
Version detection and the security-key XOR over money and bag items
"""

import logging
import struct

from .constants import (
    FRLG_SECKEY2_OFFSET,
    FRLG_SECKEY_OFFSET,
    ITEM_RECORD_LENGTH,
    ITEM_RECORD_START,
    RSE_SECKEY2_OFFSET,
    RSE_SECKEY_OFFSET,
)
from .data_types import ITEM_LAYOUTS, Version
from .exceptions import OutOfRangeError

log = logging.getLogger(__name__)


# ==================== FIELD ACCESS ====================


def _check_range(data, offset, size):
    if offset < 0 or offset + size > len(data):
        raise OutOfRangeError(
            f"{size}-byte field at 0x{offset:X} is outside a {len(data)} byte buffer"
        )


def read_u16(data, offset):
    """Read a little-endian u16, raising OutOfRangeError past the end."""
    _check_range(data, offset, 2)
    return struct.unpack_from("<H", data, offset)[0]


def read_u32(data, offset):
    """Read a little-endian u32, raising OutOfRangeError past the end."""
    _check_range(data, offset, 4)
    return struct.unpack_from("<I", data, offset)[0]


def xor_u16(data, offset, key):
    """XOR the u16 at `offset` in place with the low 16 bits of `key`."""
    value = read_u16(data, offset)
    struct.pack_into("<H", data, offset, value ^ (key & 0xFFFF))


def xor_u32(data, offset, key):
    """XOR the u32 at `offset` in place with `key`."""
    value = read_u32(data, offset)
    struct.pack_into("<I", data, offset, value ^ (key & 0xFFFFFFFF))


# ==================== VERSION DETECTION ====================


def detect_version(unpacked):
    """
    Guess the game release from the security key fields.

    There is no version tag in the save, so this relies on how each
    release duplicates its key. The checks run in a fixed order because
    an all-zero Ruby/Sapphire key also satisfies the Emerald check.

    Args:
        unpacked: Logical buffer

    Returns:
        Version: Detected release, UNKNOWN if no pattern matches
    """
    rse_key = read_u32(unpacked, RSE_SECKEY_OFFSET)
    rse_key2 = read_u32(unpacked, RSE_SECKEY2_OFFSET)

    # Ruby/Sapphire never write a key
    if rse_key == 0 and rse_key2 == 0:
        return Version.RUBY_SAPPHIRE

    if rse_key == rse_key2:
        return Version.EMERALD

    if read_u32(unpacked, FRLG_SECKEY_OFFSET) == read_u32(unpacked, FRLG_SECKEY2_OFFSET):
        return Version.FIRERED_LEAFGREEN

    return Version.UNKNOWN


# ==================== ENCRYPTION ====================


def get_security_key(unpacked, version):
    """
    Read the security key used by `version`.

    Returns:
        int: 32-bit key, or 0 for releases without encryption
    """
    layout = ITEM_LAYOUTS.get(version)
    if layout is None or not layout.encrypted:
        return 0
    return read_u32(unpacked, layout.key_offset)


def crypt(unpacked, version):
    """
    Toggle the money and bag item encryption in place.

    XOR is its own inverse, so the same call decrypts a freshly unpacked
    buffer and re-encrypts a decrypted one. PC items are stored in the
    clear and are left alone. Ruby/Sapphire and unknown saves are not
    touched.

    Args:
        unpacked: Logical buffer (bytearray)
        version: Detected release

    Returns:
        int: Key that was applied (0 when nothing was done)
    """
    layout = ITEM_LAYOUTS.get(version)
    if layout is None or not layout.encrypted:
        return 0

    # captured before any field is rewritten
    key = read_u32(unpacked, layout.key_offset)

    for i in range(layout.pc_item_count, layout.item_count):
        record = layout.storage_offset + ITEM_RECORD_START + i * ITEM_RECORD_LENGTH
        xor_u16(unpacked, record + 2, key)

    xor_u32(unpacked, layout.storage_offset, key)

    log.debug(f"Applied {version.game_name} key 0x{key:08X}")
    return key
