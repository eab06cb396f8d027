"""Tests for version detection and the money / item XOR."""

import struct

import pytest

from gen3save.constants import (
    FRLG_SECKEY2_OFFSET,
    FRLG_SECKEY_OFFSET,
    FRLG_STORAGE,
    RSE_SECKEY2_OFFSET,
    RSE_SECKEY_OFFSET,
    RSE_STORAGE,
    UNPACKED_SIZE,
)
from gen3save.crypto import (
    crypt,
    detect_version,
    get_security_key,
    read_u16,
    read_u32,
    xor_u16,
    xor_u32,
)
from gen3save.data_types import Version
from gen3save.exceptions import OutOfRangeError

KEY = 0x89ABCDEF


def make_logical(rse=(0, 0), frlg=(0, 0)) -> bytearray:
    """Helper to create a logical buffer with the given key fields."""
    data = bytearray(UNPACKED_SIZE)
    struct.pack_into("<I", data, RSE_SECKEY_OFFSET, rse[0])
    struct.pack_into("<I", data, RSE_SECKEY2_OFFSET, rse[1])
    struct.pack_into("<I", data, FRLG_SECKEY_OFFSET, frlg[0])
    struct.pack_into("<I", data, FRLG_SECKEY2_OFFSET, frlg[1])
    return data


def item_offset(storage, index):
    return storage + 8 + index * 4


def fill_items(data, storage, count):
    """Give every item record a distinct index and amount."""
    for i in range(count):
        struct.pack_into("<HH", data, item_offset(storage, i), 100 + i, 1 + i)


# =============================================================================
# Field access
# =============================================================================

class TestFieldAccess:
    def test_read_little_endian(self):
        data = bytes([0x78, 0x56, 0x34, 0x12])
        assert read_u32(data, 0) == 0x12345678
        assert read_u16(data, 2) == 0x1234

    def test_read_past_end(self):
        with pytest.raises(OutOfRangeError):
            read_u32(bytes(6), 3)
        with pytest.raises(OutOfRangeError):
            read_u16(bytes(2), -1)

    def test_xor_in_place(self):
        data = bytearray(8)
        xor_u32(data, 0, 0x11223344)
        xor_u16(data, 4, 0xAABBCCDD)
        assert read_u32(data, 0) == 0x11223344
        assert read_u16(data, 4) == 0xCCDD

    def test_xor_past_end(self):
        with pytest.raises(OutOfRangeError):
            xor_u32(bytearray(4), 2, 1)


# =============================================================================
# Version Detector
# =============================================================================

class TestDetectVersion:
    def test_ruby_sapphire(self):
        assert detect_version(make_logical()) == Version.RUBY_SAPPHIRE

    def test_zero_keys_beat_emerald(self):
        # RSE_KEY == RSE_KEY2 holds too, but Ruby/Sapphire is checked first
        data = make_logical(rse=(0, 0), frlg=(5, 5))
        assert detect_version(data) == Version.RUBY_SAPPHIRE

    def test_emerald(self):
        assert detect_version(make_logical(rse=(KEY, KEY))) == Version.EMERALD

    def test_emerald_beats_frlg(self):
        assert detect_version(make_logical(rse=(KEY, KEY), frlg=(7, 7))) == Version.EMERALD

    def test_firered_leafgreen(self):
        data = make_logical(rse=(1, 2), frlg=(KEY, KEY))
        assert detect_version(data) == Version.FIRERED_LEAFGREEN

    def test_frlg_zero_key(self):
        data = make_logical(rse=(0, 3), frlg=(0, 0))
        assert detect_version(data) == Version.FIRERED_LEAFGREEN

    def test_one_zero_rse_key_is_not_ruby(self):
        data = make_logical(rse=(KEY, 0), frlg=(1, 2))
        assert detect_version(data) == Version.UNKNOWN

    def test_unknown(self):
        assert detect_version(make_logical(rse=(1, 2), frlg=(3, 4))) == Version.UNKNOWN

    def test_random_noise_never_raises(self):
        data = bytearray((i * 37 + 11) & 0xFF for i in range(UNPACKED_SIZE))
        assert detect_version(data) in set(Version)


# =============================================================================
# Decryptor
# =============================================================================

class TestCrypt:
    def test_emerald(self):
        data = make_logical(rse=(KEY, KEY))
        fill_items(data, RSE_STORAGE, 236)
        struct.pack_into("<I", data, RSE_STORAGE, 12345 ^ KEY)

        assert crypt(data, Version.EMERALD) == KEY

        assert read_u32(data, RSE_STORAGE) == 12345
        # PC items untouched
        for i in range(50):
            assert read_u16(data, item_offset(RSE_STORAGE, i) + 2) == 1 + i
        for i in range(50, 236):
            assert read_u16(data, item_offset(RSE_STORAGE, i) + 2) == (1 + i) ^ 0xCDEF
        # item indexes are never encrypted
        for i in range(236):
            assert read_u16(data, item_offset(RSE_STORAGE, i)) == 100 + i

    def test_emerald_stops_at_item_count(self):
        data = make_logical(rse=(KEY, KEY))
        fill_items(data, RSE_STORAGE, 240)
        crypt(data, Version.EMERALD)
        for i in range(236, 240):
            assert read_u16(data, item_offset(RSE_STORAGE, i) + 2) == 1 + i

    def test_firered_leafgreen(self):
        data = make_logical(rse=(1, 2), frlg=(KEY, KEY))
        fill_items(data, FRLG_STORAGE, 220)
        struct.pack_into("<I", data, FRLG_STORAGE, 999 ^ KEY)

        assert crypt(data, Version.FIRERED_LEAFGREEN) == KEY

        assert read_u32(data, FRLG_STORAGE) == 999
        for i in range(30):
            assert read_u16(data, item_offset(FRLG_STORAGE, i) + 2) == 1 + i
        for i in range(30, 216):
            assert read_u16(data, item_offset(FRLG_STORAGE, i) + 2) == (1 + i) ^ 0xCDEF
        for i in range(216, 220):
            assert read_u16(data, item_offset(FRLG_STORAGE, i) + 2) == 1 + i

    @pytest.mark.parametrize("version", [Version.RUBY_SAPPHIRE, Version.UNKNOWN])
    def test_passthrough(self, version):
        data = make_logical(rse=(KEY, 0), frlg=(KEY, 0))
        fill_items(data, RSE_STORAGE, 236)
        before = bytes(data)
        assert crypt(data, version) == 0
        assert bytes(data) == before

    @pytest.mark.parametrize(
        "version,rse,frlg,storage",
        [
            (Version.EMERALD, (KEY, KEY), (0, 0), RSE_STORAGE),
            (Version.FIRERED_LEAFGREEN, (1, 2), (KEY, KEY), FRLG_STORAGE),
        ],
    )
    def test_involution(self, version, rse, frlg, storage):
        data = make_logical(rse=rse, frlg=frlg)
        fill_items(data, storage, 240)
        struct.pack_into("<I", data, storage, 0xCAFEBABE)
        before = bytes(data)

        crypt(data, version)
        assert bytes(data) != before
        crypt(data, version)
        assert bytes(data) == before

    def test_get_security_key(self):
        data = make_logical(rse=(KEY, KEY), frlg=(3, 3))
        assert get_security_key(data, Version.EMERALD) == KEY
        assert get_security_key(data, Version.FIRERED_LEAFGREEN) == 3
        assert get_security_key(data, Version.RUBY_SAPPHIRE) == 0
        assert get_security_key(data, Version.UNKNOWN) == 0
