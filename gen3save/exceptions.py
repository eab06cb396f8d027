"""
Custom exceptions for the Gen 3 save decoder.

Every failure raised while decoding derives from Gen3SaveError so callers
can catch a single type. Version detection never raises: an unrecognised
pattern is reported as Version.UNKNOWN instead.
"""


class Gen3SaveError(Exception):
    """Base exception for the save decoder."""
    pass


class InvalidSizeError(Gen3SaveError):
    """Raised when the save image is not exactly PACKED_SIZE bytes."""

    def __init__(self, size: int, expected: int):
        super().__init__(f"Save image is {size} bytes (expected {expected})")
        self.size = size
        self.expected = expected


class InvalidMarkError(Gen3SaveError):
    """Raised when block 0 of copy A does not carry the footer mark."""

    def __init__(self, mark: int, expected: int):
        super().__init__(f"Bad footer mark 0x{mark:08X} (expected 0x{expected:08X})")
        self.mark = mark
        self.expected = expected


class OutOfRangeError(Gen3SaveError):
    """
    Raised when a field read or write falls outside its buffer.

    Only reachable on buffers that skipped validation, e.g. when the
    low-level readers are called directly.
    """
    pass


class CorruptSectionIdError(Gen3SaveError):
    """
    Raised when a block footer names a section that cannot be placed.

    Section ids of 14 or more always raise. Duplicate ids only raise
    in strict mode.
    """

    def __init__(self, message: str, block: int, section_id: int):
        super().__init__(message)
        self.block = block
        self.section_id = section_id


class ChecksumMismatchError(Gen3SaveError):
    """Raised in strict mode when stored section checksums do not match."""

    def __init__(self, section_ids: list[int]):
        ids = ", ".join(str(s) for s in section_ids)
        super().__init__(f"Checksum mismatch in section(s): {ids}")
        self.section_ids = list(section_ids)
