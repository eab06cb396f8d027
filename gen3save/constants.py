"""
Gen 3 Save Decoder - Constants
Physical layout, footer, security key and item storage offsets
"""

# ============================================================
# PHYSICAL LAYOUT
# ============================================================
# A full save image holds two copies of the game state. Each copy is
# 14 blocks of 0x1000 bytes; the last 12 bytes of every block are its
# footer and only the first 0xF80 bytes carry section payload.

PACKED_SIZE = 0x20000  # 131072
SAVE_SECTION = 0xE000  # stride between copy A and copy B
COPY_OFFSETS = (0x0000, SAVE_SECTION)

BLOCK_COUNT = 14
BLOCK_LENGTH = 0x1000
UNPACKED_BLOCK_LENGTH = 0xF80  # 3968
UNPACKED_SIZE = 0xD900  # BLOCK_COUNT * UNPACKED_BLOCK_LENGTH


# ============================================================
# BLOCK FOOTER
# ============================================================
# Offset 0xFF4 in each block:
#   u16 section_id, u16 checksum, u32 mark, u32 save_index

FOOTER_LENGTH = 0xC
FOOTER_FORMAT = "<HHII"
FOOTER_MARK = 0x08012025

# Bytes of each section covered by its checksum
SECTION_SIZES = {
    0: 3884,  # Trainer info
    1: 3968,  # Team/Items
    2: 3968,  # Game state
    3: 3968,  # Misc data
    4: 3848,  # Rival info
    5: 3968,  # PC buffer A
    6: 3968,  # PC buffer B
    7: 3968,  # PC buffer C
    8: 3968,  # PC buffer D
    9: 3968,  # PC buffer E
    10: 3968,  # PC buffer F
    11: 3968,  # PC buffer G
    12: 3968,  # PC buffer H
    13: 2000,  # PC buffer I
}


# ============================================================
# SECURITY KEYS (offsets into the logical buffer)
# ============================================================
# Emerald stores its key in section 0 and duplicates it at RSE_SECKEY2.
# FireRed/LeafGreen do the same at their own pair of offsets.
# Ruby/Sapphire never write a key, so both RSE fields stay zero.

RSE_SECKEY_OFFSET = 0xAC
RSE_SECKEY2_OFFSET = 0x1F4
FRLG_SECKEY_OFFSET = 0xAF8
FRLG_SECKEY2_OFFSET = 0xF20


# ============================================================
# ITEM STORAGE (section 1)
# ============================================================
# Money (u32) sits at the start of the storage region, followed by
# coins and the registered item; item records start 8 bytes in.
# PC items come first and are never encrypted.

RSE_STORAGE = UNPACKED_BLOCK_LENGTH + 0x490
FRLG_STORAGE = UNPACKED_BLOCK_LENGTH + 0x290

ITEM_RECORD_LENGTH = 4
ITEM_RECORD_START = 8

RS_ITEM_COUNT = 216
E_ITEM_COUNT = 236
FRLG_ITEM_COUNT = 216

RSE_PC_ITEM_COUNT = 50
FRLG_PC_ITEM_COUNT = 30
