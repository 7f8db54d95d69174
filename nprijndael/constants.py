# -*- coding: utf-8 -*-

"""Fixed sizes used throughout nprijndael.

                  Nk     Nb    Nr
       AES-128     4      4    10
       AES-192     6      4    12
       AES-256     8      4    14
"""

# Rijndael processes data blocks of 128 bits
BLOCKSIZE_BITS = 128
BLOCKSIZE_BYTES = 16

# Rinjdael allows Cipher Keys with lengths of 128, 192, or 256 bits,
# corresponding to 16, 24, and 32 bytes respectively
ALLOWED_KEYLENGTH_BITS = frozenset({128, 192, 256})
ALLOWED_KEYLENGTH_BYTES = frozenset({16, 24, 32})

# Number of columns (32-bit words) comprising the State.
# "Future reaffirmations of this standard could include changes" but,
# "for this standard, Nb = 4."
NB = 4

# Number of 32-bit words comprising the Cipher Key
ALLOWED_NK = frozenset({4, 6, 8})

ALLOWED_ROUNDS = frozenset({10, 12, 14})
MAXNR = 14

# Serialized cooked key: room for the longest schedule, 4 * (14 + 1)
# big-endian words, followed by one byte holding Nr
MAX_SCHEDULE_WORDS = NB * (MAXNR + 1)
COOKED_KEY_NR_OFFSET = MAX_SCHEDULE_WORDS * 4
COOKED_KEY_SIZE = COOKED_KEY_NR_OFFSET + 1
