# -*- coding: utf-8 -*-

"""Rijndael (AES) block cipher core, implemented with NumPy.

Based strictly on:

    Federal Information Processing Standards Publication 197
    https://csrc.nist.gov/publications/detail/fips/197/final

Any reference to the paper in this source code is called just FIPS197.

See also the original submission:

    The Rijndael Block Cipher
    https://csrc.nist.gov/archive/aes/rijndael/Rijndael-ammended.pdf
---------------------------------------------

This is the cipher primitive only: key expansion plus encryption and
decryption of a single 16-byte block with a 128, 192, or 256-bit key.
Padding, modes of operation, IVs and authentication belong in layers
built on top of it.

Pieces:

 - `tables`: S-boxes, round constants and T-tables, computed once and
   shared read-only.
 - `schedule`: raw key -> `CookedKey` (round key words + round count),
   in encryption or decryption orientation.
 - `block`: the round function and its inverse over one block.
 - `buffers`: the same operations over offsets into flat buffers, with
   cooked keys serialized to 241 bytes.
 - `compat`: legacy variant of `buffers` that zero-fills instead of
   raising on a bad key size.
 - `cipher`: `Rijndael`, a key-bound object with swappable backends.

Typical use:

>>> ekey = cook_encrypt_key(b"0123456789ABCDEF")
>>> dkey = cook_decrypt_key(b"0123456789ABCDEF")
>>> ct = encrypt_block(ekey, b"Time is precious")
>>> decrypt_block(dkey, ct)
b'Time is precious'
"""

__version__ = "0.2"

from .block import decrypt_block, encrypt_block
from .cipher import BACKENDS, DEFAULT_BACKEND, Rijndael
from .constants import (
    ALLOWED_KEYLENGTH_BITS,
    ALLOWED_KEYLENGTH_BYTES,
    BLOCKSIZE_BITS,
    BLOCKSIZE_BYTES,
    COOKED_KEY_NR_OFFSET,
    COOKED_KEY_SIZE,
    MAXNR,
    NB,
)
from .exceptions import (
    InvalidBlockLength,
    InvalidKeySize,
    OffsetOutOfRange,
    RijndaelError,
    ScheduleRoundCountMismatch,
)
from .schedule import (
    CookedKey,
    Direction,
    cook_decrypt_key,
    cook_encrypt_key,
    cook_key,
    expand_key,
)
from .tables import get_tables

__all__ = (
    "ALLOWED_KEYLENGTH_BITS",
    "ALLOWED_KEYLENGTH_BYTES",
    "BACKENDS",
    "BLOCKSIZE_BITS",
    "BLOCKSIZE_BYTES",
    "COOKED_KEY_NR_OFFSET",
    "COOKED_KEY_SIZE",
    "CookedKey",
    "DEFAULT_BACKEND",
    "Direction",
    "InvalidBlockLength",
    "InvalidKeySize",
    "MAXNR",
    "NB",
    "OffsetOutOfRange",
    "Rijndael",
    "RijndaelError",
    "ScheduleRoundCountMismatch",
    "cook_decrypt_key",
    "cook_encrypt_key",
    "cook_key",
    "decrypt_block",
    "encrypt_block",
    "expand_key",
    "get_tables",
)
