# -*- coding: utf-8 -*-

"""Offset-based entry points over flat byte buffers.

These let callers cook keys into, and encrypt/decrypt between, slices of
larger buffers without copying them first.  A cooked key crosses this
boundary in its serialized form: a 241-byte buffer (see
`CookedKey.to_bytes()`).

Every offset and length is bounds-checked before anything is read or
written; violations raise `OffsetOutOfRange`.  For the legacy behaviour
that silently zero-fills or skips instead, see `nprijndael.compat`.
"""

import numpy as np
from numpy import uint32

from .block import decrypt_words, encrypt_words
from .constants import BLOCKSIZE_BYTES
from .schedule import Direction, as_cooked_key, cook_key
from .utils import as_uint8_buffer, check_window

__all__ = (
    "cook_decrypt_key",
    "cook_encrypt_key",
    "decrypt",
    "encrypt",
)


def _key_window(key_bytes, offset, length):
    data = as_uint8_buffer(key_bytes)
    if length is None:
        length = data.size - offset
    check_window(data.size, offset, length)
    return data[offset:offset + length]


def cook_encrypt_key(key_bytes, offset=0, length=None):
    """Cook `length` bytes of `key_bytes` at `offset` for encryption.

    `length` defaults to the rest of the buffer.  Returns the 241-byte
    serialized cooked key.  Raises InvalidKeySize for a bad key length.
    """
    key = _key_window(key_bytes, offset, length)
    return cook_key(key, Direction.ENCRYPT).to_bytes()


def cook_decrypt_key(key_bytes, offset=0, length=None):
    """Same as `cook_encrypt_key()`, decryption orientation."""
    key = _key_window(key_bytes, offset, length)
    return cook_key(key, Direction.DECRYPT).to_bytes()


def _writable(dst):
    out = as_uint8_buffer(dst)
    if not out.flags.writeable:
        raise TypeError("dst must be a writable buffer")
    return out


def _transform(fn, cooked_key, key_offset, src, src_offset, dst, dst_offset):
    schedule, rounds = as_cooked_key(cooked_key, key_offset)
    inp = as_uint8_buffer(src)
    out = _writable(dst)
    check_window(inp.size, src_offset, BLOCKSIZE_BYTES)
    check_window(out.size, dst_offset, BLOCKSIZE_BYTES)

    # Copy the source window first so src and dst may overlap
    window = inp[src_offset:src_offset + BLOCKSIZE_BYTES].tobytes()
    state = np.frombuffer(window, dtype=">u4").astype(uint32)
    res = fn(schedule, rounds, state)
    out[dst_offset:dst_offset + BLOCKSIZE_BYTES] = np.frombuffer(
        res.astype(">u4").tobytes(), dtype=np.uint8
    )


def encrypt(cooked_key, key_offset, src, src_offset, dst, dst_offset):
    """Encrypt 16 bytes at `src[src_offset:]` into `dst[dst_offset:]`.

    `cooked_key` is a buffer holding a serialized encryption key at
    `key_offset`, or a CookedKey (with `key_offset` 0).  `src` and `dst`
    may be the same buffer.  Only the 16 destination bytes are written.
    """
    _transform(encrypt_words, cooked_key, key_offset, src, src_offset,
               dst, dst_offset)


def decrypt(cooked_key, key_offset, src, src_offset, dst, dst_offset):
    """Inverse of `encrypt()`; takes a decryption-oriented cooked key."""
    _transform(decrypt_words, cooked_key, key_offset, src, src_offset,
               dst, dst_offset)
