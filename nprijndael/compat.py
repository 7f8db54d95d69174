# -*- coding: utf-8 -*-

"""Legacy-compatible variants of the buffer entry points.

Older bindings of this cipher never failed: a key of the wrong size
cooked to an all-zero 241-byte buffer, and out-of-range offsets turned
encrypt/decrypt into no-ops.  Code that depends on that can import the
same four names from here instead of `nprijndael.buffers`.

Each fallback is logged at WARNING level.  A cooked key whose round
count is invalid (including the all-zero buffer) still raises
`ScheduleRoundCountMismatch` when used, since there is no schedule to
run.  New code should use `nprijndael.buffers`.
"""

import logging

from . import buffers
from .constants import COOKED_KEY_SIZE
from .exceptions import InvalidKeySize, OffsetOutOfRange

__all__ = (
    "cook_decrypt_key",
    "cook_encrypt_key",
    "decrypt",
    "encrypt",
)

logger = logging.getLogger(__name__)


def _zero_filled(fn, key_bytes, offset, length):
    try:
        return fn(key_bytes, offset, length)
    except (InvalidKeySize, OffsetOutOfRange) as exc:
        logger.warning("returning all-zero cooked key: %s", exc)
        return bytes(COOKED_KEY_SIZE)


def cook_encrypt_key(key_bytes, offset=0, length=None):
    """Like `buffers.cook_encrypt_key()`, zero-filled on a bad key."""
    return _zero_filled(buffers.cook_encrypt_key, key_bytes, offset, length)


def cook_decrypt_key(key_bytes, offset=0, length=None):
    """Like `buffers.cook_decrypt_key()`, zero-filled on a bad key."""
    return _zero_filled(buffers.cook_decrypt_key, key_bytes, offset, length)


def _no_op_out_of_range(fn, *args):
    try:
        fn(*args)
    except OffsetOutOfRange as exc:
        logger.warning("skipping block transform: %s", exc)


def encrypt(cooked_key, key_offset, src, src_offset, dst, dst_offset):
    """Like `buffers.encrypt()`, a no-op when an offset is out of range."""
    _no_op_out_of_range(buffers.encrypt, cooked_key, key_offset, src,
                        src_offset, dst, dst_offset)


def decrypt(cooked_key, key_offset, src, src_offset, dst, dst_offset):
    """Like `buffers.decrypt()`, a no-op when an offset is out of range."""
    _no_op_out_of_range(buffers.decrypt, cooked_key, key_offset, src,
                        src_offset, dst, dst_offset)
