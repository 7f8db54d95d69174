# -*- coding: utf-8 -*-

"""Block-cipher object: cook a key once, then encrypt/decrypt blocks.

    >>> cipher = Rijndael(b"0123456789ABCDEF")
    >>> ct = cipher.encrypt_block(b"Time is precious")
    >>> cipher.decrypt_block(ct)
    b'Time is precious'

The work can be done by interchangeable backends with identical
semantics:

    numpy         this package's T-table engine (default)
    reference     the step-by-step FIPS197 rendition in `block`
    pycryptodome  the optimized C routine behind Crypto.Cipher.AES

Key and block lengths are validated here, before any backend sees them,
so every backend raises the same errors.
"""

import logging

from Crypto.Cipher import AES

from . import block
from .constants import BLOCKSIZE_BYTES
from .schedule import Direction, cook_key, key_bytes, numrounds

__all__ = ("BACKENDS", "DEFAULT_BACKEND", "Rijndael")

logger = logging.getLogger(__name__)


class _NumpyBackend(object):

    def __init__(self, key):
        self._enc = cook_key(key, Direction.ENCRYPT)
        self._dec = cook_key(key, Direction.DECRYPT)

    def encrypt_block(self, data):
        return block.encrypt_block(self._enc, data)

    def decrypt_block(self, data):
        return block.decrypt_block(self._dec, data)


class _ReferenceBackend(_NumpyBackend):

    def encrypt_block(self, data):
        return block.encrypt_state(self._enc, data)

    def decrypt_block(self, data):
        return block.decrypt_state(self._dec, data)


class _PyCryptodomeBackend(object):

    def __init__(self, key):
        # ECB over exactly one block is the bare block cipher
        self._aes = AES.new(key.tobytes(), AES.MODE_ECB)

    def encrypt_block(self, data):
        return self._aes.encrypt(data.tobytes())

    def decrypt_block(self, data):
        return self._aes.decrypt(data.tobytes())


BACKENDS = {
    "numpy": _NumpyBackend,
    "reference": _ReferenceBackend,
    "pycryptodome": _PyCryptodomeBackend,
}
DEFAULT_BACKEND = "numpy"


class Rijndael(object):
    """AES block cipher bound to one key.

    Parameters
    ----------
    key: bytes-like, 16, 24, or 32 bytes
    backend: str, optional
        One of `BACKENDS`; defaults to `DEFAULT_BACKEND`.
    """

    block_size = BLOCKSIZE_BYTES

    def __init__(self, key, backend=None):
        key = key_bytes(key)
        if backend is None:
            backend = DEFAULT_BACKEND
        try:
            factory = BACKENDS[backend]
        except KeyError:
            raise ValueError(
                "unknown backend %r, expected one of %s"
                % (backend, ", ".join(sorted(BACKENDS)))
            ) from None
        logger.debug("AES-%d using %s backend", 8 * key.size, backend)
        self._impl = factory(key)
        self.backend = backend
        self.key_size = key.size
        self.rounds = numrounds(key.size // 4)

    def __repr__(self):
        return "%s(key_size=%d, backend=%r)" % (
            type(self).__name__, self.key_size, self.backend
        )

    def encrypt_block(self, data):
        """Encrypt exactly one 16-byte block; returns bytes."""
        return self._impl.encrypt_block(block.block_bytes(data))

    def decrypt_block(self, data):
        """Decrypt exactly one 16-byte block; returns bytes."""
        return self._impl.decrypt_block(block.block_bytes(data))
