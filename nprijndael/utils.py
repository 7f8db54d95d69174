# -*- coding: utf-8 -*-

"""Buffer and hex helpers.

hex_to_array() and array_to_hex() mostly serve the FIPS197 example
vectors in the test suite, which are printed as hex.
"""

import numpy as np
from numpy import array, uint8

from .exceptions import OffsetOutOfRange

__all__ = (
    "array_to_hex",
    "as_uint8_buffer",
    "check_window",
    "hex_to_array",
)


def hex_to_array(s, ndim=2):
    """Produce an array of uint8 bytes from a hex string.

    If ndim is 1, the result is 1d.
    If ndim is 2, the result is 4xN and follows FIPS197's
    *column ordering*, with each column denoting a successive
    word from the input.

    Example
    -------
    >>> hex_to_array("00 01 02 03 04 05 06 07 08 09 0a 0b 0c 0d 0e 0f")
    array([[ 0,  4,  8, 12],
           [ 1,  5,  9, 13],
           [ 2,  6, 10, 14],
           [ 3,  7, 11, 15]], dtype=uint8)

    >>> hex_to_array("00 01 02 03", 1)
    array([0, 1, 2, 3], dtype=uint8)
    """
    res = array(bytearray.fromhex(s), dtype=uint8)
    if ndim == 2:
        res = res.reshape(-1, 4).swapaxes(0, 1)
    return res


def array_to_hex(arr, sep=" "):
    """Inverse of `hex_to_array()`."""
    arr = np.asarray(arr)
    if arr.ndim == 1:
        return sep.join(map("{:02x}".format, arr))
    return sep.join(map("{:02x}".format, arr.swapaxes(0, 1).flat))


def as_uint8_buffer(buf):
    """View any bytes-like object as a flat uint8 array, without copying.

    Writable inputs (bytearray, writable memoryview, ndarray) give a
    writable view onto the same memory; bytes give a read-only one.
    """
    if isinstance(buf, np.ndarray):
        if buf.dtype != uint8 or buf.ndim != 1:
            raise TypeError(
                "expected a 1d uint8 array, got %dd %s" % (buf.ndim, buf.dtype)
            )
        return buf
    view = memoryview(buf)
    if view.nbytes == 0:
        return np.empty(0, dtype=uint8)
    return np.frombuffer(view, dtype=uint8)


def check_window(capacity, offset, length):
    """Raise OffsetOutOfRange unless [offset, offset + length) fits."""
    if offset < 0 or length < 0 or offset + length > capacity:
        raise OffsetOutOfRange(offset, length, capacity)
