# -*- coding: utf-8 -*-

"""Lookup tables for Rijndael, computed rather than copied.

Everything here is derived from arithmetic in GF(2^8) with the AES
reduction polynomial

    m(x) = x^8 + x^4 + x^3 + x + 1    (0x11b)

Nothing is read from outside; the result is bit-identical to the tables
printed in FIPS197 (section 5.1.1, figures 7 and 14) and to the T-tables
of the Rijndael reference code.

The tables are built once per process by `get_tables()` and published
read-only.  Callers must treat them as constants.
"""

import collections
import functools
import logging
import threading

import numpy as np
from numpy import arange, uint8, uint32, int16

__all__ = (
    "Tables",
    "build_tables",
    "get_tables",
    "gf_multiply",
    "pack_bytes",
    "xtime",
)

logger = logging.getLogger(__name__)

# Low byte of m(x); the x^8 term is implied
REDUCTION_POLY = 0x1b

# Constant added by the S-box affine transform (FIPS197 eq. 5.1)
AFFINE_CONSTANT = 0x63

# Rcon[] values needed: Nk=4 uses 10, Nk=6 uses 8, Nk=8 uses 7
NUM_RCON = 10

Tables = collections.namedtuple(
    "Tables",
    ["exp", "log", "sbox", "inv_sbox", "rcon", "te", "td"],
)
Tables.__doc__ = """Immutable bundle of every table the cipher needs.

exp, log : exponent/logarithm tables, generator {03}
sbox, inv_sbox : uint8[256]
rcon : uint32[10], round constant in the high byte
te, td : uint32[4, 256] forward/inverse T-tables; row k is row 0
    rotated right by 8*k bits
"""


def xtime(x):
    """Multiply by {02} in GF(2^8).  Works on ints and uint8 arrays."""
    x = np.asarray(x, dtype=np.int32)
    res = ((x << 1) ^ np.where(x & 0x80, REDUCTION_POLY, 0)) & 0xff
    return res.astype(uint8)


def _exp_log():
    exp = np.zeros(256, dtype=int16)
    log = np.zeros(256, dtype=int16)
    x = 1
    for i in range(255):
        exp[i] = x
        log[x] = i
        # x * {03} == x * {02} ^ x
        x ^= int(xtime(x))
    # exp has period 255; the extra slot lets gf_multiply skip a modulo
    exp[255] = exp[0]
    return exp, log


def gf_multiply(x, y, _tables=None):
    """Vectorized multiplication in GF(2^8).

    Accepts scalars or arrays (broadcast against each other), returns
    uint8.  log[0] is only a placeholder, so products with a zero factor
    are masked out at the end.
    """
    if _tables is None:
        exp, log = get_tables()[:2]
    else:
        exp, log = _tables
    x = np.asarray(x, dtype=uint8)
    y = np.asarray(y, dtype=uint8)
    res = log[x] + log[y]
    res = exp[np.where(res > 0xff, res - 0xff, res)]
    return np.where(np.logical_and(x, y), res, 0).astype(uint8)


def _rotl8(b, n):
    # uint8 shifts drop the overflowing bits for us
    return (b << n) | (b >> (8 - n))


def _ror32(w, n):
    if n == 0:
        return w.copy()
    return (w >> n) | (w << (32 - n))


def pack_bytes(b0, b1, b2, b3):
    """Pack four byte arrays into big-endian uint32 words."""
    b0, b1, b2, b3 = (np.asarray(b, dtype=uint32) for b in (b0, b1, b2, b3))
    return ((b0 << 24) | (b1 << 16) | (b2 << 8) | b3).astype(uint32)


def _rotations(t0):
    t = np.empty((4, 256), dtype=uint32)
    for k in range(4):
        t[k] = _ror32(t0, 8 * k)
    return t


def build_tables():
    """Compute a fresh `Tables` instance.

    Prefer `get_tables()`, which does this once and caches the result.
    """
    exp, log = _exp_log()

    # Multiplicative inverse, with {00} mapped to itself
    allbytes = arange(256)
    inv = np.where(allbytes == 0, 0, exp[(255 - log[allbytes]) % 255])
    inv = inv.astype(uint8)

    # Affine transform over GF(2)
    sbox = (
        inv
        ^ _rotl8(inv, 1)
        ^ _rotl8(inv, 2)
        ^ _rotl8(inv, 3)
        ^ _rotl8(inv, 4)
        ^ uint8(AFFINE_CONSTANT)
    ).astype(uint8)

    inv_sbox = np.empty(256, dtype=uint8)
    inv_sbox[sbox] = arange(256, dtype=uint8)

    rcon = np.empty(NUM_RCON, dtype=uint32)
    x = 1
    for i in range(NUM_RCON):
        rcon[i] = x << 24
        x = int(xtime(x))

    mul = functools.partial(gf_multiply, _tables=(exp, log))

    # Te0[x] = S[x] . [02, 01, 01, 03]
    te = _rotations(pack_bytes(mul(sbox, 2), sbox, sbox, mul(sbox, 3)))
    # Td0[x] = Si[x] . [0e, 09, 0d, 0b]
    td = _rotations(pack_bytes(
        mul(inv_sbox, 0x0e),
        mul(inv_sbox, 0x09),
        mul(inv_sbox, 0x0d),
        mul(inv_sbox, 0x0b),
    ))

    tables = Tables(exp, log, sbox, inv_sbox, rcon, te, td)
    for arr in tables:
        arr.flags.writeable = False
    return tables


_tables = None
_tables_lock = threading.Lock()


def get_tables():
    """Return the process-wide `Tables`, building them on first use.

    Safe to call from several threads at once: construction happens
    under a lock and the module global is only bound to a finished,
    frozen `Tables` instance.
    """
    global _tables
    tables = _tables
    if tables is None:
        with _tables_lock:
            if _tables is None:
                logger.debug("building Rijndael lookup tables")
                _tables = build_tables()
            tables = _tables
    return tables
