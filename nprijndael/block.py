# -*- coding: utf-8 -*-

"""Single-block encryption and decryption.

Two renditions of the same round function live here:

 - The T-table engine (`encrypt_words()`/`decrypt_words()`), which is
   what `encrypt_block()` and `decrypt_block()` run.  The State is four
   uint32 column words.  One round is, per column,

       Te0[a0] ^ Te1[a1] ^ Te2[a2] ^ Te3[a3] ^ roundkey

   where a_r is the row-r byte *after* ShiftRows.  ShiftRows moves the
   row-r byte of column c + r into column c, so instead of shuffling
   bytes we look them up from `np.roll(state, -r)`.  The last round has
   no MixColumns and goes through the plain S-box.

 - The step-by-step FIPS197 rendition (`encrypt_state()`/
   `decrypt_state()`) on a 4x4 uint8 State, built from `sub_bytes()`,
   `shift_rows()`, `mix_columns()` and friends.  It consumes the same
   CookedKey values and serves as a readable reference.

NumPy arrays are row-ordered whereas FIPS197 depicts the state as an
"array of columns," so a 16-byte input

    {in0, in1, in2, in3, in4, in5, ..., in13, in14, in15}

is laid out as

    [[in0, in4, in8,  in12],
     [in1, in5, in9,  in13],
     [in2, in6, in10, in14],
     [in3, in7, in11, in15]], with word0 as {in0, in1, in2, in3}

which is a reshape followed by `.swapaxes(0, 1)`.
"""

import functools

import numpy as np
from numpy import arange, array, uint8, uint32, bitwise_xor as xor

from .constants import ALLOWED_ROUNDS, BLOCKSIZE_BYTES, NB
from .exceptions import InvalidBlockLength, ScheduleRoundCountMismatch
from .schedule import as_cooked_key
from .tables import get_tables, gf_multiply, pack_bytes
from .utils import as_uint8_buffer

__all__ = (
    "add_round_key",
    "block_bytes",
    "decrypt_block",
    "decrypt_state",
    "decrypt_words",
    "encrypt_block",
    "encrypt_state",
    "encrypt_words",
    "inv_mix_columns",
    "inv_shift_rows",
    "inv_sub_bytes",
    "mix_columns",
    "shift_rows",
    "sub_bytes",
)


def block_bytes(block):
    """Validate a block and return it as a flat uint8 array."""
    block = as_uint8_buffer(block)
    if block.size != BLOCKSIZE_BYTES:
        raise InvalidBlockLength(block.size)
    return block


def _check_schedule(words, rounds):
    if rounds not in ALLOWED_ROUNDS or words.size != NB * (rounds + 1):
        raise ScheduleRoundCountMismatch(rounds, words.size)


# ---------------------------------------------------------------------
# T-table engine


def _rounds(state, words, rounds, ttable, box, shift):
    """Shared round loop.  `shift` is -1 to encrypt and 1 to decrypt."""
    rk = words.reshape(rounds + 1, NB)
    s = state ^ rk[0]
    for r in range(1, rounds):
        s1, s2, s3 = (np.roll(s, shift * k) for k in (1, 2, 3))
        s = (
            ttable[0][s >> 24]
            ^ ttable[1][(s1 >> 16) & 0xff]
            ^ ttable[2][(s2 >> 8) & 0xff]
            ^ ttable[3][s3 & 0xff]
            ^ rk[r]
        )
    # Final round: no (Inv)MixColumns
    s1, s2, s3 = (np.roll(s, shift * k) for k in (1, 2, 3))
    return pack_bytes(
        box[s >> 24],
        box[(s1 >> 16) & 0xff],
        box[(s2 >> 8) & 0xff],
        box[s3 & 0xff],
    ) ^ rk[rounds]


def encrypt_words(words, rounds, state):
    """Encrypt four uint32 column words with an encryption schedule."""
    words = np.asarray(words, dtype=uint32)
    _check_schedule(words, rounds)
    tables = get_tables()
    state = np.asarray(state, dtype=uint32)
    return _rounds(state, words, rounds, tables.te, tables.sbox, -1)


def decrypt_words(words, rounds, state):
    """Decrypt four uint32 column words with a decryption schedule."""
    words = np.asarray(words, dtype=uint32)
    _check_schedule(words, rounds)
    tables = get_tables()
    state = np.asarray(state, dtype=uint32)
    return _rounds(state, words, rounds, tables.td, tables.inv_sbox, 1)


def _load(block):
    return np.frombuffer(block_bytes(block).tobytes(), dtype=">u4").astype(uint32)


def _store(state):
    return state.astype(">u4").tobytes()


def encrypt_block(cooked_key, block):
    """Encrypt one 16-byte block.

    Parameters
    ----------
    cooked_key: CookedKey or serialized cooked key, encryption oriented
    block: bytes-like, exactly 16 bytes

    Returns
    -------
    bytes
    """
    schedule, rounds = as_cooked_key(cooked_key)
    return _store(encrypt_words(schedule, rounds, _load(block)))


def decrypt_block(cooked_key, block):
    """Decrypt one 16-byte block with a decryption-oriented cooked key."""
    schedule, rounds = as_cooked_key(cooked_key)
    return _store(decrypt_words(schedule, rounds, _load(block)))


# ---------------------------------------------------------------------
# Step functions: SubBytes(), ShiftRows(), MixColumns()
# (AddRoundKey() is just an XOR)


def sub_bytes(state, out=None):
    sbox = get_tables().sbox
    if out is not None:
        out[:] = sbox[state]
        return out
    return sbox[state]


def inv_sub_bytes(state, out=None):
    inv_sbox = get_tables().inv_sbox
    if out is not None:
        out[:] = inv_sbox[state]
        return out
    return inv_sbox[state]


# Row r is shifted left by r
colindexer = (arange(4)[None, :] + arange(4)[:, None]) % 4
invcolindexer = (arange(4)[None, :] - arange(4)[:, None]) % 4


def _shift_rows(state, out=None, _rows=arange(4)[:, None], _cols=None):
    if out is not None:
        out[:] = state[_rows, _cols]
        return out
    return state[_rows, _cols]


shift_rows = functools.partial(_shift_rows, _cols=colindexer)
shift_rows.__doc__ = """Cyclically shift last 3 rows in the State."""

inv_shift_rows = functools.partial(_shift_rows, _cols=invcolindexer)
inv_shift_rows.__doc__ = """Cyclically shift last 3 rows in the State, inverse."""


def _mix_columns(state, out=None, pm0=None, pm1=None, pm2=None, pm3=None):
    res = (
        gf_multiply(state[0], pm0)
        ^ gf_multiply(state[1], pm1)
        ^ gf_multiply(state[2], pm2)
        ^ gf_multiply(state[3], pm3)
    )
    if out is not None:
        out[:] = res
        return out
    return res


ax_polynomial = array(
    [
        [0x02, 0x03, 0x01, 0x01],
        [0x01, 0x02, 0x03, 0x01],
        [0x01, 0x01, 0x02, 0x03],
        [0x03, 0x01, 0x01, 0x02],
    ], dtype=uint8)

inv_ax_polynomial = array(
    [
        [0x0e, 0x0b, 0x0d, 0x09],
        [0x09, 0x0e, 0x0b, 0x0d],
        [0x0d, 0x09, 0x0e, 0x0b],
        [0x0b, 0x0d, 0x09, 0x0e],
    ], dtype=uint8)

mix_columns = functools.partial(
    _mix_columns,
    pm0=ax_polynomial[:, [0]],
    pm1=ax_polynomial[:, [1]],
    pm2=ax_polynomial[:, [2]],
    pm3=ax_polynomial[:, [3]],
)
inv_mix_columns = functools.partial(
    _mix_columns,
    pm0=inv_ax_polynomial[:, [0]],
    pm1=inv_ax_polynomial[:, [1]],
    pm2=inv_ax_polynomial[:, [2]],
    pm3=inv_ax_polynomial[:, [3]],
)


def add_round_key(state, roundkey, out=None):
    return xor(state, roundkey, out=out)


def _round_key_states(words, rounds):
    """Split a schedule into Nr + 1 column-ordered 4x4 round keys."""
    raw = np.frombuffer(_store(np.asarray(words, dtype=uint32)), dtype=uint8)
    return raw.reshape(rounds + 1, NB, 4).swapaxes(1, 2)


def _state_from_block(block):
    return block_bytes(block).reshape(NB, 4).swapaxes(0, 1).copy()


def _block_from_state(state):
    return state.swapaxes(0, 1).tobytes()


def encrypt_state(cooked_key, block):
    """Encrypt one block step by step, as FIPS197 section 5.1 reads."""
    schedule, rounds = as_cooked_key(cooked_key)
    _check_schedule(schedule, rounds)
    exkeys = _round_key_states(schedule, rounds)
    state = _state_from_block(block)

    # First XOR is with just input + key
    add_round_key(state, exkeys[0], out=state)

    # Intermediate rounds
    for ek in exkeys[1:rounds]:
        sub_bytes(state, out=state)
        shift_rows(state, out=state)
        mix_columns(state, out=state)
        add_round_key(state, ek, out=state)

    # Final round before a final XOR.  No mixColumns here
    sub_bytes(state, out=state)
    shift_rows(state, out=state)
    add_round_key(state, exkeys[rounds], out=state)
    return _block_from_state(state)


def decrypt_state(cooked_key, block):
    """Decrypt one block step by step.

    This is the equivalent inverse cipher (FIPS197 section 5.3.5), so it
    takes the same decryption-oriented CookedKey as `decrypt_block()`.
    """
    schedule, rounds = as_cooked_key(cooked_key)
    _check_schedule(schedule, rounds)
    exkeys = _round_key_states(schedule, rounds)
    state = _state_from_block(block)

    add_round_key(state, exkeys[0], out=state)
    for ek in exkeys[1:rounds]:
        inv_sub_bytes(state, out=state)
        inv_shift_rows(state, out=state)
        inv_mix_columns(state, out=state)
        add_round_key(state, ek, out=state)

    inv_sub_bytes(state, out=state)
    inv_shift_rows(state, out=state)
    add_round_key(state, exkeys[rounds], out=state)
    return _block_from_state(state)
