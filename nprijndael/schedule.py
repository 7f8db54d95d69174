# -*- coding: utf-8 -*-

"""Key expansion: raw key -> cooked key (round key schedule).

The key expansion generates a total of Nb * (Nr + 1) 4-byte words:
- 128 -> 4 * (10 + 1) -> 44
- 192 -> 4 * (12 + 1) -> 52
- 256 -> 4 * (14 + 1) -> 60

Words are uint32, big-endian: byte 0 of a word is its high byte.

A schedule comes in two orientations.  The encryption schedule is the
plain FIPS197 `w[]`.  The decryption schedule is the one used by the
"equivalent inverse cipher" (FIPS197 section 5.3.5), stored back to
front so that decryption also walks it from group 0 upward:

    group 0        = encryption group Nr
    group 1..Nr-1  = InvMixColumns(encryption group Nr-1..1)
    group Nr       = encryption group 0
"""

import collections
import enum

import numpy as np
from numpy import uint32

from .constants import (
    ALLOWED_KEYLENGTH_BYTES,
    ALLOWED_ROUNDS,
    COOKED_KEY_NR_OFFSET,
    COOKED_KEY_SIZE,
    MAX_SCHEDULE_WORDS,
    NB,
)
from .exceptions import InvalidKeySize, ScheduleRoundCountMismatch
from .tables import get_tables, pack_bytes
from .utils import as_uint8_buffer, check_window

__all__ = (
    "CookedKey",
    "Direction",
    "as_cooked_key",
    "cook_decrypt_key",
    "cook_encrypt_key",
    "cook_key",
    "expand_key",
    "inv_mix_column_words",
    "key_bytes",
    "numrounds",
    "rot_word",
    "sub_word",
)


class Direction(enum.Enum):
    """Orientation of a cooked key."""

    ENCRYPT = "encrypt"
    DECRYPT = "decrypt"


def numrounds(nk, _table={4: 10, 6: 12, 8: 14}):
    """Return number of rounds (Nr) as function of key size (Nk).

    It is technically a function of Nk and Nb, but Nb is fixed at 4.
    """
    return _table[nk]


def key_bytes(key):
    """Validate a raw key and return it as a flat uint8 array."""
    key = as_uint8_buffer(key)
    if key.size not in ALLOWED_KEYLENGTH_BYTES:
        raise InvalidKeySize(key.size)
    return key


def bytes_to_words(buf):
    return np.frombuffer(bytes(buf), dtype=">u4").astype(uint32)


def words_to_bytes(words):
    return np.asarray(words, dtype=uint32).astype(">u4").tobytes()


def rot_word(word):
    """Takes a 4-byte word and performs cyclic permutation.

    Aka one-byte left circular shift.

    [b0, b1, b2, b3] -> [b1, b2, b3, b0]
    """
    word = np.asarray(word, dtype=uint32)
    # Scalar shifts may promote to a wider integer type
    return np.asarray(((word << 8) | (word >> 24)) & 0xffffffff, dtype=uint32)


def sub_word(word):
    """Apply the S-box to each of the four bytes of `word`."""
    sbox = get_tables().sbox
    word = np.asarray(word, dtype=uint32)
    return pack_bytes(
        sbox[word >> 24],
        sbox[(word >> 16) & 0xff],
        sbox[(word >> 8) & 0xff],
        sbox[word & 0xff],
    )


def inv_mix_column_words(words):
    """InvMixColumns applied to each column word in `words`.

    Td[k] already carries the inverse S-box, so feeding it S-box
    outputs leaves only the inverse mixing.
    """
    tables = get_tables()
    sbox, td = tables.sbox, tables.td
    words = np.asarray(words, dtype=uint32)
    return (
        td[0][sbox[words >> 24]]
        ^ td[1][sbox[(words >> 16) & 0xff]]
        ^ td[2][sbox[(words >> 8) & 0xff]]
        ^ td[3][sbox[words & 0xff]]
    )


def expand_key(key):
    """Key expansion routine to generate a key schedule.

    Expand a short key into a single array of round keys, each 4 words.
    Returns the uint32 array `w` of FIPS197 section 5.2.
    """
    key = key_bytes(key)
    rcon = get_tables().rcon

    # The first *nk* words of the expanded key are filled with
    # respective keys from the cipher key.  (Each word == 4 bytes)
    nk = key.size // 4
    nr = numrounds(nk)
    nwords = NB * (nr + 1)
    w = np.empty(nwords, dtype=uint32)
    w[:nk] = bytes_to_words(key)
    # Each word depends on w[i - 1] and w[i - nk], hence the loop
    i = nk
    while i < nwords:
        temp = w[i - 1]
        if i % nk == 0:
            temp = sub_word(rot_word(temp)) ^ rcon[i // nk - 1]
        elif nk > 6 and i % nk == 4:
            temp = sub_word(temp)
        w[i] = w[i - nk] ^ temp
        i += 1
    return w


class CookedKey(collections.namedtuple("CookedKey", ["words", "rounds"])):
    """A round key schedule paired with its round count.

    `words` is a read-only uint32 array of length 4 * (rounds + 1).
    Unpacks like the pair it is:

    >>> schedule, rounds = cook_key(b"0123456789ABCDEF")
    >>> rounds
    10
    """

    __slots__ = ()

    def __new__(cls, words, rounds):
        words = np.array(words, dtype=uint32).reshape(-1)
        if rounds not in ALLOWED_ROUNDS or words.size != NB * (rounds + 1):
            raise ScheduleRoundCountMismatch(rounds, words.size)
        words.flags.writeable = False
        return super().__new__(cls, words, int(rounds))

    def __eq__(self, other):
        if not isinstance(other, CookedKey):
            return NotImplemented
        return (
            self.rounds == other.rounds
            and np.array_equal(self.words, other.words)
        )

    def __ne__(self, other):
        eq = self.__eq__(other)
        if eq is NotImplemented:
            return eq
        return not eq

    def __hash__(self):
        return hash((self.rounds, self.words.tobytes()))

    def __repr__(self):
        return "CookedKey(rounds=%d, words=[%s])" % (
            self.rounds,
            " ".join("%08x" % w for w in self.words),
        )

    def to_bytes(self):
        """Serialize to the fixed-size 241-byte cooked key buffer.

        Layout: 60 big-endian words (unused tail is zero) then Nr at
        byte 240, whatever the key size.
        """
        buf = bytearray(COOKED_KEY_SIZE)
        raw = words_to_bytes(self.words)
        buf[:len(raw)] = raw
        buf[COOKED_KEY_NR_OFFSET] = self.rounds
        return bytes(buf)

    @classmethod
    def from_bytes(cls, buf, offset=0):
        """Parse a buffer written by `to_bytes()`, starting at `offset`."""
        data = as_uint8_buffer(buf)
        check_window(data.size, offset, COOKED_KEY_SIZE)
        rounds = int(data[offset + COOKED_KEY_NR_OFFSET])
        if rounds not in ALLOWED_ROUNDS:
            raise ScheduleRoundCountMismatch(rounds, MAX_SCHEDULE_WORDS)
        nbytes = 4 * NB * (rounds + 1)
        return cls(bytes_to_words(data[offset:offset + nbytes]), rounds)


def as_cooked_key(obj, offset=0):
    """Coerce a CookedKey or a serialized cooked key buffer."""
    if isinstance(obj, CookedKey):
        if offset:
            raise ValueError("offset must be 0 for a CookedKey")
        return obj
    return CookedKey.from_bytes(obj, offset)


def cook_key(raw_key, direction=Direction.ENCRYPT):
    """Expand `raw_key` into a CookedKey of the given orientation.

    Raises InvalidKeySize unless the key is 16, 24, or 32 bytes long.
    """
    direction = Direction(direction)
    w = expand_key(raw_key)
    nr = w.size // NB - 1
    if direction is Direction.DECRYPT:
        groups = w.reshape(nr + 1, NB)[::-1].copy()
        groups[1:nr] = inv_mix_column_words(groups[1:nr])
        w = groups.reshape(-1)
    return CookedKey(w, nr)


def cook_encrypt_key(raw_key):
    return cook_key(raw_key, Direction.ENCRYPT)


def cook_decrypt_key(raw_key):
    return cook_key(raw_key, Direction.DECRYPT)
