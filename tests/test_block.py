# /usr/bin/env python
# -*- coding: utf-8 -*-

import random

import numpy as np
from numpy import array_equal
from Crypto.Cipher import AES
import pytest

from nprijndael import (
    InvalidBlockLength,
    ScheduleRoundCountMismatch,
    cook_decrypt_key,
    cook_encrypt_key,
    decrypt_block,
    encrypt_block,
)
from nprijndael.block import (
    add_round_key,
    decrypt_state,
    decrypt_words,
    encrypt_state,
    encrypt_words,
    inv_mix_columns,
    inv_shift_rows,
    inv_sub_bytes,
    mix_columns,
    shift_rows,
    sub_bytes,
)
from nprijndael.utils import array_to_hex, hex_to_array

# ---------------------------------------------------------------------
# Building blocks first: FIPS197 Appendix C.1, rounds 1 and 2.
# Each state is printed as a flat 16-byte string, so hex_to_array()
# turns it into the column-ordered State directly.

rounds = (
    (
        "00102030405060708090a0b0c0d0e0f0",  # start
        "63cab7040953d051cd60e0e7ba70e18c",  # s_box
        "6353e08c0960e104cd70b751bacad0e7",  # s_row
        "5f72641557f5bc92f7be3b291db9f91a",  # m_col
        "d6aa74fdd2af72fadaa678f1d6ab76fe",  # k_sch
        "89d810e8855ace682d1843d8cb128fe4",  # next start
    ),
    (
        "89d810e8855ace682d1843d8cb128fe4",
        "a761ca9b97be8b45d8ad1a611fc97369",
        "a7be1a6997ad739bd8c9ca451f618b61",
        "ff87968431d86a51645151fa773ad009",
        "b692cf0b643dbdf1be9bc5006830b3fe",
        "4915598f55e5d7a0daca94fa1f0a63f7",
    ),
)


@pytest.mark.parametrize("vectors", rounds)
def test_round_steps(vectors):
    start, s_box, s_row, m_col, k_sch, nxt = map(hex_to_array, vectors)
    assert array_equal(sub_bytes(start), s_box)
    assert array_equal(shift_rows(s_box), s_row)
    assert array_equal(mix_columns(s_row), m_col)
    assert array_equal(add_round_key(m_col, k_sch), nxt)


@pytest.mark.parametrize("vectors", rounds)
def test_inverse_round_steps(vectors):
    start, s_box, s_row, m_col = map(hex_to_array, vectors[:4])
    assert array_equal(inv_mix_columns(m_col), s_row)
    assert array_equal(inv_shift_rows(s_row), s_box)
    assert array_equal(inv_sub_bytes(s_box), start)


def test_mix_columns_appendix_b():
    # A sliver of Appendix B, Round 1
    after_shift_rows = hex_to_array("d4bf5d30 e0b452ae b84111f1 1e2798e5")
    after_mix_columns = hex_to_array("046681e5 e0cb199a 48f8d37a 2806264c")
    assert array_equal(mix_columns(after_shift_rows), after_mix_columns)


def test_step_functions_out():
    state = hex_to_array(rounds[0][0])
    res = sub_bytes(state, out=state)
    assert res is state
    assert array_to_hex(state, sep="") == rounds[0][1]
    shift_rows(state, out=state)
    mix_columns(state, out=state)
    assert array_to_hex(state, sep="") == rounds[0][3]


# ---------------------------------------------------------------------
# FIPS197 Appendix B and C, plus a couple of well-known vectors

vectors = [
    # key, plaintext, ciphertext
    (
        "2b7e151628aed2a6abf7158809cf4f3c",
        "3243f6a8885a308d313198a2e0370734",
        "3925841d02dc09fbdc118597196a0b32",
    ),
    (
        "000102030405060708090a0b0c0d0e0f",
        "00112233445566778899aabbccddeeff",
        "69c4e0d86a7b0430d8cdb78070b4c55a",
    ),
    (
        "000102030405060708090a0b0c0d0e0f1011121314151617",
        "00112233445566778899aabbccddeeff",
        "dda97ca4864cdfe06eaf70a0ec0d7191",
    ),
    (
        "000102030405060708090a0b0c0d0e0f101112131415161718191a1b1c1d1e1f",
        "00112233445566778899aabbccddeeff",
        "8ea2b7ca516745bfeafc49904b496089",
    ),
    (
        "00000000000000000000000000000000",
        "00000000000000000000000000000000",
        "66e94bd4ef8a2c3b884cfa59ca342b2e",
    ),
]


@pytest.mark.parametrize("key,pt,ct", vectors)
def test_example_vectors(key, pt, ct):
    key, pt, ct = map(bytes.fromhex, (key, pt, ct))
    assert encrypt_block(cook_encrypt_key(key), pt) == ct
    assert decrypt_block(cook_decrypt_key(key), ct) == pt


@pytest.mark.parametrize("key,pt,ct", vectors)
def test_example_vectors_step_by_step(key, pt, ct):
    key, pt, ct = map(bytes.fromhex, (key, pt, ct))
    assert encrypt_state(cook_encrypt_key(key), pt) == ct
    assert decrypt_state(cook_decrypt_key(key), ct) == pt


def test_known_answer():
    key = b"0123456789ABCDEF"
    pt = b"Time is precious"
    ct = bytes([0xf3, 0x97, 0x09, 0xdf, 0x2c, 0xdb, 0x87, 0x42,
                0x40, 0x47, 0xba, 0x4e, 0x28, 0x66, 0x14, 0xb3])
    assert encrypt_block(cook_encrypt_key(key), pt) == ct
    assert decrypt_block(cook_decrypt_key(key), ct) == pt


def test_accepts_serialized_cooked_key():
    key = b"0123456789ABCDEF"
    ekey = cook_encrypt_key(key)
    dkey = cook_decrypt_key(key)
    ct = encrypt_block(ekey.to_bytes(), b"Time is precious")
    assert ct == encrypt_block(ekey, b"Time is precious")
    assert decrypt_block(bytearray(dkey.to_bytes()), ct) == b"Time is precious"


def random_bytes(n, rng):
    return bytes(rng.randint(0, 255) for _ in range(n))


@pytest.mark.parametrize("keysize", [16, 24, 32])
@pytest.mark.parametrize("seed", range(5))
def test_round_trip(keysize, seed):
    rng = random.Random(seed)
    key = random_bytes(keysize, rng)
    pt = random_bytes(16, rng)
    ekey, dkey = cook_encrypt_key(key), cook_decrypt_key(key)
    ct = encrypt_block(ekey, pt)
    assert ct != pt
    assert decrypt_block(dkey, ct) == pt


@pytest.mark.parametrize("keysize", [16, 24, 32])
@pytest.mark.parametrize("seed", range(5))
def test_matches_pycryptodome(keysize, seed):
    rng = random.Random(1000 + seed)
    key = random_bytes(keysize, rng)
    pt = random_bytes(16, rng)
    expected = AES.new(key, AES.MODE_ECB).encrypt(pt)
    assert encrypt_block(cook_encrypt_key(key), pt) == expected
    assert encrypt_state(cook_encrypt_key(key), pt) == expected
    assert decrypt_block(cook_decrypt_key(key), expected) == pt


def test_deterministic():
    ekey = cook_encrypt_key(b"0123456789ABCDEF")
    pt = bytearray(b"Time is precious")
    first = encrypt_block(ekey, pt)
    for _ in range(3):
        assert encrypt_block(ekey, pt) == first
    # Inputs are left alone
    assert pt == b"Time is precious"
    assert cook_encrypt_key(b"0123456789ABCDEF") == ekey


def test_accepts_array_block():
    ekey = cook_encrypt_key(b"0123456789ABCDEF")
    arr = np.frombuffer(b"Time is precious", dtype=np.uint8)
    assert encrypt_block(ekey, arr) == encrypt_block(ekey, b"Time is precious")


@pytest.mark.parametrize("size", [0, 1, 15, 17, 32])
def test_invalid_block_length(size):
    ekey = cook_encrypt_key(b"0123456789ABCDEF")
    dkey = cook_decrypt_key(b"0123456789ABCDEF")
    with pytest.raises(InvalidBlockLength):
        encrypt_block(ekey, bytes(size))
    with pytest.raises(InvalidBlockLength):
        decrypt_block(dkey, bytes(size))


def test_words_reject_mismatched_round_count():
    schedule, rounds = cook_encrypt_key(b"0123456789ABCDEF")
    state = np.zeros(4, dtype=np.uint32)
    with pytest.raises(ScheduleRoundCountMismatch):
        encrypt_words(schedule, 14, state)
    with pytest.raises(ScheduleRoundCountMismatch):
        decrypt_words(schedule[:40], rounds, state)
