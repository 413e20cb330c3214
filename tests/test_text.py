# pylint: disable=missing-module-docstring,redefined-outer-name
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import random

import pytest

from blockrsa import errors
from blockrsa import text
from blockrsa.rsa import KeyPair
from blockrsa.rsa import PrivateKey
from blockrsa.rsa import PublicKey

standard_payload = "The quick brown fox jumps over the lazy dog1234567890!@#$%^&*()-_=+[{}];:\\|<>,./?~`'\""
# Textbook key: p = 61, q = 53, one byte per block.
tiny_pair = KeyPair(PublicKey(3233, 17), PrivateKey(3233, 2753))


@pytest.fixture(scope="module")
def pair() -> KeyPair:
    return KeyPair.generate(512, random.Random(512))


def nonzero_payload(rng: random.Random, length: int) -> bytes:
    return bytes(rng.randrange(1, 256) for _ in range(length))


def test_hello(pair):
    blocks = text.encrypt_text("HELLO", pair.public)
    assert len(blocks) == 1
    assert text.decrypt_text(blocks, pair.private) == b"HELLO"


def test_standard_payload(pair):
    blocks = text.encrypt_text(standard_payload, pair.public)
    assert len(blocks) == 2
    assert all(0 <= c < pair.public.n for c in blocks)
    assert text.decrypt_text(blocks, pair.private).decode("utf-8") == standard_payload


def test_unicode_payload(pair):
    payload = "Привет, мир! " * 10
    assert text.decrypt_text(text.encrypt_text(payload, pair.public), pair.private).decode("utf-8") == payload


@pytest.mark.parametrize("length", [1, 2, 62, 63, 64, 125, 126, 127, 500])
def test_round_trip_lengths(pair, length):
    rng = random.Random(length)
    payload = nonzero_payload(rng, length)
    blocks = text.encrypt_text(payload, pair.public)
    size = pair.public.byte_length - 1
    assert len(blocks) == -(-length // size)
    assert text.decrypt_text(blocks, pair.private) == payload


def test_round_trip_inner_zeros(pair):
    size = pair.public.byte_length - 1
    payload = b"\x00\x00lead" + bytes(size - 6) + b"tail" + bytes(5) + b"end"
    assert text.decrypt_text(text.encrypt_text(payload, pair.public), pair.private) == payload


def test_block_size_is_one_below_modulus(pair):
    size = pair.public.byte_length - 1
    payload = b"\xff" * size * 3
    blocks = text.encrypt_text(payload, pair.public)
    assert len(blocks) == 3
    assert text.block_size(pair.public.byte_length) == size


def test_short_final_block_is_not_padded(pair):
    size = pair.public.byte_length - 1
    blocks = text.encrypt_text(b"A" * size + b"B", pair.public)
    assert pair.private.c_rsa(blocks[-1]) == ord("B")


def test_trailing_zero_is_stripped(pair):
    # Known limitation: zero bytes ending the payload cannot be told apart from padding.
    assert text.decrypt_text(text.encrypt_text(b"AB\x00", pair.public), pair.private) == b"AB"


def test_leading_zeros_of_final_block_are_lost(pair):
    # Known limitation: the final block's length is not transmitted, so its leading zeros look like padding.
    assert text.decrypt_text(text.encrypt_text(b"\x00\x00AB", pair.public), pair.private) == b"AB"


def test_trailing_zeros_of_full_block_are_stripped(pair):
    size = pair.public.byte_length - 1
    payload = b"X" * (size - 2) + b"\x00\x00"
    assert text.decrypt_text(text.encrypt_text(payload, pair.public), pair.private) == b"X" * (size - 2)


def test_zeros_before_final_block_survive(pair):
    size = pair.public.byte_length - 1
    payload = b"X" + bytes(size - 1) + b"Y"
    assert text.decrypt_text(text.encrypt_text(payload, pair.public), pair.private) == payload


def test_empty():
    assert text.encrypt_text("", tiny_pair.public) == []
    assert text.decrypt_text([], tiny_pair.private) == b""


def test_tiny_key():
    blocks = text.encrypt_text(b"Hi!", tiny_pair.public)
    assert blocks == [pow(b, 17, 3233) for b in b"Hi!"]
    assert text.decrypt_text(blocks, tiny_pair.private) == b"Hi!"


@pytest.mark.parametrize("n_byte_length", [-1, 0, 1])
def test_block_size_too_small(n_byte_length):
    with pytest.raises(errors.KeyTooSmall):
        text.block_size(n_byte_length)


def test_key_too_small():
    pub, priv = PublicKey(35, 5), PrivateKey(35, 5)
    with pytest.raises(errors.KeyTooSmall):
        text.encrypt_text("A", pub)
    with pytest.raises(errors.KeyTooSmall):
        text.decrypt_text([1], priv)


def test_explicit_byte_length(pair):
    size = pair.public.byte_length - 2
    blocks = text.encrypt_text(standard_payload, pair.public, size + 1)
    assert len(blocks) == -(-len(standard_payload) // size)
    assert text.decrypt_text(blocks, pair.private, size + 1) == standard_payload.encode()


def test_overstated_byte_length(pair):
    with pytest.raises(errors.BlockTooLarge):
        text.encrypt_text(b"\xff" * 200, pair.public, pair.public.byte_length + 1)


def test_decrypt_block_out_of_range(pair):
    blocks = text.encrypt_text(standard_payload, pair.public)
    with pytest.raises(errors.BlockTooLarge):
        text.decrypt_text(blocks + [pair.private.n], pair.private)


@pytest.mark.parametrize("payload", [5, None, [72, 73], 1.5])
def test_rejects_non_text_payload(payload):
    with pytest.raises(errors.InvalidParameter):
        text.encrypt_text(payload, tiny_pair.public)


@pytest.mark.parametrize("payload", [bytearray(b"Hi!"), memoryview(b"Hi!")])
def test_accepts_bytes_like_payload(payload):
    blocks = text.encrypt_text(payload, tiny_pair.public)
    assert text.decrypt_text(blocks, tiny_pair.private) == b"Hi!"


def test_rejects_non_integer_blocks():
    with pytest.raises(errors.InvalidParameter):
        text.decrypt_text(["zz"], tiny_pair.private)
