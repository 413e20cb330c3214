"""Block-wise encryption and decryption of in-memory payloads.

The payload is cut into chunks one byte shorter than the modulus, so every chunk's integer value stays below it. The
last chunk is encrypted at its natural length without any padding; on decryption the lost length is recovered by
stripping the zero run at the end of the last block. Payloads ending in zero bytes therefore lose those bytes.

Typical usage example:

    blocks = encrypt_text("HELLO", pair.public)
    assert decrypt_text(blocks, pair.private) == b"HELLO"
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from collections.abc import Sequence

from blockrsa import codec
from blockrsa import errors
from blockrsa.rsa import decrypt_block
from blockrsa.rsa import encrypt_block
from blockrsa.rsa import PrivateKey
from blockrsa.rsa import PublicKey


def block_size(n_byte_length: int) -> int:
    """Plaintext chunk size for a modulus of `n_byte_length` bytes.

    Raises:
        KeyTooSmall: If the modulus leaves no room for a single byte.
    """
    if n_byte_length <= 1:
        raise errors.KeyTooSmall(f"Key modulus is too small ({n_byte_length} byte) to carry data.")
    return n_byte_length - 1


def encrypt_text(text: str | bytes, key: PublicKey, n_byte_length: int | None = None) -> list[int]:
    """Encrypts a payload block by block.

    Args:
        text: The payload. Strings are encoded as UTF-8.
        key: The public key.
        n_byte_length: Byte length of the modulus. Derived from `key` if omitted.

    Returns:
        The encrypted blocks in payload order. Empty for an empty payload.

    Raises:
        InvalidParameter: If `text` is neither a string nor bytes-like.
        KeyTooSmall: If the modulus is one byte or shorter.
        BlockTooLarge: If `n_byte_length` overstates the modulus so a chunk does not fit below it.
    """
    if isinstance(text, str):
        payload = text.encode("utf-8")
    elif isinstance(text, (bytes, bytearray, memoryview)):
        payload = bytes(text)
    else:
        raise errors.InvalidParameter(f"Payload must be str or bytes, got {type(text).__name__}.")
    if n_byte_length is None:
        n_byte_length = key.byte_length
    size = block_size(n_byte_length)
    return [encrypt_block(payload[i:i + size], key) for i in range(0, len(payload), size)]


def decrypt_text(blocks: Sequence[int], key: PrivateKey, n_byte_length: int | None = None) -> bytes:
    """Decrypts the blocks produced by `encrypt_text`.

    Every block decrypts to a full chunk. The final chunk's padding is moved behind its content and then stripped
    together with any other zero bytes trailing the final chunk.

    Args:
        blocks: The encrypted blocks, in order.
        key: The private key.
        n_byte_length: Byte length of the modulus. Derived from `key` if omitted.

    Returns:
        The recovered payload.

    Raises:
        KeyTooSmall: If the modulus is one byte or shorter.
        BlockTooLarge: If a block is not below the modulus or does not decrypt into a chunk.
    """
    if n_byte_length is None:
        n_byte_length = key.byte_length
    size = block_size(n_byte_length)
    if not blocks:
        return b""
    chunks = [decrypt_block(c, key, size) for c in blocks]
    chunks[-1] = codec.left_align(chunks[-1])
    last_block_start = (len(chunks) - 1) * size
    return codec.strip_zero_tail(b"".join(chunks), last_block_start)
