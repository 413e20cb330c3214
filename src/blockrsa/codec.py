"""Conversions between byte blocks and their integer representatives, plus the padding heuristics built on them.

Typical usage example:

    m = bytes_to_integer(b"HELLO")
    block = integer_to_bytes(m, 63)
    data = strip_zero_tail(left_align(block), 0)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import warnings

from blockrsa import errors


def bytes_to_integer(msg: bytes) -> int:
    """Converts a byte string to its big-endian integer representative.

    Args:
        msg: The bytes to convert. Empty input maps to 0.

    Returns:
        The representative integer.
    """
    return int.from_bytes(msg, byteorder="big", signed=False)


def integer_to_bytes(msg: int, fixedlen: int | None = None, truncate: bool = False) -> bytes:
    """Converts an integer to big-endian bytes, optionally left-zero-padded to a fixed length.

    Args:
        msg: The integer to unmarshal. Must be non-negative.
        fixedlen: The target length of the byte string. If omitted (or zero) the shortest encoding is returned,
            which is a single zero byte for 0.
        truncate: What to do when the encoding is longer than `fixedlen`. If False (the default) this is an error,
            if True the excess high-order bytes are dropped and a `TruncationWarning` is issued.

    Returns:
        The representative bytes.

    Raises:
        InvalidParameter: If `msg` is negative.
        BlockTooLarge: If `msg` does not fit into `fixedlen` bytes and `truncate` is False.
    """
    if msg < 0:
        raise errors.InvalidParameter("Only non-negative integers have a byte representation.")
    natural = max(1, (msg.bit_length() + 7) // 8)
    if not fixedlen:
        return msg.to_bytes(natural, byteorder="big", signed=False)
    if natural <= fixedlen:
        return msg.to_bytes(fixedlen, byteorder="big", signed=False)
    if not truncate:
        raise errors.BlockTooLarge(f"Integer needs {natural} bytes, which does not fit into {fixedlen}.")
    warnings.warn(f"Integer to bytes conversion resulted in {natural} bytes, but expected {fixedlen}. Truncating.",
                  errors.TruncationWarning)
    return msg.to_bytes(natural, byteorder="big", signed=False)[natural - fixedlen:]


def approximate_byte_length(n: int) -> int:
    """Number of bytes needed to hold `n`, at least 1."""
    if n == 0:
        return 1
    return (n.bit_length() + 7) // 8


def left_align(block: bytes) -> bytes:
    """Moves the leading zero padding of a fixed-length block behind its content.

    A short final chunk decrypts to a left-padded block; shifting the padding to the tail lets the trailing-zero
    heuristic remove it.

    Args:
        block: The fixed-length decrypted block.

    Returns:
        A block of the same length, content first.
    """
    content = block.lstrip(b"\x00")
    return content + bytes(len(block) - len(content))


def strip_zero_tail(buffer: bytes, window_start: int) -> bytes:
    """Removes the trailing run of zero bytes, never cutting below `window_start`.

    This is a heuristic, not a padding scheme. Genuine zero bytes at the very end of the plaintext are
    indistinguishable from padding and are removed too.

    Args:
        buffer: The concatenated decrypted blocks.
        window_start: First index that may be stripped.

    Returns:
        The buffer without its padding.
    """
    end = len(buffer)
    floor = max(window_start, 0)
    while end > floor and buffer[end - 1] == 0:
        end -= 1
    return bytes(buffer[:end])
