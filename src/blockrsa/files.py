"""Streams files through the block cipher, using a line-oriented hexadecimal ciphertext format.

Each encrypted block is written as one line holding the integer in lowercase hexadecimal, without prefix or fixed
width. Decryption is tolerant: lines may carry surrounding whitespace or one enclosing pair of square brackets, blank
lines are ignored and unparsable lines are skipped with a `MalformedLineWarning`.

Typical usage example:

    encrypt_file("notes.txt", "notes.rsa", pair.public)
    decrypt_file("notes.rsa", "notes.out", pair.private)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import os
import re
import warnings

from blockrsa import codec
from blockrsa import errors
from blockrsa.rsa import decrypt_block
from blockrsa.rsa import encrypt_block
from blockrsa.rsa import PrivateKey
from blockrsa.rsa import PublicKey
from blockrsa.text import block_size

_HEX_LINE = re.compile(r"[0-9a-fA-F]+")


def parse_line(line: str) -> int | None:
    """Parses one ciphertext line.

    Args:
        line: The raw line, with or without its terminator.

    Returns:
        The encrypted block, or None if the line is blank after normalization.

    Raises:
        ValueError: If the normalized line is not entirely a hexadecimal number.
    """
    processed = line.strip()
    if len(processed) >= 2 and processed[0] == "[" and processed[-1] == "]":
        processed = processed[1:-1].strip()
    if not processed:
        return None
    if not _HEX_LINE.fullmatch(processed):
        raise ValueError(f"Not a hexadecimal block: {processed!r}")
    return int(processed, 16)


def encrypt_file(in_path: str | os.PathLike,
                 out_path: str | os.PathLike,
                 key: PublicKey,
                 n_byte_length: int | None = None) -> None:
    """Encrypts a file into the hexadecimal line format.

    Args:
        in_path: The plaintext file, read as binary.
        out_path: The ciphertext file. Created or truncated.
        key: The public key.
        n_byte_length: Byte length of the modulus. Derived from `key` if omitted.

    Raises:
        KeyTooSmall: If the modulus is one byte or shorter. No file is touched in that case.
        FileAccessError: If either file cannot be opened, read or written.
    """
    if n_byte_length is None:
        n_byte_length = key.byte_length
    size = block_size(n_byte_length)
    try:
        with open(in_path, "rb") as src, open(out_path, "w", encoding="utf-8", newline="\n") as dst:
            while True:
                chunk = src.read(size)
                if not chunk:
                    break
                dst.write(f"{encrypt_block(chunk, key):x}\n")
    except OSError as err:
        raise errors.FileAccessError(f"File encryption failed: {err}") from err


def decrypt_file(in_path: str | os.PathLike,
                 out_path: str | os.PathLike,
                 key: PrivateKey,
                 n_byte_length: int | None = None) -> None:
    """Decrypts a file written by `encrypt_file`.

    Malformed lines are skipped with a warning. The final chunk's padding is moved behind its content, then the
    trailing zero run within the last chunk-sized window of the recovered bytes is treated as padding and removed.
    The run need not span the whole window: it stops at the first non-zero byte, so a partial final chunk loses its
    padding just as in `decrypt_text`. Zero bytes that genuinely end the plaintext are removed as well.

    Args:
        in_path: The ciphertext file.
        out_path: The plaintext file. Truncated before any line is processed and left as-is on failure.
        key: The private key.
        n_byte_length: Byte length of the modulus. Derived from `key` if omitted.

    Raises:
        KeyTooSmall: If the modulus is one byte or shorter. No file is touched in that case.
        FileAccessError: If either file cannot be opened, read or written.
        BlockTooLarge: If a parsed block is not below the modulus or does not decrypt into a chunk.
        MalformedCiphertext: If the file had non-blank lines but none of them could be parsed.
    """
    if n_byte_length is None:
        n_byte_length = key.byte_length
    size = block_size(n_byte_length)
    try:
        with open(in_path, "r", encoding="utf-8", errors="replace") as src, open(out_path, "wb") as dst:
            blocks: list[int] = []
            processable = False
            for lineno, line in enumerate(src, start=1):
                try:
                    parsed = parse_line(line)
                except ValueError as err:
                    processable = True
                    warnings.warn(f"Line {lineno}: skipped, {err}", errors.MalformedLineWarning)
                    continue
                if parsed is None:
                    continue
                processable = True
                blocks.append(parsed)
            if not blocks:
                if processable:
                    raise errors.MalformedCiphertext(f"No line of {in_path} holds a decryptable block.")
                return
            chunks = [decrypt_block(c, key, size) for c in blocks]
            chunks[-1] = codec.left_align(chunks[-1])
            recovered = b"".join(chunks)
            dst.write(codec.strip_zero_tail(recovered, len(recovered) - size))
    except OSError as err:
        raise errors.FileAccessError(f"File decryption failed: {err}") from err
