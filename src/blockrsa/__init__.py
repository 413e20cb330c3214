"""Block RSA: a pedagogical, textbook RSA engine for text and files.

Provides key generation from probable primes, block-wise encryption of in-memory payloads and of files in a
hexadecimal line format, and result-returning wrappers for embedding applications in `blockrsa.engine`.
Not intended for production use: the scheme is textbook RSA with a heuristic, zero-stripping padding removal.

Typical usage example:

    pair = KeyPair.generate(512)
    c = encrypt_text("Hi there!", pair.public)
    r = decrypt_text(c, pair.private)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from blockrsa.errors import BlockTooLarge
from blockrsa.errors import ErrorKind
from blockrsa.errors import FileAccessError
from blockrsa.errors import GenerationExhausted
from blockrsa.errors import InvalidParameter
from blockrsa.errors import KeyTooSmall
from blockrsa.errors import MalformedCiphertext
from blockrsa.errors import ModularInverseFailure
from blockrsa.errors import NoSuitableExponent
from blockrsa.errors import RSAError
from blockrsa.files import decrypt_file
from blockrsa.files import encrypt_file
from blockrsa.keygen import check_prime
from blockrsa.keygen import generate_keys
from blockrsa.keygen import generate_probable_prime
from blockrsa.rsa import decrypt_block
from blockrsa.rsa import encrypt_block
from blockrsa.rsa import KeyPair
from blockrsa.rsa import PrivateKey
from blockrsa.rsa import PublicKey
from blockrsa.text import decrypt_text
from blockrsa.text import encrypt_text

__version__ = "0.1.0"
__all__ = [
    "KeyPair",
    "PublicKey",
    "PrivateKey",
    "check_prime",
    "generate_probable_prime",
    "generate_keys",
    "encrypt_block",
    "decrypt_block",
    "encrypt_text",
    "decrypt_text",
    "encrypt_file",
    "decrypt_file",
    "ErrorKind",
    "RSAError",
    "InvalidParameter",
    "BlockTooLarge",
    "KeyTooSmall",
    "NoSuitableExponent",
    "ModularInverseFailure",
    "GenerationExhausted",
    "FileAccessError",
    "MalformedCiphertext",
]
