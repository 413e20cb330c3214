"""Result-returning entry points for embedding applications.

The core modules raise typed exceptions. This layer runs them and hands back a `Result` instead, so a caller on the
other side of a language or process boundary never has to rely on exception propagation. Warnings issued during the
call (insecure sizes, skipped ciphertext lines) travel along as diagnostics.

Typical usage example:

    res = generate_keys(512)
    if not res.ok:
        print(res.kind, res.error)
    blocks = encrypt_text("HELLO", res.value.public).value
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from collections.abc import Sequence
import os
import random
import typing
import warnings

from blockrsa import errors
from blockrsa import files
from blockrsa import text
from blockrsa.rsa import KeyPair
from blockrsa.rsa import PrivateKey
from blockrsa.rsa import PublicKey


class Result(typing.NamedTuple):
    """Outcome of an engine call: either a value or an error, plus collected warning texts."""
    value: typing.Any = None
    error: errors.RSAError | None = None
    diagnostics: tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def kind(self) -> errors.ErrorKind | None:
        return None if self.error is None else self.error.kind


def _run(func: typing.Callable, *args, **kwargs) -> Result:
    """Call `func`, turning `RSAError`s into a failed result and warnings into diagnostics.

    Any other `TypeError` or `ValueError` stems from malformed arguments and is reported as `InvalidParameter`.
    """
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        try:
            value = func(*args, **kwargs)
        except errors.RSAError as err:
            return Result(error=err, diagnostics=tuple(str(w.message) for w in caught))
        except (TypeError, ValueError) as err:
            wrapped = errors.InvalidParameter(f"Malformed argument: {err}")
            wrapped.__cause__ = err
            return Result(error=wrapped, diagnostics=tuple(str(w.message) for w in caught))
    return Result(value=value, diagnostics=tuple(str(w.message) for w in caught))


def generate_keys(bits: int, rng: random.Random | None = None, max_attempts: int | None = None) -> Result:
    """Generate a `KeyPair` of `bits` bits."""
    return _run(KeyPair.generate, bits, rng, max_attempts)


def encrypt_text(plaintext: str | bytes, pub: PublicKey) -> Result:
    """Encrypt a payload into a list of encrypted blocks."""
    return _run(text.encrypt_text, plaintext, pub)


def decrypt_text(blocks: Sequence[int], priv: PrivateKey) -> Result:
    """Decrypt a list of encrypted blocks into bytes."""
    return _run(text.decrypt_text, blocks, priv)


def encrypt_file(in_path: str | os.PathLike, out_path: str | os.PathLike, pub: PublicKey) -> Result:
    return _run(files.encrypt_file, in_path, out_path, pub)


def decrypt_file(in_path: str | os.PathLike, out_path: str | os.PathLike, priv: PrivateKey) -> Result:
    """Decrypt a ciphertext file. Skipped lines are reported in the diagnostics."""
    return _run(files.decrypt_file, in_path, out_path, priv)
