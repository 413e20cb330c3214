"""Error taxonomy and warning categories shared by every layer of the engine.

Hard failures are exceptions deriving from `RSAError`, each tagged with an `ErrorKind`. They also derive from the
builtin exception a caller would naturally expect (`ValueError`, `RuntimeError`, `OSError`), so plain `except`
clauses keep working. Soft failures are warnings and never abort an operation.
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import enum


class ErrorKind(enum.Enum):
    """Tag identifying the category of a failure."""
    INVALID_PARAMETER = "InvalidParameter"
    BLOCK_TOO_LARGE = "BlockTooLarge"
    KEY_TOO_SMALL = "KeyTooSmall"
    NO_SUITABLE_EXPONENT = "NoSuitableExponent"
    MODULAR_INVERSE_FAILURE = "ModularInverseFailure"
    GENERATION_EXHAUSTED = "GenerationExhausted"
    IO_ERROR = "IOError"
    MALFORMED_LINE = "MalformedLine"


class RSAError(Exception):
    """Base class of all hard failures raised by the engine.

    Attributes:
        kind: The category of the failure.
    """
    kind: ErrorKind = ErrorKind.INVALID_PARAMETER


class InvalidParameter(RSAError, ValueError):
    """Bit length too small, malformed key material or otherwise unusable argument."""
    kind = ErrorKind.INVALID_PARAMETER


class BlockTooLarge(RSAError, ValueError):
    """An integer representative does not fit below the modulus or into its byte block."""
    kind = ErrorKind.BLOCK_TOO_LARGE


class KeyTooSmall(RSAError, ValueError):
    """The modulus is too short to carry even a single byte per block."""
    kind = ErrorKind.KEY_TOO_SMALL


class NoSuitableExponent(RSAError, RuntimeError):
    kind = ErrorKind.NO_SUITABLE_EXPONENT


class ModularInverseFailure(RSAError, RuntimeError):
    kind = ErrorKind.MODULAR_INVERSE_FAILURE


class GenerationExhausted(RSAError, RuntimeError):
    """A randomized search loop hit its iteration cap."""
    kind = ErrorKind.GENERATION_EXHAUSTED


class FileAccessError(RSAError, OSError):
    """A file could not be opened, read or written."""
    kind = ErrorKind.IO_ERROR


class MalformedCiphertext(RSAError, ValueError):
    """A ciphertext file had content, yet not a single line could be decrypted."""
    kind = ErrorKind.MALFORMED_LINE


class InsecureParameterWarning(RuntimeWarning):
    """Parameters are accepted but far too small for any security."""


class TruncationWarning(RuntimeWarning):
    """High-order bytes were dropped while encoding an integer."""


class MalformedLineWarning(UserWarning):
    """A ciphertext line was skipped during file decryption."""
