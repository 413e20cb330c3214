"""Key Generation Utility, focusing on the generation of random probable primes and their combination into keys.

Prime candidates are drawn from an explicitly passed random source, sieved against a cached list of small primes and
then confirmed by a Miller-Rabin test. Every randomized loop is capped, so a broken random source surfaces as
`GenerationExhausted` instead of hanging.

Typical usage example:

    rng = random.Random(1234)
    p = generate_probable_prime(256, rng)
    (n, e), (_, d) = generate_keys(512, rng)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import math
import random
import secrets
import warnings

from blockrsa import errors

DEFAULT_PUBLIC_EXPONENT: int = 65537
MILLER_RABIN_ROUNDS: int = 25
INSECURE_PRIME_BITS: int = 64
INSECURE_KEY_BITS: int = 128
MINIMUM_PRIME_BITS: int = 3
MINIMUM_KEY_BITS: int = 2 * MINIMUM_PRIME_BITS

_ATTEMPTS_PER_BIT: int = 40
_DISTINCT_REDRAWS: int = 1000
_EXPONENT_SCAN_LIMIT: int = 1 << 20

_SMALL_PRIMES: list[int] = []
_SMALL_PRIMES_CAP: int = 0


def _sieve(n: int = 10000) -> list[int]:
    """Implements the Sieve of Eratosthenes.

    Uses the textbook Sieve of Eratosthenes over odd numbers only, sieving until root.

    Args:
        n: The number up to which to generate primes. Defaults to 10000. Must be >= 0.

    Returns:
        A list of primes up to `n`.
    """
    if n < 2:
        return []
    i_size = (n - 1) // 2
    candidate: list[bool] = [True] * i_size
    for i in range(int(n**0.5) // 2):
        if candidate[i]:
            r = 2 * i + 3
            for j in range((r * r - 3) // 2, i_size, r):
                candidate[j] = False
    return [2] + [(no * 2 + 3) for no, ele in enumerate(candidate) if ele]


def get_pre_primes(n: int = 10000, change: bool = False) -> list[int]:
    """Get the small primes, automatically generating if necessary.

    The module level list acts as a cache. It is rebuilt when the requested range is greater than the cached one,
    when forced by `change` or when the cache is empty.

    Args:
        n: The number up to which to generate primes. Defaults to 10000. Must be >= 0.
        change: Whether to force a recomputation of primes. Defaults to False.

    Returns:
        List of primes in ascending order.

    Raises:
        InvalidParameter: If `n` is negative.
    """
    if n < 0:
        raise errors.InvalidParameter("n must be >= 0")
    global _SMALL_PRIMES
    global _SMALL_PRIMES_CAP
    if n > _SMALL_PRIMES_CAP or change or not _SMALL_PRIMES:
        _SMALL_PRIMES = _sieve(n)
        _SMALL_PRIMES_CAP = n
    return _SMALL_PRIMES


def _trial_division(no: int, n: int = 10000) -> bool:
    """Check `no` against the known small primes.

    Args:
         no: The number to check. Must be a non-negative integer.
         n: The number up to which small primes are used. Passed to `get_pre_primes()`.

    Returns:
        False if `no` cannot be prime, True otherwise.
    """
    if no < 2:
        return False
    for prime in get_pre_primes(n):
        if prime**2 > no:
            return True
        if no % prime == 0:
            return False
    return True


def _miller_rabin(w: int, iters: int, rng: random.Random) -> bool:
    """Perform the Miller-Rabin primality test.

    Args:
        w: Odd integer to be tested.
        iters: Number of rounds, each with a fresh random base.
        rng: Source of the random bases.

    Returns:
        True if `w` is probably prime, False otherwise.
    """
    if w <= 3:
        return w in (2, 3)
    tw = w - 1
    a = (tw & -tw).bit_length() - 1
    m = tw >> a
    for _ in range(iters):
        b = rng.randrange(2, w - 1)
        z = pow(b, m, w)
        if z in (1, tw):
            continue
        for _ in range(1, a):
            z = pow(z, 2, w)
            if z == tw:
                break
            if z == 1:
                return False
        else:
            return False
    return True


def check_prime(candidate: int,
                rng: random.Random | None = None,
                iters: int = MILLER_RABIN_ROUNDS,
                n: int = 10000) -> bool:
    """Composite primality test: a limited amount of trial divisions followed by Miller-Rabin.

    Args:
        candidate: The candidate prime to test.
        rng: Random source for the Miller-Rabin bases. A fresh `secrets.SystemRandom` if omitted.
        iters: Number of Miller-Rabin rounds. Defaults to `MILLER_RABIN_ROUNDS`.
        n: The number up to which small primes are used for trial division.

    Returns:
        True if `candidate` is probably prime, False otherwise.
    """
    if candidate < 2:
        return False
    if not _trial_division(candidate, n):
        return False
    if rng is None:
        rng = secrets.SystemRandom()
    return _miller_rabin(candidate, iters, rng)


def generate_probable_prime(bits: int, rng: random.Random | None = None, max_attempts: int | None = None) -> int:
    """Generate a probable prime of exactly `bits` bits.

    Draws uniformly from `[2**(bits-1), 2**bits - 1]`, forces the low bit and keeps the first candidate that passes
    `check_prime`. Widths below `INSECURE_PRIME_BITS` are accepted with a warning.

    Args:
        bits: The size of the prime in bits. Must be at least 3.
        rng: The random source, advanced by every draw. A fresh `secrets.SystemRandom` if omitted.
        max_attempts: Number of candidates to draw before giving up. Defaults to `40 * bits + 100`.

    Returns:
        A probable prime.

    Raises:
        InvalidParameter: If `bits` is not an integer, is below 3 or leaves no interval to draw from.
        GenerationExhausted: If no prime was found within `max_attempts` draws.
    """
    if not isinstance(bits, int) or isinstance(bits, bool):
        raise errors.InvalidParameter(f"Prime bit length must be an integer, got {type(bits).__name__}.")
    if bits < MINIMUM_PRIME_BITS:
        raise errors.InvalidParameter(f"Prime bit length must be at least {MINIMUM_PRIME_BITS}, got {bits}.")
    if bits < INSECURE_PRIME_BITS:
        warnings.warn(f"Prime bit length {bits} is very short for security demonstrations.",
                      errors.InsecureParameterWarning)
    if rng is None:
        rng = secrets.SystemRandom()
    lower = max(1 << (bits - 1), 2)
    upper = (1 << bits) - 1
    if upper <= lower:
        raise errors.InvalidParameter(f"Empty candidate interval for {bits} bit primes.")
    if max_attempts is None:
        max_attempts = _ATTEMPTS_PER_BIT * bits + 100
    for _ in range(max_attempts):
        candidate = rng.randint(lower, upper) | 1
        if candidate > upper or candidate < max(lower, 3):
            continue
        if check_prime(candidate, rng):
            return candidate
    raise errors.GenerationExhausted(
        f"Drew {max_attempts} candidates of {bits} bits with no prime found. Check the random number generator.")


def _select_exponent(phi: int, max_attempts: int | None = None) -> int:
    """Pick the public exponent for a totient.

    Prefers `DEFAULT_PUBLIC_EXPONENT`, otherwise scans odd numbers upward from 3 for one coprime to `phi`.

    Raises:
        NoSuitableExponent: If the scan reaches `phi`.
        GenerationExhausted: If the scan exceeds `max_attempts` candidates.
    """
    if DEFAULT_PUBLIC_EXPONENT < phi and math.gcd(DEFAULT_PUBLIC_EXPONENT, phi) == 1:
        return DEFAULT_PUBLIC_EXPONENT
    if max_attempts is None:
        max_attempts = _EXPONENT_SCAN_LIMIT
    e = 3
    for _ in range(max_attempts):
        if e >= phi:
            raise errors.NoSuitableExponent(f"No public exponent below phi={phi} is coprime to it.")
        if math.gcd(e, phi) == 1:
            return e
        e += 2
    raise errors.GenerationExhausted(f"Scanned {max_attempts} exponent candidates without a coprime one.")


def generate_keys(total_bits: int,
                  rng: random.Random | None = None,
                  max_attempts: int | None = None) -> tuple[tuple[int, int], tuple[int, int]]:
    """Generates an RSA key pair.

    Combines two distinct probable primes of half the requested width into a modulus, selects the public exponent
    and derives the private exponent as its inverse modulo Euler's totient.

    Args:
        total_bits: The modulus size in bits. Must be at least 6, two 3-bit primes.
        rng: The random source threaded through every prime draw.
        max_attempts: Optional cap applied to each randomized loop (prime draws, distinct redraws, exponent scan).

    Returns:
        A tuple of (public, private) sub-tuples of (modulus, exponent).

    Raises:
        InvalidParameter: If `total_bits` is not an integer or too small.
        NoSuitableExponent: If no public exponent exists below the totient.
        ModularInverseFailure: If the public exponent has no inverse.
        GenerationExhausted: If a capped loop ran out of attempts.
    """
    if not isinstance(total_bits, int) or isinstance(total_bits, bool):
        raise errors.InvalidParameter(f"Total key bit length must be an integer, got {type(total_bits).__name__}.")
    if total_bits < MINIMUM_KEY_BITS:
        raise errors.InvalidParameter(
            f"Total key bit length must be at least {MINIMUM_KEY_BITS} for two {MINIMUM_PRIME_BITS}-bit primes.")
    if total_bits < INSECURE_KEY_BITS:
        warnings.warn(f"Key bit length {total_bits} is too short for any security. Demonstration only.",
                      errors.InsecureParameterWarning)
    if rng is None:
        rng = secrets.SystemRandom()
    prime_bits = max(total_bits // 2, MINIMUM_PRIME_BITS)
    p = generate_probable_prime(prime_bits, rng, max_attempts)
    q = generate_probable_prime(prime_bits, rng, max_attempts)
    redraws = max_attempts if max_attempts is not None else _DISTINCT_REDRAWS
    for _ in range(redraws):
        if p != q:
            break
        q = generate_probable_prime(prime_bits, rng, max_attempts)
    if p == q:
        raise errors.GenerationExhausted(f"Prime pair still identical after {redraws} redraws.")
    n = p * q
    phi = (p - 1) * (q - 1)
    e = _select_exponent(phi, max_attempts)
    try:
        d = pow(e, -1, phi)
    except ValueError as err:
        raise errors.ModularInverseFailure(f"Modular inverse of e={e} modulo phi could not be found.") from err
    if d == 0 and phi != 1:
        raise errors.ModularInverseFailure(f"Modular inverse of e={e} modulo phi could not be found.")
    del p, q, phi
    return (n, e), (n, d)
