"""Probable-prime testing and random prime generation.

Candidates are screened against a fixed table of small primes before a Miller-Rabin test with randomly drawn
witnesses. Generation samples random odd integers of an exact bit length until one passes; the number of trials is
probabilistic (about `bit_length * ln(2) / 2` on average) and only bounded by a generous safety cap.

Typical usage example:

    is_probable_prime(7919)
    p = generate_prime(256)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import contextlib
import logging

from textbookrsa.errors import ExhaustedAttempts
from textbookrsa.errors import InvalidBitLength
from textbookrsa.randomness import random_in_range
from textbookrsa.randomness import SecureRandomSource

logger = logging.getLogger(__name__)

SMALL_PRIMES: tuple[int, ...] = (3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37, 41, 43, 47, 53, 59)
DEFAULT_ROUNDS: int = 12
MINIMUM_PRIME_BITS: int = 16
_ATTEMPTS_PER_BIT: int = 20


@contextlib.contextmanager
def _scoped_source(source: SecureRandomSource | None):
    """Yield `source` as-is, or a freshly acquired one released on exit if none was given."""
    if source is not None:
        yield source
        return
    with SecureRandomSource() as own:
        yield own


def _trial_division(candidate: int) -> bool | None:
    """Check the candidate against the known small primes.

    Args:
        candidate: The number to check.

    Returns:
        True or False if the small-prime screen settles the question, None if Miller-Rabin is still required.
    """
    if candidate < 2:
        return False
    if candidate in (2, 3):
        return True
    if candidate % 2 == 0:
        return False
    for prime in SMALL_PRIMES:
        if candidate == prime:
            return True
        if candidate % prime == 0:
            return False
    return None


def _miller_rabin(w: int, rounds: int, source: SecureRandomSource) -> bool:
    """Perform the Miller-Rabin primality test.

    Args:
        w: Odd integer to be tested, greater than 3.
        rounds: Number of witnesses to try.
        source: Random source for drawing witnesses.

    Returns:
        True if `w` is probably prime, False if a witness proved it composite.
    """
    tw = w - 1
    s = (tw & -tw).bit_length() - 1
    d = tw >> s
    for i in range(rounds):
        a = random_in_range(2, w - 2, source)
        x = pow(a, d, w)
        if x == 1 or x == tw:
            continue
        for _ in range(1, s):
            x = pow(x, 2, w)
            if x == tw:
                break
        else:
            logger.debug("Witness found compositeness in round %d.", i + 1)
            return False
    return True


def is_probable_prime(candidate: int, rounds: int = DEFAULT_ROUNDS, source: SecureRandomSource | None = None) -> bool:
    """Tests whether `candidate` is probably prime.

    Runs the small-prime screen and then Miller-Rabin. A composite survives with probability at most `4 ** -rounds`;
    primes are always accepted.

    Args:
        candidate: The candidate prime to test.
        rounds: Number of Miller-Rabin rounds. Defaults to 12. Must be >= 1.
        source: Random source for witnesses. If not provided, one is acquired for the duration of the call.

    Returns:
        True if `candidate` is probably prime, False otherwise.

    Raises:
        ValueError: `rounds` is smaller than 1.
    """
    if rounds < 1:
        raise ValueError("rounds must be >= 1")
    screened = _trial_division(candidate)
    if screened is not None:
        return screened
    with _scoped_source(source) as rng:
        return _miller_rabin(candidate, rounds, rng)


def _random_odd_integer(bit_length: int, source: SecureRandomSource) -> int:
    """Draw a random odd integer with exactly `bit_length` significant bits."""
    byte_count = (bit_length + 7) // 8
    value = int.from_bytes(source.read(byte_count), byteorder="big", signed=False)
    value &= (1 << bit_length) - 1
    # Top bit fixes the length, low bit makes it odd.
    return value | (1 << (bit_length - 1)) | 1


def generate_prime(bit_length: int,
                   rounds: int = DEFAULT_ROUNDS,
                   source: SecureRandomSource | None = None,
                   max_attempts: int | None = None) -> int:
    """Generate a random probable prime of exactly `bit_length` bits.

    Args:
        bit_length: The size of the prime in bits. Must be at least `MINIMUM_PRIME_BITS`.
        rounds: Miller-Rabin rounds per candidate. Defaults to 12.
        source: Random source. If not provided, one is acquired for the duration of the call.
        max_attempts: Safety cap on candidates. Defaults to `bit_length * 20`, far beyond the expected trial count.

    Returns:
        A probable prime `p` with `p.bit_length() == bit_length`.

    Raises:
        InvalidBitLength: `bit_length` is below `MINIMUM_PRIME_BITS`.
        ExhaustedAttempts: No prime found within `max_attempts` candidates.
    """
    if bit_length < MINIMUM_PRIME_BITS:
        raise InvalidBitLength(bit_length, MINIMUM_PRIME_BITS)
    if max_attempts is None:
        max_attempts = bit_length * _ATTEMPTS_PER_BIT
    with _scoped_source(source) as rng:
        for attempt in range(1, max_attempts + 1):
            candidate = _random_odd_integer(bit_length, rng)
            if is_probable_prime(candidate, rounds, rng):
                logger.debug("Found %d-bit probable prime after %d candidates.", bit_length, attempt)
                return candidate
    raise ExhaustedAttempts(f"{bit_length}-bit prime search", max_attempts)
