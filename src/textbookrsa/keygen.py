"""Textbook RSA key pair generation.

Generates two distinct probable primes, derives the modulus and totient, selects a public exponent coprime to the
totient and inverts it to obtain the private exponent. One secure random source is acquired for the whole operation and
released on every exit path.

Typical usage example:

    pair = generate_key_pair(256)
    n, e = pair.public
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import contextlib
import logging
import math

from textbookrsa.errors import ExhaustedAttempts
from textbookrsa.keys import Key
from textbookrsa.keys import KeyPair
from textbookrsa.modular import mod_inverse
from textbookrsa.primes import DEFAULT_ROUNDS
from textbookrsa.primes import generate_prime
from textbookrsa.randomness import random_in_range
from textbookrsa.randomness import SecureRandomSource

logger = logging.getLogger(__name__)

DEFAULT_PRIME_BITS: int = 256
DEFAULT_PUBLIC_EXPONENT: int = 65537
_COPRIME_ATTEMPTS: int = 1000


def _find_coprime(phi: int, source: SecureRandomSource, max_attempts: int = _COPRIME_ATTEMPTS) -> int:
    """Sample a random exponent in `[3, phi - 1]` coprime to `phi`.

    Args:
        phi: The totient to be coprime with.
        source: An acquired random source.
        max_attempts: Safety cap on samples.

    Returns:
        An exponent `e` with `gcd(e, phi) == 1`.

    Raises:
        ExhaustedAttempts: No coprime value found within `max_attempts` samples.
    """
    for attempt in range(1, max_attempts + 1):
        candidate = random_in_range(3, phi - 1, source)
        if math.gcd(candidate, phi) == 1:
            logger.debug("Coprime exponent found after %d samples.", attempt)
            return candidate
    raise ExhaustedAttempts("coprime exponent search", max_attempts)


def generate_key_pair(bit_length: int = DEFAULT_PRIME_BITS,
                      rounds: int = DEFAULT_ROUNDS,
                      public_exponent: int = DEFAULT_PUBLIC_EXPONENT,
                      source: SecureRandomSource | None = None) -> KeyPair:
    """Generates a textbook RSA key pair.

    Args:
        bit_length: Size of each prime in bits. Defaults to 256, giving a modulus of about 512 bits.
        rounds: Miller-Rabin rounds per prime candidate. Defaults to 12.
        public_exponent: Preferred public exponent. Defaults to 65537. Replaced by a random coprime exponent if it
            shares a factor with the totient.
        source: Random source to draw from. If not provided, one is acquired for the duration of the call.

    Returns:
        The (public, private) key pair sharing the same modulus.

    Raises:
        ValueError: `public_exponent` is smaller than 3.
        InvalidBitLength: `bit_length` is below the minimum prime size.
        ExhaustedAttempts: A search ran past its safety cap.
    """
    if public_exponent < 3:
        raise ValueError("Public exponent must be >= 3")
    with contextlib.ExitStack() as stack:
        if source is None:
            source = stack.enter_context(SecureRandomSource())
        p = generate_prime(bit_length, rounds, source)
        q = generate_prime(bit_length, rounds, source)
        while q == p:  # (Un)Likely story.
            logger.debug("Second prime collided with the first, resampling.")
            q = generate_prime(bit_length, rounds, source)
        n = p * q
        phi = (p - 1) * (q - 1)
        e = public_exponent
        if math.gcd(e, phi) != 1:
            logger.debug("Public exponent %d shares a factor with the totient, searching for a coprime.", e)
            e = _find_coprime(phi, source)
        d = mod_inverse(e, phi)
        del p, q, phi
    logger.info("Generated key pair with %d-bit modulus and public exponent %d.", n.bit_length(), e)
    return KeyPair(Key(n, e), Key(n, d))
