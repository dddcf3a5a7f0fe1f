"""Textbook RSA in an Academic Sense.

Provides probable-prime generation, key pair derivation and unpadded RSA encryption/decryption over sequences of
integer units. No padding, no timing hardening: a teaching reference, not production cryptography.

Typical usage example:

    pair = generate_key_pair(256)
    c = encrypt(to_units("Hi there!"), pair.public)
    r = from_units(decrypt(c, pair.private))
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from textbookrsa.cipher import decrypt
from textbookrsa.cipher import encrypt
from textbookrsa.errors import ExhaustedAttempts
from textbookrsa.errors import InvalidBitLength
from textbookrsa.errors import InvalidRange
from textbookrsa.errors import NotInvertible
from textbookrsa.errors import RSAError
from textbookrsa.keygen import DEFAULT_PRIME_BITS
from textbookrsa.keygen import DEFAULT_PUBLIC_EXPONENT
from textbookrsa.keygen import generate_key_pair
from textbookrsa.keys import Key
from textbookrsa.keys import KeyPair
from textbookrsa.modular import mod_inverse
from textbookrsa.primes import DEFAULT_ROUNDS
from textbookrsa.primes import generate_prime
from textbookrsa.primes import is_probable_prime
from textbookrsa.primes import MINIMUM_PRIME_BITS
from textbookrsa.randomness import random_in_range
from textbookrsa.randomness import SecureRandomSource
from textbookrsa.text import from_units
from textbookrsa.text import to_units

__version__ = "0.0.1"
__all__ = [
    "Key",
    "KeyPair",
    "SecureRandomSource",
    "generate_key_pair",
    "generate_prime",
    "is_probable_prime",
    "mod_inverse",
    "random_in_range",
    "encrypt",
    "decrypt",
    "to_units",
    "from_units",
    "RSAError",
    "InvalidBitLength",
    "InvalidRange",
    "NotInvertible",
    "ExhaustedAttempts",
    "DEFAULT_PRIME_BITS",
    "DEFAULT_PUBLIC_EXPONENT",
    "DEFAULT_ROUNDS",
    "MINIMUM_PRIME_BITS",
]
