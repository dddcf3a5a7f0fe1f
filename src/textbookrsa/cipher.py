"""Stateless textbook RSA encryption and decryption over sequences of integer units.

Every unit is transformed on its own with modular exponentiation; there is no padding and no chaining between units.
Units outside `[0, modulus)` are not rejected and wrap through the modular reduction.

Typical usage example:

    c = encrypt([72, 105], pair.public)
    m = decrypt(c, pair.private)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from collections.abc import Iterable

from textbookrsa.keys import Key


def encrypt(units: Iterable[int], public_key: Key) -> list[int]:
    """Encrypt each plaintext unit as `m ** e mod n`.

    Args:
        units: Plaintext units, each expected in `[0, n)`.
        public_key: The (modulus, public exponent) key.

    Returns:
        The ciphertext units, in input order.
    """
    return [public_key.transform(unit) for unit in units]


def decrypt(units: Iterable[int], private_key: Key) -> list[int]:
    """Decrypt each ciphertext unit as `c ** d mod n`.

    Args:
        units: Ciphertext units.
        private_key: The (modulus, private exponent) key.

    Returns:
        The plaintext units, in input order.
    """
    return [private_key.transform(unit) for unit in units]
