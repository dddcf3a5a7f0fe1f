"""Modular arithmetic helpers built on the Extended Euclidean Algorithm."""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from textbookrsa.errors import NotInvertible


def eea(a: int, b: int) -> tuple[int, int, int]:
    """Implements the Extended Euclidean Algorithm.

    Such that a*s0 + b*t0 = r0 = gcd(a, b). Iterative, so large operands cannot hit the recursion limit.

    Args:
        a: The first natural number.
        b: The second natural number.

    Returns:
        Greatest common divisor of the two integers, followed by the Bezout coefficients of `a` and `b`.
    """
    r0, r1 = a, b
    s0, s1, t0, t1 = 1, 0, 0, 1
    while r1 != 0:
        q = r0 // r1
        r0, r1 = r1, r0 - q * r1
        s0, s1 = s1, s0 - q * s1
        t0, t1 = t1, t0 - q * t1
    return r0, s0, t0


def mod_inverse(value: int, modulus: int) -> int:
    """Computes the multiplicative inverse of `value` modulo `modulus`.

    Only expected to be called with coprime inputs, so a failure here means an invariant broke upstream.

    Args:
        value: The value to invert.
        modulus: The modulus. Must be >= 1.

    Returns:
        The unique `x` in `[0, modulus)` with `value * x % modulus == 1 % modulus`.

    Raises:
        NotInvertible: `gcd(value, modulus) != 1` or `modulus` is not positive.
    """
    if modulus < 1:
        raise NotInvertible(value, modulus, modulus)
    r, _, t = eea(modulus, value % modulus)
    if r != 1:
        raise NotInvertible(value, modulus, r)
    if t < 0:
        t += modulus
    return t
