"""Immutable key records.

A `Key` is just a modulus and an exponent; whether it is public or private depends on where it sits in a `KeyPair`.
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import typing


class Key(typing.NamedTuple):
    """One half of an RSA key pair.

    Attributes:
        modulus: The shared modulus `n = p * q`.
        exponent: The public exponent `e` or the private exponent `d`.
    """
    modulus: int
    exponent: int

    def transform(self, unit: int) -> int:
        """Core RSA primitive, `unit ** exponent mod modulus`. No range check is applied."""
        return pow(unit, self.exponent, self.modulus)


class KeyPair(typing.NamedTuple):
    """A public key and its matching private key over the same modulus."""
    public: Key
    private: Key

    @property
    def modulus(self) -> int:
        return self.public.modulus
