"""Exception kinds raised by the textbook RSA engine.

Every failure the engine can report carries the offending inputs as attributes, so a caller can tell exactly which
invariant broke. The retry loops of prime, coprime and range sampling are normal control flow and never raise these,
except for `ExhaustedAttempts`, which only fires once a generous safety cap has been crossed.
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0


class RSAError(Exception):
    """Base class of all textbook RSA errors."""


class InvalidBitLength(RSAError, ValueError):
    """The requested prime bit length is below the supported minimum.

    Attributes:
        bit_length: The rejected bit length.
        minimum: The smallest accepted bit length.
    """

    def __init__(self, bit_length: int, minimum: int) -> None:
        self.bit_length = bit_length
        self.minimum = minimum
        super().__init__(f"Prime bit length must be at least {minimum}, got {bit_length}.")


class InvalidRange(RSAError, ValueError):
    """Range sampling was asked for an empty interval.

    Attributes:
        minimum: Requested inclusive lower bound.
        maximum: Requested inclusive upper bound.
    """

    def __init__(self, minimum: int, maximum: int) -> None:
        self.minimum = minimum
        self.maximum = maximum
        super().__init__(f"Invalid range: minimum {minimum} is greater than maximum {maximum}.")


class NotInvertible(RSAError, ArithmeticError):
    """A modular inverse was requested for values that share a factor.

    Attributes:
        value: The value that was to be inverted.
        modulus: The modulus of the inversion.
        gcd: Greatest common divisor found for the pair.
    """

    def __init__(self, value: int, modulus: int, gcd: int) -> None:
        self.value = value
        self.modulus = modulus
        self.gcd = gcd
        super().__init__(f"{value} is not invertible modulo {modulus} (gcd {gcd}).")


class ExhaustedAttempts(RSAError, RuntimeError):
    """A probabilistic search ran past its safety cap.

    Attributes:
        operation: Name of the search that gave up.
        attempts: Number of attempts performed.
    """

    def __init__(self, operation: str, attempts: int) -> None:
        self.operation = operation
        self.attempts = attempts
        super().__init__(
            f"Ran an improbable {attempts} attempts of {operation} with no success. Check system random source.")
