"""Secure randomness for the engine: a scoped byte source and unbiased range sampling.

The source wraps the operating system CSPRNG exposed through `secrets`. It is meant to be acquired once per top-level
operation with a `with` block and is unusable after release.

Typical usage example:

    with SecureRandomSource() as rng:
        witness = random_in_range(2, 7917, rng)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import logging
import secrets

from textbookrsa.errors import ExhaustedAttempts
from textbookrsa.errors import InvalidRange

logger = logging.getLogger(__name__)

# Each draw is accepted with probability >= 1/2, so this cap fails with probability <= 2**-128.
DEFAULT_SAMPLING_ATTEMPTS: int = 128


class SecureRandomSource:
    """Cryptographically secure source of uniform random bytes.

    Attributes:
        bytes_drawn: Total number of bytes handed out since acquisition.
    """

    def __init__(self) -> None:
        self.bytes_drawn = 0
        self._open = False

    def __enter__(self) -> "SecureRandomSource":
        return self.acquire()

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.release()

    @property
    def closed(self) -> bool:
        return not self._open

    def acquire(self) -> "SecureRandomSource":
        """Mark the source as open for reading.

        Returns:
            The source itself, to allow use as a context manager.

        Raises:
            RuntimeError: The source is already acquired.
        """
        if self._open:
            raise RuntimeError("Random source is already acquired.")
        self._open = True
        self.bytes_drawn = 0
        logger.debug("Random source acquired.")
        return self

    def release(self) -> None:
        """Release the source. Releasing twice is a no-op."""
        if not self._open:
            return
        self._open = False
        logger.debug("Random source released after %d bytes.", self.bytes_drawn)

    def read(self, count: int) -> bytes:
        """Draw `count` uniformly random bytes.

        Args:
            count: Number of bytes to draw. Must be >= 0.

        Returns:
            The random bytes.

        Raises:
            RuntimeError: The source has not been acquired or was already released.
            ValueError: `count` is negative.
        """
        if not self._open:
            raise RuntimeError("Random source is not acquired.")
        if count < 0:
            raise ValueError("Byte count must be >= 0")
        self.bytes_drawn += count
        return secrets.token_bytes(count)


def random_in_range(minimum: int,
                    maximum: int,
                    source: SecureRandomSource,
                    max_attempts: int = DEFAULT_SAMPLING_ATTEMPTS) -> int:
    """Draw a uniform integer from the inclusive range [minimum, maximum].

    Uses rejection sampling: enough bytes to cover the span are drawn, every bit above the span's bit length is
    cleared, and values outside the span are redrawn. This avoids the bias a plain modulo reduction would introduce.

    Args:
        minimum: Inclusive lower bound.
        maximum: Inclusive upper bound.
        source: An acquired random source.
        max_attempts: Safety cap on redraws. Defaults to `DEFAULT_SAMPLING_ATTEMPTS`.

    Returns:
        An integer `x` with `minimum <= x <= maximum`.

    Raises:
        InvalidRange: `minimum` is greater than `maximum`.
        ExhaustedAttempts: No draw was accepted within `max_attempts`.
    """
    if minimum > maximum:
        raise InvalidRange(minimum, maximum)
    span = maximum - minimum + 1
    bits = (span - 1).bit_length()
    byte_count = (bits + 7) // 8
    mask = (1 << bits) - 1
    for _ in range(max_attempts):
        sampled = int.from_bytes(source.read(byte_count), byteorder="big", signed=False) & mask
        if sampled < span:
            return minimum + sampled
    raise ExhaustedAttempts("range sampling", max_attempts)
