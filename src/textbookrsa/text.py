"""Conversion between text messages and byte-sized plaintext units."""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from collections.abc import Iterable


def to_units(message: str, encoding: str = "ascii") -> list[int]:
    """Marshal a message into one integer unit per encoded byte.

    Characters the encoding cannot represent are replaced with `?`.

    Args:
        message: The text to convert.
        encoding: Text encoding. Defaults to ascii.

    Returns:
        Byte values in `[0, 255]`.
    """
    return list(message.encode(encoding, errors="replace"))


def from_units(units: Iterable[int], encoding: str = "ascii") -> str:
    """Unmarshal integer units back into text.

    Args:
        units: Byte values.
        encoding: Text encoding. Defaults to ascii.

    Returns:
        The decoded text, with undecodable bytes replaced.

    Raises:
        ValueError: A unit lies outside `[0, 255]`.
    """
    return bytes(units).decode(encoding, errors="replace")
