"""Presentation helpers for keys and unit sequences.

Nothing here performs cryptography: keys and units are rendered as decimal text, a PKCS#1 public key PEM block, or a
compact base64 DER armor for ciphertext sequences. All output is returned as strings and never written to disk.

Typical usage example:

    print(format_key(pair.public))
    print(public_key_pem(pair.public))
    armored = armor_units(encrypt(units, pair.public))
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import base64
from collections.abc import Iterable

from colorama import Fore
from colorama import Style
from pyasn1 import error
from pyasn1.codec.der import decoder
from pyasn1.codec.der import encoder
from pyasn1.codec.native import encoder as localize
from pyasn1.type import univ
from pyasn1_modules import rfc8017

from textbookrsa.keys import Key
from textbookrsa.keys import KeyPair

PEM_PUBLIC = ("-----BEGIN RSA PUBLIC KEY-----", "-----END RSA PUBLIC KEY-----")
_LABEL_WIDTH = 26


class UnitSequence(univ.SequenceOf):
    """SEQUENCE OF INTEGER, the armor for a list of ciphertext units."""
    componentType = univ.Integer()


def format_values(values: Iterable[int]) -> str:
    """Join values as space separated decimal text."""
    return " ".join(str(v) for v in values)


def format_key(key: Key) -> str:
    """Render a key as `(modulus, exponent)`."""
    return f"({key.modulus}, {key.exponent})"


def public_key_pem(key: Key) -> str:
    """Render a public key as a PKCS#1 `RSA PUBLIC KEY` PEM block.

    Args:
        key: The public key.

    Returns:
        The PEM text, lines wrapped at 64 characters, with a trailing newline.
    """
    keydata = rfc8017.RSAPublicKey()
    keydata["modulus"] = key.modulus
    keydata["publicExponent"] = key.exponent
    payload = base64.b64encode(encoder.encode(keydata)).decode("ascii")
    body = "\n".join(payload[i:i + 64] for i in range(0, len(payload), 64))
    return f"{PEM_PUBLIC[0]}\n{body}\n{PEM_PUBLIC[1]}\n"


def armor_units(units: Iterable[int]) -> str:
    """Pack a unit sequence into base64 encoded DER.

    Args:
        units: Non-negative integer units.

    Returns:
        The armored sequence as ascii text.
    """
    seq = UnitSequence()
    seq.clear()
    seq.extend(units)
    return base64.b64encode(encoder.encode(seq)).decode("ascii")


def dearmor_units(armored: str) -> list[int]:
    """Unpack a sequence produced by `armor_units`.

    Args:
        armored: The base64 text.

    Returns:
        The integer units.

    Raises:
        ValueError: The text is not valid base64 or not a DER SEQUENCE OF INTEGER.
    """
    try:
        der = base64.b64decode(armored.strip().encode("ascii"), validate=True)
        seq, rest = decoder.decode(der, asn1Spec=UnitSequence())
    except (error.PyAsn1Error, UnicodeEncodeError) as exc:
        raise ValueError(f"Invalid unit armor: {exc}") from exc
    if rest:
        raise ValueError("Invalid unit armor: trailing data after sequence.")
    return localize.encode(seq)


def render_report(message: str, units: list[int], pair: KeyPair, ciphertext: list[int], decrypted: list[int],
                  recovered: str, color: bool = False) -> str:
    """Lay out one full encrypt/decrypt run for display.

    Args:
        message: The original message.
        units: Its plaintext units.
        pair: The generated key pair.
        ciphertext: The encrypted units.
        decrypted: The decrypted units.
        recovered: The text rebuilt from the decrypted units.
        color: Whether to paint titles yellow and labels cyan with ANSI escapes.

    Returns:
        The multi-line report.
    """

    def paint(style: str, line: str) -> str:
        if not color:
            return line
        return f"{style}{line}{Style.RESET_ALL}"

    def title(line: str) -> str:
        return paint(Fore.YELLOW, line)

    def row(label: str, value: str) -> str:
        label = paint(Fore.CYAN, f"{label:<{_LABEL_WIDTH}}:")
        return f"{label} {value}"

    lines = [
        title("=========== RSA RESULTS ==========="),
        "",
        row("Original message", message),
        row("ASCII values", format_values(units)),
        "",
        title("----- KEYS -----"),
        row("Public key  (n, e)", format_key(pair.public)),
        row("Private key (n, d)", format_key(pair.private)),
        "",
        title("----- ENCRYPTION -----"),
        row("Encrypted message", format_values(ciphertext)),
        "",
        title("----- DECRYPTION -----"),
        row("Decrypted ASCII", format_values(decrypted)),
        row("Final message (text)", recovered),
        "",
        title("==================================="),
    ]
    return "\n".join(lines)
