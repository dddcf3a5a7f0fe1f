# pylint: disable=missing-module-docstring,redefined-outer-name
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import base64

from colorama import Fore
from colorama import Style
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
import pytest

from textbookrsa import formatting
from textbookrsa.keys import Key


@pytest.fixture(scope="module")
def reference_key() -> rsa.RSAPrivateKey:
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


def test_format_values():
    assert formatting.format_values([72, 105]) == "72 105"
    assert formatting.format_values([]) == ""
    assert formatting.format_values(iter([2**80])) == str(2**80)


def test_format_key(vector_pair):
    assert formatting.format_key(vector_pair.public) == "(3233, 17)"
    assert formatting.format_key(vector_pair.private) == "(3233, 2753)"


def test_public_key_pem_interop(reference_key):
    pubs = reference_key.public_key().public_numbers()
    pem = formatting.public_key_pem(Key(pubs.n, pubs.e))
    lines = pem.splitlines()
    assert lines[0] == formatting.PEM_PUBLIC[0]
    assert lines[-1] == formatting.PEM_PUBLIC[1]
    assert all(len(line) <= 64 for line in lines[1:-1])
    loaded = serialization.load_pem_public_key(pem.encode("ascii"))
    assert loaded.public_numbers() == pubs


def test_public_key_pem_matches_reference(reference_key):
    pubs = reference_key.public_key().public_numbers()
    expected = reference_key.public_key().public_bytes(serialization.Encoding.PEM, serialization.PublicFormat.PKCS1)
    assert formatting.public_key_pem(Key(pubs.n, pubs.e)) == expected.decode("ascii")


@pytest.mark.parametrize("units,armored", [([], "MAA="), ([65], "MAMCAUE="), ([2790], "MAQCAgrm")])
def test_armor_known(units, armored):
    assert formatting.armor_units(units) == armored
    assert formatting.dearmor_units(armored) == units


def test_armor_roundtrip_large_units():
    units = [0, 1, 2**512 - 1, 2**1024 + 12345]
    assert formatting.dearmor_units(formatting.armor_units(units)) == units


@pytest.mark.parametrize("armored", [
    "not base64!!",
    "AgEB",  # bare INTEGER 1, not a sequence
    "MAAA",  # empty sequence followed by a stray byte
    "olá",
])
def test_dearmor_validates(armored):
    with pytest.raises(ValueError):
        formatting.dearmor_units(armored)


def test_render_report(vector_pair):
    report = formatting.render_report("A", [65], vector_pair, [2790], [65], "A")
    lines = report.splitlines()
    assert lines[0] == "=========== RSA RESULTS ==========="
    assert "Original message          : A" in lines
    assert "ASCII values              : 65" in lines
    assert "Public key  (n, e)        : (3233, 17)" in lines
    assert "Private key (n, d)        : (3233, 2753)" in lines
    assert "Encrypted message         : 2790" in lines
    assert "Final message (text)      : A" in lines


def test_armor_is_base64_der():
    der = base64.b64decode(formatting.armor_units([1, 2]))
    assert der == b"\x30\x06\x02\x01\x01\x02\x01\x02"


def test_render_report_colored(vector_pair):
    report = formatting.render_report("A", [65], vector_pair, [2790], [65], "A", color=True)
    lines = report.splitlines()
    assert "\x1b[" in report
    assert lines[0] == f"{Fore.YELLOW}=========== RSA RESULTS ==========={Style.RESET_ALL}"
    assert f"{Fore.YELLOW}----- KEYS -----{Style.RESET_ALL}" in lines
    assert f"{Fore.CYAN}{'Original message':<26}:{Style.RESET_ALL} A" in lines
    assert f"{Fore.CYAN}{'Encrypted message':<26}:{Style.RESET_ALL} 2790" in lines


def test_render_report_plain_by_default(vector_pair):
    assert "\x1b[" not in formatting.render_report("A", [65], vector_pair, [2790], [65], "A")
