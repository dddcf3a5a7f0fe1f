# pylint: disable=missing-module-docstring,redefined-outer-name
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import collections

import pytest

from textbookrsa import randomness
from textbookrsa.errors import ExhaustedAttempts
from textbookrsa.errors import InvalidRange

# Chi-square critical value for 9 degrees of freedom at p = 0.0001.
CHI2_CRITICAL_DF9 = 33.72


class ScriptedSource:
    """Stand-in source replaying a fixed list of byte strings."""

    def __init__(self, *chunks: bytes) -> None:
        self.chunks = list(chunks)
        self.reads = 0

    def read(self, count: int) -> bytes:
        self.reads += 1
        chunk = self.chunks.pop(0) if len(self.chunks) > 1 else self.chunks[0]
        assert len(chunk) == count
        return chunk


@pytest.mark.parametrize("minimum,maximum", [(0, 0), (5, 5), (0, 1), (2, 10), (3, 255), (-10, 10), (0, 256),
                                             (1, 2**64), (2**200, 2**200 + 7), (-(2**70), -(2**70) + 300)])
def test_random_in_range_bounds(rng, minimum, maximum):
    for _ in range(300):
        assert minimum <= randomness.random_in_range(minimum, maximum, rng) <= maximum


@pytest.mark.parametrize("minimum,maximum", [(1, 0), (10, -10), (2**64 + 1, 2**64)])
def test_random_in_range_validates(rng, minimum, maximum):
    with pytest.raises(InvalidRange) as excinfo:
        randomness.random_in_range(minimum, maximum, rng)
    assert excinfo.value.minimum == minimum
    assert excinfo.value.maximum == maximum
    assert isinstance(excinfo.value, ValueError)
    assert rng.bytes_drawn == 0


def test_random_in_range_single_value_draws_nothing(rng):
    assert randomness.random_in_range(7, 7, rng) == 7
    assert rng.bytes_drawn == 0


def test_random_in_range_masks_and_rejects():
    # Span of 6 needs 3 bits: 0x07 and 0x0e (-> 6) are rejected, 0x0d masks down to 5.
    source = ScriptedSource(b"\x07", b"\x0e", b"\x0d")
    assert randomness.random_in_range(10, 15, source) == 15
    assert source.reads == 3


def test_random_in_range_full_byte_span():
    source = ScriptedSource(b"\xff")
    assert randomness.random_in_range(0, 255, source) == 255
    assert source.reads == 1


def test_random_in_range_multibyte_span():
    # Span 257 needs 9 bits over 2 bytes: 0x01ff -> 511 rejected, 0xfe00 & 0x1ff -> 0 accepted.
    source = ScriptedSource(b"\x01\xff", b"\xfe\x00")
    assert randomness.random_in_range(100, 356, source) == 100
    assert source.reads == 2


def test_random_in_range_exhausts():
    source = ScriptedSource(b"\x07")
    with pytest.raises(ExhaustedAttempts) as excinfo:
        randomness.random_in_range(0, 5, source, max_attempts=4)
    assert excinfo.value.attempts == 4
    assert source.reads == 4


def test_random_in_range_uniform(rng):
    samples = 20000
    counts = collections.Counter(randomness.random_in_range(0, 9, rng) for _ in range(samples))
    expected = samples / 10
    chi2 = sum((counts[v] - expected)**2 / expected for v in range(10))
    assert set(counts) == set(range(10))
    assert chi2 < CHI2_CRITICAL_DF9


def test_random_in_range_rejection_rate(mocker, rng):
    # Span 5 uses 3 bits, so each draw is accepted with probability 5/8.
    spy = mocker.spy(rng, "read")
    samples = 8000
    for _ in range(samples):
        randomness.random_in_range(0, 4, rng)
    assert spy.call_count / samples == pytest.approx(8 / 5, abs=0.08)


def test_source_lifecycle():
    source = randomness.SecureRandomSource()
    assert source.closed
    with pytest.raises(RuntimeError):
        source.read(4)
    with source as acquired:
        assert acquired is source
        assert not source.closed
        assert len(source.read(16)) == 16
        assert source.read(0) == b""
        assert source.bytes_drawn == 16
        with pytest.raises(RuntimeError):
            source.acquire()
        with pytest.raises(ValueError):
            source.read(-1)
    assert source.closed
    with pytest.raises(RuntimeError):
        source.read(1)
    source.release()


def test_source_released_on_error():
    source = randomness.SecureRandomSource()
    with pytest.raises(InvalidRange):
        with source:
            randomness.random_in_range(3, 2, source)
    assert source.closed
