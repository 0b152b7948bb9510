"""Tests for Shannon entropy estimation."""

import os

import pytest

from filesniff.analysis import entropy_level, entropy_of, is_likely_encrypted


def test_empty_sample_has_zero_entropy() -> None:
    assert entropy_of(b"") == 0.0


def test_single_repeated_byte_has_zero_entropy() -> None:
    assert entropy_of(b"A" * 4096) == 0.0


def test_all_byte_values_once_is_maximal() -> None:
    value = entropy_of(bytes(range(256)))

    assert 7.9 < value <= 8.0
    assert value == pytest.approx(8.0)


def test_two_equally_likely_symbols_give_one_bit() -> None:
    assert entropy_of(b"ab" * 512) == pytest.approx(1.0)


def test_random_sample_stays_within_bounds() -> None:
    value = entropy_of(os.urandom(65536))

    assert 0.0 <= value <= 8.0
    assert is_likely_encrypted(value)


def test_encryption_threshold_is_inclusive() -> None:
    assert is_likely_encrypted(7.5)
    assert not is_likely_encrypted(7.49)
    assert is_likely_encrypted(6.0, threshold=6.0)


@pytest.mark.parametrize(
    ("entropy", "level"),
    [(0.0, "Low"), (3.99, "Low"), (4.0, "Medium"), (6.99, "Medium"), (7.0, "High"), (8.0, "High")],
)
def test_entropy_levels(entropy: float, level: str) -> None:
    assert entropy_level(entropy) == level
