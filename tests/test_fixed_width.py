import pytest

from bounded_draw.fixed_width import (
    UINT8,
    UINT64,
    FixedWidth,
    binary_logarithm,
    is_even,
    width_for,
)


def test_full_width_multiply_splits_product():
    assert UINT8.multiplied_full_width(250, 170) == (166, 4)
    assert UINT64.multiplied_full_width(UINT64.max, UINT64.max) == (UINT64.max - 1, 1)


def test_wrap_negation_gives_complement():
    assert UINT8.wrap(-170) == 86
    assert UINT64.wrap(-1) == UINT64.max


def test_half_and_max():
    assert UINT8.max == 255
    assert UINT8.half == 128
    assert FixedWidth(1).half == 1


def test_zero_bit_counts():
    assert UINT8.leading_zero_bit_count(0) == 8
    assert UINT8.leading_zero_bit_count(1) == 7
    assert UINT8.leading_zero_bit_count(255) == 0
    assert UINT8.trailing_zero_bit_count(170) == 1
    assert UINT8.trailing_zero_bit_count(128) == 7
    assert UINT8.trailing_zero_bit_count(0) == 8


def test_binary_logarithm():
    assert binary_logarithm(1) == 0
    assert binary_logarithm(255) == 7
    assert binary_logarithm(256) == 8
    with pytest.raises(ValueError):
        binary_logarithm(0)


def test_parity():
    assert is_even(86)
    assert not is_even(91)


@pytest.mark.parametrize("bits", [0, -3, 2.5, True])
def test_invalid_width_rejected(bits):
    with pytest.raises(ValueError):
        FixedWidth(bits)


def test_width_for_reuses_constants():
    assert width_for(64) is UINT64
    assert width_for(12).bits == 12
    assert width_for(12).max == 4095
