import pytest

from bounded_draw.bit_bank import BitBank
from bounded_draw.entropy import CountingSource, ScriptedSource
from bounded_draw.errors import EntropyExhaustedError
from bounded_draw.fixed_width import UINT8, UINT64
from bounded_draw.sampler import Strategy, draw_below


@pytest.mark.parametrize("bit_bound, needed", [(86, 0), (85, 0), (20, 3), (21, 3), (22, 2), (1, 7)])
def test_bits_needed_reaches_half_bound(bit_bound, needed):
    bank = BitBank(bound=170, uint=UINT8, bits=0, bit_bound=bit_bound)
    assert bank.half_bound == 85
    assert bank.bits_needed == needed
    assert bit_bound << needed >= 85


def test_bits_needed_uses_width_leading_zero_counts():
    bank = BitBank(bound=2 ** 63 + 1, uint=UINT64, bits=0, bit_bound=1)
    assert bank.half_bound == 2 ** 62 + 1
    assert UINT64.leading_zero_bit_count(1) - UINT64.leading_zero_bit_count(bank.half_bound) == 62
    assert bank.bits_needed == 63
    bank.decrease_bounds(0)
    assert bank.bits_needed == 63


def test_deposit_counts_bits_below_first_difference():
    bank = BitBank(bound=170, uint=UINT8, bits=0, bit_bound=86)
    bank.deposit(5, 86)
    assert bank.bits_available == 6
    bank.deposit(80, 86)
    assert bank.bits_available == 2


def test_consume_bits_shifts_new_bits_in():
    bank = BitBank(bound=170, uint=UINT8, bits=3, bit_bound=5)
    bank.new_bits = 0b1011
    bank.bits_available = 4
    needed = bank.bits_needed
    bank.consume_bits(2)
    assert bank.bits == 0b1111
    assert bank.new_bits == 0b10
    assert bank.bit_bound == 20
    assert bank.bits_available == 2
    assert bank.bits_needed == needed - 2


def test_settle_returns_lane_value():
    bank = BitBank(bound=170, uint=UINT8, bits=10, bit_bound=86)
    bank.deposit(5, 86)
    assert bank.settle() == 21


def test_settle_upper_half_decreases_bounds():
    # bits in [halfBound, bitBound) shifts down by halfBound.
    bank = BitBank(bound=170, uint=UINT8, bits=85, bit_bound=86)
    bank.deposit(80, 86)
    assert bank.settle() is None
    assert bank.bits == 0b00
    assert bank.bit_bound == 4
    assert bank.bits_available == 0


def test_settle_narrows_to_half_bound_before_lane_bit():
    # bound 165: 2 * halfBound = 166, so the lane value 165 is rejected and
    # the leftover is uniform on [0, 1), not on [0, 2 * 91 - 165).
    bank = BitBank(bound=165, uint=UINT8, bits=82, bit_bound=91)
    bank.deposit(1, 91)
    assert bank.bits_available == 6
    assert bank.settle() is None
    assert bank.bits == 0
    assert bank.bit_bound == 32
    assert bank.bits_available == 0


def test_bit_bank_recycles_in_bottom_half():
    # bound 100: t = 56. Draw 0 is rejected with bits 0; draw 3 is rejected
    # with remainder 44, whose low bit completes the lane value 0.
    source = CountingSource(ScriptedSource([0, 3], width=8))
    assert draw_below(100, source, UINT8, Strategy.BIT_BANK) == 0
    assert source.calls == 2
    with pytest.raises(EntropyExhaustedError):
        draw_below(100, ScriptedSource([0, 3], width=8), UINT8, Strategy.BASELINE)


def test_bit_bank_accepts_product_after_rejection():
    source = CountingSource(ScriptedSource([0, 5], width=8))
    assert draw_below(100, source, UINT8, Strategy.BIT_BANK) == 1
    assert source.calls == 2
