import math

import pytest

from valvetex.float16 import Float16


def test_one_has_single_precision_upper_bits():
    assert Float16(1.0).bits == 0x3F80


def test_from_bits_reads_upper_half_of_single():
    assert Float16.from_bits(0x4000).value == 2.0
    assert Float16.from_bits(0xBF80).value == -1.0


def test_low_mantissa_bits_are_cleared():
    assert Float16(1.0 + 2.0**-10).value == 1.0
    assert Float16(1.0 + 2.0**-7).value == 1.0 + 2.0**-7


@pytest.mark.parametrize("bits", [0x0000, 0x3F80, 0x4000, 0x7F80, 0xC120, 0x0001])
def test_bits_round_trip(bits):
    assert Float16.from_bits(bits).bits == bits
    assert Float16(Float16.from_bits(bits).value).bits == bits


def test_from_bits_rejects_out_of_range():
    with pytest.raises(ValueError):
        Float16.from_bits(0x10000)
    with pytest.raises(ValueError):
        Float16.from_bits(-1)


def test_rejects_non_numbers():
    with pytest.raises(TypeError):
        Float16("1.0")


def test_copy_constructor_keeps_bits():
    original = Float16(3.25)
    assert Float16(original).bits == original.bits


def test_overflow_becomes_infinity():
    assert Float16(1e300).value == math.inf
    assert Float16(-1e300).value == -math.inf


def test_comparisons():
    small, large = Float16(1.0), Float16(2.0)
    assert small < large
    assert small <= large
    assert large > small
    assert large >= small
    assert small == Float16(1.0)
    assert small != large
    assert small == 1.0


def test_nan_is_not_equal_to_itself():
    nan = Float16(math.nan)
    assert math.isnan(nan.value)
    assert (nan == nan) is False
    assert (nan < nan) is False
    assert (nan >= nan) is False


def test_negation_and_plus():
    value = Float16(1.5)
    assert (-value).value == -value.value
    assert (+value).bits == value.bits
    assert (-(-value)).bits == value.bits


def test_arithmetic_on_exact_values():
    two, three = Float16(2.0), Float16(3.0)
    assert (two + three).value == 2.0 + 3.0
    assert (three - two).value == 3.0 - 2.0
    assert (two * three).value == 2.0 * 3.0
    assert (three / two).value == 3.0 / 2.0


def test_results_are_truncated():
    total = Float16(1.0) + Float16(2.0**-7) + 2.0**-9
    assert total.bits & 0xFFFF == total.bits
    assert total.value == Float16(total.value).value


def test_in_place_operators_match_binary_ones():
    value = Float16(4.0)
    value += Float16(2.0)
    assert value == Float16(4.0) + Float16(2.0)
    value -= Float16(1.0)
    assert value == Float16(6.0) - Float16(1.0)
    value *= Float16(2.0)
    assert value == Float16(5.0) * Float16(2.0)
    value /= Float16(4.0)
    assert value == Float16(10.0) / Float16(4.0)


def test_division_by_zero_follows_ieee():
    assert (Float16(1.0) / Float16(0.0)).value == math.inf
    assert (Float16(-1.0) / Float16(0.0)).value == -math.inf
    assert math.isnan((Float16(0.0) / Float16(0.0)).value)


def test_equal_values_hash_equally():
    assert hash(Float16(2.5)) == hash(Float16(2.5))
    assert len({Float16(2.5), Float16(2.5), Float16(1.0)}) == 2


def test_repr_shows_value():
    assert repr(Float16(0.5)) == "Float16(0.5)"


def test_unsupported_operand_raises():
    with pytest.raises(TypeError):
        Float16(1.0) + "x"