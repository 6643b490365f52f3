import math

import pytest

from minifloat.core import (
    f32_from_bits,
    f32_to_bits,
    f64_from_bits,
    f64_to_bits,
    fast_exp2,
    round_f32_to_precision,
    round_f64_to_precision,
)


def _reference_exp2(x):
    if x >= 1024:
        return math.inf
    return math.ldexp(1.0, x)


def test_exp2_matches_reference_over_range():
    for x in range(-1200, 1200):
        assert fast_exp2(x) == _reference_exp2(x), x


@pytest.mark.parametrize(
    "x, expected",
    [
        (0, 1.0),
        (1, 2.0),
        (-1, 0.5),
        (-1074, 5e-324),
        (-1075, 0.0),
        (1023, 2.0**1023),
        (1024, math.inf),
        (5000, math.inf),
        (-5000, 0.0),
    ],
)
def test_exp2_pinned(x, expected):
    assert fast_exp2(x) == expected


@pytest.mark.parametrize(
    "x, bits",
    [
        (1.0, 0x3F800000),
        (-2.0, 0xC0000000),
        (0.0, 0x00000000),
        (-0.0, 0x80000000),
        (0.1, 0x3DCCCCCD),
        (math.inf, 0x7F800000),
        (-math.inf, 0xFF800000),
        (1e39, 0x7F800000),
        (-1e39, 0xFF800000),
        (1e-50, 0x00000000),
    ],
)
def test_f32_to_bits(x, bits):
    assert f32_to_bits(x) == bits


def test_f32_nan_bits_keep_sign():
    pos = f32_to_bits(math.nan)
    neg = f32_to_bits(math.copysign(math.nan, -1.0))
    assert pos & 0x7FFFFFFF > 0x7F800000
    assert neg & 0x7FFFFFFF > 0x7F800000
    assert neg >> 31 == 1


@pytest.mark.parametrize(
    "bits, x",
    [
        (0x3F800000, 1.0),
        (0x7F800000, math.inf),
        (0xFF800000, -math.inf),
        (0x00000001, 2.0**-149),
        (0x7F7FFFFF, (2 - 2.0**-23) * 2.0**127),
    ],
)
def test_f32_from_bits(bits, x):
    assert f32_from_bits(bits) == x


def test_f32_from_bits_nan():
    value = f32_from_bits(0x7FC00000)
    assert math.isnan(value) is True
    assert f32_to_bits(value) & 0x7FFFFFFF > 0x7F800000
    assert f32_to_bits(value) >> 31 == 0


@pytest.mark.parametrize("bits", [0, 1, 0x12345678, 0x3F800001, 0x807FFFFF, 0xFF7FFFFF])
def test_f32_bits_round_trip(bits):
    assert f32_to_bits(f32_from_bits(bits)) == bits


@pytest.mark.parametrize("bad", [-1, 1 << 32])
def test_f32_from_bits_rejects_out_of_range(bad):
    with pytest.raises(ValueError):
        f32_from_bits(bad)


@pytest.mark.parametrize(
    "x, bits",
    [
        (1.0, 0x3FF0000000000000),
        (-2.0, 0xC000000000000000),
        (-0.0, 0x8000000000000000),
        (math.inf, 0x7FF0000000000000),
        (5e-324, 0x0000000000000001),
    ],
)
def test_f64_bits(x, bits):
    assert f64_to_bits(x) == bits
    assert f64_from_bits(bits) == x


@pytest.mark.parametrize("bad", [-1, 1 << 64])
def test_f64_from_bits_rejects_out_of_range(bad):
    with pytest.raises(ValueError):
        f64_from_bits(bad)


def test_round_f32_overflows_to_infinity():
    f32_max = f32_from_bits(0x7F7FFFFF)
    assert round_f32_to_precision(f32_max, 4) == math.inf
    assert round_f32_to_precision(-f32_max, 4) == -math.inf


def test_round_f64_overflows_to_infinity():
    assert round_f64_to_precision(1.7976931348623157e308, 10) == math.inf


def test_round_preserves_negative_zero_sign():
    assert math.copysign(1.0, round_f32_to_precision(-0.0, 3)) == -1.0
    assert math.copysign(1.0, round_f64_to_precision(-0.0, 3)) == -1.0


def test_round_result_has_limited_mantissa():
    for i in range(1, 500):
        x = i * 0.0137
        bits = f32_to_bits(round_f32_to_precision(x, 5))
        assert bits & ((1 << 18) - 1) == 0
        bits64 = f64_to_bits(round_f64_to_precision(x, 7))
        assert bits64 & ((1 << 45) - 1) == 0


@pytest.mark.parametrize("m", [-1, 23, 30])
def test_round_f32_rejects_bad_precision(m):
    with pytest.raises(ValueError):
        round_f32_to_precision(1.0, m)


@pytest.mark.parametrize("m", [-1, 52])
def test_round_f64_rejects_bad_precision(m):
    with pytest.raises(ValueError):
        round_f64_to_precision(1.0, m)