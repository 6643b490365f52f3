# minifloat

Emulate small binary floating-point formats in pure Python: 8-bit formats
with a configurable exponent width, precision, exponent bias and NaN encoding
(the FP8 family), and 9- to 16-bit IEEE-style formats such as half precision
and bfloat16.

Values are held as raw bit patterns in plain integers. They convert from
`float` with rounding to nearest, ties to even, convert back to `float`, and
compare by floating-point rules.

## Installation

```
pip install minifloat
```

The package has no dependencies beyond the standard library.

## Modules

- `minifloat.core`: `NanStyle`, `FpCategory`, and bit-level helpers for
  binary32 and binary64 values (`f32_to_bits`, `f32_from_bits`,
  `f64_to_bits`, `f64_from_bits`, `fast_exp2`, `round_f32_to_precision`,
  `round_f64_to_precision`).
- `minifloat.format`: `Format`, `F8Format`, `F16Format`, and the ready-made
  formats `HALF` (IEEE binary16) and `BFLOAT16`.
- `minifloat.value`: `Minifloat`, a bit pattern paired with its format.

## NaN styles

`NanStyle` chooses how an 8-bit format encodes non-finite values:

- `NanStyle.IEEE`: the largest exponent is kept for infinities and NaNs, as
  in IEEE 754. Needs at least one mantissa bit.
- `NanStyle.FN`: finite only. No infinities; the all-ones magnitude is NaN.
- `NanStyle.FNUZ`: finite only, with an unsigned zero. The bit pattern of
  negative zero is the only NaN.

`F16Format` is always IEEE style with the default bias.

## Formats

`F8Format(e, m, nan_style=NanStyle.IEEE, bias=None)` describes a format with
`e` exponent bits and `m` mantissa bits, `e >= 2` and `e + m < 8`; the bias
defaults to `2**(e-1) - 1`. `F16Format(e, m)` needs `e >= 2`, `m >= 1` and
`8 <= e + m < 16`. Invalid layouts raise `ValueError`.

A format exposes its parameters (`e`, `m`, `nan_style`, `bias`,
`mantissa_digits`, `max_exp`, `min_exp`, `digits`, `max_10_exp`,
`min_10_exp`) and its special values as bit patterns (`nan`, `huge`, `max`,
`min`, `tiny`, `min_positive`, `epsilon`, and `infinity` / `neg_infinity`,
which are `None` for FN and FNUZ formats). It works on bit patterns with
`encode_f32`, `encode_f64`, `decode_f32`, `decode_f64`, `classify`,
`is_nan`, `is_infinite`, `is_finite`, `is_sign_negative`, `negate`, `abs`
and `total_cmp_key`.

```python
from minifloat.core import NanStyle
from minifloat.format import BFLOAT16, HALF, F8Format

e4m3 = F8Format(4, 3, NanStyle.FN)      # FP8 E4M3FN
e5m2 = F8Format(5, 2)                    # FP8 E5M2, IEEE style

e4m3.encode_f32(1.0)          # 0b0_0111_000
HALF.encode_f64(-1.25)        # 0b1_01111_01000_00000
BFLOAT16.decode_f64(0x4000)   # 2.0
```

`encode_f32` first rounds its argument to binary32. Overflow gives the signed
`huge` pattern: infinity where the format has one, otherwise the largest
finite value. NaNs stay NaN.

`decode_f32` and `decode_f64` are exact and raise `ValueError` when the
format's range does not fit the target type (possible with a custom bias).
`F16Format.decode_f64` instead always succeeds, saturating to infinity or
going through binary64 subnormals when needed.

## Values

`Minifloat` pairs a bit pattern with its format and behaves like a number:

```python
from minifloat.value import Minifloat

x = Minifloat.from_f64(e4m3, 0.3)
x.to_bits()        # the raw 8-bit pattern
x.to_f64()         # the nearest E4M3FN value to 0.3
x.classify()       # FpCategory.NORMAL

y = -x
y.is_sign_negative()   # True
x > y                  # True
x.maximum(y)           # x; NaN is propagated
x.max(Minifloat.from_f64(e4m3, float("nan")))  # x; NaN is ignored
x.total_cmp(y)         # 1, by the IEEE 754 total order
```

`Minifloat.from_bits(fmt, v)` drops bits outside the format. `partial_cmp`
returns -1, 0, 1, or `None` when either side is NaN. `to_int()` (and `int()`)
truncates toward zero, raising `ValueError` for NaN and `OverflowError` for
infinities; `float()` gives `to_f64()`.

Equality follows floating-point rules: a NaN is not equal to anything, itself
included, and positive and negative zero are equal. Comparing values of
different formats with `partial_cmp`, `total_cmp`, `max`, `min`, `maximum`
or `minimum` raises `TypeError`. Under FNUZ, negating zero gives zero.

## What it does not do

There is no arithmetic: values can be converted, classified, compared,
negated and taken absolute, but not added, multiplied or otherwise computed
with. Convert to `float`, compute, and convert back.