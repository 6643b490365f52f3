"""Minifloat encodings described by their parameters.

A format knows its exponent width, mantissa precision, NaN encoding style
and exponent bias, derives the usual floating-point limits from them, and
operates on raw bit patterns held in plain integers.
"""

from __future__ import annotations

import math

from .core import (
    F32_MANTISSA_DIGITS,
    F32_MAX_EXP,
    F32_MIN_EXP,
    F64_MANTISSA_DIGITS,
    F64_MAX_EXP,
    F64_MIN_EXP,
    FpCategory,
    NanStyle,
    f32_from_bits,
    f32_to_bits,
    f64_from_bits,
    f64_to_bits,
    fast_exp2,
    round_f32_to_precision,
    round_f64_to_precision,
)

__all__ = ["Format", "F8Format", "F16Format", "HALF", "BFLOAT16"]

_LOG10_2 = math.log10(2.0)

# log2(1 - 2**-p) for p = 0..15, i.e. log2 of the largest significand
# (taken as 2 for p = 0, 1) scaled into [0.5, 1).
_LOG2_SIGNIFICAND = (
    -2.0,
    -1.0,
    -4.15037499278843813e-1,
    -1.92645077942395881e-1,
    -9.31094043914814651e-2,
    -4.58036896131247886e-2,
    -2.27200765000835289e-2,
    -1.13153132278341461e-2,
    -5.64656314114206272e-3,
    -2.82051906237866263e-3,
    -1.40957025467135363e-3,
    -7.04612976589372706e-4,
    -3.52263471629021385e-4,
    -1.76120984274024062e-4,
    -8.80578045800263834e-5,
    -4.40282304417772115e-5,
)


def _to_f32(value: float) -> float:
    return f32_from_bits(f32_to_bits(value))


def _saturating_cast(value: float, limit: int) -> int:
    """Convert a float to an unsigned integer the way a saturating cast does."""
    if math.isnan(value):
        return 0
    if value >= limit:
        return limit
    return max(int(value), 0)


class Format:
    """Common behaviour of a minifloat encoding, working on raw bit patterns."""

    storage_bits = 0

    def __init__(
        self,
        e: int,
        m: int,
        nan_style: NanStyle,
        bias: int,
        *,
        max_exp: int,
        min_exp: int,
        nan: int,
        huge: int,
    ) -> None:
        ieee = nan_style is NanStyle.IEEE
        self.e = e
        self.m = m
        self.nan_style = nan_style
        self.bias = bias
        self.radix = 2
        self.mantissa_digits = m + 1
        self.width = e + m + 1
        self.sign_mask = 1 << (e + m)
        self.abs_mask = self.sign_mask - 1
        self.bits_mask = (self.sign_mask << 1) - 1
        self.exp_mask = ((1 << e) - 1) << m
        self.man_mask = (1 << m) - 1
        self.max_exp = max_exp
        self.min_exp = min_exp
        self.nan = nan
        self.huge = huge
        self.max = huge - int(ieee)
        self.min = self.max | self.sign_mask
        self.tiny = 1
        self.min_positive = 1 << m
        s = bias - m
        self.epsilon = s << m if s >= 1 else 1 << (m - 1 + s)
        self.infinity = huge if ieee else None
        self.neg_infinity = huge | self.sign_mask if ieee else None
        self.digits = int(m * _LOG10_2)
        exponent = (1 << e) - bias - int(ieee)
        precision = m + int(nan_style is not NanStyle.FN)
        self.max_10_exp = int((exponent + _LOG2_SIGNIFICAND[precision]) * _LOG10_2)
        self.min_10_exp = int((min_exp - 1) * _LOG10_2)

    def _key(self) -> tuple:
        return (type(self), self.e, self.m, self.nan_style, self.bias)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Format):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(e={self.e}, m={self.m}, "
            f"nan_style=NanStyle.{self.nan_style.name}, bias={self.bias})"
        )

    # -- raw bits ---------------------------------------------------------

    def mask(self, v: int) -> int:
        """Keep only the bits that belong to this format."""
        return v & self.bits_mask

    def _check_bits(self, bits: int) -> None:
        if not 0 <= bits <= self.bits_mask:
            raise ValueError(f"bit pattern {bits:#x} does not fit {self!r}")

    # -- predicates -------------------------------------------------------

    def is_nan(self, bits: int) -> bool:
        """Check whether the pattern is a NaN (IEEE layout)."""
        return bits & self.abs_mask > self.huge

    def is_infinite(self, bits: int) -> bool:
        """Check whether the pattern is an infinity (IEEE layout)."""
        return bits & self.abs_mask == self.huge

    def is_finite(self, bits: int) -> bool:
        """Check whether the pattern is neither infinite nor NaN."""
        return not self.is_nan(bits) and not self.is_infinite(bits)

    def classify(self, bits: int) -> FpCategory:
        """Return the floating-point category of the pattern."""
        if self.is_nan(bits):
            return FpCategory.NAN
        if self.is_infinite(bits):
            return FpCategory.INFINITE
        if bits & self.exp_mask == 0:
            if bits & self.man_mask == 0:
                return FpCategory.ZERO
            return FpCategory.SUBNORMAL
        return FpCategory.NORMAL

    def is_sign_negative(self, bits: int) -> bool:
        """Check whether the sign bit is set."""
        return (bits >> (self.e + self.m)) & 1 == 1

    def is_sign_positive(self, bits: int) -> bool:
        """Check whether the sign bit is clear."""
        return not self.is_sign_negative(bits)

    # -- sign manipulation ------------------------------------------------

    def negate(self, bits: int) -> int:
        """Flip the sign of the pattern."""
        return bits ^ self.sign_mask

    def abs(self, bits: int) -> int:
        """Return the pattern of the absolute value."""
        return self.negate(bits) if self.is_sign_negative(bits) else bits

    def total_cmp_key(self, bits: int) -> int:
        """Map a sign-magnitude pattern to an unsigned key for total ordering."""
        sign = self.sign_mask
        flip = ((bits & sign) >> (self.e + self.m)) * (sign - 1)
        return bits ^ (sign | flip)

    # -- conversions ------------------------------------------------------

    def _encode(self, x: float, *, double: bool, nan_sign_from_rounded: bool) -> int:
        shift_sign = self.e + self.m
        if double:
            value = float(x)
            rounded = f64_to_bits(round_f64_to_precision(value, self.m))
            negative = rounded >> 63
            body = rounded & ((1 << 63) - 1)
            digits, min_exp = F64_MANTISSA_DIGITS, F64_MIN_EXP
        else:
            value = f32_from_bits(f32_to_bits(x))
            rounded = f32_to_bits(round_f32_to_precision(value, self.m))
            negative = rounded >> 31
            body = rounded & ((1 << 31) - 1)
            digits, min_exp = F32_MANTISSA_DIGITS, F32_MIN_EXP

        if math.isnan(value):
            if not nan_sign_from_rounded:
                negative = int(math.copysign(1.0, value) < 0)
            return self.nan | (negative << shift_sign)

        sign_bit = negative << shift_sign
        magnitude = (body >> (digits - 1 - self.m)) - ((self.min_exp - min_exp) << self.m)

        if magnitude < 1 << self.m:
            scaled = abs(value) * fast_exp2(self.mantissa_digits - self.min_exp)
            if math.isfinite(scaled):
                scaled = float(round(scaled))
            ticks = _saturating_cast(scaled, (1 << self.storage_bits) - 1)
            if self.nan_style is NanStyle.FNUZ and ticks == 0:
                sign_bit = 0
            return ticks | sign_bit

        return min(magnitude, self.huge) | sign_bit

    def _decode_exact(self, bits: int, *, double: bool) -> float:
        self._check_bits(bits)
        if double:
            digits, min_exp, max_exp, total = (
                F64_MANTISSA_DIGITS, F64_MIN_EXP, F64_MAX_EXP, 64)
        else:
            digits, min_exp, max_exp, total = (
                F32_MANTISSA_DIGITS, F32_MIN_EXP, F32_MAX_EXP, 32)
        if self.max_exp > max_exp or self.min_exp < min_exp:
            raise ValueError(f"{self!r} is not exactly representable in binary{total}")

        negative = self.is_sign_negative(bits)
        sign = -1.0 if negative else 1.0
        magnitude = bits & self.abs_mask

        if self.is_nan(bits):
            return math.copysign(math.nan, sign)
        if self.is_infinite(bits):
            return math.inf * sign
        if magnitude < 1 << self.m:
            value = fast_exp2(self.min_exp - self.mantissa_digits) * sign * magnitude
            return value if double else _to_f32(value)

        shift = digits - self.mantissa_digits
        diff = (self.min_exp - min_exp) << (digits - 1)
        raw = ((magnitude << shift) + diff) | (int(negative) << (total - 1))
        return f64_from_bits(raw) if double else f32_from_bits(raw)

    def encode_f32(self, x: float) -> int:
        """Encode ``x``, taken as binary32, rounding to nearest, ties to even.

        NaNs stay NaN; overflows give the signed ``huge`` pattern.
        """
        return self._encode(x, double=False, nan_sign_from_rounded=False)

    def encode_f64(self, x: float) -> int:
        """Encode ``x`` rounding to nearest, ties to even.

        NaNs stay NaN; overflows give the signed ``huge`` pattern.
        """
        return self._encode(x, double=True, nan_sign_from_rounded=False)

    def decode_f32(self, bits: int) -> float:
        """Decode exactly to a binary32 value.

        Raises ValueError when the format's range exceeds binary32.
        """
        return self._decode_exact(bits, double=False)

    def decode_f64(self, bits: int) -> float:
        """Decode exactly to a binary64 value.

        Raises ValueError when the format's range exceeds binary64.
        """
        return self._decode_exact(bits, double=True)


class F8Format(Format):
    """Minifloat of up to 8 bits with configurable NaN style and bias."""

    storage_bits = 8

    def __init__(
        self,
        e: int,
        m: int,
        nan_style: NanStyle = NanStyle.IEEE,
        bias: int | None = None,
    ) -> None:
        nan_style = NanStyle(nan_style)
        if m < 0 or e < 2 or e + m >= 8:
            raise ValueError(f"invalid 8-bit layout: e={e}, m={m}")
        if m == 0 and nan_style is NanStyle.IEEE:
            raise ValueError("IEEE NaN style needs at least one mantissa bit")
        if bias is None:
            bias = (1 << (e - 1)) - 1

        if nan_style is NanStyle.IEEE:
            reserved = 1
            nan = ((1 << (e + 1)) - 1) << (m - 1)
            huge = ((1 << e) - 1) << m
        elif nan_style is NanStyle.FN:
            reserved = int(m == 0)
            nan = (1 << (e + m)) - 1
            huge = (1 << (e + m)) - 2
        else:
            reserved = 0
            nan = 1 << (e + m)
            huge = (1 << (e + m)) - 1

        max_exp = (1 << e) - bias - reserved
        min_exp = 2 - bias
        if max_exp < 1 or min_exp > 1:
            raise ValueError(f"bias {bias} leaves 1.0 out of range for e={e}, m={m}")

        super().__init__(
            e, m, nan_style, bias,
            max_exp=max_exp, min_exp=min_exp, nan=nan, huge=huge,
        )

    def is_nan(self, bits: int) -> bool:
        """Check whether the pattern is a NaN under this format's NaN style."""
        if self.nan_style is NanStyle.IEEE:
            return bits & self.abs_mask > self.huge
        if self.nan_style is NanStyle.FN:
            return bits & self.abs_mask == self.nan
        return bits == self.nan

    def is_infinite(self, bits: int) -> bool:
        """Check whether the pattern is an infinity; only IEEE style has them."""
        return self.nan_style is NanStyle.IEEE and bits & self.abs_mask == self.huge

    def is_finite(self, bits: int) -> bool:
        """Check whether the pattern is neither infinite nor NaN."""
        if self.nan_style is NanStyle.IEEE:
            return bits & self.abs_mask < self.huge
        return not self.is_nan(bits)

    def classify(self, bits: int) -> FpCategory:
        """Return the category, honouring the NaN style's reserved patterns."""
        return super().classify(bits)

    def negate(self, bits: int) -> int:
        """Flip the sign; under FNUZ, zero stays zero and NaN stays NaN."""
        if self.nan_style is NanStyle.FNUZ and bits & self.abs_mask == 0:
            return bits
        return bits ^ self.sign_mask

    def encode_f32(self, x: float) -> int:
        """Encode ``x``, taken as binary32; a NaN keeps the sign of ``x``."""
        return self._encode(x, double=False, nan_sign_from_rounded=False)

    def encode_f64(self, x: float) -> int:
        """Encode ``x``; a NaN keeps the sign of ``x``."""
        return self._encode(x, double=True, nan_sign_from_rounded=False)

    def decode_f32(self, bits: int) -> float:
        """Decode exactly to binary32; ValueError if the bias puts it out of range."""
        return self._decode_exact(bits, double=False)

    def decode_f64(self, bits: int) -> float:
        """Decode exactly to binary64; ValueError if the bias puts it out of range."""
        return self._decode_exact(bits, double=True)


class F16Format(Format):
    """IEEE-style minifloat of 9 to 16 bits with the default bias."""

    storage_bits = 16

    def __init__(self, e: int, m: int) -> None:
        if e < 2 or m < 1 or e + m >= 16 or e + m < 8:
            raise ValueError(f"invalid 16-bit layout: e={e}, m={m}")
        max_exp = 1 << (e - 1)
        super().__init__(
            e, m, NanStyle.IEEE, max_exp - 1,
            max_exp=max_exp,
            min_exp=3 - max_exp,
            nan=((1 << (e + 1)) - 1) << (m - 1),
            huge=((1 << e) - 1) << m,
        )

    def __repr__(self) -> str:
        return f"F16Format(e={self.e}, m={self.m})"

    def is_nan(self, bits: int) -> bool:
        """Check whether the pattern is a NaN."""
        return bits & self.abs_mask > self.infinity

    def is_infinite(self, bits: int) -> bool:
        """Check whether the pattern is positive or negative infinity."""
        return bits & self.abs_mask == self.infinity

    def is_finite(self, bits: int) -> bool:
        """Check whether the pattern is neither infinite nor NaN."""
        return bits & self.abs_mask < self.infinity

    def classify(self, bits: int) -> FpCategory:
        """Return the floating-point category of the pattern."""
        exponent = bits & self.exp_mask
        mantissa = bits & self.man_mask
        if exponent == self.exp_mask:
            return FpCategory.INFINITE if mantissa == 0 else FpCategory.NAN
        if exponent == 0:
            return FpCategory.ZERO if mantissa == 0 else FpCategory.SUBNORMAL
        return FpCategory.NORMAL

    def encode_f32(self, x: float) -> int:
        """Encode ``x``, taken as binary32; a NaN takes its sign from the rounded bits."""
        return self._encode(x, double=False, nan_sign_from_rounded=True)

    def encode_f64(self, x: float) -> int:
        """Encode ``x``; a NaN takes its sign from the rounded bits."""
        return self._encode(x, double=True, nan_sign_from_rounded=True)

    def decode_f32(self, bits: int) -> float:
        """Decode exactly to binary32; ValueError if the range exceeds binary32."""
        return self._decode_exact(bits, double=False)

    def decode_f64(self, bits: int) -> float:
        """Decode to binary64, saturating to infinity or flushing as binary64 does."""
        self._check_bits(bits)
        m = self.m
        negative = self.is_sign_negative(bits)
        sign = -1.0 if negative else 1.0
        magnitude = self.abs(bits)

        if self.is_nan(bits):
            return math.copysign(math.nan, sign)
        if self.is_infinite(bits):
            return math.inf * sign
        if magnitude >= (F64_MAX_EXP + self.bias) << m:
            return math.inf * sign
        if magnitude < 1 << m:
            return fast_exp2(self.min_exp - self.mantissa_digits) * sign * magnitude
        if magnitude >> m < F64_MIN_EXP + self.bias:
            significand = (magnitude & self.man_mask) | (1 << m)
            exponent = (magnitude >> m) - self.bias
            return fast_exp2(exponent - m) * sign * significand

        shift = F64_MANTISSA_DIGITS - self.mantissa_digits
        diff = (self.min_exp - F64_MIN_EXP) << (F64_MANTISSA_DIGITS - 1)
        raw = ((magnitude << shift) + diff) | (int(negative) << 63)
        return f64_from_bits(raw)


HALF = F16Format(5, 10)
"""IEEE binary16, half precision."""

BFLOAT16 = F16Format(8, 7)
"""The bfloat16 format."""