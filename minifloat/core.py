"""Primitive helpers shared by every minifloat format.

This module holds the NaN encoding styles, the floating-point categories,
and the bit-level helpers for binary32 and binary64 values that the
encoders and decoders are built on.
"""

from __future__ import annotations

import enum
import math
import struct

__all__ = [
    "NanStyle",
    "FpCategory",
    "fast_exp2",
    "f32_to_bits",
    "f32_from_bits",
    "f64_to_bits",
    "f64_from_bits",
    "round_f32_to_precision",
    "round_f64_to_precision",
    "F32_MANTISSA_DIGITS",
    "F32_MIN_EXP",
    "F32_MAX_EXP",
    "F64_MANTISSA_DIGITS",
    "F64_MIN_EXP",
    "F64_MAX_EXP",
]

F32_MANTISSA_DIGITS = 24
F32_MIN_EXP = -125
F32_MAX_EXP = 128

F64_MANTISSA_DIGITS = 53
F64_MIN_EXP = -1021
F64_MAX_EXP = 1024

_U32_MASK = (1 << 32) - 1
_U64_MASK = (1 << 64) - 1


class NanStyle(enum.Enum):
    """NaN encoding style, named after the LLVM/MLIR conventions.

    ``IEEE``: the maximum exponent is reserved for infinities and NaNs.
    ``FN``: no infinities; the all-ones magnitude is NaN.
    ``FNUZ``: no infinities and no negative zero; the negative-zero
    pattern is the only NaN.
    """

    IEEE = "IEEE"
    FN = "FN"
    FNUZ = "FNUZ"


class FpCategory(enum.Enum):
    """Floating-point category of a value."""

    NAN = "nan"
    INFINITE = "infinite"
    ZERO = "zero"
    SUBNORMAL = "subnormal"
    NORMAL = "normal"


def fast_exp2(x: int) -> float:
    """Return 2**x as a binary64 value, saturating to inf or 0.0."""
    s = 0x3FF + x
    if s >= 0x800:
        bits = 0x7FF << 52
    elif s >= 1:
        bits = s << 52
    elif s >= -51:
        bits = 1 << (51 + s)
    else:
        bits = 0
    return f64_from_bits(bits)


def f32_to_bits(x: float) -> int:
    """Round ``x`` to binary32 and return its bit pattern.

    Finite values too large for binary32 become infinities of the same sign.
    """
    try:
        return struct.unpack("<I", struct.pack("<f", x))[0]
    except OverflowError:
        return 0xFF800000 if math.copysign(1.0, x) < 0 else 0x7F800000


def f32_from_bits(v: int) -> float:
    """Interpret a 32-bit pattern as a binary32 value."""
    if not 0 <= v <= _U32_MASK:
        raise ValueError(f"bit pattern out of range for binary32: {v:#x}")
    return struct.unpack("<f", struct.pack("<I", v))[0]


def f64_to_bits(x: float) -> int:
    """Return the bit pattern of a binary64 value."""
    return struct.unpack("<Q", struct.pack("<d", x))[0]


def f64_from_bits(v: int) -> float:
    """Interpret a 64-bit pattern as a binary64 value."""
    if not 0 <= v <= _U64_MASK:
        raise ValueError(f"bit pattern out of range for binary64: {v:#x}")
    return struct.unpack("<d", struct.pack("<Q", v))[0]


def _round_bits(bits: int, m: int, digits: int, mask: int) -> int:
    if not 0 <= m < digits - 1:
        raise ValueError(f"precision must be in [0, {digits - 2}], got {m}")
    shift = digits - 1 - m
    ulp = 1 << shift
    bias = (ulp >> 1) - (~(bits >> shift) & 1)
    return ((bits + bias) & mask) & ~(ulp - 1) & mask


def round_f32_to_precision(x: float, m: int) -> float:
    """Round ``x`` as binary32 to ``m`` explicit mantissa bits, ties to even."""
    bits = _round_bits(f32_to_bits(x), m, F32_MANTISSA_DIGITS, _U32_MASK)
    return f32_from_bits(bits)


def round_f64_to_precision(x: float, m: int) -> float:
    """Round ``x`` to ``m`` explicit mantissa bits, ties to even."""
    bits = _round_bits(f64_to_bits(x), m, F64_MANTISSA_DIGITS, _U64_MASK)
    return f64_from_bits(bits)