"""Minifloat values: a bit pattern paired with the format that gives it meaning."""

from __future__ import annotations

from dataclasses import dataclass

from .core import FpCategory, NanStyle
from .format import Format

__all__ = ["Minifloat"]


@dataclass(frozen=True, eq=False)
class Minifloat:
    """A single minifloat value.

    Equality and ordering follow floating-point semantics: NaN is unequal to
    everything, including itself, and both zeros compare equal.
    """

    fmt: Format
    bits: int

    # -- construction -----------------------------------------------------

    @classmethod
    def from_bits(cls, fmt: Format, v: int) -> Minifloat:
        """Build a value from raw bits, dropping bits outside the format."""
        return cls(fmt, fmt.mask(int(v)))

    @classmethod
    def from_f32(cls, fmt: Format, x: float) -> Minifloat:
        """Convert from ``x`` taken as binary32, rounding to nearest, ties to even.

        NaNs are preserved and overflows give the signed ``huge`` value.
        """
        return cls(fmt, fmt.encode_f32(x))

    @classmethod
    def from_f64(cls, fmt: Format, x: float) -> Minifloat:
        """Convert from a binary64 value, rounding to nearest, ties to even.

        NaNs are preserved and overflows give the signed ``huge`` value.
        """
        return cls(fmt, fmt.encode_f64(x))

    # -- conversion -------------------------------------------------------

    def to_bits(self) -> int:
        """Return the raw bit pattern."""
        return self.bits

    def to_f32(self) -> float:
        """Convert exactly to a binary32 value."""
        return self.fmt.decode_f32(self.bits)

    def to_f64(self) -> float:
        """Convert to a binary64 value."""
        return self.fmt.decode_f64(self.bits)

    def to_int(self) -> int:
        """Truncate toward zero.

        Raises ValueError for NaN and OverflowError for infinities.
        """
        return int(self.to_f64())

    def __float__(self) -> float:
        return self.to_f64()

    def __int__(self) -> int:
        return self.to_int()

    # -- predicates -------------------------------------------------------

    def is_nan(self) -> bool:
        """Check whether the value is NaN."""
        return self.fmt.is_nan(self.bits)

    def is_infinite(self) -> bool:
        """Check whether the value is positive or negative infinity."""
        return self.fmt.is_infinite(self.bits)

    def is_finite(self) -> bool:
        """Check whether the value is neither infinite nor NaN."""
        return self.fmt.is_finite(self.bits)

    def is_subnormal(self) -> bool:
        """Check whether the value is subnormal."""
        return self.classify() is FpCategory.SUBNORMAL

    def is_normal(self) -> bool:
        """Check whether the value is normal: not zero, subnormal, infinite or NaN."""
        return self.classify() is FpCategory.NORMAL

    def classify(self) -> FpCategory:
        """Return the floating-point category."""
        return self.fmt.classify(self.bits)

    def is_sign_positive(self) -> bool:
        """Check whether the sign bit is clear."""
        return self.fmt.is_sign_positive(self.bits)

    def is_sign_negative(self) -> bool:
        """Check whether the sign bit is set."""
        return self.fmt.is_sign_negative(self.bits)

    # -- comparison -------------------------------------------------------

    def _require_same_format(self, other: Minifloat) -> None:
        if not isinstance(other, Minifloat):
            raise TypeError(f"expected a Minifloat, got {type(other).__name__}")
        if other.fmt != self.fmt:
            raise TypeError(f"cannot compare {self.fmt!r} with {other.fmt!r}")

    def _equals(self, other: Minifloat) -> bool:
        if self.bits == other.bits and not self.is_nan():
            return True
        both_zero = (self.bits | other.bits) & self.fmt.abs_mask == 0
        return self.fmt.nan_style is not NanStyle.FNUZ and both_zero

    def partial_cmp(self, other: Minifloat) -> int | None:
        """Compare numerically: -1, 0 or 1, or None when either is NaN."""
        self._require_same_format(other)
        if self.is_nan() or other.is_nan():
            return None
        if self._equals(other):
            return 0
        negative = (self.bits | other.bits) >> (self.fmt.e + self.fmt.m) & 1 == 1
        return 1 if (self.bits > other.bits) != negative else -1

    def total_cmp(self, other: Minifloat) -> int:
        """IEEE 754 total ordering: -1, 0 or 1."""
        self._require_same_format(other)
        a = self.fmt.total_cmp_key(self.bits)
        b = self.fmt.total_cmp_key(other.bits)
        return (a > b) - (a < b)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Minifloat) or other.fmt != self.fmt:
            return NotImplemented
        return self._equals(other)

    def __hash__(self) -> int:
        magnitude = self.bits & self.fmt.abs_mask
        key = 0 if magnitude == 0 and not self.is_nan() else self.bits
        return hash((self.fmt, key))

    def _ordered(self, other: object) -> int | None:
        if not isinstance(other, Minifloat) or other.fmt != self.fmt:
            raise TypeError
        return self.partial_cmp(other)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Minifloat) or other.fmt != self.fmt:
            return NotImplemented
        return self.partial_cmp(other) == -1

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Minifloat) or other.fmt != self.fmt:
            return NotImplemented
        return self.partial_cmp(other) in (-1, 0)

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Minifloat) or other.fmt != self.fmt:
            return NotImplemented
        return self.partial_cmp(other) == 1

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Minifloat) or other.fmt != self.fmt:
            return NotImplemented
        return self.partial_cmp(other) in (1, 0)

    # -- selection --------------------------------------------------------

    def max(self, other: Minifloat) -> Minifloat:
        """Return the larger value, ignoring NaN."""
        self._require_same_format(other)
        return self if self >= other or other.is_nan() else other

    def min(self, other: Minifloat) -> Minifloat:
        """Return the smaller value, ignoring NaN."""
        self._require_same_format(other)
        return self if self <= other or other.is_nan() else other

    def maximum(self, other: Minifloat) -> Minifloat:
        """Return the larger value, propagating NaN; -0 is below +0."""
        self._require_same_format(other)
        if self.is_nan() or other.is_nan():
            return Minifloat(self.fmt, self.fmt.nan)
        return self if self.total_cmp(other) > 0 else other

    def minimum(self, other: Minifloat) -> Minifloat:
        """Return the smaller value, propagating NaN; -0 is below +0."""
        self._require_same_format(other)
        if self.is_nan() or other.is_nan():
            return Minifloat(self.fmt, self.fmt.nan)
        return other if self.total_cmp(other) > 0 else self

    # -- sign -------------------------------------------------------------

    def abs(self) -> Minifloat:
        """Return the absolute value."""
        return Minifloat(self.fmt, self.fmt.abs(self.bits))

    def __abs__(self) -> Minifloat:
        return self.abs()

    def __neg__(self) -> Minifloat:
        return Minifloat(self.fmt, self.fmt.negate(self.bits))

    def __repr__(self) -> str:
        return f"Minifloat({self.fmt!r}, {self.bits:#x})"