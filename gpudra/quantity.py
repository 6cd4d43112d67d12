"""Resource quantities with SI, binary and exponent suffixes."""

from __future__ import annotations

import enum
import math
import re
from dataclasses import dataclass
from fractions import Fraction

__all__ = ["QuantityError", "QuantityFormat", "Quantity", "parse_quantity"]


class QuantityError(ValueError):
    """Raised when a quantity string cannot be parsed."""


class QuantityFormat(enum.Enum):
    """The notation a quantity was written in, kept for its canonical form."""

    DECIMAL_SI = "DecimalSI"
    BINARY_SI = "BinarySI"
    DECIMAL_EXPONENT = "DecimalExponent"


_BINARY_SUFFIXES = {"Ki": 10, "Mi": 20, "Gi": 30, "Ti": 40, "Pi": 50, "Ei": 60}
_DECIMAL_SUFFIXES = {
    "n": -9,
    "u": -6,
    "m": -3,
    "": 0,
    "k": 3,
    "M": 6,
    "G": 9,
    "T": 12,
    "P": 15,
    "E": 18,
}
_DECIMAL_BY_EXPONENT = {exp: suffix for suffix, exp in _DECIMAL_SUFFIXES.items()}

_NUMBER = re.compile(r"([+-]?)([0-9]*)(?:\.([0-9]*))?")
_EXPONENT = re.compile(r"[eE]([+-]?[0-9]+)")

_NANO = 10**9


def _round_up_to_nano(amount: Fraction) -> Fraction:
    """Round away from zero to the nearest multiple of 10^-9."""
    scaled = amount * _NANO
    if scaled.denominator == 1:
        return amount
    magnitude = math.ceil(abs(scaled))
    return Fraction(magnitude if scaled > 0 else -magnitude, _NANO)


@dataclass(frozen=True, eq=False)
class Quantity:
    """An exact, signed amount together with the notation it was written in."""

    amount: Fraction
    format: QuantityFormat = QuantityFormat.DECIMAL_SI

    def __post_init__(self) -> None:
        object.__setattr__(self, "amount", _round_up_to_nano(Fraction(self.amount)))

    def value(self) -> int:
        """Return the amount rounded away from zero to an integer."""
        magnitude = math.ceil(abs(self.amount))
        return magnitude if self.amount >= 0 else -magnitude

    def compare(self, other: Quantity) -> int:
        """Return -1, 0 or 1 as this quantity is less than, equal to or greater than other."""
        if self.amount < other.amount:
            return -1
        if self.amount > other.amount:
            return 1
        return 0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Quantity):
            return NotImplemented
        return self.amount == other.amount

    def __hash__(self) -> int:
        return hash(self.amount)

    def __str__(self) -> str:
        amount = self.amount
        if amount == 0:
            return "0"
        fmt = self.format
        if fmt is QuantityFormat.BINARY_SI:
            if -1024 < amount < 1024 or amount.denominator != 1:
                fmt = QuantityFormat.DECIMAL_SI
            else:
                number = amount.numerator
                for suffix, power in reversed(_BINARY_SUFFIXES.items()):
                    if number % (1 << power) == 0:
                        return f"{number // (1 << power)}{suffix}"
                return str(number)
        unbounded = fmt is QuantityFormat.DECIMAL_EXPONENT
        mantissa, exponent = self._decimal_parts(unbounded)
        if unbounded:
            suffix = f"e{exponent}" if exponent else ""
        else:
            suffix = _DECIMAL_BY_EXPONENT[exponent]
        return f"{mantissa}{suffix}"

    def _decimal_parts(self, unbounded: bool) -> tuple[int, int]:
        mantissa = int(self.amount * _NANO)
        exponent = -9
        while mantissa % 1000 == 0 and (unbounded or exponent < 18):
            mantissa //= 1000
            exponent += 3
        return mantissa, exponent


def parse_quantity(text: str) -> Quantity:
    """Parse a quantity such as ``"1Gi"``, ``"500m"`` or ``"3e6"``."""
    match = _NUMBER.match(text)
    sign, whole, fraction = match.group(1), match.group(2), match.group(3) or ""
    if not whole and not fraction:
        raise QuantityError(f"quantity has no numeric part: {text!r}")
    number = Fraction(int(whole or "0"))
    if fraction:
        number += Fraction(int(fraction), 10 ** len(fraction))

    suffix = text[match.end():]
    if suffix in _BINARY_SUFFIXES:
        fmt = QuantityFormat.BINARY_SI
        scale = Fraction(1 << _BINARY_SUFFIXES[suffix])
    elif suffix in _DECIMAL_SUFFIXES:
        fmt = QuantityFormat.DECIMAL_SI
        scale = Fraction(10) ** _DECIMAL_SUFFIXES[suffix]
    elif (exponent := _EXPONENT.fullmatch(suffix)) is not None:
        fmt = QuantityFormat.DECIMAL_EXPONENT
        scale = Fraction(10) ** int(exponent.group(1))
    else:
        raise QuantityError(f"unable to parse quantity's suffix: {text!r}")

    amount = number * scale
    if sign == "-":
        amount = -amount
    return Quantity(amount, fmt)