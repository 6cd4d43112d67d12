"""Boolean selectors over device properties and the property matchers they use."""

from __future__ import annotations

import enum
import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Generic, TypeVar

from gpudra import semver
from gpudra.quantity import Quantity

__all__ = [
    "ComparisonOperator",
    "Selector",
    "IntProperty",
    "StringProperty",
    "BoolProperty",
    "GlobProperty",
    "QuantityComparator",
    "VersionComparator",
    "match_all",
    "match_any",
    "check_compare_value",
    "wildcard_to_regex",
]

T = TypeVar("T")


class ComparisonOperator(str, enum.Enum):
    """Operators for quantity and version comparators."""

    EQUALS = "Equals"
    LESS_THAN = "LessThan"
    LESS_THAN_OR_EQUAL_TO = "LessThanOrEqualTo"
    GREATER_THAN = "GreaterThan"
    GREATER_THAN_OR_EQUAL_TO = "GreaterThanOrEqualTo"


_ACCEPTED_RESULTS = {
    ComparisonOperator.EQUALS: frozenset({0}),
    ComparisonOperator.LESS_THAN: frozenset({-1}),
    ComparisonOperator.LESS_THAN_OR_EQUAL_TO: frozenset({0, -1}),
    ComparisonOperator.GREATER_THAN: frozenset({1}),
    ComparisonOperator.GREATER_THAN_OR_EQUAL_TO: frozenset({0, 1}),
}


@dataclass
class Selector(Generic[T]):
    """A single set of properties, or a list of selectors combined with and/or."""

    properties: T | None = None
    and_expression: list[Selector[T]] | None = None
    or_expression: list[Selector[T]] | None = None

    def matches(self, compare: Callable[[T], bool]) -> bool:
        """Evaluate the expression, passing each properties object to compare."""
        if self.properties is not None:
            return compare(self.properties)
        if self.and_expression is not None:
            return match_all(self.and_expression, compare)
        if self.or_expression is not None:
            return match_any(self.or_expression, compare)
        return False


def match_all(selectors: Iterable[Selector[T]], compare: Callable[[T], bool]) -> bool:
    """Return True if every selector matches; stops at the first that does not."""
    return all(s.matches(compare) for s in selectors)


def match_any(selectors: Iterable[Selector[T]], compare: Callable[[T], bool]) -> bool:
    """Return True if some selector matches; stops at the first that does."""
    return any(s.matches(compare) for s in selectors)


@dataclass(frozen=True)
class IntProperty:
    value: int

    def matches(self, value: int) -> bool:
        return self.value == value


@dataclass(frozen=True)
class StringProperty:
    value: str

    def matches(self, value: str) -> bool:
        return self.value == value


@dataclass(frozen=True)
class BoolProperty:
    value: bool

    def matches(self, value: bool) -> bool:
        return self.value == value


@dataclass(frozen=True)
class GlobProperty:
    """A case-insensitive pattern where ``*`` matches any run of characters."""

    pattern: str

    def matches(self, value: str) -> bool:
        regex = wildcard_to_regex(self.pattern.lower())
        return re.search(regex, value.lower()) is not None


@dataclass(frozen=True)
class QuantityComparator:
    value: Quantity
    operator: ComparisonOperator

    def matches(self, quantity: Quantity) -> bool:
        """Check ``quantity <operator> value``."""
        return check_compare_value(quantity.compare(self.value), self.operator)


@dataclass(frozen=True)
class VersionComparator:
    value: str
    operator: ComparisonOperator

    def matches(self, version: str) -> bool:
        """Check ``version <operator> value`` under semantic-version ordering."""
        result = semver.compare(_v_version(version), _v_version(self.value))
        return check_compare_value(result, self.operator)


def _v_version(version: str) -> str:
    if not version:
        raise ValueError("version must not be empty")
    return version if version[0] == "v" else "v" + version


def check_compare_value(value: int, operator: str) -> bool:
    """Check a -1/0/1 comparison result against an operator name."""
    accepted = _ACCEPTED_RESULTS.get(operator)
    return accepted is not None and value in accepted


def wildcard_to_regex(pattern: str) -> str:
    """Turn a ``*`` wildcard pattern into a regular expression."""
    return ".*".join(re.escape(literal) for literal in pattern.split("*"))