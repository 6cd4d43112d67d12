import re

import pytest

from gpudra.quantity import parse_quantity
from gpudra.selector import (
    BoolProperty,
    ComparisonOperator,
    GlobProperty,
    IntProperty,
    QuantityComparator,
    Selector,
    StringProperty,
    VersionComparator,
    check_compare_value,
    match_all,
    match_any,
    wildcard_to_regex,
)

Op = ComparisonOperator


@pytest.mark.parametrize(
    "operator,value,expected",
    [
        ("Equals", 0, True),
        ("Equals", 1, False),
        ("LessThan", -1, True),
        ("LessThan", 0, False),
        ("LessThanOrEqualTo", 0, True),
        ("LessThanOrEqualTo", -1, True),
        ("LessThanOrEqualTo", 1, False),
        ("GreaterThan", 1, True),
        ("GreaterThan", 0, False),
        ("GreaterThanOrEqualTo", 0, True),
        ("GreaterThanOrEqualTo", 1, True),
        ("GreaterThanOrEqualTo", -1, False),
        ("Unknown", 0, False),
    ],
)
def test_check_compare_value(operator, value, expected):
    assert check_compare_value(value, operator) is expected


def test_check_compare_value_accepts_enum():
    assert check_compare_value(-1, Op.LESS_THAN) is True


def test_wildcard_to_regex():
    assert wildcard_to_regex("a*b") == "a.*b"
    assert wildcard_to_regex("*") == ".*"
    assert re.fullmatch(wildcard_to_regex("a.b"), "axb") is None
    assert re.fullmatch(wildcard_to_regex("a.b"), "a.b") is not None


@pytest.mark.parametrize(
    "pattern,value,expected",
    [
        ("*A100*", "NVIDIA A100-SXM4-40GB", True),
        ("a100", "nvidia a100 pcie", True),
        ("h100*", "A100", False),
        ("Tesla*", "tesla t4", True),
        ("ampere", "Ampere", True),
        ("hopper", "Ampere", False),
    ],
)
def test_glob_property(pattern, value, expected):
    assert GlobProperty(pattern).matches(value) is expected


def test_simple_properties():
    assert IntProperty(3).matches(3) is True
    assert IntProperty(3).matches(4) is False
    assert StringProperty("GPU-abc").matches("GPU-abc") is True
    assert StringProperty("GPU-abc").matches("gpu-abc") is False
    assert BoolProperty(True).matches(True) is True
    assert BoolProperty(False).matches(True) is False


def test_quantity_comparator():
    at_least = QuantityComparator(parse_quantity("40Gi"), Op.GREATER_THAN_OR_EQUAL_TO)
    assert at_least.matches(parse_quantity("80Gi")) is True
    assert at_least.matches(parse_quantity("40960Mi")) is True
    assert at_least.matches(parse_quantity("16Gi")) is False
    below = QuantityComparator(parse_quantity("40Gi"), Op.LESS_THAN)
    assert below.matches(parse_quantity("80Gi")) is False


def test_version_comparator():
    assert VersionComparator("8.0", Op.GREATER_THAN_OR_EQUAL_TO).matches("8.6") is True
    assert VersionComparator("8.0", Op.GREATER_THAN).matches("7.5") is False
    assert VersionComparator("v12.2", Op.EQUALS).matches("12.2.0") is True


def test_version_comparator_rejects_empty_version():
    with pytest.raises(ValueError):
        VersionComparator("8.0", Op.EQUALS).matches("")


def positive(value):
    return value > 0


def test_selector_with_properties():
    assert Selector(properties=1).matches(positive) is True
    assert Selector(properties=-1).matches(positive) is False


def test_properties_take_precedence():
    selector = Selector(properties=1, and_expression=[Selector(properties=-1)])
    assert selector.matches(positive) is True


def test_and_or_expressions():
    both = Selector(and_expression=[Selector(properties=1), Selector(properties=2)])
    one_bad = Selector(and_expression=[Selector(properties=1), Selector(properties=-2)])
    either = Selector(or_expression=[Selector(properties=-1), Selector(properties=2)])
    neither = Selector(or_expression=[Selector(properties=-1), Selector(properties=-2)])
    assert both.matches(positive) is True
    assert one_bad.matches(positive) is False
    assert either.matches(positive) is True
    assert neither.matches(positive) is False


def test_nested_expressions():
    selector = Selector(
        and_expression=[
            Selector(properties=5),
            Selector(or_expression=[Selector(properties=-1), Selector(properties=3)]),
        ]
    )
    assert selector.matches(positive) is True


def test_empty_expressions():
    assert Selector(and_expression=[]).matches(positive) is True
    assert Selector(or_expression=[]).matches(positive) is False
    assert Selector().matches(positive) is False


def test_match_all_and_any_short_circuit():
    seen = []

    def record(value):
        seen.append(value)
        return value > 0

    assert match_all([Selector(properties=-1), Selector(properties=1)], record) is False
    assert seen == [-1]
    seen.clear()
    assert match_any([Selector(properties=1), Selector(properties=-1)], record) is True
    assert seen == [1]