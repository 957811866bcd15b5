import pytest

from gemscribe.core.errors import FieldExtractionError, InvalidVersionError
from gemscribe.core.models import Comparator, Constraint
from gemscribe.extraction.translator import ConstraintTranslator, bump_version, parse_operator


def _components(version):
    return [int(part) for part in version.split(".")]


@pytest.mark.parametrize("version, expected", [
    ("1.0.5", "1.1"),
    ("1.2.39", "1.3"),
    ("1.9.39", "1.10"),
    ("0.9.9", "0.10"),
    ("9.5", "10"),
    ("99.0", "100"),
    ("9.9.5", "9.10"),
    ("1.99.0", "1.100"),
    ("2.0", "3"),
    ("3.1.4.1", "3.1.5"),
    ("1.0.0.rc1", "1.0.1"),
])
def test_bump_version_cases(version, expected):
    assert bump_version(version) == expected


def test_bump_leftmost_component_never_reads_before_start():
    # The carry runs off the first component: growth happens at index 0
    assert bump_version("9.0") == "10"
    assert bump_version("999.1") == "1000"


@pytest.mark.parametrize("version", [
    "0.0", "0.9", "1.9.9", "9.9.9.9", "4.19.0", "12.99.3", "199.0", "7.8.9.10",
])
def test_bump_is_strictly_greater_and_keeps_prefix_length(version):
    bumped = bump_version(version)
    prefix = version.rpartition(".")[0]

    assert _components(bumped) > _components(version)
    assert len(bumped) >= len(prefix)
    assert bumped.count(".") == prefix.count(".")


def test_bump_rejects_single_component():
    with pytest.raises(InvalidVersionError):
        bump_version("3")
    # Callers treat it like any other malformed dependency field
    assert issubclass(InvalidVersionError, FieldExtractionError)


@pytest.mark.parametrize("operator, expected", [
    (">", Comparator.GT),
    (">=", Comparator.GT | Comparator.EQ),
    ("<", Comparator.LT),
    ("<=", Comparator.LT | Comparator.EQ),
    ("=", Comparator.EQ),
    ("!=", Comparator(0)),
    (">= ", Comparator.GT | Comparator.EQ),
])
def test_parse_operator(operator, expected):
    assert parse_operator(operator) == expected


def test_pessimistic_operator_yields_closed_range():
    constraints = ConstraintTranslator().translate("rubygem", "~>", "1.0.5")

    assert constraints == (
        Constraint("rubygem-rubygem", Comparator.GT | Comparator.EQ, "1.0.5"),
        Constraint("rubygem-rubygem", Comparator.LT, "1.1"),
    )
    assert [str(c) for c in constraints] == ["rubygem-rubygem >= 1.0.5", "rubygem-rubygem < 1.1"]


def test_plain_operator_yields_single_constraint():
    constraints = ConstraintTranslator(prefix="ruby2.7-rubygem").translate("rake", "<=", "13.0")

    assert len(constraints) == 1
    assert str(constraints[0]) == "ruby2.7-rubygem-rake <= 13.0"


def test_empty_prefix_keeps_bare_name():
    constraint, = ConstraintTranslator(prefix="").translate("json", "=", "2.6.1")
    assert constraint.name == "json"
    assert constraint.comparator.symbol == "="
