#!/usr/bin/env python3
"""
GEMSCRIBE CONSTRAINT TRANSLATOR
-------------------------------
Turns RubyGems requirement operators into plain comparison constraints
that package managers without a pessimistic operator understand.

    ~> 1.0.5   becomes   >= 1.0.5  and  < 1.1

The upper bound comes from bump_version(): drop the last component, then
add one to what is left with a decimal carry that stays inside the new
last component ("1.9" -> "1.10", never "2.0").

Author: Gemscribe Team
Date: 2026-10-19
"""

from typing import Tuple

from gemscribe.core.errors import InvalidVersionError
from gemscribe.core.models import Comparator, Constraint

PESSIMISTIC = "~>"

_OPERATOR_BITS = {
    ">": Comparator.GT,
    "=": Comparator.EQ,
    "<": Comparator.LT,
}


def bump_version(version: str) -> str:
    """
    Upper bound of a pessimistic requirement.

    >>> bump_version("1.0.5")
    '1.1'
    >>> bump_version("1.9.39")
    '1.10'
    >>> bump_version("9.5")
    '10'
    """
    prefix, dot, _ = version.rpartition(".")
    if not dot:
        raise InvalidVersionError(f"Cannot bump '{version}': needs at least two components")

    digits = list(prefix)
    pos = len(digits) - 1
    while pos >= 0 and digits[pos] != ".":
        if digits[pos] == "9":
            digits[pos] = "0"
            pos -= 1
            continue
        digits[pos] = chr(ord(digits[pos]) + 1)
        return "".join(digits)

    # The whole component carried: grow it by one leading digit.
    # pos is either the separator or -1 when this is the first component.
    digits.insert(pos + 1, "1")
    return "".join(digits)


def parse_operator(operator: str) -> Comparator:
    """ORs together the leading run of '>', '=' and '<' characters."""
    flags = Comparator(0)
    for char in operator:
        bit = _OPERATOR_BITS.get(char)
        if bit is None:
            break
        flags |= bit
    return flags


class ConstraintTranslator:
    """Maps (name, operator, version) onto namespaced constraints."""

    def __init__(self, prefix: str = "rubygem"):
        self.prefix = prefix

    def target(self, name: str) -> str:
        return f"{self.prefix}-{name}" if self.prefix else name

    def translate(self, name: str, operator: str, version: str) -> Tuple[Constraint, ...]:
        target = self.target(name)
        if operator == PESSIMISTIC:
            upper = bump_version(version)
            return (
                Constraint(target, Comparator.GT | Comparator.EQ, version),
                Constraint(target, Comparator.LT, upper),
            )
        return (Constraint(target, parse_operator(operator), version),)
