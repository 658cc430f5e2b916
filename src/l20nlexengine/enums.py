"""Enumerations for L20nLexEngine type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, so ``UnaryOperator.NOT == "!"``
and operators compare equal to the raw token text they were parsed from.

Python 3.13+.
"""

from enum import StrEnum

__all__ = [
    "BinaryOperator",
    "LogicalOperator",
    "UnaryOperator",
]


class UnaryOperator(StrEnum):
    """Prefix operator of a unary expression: ``-n``, ``!flag``."""

    PLUS = "+"
    MINUS = "-"
    NOT = "!"


class BinaryOperator(StrEnum):
    """Infix operator of a binary expression.

    Binary chains are right-associative: ``a - b - c`` is ``a - (b - c)``.
    """

    EQUAL = "=="
    NOT_EQUAL = "!="
    LESS_EQUAL = "<="
    GREATER_EQUAL = ">="
    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    DIVIDE = "/"
    MODULO = "%"


class LogicalOperator(StrEnum):
    """Infix operator of a logical expression: ``&&`` or ``||``."""

    AND = "&&"
    OR = "||"
