"""Serialize L20n AST back to L20n syntax.

Converts AST nodes to L20n source code. Useful for:
- Formatters
- Code generators
- Property-based testing (roundtrip: parse -> serialize -> parse)

Python 3.13+.
"""

import re

from .ast import (
    ArrayValue,
    AttributeAccess,
    BinaryExpression,
    CallExpression,
    ComplexEntity,
    ConditionalExpression,
    Entry,
    Expression,
    Identifier,
    IndexAttributeAccess,
    IndexPropertyAccess,
    LogicalExpression,
    Macro,
    NumberLiteral,
    ObjectValue,
    ParenthesizedExpression,
    Placeholder,
    PlainValue,
    PropertyAccess,
    Resource,
    StringParts,
    StringValue,
    TextSegment,
    UnaryExpression,
    Value,
    ValueLiteral,
)
from .visitor import ASTVisitor

__all__ = ["L20nSerializer", "SerializationValidationError", "serialize"]


class SerializationValidationError(ValueError):
    """Raised when an AST cannot be written as valid L20n source.

    Common causes:
    - Names that are not [a-zA-Z][a-zA-Z0-9_]*
    - ComplexEntity with an empty index list
    - Negative NumberLiteral values
    - A literal backslash directly before a character that forms an escape
    - Placeholder text not of the form '{{ ... }}'
    """


_NAME = re.compile(r"[a-zA-Z][a-zA-Z0-9_]*")

# Escapes written for string text. Backslash first to avoid double-escaping.
_STRING_ESCAPES: tuple[tuple[str, str], ...] = (
    ("\\", "\\\\"),
    ('"', '\\"'),
    ("\n", "\\n"),
    ("\r", "\\r"),
    ("\t", "\\t"),
    ("\b", "\\b"),
    ("\f", "\\f"),
    ("{", "\\{"),
    ("}", "\\}"),
)

# A literal backslash followed by one of these would be read back as an escape.
_AMBIGUOUS_BACKSLASH = re.compile(r"\\[nrtbf{}\"']")

# Operand shapes that bind at member level and need no parentheses
_MEMBER_LEVEL = (
    NumberLiteral,
    ValueLiteral,
    Identifier,
    ParenthesizedExpression,
    AttributeAccess,
    IndexAttributeAccess,
    PropertyAccess,
    IndexPropertyAccess,
    CallExpression,
)


def _check_name(name: str, what: str) -> str:
    if not _NAME.fullmatch(name):
        msg = f"Invalid {what} name {name!r} (must match [a-zA-Z][a-zA-Z0-9_]*)"
        raise SerializationValidationError(msg)
    return name


def _escape_text(text: str) -> str:
    """Escape string text so the reader decodes it back unchanged."""
    if _AMBIGUOUS_BACKSLASH.search(text):
        msg = f"String text {text!r} has a backslash that would be read as an escape"
        raise SerializationValidationError(msg)
    for char, escape in _STRING_ESCAPES:
        text = text.replace(char, escape)
    return text


def _check_placeholder(node: Placeholder) -> str:
    source = node.source
    if (
        len(source) < 4
        or not source.startswith("{{")
        or source.find("}}", 2) != len(source) - 2
    ):
        msg = f"Invalid placeholder {source!r} (must be '{{{{ ... }}}}')"
        raise SerializationValidationError(msg)
    return source


class L20nSerializer(ASTVisitor):
    """Converts AST back to L20n source string.

    Output layout: one entry per line, a single space between parts:
        <key "value">
        <key[index] "value" attr: "x">
        <name(params) { body }>

    Expressions are written with the minimum parentheses needed to keep
    their structure. ParenthesizedExpression nodes are always written, so
    a parsed resource serializes back to the same AST.

    Uses the visitor depth guard for nested values and expressions, so an
    instance must not be shared by concurrent serialize() calls.

    Usage:
        >>> from l20nlexengine.syntax import parse, serialize
        >>> resource = parse('<hello "Hello, world!">')
        >>> serialize(resource)
        '<hello "Hello, world!">\\n'
    """

    def serialize(self, resource: Resource) -> str:
        """Serialize Resource to L20n string.

        Args:
            resource: Resource AST node

        Returns:
            L20n source code

        Raises:
            SerializationValidationError: If the AST cannot be written as L20n
            DepthLimitExceededError: If nesting exceeds the visitor max_depth
        """
        self._depth_guard.reset()
        output: list[str] = []
        for key, entry in resource.items():
            self._serialize_entry(key, entry, output)
        return "".join(output)

    def _serialize_entry(self, key: str, entry: Entry, output: list[str]) -> None:
        """Serialize a single entity or macro, followed by a newline."""
        output.append("<")
        output.append(_check_name(key, "entity"))

        match entry:
            case Macro():
                self._serialize_expression_list(entry.params, "(", ")", output)
                output.append(" { ")
                self._serialize_nested(entry.body, output)
                output.append(" }")
            case ComplexEntity():
                if entry.index is not None:
                    if not entry.index:
                        msg = f"Entity {key!r} has an empty index list"
                        raise SerializationValidationError(msg)
                    self._serialize_expression_list(entry.index, "[", "]", output)
                if entry.value is not None:
                    output.append(" ")
                    self._serialize_value(entry.value, output)
                for name, value in (entry.attributes or {}).items():
                    output.append(f" {_check_name(name, 'attribute')}: ")
                    self._serialize_value(value, output)
            case PlainValue():
                if entry.value is not None:
                    output.append(" ")
                    self._serialize_value(entry.value, output)

        output.append(">\n")

    def _serialize_value(self, value: Value, output: list[str]) -> None:
        """Serialize a string, array or object."""
        match value:
            case StringValue():
                output.append(f'"{_escape_text(value.value)}"')
            case StringParts():
                output.append('"')
                for part in value.parts:
                    if isinstance(part, TextSegment):
                        output.append(_escape_text(part.value))
                    else:
                        output.append(_check_placeholder(part))
                output.append('"')
            case ArrayValue():
                with self._depth_guard:
                    output.append("[")
                    for i, item in enumerate(value.items):
                        if i > 0:
                            output.append(", ")
                        self._serialize_value(item, output)
                    output.append("]")
            case ObjectValue():
                with self._depth_guard:
                    output.append("{")
                    for i, (name, member) in enumerate(value.members.items()):
                        if i > 0:
                            output.append(", ")
                        output.append(f"{_check_name(name, 'key')}: ")
                        self._serialize_value(member, output)
                    output.append("}")

    def _serialize_expression_list(
        self,
        expressions: tuple[Expression, ...],
        open_bracket: str,
        close_bracket: str,
        output: list[str],
    ) -> None:
        output.append(open_bracket)
        for i, expression in enumerate(expressions):
            if i > 0:
                output.append(", ")
            self._serialize_nested(expression, output)
        output.append(close_bracket)

    def _serialize_nested(self, expression: Expression, output: list[str]) -> None:
        """Serialize an expression in a position that opens a nesting level."""
        with self._depth_guard:
            self._serialize_expression(expression, output)

    def _serialize_operand(
        self,
        expression: Expression,
        output: list[str],
        *,
        wrap: tuple[type, ...],
        nested: bool = False,
    ) -> None:
        """Serialize an operand, parenthesized if its type is in wrap.

        Right-hand operands of a chain pass nested=True so they count one
        nesting level, as they do when parsed.
        """
        if isinstance(expression, wrap):
            output.append("(")
            self._serialize_nested(expression, output)
            output.append(")")
        elif nested:
            self._serialize_nested(expression, output)
        else:
            self._serialize_expression(expression, output)

    def _serialize_member_base(self, expression: Expression, output: list[str]) -> None:
        if isinstance(expression, _MEMBER_LEVEL):
            self._serialize_expression(expression, output)
        else:
            output.append("(")
            self._serialize_nested(expression, output)
            output.append(")")

    def _serialize_expression(self, expr: Expression, output: list[str]) -> None:
        """Serialize Expression nodes using structural pattern matching.

        Binary and logical chains nest to the right, so only a compound
        left operand needs parentheses.
        """
        match expr:
            case NumberLiteral():
                if expr.value < 0:
                    msg = f"NumberLiteral value {expr.value} is negative"
                    raise SerializationValidationError(msg)
                output.append(str(expr.value))

            case ValueLiteral():
                self._serialize_value(expr.value, output)

            case Identifier():
                output.append(_check_name(expr.name, "identifier"))

            case ParenthesizedExpression():
                output.append("(")
                self._serialize_nested(expr.expression, output)
                output.append(")")

            case AttributeAccess():
                self._serialize_member_base(expr.base, output)
                output.append(f"..{_check_name(expr.name, 'attribute')}")

            case IndexAttributeAccess():
                self._serialize_member_base(expr.base, output)
                output.append("[.")
                self._serialize_nested(expr.index, output)
                output.append("]")

            case PropertyAccess():
                self._serialize_member_base(expr.base, output)
                output.append(f".{_check_name(expr.name, 'property')}")

            case IndexPropertyAccess():
                self._serialize_member_base(expr.base, output)
                output.append("[")
                self._serialize_nested(expr.index, output)
                output.append("]")

            case CallExpression():
                self._serialize_member_base(expr.base, output)
                self._serialize_expression_list(expr.arguments, "(", ")", output)

            case UnaryExpression():
                output.append(expr.operator)
                self._serialize_member_base(expr.operand, output)

            case BinaryExpression():
                self._serialize_operand(
                    expr.left,
                    output,
                    wrap=(BinaryExpression, LogicalExpression, ConditionalExpression),
                )
                output.append(f" {expr.operator} ")
                self._serialize_operand(
                    expr.right,
                    output,
                    wrap=(LogicalExpression, ConditionalExpression),
                    nested=True,
                )

            case LogicalExpression():
                self._serialize_operand(
                    expr.left, output, wrap=(LogicalExpression, ConditionalExpression)
                )
                output.append(f" {expr.operator} ")
                self._serialize_operand(
                    expr.right, output, wrap=(ConditionalExpression,), nested=True
                )

            case ConditionalExpression():
                self._serialize_operand(expr.test, output, wrap=(ConditionalExpression,))
                output.append(" ? ")
                self._serialize_nested(expr.consequent, output)
                output.append(" : ")
                self._serialize_nested(expr.alternate, output)


def serialize(resource: Resource) -> str:
    """Serialize Resource to L20n string.

    Convenience function for L20nSerializer.serialize().

    Args:
        resource: Resource AST node

    Returns:
        L20n source code, one entry per line

    Raises:
        SerializationValidationError: If the AST cannot be written as L20n

    Example:
        >>> from l20nlexengine.syntax import parse, serialize
        >>> resource = parse('<a "1"> <b "2">')
        >>> serialize(resource)
        '<a "1">\\n<b "2">\\n'
    """
    serializer = L20nSerializer()
    return serializer.serialize(resource)
