"""L20n syntax parsing package.

Provides parser, AST definitions, visitor pattern, and serialization.
Separate from any formatting runtime so tooling (linters, formatters,
extractors) can depend on it alone.

Python 3.13+.
"""

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
from .cursor import Cursor
from .parser import L20nParser, ParseOutcome
from .serializer import SerializationValidationError, serialize
from .visitor import ASTVisitor, iter_child_nodes

# Note: L20nSerializer is intentionally NOT exported.
# Users should use the serialize() function instead of instantiating L20nSerializer directly.

__all__ = [
    "ASTVisitor",
    "ArrayValue",
    "AttributeAccess",
    "BinaryExpression",
    "CallExpression",
    "ComplexEntity",
    "ConditionalExpression",
    "Cursor",
    "Entry",
    "Expression",
    "Identifier",
    "IndexAttributeAccess",
    "IndexPropertyAccess",
    "L20nParser",
    "LogicalExpression",
    "Macro",
    "NumberLiteral",
    "ObjectValue",
    "ParenthesizedExpression",
    "ParseOutcome",
    "Placeholder",
    "PlainValue",
    "PropertyAccess",
    "Resource",
    "SerializationValidationError",
    "StringParts",
    "StringValue",
    "TextSegment",
    "UnaryExpression",
    "Value",
    "ValueLiteral",
    "iter_child_nodes",
    "parse",
    "serialize",
]


def parse(source: str, *, split_placeholders: bool = False) -> Resource:
    """Parse L20n source into AST.

    Convenience function for L20nParser.parse().

    Args:
        source: L20n source code
        split_placeholders: Split strings containing ``{{ ... }}`` runs into
            StringParts (default: keep every string a single StringValue)

    Returns:
        Resource mapping entity and macro names to their entries

    Raises:
        L20nSyntaxError: On the first syntax violation

    Example:
        >>> from l20nlexengine.syntax import parse
        >>> resource = parse('<hello "Hello, world!">')
        >>> list(resource)
        ['hello']
    """
    parser = L20nParser(split_placeholders=split_placeholders)
    return parser.parse(source)
