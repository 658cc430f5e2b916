"""Grammar rules for the L20n parser.

This module provides all parsing rules for L20n grammar constructs:
- Value parsing (strings, arrays, objects)
- Expression parsing (primary, member chain, unary, binary, logical, conditional)
- Identifier parsing (name with optional index or parameter list)
- Entry parsing (comments, entities, macros)

All grammar rules are co-located in a single module because they are
mutually recursive: values appear inside expressions, and expressions
appear inside identifiers and macro bodies.

Every rule takes the parse-owned Cursor and ParseContext as arguments and
advances the cursor in place. Rules either return a node, return None when
the construct is optional and absent (cursor unchanged), or raise
L20nSyntaxError.

Associativity:
    binary  := unary (op binary)?
    logical := binary (op logical)?
    Both recurse on the right-hand side, so ``1 - 2 - 3`` parses as
    ``1 - (2 - 3)``. This shape is part of the format and is kept as is.

Security:
    Includes configurable nesting depth limit to prevent stack exhaustion
    on deeply nested values, parenthesized expressions and long operator
    chains. Every right-hand operand of a chain counts as one level.
"""

import re
from dataclasses import dataclass, field

from l20nlexengine.constants import MAX_DEPTH
from l20nlexengine.core.depth_guard import DepthGuard, depth_clamp
from l20nlexengine.diagnostics import ErrorTemplate
from l20nlexengine.enums import BinaryOperator, LogicalOperator, UnaryOperator
from l20nlexengine.syntax.ast import (
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
    PlainValue,
    PropertyAccess,
    UnaryExpression,
    Value,
    ValueLiteral,
)
from l20nlexengine.syntax.cursor import Cursor
from l20nlexengine.syntax.parser.primitives import (
    COLON_SEP,
    COMMA_SEP,
    IDENTIFIER,
    VALUE_BEGIN,
    parse_name,
    parse_number,
    parse_string,
)

__all__ = [
    "EntityHeader",
    "ParseContext",
    "parse_attributes",
    "parse_entity",
    "parse_entity_open",
    "parse_expression",
    "parse_identifier",
    "parse_value",
    "require_expression",
    "require_value",
    "skip_comments",
]

# Structural tokens (whitespace allowed before)
_ARRAY_OPEN = re.compile(r"\s*\[")
_ARRAY_CLOSE = re.compile(r"\s*\]")
_OBJECT_OPEN = re.compile(r"\s*\{")
_OBJECT_CLOSE = re.compile(r"\s*\}")
_PAREN_OPEN = re.compile(r"\s*\(")
_PAREN_CLOSE = re.compile(r"\s*\)")
_QUESTION = re.compile(r"\s*\?\s*")
_COMMENT_OPEN = re.compile(r"\s*/\*")
_COMMENT_CLOSE = re.compile(r"\*/")
_ENTITY_OPEN = re.compile(r"\s*<")
_ENTITY_CLOSE = re.compile(r"\s*>")

# Member-chain openers (must directly follow the base)
_ATTRIBUTE_DOT = re.compile(r"\.\.")
_ATTRIBUTE_INDEX_OPEN = re.compile(r"\[\.")
_PROPERTY_DOT = re.compile(r"\.")
_PROPERTY_INDEX_OPEN = re.compile(r"\[")
_CALL_OPEN = re.compile(r"\(")

# Operators
_UNARY_OP = re.compile(r"\s*[+\-!]")
_BINARY_OP = re.compile(r"\s*(==|!=|<=|>=|\+|-|\*|/|%)")
_LOGICAL_OP = re.compile(r"\s*(\|\||&&)")

# Python frames between two guarded expression levels: the eight rules from
# parse_expression down to a nested require_expression, plus one spare.
_FRAMES_PER_LEVEL = 9


@dataclass(slots=True)
class ParseContext:
    """Explicit context for parsing operations.

    Passed to every rule instead of module or thread-local state, so parse
    calls stay independent and re-entrant.

    Attributes:
        max_nesting_depth: Maximum allowed nesting of values and expressions
        split_placeholders: Split strings with ``{{ }}`` runs into StringParts
        depth_guard: Tracks the current nesting depth
    """

    max_nesting_depth: int = MAX_DEPTH
    split_placeholders: bool = False
    depth_guard: DepthGuard = field(init=False)

    def __post_init__(self) -> None:
        self.depth_guard = DepthGuard(
            max_depth=depth_clamp(
                self.max_nesting_depth, frames_per_level=_FRAMES_PER_LEVEL
            )
        )

    def nested(self, cursor: Cursor) -> DepthGuard:
        """Enter one nesting level; use as ``with context.nested(cursor):``."""
        return self.depth_guard.entering(cursor.context())


@dataclass(frozen=True, slots=True)
class EntityHeader:
    """Result of reading an identifier at the start of an entity.

    At most one of index and params is set: the character right after the
    name decides which list (if any) follows.

    Attributes:
        key: Entity name
        index: Index expressions from ``name[expr, ...]``
        params: Parameter expressions from ``name(expr, ...)``
    """

    key: str
    index: tuple[Expression, ...] | None = None
    params: tuple[Expression, ...] | None = None


# =============================================================================
# Value Parsing
# =============================================================================


def parse_value(cursor: Cursor, context: ParseContext) -> Value | None:
    """Parse a JSON-like value: string | array | object.

    Dispatches on the next significant character:
        ' or "  -> string
        [       -> array
        {       -> object

    Args:
        cursor: Current position in source
        context: Parse context for depth tracking and string mode

    Returns:
        The value, or None (cursor unchanged) if no value starts here

    Raises:
        L20nSyntaxError: If a value starts here but is malformed
    """
    opener = VALUE_BEGIN.match(cursor.source, cursor.pos)
    if opener is None:
        return None
    match opener.group()[-1]:
        case "[":
            with context.nested(cursor):
                return _parse_array(cursor, context)
        case "{":
            with context.nested(cursor):
                return _parse_object(cursor, context)
        case _:
            return parse_string(cursor, split_placeholders=context.split_placeholders)


def require_value(cursor: Cursor, context: ParseContext) -> Value:
    """Parse a value that the grammar makes mandatory.

    Raises:
        L20nSyntaxError: If no value starts here
    """
    value = parse_value(cursor, context)
    if value is None:
        raise cursor.error(ErrorTemplate.expected_value(cursor.context()))
    return value


def _parse_array(cursor: Cursor, context: ParseContext) -> ArrayValue:
    """Parse array: '[' ( value (',' value)* )? ']'"""
    cursor.require_match(_ARRAY_OPEN, "'['")
    if cursor.try_match(_ARRAY_CLOSE) is not None:
        return ArrayValue(())

    items = [require_value(cursor, context)]
    while cursor.try_match(COMMA_SEP) is not None:
        items.append(require_value(cursor, context))
    cursor.require_match(_ARRAY_CLOSE, "']'")
    return ArrayValue(tuple(items))


def _parse_object(cursor: Cursor, context: ParseContext) -> ObjectValue:
    """Parse object: '{' ( NAME ':' value (',' NAME ':' value)* )? '}'

    A key that occurs twice keeps the value of its last occurrence.
    """
    cursor.require_match(_OBJECT_OPEN, "'{'")
    if cursor.try_match(_OBJECT_CLOSE) is not None:
        return ObjectValue({})

    members: dict[str, Value] = {}
    while True:
        name = cursor.require_match(IDENTIFIER, "a key name")
        cursor.require_match(COLON_SEP, "':'")
        members[name] = require_value(cursor, context)
        if cursor.try_match(COMMA_SEP) is None:
            break
    cursor.require_match(_OBJECT_CLOSE, "'}'")
    return ObjectValue(members)


# =============================================================================
# Expression Parsing
# =============================================================================


def parse_expression(cursor: Cursor, context: ParseContext) -> Expression | None:
    """Parse expression (always a conditional expression).

    Args:
        cursor: Current position in source
        context: Parse context for depth tracking

    Returns:
        Expression tree, or None (cursor unchanged) if no expression starts here

    Raises:
        L20nSyntaxError: If an expression starts here but is malformed
    """
    with context.nested(cursor):
        return _parse_conditional(cursor, context)


def require_expression(cursor: Cursor, context: ParseContext) -> Expression:
    """Parse an expression that the grammar makes mandatory.

    Raises:
        L20nSyntaxError: If no expression starts here
    """
    expression = parse_expression(cursor, context)
    if expression is None:
        raise cursor.error(ErrorTemplate.expected_expression(cursor.context()))
    return expression


def _require_operand(cursor: Cursor, operand: Expression | None) -> Expression:
    """Reject a missing operand after an operator or '?' / ':'."""
    if operand is None:
        raise cursor.error(ErrorTemplate.expected_expression(cursor.context()))
    return operand


def _parse_expression_list(
    cursor: Cursor,
    context: ParseContext,
    close: re.Pattern[str],
    expected: str,
    *,
    allow_empty: bool,
) -> tuple[Expression, ...]:
    """Parse ``expr (',' expr)*`` up to a closing bracket.

    The opening bracket has already been consumed. Index lists need at least
    one expression; parameter and argument lists may be empty.
    """
    if allow_empty and cursor.try_match(close) is not None:
        return ()

    items = [require_expression(cursor, context)]
    while cursor.try_match(COMMA_SEP) is not None:
        items.append(require_expression(cursor, context))
    cursor.require_match(close, expected)
    return tuple(items)


def _parse_primary(cursor: Cursor, context: ParseContext) -> Expression | None:
    """Parse primary: '(' expr ')' | NUMBER | value | NAME

    Alternatives are tried in this order; the first that matches wins.
    """
    if cursor.try_match(_PAREN_OPEN) is not None:
        expression = require_expression(cursor, context)
        cursor.require_match(_PAREN_CLOSE, "')'")
        return ParenthesizedExpression(expression)

    number = parse_number(cursor)
    if number is not None:
        return NumberLiteral(number)

    value = parse_value(cursor, context)
    if value is not None:
        return ValueLiteral(value)

    name = parse_name(cursor)
    if name is not None:
        return Identifier(name)

    return None


def _parse_member(cursor: Cursor, context: ParseContext) -> Expression | None:
    """Parse member chain: primary ( '..'NAME | '[.'expr']' | '.'NAME | '['expr']' | call )*

    Each suffix wraps the expression built so far as its base. Suffixes are
    tried in the order above, so ``..`` wins over ``.`` and ``[.`` over ``[``.
    """
    expression = _parse_primary(cursor, context)
    if expression is None:
        return None

    while True:
        if cursor.try_match(_ATTRIBUTE_DOT) is not None:
            name = cursor.require_match(IDENTIFIER, "an attribute name")
            expression = AttributeAccess(expression, name)
        elif cursor.try_match(_ATTRIBUTE_INDEX_OPEN) is not None:
            index = require_expression(cursor, context)
            cursor.require_match(_ARRAY_CLOSE, "']'")
            expression = IndexAttributeAccess(expression, index)
        elif cursor.try_match(_PROPERTY_DOT) is not None:
            name = cursor.require_match(IDENTIFIER, "a property name")
            expression = PropertyAccess(expression, name)
        elif cursor.try_match(_PROPERTY_INDEX_OPEN) is not None:
            index = require_expression(cursor, context)
            cursor.require_match(_ARRAY_CLOSE, "']'")
            expression = IndexPropertyAccess(expression, index)
        elif cursor.try_match(_CALL_OPEN) is not None:
            arguments = _parse_expression_list(
                cursor, context, _PAREN_CLOSE, "')'", allow_empty=True
            )
            expression = CallExpression(expression, arguments)
        else:
            return expression


def _parse_unary(cursor: Cursor, context: ParseContext) -> Expression | None:
    """Parse unary: ('+' | '-' | '!')? member"""
    operator = cursor.try_match(_UNARY_OP)
    member = _parse_member(cursor, context)
    if operator is None:
        return member
    return UnaryExpression(UnaryOperator(operator), _require_operand(cursor, member))


def _parse_binary(cursor: Cursor, context: ParseContext) -> Expression | None:
    """Parse binary: unary ( op binary )?  (right-associative)"""
    left = _parse_unary(cursor, context)
    if left is None:
        return None
    operator = cursor.try_match(_BINARY_OP)
    if operator is None:
        return left
    with context.nested(cursor):
        right = _require_operand(cursor, _parse_binary(cursor, context))
    return BinaryExpression(BinaryOperator(operator), left, right)


def _parse_logical(cursor: Cursor, context: ParseContext) -> Expression | None:
    """Parse logical: binary ( ('&&' | '||') logical )?  (right-associative)"""
    left = _parse_binary(cursor, context)
    if left is None:
        return None
    operator = cursor.try_match(_LOGICAL_OP)
    if operator is None:
        return left
    with context.nested(cursor):
        right = _require_operand(cursor, _parse_logical(cursor, context))
    return LogicalExpression(LogicalOperator(operator), left, right)


def _parse_conditional(cursor: Cursor, context: ParseContext) -> Expression | None:
    """Parse conditional: logical ( '?' conditional ':' conditional )?"""
    test = _parse_logical(cursor, context)
    if test is None:
        return None
    if cursor.try_match(_QUESTION) is None:
        return test
    with context.nested(cursor):
        consequent = _require_operand(cursor, _parse_conditional(cursor, context))
    cursor.require_match(COLON_SEP, "':'")
    with context.nested(cursor):
        alternate = _require_operand(cursor, _parse_conditional(cursor, context))
    return ConditionalExpression(test, consequent, alternate)


# =============================================================================
# Identifier Parsing
# =============================================================================


def parse_identifier(cursor: Cursor, context: ParseContext) -> EntityHeader:
    """Parse identifier: NAME ( '[' expr (',' expr)* ']' | '(' expr (',' expr)* ')' )?

    Only the character immediately after the name is inspected:
        '[' -> index list (one or more expressions)
        '(' -> parameter list (zero or more expressions)
        else -> plain identifier

    Examples:
        brand            -> EntityHeader("brand")
        plural[n]        -> EntityHeader("plural", index=(Identifier("n"),))
        plural(n)        -> EntityHeader("plural", params=(Identifier("n"),))

    Raises:
        L20nSyntaxError: If no name starts here or a list is malformed
    """
    key = cursor.require_match(IDENTIFIER, "an entity name")

    if cursor.try_match(_PROPERTY_INDEX_OPEN) is not None:
        index = _parse_expression_list(
            cursor, context, _ARRAY_CLOSE, "']'", allow_empty=False
        )
        return EntityHeader(key, index=index)

    if cursor.try_match(_CALL_OPEN) is not None:
        params = _parse_expression_list(
            cursor, context, _PAREN_CLOSE, "')'", allow_empty=True
        )
        return EntityHeader(key, params=params)

    return EntityHeader(key)


# =============================================================================
# Entry Parsing
# =============================================================================


def skip_comments(cursor: Cursor) -> None:
    """Skip zero or more ``/* ... */`` comments, discarding their content.

    Raises:
        L20nSyntaxError: If a comment is not closed before end of input
    """
    while cursor.try_match(_COMMENT_OPEN) is not None:
        if cursor.search(_COMMENT_CLOSE) is None:
            raise cursor.error(ErrorTemplate.unterminated_comment(cursor.context()))


def parse_entity_open(cursor: Cursor) -> bool:
    """Skip leading comments and consume the next '<', if any.

    Returns:
        True if an entity or macro starts here, False if parsing is done
    """
    skip_comments(cursor)
    return cursor.try_match(_ENTITY_OPEN) is not None


def parse_attributes(
    cursor: Cursor, context: ParseContext
) -> dict[str, Value] | None:
    """Parse entity attributes: ( NAME ':' value )*

    The list ends at the first token that is not a name; there is no
    closing punctuation.

    Returns:
        Mapping of attribute name to value, or None if there are none
    """
    attributes: dict[str, Value] = {}
    name = parse_name(cursor)
    while name is not None:
        cursor.require_match(COLON_SEP, "':'")
        attributes[name] = require_value(cursor, context)
        name = parse_name(cursor)
    return attributes or None


def parse_entity(cursor: Cursor, context: ParseContext) -> tuple[str, Entry]:
    """Parse the rest of an entity or macro after its opening '<'.

    Grammar:
        identifier ( '{' expr '}' | value? attrs? ) '>'

    The parameter list decides between the two forms:
        <plural(n) { n == 1 ? "one" : "many" }>  -> Macro
        <hello "Hello" title: "Hi">               -> ComplexEntity
        <hello "Hello">                           -> PlainValue

    Args:
        cursor: Position right after '<'
        context: Parse context for depth tracking and string mode

    Returns:
        (key, entry) pair

    Raises:
        L20nSyntaxError: If any required token is missing
    """
    header = parse_identifier(cursor, context)

    entry: Entry
    if header.params is not None:
        cursor.require_match(_OBJECT_OPEN, "'{'")
        body = require_expression(cursor, context)
        cursor.require_match(_OBJECT_CLOSE, "'}'")
        entry = Macro(params=header.params, body=body)
    else:
        value = parse_value(cursor, context)
        attributes = parse_attributes(cursor, context)
        if attributes is None and header.index is None:
            entry = PlainValue(value)
        else:
            entry = ComplexEntity(index=header.index, value=value, attributes=attributes)

    cursor.require_match(_ENTITY_CLOSE, "'>'")
    return header.key, entry
