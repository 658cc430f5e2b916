"""L20n AST (Abstract Syntax Tree) node definitions.

Three families of nodes:
- Values: JSON-like literals (strings, arrays, objects)
- Expressions: the small C-like expression grammar used in indexes and macros
- Entries: what a key maps to in a parsed Resource

All nodes are frozen dataclasses built bottom-up in a single left-to-right
scan and never mutated afterwards.

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import TypeIs

from l20nlexengine.enums import BinaryOperator, LogicalOperator, UnaryOperator

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Values
    "StringValue",
    "TextSegment",
    "Placeholder",
    "StringParts",
    "ArrayValue",
    "ObjectValue",
    # Expressions
    "NumberLiteral",
    "ValueLiteral",
    "Identifier",
    "ParenthesizedExpression",
    "AttributeAccess",
    "IndexAttributeAccess",
    "PropertyAccess",
    "IndexPropertyAccess",
    "CallExpression",
    "UnaryExpression",
    "BinaryExpression",
    "LogicalExpression",
    "ConditionalExpression",
    # Entries
    "PlainValue",
    "ComplexEntity",
    "Macro",
    "Resource",
    # Type aliases
    "Value",
    "StringSegment",
    "Literal",
    "Expression",
    "Entry",
    "ASTNode",
]

# ============================================================================
# VALUES
# ============================================================================


@dataclass(frozen=True, slots=True)
class StringValue:
    """String literal without placeholders, escapes already decoded.

    Examples:
        "hello"        -> StringValue("hello")
        'a\\nb'         -> StringValue("a\\nb")  (with a real newline)
        '''multi'''    -> StringValue("multi")
    """

    value: str


@dataclass(frozen=True, slots=True)
class TextSegment:
    """Literal run of a split string, escapes decoded."""

    value: str


@dataclass(frozen=True, slots=True)
class Placeholder:
    """Verbatim ``{{ ... }}`` run of a split string.

    The text between the braces is kept opaque; it is substituted by the
    formatting runtime, not parsed here.
    """

    source: str

    @property
    def content(self) -> str:
        """Text between the braces, with surrounding whitespace stripped."""
        return self.source[2:-2].strip()


type StringSegment = TextSegment | Placeholder


@dataclass(frozen=True, slots=True)
class StringParts:
    """String literal containing one or more ``{{ ... }}`` placeholders.

    Segments keep source order. Joining ``TextSegment.value`` and
    ``Placeholder.source`` reproduces the decoded string text.

    Example:
        "x {{ y }} z" -> StringParts((TextSegment("x "),
                                      Placeholder("{{ y }}"),
                                      TextSegment(" z")))
    """

    parts: tuple[StringSegment, ...]

    @property
    def text(self) -> str:
        """Reassembled string with placeholders left verbatim."""
        return "".join(
            part.value if isinstance(part, TextSegment) else part.source
            for part in self.parts
        )

    @property
    def placeholders(self) -> tuple[Placeholder, ...]:
        """All placeholder segments in source order."""
        return tuple(part for part in self.parts if isinstance(part, Placeholder))


@dataclass(frozen=True, slots=True)
class ArrayValue:
    """Array literal: ``[value, value, ...]``."""

    items: tuple["Value", ...]


@dataclass(frozen=True, slots=True)
class ObjectValue:
    """Flat object literal: ``{name: value, ...}``.

    Later duplicate keys overwrite earlier ones.

    Immutability:
        members is stored as a MappingProxyType over a private copy, so
        neither the node nor the dict it was built from can change it later.
        Mappings are not hashable, and neither is an ObjectValue.
    """

    members: Mapping[str, "Value"]

    def __post_init__(self) -> None:
        object.__setattr__(self, "members", MappingProxyType(dict(self.members)))


type Value = StringValue | StringParts | ArrayValue | ObjectValue

# ============================================================================
# EXPRESSIONS
# ============================================================================


@dataclass(frozen=True, slots=True)
class NumberLiteral:
    """Integer literal (leading decimal digits of a ``[0-9]\\w*`` token)."""

    value: int


@dataclass(frozen=True, slots=True)
class ValueLiteral:
    """A value (string, array or object) used as an expression."""

    value: Value


@dataclass(frozen=True, slots=True)
class Identifier:
    """Bare name: ``[a-zA-Z][a-zA-Z0-9_]*``."""

    name: str


type Literal = NumberLiteral | ValueLiteral | Identifier


@dataclass(frozen=True, slots=True)
class ParenthesizedExpression:
    """``( expression )``."""

    expression: "Expression"


@dataclass(frozen=True, slots=True)
class AttributeAccess:
    """``base..name``."""

    base: "Expression"
    name: str


@dataclass(frozen=True, slots=True)
class IndexAttributeAccess:
    """``base[.expression]``."""

    base: "Expression"
    index: "Expression"


@dataclass(frozen=True, slots=True)
class PropertyAccess:
    """``base.name``."""

    base: "Expression"
    name: str


@dataclass(frozen=True, slots=True)
class IndexPropertyAccess:
    """``base[expression]``."""

    base: "Expression"
    index: "Expression"


@dataclass(frozen=True, slots=True)
class CallExpression:
    """``base(argument, ...)``."""

    base: "Expression"
    arguments: tuple["Expression", ...]


@dataclass(frozen=True, slots=True)
class UnaryExpression:
    """``+operand``, ``-operand`` or ``!operand``."""

    operator: UnaryOperator
    operand: "Expression"


@dataclass(frozen=True, slots=True)
class BinaryExpression:
    """``left op right``; chains nest to the right."""

    operator: BinaryOperator
    left: "Expression"
    right: "Expression"


@dataclass(frozen=True, slots=True)
class LogicalExpression:
    """``left && right`` or ``left || right``; chains nest to the right."""

    operator: LogicalOperator
    left: "Expression"
    right: "Expression"


@dataclass(frozen=True, slots=True)
class ConditionalExpression:
    """``test ? consequent : alternate``."""

    test: "Expression"
    consequent: "Expression"
    alternate: "Expression"


type Expression = (
    NumberLiteral
    | ValueLiteral
    | Identifier
    | ParenthesizedExpression
    | AttributeAccess
    | IndexAttributeAccess
    | PropertyAccess
    | IndexPropertyAccess
    | CallExpression
    | UnaryExpression
    | BinaryExpression
    | LogicalExpression
    | ConditionalExpression
)

# ============================================================================
# ENTRIES
# ============================================================================


@dataclass(frozen=True, slots=True)
class PlainValue:
    """Entity with neither index nor attributes.

    Examples:
        <hello "Hello, world!">   -> PlainValue(StringValue("Hello, world!"))
        <empty>                   -> PlainValue(None)
    """

    value: Value | None

    @staticmethod
    def guard(entry: object) -> TypeIs["PlainValue"]:
        """Type guard for PlainValue (used in entry filtering)."""
        return isinstance(entry, PlainValue)


@dataclass(frozen=True, slots=True)
class ComplexEntity:
    """Entity with an index, attributes, or both.

    Example:
        <msg[1] "hi" attr: "x">
        -> ComplexEntity(index=(NumberLiteral(1),),
                         value=StringValue("hi"),
                         attributes={"attr": StringValue("x")})

    attributes, when present, is a read-only copy like ObjectValue.members,
    which also makes entities with attributes unhashable.
    """

    index: tuple[Expression, ...] | None = None
    value: Value | None = None
    attributes: Mapping[str, Value] | None = None

    def __post_init__(self) -> None:
        if self.attributes is not None:
            object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))

    @staticmethod
    def guard(entry: object) -> TypeIs["ComplexEntity"]:
        """Type guard for ComplexEntity (used in entry filtering)."""
        return isinstance(entry, ComplexEntity)


@dataclass(frozen=True, slots=True)
class Macro:
    """Parameterized expression.

    Example:
        <plural(n) { n == 1 }>
        -> Macro(params=(Identifier("n"),),
                 body=BinaryExpression("==", Identifier("n"), NumberLiteral(1)))
    """

    params: tuple[Expression, ...]
    body: Expression

    @staticmethod
    def guard(entry: object) -> TypeIs["Macro"]:
        """Type guard for Macro (used in entry filtering)."""
        return isinstance(entry, Macro)


type Entry = PlainValue | ComplexEntity | Macro


class Resource(Mapping[str, Entry]):
    """Root node: read-only ordered mapping from entity key to Entry.

    Keys are unique. When a source defines a key twice, the later definition
    replaces the earlier one and takes its place at the end of the order.

    Example:
        >>> resource = parse_l20n('<a "1"> <b "2">')
        >>> list(resource)
        ['a', 'b']
        >>> resource["a"]
        PlainValue(value=StringValue(value='1'))
    """

    __slots__ = ("_entries",)

    def __init__(self, entries: Mapping[str, Entry] | None = None) -> None:
        self._entries: dict[str, Entry] = dict(entries) if entries is not None else {}

    def __getitem__(self, key: str) -> Entry:
        return self._entries[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"Resource({self._entries!r})"

    @property
    def entities(self) -> dict[str, PlainValue | ComplexEntity]:
        """Entities (non-macro entries) in source order."""
        return {
            key: entry
            for key, entry in self._entries.items()
            if PlainValue.guard(entry) or ComplexEntity.guard(entry)
        }

    @property
    def macros(self) -> dict[str, Macro]:
        """Macro entries in source order."""
        return {key: entry for key, entry in self._entries.items() if Macro.guard(entry)}


type ASTNode = Value | StringSegment | Expression | Entry | Resource
