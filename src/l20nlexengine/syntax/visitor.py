"""Visitor pattern for AST traversal.

Enables tools to traverse L20n ASTs without modifying node classes.

NOTE: This module follows Python stdlib ast.NodeVisitor naming convention.
Methods are named visit_NodeName (PascalCase) rather than visit_node_name (snake_case),
matching the AST class names (visit_Macro, visit_BinaryExpression, ...).
See: https://docs.python.org/3/library/ast.html#ast.NodeVisitor

Type Parameters:
- ASTVisitor[T] is generic over return type T
- ASTVisitor (no type param) defaults to T=ASTNode

Python 3.13+.
"""

from collections.abc import Callable, Iterator, Mapping
from dataclasses import Field, fields
from typing import ClassVar

from l20nlexengine.constants import MAX_DEPTH
from l20nlexengine.core.depth_guard import DepthGuard

from .ast import ASTNode, Resource

__all__ = ["ASTVisitor", "iter_child_nodes"]


def _is_node(value: object) -> bool:
    return isinstance(value, Resource) or hasattr(value, "__dataclass_fields__")


# Class-level cache for dataclass fields per node type
_fields_cache: dict[type, tuple[Field[object], ...]] = {}


def _node_fields(node_type: type) -> tuple[Field[object], ...]:
    if node_type not in _fields_cache:
        _fields_cache[node_type] = fields(node_type)
    return _fields_cache[node_type]


def iter_child_nodes(node: ASTNode) -> Iterator[ASTNode]:
    """Yield the direct child nodes of node in source order.

    Children are found in dataclass fields holding a node, a tuple of nodes
    (array items, index and argument lists) or a mapping of nodes (object
    members, attributes). A Resource yields its entries.

    Example:
        >>> node = BinaryExpression(BinaryOperator.ADD, NumberLiteral(1), NumberLiteral(2))
        >>> list(iter_child_nodes(node))
        [NumberLiteral(value=1), NumberLiteral(value=2)]
    """
    if isinstance(node, Resource):
        yield from node.values()
        return

    for field in _node_fields(type(node)):
        value = getattr(node, field.name)

        # Skip None values and scalars (str, int, operator enums)
        if value is None or isinstance(value, (str, int)):
            continue

        if isinstance(value, tuple):
            yield from (item for item in value if _is_node(item))
        elif isinstance(value, Mapping):
            yield from (item for item in value.values() if _is_node(item))
        elif _is_node(value):
            yield value


class ASTVisitor[T = ASTNode]:
    """Base visitor for traversing L20n ASTs.

    Follows stdlib ast.NodeVisitor convention: generic_visit() automatically
    traverses all child nodes. Override visit_NodeType methods to add custom
    behavior.

    Uses class-level dispatch table:
    - Dispatch table built once per class definition via __init_subclass__
    - Bound methods cached per instance on first use

    Example:
        >>> class MacroNameCollector(ASTVisitor):
        ...     def __init__(self):
        ...         super().__init__()
        ...         self.calls = []
        ...
        ...     def visit_CallExpression(self, node: CallExpression) -> ASTNode:
        ...         self.calls.append(node.base)
        ...         return self.generic_visit(node)  # Traverse children
        ...
        >>> collector = MacroNameCollector()
        >>> collector.visit(resource)
        >>> print(collector.calls)
    """

    __slots__ = ("_depth_guard", "_instance_dispatch_cache")

    # Class-level dispatch table (method names only, not bound methods)
    _class_visit_methods: ClassVar[dict[str, str]] = {}

    def __init_subclass__(cls, **kwargs: object) -> None:
        """Build class-level dispatch table when subclass is defined."""
        super().__init_subclass__(**kwargs)
        cls._class_visit_methods = {}
        for name in dir(cls):
            if name.startswith("visit_"):
                # "visit_Macro" -> "Macro"
                cls._class_visit_methods[name[6:]] = name

    def __init__(self, *, max_depth: int | None = None) -> None:
        """Initialize visitor with depth guard and dispatch cache.

        Subclasses MUST call super().__init__() to ensure depth protection
        is properly initialized.

        Args:
            max_depth: Maximum traversal depth (default: MAX_DEPTH from constants).
        """
        effective_max_depth = max_depth if max_depth is not None else MAX_DEPTH
        self._depth_guard = DepthGuard(max_depth=effective_max_depth)
        self._instance_dispatch_cache: dict[type, Callable[[ASTNode], T]] = {}

    def visit(self, node: ASTNode) -> T:
        """Visit a node, dispatching to visit_<ClassName> or generic_visit.

        Args:
            node: AST node to visit

        Returns:
            Result of visiting the node
        """
        node_type = type(node)

        if node_type in self._instance_dispatch_cache:
            return self._instance_dispatch_cache[node_type](node)

        method_name = self._class_visit_methods.get(node_type.__name__)
        method = getattr(self, method_name) if method_name else self.generic_visit

        self._instance_dispatch_cache[node_type] = method
        return method(node)  # type: ignore[no-any-return]  # getattr returns Any

    def generic_visit(self, node: ASTNode) -> T:
        """Default visitor (traverses children with depth protection).

        Depth Protection:
            Raises DepthLimitExceededError if the traversal nests deeper than
            max_depth. This protects against programmatically constructed
            ASTs that bypass parser limits.

        Args:
            node: AST node to visit

        Returns:
            The node itself (identity)

        Raises:
            DepthLimitExceededError: If traversal depth exceeds max_depth
        """
        with self._depth_guard:
            for child in iter_child_nodes(node):
                self.visit(child)

        return node  # type: ignore[return-value]  # T defaults to ASTNode
