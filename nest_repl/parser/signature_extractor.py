"""Method signature extraction from TypeScript syntax trees."""

from __future__ import annotations

import re
from dataclasses import dataclass

import tree_sitter

from nest_repl.logger import get_logger
from nest_repl.models import DEFAULT_PARAMETER_TYPE, LineRange, MethodInfo, Parameter
from nest_repl.parser.queries import METHOD_SHAPES, METHODS_QUERY, MethodShape
from nest_repl.parser.source_tree import SourceTree

logger = get_logger(__name__)

PARAMETER_KINDS = ("required_parameter", "optional_parameter")
SKIPPED_METHOD_NAMES = ("constructor",)
PRIVATE_PREFIX = "_"

_TYPE_PREFIX = re.compile(r"^:\s*")


@dataclass(frozen=True)
class MethodDefinitionNode:
    """``name(params) { ... }`` inside a class body."""

    node: tree_sitter.Node
    name: tree_sitter.Node
    params: tree_sitter.Node

    shape = MethodShape.METHOD_DEFINITION

    @property
    def function(self) -> tree_sitter.Node:
        return self.node


@dataclass(frozen=True)
class ArrowFieldNode:
    """``name = (params) => { ... }`` inside a class body."""

    node: tree_sitter.Node
    name: tree_sitter.Node
    params: tree_sitter.Node
    function: tree_sitter.Node

    shape = MethodShape.ARROW_FIELD


MatchedMethod = MethodDefinitionNode | ArrowFieldNode


def _node_key(node: tree_sitter.Node) -> tuple[int, int, str]:
    return node.start_byte, node.end_byte, node.type


def _intersects(node: tree_sitter.Node, start_row: int, end_row: int) -> bool:
    return node.start_point[0] <= end_row and node.end_point[0] >= start_row


def _collect_method_nodes(
    tree: SourceTree,
    query: tree_sitter.Query,
    start_row: int,
    end_row: int,
) -> list[tuple[MethodShape, tree_sitter.Node]]:
    """First pass: outer method nodes touching the row range, in source order."""
    found: dict[tuple[int, int, str], tuple[MethodShape, tree_sitter.Node]] = {}
    for pattern_index, captures in tree.matches(query):
        for node in captures.get("method", []):
            if _intersects(node, start_row, end_row):
                found.setdefault(_node_key(node), (METHOD_SHAPES[pattern_index], node))
    return sorted(found.values(), key=lambda item: item[1].start_byte)


def _scoped_match(
    tree: SourceTree,
    query: tree_sitter.Query,
    shape: MethodShape,
    node: tree_sitter.Node,
) -> MatchedMethod | None:
    """Second pass: re-run the query inside ``node`` only.

    Only the match rooted at ``node`` itself is used, so names and parameter
    lists of nested or sibling methods are never picked up.
    """
    key = _node_key(node)
    for pattern_index, captures in tree.matches(query, node):
        method_nodes = captures.get("method", [])
        if not method_nodes or _node_key(method_nodes[0]) != key:
            continue
        if METHOD_SHAPES[pattern_index] is not shape:
            continue

        name_nodes = captures.get("name", [])
        params_nodes = captures.get("params", [])
        if not name_nodes or not params_nodes:
            return None

        if shape is MethodShape.ARROW_FIELD:
            function_nodes = captures.get("function", [])
            if not function_nodes:
                return None
            return ArrowFieldNode(node, name_nodes[0], params_nodes[0], function_nodes[0])
        return MethodDefinitionNode(node, name_nodes[0], params_nodes[0])
    return None


def extract_parameters(
    tree: SourceTree,
    params_node: tree_sitter.Node,
    include_patterns: bool = False,
) -> tuple[Parameter, ...]:
    """Parameters declared in a ``formal_parameters`` node.

    Only ``required_parameter`` and ``optional_parameter`` children count.
    Destructured and rest parameters have no identifier child and are left
    out unless ``include_patterns`` is set, in which case they are named by
    their pattern text.
    """
    args: list[Parameter] = []
    for param in params_node.children:
        if param.type not in PARAMETER_KINDS:
            continue

        name: str | None = None
        param_type = DEFAULT_PARAMETER_TYPE
        for child in param.children:
            if child.type == "identifier":
                name = tree.node_text(child)
            elif child.type == "type_annotation":
                param_type = _TYPE_PREFIX.sub("", tree.node_text(child))

        if name is None:
            if not include_patterns:
                logger.debug("Skipping pattern parameter", text=tree.node_text(param))
                continue
            pattern = param.child_by_field_name("pattern")
            name = tree.node_text(pattern if pattern is not None else param)

        args.append(
            Parameter(
                name=name,
                type=param_type,
                optional=param.type == "optional_parameter",
            )
        )
    return tuple(args)


def is_async(function_node: tree_sitter.Node) -> bool:
    """Check for the ``async`` keyword on a method or arrow function."""
    return any(child.type == "async" for child in function_node.children)


def is_skipped_name(name: str) -> bool:
    """Constructors and underscore-prefixed members are never invocation targets."""
    return name in SKIPPED_METHOD_NAMES or name.startswith(PRIVATE_PREFIX)


def to_method_info(
    tree: SourceTree,
    matched: MatchedMethod,
    include_patterns: bool = False,
) -> MethodInfo | None:
    """Normalize a matched node into a MethodInfo, or None for skipped names."""
    name = tree.node_text(matched.name)
    if is_skipped_name(name):
        logger.debug("Skipping method", method=name)
        return None

    return MethodInfo(
        name=name,
        args=extract_parameters(tree, matched.params, include_patterns),
        line=matched.node.start_point[0] + 1,
        is_async=is_async(matched.function),
    )


def find_methods_in_range(
    tree: SourceTree,
    start_line: int,
    end_line: int,
    include_pattern_parameters: bool = False,
) -> list[MethodInfo]:
    """Methods and arrow-function fields touching ``[start_line, end_line]``.

    Lines are 1-based and inclusive; a reversed pair is reordered.
    """
    line_range = LineRange.ordered(start_line, end_line)

    query = tree.query(METHODS_QUERY)
    if query is None:
        return []

    methods: list[MethodInfo] = []
    for shape, node in _collect_method_nodes(
        tree, query, line_range.start_row, line_range.end_row
    ):
        matched = _scoped_match(tree, query, shape, node)
        if matched is None:
            continue
        info = to_method_info(tree, matched, include_pattern_parameters)
        if info is not None:
            methods.append(info)

    logger.debug(
        "Found methods in range",
        start_line=line_range.start_line,
        end_line=line_range.end_line,
        methods=[m.name for m in methods],
    )
    return methods
