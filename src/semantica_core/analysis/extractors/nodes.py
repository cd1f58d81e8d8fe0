"""Syntax-tree traversal helpers shared by the tree extractors.

All traversals are iterative so that deeply nested sources cannot exhaust
the interpreter's recursion limit. Pre-order is preserved everywhere:
results come back in document order.
"""

from typing import Callable, Iterable, Iterator, List, Optional

from tree_sitter import Node

ARGUMENT_PUNCTUATION = frozenset({",", "(", ")"})


def node_text(node: Optional[Node], source: bytes) -> str:
    """Return the source text spanned by a node, or "" for None."""
    if node is None:
        return ""
    return source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")


def name_text(node: Optional[Node], source: bytes) -> str:
    """Stripped text of a name node.

    Returns "" for None and for the zero-width nodes the parser inserts
    when recovering from an error, so callers can skip the candidate with
    a single truthiness check.
    """
    if node is None or node.is_missing:
        return ""
    return node_text(node, source).strip()


def start_line(node: Node) -> int:
    """1-based start line."""
    return node.start_point[0] + 1


def end_line(node: Node) -> int:
    """1-based end line."""
    return node.end_point[0] + 1


def walk_tree(root: Node) -> Iterator[Node]:
    """Yield every node under root (root included) in pre-order."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def find_nodes(root: Node, types: Iterable[str]) -> List[Node]:
    """Collect all nodes whose type is in types, root included.

    Matching does not stop descent: a match nested inside another match is
    returned as well.
    """
    wanted = frozenset(types)
    return [node for node in walk_tree(root) if node.type in wanted]


def find_child_by_type(node: Node, node_type: str) -> Optional[Node]:
    """First direct child of the given type."""
    for child in node.children:
        if child.type == node_type:
            return child
    return None


def find_children_by_type(node: Node, node_type: str) -> List[Node]:
    """All direct children of the given type."""
    return [child for child in node.children if child.type == node_type]


def first_child_of_types(node: Node, types: Iterable[str]) -> Optional[Node]:
    """First direct child whose type is one of types, in the order given.

    The preference order is the order of types, not the order of children.
    """
    for node_type in types:
        child = find_child_by_type(node, node_type)
        if child is not None:
            return child
    return None


def find_ancestor(node: Node, predicate: Callable[[Node], bool]) -> Optional[Node]:
    """Nearest strict ancestor satisfying predicate."""
    current = node.parent
    while current is not None:
        if predicate(current):
            return current
        current = current.parent
    return None


def has_child_token(node: Node, source: bytes, token: str) -> bool:
    """Check for a direct child whose text equals token (e.g. "async")."""
    return any(node_text(child, source) == token for child in node.children)


def count_arguments(arguments: Optional[Node]) -> int:
    """Number of argument-list children other than "," "(" and ")"."""
    if arguments is None:
        return 0
    return sum(1 for child in arguments.children if child.type not in ARGUMENT_PUNCTUATION)


def strip_quotes(text: str) -> str:
    """Remove surrounding quote characters of any kind."""
    return text.strip("\"'`")


__all__ = [
    "ARGUMENT_PUNCTUATION",
    "node_text",
    "name_text",
    "start_line",
    "end_line",
    "walk_tree",
    "find_nodes",
    "find_child_by_type",
    "find_children_by_type",
    "first_child_of_types",
    "find_ancestor",
    "has_child_token",
    "count_arguments",
    "strip_quotes",
]
