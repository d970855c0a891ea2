"""Node-kind vocabulary and accessors for Tree-sitter syntax nodes.

The analysis core only needs a handful of things from a node: its kind
(``type``), its source text, its ordered children, its parent and its
position in the document.  Everything here reads those attributes without
mutating the tree, so any object exposing them works as a node.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, List, Optional, Tuple


class NodeKind(str, Enum):
    """Node kinds the query engine inspects; anything else is ``OTHER``."""

    PROGRAM = "program"
    CLASS_DECLARATION = "class_declaration"
    ABSTRACT_CLASS_DECLARATION = "abstract_class_declaration"
    CLASS_HERITAGE = "class_heritage"
    EXTENDS_CLAUSE = "extends_clause"
    CLASS_BODY = "class_body"
    METHOD_DEFINITION = "method_definition"
    FUNCTION_DECLARATION = "function_declaration"
    GENERATOR_FUNCTION_DECLARATION = "generator_function_declaration"
    LEXICAL_DECLARATION = "lexical_declaration"
    VARIABLE_DECLARATION = "variable_declaration"
    VARIABLE_DECLARATOR = "variable_declarator"
    ARROW_FUNCTION = "arrow_function"
    EXPORT_STATEMENT = "export_statement"
    IMPORT_STATEMENT = "import_statement"
    IMPORT_CLAUSE = "import_clause"
    NAMED_IMPORTS = "named_imports"
    IMPORT_SPECIFIER = "import_specifier"
    NAMESPACE_IMPORT = "namespace_import"
    STRING = "string"
    IDENTIFIER = "identifier"
    PROPERTY_IDENTIFIER = "property_identifier"
    TYPE_IDENTIFIER = "type_identifier"
    MEMBER_EXPRESSION = "member_expression"
    NESTED_IDENTIFIER = "nested_identifier"
    JSX_OPENING_ELEMENT = "jsx_opening_element"
    JSX_SELF_CLOSING_ELEMENT = "jsx_self_closing_element"
    OTHER = "other"

    @classmethod
    def of(cls, node: Any) -> "NodeKind":
        if node is None:
            return cls.OTHER
        try:
            return cls(getattr(node, "type", None))
        except ValueError:
            return cls.OTHER


def node_text(node: Any) -> str:
    text = getattr(node, "text", None)
    if text is None:
        return ""
    if isinstance(text, bytes):
        return text.decode("utf-8", errors="replace")
    return str(text)


def node_position(node: Any) -> Tuple[int, int]:
    """Return a sortable document position for *node*.

    Prefers ``start_byte``; falls back to ``start_point`` (row, column).
    """
    start_byte = getattr(node, "start_byte", None)
    if start_byte is not None:
        return (int(start_byte), 0)
    point = getattr(node, "start_point", None)
    if point is not None:
        return (int(point[0]), int(point[1]))
    return (0, 0)


def children(node: Any) -> List[Any]:
    return list(getattr(node, "children", None) or [])


def parent_kind(node: Any) -> NodeKind:
    return NodeKind.of(getattr(node, "parent", None))


def first_child_of_kind(node: Any, *kinds: NodeKind) -> Optional[Any]:
    for child in children(node):
        if NodeKind.of(child) in kinds:
            return child
    return None


def root_of(tree: Any) -> Optional[Any]:
    """Return the root node of *tree*, or ``None`` for a null/rootless tree.

    Accepts either a Tree-sitter ``Tree`` (anything with ``root_node``) or a
    node that is used directly as the root.
    """
    if tree is None:
        return None
    if hasattr(tree, "root_node"):
        return tree.root_node
    if hasattr(tree, "type"):
        return tree
    return None
