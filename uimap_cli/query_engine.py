"""Structural pattern queries over Tree-sitter syntax trees.

The engine knows a fixed vocabulary of patterns (:class:`Pattern`).  Each
pattern is compiled once into a :class:`PatternSpec`: the node kinds it
anchors on, the role of the anchor capture, and an extraction rule that
pulls the secondary structure (names, sources, tags...) out of a matched
node.  Running a pattern is a depth-first pre-order walk that tests every
node against the anchor kinds and keeps descending whether or not the node
matched, so every occurrence in the file is reported.

Each primary match opens a new *pattern occurrence*; all captures produced
by that match share its id, which lets callers regroup multi-capture
matches with :func:`group_captures`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, FrozenSet, List, Optional, Tuple, Union

from .models import Capture
from .syntax import (
    NodeKind,
    children,
    first_child_of_kind,
    node_position,
    node_text,
    root_of,
)

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Capture roles
# ---------------------------------------------------------------------------
ROLE_CLASS = "class"
ROLE_FUNCTION = "function"
ROLE_DECLARATION = "declaration"
ROLE_EXPORT = "export"
ROLE_IMPORT = "import"
ROLE_ELEMENT = "element"
ROLE_NAME = "name"
ROLE_SUPERCLASS = "superclass"
ROLE_METHOD_NAME = "method_name"
ROLE_SOURCE = "source"
ROLE_TAG = "tag"

# (node, role) pairs produced by an extraction rule; ``None`` means no match
Extracted = Optional[List[Tuple[Any, str]]]
ExtractRule = Callable[[Any, Optional[Any]], Extracted]


class Pattern(str, Enum):
    """The fixed set of structural queries the engine understands."""

    CLASS_WITH_MEMBERS = "class_with_members"
    FUNCTION_DECLARATION = "function_declaration"
    ARROW_FUNCTION_VARIABLE = "arrow_function_variable"
    EXPORT_STATEMENT = "export_statement"
    IMPORT_STATEMENT = "import_statement"
    JSX_OPENING_TAG = "jsx_opening_tag"

    @classmethod
    def parse(cls, value: Union["Pattern", str, None]) -> Optional["Pattern"]:
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return None


@dataclass(frozen=True)
class PatternSpec:
    pattern: Pattern
    anchor_kinds: FrozenSet[NodeKind]
    primary_role: str
    extract: ExtractRule


@dataclass
class QueryResult:
    captures: List[Capture] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


# ===================================================================
# Extraction rules
# ===================================================================

_DECLARATION_KINDS = frozenset({
    NodeKind.CLASS_DECLARATION,
    NodeKind.ABSTRACT_CLASS_DECLARATION,
    NodeKind.FUNCTION_DECLARATION,
    NodeKind.GENERATOR_FUNCTION_DECLARATION,
    NodeKind.LEXICAL_DECLARATION,
    NodeKind.VARIABLE_DECLARATION,
})

_TOP_LEVEL_PARENTS = frozenset({NodeKind.PROGRAM, NodeKind.EXPORT_STATEMENT})


def _superclass_of(heritage: Any) -> Optional[Any]:
    """Return the ``extends`` expression of a JS ``class_heritage`` or TS clause."""
    for child in children(heritage):
        kind = NodeKind.of(child)
        if kind is NodeKind.EXTENDS_CLAUSE:
            return _superclass_of(child)
        if kind in (NodeKind.IDENTIFIER, NodeKind.MEMBER_EXPRESSION):
            return child
    return None


def _extract_class(node: Any, parent: Optional[Any]) -> Extracted:
    name = first_child_of_kind(node, NodeKind.IDENTIFIER, NodeKind.TYPE_IDENTIFIER)
    if name is None:
        return None
    found: List[Tuple[Any, str]] = [(name, ROLE_NAME)]
    for child in children(node):
        kind = NodeKind.of(child)
        if kind is NodeKind.CLASS_HERITAGE:
            superclass = _superclass_of(child)
            if superclass is not None:
                found.append((superclass, ROLE_SUPERCLASS))
        elif kind is NodeKind.CLASS_BODY:
            for member in children(child):
                if NodeKind.of(member) is not NodeKind.METHOD_DEFINITION:
                    continue
                method_name = first_child_of_kind(member, NodeKind.PROPERTY_IDENTIFIER)
                if method_name is not None:
                    found.append((method_name, ROLE_METHOD_NAME))
    return found


def _extract_function(node: Any, parent: Optional[Any]) -> Extracted:
    name = first_child_of_kind(node, NodeKind.IDENTIFIER)
    if name is None:
        return None
    return [(name, ROLE_NAME)]


def _arrow_declarator_name(declarator: Any) -> Optional[Any]:
    if first_child_of_kind(declarator, NodeKind.ARROW_FUNCTION) is None:
        return None
    return first_child_of_kind(declarator, NodeKind.IDENTIFIER)


def _extract_arrow_variables(node: Any, parent: Optional[Any]) -> Extracted:
    # Only top-level declarations (directly in the program or an export)
    if parent is not None and NodeKind.of(parent) not in _TOP_LEVEL_PARENTS:
        return None
    found: List[Tuple[Any, str]] = []
    for declarator in children(node):
        if NodeKind.of(declarator) is not NodeKind.VARIABLE_DECLARATOR:
            continue
        name = _arrow_declarator_name(declarator)
        if name is not None:
            found.append((name, ROLE_NAME))
    return found or None


def _declared_name(declaration: Any) -> Optional[Any]:
    if NodeKind.of(declaration) in (NodeKind.LEXICAL_DECLARATION, NodeKind.VARIABLE_DECLARATION):
        declarator = first_child_of_kind(declaration, NodeKind.VARIABLE_DECLARATOR)
        if declarator is None:
            return None
        return first_child_of_kind(declarator, NodeKind.IDENTIFIER)
    return first_child_of_kind(declaration, NodeKind.IDENTIFIER, NodeKind.TYPE_IDENTIFIER)


def _extract_export(node: Any, parent: Optional[Any]) -> Extracted:
    found: List[Tuple[Any, str]] = []
    for child in children(node):
        kind = NodeKind.of(child)
        if kind in _DECLARATION_KINDS:
            found.append((child, ROLE_DECLARATION))
            name = _declared_name(child)
            if name is not None:
                found.append((name, ROLE_NAME))
            break
        if kind is NodeKind.IDENTIFIER:
            # export default Foo;
            found.append((child, ROLE_DECLARATION))
            found.append((child, ROLE_NAME))
            break
    return found


def _specifier_local_name(specifier: Any) -> Optional[Any]:
    """``{ a }`` binds ``a``; ``{ a as b }`` binds ``b``."""
    identifiers = [c for c in children(specifier) if NodeKind.of(c) is NodeKind.IDENTIFIER]
    return identifiers[-1] if identifiers else None


def _extract_import(node: Any, parent: Optional[Any]) -> Extracted:
    found: List[Tuple[Any, str]] = []
    for child in children(node):
        kind = NodeKind.of(child)
        if kind is NodeKind.STRING:
            found.append((child, ROLE_SOURCE))
        elif kind is NodeKind.IMPORT_CLAUSE:
            for clause_child in children(child):
                clause_kind = NodeKind.of(clause_child)
                if clause_kind is NodeKind.IDENTIFIER:
                    found.append((clause_child, ROLE_NAME))
                elif clause_kind is NodeKind.NAMESPACE_IMPORT:
                    alias = first_child_of_kind(clause_child, NodeKind.IDENTIFIER)
                    if alias is not None:
                        found.append((alias, ROLE_NAME))
                elif clause_kind is NodeKind.NAMED_IMPORTS:
                    for specifier in children(clause_child):
                        if NodeKind.of(specifier) is not NodeKind.IMPORT_SPECIFIER:
                            continue
                        local = _specifier_local_name(specifier)
                        if local is not None:
                            found.append((local, ROLE_NAME))
    return found


def _tag_root_identifier(name_node: Any) -> Optional[Any]:
    """``<Icons.Star>`` is attributed to ``Icons``."""
    current = name_node
    while NodeKind.of(current) in (NodeKind.MEMBER_EXPRESSION, NodeKind.NESTED_IDENTIFIER):
        inner = children(current)
        if not inner:
            return None
        current = inner[0]
    if NodeKind.of(current) is NodeKind.IDENTIFIER:
        return current
    return None


def _extract_jsx_tag(node: Any, parent: Optional[Any]) -> Extracted:
    for child in children(node):
        kind = NodeKind.of(child)
        if kind is NodeKind.IDENTIFIER:
            return [(child, ROLE_TAG)]
        if kind in (NodeKind.MEMBER_EXPRESSION, NodeKind.NESTED_IDENTIFIER):
            root = _tag_root_identifier(child)
            return [(root, ROLE_TAG)] if root is not None else []
    # Fragments (<>...</>) have no tag name
    return []


def _build_specs() -> Dict[Pattern, PatternSpec]:
    specs = [
        PatternSpec(
            Pattern.CLASS_WITH_MEMBERS,
            frozenset({NodeKind.CLASS_DECLARATION, NodeKind.ABSTRACT_CLASS_DECLARATION}),
            ROLE_CLASS,
            _extract_class,
        ),
        PatternSpec(
            Pattern.FUNCTION_DECLARATION,
            frozenset({NodeKind.FUNCTION_DECLARATION, NodeKind.GENERATOR_FUNCTION_DECLARATION}),
            ROLE_FUNCTION,
            _extract_function,
        ),
        PatternSpec(
            Pattern.ARROW_FUNCTION_VARIABLE,
            frozenset({NodeKind.LEXICAL_DECLARATION, NodeKind.VARIABLE_DECLARATION}),
            ROLE_DECLARATION,
            _extract_arrow_variables,
        ),
        PatternSpec(
            Pattern.EXPORT_STATEMENT,
            frozenset({NodeKind.EXPORT_STATEMENT}),
            ROLE_EXPORT,
            _extract_export,
        ),
        PatternSpec(
            Pattern.IMPORT_STATEMENT,
            frozenset({NodeKind.IMPORT_STATEMENT}),
            ROLE_IMPORT,
            _extract_import,
        ),
        PatternSpec(
            Pattern.JSX_OPENING_TAG,
            frozenset({NodeKind.JSX_OPENING_ELEMENT, NodeKind.JSX_SELF_CLOSING_ELEMENT}),
            ROLE_ELEMENT,
            _extract_jsx_tag,
        ),
    ]
    return {spec.pattern: spec for spec in specs}


PATTERN_SPECS: Dict[Pattern, PatternSpec] = _build_specs()


# ===================================================================
# Engine
# ===================================================================

class QueryEngine:
    """Runs compiled :class:`PatternSpec` queries against syntax trees."""

    def __init__(self, specs: Optional[Dict[Pattern, PatternSpec]] = None) -> None:
        self._specs = specs if specs is not None else PATTERN_SPECS

    def execute(self, tree: Any, pattern: Union[Pattern, str]) -> List[Capture]:
        """Return the captures of *pattern* in *tree*, in document order."""
        return self.run(tree, pattern).captures

    def run(self, tree: Any, pattern: Union[Pattern, str]) -> QueryResult:
        parsed = Pattern.parse(pattern)
        spec = self._specs.get(parsed) if parsed is not None else None
        if spec is None:
            logger.warning("Unknown query pattern %r", pattern)
            return QueryResult(error=f"unknown pattern: {pattern!r}")

        root = root_of(tree)
        if root is None:
            logger.warning("No syntax tree to run '%s' against", spec.pattern.value)
            return QueryResult(error="no syntax tree")

        try:
            captures = self._walk(root, spec)
        except Exception as exc:
            logger.error("Query '%s' failed on malformed tree: %s", spec.pattern.value, exc)
            return QueryResult(error=str(exc))

        logger.debug("Query '%s' produced %d captures", spec.pattern.value, len(captures))
        return QueryResult(captures=captures)

    @staticmethod
    def _walk(root: Any, spec: PatternSpec) -> List[Capture]:
        emitted: List[Capture] = []
        occurrence = -1
        stack: List[Tuple[Any, Optional[Any]]] = [(root, None)]
        while stack:
            node, parent = stack.pop()
            if NodeKind.of(node) in spec.anchor_kinds:
                secondary = spec.extract(node, parent)
                if secondary is not None:
                    occurrence += 1
                    emitted.append(Capture(node, spec.primary_role, occurrence))
                    emitted.extend(Capture(n, role, occurrence) for n, role in secondary)
            stack.extend((child, node) for child in reversed(children(node)))

        # Secondary captures are gathered eagerly at their anchor; a stable
        # sort restores document order (anchors stay ahead of their contents).
        return sorted(emitted, key=lambda capture: node_position(capture.node))


# ===================================================================
# Capture grouping
# ===================================================================

def group_captures(captures: List[Capture]) -> List[List[Capture]]:
    """Partition *captures* by pattern occurrence, keeping document order."""
    groups: Dict[int, List[Capture]] = {}
    for capture in captures:
        groups.setdefault(capture.pattern_occurrence, []).append(capture)
    return list(groups.values())


def texts(group: List[Capture], role: str) -> List[str]:
    return [node_text(capture.node) for capture in group if capture.role == role]


def first_text(group: List[Capture], role: str) -> Optional[str]:
    for capture in group:
        if capture.role == role:
            return node_text(capture.node)
    return None
