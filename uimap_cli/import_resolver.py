"""Attach import bindings to the components detected in a file.

Bindings are collected per file (not per scope): every component in a file
is offered the same candidates and keeps the ones it plausibly depends on:

- bindings named after a framework identifier (``React``, ``Component``),
- the binding that shares the component's own name,
- bindings used as a capitalized JSX tag anywhere in the file.

This over-approximates real lexical scoping: a tag rendered by one
component is attributed to every component in the same file.
"""

from __future__ import annotations

import logging
from typing import Any, FrozenSet, Iterable, List, Optional, Sequence

from . import config
from .models import Capture, Component, ImportBinding
from .query_engine import ROLE_NAME, ROLE_SOURCE, ROLE_TAG, Pattern, QueryEngine, group_captures
from .syntax import NodeKind, node_text, parent_kind

logger = logging.getLogger(__name__)

_QUOTES = "'\"`"

# Parent kinds of an import ``name`` capture, per binding style
_DEFAULT_BINDING_PARENTS = frozenset({NodeKind.IMPORT_CLAUSE, NodeKind.NAMESPACE_IMPORT})
_NAMED_BINDING_PARENTS = frozenset({NodeKind.IMPORT_SPECIFIER})


def strip_quotes(literal: str) -> str:
    return literal.strip().strip(_QUOTES)


def _collect_bindings(captures: Sequence[Capture], parents: FrozenSet[NodeKind]) -> List[ImportBinding]:
    bindings: List[ImportBinding] = []
    for group in group_captures(list(captures)):
        source: Optional[str] = None
        for capture in group:
            if capture.role == ROLE_SOURCE:
                source = strip_quotes(node_text(capture.node))
                break
        if source is None:
            continue
        for capture in group:
            if capture.role == ROLE_NAME and parent_kind(capture.node) in parents:
                bindings.append(ImportBinding(name=node_text(capture.node), source=source))
    return bindings


def collect_default_imports(captures: Sequence[Capture]) -> List[ImportBinding]:
    """``import React from 'react'`` and ``import * as api from './api'``."""
    return _collect_bindings(captures, _DEFAULT_BINDING_PARENTS)


def collect_named_imports(captures: Sequence[Capture]) -> List[ImportBinding]:
    """``import { Icon, Badge as B } from './ui'`` -> ``Icon``, ``B``."""
    return _collect_bindings(captures, _NAMED_BINDING_PARENTS)


def collect_jsx_tags(captures: Sequence[Capture]) -> List[str]:
    """Capitalized JSX tag names in order of first use."""
    seen: List[str] = []
    for capture in captures:
        if capture.role != ROLE_TAG:
            continue
        tag = node_text(capture.node)
        if tag[:1].isupper() and tag not in seen:
            seen.append(tag)
    return seen


def attribute_imports(
    component: Component,
    bindings: Sequence[ImportBinding],
    used_tags: Iterable[str],
    framework_identifiers: Iterable[str],
) -> int:
    """Append the bindings *component* depends on; return how many were added."""
    wanted: List[str] = list(framework_identifiers) + [component.name] + list(used_tags)
    added = 0
    for name in wanted:
        for binding in bindings:
            if binding.name == name and component.add_import(binding):
                added += 1
    return added


class ImportResolver:
    """Resolve import bindings in a tree and attribute them to components."""

    def __init__(
        self,
        engine: Optional[QueryEngine] = None,
        framework_identifiers: Optional[Sequence[str]] = None,
    ) -> None:
        self.engine = engine or QueryEngine()
        self.framework_identifiers = tuple(
            framework_identifiers if framework_identifiers is not None else config.FRAMEWORK_IDENTIFIERS
        )

    def bindings(self, tree: Any) -> List[ImportBinding]:
        """All import bindings of the file: default imports first, then named."""
        captures = self.engine.execute(tree, Pattern.IMPORT_STATEMENT)
        return collect_default_imports(captures) + collect_named_imports(captures)

    def used_tags(self, tree: Any) -> List[str]:
        return collect_jsx_tags(self.engine.execute(tree, Pattern.JSX_OPENING_TAG))

    def resolve(self, tree: Any, components: List[Component]) -> None:
        """Mutate *components* in place, appending the imports each one uses."""
        bindings = self.bindings(tree)
        if not bindings:
            return
        used_tags = self.used_tags(tree)

        for component in components:
            if component.synthetic:
                continue
            added = attribute_imports(component, bindings, used_tags, self.framework_identifiers)
            logger.debug("Component %s: %d imports attributed", component.name, added)
