"""Detect UI component declarations in a parsed source file.

Detection runs four passes in a fixed order, each appending to the same
list:

1. class declarations that extend a known base component or define a
   lifecycle method,
2. every named function declaration,
3. every top-level variable bound to an arrow function,
4. only when nothing was found so far: the first export's declared name,
   or the capitalized file name.

Passes are not deduplicated against each other.  Function and arrow
detection accept every candidate; precision is traded for recall.
"""

from __future__ import annotations

import logging
from pathlib import PurePosixPath
from typing import Any, FrozenSet, List, Optional

from . import config
from .classifier import classify_path
from .models import Capture, Component
from .query_engine import (
    ROLE_METHOD_NAME,
    ROLE_NAME,
    ROLE_SUPERCLASS,
    Pattern,
    QueryEngine,
    first_text,
    group_captures,
    texts,
)

logger = logging.getLogger(__name__)


def component_name_from_path(file_path: str) -> str:
    """``src/hooks/useAuth.ts`` -> ``UseAuth``."""
    stem = PurePosixPath(str(file_path).replace("\\", "/")).stem
    return stem[:1].upper() + stem[1:]


def synthesize_component(file_path: str) -> Component:
    """Build the placeholder component for a file with no detected declaration."""
    return Component(
        name=component_name_from_path(file_path),
        type=classify_path(file_path),
        synthetic=True,
    )


class ComponentDetector:
    """Find component-like declarations using :class:`QueryEngine` patterns."""

    def __init__(
        self,
        engine: Optional[QueryEngine] = None,
        base_markers: Optional[FrozenSet[str]] = None,
        lifecycle_markers: Optional[FrozenSet[str]] = None,
    ) -> None:
        self.engine = engine or QueryEngine()
        self.base_markers = base_markers if base_markers is not None else config.BASE_COMPONENT_MARKERS
        self.lifecycle_markers = (
            lifecycle_markers if lifecycle_markers is not None else config.LIFECYCLE_MARKERS
        )

    def detect(self, tree: Any, file_path: str) -> List[Component]:
        component_type = classify_path(file_path)
        names: List[str] = []

        names.extend(self._class_components(tree))
        names.extend(self._function_components(tree))
        names.extend(self._arrow_function_components(tree))

        components = [Component(name=name, type=component_type) for name in names]
        if not components:
            components.append(self._default_export_component(tree, file_path))

        logger.info(
            "Components detected in %s: %s",
            file_path, ", ".join(c.name for c in components),
        )
        return components

    # ------------------------------------------------------------------
    # Passes
    # ------------------------------------------------------------------

    def _class_components(self, tree: Any) -> List[str]:
        captures = self.engine.execute(tree, Pattern.CLASS_WITH_MEMBERS)
        names: List[str] = []
        for group in group_captures(captures):
            name = first_text(group, ROLE_NAME)
            if not name:
                continue
            if self._looks_like_class_component(group):
                logger.debug("Class component detected: %s", name)
                names.append(name)
            else:
                logger.debug("Class %s has no component markers, skipping", name)
        return names

    def _looks_like_class_component(self, group: List[Capture]) -> bool:
        superclass = first_text(group, ROLE_SUPERCLASS)
        if superclass is not None and "".join(superclass.split()) in self.base_markers:
            return True
        return any(method in self.lifecycle_markers for method in texts(group, ROLE_METHOD_NAME))

    def _function_components(self, tree: Any) -> List[str]:
        captures = self.engine.execute(tree, Pattern.FUNCTION_DECLARATION)
        names = [first_text(group, ROLE_NAME) for group in group_captures(captures)]
        return [name for name in names if name]

    def _arrow_function_components(self, tree: Any) -> List[str]:
        captures = self.engine.execute(tree, Pattern.ARROW_FUNCTION_VARIABLE)
        names: List[str] = []
        for group in group_captures(captures):
            names.extend(name for name in texts(group, ROLE_NAME) if name)
        return names

    def _default_export_component(self, tree: Any, file_path: str) -> Component:
        captures = self.engine.execute(tree, Pattern.EXPORT_STATEMENT)
        for group in group_captures(captures):
            name = first_text(group, ROLE_NAME)
            if name:
                logger.debug("Using exported declaration %s as component", name)
                return Component(name=name, type=classify_path(file_path))

        component = synthesize_component(file_path)
        logger.debug("Using file name as component: %s", component.name)
        return component
