"""Core data models shared by the query engine, detector, resolver and reports."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass(frozen=True)
class Capture:
    """A matched syntax node labelled with its role and pattern occurrence."""

    node: Any
    role: str
    pattern_occurrence: int


@dataclass(frozen=True)
class ImportBinding:
    name: str
    source: str

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.name, "source": self.source}


@dataclass
class Component:
    name: str
    type: str = "other"
    imports: List[ImportBinding] = field(default_factory=list)
    # Derived from the file name rather than a declaration
    synthetic: bool = False

    def add_import(self, binding: ImportBinding) -> bool:
        """Append *binding* unless an identical ``(name, source)`` is present."""
        if binding in self.imports:
            return False
        self.imports.append(binding)
        return True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "type": self.type,
            "imports": [binding.to_dict() for binding in self.imports],
        }


@dataclass
class FileReport:
    path: str
    components: List[Component] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "path": self.path,
            "components": [component.to_dict() for component in self.components],
        }


@dataclass
class ProjectReport:
    files: List[FileReport] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"files": [report.to_dict() for report in self.files]}

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    @property
    def component_count(self) -> int:
        return sum(len(report.components) for report in self.files)
