"""Tree-sitter parsing for JavaScript / TypeScript / JSX sources.

Builds one Tree-sitter parser per grammar from the installed per-language
packages (``tree-sitter-javascript``, ``tree-sitter-typescript``).  Tree-sitter
produces a *concrete syntax tree* and recovers from syntax errors, so a
partially broken file still yields a tree the analysis can walk.

Parsing never raises: every failure is reported through :class:`ParseResult`
with ``tree=None`` and a reason.
"""

from __future__ import annotations

import importlib
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Tuple

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Language <-> file-extension mapping
# ---------------------------------------------------------------------------
LANGUAGE_MAP: Dict[str, str] = {
    ".js": "javascript",
    ".jsx": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
    ".ts": "typescript",
    ".mts": "typescript",
    ".cts": "typescript",
    ".tsx": "tsx",
}

# Map language name -> (module, function returning the Language capsule)
_GRAMMAR_MODULES: Dict[str, Tuple[str, str]] = {
    "javascript": ("tree_sitter_javascript", "language"),
    "typescript": ("tree_sitter_typescript", "language_typescript"),
    "tsx": ("tree_sitter_typescript", "language_tsx"),
}


@dataclass
class ParseResult:
    tree: Optional[Any] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.tree is not None


class SourceParser:
    """Error-tolerant parser for the JS/TS family built on Tree-sitter."""

    def __init__(self, languages: Optional[Iterable[str]] = None) -> None:
        self._parsers: Dict[str, Any] = {}
        self._requested_languages = list(languages or _GRAMMAR_MODULES)
        self._init_parsers()

    # ------------------------------------------------------------------
    # Initialisation
    # ------------------------------------------------------------------

    def _init_parsers(self) -> None:
        from tree_sitter import Language, Parser as TSParser

        for lang in self._requested_languages:
            grammar = _GRAMMAR_MODULES.get(lang)
            if grammar is None:
                logger.warning("No grammar module mapped for language '%s'", lang)
                continue
            mod_name, factory = grammar
            try:
                mod = importlib.import_module(mod_name)
                ts_lang = Language(getattr(mod, factory)())
                self._parsers[lang] = TSParser(ts_lang)
                logger.debug("Loaded tree-sitter parser for %s", lang)
            except ImportError:
                logger.warning(
                    "Grammar package '%s' not installed for language '%s'. "
                    "Install with: pip install %s",
                    mod_name, lang, mod_name.replace("_", "-"),
                )
            except (AttributeError, TypeError, ValueError) as exc:
                logger.warning("Could not load tree-sitter grammar for %s: %s", lang, exc)

    def supports_language(self, language: str) -> bool:
        return language in self._parsers

    @staticmethod
    def language_for(file_path: Path) -> Optional[str]:
        return LANGUAGE_MAP.get(Path(file_path).suffix.lower())

    # ------------------------------------------------------------------
    # Parsing
    # ------------------------------------------------------------------

    def parse_source(self, source: str, language: str) -> ParseResult:
        parser = self._parsers.get(language)
        if parser is None:
            return ParseResult(error=f"no parser available for language '{language}'")
        tree = parser.parse(source.encode("utf-8"))
        if tree is None or tree.root_node is None:
            return ParseResult(error="parser returned no tree")
        if tree.root_node.has_error:
            logger.debug("Syntax errors recovered while parsing %s source", language)
        return ParseResult(tree=tree)

    def parse_file(self, file_path: Path, source: Optional[str] = None) -> ParseResult:
        file_path = Path(file_path)
        language = self.language_for(file_path)
        if language is None:
            return ParseResult(error=f"unsupported file type '{file_path.suffix}'")

        if source is None:
            try:
                source = file_path.read_text(encoding="utf-8", errors="ignore")
            except OSError as exc:
                logger.warning("Could not read %s: %s", file_path, exc)
                return ParseResult(error=str(exc))

        result = self.parse_source(source, language)
        if not result.ok:
            logger.warning("Could not parse %s: %s", file_path, result.error)
        return result
