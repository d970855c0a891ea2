"""Project-level analysis: detect components and their imports file by file."""

from __future__ import annotations

import logging
import zipfile
from pathlib import Path
from typing import Any, Iterable, Optional, Tuple, Union

from .component_detector import ComponentDetector, synthesize_component
from .import_resolver import ImportResolver
from .models import FileReport, ProjectReport
from .parser import SourceParser
from .query_engine import QueryEngine
from .sources import extracted_archive, find_source_files
from .syntax import root_of

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class ProjectListingError(RuntimeError):
    """The list of files to analyze could not be obtained."""


class ProjectAnalyzer:
    """Runs detection and import resolution over every file of a project.

    Files are processed sequentially in the order given.  A file that cannot
    be parsed or analyzed is reported with no components; it never aborts
    the run.
    """

    def __init__(
        self,
        parser: Optional[SourceParser] = None,
        detector: Optional[ComponentDetector] = None,
        resolver: Optional[ImportResolver] = None,
    ) -> None:
        engine = QueryEngine()
        self._parser = parser
        self.detector = detector or ComponentDetector(engine)
        self.resolver = resolver or ImportResolver(engine)

    @property
    def parser(self) -> SourceParser:
        if self._parser is None:
            self._parser = SourceParser()
        return self._parser

    # ------------------------------------------------------------------
    # Per file
    # ------------------------------------------------------------------

    def analyze_file(self, file_path: str, tree: Optional[Any]) -> FileReport:
        if root_of(tree) is None:
            logger.error("No syntax tree for %s, skipping", file_path)
            return FileReport(path=file_path)

        try:
            components = self.detector.detect(tree, file_path)
            self.resolver.resolve(tree, components)
        except Exception as exc:
            logger.error("Failed to analyze %s: %s", file_path, exc)
            return FileReport(path=file_path)

        if not components:
            components = [synthesize_component(file_path)]
        return FileReport(path=file_path, components=components)

    # ------------------------------------------------------------------
    # Project
    # ------------------------------------------------------------------

    def analyze_trees(self, files: Iterable[Tuple[str, Optional[Any]]]) -> ProjectReport:
        """Analyze already-parsed ``(file_path, tree)`` pairs."""
        report = ProjectReport()
        for file_path, tree in files:
            report.files.append(self.analyze_file(file_path, tree))
        logger.info(
            "Analyzed %d files, %d components", len(report.files), report.component_count,
        )
        return report

    def analyze_project(
        self,
        file_list: Iterable[PathLike],
        root: Optional[PathLike] = None,
    ) -> ProjectReport:
        """Parse and analyze every file in *file_list*.

        Report paths are made relative to *root* when given.
        """
        return self.analyze_trees(self._parsed(file_list, root))

    def _parsed(
        self,
        file_list: Iterable[PathLike],
        root: Optional[PathLike],
    ) -> Iterable[Tuple[str, Optional[Any]]]:
        for file_path in file_list:
            result = self.parser.parse_file(Path(file_path))
            yield _report_path(file_path, root), result.tree

    def analyze_directory(self, root: PathLike) -> ProjectReport:
        root = Path(root)
        try:
            files = find_source_files(root)
        except OSError as exc:
            raise ProjectListingError(str(exc)) from exc
        return self.analyze_project(files, root=root)

    def analyze_archive(self, zip_path: PathLike) -> ProjectReport:
        """Extract a ``.zip`` project to a temporary directory and analyze it."""
        try:
            with extracted_archive(Path(zip_path)) as extract_dir:
                return self.analyze_directory(extract_dir)
        except (OSError, zipfile.BadZipFile, ValueError) as exc:
            raise ProjectListingError(f"Could not read archive {zip_path}: {exc}") from exc

    def analyze_path(self, path: PathLike) -> ProjectReport:
        path = Path(path)
        if path.is_file() and path.suffix.lower() == ".zip":
            return self.analyze_archive(path)
        return self.analyze_directory(path)


def _report_path(file_path: PathLike, root: Optional[PathLike]) -> str:
    path = Path(file_path)
    if root is not None:
        try:
            path = path.relative_to(Path(root))
        except ValueError:
            pass
    return path.as_posix()
