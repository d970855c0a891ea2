"""Source-file discovery and archive extraction."""

from __future__ import annotations

import logging
import shutil
import tempfile
import zipfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterable, Iterator, List, Optional

from . import config

logger = logging.getLogger(__name__)


def _is_skipped(relative: Path, skip_dirs: Iterable[str]) -> bool:
    skip = set(skip_dirs)
    for part in relative.parts[:-1]:
        if part in skip or part.startswith("."):
            return True
    return False


def find_source_files(
    root: Path,
    extensions: Optional[Iterable[str]] = None,
    skip_dirs: Optional[Iterable[str]] = None,
) -> List[Path]:
    """Return every source file under *root*, sorted by path.

    Raises:
        FileNotFoundError: *root* does not exist.
        NotADirectoryError: *root* is not a directory.
    """
    root = Path(root)
    if not root.exists():
        raise FileNotFoundError(f"Project path does not exist: {root}")
    if not root.is_dir():
        raise NotADirectoryError(f"Project path is not a directory: {root}")

    wanted = {ext.lower() for ext in (extensions if extensions is not None else config.SOURCE_EXTENSIONS)}
    skipped = set(skip_dirs if skip_dirs is not None else config.SKIP_DIRS)

    files: List[Path] = []
    for file_path in sorted(root.rglob("*")):
        if not file_path.is_file() or file_path.suffix.lower() not in wanted:
            continue
        if _is_skipped(file_path.relative_to(root), skipped):
            continue
        files.append(file_path)

    logger.info("Found %d source files under %s", len(files), root)
    return files


def _safe_extract(archive: zipfile.ZipFile, target: Path) -> None:
    target_resolved = target.resolve()
    for member in archive.infolist():
        destination = (target / member.filename).resolve()
        if destination != target_resolved and target_resolved not in destination.parents:
            raise ValueError(f"Archive member escapes extraction directory: {member.filename}")
    archive.extractall(target)


@contextmanager
def extracted_archive(zip_path: Path) -> Iterator[Path]:
    """Extract *zip_path* into a temporary directory, removed on exit."""
    zip_path = Path(zip_path)
    extract_dir = Path(tempfile.mkdtemp(prefix="uimap_"))
    try:
        logger.info("Extracting %s to %s", zip_path, extract_dir)
        with zipfile.ZipFile(zip_path) as archive:
            _safe_extract(archive, extract_dir)
        yield extract_dir
    finally:
        shutil.rmtree(extract_dir, ignore_errors=True)
        logger.debug("Removed temporary directory %s", extract_dir)
