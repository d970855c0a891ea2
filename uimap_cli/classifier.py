"""Classify source files by their path into a short role tag."""

from __future__ import annotations

from pathlib import PurePosixPath
from typing import Callable, List, Tuple

DEFAULT_TYPE = "other"

# Directory segment -> tag, checked in order
DIRECTORY_TYPES: List[Tuple[Tuple[str, ...], str]] = [
    (("hooks",), "hook"),
    (("pages",), "page"),
    (("components",), "component"),
    (("services",), "service"),
    (("utils", "helpers"), "util"),
    (("contexts",), "context"),
    (("store",), "store"),
]

TEST_MARKERS = (".test.", ".spec.")
TEST_DIRS = {"__tests__", "__test__"}

CONFIG_FILENAMES = {
    "package.json",
    "package-lock.json",
    "tsconfig.json",
    "jsconfig.json",
    "babel.config.js",
    ".babelrc",
    ".browserslistrc",
    ".editorconfig",
    ".env",
    ".gitignore",
    ".npmrc",
    "yarn.lock",
    "pnpm-lock.yaml",
}
CONFIG_PREFIXES = (".eslintrc", ".prettierrc", ".stylelintrc")
CONFIG_SUFFIXES = (
    ".config.js", ".config.cjs", ".config.mjs", ".config.ts",
    ".config.json",
)

EXTENSION_TYPES: List[Tuple[Tuple[str, ...], str]] = [
    ((".jsx", ".tsx"), "component"),
    ((".ts", ".mts", ".cts"), "typescript"),
    ((".js", ".mjs", ".cjs"), "javascript"),
    ((".css", ".scss", ".sass", ".less", ".styl"), "style"),
    ((".png", ".jpg", ".jpeg", ".gif", ".svg", ".webp", ".ico", ".bmp", ".avif"), "asset"),
    ((".woff", ".woff2", ".ttf", ".otf", ".eot"), "font"),
    ((".md", ".mdx", ".txt", ".rst"), "doc"),
]
DOC_FILENAMES = {"readme", "license", "changelog", "contributing"}


def _directory_rule(segments: Tuple[str, ...], tag: str) -> Callable[[PurePosixPath], str]:
    def rule(path: PurePosixPath) -> str:
        directories = {part.lower() for part in path.parts[:-1]}
        return tag if directories.intersection(segments) else ""
    return rule


def _test_rule(path: PurePosixPath) -> str:
    name = path.name.lower()
    if any(marker in name for marker in TEST_MARKERS):
        return "test"
    if TEST_DIRS.intersection(part.lower() for part in path.parts[:-1]):
        return "test"
    return ""


def _config_rule(path: PurePosixPath) -> str:
    name = path.name.lower()
    if name in CONFIG_FILENAMES or name.startswith(CONFIG_PREFIXES) or name.endswith(CONFIG_SUFFIXES):
        return "config"
    return ""


def _extension_rule(path: PurePosixPath) -> str:
    suffix = path.suffix.lower()
    for extensions, tag in EXTENSION_TYPES:
        if suffix in extensions:
            return tag
    if path.stem.lower() in DOC_FILENAMES:
        return "doc"
    return ""


# First rule returning a non-empty tag wins
RULES: List[Callable[[PurePosixPath], str]] = [
    *(_directory_rule(segments, tag) for segments, tag in DIRECTORY_TYPES),
    _test_rule,
    _config_rule,
    _extension_rule,
]


def classify_path(file_path: str) -> str:
    """Return the classification tag for *file_path* (``"other"`` if unmatched)."""
    path = PurePosixPath(str(file_path).replace("\\", "/"))
    for rule in RULES:
        tag = rule(path)
        if tag:
            return tag
    return DEFAULT_TYPE
