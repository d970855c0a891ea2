"""Configuration paths and analysis defaults for UIMap."""

from __future__ import annotations

from .config_manager import BASE_DIR, CONFIG_FILE, load_config

__all__ = [
    "BASE_DIR",
    "CONFIG_FILE",
    "SOURCE_EXTENSIONS",
    "SKIP_DIRS",
    "FRAMEWORK_IDENTIFIERS",
    "BASE_COMPONENT_MARKERS",
    "LIFECYCLE_MARKERS",
]

# Load configuration from ~/.uimap/config.toml (set via `uimap config init`)
_analysis_config = load_config()

SOURCE_EXTENSIONS = frozenset(ext.lower() for ext in _analysis_config["extensions"])
SKIP_DIRS = frozenset(_analysis_config["skip_dirs"])

# Import bindings attributed to every component when present in a file
FRAMEWORK_IDENTIFIERS = tuple(_analysis_config["framework_identifiers"])

# Class components: superclass names and method names that mark a UI component
BASE_COMPONENT_MARKERS = frozenset(_analysis_config["base_component_markers"])
LIFECYCLE_MARKERS = frozenset(_analysis_config["lifecycle_markers"])
