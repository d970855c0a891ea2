"""Configuration manager for UIMap CLI using TOML files."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, List

import toml

logger = logging.getLogger(__name__)

BASE_DIR = Path(os.environ.get("UIMAP_HOME", str(Path.home() / ".uimap"))).expanduser()
CONFIG_FILE = BASE_DIR / "config.toml"


# Defaults for the ``[analysis]`` section
DEFAULT_ANALYSIS_CONFIG: Dict[str, List[str]] = {
    "extensions": [".js", ".jsx", ".ts", ".tsx"],
    "skip_dirs": [
        "node_modules", "__MACOSX", "build", "dist", "coverage", "out",
    ],
    "framework_identifiers": ["React", "Component"],
    "base_component_markers": [
        "Component", "PureComponent", "React.Component", "React.PureComponent",
    ],
    "lifecycle_markers": [
        "render",
        "componentDidMount",
        "componentDidUpdate",
        "componentWillUnmount",
        "shouldComponentUpdate",
        "getSnapshotBeforeUpdate",
        "componentDidCatch",
        "getDerivedStateFromProps",
    ],
}


def load_full_config() -> Dict[str, Any]:
    """Load the entire TOML config (all sections)."""
    if not CONFIG_FILE.exists():
        return {}
    try:
        with open(CONFIG_FILE, "r", encoding="utf-8") as f:
            return toml.load(f)
    except (OSError, toml.TomlDecodeError) as exc:
        logger.warning("Could not read %s: %s", CONFIG_FILE, exc)
        return {}


def load_config() -> Dict[str, Any]:
    """Load the analysis configuration from the TOML file.

    Returns:
        The ``[analysis]`` section merged over :data:`DEFAULT_ANALYSIS_CONFIG`.
        Unknown keys are ignored; list values replace the defaults wholesale.
    """
    merged: Dict[str, Any] = {key: list(value) for key, value in DEFAULT_ANALYSIS_CONFIG.items()}
    section = load_full_config().get("analysis", {})
    if not isinstance(section, dict):
        logger.warning("Ignoring malformed [analysis] section in %s", CONFIG_FILE)
        return merged
    for key, value in section.items():
        if key not in merged:
            logger.debug("Ignoring unknown analysis option '%s'", key)
            continue
        if not isinstance(value, list):
            logger.warning("Option '%s' must be a list, got %r", key, value)
            continue
        merged[key] = [str(item) for item in value]
    return merged


def _save_full_config(config: Dict[str, Any]) -> bool:
    """Write entire config dict to TOML file, preserving all sections."""
    try:
        CONFIG_FILE.parent.mkdir(parents=True, exist_ok=True)
        with open(CONFIG_FILE, "w", encoding="utf-8") as f:
            toml.dump(config, f)
        return True
    except OSError as exc:
        logger.error("Could not write %s: %s", CONFIG_FILE, exc)
        return False


def save_config(analysis: Dict[str, List[str]]) -> bool:
    """Save the ``[analysis]`` section, preserving other sections in the file.

    Args:
        analysis: Option name to list of values.

    Returns:
        True if saved successfully, False otherwise
    """
    config = load_full_config()
    config["analysis"] = {key: list(value) for key, value in analysis.items()}
    return _save_full_config(config)
