"""Pytest configuration and fixtures for UIMap CLI tests."""

import shutil
import tempfile
from pathlib import Path
from typing import Callable, Generator, List, Optional

import pytest

from uimap_cli.parser import SourceParser


class SimpleNode:
    """Minimal stand-in for a Tree-sitter node, built by hand in tests."""

    def __init__(self, type: str, text: str = "", children: Optional[List["SimpleNode"]] = None,
                 start_byte: int = 0) -> None:
        kids = children or []
        self.type = type
        self.text = text.encode("utf-8")
        self.children = kids
        self.start_byte = start_byte
        self.parent: Optional[SimpleNode] = None
        for child in kids:
            child.parent = self


class BrokenNode(SimpleNode):
    """A node whose children cannot be read (simulates a corrupted tree)."""

    @property
    def children(self):
        raise RuntimeError("corrupted subtree")

    @children.setter
    def children(self, value):
        pass


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    tmp = Path(tempfile.mkdtemp())
    yield tmp
    shutil.rmtree(tmp, ignore_errors=True)


@pytest.fixture
def sample_project_path() -> Path:
    """Get path to the sample React project."""
    return Path(__file__).parent / "fixtures" / "react_app"


@pytest.fixture
def make_node() -> Callable[..., SimpleNode]:
    """Factory for hand-built syntax nodes."""
    return SimpleNode


@pytest.fixture
def broken_node() -> Callable[..., SimpleNode]:
    return BrokenNode


@pytest.fixture(scope="session")
def source_parser() -> SourceParser:
    """A SourceParser with the JavaScript and TypeScript grammars loaded."""
    pytest.importorskip("tree_sitter")
    pytest.importorskip("tree_sitter_javascript")
    pytest.importorskip("tree_sitter_typescript")
    parser = SourceParser()
    for language in ("javascript", "typescript", "tsx"):
        if not parser.supports_language(language):
            pytest.skip(f"tree-sitter grammar for {language} could not be loaded")
    return parser


@pytest.fixture
def parse_js(source_parser: SourceParser) -> Callable[..., object]:
    """Parse a source snippet and return the Tree-sitter tree."""

    def _parse(code: str, language: str = "javascript"):
        result = source_parser.parse_source(code, language)
        assert result.ok, result.error
        return result.tree

    return _parse


@pytest.fixture
def sample_component_code() -> str:
    """A JSX module with a class, a function and an arrow component."""
    return '''import React, { Component } from 'react';
import { Icon } from './icon';
import Avatar from './Avatar';

class Profile extends Component {
  render() {
    return <Avatar user={this.props.user} />;
  }
}

function Toolbar() {
  return (
    <div>
      <Icon name="menu" />
      <Icon name="search" />
    </div>
  );
}

const Footer = () => <footer>bye</footer>;
'''
