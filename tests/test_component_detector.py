"""Tests for component detection passes."""

import pytest

from uimap_cli.component_detector import (
    ComponentDetector,
    component_name_from_path,
    synthesize_component,
)


@pytest.fixture
def detector() -> ComponentDetector:
    return ComponentDetector()


def _names(components):
    return [c.name for c in components]


class TestFileNameFallback:
    @pytest.mark.parametrize("path, expected", [
        ("src/hooks/useAuth.ts", "UseAuth"),
        ("src/store/index.js", "Index"),
        ("Widget.jsx", "Widget"),
        ("src\\utils\\api.client.js", "Api.client"),
    ])
    def test_component_name_from_path(self, path, expected):
        assert component_name_from_path(path) == expected

    def test_synthesized_component_is_marked(self):
        component = synthesize_component("src/hooks/useAuth.ts")

        assert component.name == "UseAuth"
        assert component.type == "hook"
        assert component.imports == []
        assert component.synthetic


class TestClassPass:
    def test_extends_known_base(self, detector, parse_js):
        tree = parse_js("class Card extends React.PureComponent {}")

        assert _names(detector.detect(tree, "src/Card.jsx")) == ["Card"]

    def test_lifecycle_method_without_known_base(self, detector, parse_js):
        tree = parse_js("class Widget extends Base { componentDidMount() {} }")

        assert _names(detector.detect(tree, "src/Widget.js")) == ["Widget"]

    def test_plain_class_is_not_a_component(self, detector, parse_js):
        tree = parse_js("class Store extends Base { load() {} }\n")

        components = detector.detect(tree, "src/Store.js")

        assert _names(components) == ["Store"]
        assert components[0].synthetic

    def test_custom_markers(self, parse_js):
        detector = ComponentDetector(base_markers=frozenset({"LitElement"}), lifecycle_markers=frozenset())
        tree = parse_js(
            "class Badge extends LitElement {}\n"
            "class Legacy extends React.Component { render() {} }\n"
        )

        assert _names(detector.detect(tree, "badge.js")) == ["Badge"]


class TestPassOrder:
    def test_class_then_function_then_arrow(self, detector, parse_js):
        tree = parse_js(
            "const Footer = () => null;\n"
            "function Header() { return null; }\n"
            "class Page extends Component { render() { return null; } }\n"
        )

        assert _names(detector.detect(tree, "src/pages/Page.jsx")) == ["Page", "Header", "Footer"]

    def test_sample_component_module(self, detector, parse_js, sample_component_code):
        tree = parse_js(sample_component_code)

        components = detector.detect(tree, "src/components/Profile.jsx")

        assert _names(components) == ["Profile", "Toolbar", "Footer"]
        assert {c.type for c in components} == {"component"}

    def test_every_function_is_a_candidate(self, detector, parse_js):
        tree = parse_js(
            "function helper() {}\n"
            "export function capitalize(text) { return text; }\n"
        )

        assert _names(detector.detect(tree, "src/utils/text.js")) == ["helper", "capitalize"]

    def test_passes_are_not_deduplicated(self, detector, parse_js):
        tree = parse_js(
            "function Same() {}\n"
            "function Same() {}\n"
        )

        assert _names(detector.detect(tree, "same.js")) == ["Same", "Same"]


class TestExportFallback:
    def test_exported_binding_names_the_component(self, detector, parse_js):
        tree = parse_js(
            "const initialState = { user: null };\n"
            "export default initialState;\n"
        )

        components = detector.detect(tree, "src/store/index.js")

        assert _names(components) == ["initialState"]
        assert components[0].type == "store"
        assert not components[0].synthetic

    def test_first_named_export_wins(self, detector, parse_js):
        tree = parse_js(
            "export { a };\n"
            "export const routes = [];\n"
            "export const theme = {};\n"
        )

        assert _names(detector.detect(tree, "src/config/routes.js")) == ["routes"]

    def test_anonymous_default_export_uses_file_name(self, detector, parse_js):
        tree = parse_js(
            "import { useState } from 'react';\n"
            "export default (initial: boolean = false) => useState(initial);\n",
            language="typescript",
        )

        components = detector.detect(tree, "src/hooks/useAuth.ts")

        assert _names(components) == ["UseAuth"]
        assert components[0].type == "hook"

    def test_empty_file_uses_file_name(self, detector, parse_js):
        tree = parse_js("")

        assert _names(detector.detect(tree, "src/services/api.js")) == ["Api"]


class TestHandBuiltTree:
    def test_detects_without_a_grammar(self, detector, make_node):
        tree = make_node("program", children=[
            make_node("function_declaration", start_byte=0, children=[
                make_node("function", "function", start_byte=0),
                make_node("identifier", "Menu", start_byte=9),
            ]),
        ])

        components = detector.detect(tree, "src/components/Menu.jsx")

        assert _names(components) == ["Menu"]
        assert components[0].type == "component"
