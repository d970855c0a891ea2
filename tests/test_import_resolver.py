"""Tests for import collection and attribution."""

import pytest

from uimap_cli.import_resolver import (
    ImportResolver,
    attribute_imports,
    collect_default_imports,
    collect_jsx_tags,
    collect_named_imports,
    strip_quotes,
)
from uimap_cli.models import Component, ImportBinding
from uimap_cli.query_engine import Pattern, QueryEngine


@pytest.fixture
def resolver() -> ImportResolver:
    return ImportResolver()


def _pairs(bindings):
    return [(b.name, b.source) for b in bindings]


class TestStripQuotes:
    @pytest.mark.parametrize("literal", ["'react'", '"react"', "`react`", " 'react' "])
    def test_strips_any_quote_style(self, literal):
        assert strip_quotes(literal) == "react"


class TestCollectors:
    def test_default_and_named_are_separated(self, parse_js):
        tree = parse_js(
            "import React, { useState, useEffect as useMount } from 'react';\n"
            "import * as api from \"./api\";\n"
            "import './global.css';\n"
        )
        captures = QueryEngine().execute(tree, Pattern.IMPORT_STATEMENT)

        assert _pairs(collect_default_imports(captures)) == [("React", "react"), ("api", "./api")]
        assert _pairs(collect_named_imports(captures)) == [("useState", "react"), ("useMount", "react")]

    def test_jsx_tags_are_capitalized_and_unique(self, parse_js):
        tree = parse_js(
            "const x = <Layout><Icon /><div /><Icon /><Icons.Star /></Layout>;\n"
        )
        captures = QueryEngine().execute(tree, Pattern.JSX_OPENING_TAG)

        assert collect_jsx_tags(captures) == ["Layout", "Icon", "Icons"]

    def test_bindings_order_defaults_first(self, resolver, parse_js):
        tree = parse_js(
            "import { Icon } from './icon';\n"
            "import Avatar from './Avatar';\n"
        )

        assert _pairs(resolver.bindings(tree)) == [("Avatar", "./Avatar"), ("Icon", "./icon")]


class TestAttributeImports:
    def test_framework_then_own_name_then_tags(self):
        bindings = [
            ImportBinding("Icon", "./icon"),
            ImportBinding("Card", "./Card"),
            ImportBinding("React", "react"),
            ImportBinding("unused", "./unused"),
        ]
        component = Component(name="Card")

        added = attribute_imports(component, bindings, ["Icon"], ["React", "Component"])

        assert added == 3
        assert _pairs(component.imports) == [("React", "react"), ("Card", "./Card"), ("Icon", "./icon")]

    def test_duplicate_bindings_are_added_once(self):
        binding = ImportBinding("Icon", "./icon")
        component = Component(name="Toolbar")

        added = attribute_imports(component, [binding, binding], ["Icon", "Icon"], [])

        assert added == 1
        assert component.imports == [binding]

    def test_same_name_different_source_both_kept(self):
        component = Component(name="Toolbar")
        bindings = [ImportBinding("Icon", "./a"), ImportBinding("Icon", "./b")]

        attribute_imports(component, bindings, ["Icon"], [])

        assert _pairs(component.imports) == [("Icon", "./a"), ("Icon", "./b")]


class TestResolve:
    def test_named_import_used_as_tag(self, resolver, parse_js):
        tree = parse_js(
            "import { Icon } from './icon';\n"
            "function Toolbar() { return <div><Icon/><Icon/></div>; }\n"
        )
        components = [Component(name="Toolbar", type="component")]

        resolver.resolve(tree, components)

        assert _pairs(components[0].imports) == [("Icon", "./icon")]

    def test_every_component_in_file_gets_file_tags(self, resolver, parse_js, sample_component_code):
        tree = parse_js(sample_component_code)
        components = [Component(name="Profile"), Component(name="Toolbar"), Component(name="Footer")]

        resolver.resolve(tree, components)

        expected = [
            ("React", "react"),
            ("Component", "react"),
            ("Avatar", "./Avatar"),
            ("Icon", "./icon"),
        ]
        for component in components:
            assert _pairs(component.imports) == expected

    def test_unused_imports_are_not_attributed(self, resolver, parse_js):
        tree = parse_js(
            "import lodash from 'lodash';\n"
            "import { helper } from './helper';\n"
            "export function View() { return <main/>; }\n"
        )
        components = [Component(name="View")]

        resolver.resolve(tree, components)

        assert components[0].imports == []

    def test_synthetic_components_receive_nothing(self, resolver, parse_js):
        tree = parse_js("import React from 'react';\n")
        component = Component(name="Index", synthetic=True)

        resolver.resolve(tree, [component])

        assert component.imports == []

    def test_resolving_twice_does_not_duplicate(self, resolver, parse_js):
        tree = parse_js("import React from 'react';\nfunction A() { return null; }\n")
        components = [Component(name="A")]

        resolver.resolve(tree, components)
        resolver.resolve(tree, components)

        assert _pairs(components[0].imports) == [("React", "react")]

    def test_custom_framework_identifiers(self, parse_js):
        resolver = ImportResolver(framework_identifiers=["h"])
        tree = parse_js("import React from 'react';\nimport { h } from 'preact';\n")
        components = [Component(name="Widget")]

        resolver.resolve(tree, components)

        assert _pairs(components[0].imports) == [("h", "preact")]

    def test_null_tree_leaves_components_untouched(self, resolver):
        components = [Component(name="App")]

        resolver.resolve(None, components)

        assert components[0].imports == []
