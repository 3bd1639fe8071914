"""Sandbox preview compiler tests."""

import json
import re

import pytest
from hypothesis import given, settings, strategies as st

from sandbox import (
    COLLIDING_GLOBALS,
    CONTENT_SECURITY_POLICY,
    PreviewCompiler,
    collect_imports,
    compile_for_preview,
    declared_names,
    detect_identifiers,
    prepare,
    render_fallback,
    strip_module_syntax,
)
from sandbox.compiler import Binding, NAMESPACE_TARGET


def _embedded(document: str, name: str):
    """Decode a JSON value the runtime script assigns to ``name``."""
    match = re.search(rf"var {name} = (.*);\n", document)
    assert match, f"{name} not embedded"
    return json.loads(match.group(1))


@pytest.mark.unit
class TestCollectImports:
    def test_default_named_and_alias(self):
        source = (
            "import React, { useState } from 'react';\n"
            "import { Card, Button as Btn } from '../components/Card';\n"
            "import Chart from '../components/Chart';\n"
        )
        assert collect_imports(source) == [
            Binding("Card", "Card"),
            Binding("Btn", "Button"),
            Binding("Chart", "Chart"),
        ]

    def test_namespace_import(self):
        assert collect_imports("import * as Icons from 'lucide-react';") == [Binding("Icons", NAMESPACE_TARGET)]

    def test_multiline_named_import(self):
        source = "import {\n  Bell,\n  Zap,\n} from 'lucide-react';"
        assert [b.local for b in collect_imports(source)] == ["Bell", "Zap"]

    def test_hooks_skipped(self):
        assert collect_imports("import { useEffect, useMemo } from 'react';") == []

    def test_comments_and_junk_specifiers_ignored(self):
        source = (
            "import { Card, /* Modal, */ Button } from '../components/Card';\n"
            "import { Bell, // Zap\n  Star } from 'lucide-react';\n"
            "import { Table, 3D, Chart as } from '../components/Table';\n"
        )
        assert collect_imports(source) == [
            Binding("Card", "Card"),
            Binding("Button", "Button"),
            Binding("Bell", "Bell"),
            Binding("Star", "Star"),
            Binding("Table", "Table"),
        ]


@pytest.mark.unit
def test_detect_identifiers_skips_globals():
    names = detect_identifiers("const d = new Date(); Math.max(1); <Widget /> <Map />; JSON.stringify(x)")
    assert "Widget" in names
    assert "Map" in names
    assert "Date" not in names
    assert "Math" not in names
    assert "JSON" not in names


@pytest.mark.unit
def test_declared_names():
    source = """
function Hero() {}
const Footer = () => null;
class Panel extends React.Component {}
const { Header, Body: Content, ...Rest } = parts;
let [First, Second] = pair;
"""
    assert {"Hero", "Footer", "Panel", "Header", "Content", "Rest", "First", "Second"} <= declared_names(source)


@pytest.mark.unit
class TestStripModuleSyntax:
    def test_imports_removed(self):
        source = "import React from 'react';\n+import { Card } from '../components/Card';\nimport './x.css';\nconst a = 1;"
        assert strip_module_syntax(source).strip() == "const a = 1;"

    def test_export_default_function(self):
        assert strip_module_syntax("export default function App() {}") == "window.App = function App() {}"

    def test_export_default_identifier(self):
        assert strip_module_syntax("export default App;") == "window.App = App;"

    def test_named_exports_dropped(self):
        source = "export const A = 1;\nexport function B() {}\nexport { A, B };"
        assert strip_module_syntax(source).strip() == "const A = 1;\nfunction B() {}"

    def test_module_exports_and_require(self):
        source = "const x = require('lodash');\nmodule.exports = App;"
        assert strip_module_syntax(source) == "const x = undefined;\nwindow.App = App;"


@pytest.mark.unit
class TestPrepare:
    def test_declared_names_not_shimmed(self):
        prepared = prepare("function Hero() { return <Card />; }\nexport default function App() { return <Hero />; }")
        locals_ = [b.local for b in prepared.bindings]
        assert "Card" in locals_
        assert "Hero" not in locals_
        assert "App" not in locals_

    def test_colliding_names_forced(self):
        prepared = prepare("const Navigation = () => null;\nexport default () => <Image src='x' />;")
        locals_ = [b.local for b in prepared.bindings]
        assert "Navigation" in locals_
        assert "Image" in locals_
        assert set(prepared.forced) == {"Navigation", "Image"}
        assert set(prepared.forced) <= COLLIDING_GLOBALS

    def test_alias_binding_kept_over_detection(self):
        prepared = prepare("import { BarChart as Bars } from 'lucide-react';\n<Bars />")
        assert Binding("Bars", "BarChart") in prepared.bindings


@pytest.mark.unit
class TestCompile:
    def test_document_shape(self, sample_component):
        document = PreviewCompiler().compile(sample_component, generation=7)

        assert document.startswith("<!DOCTYPE html>")
        assert CONTENT_SECURITY_POLICY in document
        assert "var __GENERATION = 7;" in document
        assert "window.onerror" in document
        assert "Compilation Error" in document
        assert "Runtime Error" in document
        assert "no valid export found" in document
        assert "__USER_SOURCE_JSON__" not in document

    def test_user_source_embedded_as_json(self, sample_component):
        document = compile_for_preview(sample_component)
        script = _embedded(document, "__USER_SOURCE")
        assert "window.App = function App()" in script
        assert "import " not in script

    def test_bindings_embedded(self):
        document = compile_for_preview("export default () => <Map><Widget /></Map>;")
        bindings = _embedded(document, "__BINDINGS")
        assert ["Map", "Map"] in bindings
        assert ["Widget", "Widget"] in bindings

    def test_script_close_neutralised(self):
        document = compile_for_preview('const s = "</script><script>alert(1)</script>";')
        assert "</script><script>alert(1)" not in document
        assert "\\u003c/script>" in document

    def test_shim_table_present(self):
        document = compile_for_preview("export default () => null;")
        for name in ("Container", "Button", "Chart", "Bell", "BellIcon", "DataTable"):
            assert f'__SHIMS["{name}"]' in document

    def test_non_string_input_falls_back(self):
        document = PreviewCompiler().compile(None)
        assert "Compilation Error" in document
        assert "compile_error" in document
        assert "__MESSAGE__" not in document

    def test_fallback_escapes_message(self):
        document = render_fallback("<img src=x onerror=alert(1)>", generation=3)
        assert "<img src=x" not in document
        assert "&lt;img src=x" in document
        assert "generation: 3" in document


@pytest.mark.unit
@settings(max_examples=150)
@given(st.text(max_size=400))
def test_compile_never_raises(source):
    """Any input string yields a complete document."""
    document = PreviewCompiler().compile(source)
    assert document.startswith("<!DOCTYPE html>")
    assert document.rstrip().endswith("</html>")


@pytest.mark.unit
@settings(max_examples=100)
@given(st.text(alphabet=st.sampled_from(list("<>/{}()'\"`;=\n Aimportexdfaul")), max_size=200))
def test_compile_never_raises_on_syntax_soup(source):
    document = PreviewCompiler().compile(source)
    assert "</script>" in document
