"""Unit tests for the HTML, CSS, SCSS and YAML extractors."""

import pytest

from semantica_core.analysis.extractors.css import CSSExtractor, classify_selector, clean_import_target
from semantica_core.analysis.extractors.html import HTMLExtractor
from semantica_core.analysis.extractors.yaml import YAMLExtractor

PAGE = """\
<!DOCTYPE html>
<html>
<head>
  <link rel="stylesheet" href="main.css">
  <link rel="icon" href="favicon.ico">
  <script src="app.js"></script>
</head>
<body>
  <div id="app" class="card  wide"></div>
  <input id="name" disabled />
</body>
</html>
"""

STYLES = """\
@import url("base.css");
@import "theme.css";

:root {
  --main-color: red;
}

.btn, #main {
  color: var(--main-color);
}

a:hover {
  color: blue;
}

@keyframes spin {
  from { opacity: 0; }
  to { opacity: 1; }
}
"""

SCSS_STYLES = """\
@use "sass:math";
$primary: #333;

@mixin flex($dir) {
  display: flex;
}

@function double($n) {
  @return $n * 2;
}

.card {
  color: $primary;
}
"""


class TestHTMLExtractor:
    """Ids, classes and linked resources."""

    @pytest.fixture
    def result(self, run):
        return run(HTMLExtractor(), PAGE)

    def test_symbols(self, result):
        """Test ids and each class token become symbols."""
        assert [(s.name, s.kind, s.line) for s in result.symbols] == [
            ("app", "id", 9),
            ("card", "class", 9),
            ("wide", "class", 9),
            ("name", "id", 10),
        ]

    def test_imports(self, result):
        """Test only stylesheets and script sources are imports."""
        assert [(i.module, i.line) for i in result.imports] == [("main.css", 4), ("app.js", 6)]

    def test_no_functions(self, result):
        """Test markup declares nothing callable."""
        assert result.functions == []
        assert result.calls == []
        assert result.errors == []


class TestCSSExtractor:
    """Plain CSS."""

    @pytest.fixture
    def result(self, run):
        return run(CSSExtractor("css"), STYLES)

    def test_selectors(self, result):
        """Test selectors are classified by their first character."""
        selectors = [(s.name, s.kind) for s in result.symbols if s.kind in ("id", "class", "selector")]

        assert selectors == [(":root", "selector"), (".btn", "class"), ("#main", "id"), ("a:hover", "selector")]

    def test_custom_properties_and_keyframes(self, result):
        """Test --vars and keyframes names."""
        others = [(s.name, s.kind, s.line) for s in result.symbols if s.kind in ("variable", "keyframes")]

        assert others == [("--main-color", "variable", 5), ("spin", "keyframes", 16)]

    def test_imports(self, result):
        """Test url() and string targets are unwrapped."""
        assert [(i.module, i.line) for i in result.imports] == [("base.css", 1), ("theme.css", 2)]

    @pytest.mark.parametrize(
        "selector, kind",
        [("#a", "id"), (".b", "class"), ("@media", "at-rule"), ("div > p", "selector")],
    )
    def test_classify_selector(self, selector, kind):
        """Test selector classification."""
        assert classify_selector(selector) == kind

    def test_clean_import_target(self):
        """Test quoting and url() wrappers are removed."""
        assert clean_import_target(' url("x.css") ') == "x.css"
        assert clean_import_target("'y.css'") == "y.css"


class TestSCSSExtractor:
    """SCSS additions."""

    @pytest.fixture
    def result(self, run):
        return run(CSSExtractor("scss"), SCSS_STYLES)

    def test_language(self, result):
        """Test the scss tag is reported."""
        assert result.language == "scss"

    def test_preprocessor_symbols(self, result):
        """Test $variables, mixins and functions."""
        symbols = {(s.name, s.kind) for s in result.symbols}

        assert ("$primary", "variable") in symbols
        assert ("flex", "mixin") in symbols
        assert ("double", "function") in symbols
        assert (".card", "class") in symbols

    def test_use_import(self, result):
        """Test @use is an import."""
        assert "sass:math" in [i.module for i in result.imports]


class TestYAMLExtractor:
    """Mapping keys."""

    def test_keys_in_document_order(self, run):
        """Test nested block keys and flow keys."""
        source = 'server:\n  port: 80\n  "host": local\nlimits: {cpu: 1}\n'

        result = run(YAMLExtractor(), source)

        assert [(s.name, s.kind, s.line) for s in result.symbols] == [
            ("server", "key", 1),
            ("port", "key", 2),
            ("host", "key", 3),
            ("limits", "key", 4),
            ("cpu", "key", 4),
        ]

    def test_sequence_only(self, run):
        """Test a document without mappings has no symbols."""
        assert run(YAMLExtractor(), "- a\n- b\n").symbols == []
