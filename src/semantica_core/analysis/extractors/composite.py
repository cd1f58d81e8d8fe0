"""Single-file component extractors (Vue, Svelte).

A component file is a document of sections. Each section runs from its
opening tag to the first close tag after it and is handed to the
extractor of its own language; the entities that come back are moved
down by the number of lines that precede the section, so every reported
line refers to the original document.

- <script> goes to the JavaScript or TypeScript extractor;
- <template> (Vue only) is parsed with the HTML grammar for component and
  directive symbols;
- <style> goes to the CSS (or SCSS) extractor for its symbols.

Syntax errors inside sections are not reported for the component.

Author: Goncharenko Anton aka alienxs2
License: MIT
"""

import re
from typing import List, NamedTuple, Optional

from ..exceptions import LanguageNotSupportedError, ParseError
from ..models import AnalysisResult, SymbolInfo
from ..parser.factory import ParserFactory
from ..parser.session import ParseSession
from .base import BaseExtractor
from .css import CSSExtractor
from .html import template_symbols
from .javascript import JavaScriptExtractor
from .typescript import TypeScriptExtractor

VUE_SCRIPT_OPEN = re.compile(
    r"""(?i)<script(?:\s+setup)?(?:\s+lang=["']?(ts|typescript)["']?)?[^<>]*>"""
)

SVELTE_SCRIPT_OPEN = re.compile(r"""(?i)<script(?:\s+lang=["']?(ts|typescript)["']?)?[^<>]*>""")

TEMPLATE_OPEN = re.compile(r"(?i)<template([^<>]*)>")

STYLE_OPEN = re.compile(r"(?i)<style([^<>]*)>")

SCRIPT_CLOSE = re.compile(r"(?i)</script>")

TEMPLATE_CLOSE = re.compile(r"(?i)</template>")

STYLE_CLOSE = re.compile(r"(?i)</style>")

SCSS_LANG_PATTERN = re.compile(r"""lang=["']?scss["']?""", re.IGNORECASE)


def section_offset(text: str, position: int) -> int:
    """Lines preceding a section whose content starts at position."""
    return text.count("\n", 0, position)


class Section(NamedTuple):
    """One tagged block of a component document."""

    attribute: str
    content: str
    start: int


def find_section(
    text: str,
    open_pattern: "re.Pattern[str]",
    close_pattern: "re.Pattern[str]",
) -> Optional[Section]:
    """First block opened by open_pattern and closed by close_pattern.

    attribute is the opening tag's first group ("" when it did not take
    part). The close tag is searched once, from the end of the first
    opening tag; without one there is no section.
    """
    opening = open_pattern.search(text)
    if opening is None:
        return None
    closing = close_pattern.search(text, opening.end())
    if closing is None:
        return None
    return Section(
        attribute=opening.group(1) or "",
        content=text[opening.end() : closing.start()],
        start=opening.end(),
    )


class ComponentExtractor(BaseExtractor):
    """Base for component documents.

    Subclasses set the script opening tag and whether a template pass runs.
    """

    script_open: "re.Pattern[str]" = VUE_SCRIPT_OPEN
    has_template: bool = False

    def __init__(self) -> None:
        super().__init__()
        self._javascript = JavaScriptExtractor("javascript")
        self._typescript = TypeScriptExtractor("typescript")
        self._css = CSSExtractor("css")
        self._scss = CSSExtractor("scss")

    def analyze(self, source: bytes) -> AnalysisResult:
        text = source.decode("utf-8", errors="replace")
        result = AnalysisResult(language=self.language_name)

        script = find_section(text, self.script_open, SCRIPT_CLOSE)
        if script is not None and script.content:
            self._merge_script(script, text, result)

        if self.has_template:
            template = find_section(text, TEMPLATE_OPEN, TEMPLATE_CLOSE)
            if template is not None and template.content:
                offset = section_offset(text, template.start)
                result.symbols.extend(
                    symbol.shift_lines(offset) for symbol in self._template_symbols(template.content)
                )

        style = find_section(text, STYLE_OPEN, STYLE_CLOSE)
        if style is not None and style.content:
            offset = section_offset(text, style.start)
            extractor = self._scss if SCSS_LANG_PATTERN.search(style.attribute) else self._css
            styles = extractor.analyze(style.content.encode("utf-8"))
            result.symbols.extend(symbol.shift_lines(offset) for symbol in styles.symbols)

        self._log.debug(
            "component_analyzed",
            language=self.language_name,
            functions=len(result.functions),
            imports=len(result.imports),
            symbols=len(result.symbols),
        )
        return result

    def _merge_script(self, script: Section, text: str, result: AnalysisResult) -> None:
        lang = script.attribute.lower()
        extractor = self._typescript if lang in ("ts", "typescript") else self._javascript
        offset = section_offset(text, script.start)
        result.merge(extractor.analyze(script.content.encode("utf-8")), offset)

    def _template_symbols(self, markup: str) -> List[SymbolInfo]:
        source = markup.encode("utf-8")
        try:
            parser = ParserFactory.get_parser("html")
            with ParseSession(parser, source) as session:
                return template_symbols(session.root, source)
        except (LanguageNotSupportedError, ParseError) as e:
            self._log.warning("template_parse_failed", language=self.language_name, error=e.message)
            return []


class VueExtractor(ComponentExtractor):
    """Vue single-file components: script, template and style."""

    script_open = VUE_SCRIPT_OPEN
    has_template = True

    @property
    def language_name(self) -> str:
        return "vue"


class SvelteExtractor(ComponentExtractor):
    """Svelte components: markup lives at top level, so only script and style are read."""

    script_open = SVELTE_SCRIPT_OPEN

    @property
    def language_name(self) -> str:
        return "svelte"


__all__ = [
    "ComponentExtractor",
    "Section",
    "SvelteExtractor",
    "VueExtractor",
    "find_section",
    "section_offset",
]
