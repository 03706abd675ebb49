"""
Read-only snapshot of a rendered page.

The extractors only ever see a PageTree: parsed markup plus a way to ask for
an element's computed style and visible text. When the browser renderer
produced the snapshot, every element carries its computed styles in a
``data-computed-style`` attribute and the body/heading innerText is captured
alongside. For plain HTML (static renderer, tests) the same questions are
answered from inline styles, SVG presentation attributes, CSS inheritance and
CSS initial values.
"""

import copy
import json
from typing import Any, Dict, List, Optional
from urllib.parse import urljoin, urlparse

from bs4 import BeautifulSoup, Tag
from bs4.element import PreformattedString

from setup_logging_optimized import get_logger

logger = get_logger(__name__)

SNAPSHOT_STYLE_ATTR = "data-computed-style"

# Properties the renderer snapshots; the extractors never ask for others
STYLE_PROPERTIES = ("background-color", "color", "fill", "stroke", "font-family")

INHERITED_PROPERTIES = frozenset({"color", "fill", "stroke", "font-family"})

# Chromium's computed values for an unstyled document
INITIAL_STYLE = {
    "background-color": "rgba(0, 0, 0, 0)",
    "color": "rgb(0, 0, 0)",
    "fill": "rgb(0, 0, 0)",
    "stroke": "none",
    "font-family": "Times New Roman",
}

SVG_PRESENTATION_ATTRIBUTES = ("fill", "stroke")

NON_RENDERED_TAGS = frozenset({"script", "style", "noscript", "template", "head", "title"})

# html.parser lowercases names; SVG is case-sensitive once it leaves the page
SVG_TAG_CASE = {name.lower(): name for name in (
    "clipPath", "linearGradient", "radialGradient", "foreignObject", "textPath",
    "feBlend", "feColorMatrix", "feComposite", "feFlood", "feGaussianBlur",
    "feMerge", "feMergeNode", "feOffset", "feDropShadow", "animateTransform",
)}
SVG_ATTRIBUTE_CASE = {name.lower(): name for name in (
    "viewBox", "preserveAspectRatio", "gradientUnits", "gradientTransform",
    "patternUnits", "patternContentUnits", "patternTransform", "clipPathUnits",
    "maskUnits", "maskContentUnits", "markerWidth", "markerHeight", "markerUnits",
    "refX", "refY", "stdDeviation", "textLength", "lengthAdjust", "pathLength",
    "startOffset", "spreadMethod", "baseFrequency", "numOctaves", "filterUnits",
    "primitiveUnits", "attributeName", "repeatCount",
)}
SVG_NAMESPACE = "http://www.w3.org/2000/svg"


def parse_inline_style(style: Optional[str]) -> Dict[str, str]:
    """Parse a ``style`` attribute into {property: value}; later declarations win."""
    declarations: Dict[str, str] = {}
    if not style:
        return declarations
    for chunk in style.split(";"):
        prop, sep, value = chunk.partition(":")
        if not sep:
            continue
        prop = prop.strip().lower()
        value = value.replace("!important", "").strip()
        if prop and value:
            declarations[prop] = value
    return declarations


class PageTree:
    """Parsed document plus computed-style and visible-text lookups."""

    def __init__(
        self,
        html: str,
        url: str = "",
        body_text: Optional[str] = None,
        heading_text: Optional[str] = None,
    ) -> None:
        self.url = url or ""
        self.soup = BeautifulSoup(html or "", "html.parser")
        self._style_cache: Dict[int, Dict[str, str]] = {}
        self._captured_text: Dict[int, str] = {}
        if body_text is not None:
            self._captured_text[id(self.body)] = body_text
        heading = self.first_heading
        if heading is not None and heading_text is not None:
            self._captured_text[id(heading)] = heading_text

    @classmethod
    def from_snapshot(cls, snapshot: Dict[str, Any]) -> "PageTree":
        """Build a tree from the payload returned by the browser snapshot script."""
        return cls(
            html=snapshot.get("html") or "",
            url=snapshot.get("url") or "",
            body_text=snapshot.get("bodyText"),
            heading_text=snapshot.get("headingText"),
        )

    # ---- Structure ----

    @property
    def body(self) -> Tag:
        return self.soup.body or self.soup

    @property
    def first_heading(self) -> Optional[Tag]:
        return self.soup.select_one("h1")

    @property
    def origin(self) -> str:
        parsed = urlparse(self.url)
        if parsed.scheme and parsed.netloc:
            return f"{parsed.scheme}://{parsed.netloc}"
        return ""

    @property
    def base_url(self) -> str:
        base = self.soup.select_one("base[href]")
        if base is not None:
            try:
                return urljoin(self.url, base["href"].strip())
            except ValueError:
                logger.debug(f"Ignoring malformed <base href>: {base['href']!r}")
        return self.url

    def select(self, selector: str, root: Optional[Tag] = None) -> List[Tag]:
        return (root or self.soup).select(selector)

    def select_one(self, selector: str, root: Optional[Tag] = None) -> Optional[Tag]:
        return (root or self.soup).select_one(selector)

    def attribute(self, element: Optional[Tag], name: str) -> str:
        """Attribute as a string; multi-valued attributes (class, rel) are space-joined."""
        if element is None:
            return ""
        value = element.get(name)
        if value is None:
            return ""
        if isinstance(value, (list, tuple)):
            return " ".join(value)
        return str(value)

    def resolve_url(self, value: Optional[str]) -> Optional[str]:
        """Resolve a locator against the page the way img.src / link.href do."""
        if value is None:
            return None
        value = value.strip()
        if not value:
            return None
        base = self.base_url
        if not base:
            return value
        try:
            return urljoin(base, value)
        except ValueError:
            # Unparseable locators (e.g. "http://[bad") are reported verbatim, as img.src does
            return value

    # ---- Styles ----

    def _declared_styles(self, element: Tag) -> Dict[str, str]:
        key = id(element)
        cached = self._style_cache.get(key)
        if cached is not None:
            return cached

        declared: Dict[str, str] = {}
        snapshot = element.get(SNAPSHOT_STYLE_ATTR) if element.attrs else None
        if snapshot:
            try:
                parsed = json.loads(snapshot)
                if isinstance(parsed, dict):
                    declared = {str(k).lower(): str(v) for k, v in parsed.items() if v is not None}
            except ValueError:
                logger.debug(f"Ignoring malformed style snapshot on <{element.name}>")

        if not declared:
            inline = parse_inline_style(self.attribute(element, "style"))
            for attr in SVG_PRESENTATION_ATTRIBUTES:
                # Presentation attributes lose to inline style declarations
                if attr not in inline and element.get(attr):
                    inline[attr] = self.attribute(element, attr).strip()
            if "background-color" not in inline and "background" in inline:
                from agents.tools.theme.css_colors import to_hex
                if to_hex(inline["background"]) is not None:
                    inline["background-color"] = inline["background"]
            declared = inline

        self._style_cache[key] = declared
        return declared

    def computed_style(self, element: Tag, prop: str) -> str:
        """Computed value of ``prop`` for ``element`` as getComputedStyle would report it."""
        prop = prop.lower()
        node: Any = element
        while isinstance(node, Tag):
            declared = self._declared_styles(node)
            value = declared.get(prop)
            if value and value.lower() not in ("inherit", "unset"):
                return value
            if prop not in INHERITED_PROPERTIES and value is None:
                break
            node = node.parent
        return INITIAL_STYLE.get(prop, "")

    # ---- Text & markup ----

    def _is_hidden(self, element: Tag) -> bool:
        if element.name in NON_RENDERED_TAGS or element.has_attr("hidden"):
            return True
        display = parse_inline_style(self.attribute(element, "style")).get("display", "")
        return display.lower() == "none"

    def visible_text(self, element: Optional[Tag]) -> str:
        """innerText when the renderer captured it, else non-blank text nodes joined by newlines."""
        if element is None:
            return ""
        captured = self._captured_text.get(id(element))
        if captured is not None:
            return captured

        lines: List[str] = []
        for text in element.find_all(string=True):
            parent = text.parent
            hidden = False
            while isinstance(parent, Tag):
                if self._is_hidden(parent):
                    hidden = True
                    break
                if parent is element:
                    break
                parent = parent.parent
            if hidden or isinstance(text, PreformattedString):
                continue
            stripped = text.strip()
            if stripped:
                lines.append(stripped)
        return "\n".join(lines)

    def outer_html(self, element: Tag) -> str:
        """Serialize ``element`` without snapshot attributes, restoring SVG name casing."""
        clone = copy.copy(element)
        in_svg = element.name == "svg" or element.find_parent("svg") is not None
        for node in [clone, *clone.find_all(True)]:
            attrs = {k: v for k, v in node.attrs.items() if k != SNAPSHOT_STYLE_ATTR}
            if in_svg:
                node.name = SVG_TAG_CASE.get(node.name, node.name)
                attrs = {SVG_ATTRIBUTE_CASE.get(k, k): v for k, v in attrs.items()}
            node.attrs = attrs
        if clone.name == "svg" and "xmlns" not in clone.attrs:
            # Required once the markup is decoded as a standalone image
            clone.attrs = {"xmlns": SVG_NAMESPACE, **clone.attrs}
        return str(clone)
