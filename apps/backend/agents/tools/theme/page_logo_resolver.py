"""Best-guess logo reference for a rendered page.

Strategies run in a fixed order and the first hit wins:
1. Header/nav <img> with "logo" in class, src or alt (highest confidence)
2. <svg> inside a link to the site root, inlined as a data URI
3. og:image (usually accurate, maybe not transparent)
4. apple-touch-icon
"""

import base64
from typing import Callable, Optional, Sequence

from services.page_tree import PageTree
from setup_logging_optimized import get_logger

logger = get_logger(__name__)

LogoStrategy = Callable[[PageTree], Optional[str]]

SVG_DATA_URI_PREFIX = "data:image/svg+xml;base64,"


def header_logo_image(tree: PageTree) -> Optional[str]:
    for img in tree.select("header img, nav img"):
        src = tree.resolve_url(tree.attribute(img, "src"))
        haystacks = (tree.attribute(img, "class"), src or "", tree.attribute(img, "alt"))
        if any("logo" in text.lower() for text in haystacks):
            return src
    return None


def home_link_svg(tree: PageTree) -> Optional[str]:
    # Any SVG in a home link is assumed to be the logo; nothing checks it further
    selector = 'a[href="/"]'
    if tree.origin:
        selector += f', a[href="{tree.origin}"]'
    for link in tree.select(selector):
        svg = tree.select_one("svg", root=link)
        if svg is not None:
            markup = tree.outer_html(svg)
            return SVG_DATA_URI_PREFIX + base64.b64encode(markup.encode("utf-8")).decode("ascii")
    return None


def social_preview_image(tree: PageTree) -> Optional[str]:
    og_image = tree.select_one('meta[property="og:image"]')
    return tree.attribute(og_image, "content") or None


def touch_icon(tree: PageTree) -> Optional[str]:
    icon = tree.select_one('link[rel="apple-touch-icon"]')
    return tree.resolve_url(tree.attribute(icon, "href"))


LOGO_STRATEGIES: Sequence[LogoStrategy] = (
    header_logo_image,
    home_link_svg,
    social_preview_image,
    touch_icon,
)


def resolve_logo(tree: PageTree, strategies: Sequence[LogoStrategy] = LOGO_STRATEGIES) -> Optional[str]:
    for strategy in strategies:
        logo = strategy(tree)
        if logo:
            logger.debug(f"Logo resolved by {strategy.__name__}")
            return logo
    return None
