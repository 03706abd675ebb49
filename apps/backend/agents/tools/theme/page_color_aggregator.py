"""Weighted brand palette from a rendered page tree.

Every color-bearing element the heuristics care about becomes a
ColorCandidate (hex + weight). Candidates for the same hex accumulate, and the
palette is the top entries by accumulated weight. Ties keep first-observed
order.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from agents.config import MAX_PALETTE_COLORS
from agents.tools.theme.css_colors import is_brand_neutral, is_fully_transparent, to_hex
from models.brand import Palette
from services.page_tree import PageTree
from setup_logging_optimized import get_logger

logger = get_logger(__name__)

# Source weights (additive across sources)
THEME_COLOR_WEIGHT = 20
HEADER_ACTION_BACKGROUND_WEIGHT = 10
HEADER_ACTION_TEXT_WEIGHT = 5
HEADER_VECTOR_WEIGHT = 8
PAGE_ACTION_BACKGROUND_WEIGHT = 3

HEADER_ACTION_SELECTOR = 'button, a[class*="btn"], a[class*="button"]'
HEADER_VECTOR_SELECTOR = 'svg path, svg rect, svg circle, svg g, svg'
PAGE_ACTION_SELECTOR = 'button, a[class*="btn"], .button, .btn'

FALLBACK_PRIMARY = "#000000"


@dataclass(frozen=True)
class ColorCandidate:
    hex: str
    weight: int
    source: str = ""


def make_candidate(value: Optional[str], weight: int, source: str = "") -> Optional[ColorCandidate]:
    """Convert a raw CSS color into a candidate, or None when it carries no signal."""
    hex_color = to_hex(value)
    if hex_color is None or is_brand_neutral(hex_color):
        return None
    return ColorCandidate(hex=hex_color, weight=weight, source=source)


def header_region(tree: PageTree):
    return tree.select_one("header") or tree.select_one("nav")


def collect_color_candidates(tree: PageTree) -> List[ColorCandidate]:
    """Scan the tree in fixed source order and return every color observation."""
    observed: List[Optional[ColorCandidate]] = []

    # A. Meta theme color (high confidence)
    theme_meta = tree.select_one('meta[name="theme-color"]')
    if theme_meta is not None:
        observed.append(make_candidate(tree.attribute(theme_meta, "content"), THEME_COLOR_WEIGHT, "theme-color"))

    # B. Header/nav actions and inline SVGs
    header = header_region(tree)
    if header is not None:
        for action in tree.select(HEADER_ACTION_SELECTOR, root=header):
            background = tree.computed_style(action, "background-color")
            observed.append(make_candidate(background, HEADER_ACTION_BACKGROUND_WEIGHT, "header-action-background"))
            if is_fully_transparent(background):
                observed.append(make_candidate(
                    tree.computed_style(action, "color"), HEADER_ACTION_TEXT_WEIGHT, "header-action-text"
                ))

        for part in tree.select(HEADER_VECTOR_SELECTOR, root=header):
            for prop in ("fill", "stroke"):
                value = tree.computed_style(part, prop)
                if value and value.strip().lower() != "none":
                    observed.append(make_candidate(value, HEADER_VECTOR_WEIGHT, f"header-svg-{prop}"))

    # C. Actions anywhere in the document (header included)
    for action in tree.select(PAGE_ACTION_SELECTOR):
        observed.append(make_candidate(
            tree.computed_style(action, "background-color"), PAGE_ACTION_BACKGROUND_WEIGHT, "page-action-background"
        ))

    return [c for c in observed if c is not None]


def accumulate_weights(candidates: Iterable[ColorCandidate]) -> Dict[str, int]:
    """Sum weights per hex; dict order records first observation."""
    weights: Dict[str, int] = {}
    for candidate in candidates:
        if candidate.hex in weights:
            weights[candidate.hex] += candidate.weight
        else:
            weights[candidate.hex] = candidate.weight
    return weights


def weights_by_source(candidates: Iterable[ColorCandidate]) -> Dict[str, Dict[str, int]]:
    """Per-source weight totals, {source: {hex: weight}}, in observation order."""
    breakdown: Dict[str, Dict[str, int]] = {}
    for candidate in candidates:
        per_hex = breakdown.setdefault(candidate.source or "unknown", {})
        per_hex[candidate.hex] = per_hex.get(candidate.hex, 0) + candidate.weight
    return breakdown


def rank_palette(candidates: Iterable[ColorCandidate], limit: int = MAX_PALETTE_COLORS) -> List[str]:
    weights = accumulate_weights(candidates)
    # sorted() is stable, so equal weights keep first-observed order
    ranked = sorted(weights.items(), key=lambda item: item[1], reverse=True)
    return [hex_color for hex_color, _ in ranked[:limit]]


def aggregate_palette(tree: PageTree) -> Palette:
    candidates = collect_color_candidates(tree)
    entries = rank_palette(candidates)
    background = to_hex(tree.computed_style(tree.body, "background-color"))
    logger.debug(
        f"Palette from {len(candidates)} observations: {entries} by source {weights_by_source(candidates)}"
    )
    return Palette(
        primary=entries[0] if entries else FALLBACK_PRIMARY,
        background=background,
        entries=entries,
    )
