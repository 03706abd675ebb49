"""Theme-specific tools for reading brand signals off a rendered page."""

from .css_colors import to_hex, parse_rgba, is_fully_transparent, is_brand_neutral
from .page_color_aggregator import (
    ColorCandidate,
    collect_color_candidates,
    accumulate_weights,
    rank_palette,
    aggregate_palette
)
from .page_logo_resolver import LOGO_STRATEGIES, resolve_logo
from .typography_resolver import primary_font_family, resolve_typography
from .content_digest import build_content_digest

__all__ = [
    "to_hex",
    "parse_rgba",
    "is_fully_transparent",
    "is_brand_neutral",
    "ColorCandidate",
    "collect_color_candidates",
    "accumulate_weights",
    "rank_palette",
    "aggregate_palette",
    "LOGO_STRATEGIES",
    "resolve_logo",
    "primary_font_family",
    "resolve_typography",
    "build_content_digest"
]
