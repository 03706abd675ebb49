"""Body and heading font families from computed styles."""

from models.brand import Typography
from services.page_tree import PageTree


def primary_font_family(stack: str) -> str:
    """First family of a font stack with quotes removed: '"Inter", sans-serif' -> 'Inter'."""
    return (stack or "").split(",")[0].replace('"', "").replace("'", "")


def resolve_typography(tree: PageTree) -> Typography:
    body_font = primary_font_family(tree.computed_style(tree.body, "font-family"))
    heading = tree.first_heading
    heading_font = primary_font_family(tree.computed_style(heading, "font-family")) if heading is not None else body_font
    return Typography(heading=heading_font, body=body_font)
