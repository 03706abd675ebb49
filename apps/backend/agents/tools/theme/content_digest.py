"""Heading, meta description and a body excerpt for the vibe classifier."""

from agents.config import CONTENT_EXCERPT_LIMIT
from models.brand import ContentDigest
from services.page_tree import PageTree


def build_content_digest(tree: PageTree, excerpt_limit: int = CONTENT_EXCERPT_LIMIT) -> ContentDigest:
    description_meta = tree.select_one('meta[name="description"]')
    return ContentDigest(
        heading=tree.visible_text(tree.first_heading),
        description=tree.attribute(description_meta, "content"),
        # Hard character cap, not word-aware
        excerpt=tree.visible_text(tree.body)[:excerpt_limit],
    )
