"""Run every page extractor over one tree and merge the results."""

from agents.brand.exceptions import SignalExtractionError
from agents.tools.theme import aggregate_palette, build_content_digest, resolve_logo, resolve_typography
from models.brand import BrandSignals
from services.page_tree import PageTree
from setup_logging_optimized import get_logger

logger = get_logger(__name__)


def extract_brand_signals(tree: PageTree) -> BrandSignals:
    """Palette, logo, typography and digest from the same snapshot.

    Finding nothing is a valid outcome (empty palette, no logo). Only an
    unexpected exception from an extractor is an error.
    """
    try:
        signals = BrandSignals(
            palette=aggregate_palette(tree),
            typography=resolve_typography(tree),
            logo=resolve_logo(tree),
            digest=build_content_digest(tree),
        )
    except Exception as e:
        logger.error(f"Signal extraction failed for {tree.url}: {e}")
        raise SignalExtractionError("Failed to extract brand signals", cause=e, context={"url": tree.url})

    logger.info(
        f"Extracted signals: primary={signals.palette.primary} "
        f"palette={len(signals.palette.entries)} "
        f"fonts={signals.typography.heading}/{signals.typography.body} "
        f"logo={'yes' if signals.logo else 'no'}"
    )
    return signals
