"""
One brand analysis request: render, extract, classify.

The renderer is scoped to the request with ``async with`` and released on
every exit path. Credentials are re-read for each request so a key added to
the environment takes effect without rebuilding the service.
"""

from typing import Callable, Optional, Sequence
from urllib.parse import urlparse

from agents.brand.exceptions import InvalidTargetError
from agents.brand.signal_extractor import extract_brand_signals
from agents.brand.vibe_classifier import DEFAULT_VIBE_BACKENDS, VibeBackend, VibeCredentials, classify_vibe
from models.brand import ExtractionResult
from services.page_renderer import IPageRenderer, get_page_renderer
from setup_logging_optimized import get_logger

logger = get_logger(__name__)

ALLOWED_SCHEMES = ("http", "https")


def validate_target_url(url: Optional[str]) -> str:
    """Return the trimmed URL, or raise InvalidTargetError if it is not absolute http(s)."""
    target = (url or "").strip()
    if not target:
        raise InvalidTargetError("URL is required")
    parsed = urlparse(target)
    if parsed.scheme.lower() not in ALLOWED_SCHEMES or not parsed.netloc:
        raise InvalidTargetError(
            "URL must be an absolute http(s) URL",
            context={"url": target},
        )
    return target


class BrandAnalysisService:
    def __init__(
        self,
        renderer_factory: Callable[[], IPageRenderer] = get_page_renderer,
        credentials_provider: Callable[[], VibeCredentials] = VibeCredentials.from_env,
        backends: Sequence[VibeBackend] = DEFAULT_VIBE_BACKENDS,
    ):
        self.renderer_factory = renderer_factory
        self.credentials_provider = credentials_provider
        self.backends = backends

    async def analyze(self, url: Optional[str]) -> ExtractionResult:
        target = validate_target_url(url)
        logger.info(f"Starting analysis for: {target}")

        async with self.renderer_factory() as renderer:
            tree = await renderer.render(target)
            signals = extract_brand_signals(tree)
            vibe = await classify_vibe(signals.digest.raw_text, self.credentials_provider(), self.backends)

        logger.info(f"Analysis complete for {target}: tone={vibe.tone!r}")
        return ExtractionResult.from_signals(signals, vibe)
