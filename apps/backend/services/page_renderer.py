"""
Renderers turn a URL into a PageTree.

PlaywrightPageRenderer loads the page in headless Chromium and snapshots the
DOM with computed styles stamped on every element. StaticPageRenderer only
fetches the HTML, so styles come from inline declarations. Both are async
context managers; whatever they hold is released on exit.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import aiohttp
from playwright.async_api import Browser, Playwright, async_playwright

from agents.brand.exceptions import PageRenderError
from agents.config import (
    BROWSER_LAUNCH_ARGS,
    PAGE_RENDERER,
    RENDER_SETTLE_MS,
    RENDER_TIMEOUT_MS,
    RENDER_USER_AGENT,
    RENDER_VIEWPORT,
    STATIC_FETCH_TIMEOUT_S,
)
from services.page_tree import SNAPSHOT_STYLE_ATTR, STYLE_PROPERTIES, PageTree
from setup_logging_optimized import get_logger

logger = get_logger(__name__)

# Stamps computed styles on each element, then returns the serialized DOM.
# Elements are read in document order before any attribute is written.
SNAPSHOT_JS = """
([attr, props]) => {
    const elements = Array.from(document.querySelectorAll('*'));
    const styles = elements.map((el) => {
        const computed = window.getComputedStyle(el);
        const values = {};
        for (const prop of props) values[prop] = computed.getPropertyValue(prop);
        return values;
    });
    elements.forEach((el, i) => el.setAttribute(attr, JSON.stringify(styles[i])));
    const heading = document.querySelector('h1');
    return {
        html: document.documentElement.outerHTML,
        url: window.location.href,
        bodyText: document.body ? document.body.innerText : '',
        headingText: heading ? heading.innerText : null,
    };
}
"""


class IPageRenderer(ABC):
    """Render one page at a time into a PageTree."""

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    @abstractmethod
    async def render(self, url: str) -> PageTree:
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release everything the renderer holds. Safe to call more than once."""
        pass


@dataclass
class RenderOptions:
    timeout_ms: int = RENDER_TIMEOUT_MS
    settle_ms: int = RENDER_SETTLE_MS
    viewport: Dict[str, int] = field(default_factory=lambda: dict(RENDER_VIEWPORT))
    user_agent: str = RENDER_USER_AGENT
    launch_args: List[str] = field(default_factory=lambda: list(BROWSER_LAUNCH_ARGS))


class PlaywrightPageRenderer(IPageRenderer):
    """Headless Chromium renderer; the browser is launched lazily and lives until close()."""

    def __init__(self, options: Optional[RenderOptions] = None):
        self.options = options or RenderOptions()
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None

    async def _get_browser(self) -> Browser:
        if self._browser is None:
            logger.info("Launching headless Chromium")
            self._playwright = await async_playwright().start()
            self._browser = await self._playwright.chromium.launch(
                headless=True,
                args=self.options.launch_args,
            )
        return self._browser

    async def render(self, url: str) -> PageTree:
        try:
            browser = await self._get_browser()
            context = await browser.new_context(
                viewport=self.options.viewport,
                user_agent=self.options.user_agent,
            )
            try:
                page = await context.new_page()
                logger.info(f"Navigating to {url}")
                await page.goto(url, wait_until="domcontentloaded", timeout=self.options.timeout_ms)
                await page.wait_for_timeout(self.options.settle_ms)
                snapshot: Dict[str, Any] = await page.evaluate(
                    SNAPSHOT_JS, [SNAPSHOT_STYLE_ATTR, list(STYLE_PROPERTIES)]
                )
            finally:
                await context.close()
        except Exception as e:
            logger.error(f"Failed to render {url}: {e}")
            raise PageRenderError(str(e) or "Failed to render page", cause=e, context={"url": url})

        logger.debug(f"Snapshot of {snapshot.get('url')}: {len(snapshot.get('html') or '')} chars")
        return PageTree.from_snapshot(snapshot)

    async def close(self) -> None:
        browser, self._browser = self._browser, None
        playwright, self._playwright = self._playwright, None
        try:
            if browser is not None:
                await browser.close()
        finally:
            if playwright is not None:
                await playwright.stop()
                logger.debug("Playwright stopped")


class StaticPageRenderer(IPageRenderer):
    """Plain HTTP fetch; no scripts run and styles come from markup only."""

    def __init__(self, timeout_s: float = STATIC_FETCH_TIMEOUT_S, user_agent: str = RENDER_USER_AGENT):
        self.timeout_s = timeout_s
        self.user_agent = user_agent
        self._session: Optional[aiohttp.ClientSession] = None

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            timeout = aiohttp.ClientTimeout(total=self.timeout_s)
            self._session = aiohttp.ClientSession(timeout=timeout)
        return self._session

    async def render(self, url: str) -> PageTree:
        try:
            session = await self._get_session()
            async with session.get(url, headers={"User-Agent": self.user_agent}) as resp:
                if resp.status != 200:
                    raise PageRenderError(f"HTTP {resp.status}", context={"url": url})
                content_type = resp.headers.get("Content-Type", "")
                if "html" not in content_type.lower():
                    raise PageRenderError(f"Unsupported content type: {content_type or 'unknown'}", context={"url": url})
                html = await resp.text(errors="ignore")
                final_url = str(resp.url)
        except PageRenderError:
            raise
        except Exception as e:
            logger.error(f"Failed to fetch {url}: {e}")
            raise PageRenderError(str(e) or "Failed to fetch page", cause=e, context={"url": url})

        return PageTree(html, url=final_url)

    async def close(self) -> None:
        if self._session and not self._session.closed:
            await self._session.close()
        self._session = None


RENDERERS = {
    "playwright": PlaywrightPageRenderer,
    "static": StaticPageRenderer,
}


def get_page_renderer(kind: Optional[str] = None) -> IPageRenderer:
    """Build a fresh renderer; callers own it and must close it."""
    kind = (kind or PAGE_RENDERER).lower()
    renderer_class = RENDERERS.get(kind)
    if renderer_class is None:
        raise ValueError(f"Unknown page renderer '{kind}', expected one of {sorted(RENDERERS)}")
    return renderer_class()
