"""
Headless-browser renderer using Playwright.

This module provides a BrowserCrawler class that loads a page in an isolated
browser context with a mobile viewport, waits for network activity to settle
and captures the rendered markup together with the layout and style
measurements the document feature extractor needs.
"""
import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Optional

from playwright.async_api import async_playwright

from .browser_config import BrowserConfig
from .errors import RenderError
from .models import RenderMetrics

logger = logging.getLogger(__name__)

_RENDER_METRICS_SCRIPT = """
    () => {
        const body = document.body;
        return {
            viewportWidth: window.innerWidth,
            scrollWidth: body ? body.scrollWidth : 0,
            bodyBackground: body ? window.getComputedStyle(body).backgroundColor : '',
            paragraphColors: Array.from(document.querySelectorAll('p'))
                .map(p => window.getComputedStyle(p).color),
            innerText: body ? body.innerText : '',
        };
    }
"""


@dataclass
class RenderedPage:
    """Snapshot of a page after rendering settled."""

    url: str
    html: str
    status_code: int
    load_time_ms: int
    final_url: Optional[str] = None
    metrics: Optional[RenderMetrics] = None


class BrowserCrawler:
    """
    Playwright-based renderer for single-page analysis.

    This class is designed to be used as an async context manager, managing
    its own browser lifecycle:

        async with BrowserCrawler(config) as crawler:
            page = await crawler.render("https://example.com")

    Each render gets its own browser context, so concurrent renders through
    one crawler share no cookies or storage.
    """

    def __init__(self, config: Optional[BrowserConfig] = None):
        """
        Initialize the browser crawler.

        Args:
            config: BrowserConfig instance with renderer settings
        """
        self._config = config or BrowserConfig()
        self._playwright = None
        self._browser = None

        logger.debug(f"BrowserCrawler initialized with config: {self._config}")

    @property
    def config(self) -> BrowserConfig:
        return self._config

    async def __aenter__(self) -> "BrowserCrawler":
        """Enter async context manager, launching browser."""
        logger.info(f"Launching {self._config.browser_type} browser (headless={self._config.headless})")

        try:
            self._playwright = await async_playwright().start()
            browser_launcher = getattr(self._playwright, self._config.browser_type)

            launch_options = {"headless": self._config.headless}
            if self._config.launch_args:
                launch_options["args"] = self._config.launch_args

            self._browser = await browser_launcher.launch(**launch_options)
        except Exception as e:
            await self._shutdown()
            raise RenderError(f"Failed to launch browser: {e}") from e

        logger.info("Browser launched successfully")
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Exit async context manager, closing browser."""
        await self._shutdown()
        logger.info("Browser closed successfully")

    async def _shutdown(self) -> None:
        try:
            if self._browser:
                logger.info("Closing browser")
                await self._browser.close()
        except Exception as e:
            logger.warning(f"Failed to close browser cleanly: {e}")
        finally:
            # The driver process must stop even if the browser is already gone
            self._browser = None
            if self._playwright:
                playwright, self._playwright = self._playwright, None
                await playwright.stop()

    async def render(self, url: str) -> RenderedPage:
        """
        Render a single URL in a fresh, isolated browser context.

        Args:
            url: Absolute URL to render

        Returns:
            RenderedPage with rendered HTML, status, load time and layout metrics

        Raises:
            RenderError: If the browser is not running, navigation fails or times out
        """
        if not self._browser:
            raise RenderError(
                "Browser is not running. Use BrowserCrawler as an async context manager: "
                "async with BrowserCrawler(config) as crawler:",
                url=url,
            )

        try:
            context = await self._browser.new_context(**self._config.context_options())
        except Exception as e:
            raise RenderError(f"Failed to create browser context: {e}", url=url) from e

        try:
            page = await context.new_page()

            logger.info(f"Rendering: {url}")
            start_time = time.monotonic()

            response = await page.goto(
                url,
                wait_until=self._config.wait_until,
                timeout=self._config.timeout
            )

            load_time_ms = int((time.monotonic() - start_time) * 1000)
            status_code = response.status if response else 0

            html = await page.content()
            metrics = await self._get_render_metrics(page)

            logger.info(f"Render complete: {url} (status={status_code}, time={load_time_ms}ms)")

            return RenderedPage(
                url=url,
                html=html,
                status_code=status_code,
                load_time_ms=load_time_ms,
                final_url=page.url,
                metrics=metrics,
            )

        except Exception as e:
            logger.error(f"Render failed for {url}: {e}")
            raise RenderError(f"Analysis error: {e}", url=url) from e

        finally:
            # Always close context to ensure isolation
            try:
                await context.close()
            except Exception as e:
                logger.warning(f"Failed to close browser context for {url}: {e}")

    async def _get_render_metrics(self, page) -> Optional[RenderMetrics]:
        """Collect viewport fit and colour samples from the rendered page."""
        try:
            raw = await page.evaluate(_RENDER_METRICS_SCRIPT)
        except Exception as e:
            logger.warning(f"Failed to get render metrics: {e}")
            return None

        return RenderMetrics(
            viewport_width=int(raw.get("viewportWidth") or 0),
            scroll_width=int(raw.get("scrollWidth") or 0),
            body_background=raw.get("bodyBackground") or "",
            paragraph_colors=tuple(raw.get("paragraphColors") or ()),
            inner_text=raw.get("innerText"),
        )


def render_sync(config: BrowserConfig, url: str) -> RenderedPage:
    """
    Synchronous wrapper for rendering a single URL.

    Launches a browser, renders the page and tears everything down.

    Args:
        config: BrowserConfig instance
        url: URL to render

    Returns:
        RenderedPage
    """
    async def _render():
        async with BrowserCrawler(config) as crawler:
            return await crawler.render(url)

    return asyncio.run(_render())
