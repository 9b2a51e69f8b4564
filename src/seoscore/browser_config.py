"""
Browser configuration for Playwright-based rendering.

This module provides a validated Pydantic configuration model for the
headless renderer. The viewport is a fixed mobile device so that every
rendered analysis measures the same layout.
"""
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from .constants import (
    DEFAULT_RENDER_TIMEOUT_MS,
    MOBILE_DEVICE_SCALE_FACTOR,
    MOBILE_VIEWPORT_HEIGHT,
    MOBILE_VIEWPORT_WIDTH,
)

MOBILE_USER_AGENT = (
    "Mozilla/5.0 (iPhone; CPU iPhone OS 17_0 like Mac OS X) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Version/17.0 Mobile/15E148 Safari/604.1"
)


class BrowserConfig(BaseModel):
    """
    Configuration for the Playwright-based BrowserCrawler.

    All fields are validated by Pydantic to ensure type safety and valid values.
    """

    headless: bool = Field(
        default=True,
        description="Run browser in headless mode (no visible UI)"
    )

    browser_type: Literal["chromium", "firefox", "webkit"] = Field(
        default="chromium",
        description="Browser engine to use for rendering"
    )

    timeout: int = Field(
        default=DEFAULT_RENDER_TIMEOUT_MS,
        description="Page load timeout in milliseconds",
        ge=1000,
        le=300000
    )

    wait_until: Literal["load", "domcontentloaded", "networkidle", "commit"] = Field(
        default="networkidle",
        description="When to consider navigation complete"
    )

    viewport_width: int = Field(
        default=MOBILE_VIEWPORT_WIDTH,
        description="Viewport width in CSS pixels",
        ge=200
    )

    viewport_height: int = Field(
        default=MOBILE_VIEWPORT_HEIGHT,
        description="Viewport height in CSS pixels",
        ge=200
    )

    device_scale_factor: float = Field(
        default=MOBILE_DEVICE_SCALE_FACTOR,
        description="Device pixel ratio",
        gt=0
    )

    has_touch: bool = Field(
        default=True,
        description="Emulate a touch screen"
    )

    is_mobile: bool = Field(
        default=True,
        description="Emulate a mobile device (meta viewport is honoured)"
    )

    user_agent: Optional[str] = Field(
        default=None,
        description="Custom user agent. If None, a mobile Safari agent is used."
    )

    launch_args: List[str] = Field(
        default_factory=lambda: ["--no-sandbox", "--disable-setuid-sandbox"],
        description="Additional browser launch arguments"
    )

    class Config:
        """Pydantic model configuration."""
        frozen = False
        validate_assignment = True

    def get_user_agent(self) -> str:
        """Get the user agent to use for this config."""
        return self.user_agent or MOBILE_USER_AGENT

    def context_options(self) -> dict:
        """Keyword arguments for ``browser.new_context``."""
        return {
            "viewport": {"width": self.viewport_width, "height": self.viewport_height},
            "device_scale_factor": self.device_scale_factor,
            "has_touch": self.has_touch,
            "is_mobile": self.is_mobile,
            "user_agent": self.get_user_agent(),
            "locale": "en-US",
            "java_script_enabled": True,
        }


DEFAULT_CONFIG = BrowserConfig()
"""
Default rendering configuration: headless Chromium, 375x812 mobile viewport,
waits for network idle with a 30 second ceiling.
"""
