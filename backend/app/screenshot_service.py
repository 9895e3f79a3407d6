"""
Screenshot service backed by the ScreenshotOne API
Builds cache-aware render requests from device presets and signs them.
The API never downloads images; browsers load them from ScreenshotOne directly.
"""

import logging
import threading
from typing import List, Optional

from screenshotone import Client, TakeOptions

from .config import Settings, settings as app_settings
from .devices import FULL_PAGE, SCREENSHOT_DEVICES
from .models import DevicePreset, Screenshot, ScreenshotRequest
from .utils import cache_policy, sign_query

logger = logging.getLogger(__name__)

API_ANIMATE_URL = "https://api.screenshotone.com/animate"
SCROLLING_FORMATS = ("mp4", "gif", "webm")


class ScreenshotService:
    """Maps device presets onto signed ScreenshotOne URLs"""

    def __init__(self, settings: Optional[Settings] = None, client: Optional[Client] = None):
        self.settings = settings or app_settings
        self._client = client
        self._client_lock = threading.Lock()

    @property
    def client(self) -> Client:
        """Shared ScreenshotOne client, created on first use"""
        if self._client is None:
            with self._client_lock:
                if self._client is None:
                    access_key, secret_key = self.settings.screenshotone_keys()
                    self._client = Client(access_key, secret_key)
                    logger.info("ScreenshotOne client initialized")
        return self._client

    @property
    def example_url(self) -> str:
        return self.settings.SCREENSHOT_EXAMPLE_URL

    def health_check(self) -> bool:
        """Healthy when ScreenshotOne credentials are available"""
        return self._client is not None or self.settings.screenshotone_configured

    def build_request(self, url: str, preset: DevicePreset) -> ScreenshotRequest:
        cache_key, cache_ttl = cache_policy(url, self.example_url)
        scale = 1 if preset.device_scale_factor is None else preset.device_scale_factor

        if preset.full_page:
            return ScreenshotRequest(
                url=url,
                device=preset.name,
                cache_key=cache_key,
                cache_ttl=cache_ttl,
                device_scale_factor=scale,
                full_page=True,
            )

        return ScreenshotRequest(
            url=url,
            device=preset.name,
            cache_key=cache_key,
            cache_ttl=cache_ttl,
            device_scale_factor=scale,
            viewport_width=preset.viewport_width or 0,
            viewport_height=preset.viewport_height or 0,
        )

    def take_options(self, request: ScreenshotRequest) -> TakeOptions:
        options = (
            TakeOptions.url(request.url)
            .block_chats(request.block_chats)
            .block_cookie_banners(request.block_cookie_banners)
            .block_ads(request.block_ads)
            .cache(request.cache)
            .block_banners_by_heuristics(request.block_banners_by_heuristics)
            .cache_key(request.cache_key)
            .cache_ttl(request.cache_ttl)
            .reduced_motion(request.reduced_motion)
            .device_scale_factor(request.device_scale_factor)
        )
        if request.full_page:
            options.full_page(True)
        else:
            options.viewport_width(request.viewport_width)
            options.viewport_height(request.viewport_height)
        return options

    def sign(self, request: ScreenshotRequest) -> str:
        signed_url = self.client.generate_take_url(self.take_options(request))
        logger.debug("Signed screenshot URL for %s (%s): %s", request.url, request.device, signed_url)
        return signed_url

    def screenshot_url(self, url: str, preset: DevicePreset) -> str:
        """Signed /take URL for url rendered with preset"""
        return self.sign(self.build_request(url, preset))

    def screenshot(self, url: str, preset: DevicePreset) -> Screenshot:
        request = self.build_request(url, preset)
        return Screenshot(
            url=self.sign(request),
            viewport_width=request.viewport_width,
            viewport_height=request.viewport_height,
            device=request.device,
        )

    def generate_screenshots(self, url: str) -> List[Screenshot]:
        """One screenshot per catalog device"""
        return [self.screenshot(url, device) for device in SCREENSHOT_DEVICES]

    def generate_screenshot(self, url: str, preset: DevicePreset = FULL_PAGE) -> Screenshot:
        return self.screenshot(url, preset)

    def generate_example_screenshots(self) -> List[Screenshot]:
        return self.generate_screenshots(self.example_url)

    def generate_example_screenshot(self) -> Screenshot:
        return self.generate_screenshot(self.example_url)

    def scrolling_screenshot(self, url: str, preset: DevicePreset, format: str) -> Screenshot:
        """Signed /animate URL that scrolls through url and records it as format.

        The SDK only covers /take, so the query is signed here the same way
        the SDK signs its take URLs.
        """
        if format not in SCROLLING_FORMATS:
            raise ValueError(f"Unsupported scrolling screenshot format: {format}")

        request = self.build_request(url, preset)
        query = {"url": request.url, "scenario": "scroll", "format": format}
        query.update(request.query())
        query["access_key"] = self.client.access_key

        signed_url = f"{API_ANIMATE_URL}?{sign_query(query, self.client.secret_key)}"
        logger.debug("Signed scrolling screenshot URL for %s (%s, %s): %s", url, preset.name, format, signed_url)
        return Screenshot(
            url=signed_url,
            viewport_width=request.viewport_width,
            viewport_height=request.viewport_height,
            device=request.device,
            format=format,
        )
