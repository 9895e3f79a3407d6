from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, field_validator, model_validator
from pydantic.alias_generators import to_camel

from .utils import is_valid_website


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys, as the tool pages expect"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DevicePreset(CamelModel):
    model_config = ConfigDict(frozen=True)

    name: str
    viewport_width: Optional[int] = None
    viewport_height: Optional[int] = None
    device_scale_factor: Optional[int] = None
    full_page: bool = False

    def as_full_page(self) -> "DevicePreset":
        """Copy of this preset switched to full-page capture"""
        return self.model_copy(update={"full_page": True})


class ScreenshotRequest(BaseModel):
    """Everything ScreenshotOne needs to render one screenshot"""

    url: str
    device: str
    cache_key: str
    cache_ttl: int
    device_scale_factor: int = 1
    full_page: bool = False
    viewport_width: Optional[int] = None
    viewport_height: Optional[int] = None

    block_chats: bool = True
    block_cookie_banners: bool = True
    block_ads: bool = True
    block_banners_by_heuristics: bool = False
    reduced_motion: bool = True
    cache: bool = True

    @model_validator(mode="after")
    def check_viewport_mode(self) -> "ScreenshotRequest":
        if self.full_page and (self.viewport_width or self.viewport_height):
            raise ValueError("full page screenshots cannot have a fixed viewport")
        return self

    def query(self) -> dict:
        """Provider query parameters in signing order, without the target url"""
        params = {
            "block_chats": self.block_chats,
            "block_cookie_banners": self.block_cookie_banners,
            "block_ads": self.block_ads,
            "cache": self.cache,
            "block_banners_by_heuristics": self.block_banners_by_heuristics,
            "cache_key": self.cache_key,
            "cache_ttl": self.cache_ttl,
            "reduced_motion": self.reduced_motion,
            "device_scale_factor": self.device_scale_factor,
        }
        if self.full_page:
            params["full_page"] = True
        else:
            params["viewport_width"] = self.viewport_width or 0
            params["viewport_height"] = self.viewport_height or 0
        return params


class Screenshot(CamelModel):
    url: str
    viewport_width: Optional[int] = None
    viewport_height: Optional[int] = None
    device: str
    format: Optional[str] = None


class ScreenshotsRequest(CamelModel):
    website: str

    @field_validator("website")
    @classmethod
    def check_website(cls, value: str) -> str:
        if not is_valid_website(value):
            raise ValueError("Invalid url")
        return value


class FullPageScreenshotRequest(ScreenshotsRequest):
    device_name: Optional[str] = None


class ScrollingScreenshotRequest(ScreenshotsRequest):
    device: str
    format: Literal["mp4", "gif", "webm"]
