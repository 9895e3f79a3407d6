"""
Device presets offered by the screenshot tools
"""

from typing import Optional, Tuple

from .models import DevicePreset

DESKTOP = DevicePreset(name="Desktop", viewport_width=1920, viewport_height=1080)
IPAD = DevicePreset(name="iPad", viewport_width=820, viewport_height=1180, device_scale_factor=2)
MOBILE = DevicePreset(name="Mobile", viewport_width=390, viewport_height=844, device_scale_factor=3)

# Not a real device: captures the whole page at the provider's default width
FULL_PAGE = DevicePreset(name="Full Page", full_page=True)

SCREENSHOT_DEVICES: Tuple[DevicePreset, ...] = (DESKTOP, IPAD, MOBILE)


def find_device(name: Optional[str]) -> Optional[DevicePreset]:
    """Look up a catalog device by its exact name"""
    if not name:
        return None
    for device in SCREENSHOT_DEVICES:
        if device.name == name:
            return device
    return None
