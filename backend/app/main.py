import logging
from contextlib import asynccontextmanager
from typing import Type, TypeVar

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.requests import Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError

from .config import settings
from .devices import FULL_PAGE, SCREENSHOT_DEVICES, find_device
from .models import FullPageScreenshotRequest, ScreenshotsRequest, ScrollingScreenshotRequest
from .screenshot_service import ScreenshotService
from .utils import configure_logging, format_validation_error

logger = logging.getLogger(__name__)

RequestModel = TypeVar("RequestModel", bound=BaseModel)

# Global screenshot service instance
screenshot_service = ScreenshotService()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    configure_logging(settings.LOG_LEVEL)
    if screenshot_service.health_check():
        logger.info("Screenshot tools API started")
    else:
        logger.warning("ScreenshotOne credentials are missing, screenshot routes will fail")
    yield
    # Shutdown
    logger.info("Screenshot tools API stopped")


# Create FastAPI app
app = FastAPI(
    title="Screenshot Tools API",
    description="Signed ScreenshotOne URLs for the screenshot tools",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)


async def parse_request(request: Request, model: Type[RequestModel]) -> RequestModel:
    body = await request.json()
    return model.model_validate(body)


def dump(screenshot) -> dict:
    return screenshot.model_dump(by_alias=True, exclude_none=True)


def validation_failed(message: str) -> JSONResponse:
    return JSONResponse({"success": False, "message": message})


def internal_error() -> JSONResponse:
    return JSONResponse({"success": False, "message": "Internal application error"}, status_code=500)


@app.get("/api/health")
async def health_check():
    """Health check endpoint"""
    is_healthy = screenshot_service.health_check()
    return {
        "status": "healthy" if is_healthy else "unhealthy",
        "service": "screenshot-tools-api"
    }


@app.get("/api/devices")
async def list_devices():
    """Device presets the tools can render"""
    return {
        "devices": [dump(device) for device in SCREENSHOT_DEVICES],
        "fullPage": dump(FULL_PAGE),
    }


@app.post("/tools/screenshots-for-dimensions/api")
async def screenshots_for_dimensions(request: Request):
    """Render a website on every device preset"""
    try:
        generate_request = await parse_request(request, ScreenshotsRequest)
        screenshots = screenshot_service.generate_screenshots(generate_request.website)
        return {"success": True, "screenshots": [dump(s) for s in screenshots]}

    except ValidationError as e:
        return validation_failed(format_validation_error(e))
    except Exception:
        logger.exception("Screenshots for dimensions failed")
        return internal_error()


@app.get("/tools/screenshots-for-dimensions/example")
async def example_screenshots_for_dimensions():
    try:
        screenshots = screenshot_service.generate_example_screenshots()
        return {
            "success": True,
            "exampleUrl": screenshot_service.example_url,
            "screenshots": [dump(s) for s in screenshots],
        }
    except Exception:
        logger.exception("Example screenshots failed")
        return internal_error()


@app.post("/tools/full-page-screenshot/api")
async def full_page_screenshot(request: Request):
    """Render a full page screenshot, optionally at a device's scale"""
    try:
        generate_request = await parse_request(request, FullPageScreenshotRequest)
        device = find_device(generate_request.device_name) or FULL_PAGE
        screenshot = screenshot_service.generate_screenshot(generate_request.website, device.as_full_page())
        return {"success": True, "screenshot": dump(screenshot)}

    except ValidationError as e:
        return validation_failed(format_validation_error(e))
    except Exception:
        logger.exception("Full page screenshot failed")
        return internal_error()


@app.get("/tools/full-page-screenshot/example")
async def example_full_page_screenshot():
    try:
        screenshot = screenshot_service.generate_example_screenshot()
        return {
            "success": True,
            "exampleUrl": screenshot_service.example_url,
            "screenshot": dump(screenshot),
        }
    except Exception:
        logger.exception("Example full page screenshot failed")
        return internal_error()


@app.post("/tools/scrolling-screenshots/api")
async def scrolling_screenshots(request: Request):
    """Render an animated scroll through a website"""
    try:
        generate_request = await parse_request(request, ScrollingScreenshotRequest)
        device = find_device(generate_request.device)
        if device is None:
            return validation_failed(f"device: Unknown device '{generate_request.device}'")

        screenshot = screenshot_service.scrolling_screenshot(
            generate_request.website, device, generate_request.format
        )
        return {"success": True, "screenshots": [dump(screenshot)]}

    except ValidationError as e:
        return validation_failed(format_validation_error(e))
    except Exception:
        logger.exception("Scrolling screenshot failed")
        return internal_error()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
