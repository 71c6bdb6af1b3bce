from fastapi import APIRouter, HTTPException
from fastapi.responses import Response
import logging

from favicon_api.config import DEFAULT_SIZE, MAX_SIZE
from favicon_api.exceptions import (
    DiscoveryFetchFailed,
    FaviconFetchError,
    InvalidTarget,
    NoIconFound,
    TargetUnreachable,
)
from favicon_api.services.favicon_service import get_scaled_favicon
from favicon_api.services.icon_scaler import OUTPUT_MEDIA_TYPE

router = APIRouter()

logger = logging.getLogger(__name__)

FORMAT_HINT = "URL must be in the format /[url-to-website]/[size]"


def parse_size(raw: str) -> int:
    """Parse the size path segment; anything that is not an integer means the default."""
    try:
        size = int(raw)
    except ValueError:
        return DEFAULT_SIZE
    if size > MAX_SIZE:
        raise HTTPException(status_code=400, detail=f"Maximum size is {MAX_SIZE} pixels")
    if size < 1:
        raise HTTPException(status_code=400, detail="Size must be a positive integer")
    return size


@router.get("/{host}", include_in_schema=False)
def missing_size(host: str):
    raise HTTPException(status_code=400, detail=FORMAT_HINT)


@router.get(
    "/{host}/{size}",
    response_class=Response,
    responses={200: {"content": {OUTPUT_MEDIA_TYPE: {}}}},
)
def get_icon(host: str, size: str):
    """Return the favicon of `host` scaled to `size` x `size` pixels as PNG."""
    pixels = parse_size(size)
    try:
        data = get_scaled_favicon(host, pixels)
    except InvalidTarget as e:
        logger.warning(str(e))
        raise HTTPException(status_code=400, detail=str(e))
    except TargetUnreachable as e:
        logger.warning(str(e))
        raise HTTPException(status_code=404, detail="Website is not accessible")
    except NoIconFound as e:
        logger.info(str(e))
        raise HTTPException(status_code=404, detail="No icon found")
    except DiscoveryFetchFailed as e:
        logger.error(f"Error finding icon for {host}: {e}")
        raise HTTPException(status_code=500, detail="Error finding icon")
    except FaviconFetchError as e:
        logger.error(f"Failed to fetch or scale the icon for {host}: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch or scale the icon")
    return Response(content=data, media_type=OUTPUT_MEDIA_TYPE)
