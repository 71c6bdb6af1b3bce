from typing import Optional
import io
import logging

import requests
from PIL import Image

from favicon_api.config import REQUEST_TIMEOUT
from favicon_api.exceptions import IconDecodeFailed, IconFetchFailed
from favicon_api.services.http_session import create_session

logger = logging.getLogger(__name__)

OUTPUT_FORMAT = "PNG"
OUTPUT_MEDIA_TYPE = "image/png"


def resize_image(image_data: bytes, size: int) -> bytes:
    """
    Decode image_data, resample it to exactly size x size with nearest
    neighbour and return it PNG-encoded. Aspect ratio is not preserved.
    """
    try:
        img = Image.open(io.BytesIO(image_data))
        img.load()
    except (OSError, Image.DecompressionBombError) as e:
        logger.warning(f"Failed to decode image ({len(image_data)} bytes): {e}")
        raise IconDecodeFailed(str(e)) from e

    if img.mode not in ("RGB", "RGBA"):
        has_alpha = "A" in img.mode or "transparency" in img.info
        img = img.convert("RGBA" if has_alpha else "RGB")

    scaled = img.resize((size, size), Image.Resampling.NEAREST)
    result = io.BytesIO()
    scaled.save(result, OUTPUT_FORMAT)
    logger.info(f"Resized image from {img.size[0]}x{img.size[1]} to {size}x{size}")
    return result.getvalue()


def fetch_and_scale_icon(
    icon_url: str,
    size: int,
    session: Optional[requests.Session] = None,
    timeout: float = REQUEST_TIMEOUT,
) -> bytes:
    """Fetch the icon at icon_url and return it rescaled to size x size PNG bytes."""
    own_session = session is None
    session = session or create_session()
    try:
        resp = session.get(icon_url, timeout=timeout, allow_redirects=True)
    except requests.exceptions.RequestException as e:
        logger.warning(f"Failed to download {icon_url}: {e}")
        raise IconFetchFailed(icon_url, reason=str(e)) from e
    finally:
        if own_session:
            session.close()

    if not 200 <= resp.status_code < 300:
        logger.warning(f"Failed to download {icon_url}: HTTP {resp.status_code}")
        raise IconFetchFailed(icon_url, status_code=resp.status_code)

    return resize_image(resp.content, size)
