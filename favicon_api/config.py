"""Application configuration read from the environment."""

import os

# ============================================================================
# Icon size limits
# ============================================================================

DEFAULT_SIZE = int(os.getenv("FAVICON_DEFAULT_SIZE", 64))
MAX_SIZE = int(os.getenv("FAVICON_MAX_SIZE", 512))

# ============================================================================
# Outbound HTTP
# ============================================================================

REQUEST_TIMEOUT = float(os.getenv("FAVICON_REQUEST_TIMEOUT", 10))
USER_AGENT = os.getenv(
    "FAVICON_USER_AGENT",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/129.0.0.0 Safari/537.36 FaviconScaler/1.0",
)

# ============================================================================
# Discovery
# ============================================================================

WELL_KNOWN_ICON_PATHS = ("favicon.ico", "favicon.png", "apple-touch-icon.png")

# {url} is the target base URL, {size} the size hint sent to the service.
FALLBACK_SERVICE_URL = os.getenv(
    "FAVICON_FALLBACK_URL",
    "https://t3.gstatic.com/faviconV2?client=SOCIAL&type=FAVICON"
    "&fallback_opts=TYPE,SIZE,URL&url={url}&size={size}",
)
FALLBACK_SIZE_HINT = 128

# ============================================================================
# Logging
# ============================================================================

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

APP_NAME = "Favicon Scaler"

# ============================================================================
# API
# ============================================================================

API_HOST = os.getenv("API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("API_PORT", 8080))
