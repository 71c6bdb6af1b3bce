from typing import Optional


class FaviconError(Exception):
    """Base class for every outcome that ends a favicon request early."""


class InvalidTarget(FaviconError):
    pass


class TargetUnreachable(FaviconError):
    def __init__(self, url: str):
        super().__init__(f"Website is not accessible: {url}")
        self.url = url


class NoIconFound(FaviconError):
    """Discovery finished without a candidate. Not a failure of any fetch."""

    def __init__(self, url: str):
        super().__init__(f"No icon found for {url}")
        self.url = url


class FaviconFetchError(FaviconError):
    """A mandatory fetch or decode step failed."""


class DiscoveryFetchFailed(FaviconFetchError):
    def __init__(self, url: str, reason: str):
        super().__init__(f"Failed to fetch {url}: {reason}")
        self.url = url


class IconFetchFailed(FaviconFetchError):
    def __init__(self, url: str, status_code: Optional[int] = None, reason: str = ""):
        if status_code is not None:
            message = f"Failed to fetch the original image {url}: HTTP {status_code}"
        else:
            message = f"Failed to fetch the original image {url}: {reason}"
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class IconDecodeFailed(FaviconFetchError):
    def __init__(self, reason: str):
        super().__init__(f"Could not decode icon: {reason}")
