"""
Icon discovery: an ordered chain of strategies, first hit wins.

Each strategy is a plain function taking a DiscoveryContext and returning an
absolute icon URL or None. Failures inside a strategy are logged and turn
into None so the chain moves on; only the root document fetch is fatal.
"""

from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple
from urllib.parse import urljoin, urlparse
import logging

import requests
from bs4 import BeautifulSoup

from favicon_api.config import (
    FALLBACK_SERVICE_URL,
    FALLBACK_SIZE_HINT,
    REQUEST_TIMEOUT,
    WELL_KNOWN_ICON_PATHS,
)
from favicon_api.exceptions import DiscoveryFetchFailed
from favicon_api.models import TargetSite
from favicon_api.services.http_session import create_session, url_exists

logger = logging.getLogger(__name__)

# rel tokens in priority order; "manifest" points at a JSON document, not an icon
LINK_RELS = ("apple-touch-icon", "icon", "shortcut icon", "manifest")


@dataclass
class DiscoveryContext:
    site: TargetSite
    session: requests.Session
    soup: BeautifulSoup
    fallback_template: str = FALLBACK_SERVICE_URL
    timeout: float = REQUEST_TIMEOUT

    @property
    def base_url(self) -> str:
        return self.site.base_url


def normalize_icon_url(link: str, base_url: str) -> str:
    """Return link as an absolute http(s) URL, resolving it against base_url if needed."""
    link = link.strip()
    if link.startswith(("http://", "https://")):
        return link
    full_url = urljoin(base_url, link)
    parsed = urlparse(full_url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError(f"Cannot build an http(s) URL from {link!r}")
    return full_url


def _rel_tokens(tag) -> List[str]:
    rel = tag.get("rel") or []
    if isinstance(rel, str):
        rel = rel.split()
    return [token.lower() for token in rel]


def _find_link_elements(soup: BeautifulSoup, rel: str):
    # rel values are case-insensitive; a single token matches any element
    # listing it, the two-word form matches the whole attribute value
    if " " in rel:
        return soup.find_all(lambda tag: tag.name == "link" and " ".join(_rel_tokens(tag)) == rel)
    return soup.find_all(lambda tag: tag.name == "link" and rel in _rel_tokens(tag))


def process_manifest(
    manifest_url: str,
    base_url: str,
    session: requests.Session,
    timeout: float = REQUEST_TIMEOUT,
) -> Optional[str]:
    """Read a web app manifest and return the first icon src it lists, made absolute."""
    try:
        resp = session.get(manifest_url, timeout=timeout)
    except requests.exceptions.RequestException as e:
        logger.warning(f"Failed to fetch manifest {manifest_url}: {e}")
        return None
    try:
        manifest = resp.json()
    except ValueError as e:
        logger.warning(f"Manifest {manifest_url} is not valid JSON: {e}")
        return None

    if not isinstance(manifest, dict):
        logger.warning(f"Manifest {manifest_url} is not a JSON object")
        return None
    icons = manifest.get("icons")
    if not isinstance(icons, list):
        logger.info(f"Manifest {manifest_url} has no icons array")
        return None

    for icon in icons:
        if not isinstance(icon, dict):
            continue
        src = icon.get("src")
        if isinstance(src, str) and src.strip():
            try:
                return normalize_icon_url(src, base_url)
            except ValueError as e:
                logger.warning(f"Bad icon src {src!r} in manifest {manifest_url}: {e}")
                return None
    return None


def from_link_tags(ctx: DiscoveryContext) -> Optional[str]:
    for rel in LINK_RELS:
        logger.debug(f"Searching for icons of type: {rel}")
        for element in _find_link_elements(ctx.soup, rel):
            href = element.get("href")
            if not href or not href.strip():
                continue
            try:
                full_url = normalize_icon_url(href, ctx.base_url)
            except ValueError as e:
                logger.warning(f"Skipping malformed {rel} link {href!r}: {e}")
                continue
            if rel == "manifest":
                icon_url = process_manifest(full_url, ctx.base_url, ctx.session, ctx.timeout)
                if icon_url:
                    logger.info(f"Icon found in manifest {full_url}: {icon_url}")
                    return icon_url
                continue
            logger.info(f"Icon found: {full_url}")
            return full_url
    return None


def from_well_known_paths(ctx: DiscoveryContext) -> Optional[str]:
    for path in WELL_KNOWN_ICON_PATHS:
        icon_url = urljoin(ctx.base_url + "/", path)
        if url_exists(icon_url, ctx.session, ctx.timeout):
            logger.info(f"Icon found in well-known location: {icon_url}")
            return icon_url
        logger.debug(f"Failed to find icon in well-known location: {icon_url}")
    return None


def from_open_graph(ctx: DiscoveryContext) -> Optional[str]:
    og_image = ctx.soup.find("meta", attrs={"property": "og:image"})
    if not og_image or not og_image.get("content", "").strip():
        return None
    try:
        full_url = normalize_icon_url(og_image["content"], ctx.base_url)
    except ValueError as e:
        logger.warning(f"Skipping malformed og:image {og_image['content']!r}: {e}")
        return None
    logger.info(f"OG Image found: {full_url}")
    return full_url


def from_fallback_service(ctx: DiscoveryContext) -> Optional[str]:
    fallback_url = ctx.fallback_template.format(url=ctx.base_url, size=FALLBACK_SIZE_HINT)
    if url_exists(fallback_url, ctx.session, ctx.timeout):
        logger.info(f"Icon found using fallback service: {fallback_url}")
        return fallback_url
    logger.info(f"Failed to verify icon at fallback service: {fallback_url}")
    return None


STRATEGIES: Tuple[Callable[[DiscoveryContext], Optional[str]], ...] = (
    from_link_tags,
    from_well_known_paths,
    from_open_graph,
    from_fallback_service,
)


def fetch_root_document(
    site: TargetSite,
    session: requests.Session,
    timeout: float = REQUEST_TIMEOUT,
) -> BeautifulSoup:
    try:
        resp = session.get(site.base_url, timeout=timeout, allow_redirects=True)
    except requests.exceptions.RequestException as e:
        logger.error(f"Failed to fetch HTML for {site.base_url}: {e}")
        raise DiscoveryFetchFailed(site.base_url, str(e)) from e
    return BeautifulSoup(resp.text, "html.parser")


def find_icon_url(
    site: TargetSite,
    session: Optional[requests.Session] = None,
    fallback_template: Optional[str] = None,
    timeout: float = REQUEST_TIMEOUT,
) -> Optional[str]:
    """
    Find one absolute icon URL for the site, or None when every strategy
    comes up empty.

    Raises DiscoveryFetchFailed if the site's root document cannot be fetched.
    """
    own_session = session is None
    session = session or create_session()
    try:
        logger.info(f"Fetching icon from URL: {site.base_url}")
        ctx = DiscoveryContext(
            site=site,
            session=session,
            soup=fetch_root_document(site, session, timeout),
            fallback_template=fallback_template or FALLBACK_SERVICE_URL,
            timeout=timeout,
        )
        for strategy in STRATEGIES:
            icon_url = strategy(ctx)
            if icon_url:
                return icon_url
        logger.info(f"No icon found for URL: {site.base_url}")
        return None
    finally:
        if own_session:
            session.close()
