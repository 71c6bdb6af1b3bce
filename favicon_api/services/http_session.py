import logging

import cloudscraper
import requests

from favicon_api.config import REQUEST_TIMEOUT, USER_AGENT

logger = logging.getLogger(__name__)


def create_session() -> requests.Session:
    """
    Build the session used for every outbound call of one favicon request.
    cloudscraper returns a requests.Session subclass that gets past
    Cloudflare's browser check on the root document.
    """
    scraper = cloudscraper.create_scraper()
    scraper.headers.update(
        {
            "User-Agent": USER_AGENT,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
            "Accept-Encoding": "gzip, deflate, br",
            "Accept-Language": "en-US,en;q=0.9",
        }
    )
    return scraper


def url_exists(url: str, session: requests.Session, timeout: float = REQUEST_TIMEOUT) -> bool:
    """HEAD the URL without following redirects; only an exact 200 counts."""
    try:
        resp = session.head(url, timeout=timeout, allow_redirects=False)
    except requests.exceptions.RequestException as e:
        logger.warning(f"HEAD request failed for {url}: {e}")
        return False
    return resp.status_code == 200
