from typing import Optional
import logging

import requests

from favicon_api.config import REQUEST_TIMEOUT
from favicon_api.models import TargetSite
from favicon_api.services.http_session import create_session

logger = logging.getLogger(__name__)


def is_page_online(
    site: TargetSite,
    session: Optional[requests.Session] = None,
    timeout: float = REQUEST_TIMEOUT,
) -> bool:
    """
    Check that the site answers its base URL with a 2xx status.
    A single GET is made; transport errors and any non-2xx status both
    count as offline.
    """
    own_session = session is None
    session = session or create_session()
    url = site.base_url
    try:
        logger.debug(f"Checking {url}")
        resp = session.get(url, timeout=timeout, allow_redirects=True)
    except requests.exceptions.SSLError as e:
        logger.warning(f"SSL error for {url}: {e}")
        return False
    except requests.exceptions.ConnectionError as e:
        logger.warning(f"Connection error for {url}: {e}")
        return False
    except requests.exceptions.Timeout:
        logger.warning(f"Timeout connecting to {url}")
        return False
    except requests.exceptions.RequestException as e:
        logger.warning(f"Request exception for {url}: {e}")
        return False
    finally:
        if own_session:
            session.close()

    if 200 <= resp.status_code < 300:
        logger.info(f"Successfully connected to {url} with status {resp.status_code}")
        return True
    logger.warning(f"Connection to {url} resulted in status {resp.status_code}")
    return False
