from typing import Optional
import logging

import requests

from favicon_api.exceptions import InvalidTarget, NoIconFound, TargetUnreachable
from favicon_api.models import TargetSite
from favicon_api.services.http_session import create_session
from favicon_api.services.icon_resolver import find_icon_url
from favicon_api.services.icon_scaler import fetch_and_scale_icon
from favicon_api.services.page_status import is_page_online

logger = logging.getLogger(__name__)


def get_scaled_favicon(
    host: str,
    size: int,
    session: Optional[requests.Session] = None,
    fallback_template: Optional[str] = None,
) -> bytes:
    """
    Resolve the favicon of host and return it as size x size PNG bytes.

    Runs the reachability check, icon discovery and fetch-and-rescale in
    order, stopping at the first stage that fails.

    Raises:
        InvalidTarget: host is not a usable hostname.
        TargetUnreachable: the site did not answer with a 2xx status.
        DiscoveryFetchFailed: the site's root document could not be fetched.
        NoIconFound: every discovery strategy came up empty.
        IconFetchFailed: the icon could not be downloaded.
        IconDecodeFailed: the downloaded bytes are not a decodable image.
    """
    try:
        site = TargetSite.from_host(host)
    except ValueError as e:
        raise InvalidTarget(f"Invalid website {host!r}: {e}") from e

    own_session = session is None
    session = session or create_session()
    try:
        if not is_page_online(site, session):
            raise TargetUnreachable(site.base_url)

        icon_url = find_icon_url(site, session, fallback_template)
        if icon_url is None:
            raise NoIconFound(site.base_url)

        return fetch_and_scale_icon(icon_url, size, session)
    finally:
        if own_session:
            session.close()
