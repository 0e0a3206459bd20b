"""
Static resolution policy.

Resolution and serving are two phases. Resolution decides whether a request
is routed as a static file at all; a missing upload counts as static so the
serve-time check gets a chance to send it to the remote proxy. Serving then
re-checks the disk and picks the final disposition.
"""
import os
from typing import Optional

from core.logging import get_logger
from domains.wordpress.classifier import SiteContext
from domains.wordpress.proxy import get_proxy_url, should_proxy
from drivers.base import Decision, is_actual_file

logger = get_logger(__name__)


def candidate_path(site: SiteContext, canonical_uri: str) -> str:
    return site.document_root + canonical_uri


def missing_upload_path(site: SiteContext, canonical_uri: str) -> Optional[str]:
    """
    Local path of a proxy-eligible upload that is not on disk, or None.

    None means the default static-file lookup applies.
    """
    if not should_proxy(canonical_uri):
        return None

    static_path = candidate_path(site, canonical_uri)
    if is_actual_file(static_path):
        return None
    return static_path


def serve_decision(static_path: str, site: SiteContext, canonical_uri: str) -> Decision:
    """
    Serve-time disposition of a resolved static path.

    Missing uploads go to the remote proxy when one is configured; anything
    else is served locally, or not found if the file is absent.
    """
    if should_proxy(canonical_uri) and not os.path.exists(static_path):
        base_url = get_proxy_url(site.site_path, site.document_root)
        if base_url:
            location = base_url + canonical_uri
            logger.info(f"Proxying missing upload {canonical_uri} -> {location}")
            return Decision.proxy_redirect(location)

    if is_actual_file(static_path):
        return Decision.serve_local(static_path)

    return Decision.not_found()
