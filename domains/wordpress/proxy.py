"""
Remote uploads proxy.

A '.uploads-proxy' file holds a single line: the base URL that missing
uploads are redirected to. It lives in the project root; for installs under
public/ a file in the document root is accepted as well.
"""
import os
import posixpath
from typing import Optional

from core.logging import get_logger

logger = get_logger(__name__)

PROXY_FILE = '.uploads-proxy'
UPLOADS_DIR = 'wp-content/uploads'


def has_proxy(site_path: str) -> bool:
    return os.path.isfile(os.path.join(site_path, PROXY_FILE))


def proxy_url(site_path: str) -> str:
    """Base URL from the proxy file, without trailing slashes or whitespace."""
    with open(os.path.join(site_path, PROXY_FILE), 'r', encoding='utf-8') as f:
        contents = f.read()
    return contents.strip().rstrip('/').rstrip()


def find_proxy_dir(site_path: str, document_root: Optional[str] = None) -> Optional[str]:
    """Directory holding the proxy file: the project root first, then the document root."""
    for directory in (site_path, document_root):
        if directory and has_proxy(directory):
            return directory
    return None


def get_proxy_url(site_path: str, document_root: Optional[str] = None) -> Optional[str]:
    """
    Usable proxy base URL, or None.

    A proxy file that is empty after trimming counts as no proxy.
    """
    directory = find_proxy_dir(site_path, document_root)
    if directory is None:
        return None

    url = proxy_url(directory)
    if not url:
        logger.warning(f"Ignoring empty {PROXY_FILE} in {directory}")
        return None
    return url


def should_proxy(uri: str) -> bool:
    """True if the directory part of uri lies in wp-content/uploads."""
    dir_name = posixpath.dirname(uri.rstrip('/'))
    return UPLOADS_DIR in dir_name
