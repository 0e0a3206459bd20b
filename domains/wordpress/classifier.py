"""
WordPress site classification.

Decides whether a project root holds a WordPress install, where its
document root is, and whether it runs as a multisite network.
"""
import os
import re
from typing import NamedTuple, Optional

from core.logging import get_logger

logger = get_logger(__name__)

PUBLIC_DIR_CANDIDATES = ('', 'public')
CONFIG_FILE = 'wp-config.php'
ENV_FILE = '.env'

MULTISITE_DEFINE_RE = re.compile(
    r"""^define\(\s*('|")MULTISITE\1\s*,\s*true\s*\)""",
    re.MULTILINE | re.IGNORECASE
)
MULTISITE_ENV_RE = re.compile(r'^WP_MULTISITE=true$', re.MULTILINE | re.IGNORECASE)


class SiteContext(NamedTuple):
    """Request-scoped facts about one project. Never mutated after classify()."""
    site_path: str
    site_name: str
    public_dir: str = ''
    multisite: bool = False

    @property
    def document_root(self) -> str:
        return document_root(self.site_path, self.public_dir)


def document_root(site_path: str, public_dir: str) -> str:
    if public_dir:
        return site_path + '/' + public_dir
    return site_path


def _read_text(path: str) -> Optional[str]:
    """File contents, or None when the file does not exist."""
    try:
        with open(path, 'r', encoding='utf-8', errors='replace') as f:
            return f.read()
    except FileNotFoundError:
        return None


def is_multisite(site_path: str, config_path: str) -> bool:
    """
    Check wp-config.php for define('MULTISITE', true), then the project's
    .env for WP_MULTISITE=true.
    """
    config = _read_text(config_path)
    if config and MULTISITE_DEFINE_RE.search(config):
        return True

    env = _read_text(os.path.join(site_path, ENV_FILE))
    return bool(env and MULTISITE_ENV_RE.search(env))


def find_public_dir(site_path: str) -> Optional[str]:
    """First candidate public directory holding wp-config.php, or None."""
    for public_dir in PUBLIC_DIR_CANDIDATES:
        if os.path.isfile(os.path.join(document_root(site_path, public_dir), CONFIG_FILE)):
            return public_dir
    return None


def classify(site_path: str, site_name: str) -> Optional[SiteContext]:
    """
    Build the SiteContext for a project root.

    Returns:
        SiteContext if the project is a WordPress install, None otherwise
    """
    public_dir = find_public_dir(site_path)
    if public_dir is None:
        return None

    config_path = os.path.join(document_root(site_path, public_dir), CONFIG_FILE)
    multisite = is_multisite(site_path, config_path)

    logger.debug(f"Classified {site_name}: public_dir={public_dir!r} multisite={multisite}")
    return SiteContext(
        site_path=site_path,
        site_name=site_name,
        public_dir=public_dir,
        multisite=multisite
    )
