"""
Host context detection for the local development front controller.

Maps the Host header (e.g. 'blog.test:8080') to a site name and the
project root parked under SITES_PATH.
"""
import os
from typing import NamedTuple, Optional


class HostContext(NamedTuple):
    site_name: str
    canonical_domain: str
    is_local: bool


def parse_host_context(host_header: str, tld: str = 'test') -> HostContext:
    """
    Parse the Host header to determine the site being requested.

    Args:
        host_header: The Host header value (e.g., 'blog.test:8080')
        tld: The local top-level domain served by this host

    Returns:
        HostContext with site_name, canonical_domain and is_local flag
    """
    host = host_header.lower().strip()

    host_without_port = host.split(':')[0] if ':' in host else host

    suffix = '.' + tld
    is_local = host_without_port.endswith(suffix)

    if is_local:
        site_name = host_without_port[:-len(suffix)]
    else:
        site_name = host_without_port

    # www.blog.test and blog.test are the same site
    if site_name.startswith('www.'):
        site_name = site_name[len('www.'):]

    return HostContext(
        site_name=site_name,
        canonical_domain=host_without_port,
        is_local=is_local
    )


def get_site_path(host_context: HostContext, sites_path: str) -> Optional[str]:
    """
    Resolve the project root for a parsed host.

    Subdomains fall back to their parent site, so 'site2.blog.test' is served
    from the 'blog' directory when no 'site2.blog' directory exists.

    Returns:
        Absolute path of the project root, or None if no directory matches
    """
    name = host_context.site_name
    if not name or '/' in name or name.startswith('.'):
        return None

    labels = name.split('.')
    for i in range(len(labels)):
        candidate = os.path.join(sites_path, '.'.join(labels[i:]))
        if os.path.isdir(candidate):
            return os.path.abspath(candidate)

    return None
