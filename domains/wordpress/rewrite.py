"""
Rewrite rules imitating the WordPress multisite .htaccess.

Rules are checked in order, so more specific patterns must come first:
'/site2/wp-admin/index.php' has to collapse to '/wp-admin/index.php'
rather than '/index.php'.
"""
import re
from dataclasses import dataclass
from typing import List, NamedTuple, Optional

from core.logging import get_logger

logger = get_logger(__name__)

ADMIN_SUFFIX = '/wp-admin'


class RewriteResult(NamedTuple):
    """Either a canonical uri to keep processing, or a redirect target."""
    uri: str
    redirect: Optional[str] = None

    @property
    def is_redirect(self) -> bool:
        return self.redirect is not None


def continue_with(uri: str) -> RewriteResult:
    return RewriteResult(uri=uri)


def redirect_to(target: str) -> RewriteResult:
    return RewriteResult(uri=target, redirect=target)


@dataclass
class RewriteRule:
    """
    A rewrite rule: if pattern matches, the uri becomes the given group.

    Attributes:
        name: Short label used in logs
        pattern: Regex matched from the start of the uri
        group: Capture group holding the rewritten uri
    """
    name: str
    pattern: re.Pattern
    group: int = 2


MULTISITE_RULES: List[RewriteRule] = [
    # RewriteRule ^([_0-9a-zA-Z-]+/)?(wp-(content|admin|includes).*) $2 [L]
    RewriteRule('wp-paths', re.compile(r'^(.*)?(/wp-(content|admin|includes).*)')),
    # RewriteRule ^([_0-9a-zA-Z-]+/)?(.*\.php)$ $2 [L]
    RewriteRule('php-files', re.compile(r'^(.*)?(/.*\.php)$')),
]


def apply_rules(uri: str, rules: List[RewriteRule]) -> str:
    """
    Rewrite uri with the first matching rule.

    Unmatched input is returned unchanged.
    """
    for rule in rules:
        match = rule.pattern.match(uri)
        if match:
            rewritten = match.group(rule.group)
            logger.debug(f"Rewrite {rule.name}: {uri} -> {rewritten}")
            return rewritten
    return uri


def force_trailing_slash(uri: str) -> Optional[str]:
    """Redirect target for '/wp-admin' without its trailing slash, else None."""
    if uri.endswith(ADMIN_SUFFIX):
        return uri + '/'
    return None


def rewrite(uri: str, multisite: bool) -> RewriteResult:
    """
    Canonicalize a request path.

    Args:
        uri: Raw request path, starting with '/'
        multisite: Whether the site is a multisite network

    Returns:
        redirect_to(target) when the caller must answer with a redirect and stop,
        continue_with(canonical_uri) otherwise
    """
    target = force_trailing_slash(uri)
    if target is not None:
        return redirect_to(target)

    if multisite:
        uri = apply_rules(uri, MULTISITE_RULES)

    return continue_with(uri)
