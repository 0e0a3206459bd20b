"""
WordPress driver for local sites.

Handles plain and multisite installs, with the install either in the project
root or in public/, and sends missing uploads to a remote host when the
project carries a '.uploads-proxy' file. Everything it does not decide itself
is forwarded to the wrapped default driver.
"""
from typing import Optional, Union

from core.logging import get_logger
from domains.wordpress.classifier import SiteContext, classify
from domains.wordpress.policy import missing_upload_path, serve_decision
from domains.wordpress.rewrite import RewriteResult, rewrite
from drivers.base import BasicDriver, Decision, DecisionKind, Driver, FrontController
from utils.response import send_error, send_redirect

logger = get_logger(__name__)


class LocalWordPressDriver(Driver):
    """
    Driver for WordPress projects.

    Per-request facts travel in a SiteContext built by classify(); the
    driver itself holds no request state and can be shared between threads.
    """

    def __init__(self, default: Optional[BasicDriver] = None):
        self.default = default or BasicDriver()

    def classify(self, site_path: str, site_name: str) -> Optional[SiteContext]:
        return classify(site_path, site_name)

    def rewrite(self, site: SiteContext, uri: str) -> RewriteResult:
        return rewrite(uri, site.multisite)

    def is_static_file(self, site: SiteContext, uri: str) -> Union[RewriteResult, str, None]:
        """
        Static path for uri, None, or the redirect the caller must send.

        A missing upload is reported as static so that serve_static_file()
        can send it to the proxy.
        """
        result = self.rewrite(site, uri)
        if result.is_redirect:
            return result
        return self._static_path(site, result.uri)

    def front_controller_path(self, site: SiteContext, uri: str,
                              host: Optional[str] = None) -> Union[RewriteResult, FrontController, None]:
        result = self.rewrite(site, uri)
        if result.is_redirect:
            return result
        return self.default.front_controller_path(site.document_root, site.site_name, result.uri, host)

    def static_disposition(self, static_path: str, site: SiteContext, uri: str) -> Decision:
        """Serve-time decision for a path returned by is_static_file()."""
        result = self.rewrite(site, uri)
        if result.is_redirect:
            return Decision.redirect(result.redirect)
        return serve_decision(static_path, site, result.uri)

    def serve_static_file(self, handler, static_path: str, site: SiteContext, uri: str) -> Decision:
        """
        Answer a static request on handler.

        Returns:
            The Decision that was acted on
        """
        decision = self.static_disposition(static_path, site, uri)
        if decision.kind in (DecisionKind.PROXY_REDIRECT, DecisionKind.REDIRECT):
            send_redirect(handler, decision.location)
        elif decision.kind == DecisionKind.SERVE_LOCAL:
            self.default.send_static_file(handler, decision.path)
        else:
            send_error(handler, 'File not found', status=404)
        return decision

    def resolve_site(self, site: SiteContext, uri: str, host: Optional[str] = None) -> Decision:
        """
        Run the whole pipeline for one request without writing a response.

        Every step reads the same SiteContext; nothing is classified again.
        """
        result = self.rewrite(site, uri)
        if result.is_redirect:
            logger.debug(f"Redirecting {uri} -> {result.redirect}")
            return Decision.redirect(result.redirect)

        canonical_uri = result.uri
        static_path = self._static_path(site, canonical_uri)
        if static_path:
            return serve_decision(static_path, site, canonical_uri)

        front_controller = self.default.front_controller_path(
            site.document_root, site.site_name, canonical_uri, host
        )
        if front_controller:
            return Decision.front(front_controller)

        return Decision.not_found()

    def _static_path(self, site: SiteContext, canonical_uri: str) -> Optional[str]:
        static_path = missing_upload_path(site, canonical_uri)
        if static_path:
            return static_path
        return self.default.is_static_file(site.document_root, site.site_name, canonical_uri)
