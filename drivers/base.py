"""
Driver interface used by the development host.

A driver decides, for one request against one project root, whether the
request is a static file, a redirect, or a call into the project's
front controller. BasicDriver is the host's default behavior; project
specific drivers wrap it and fall back to it when their own rules do not
apply.
"""
import os
from abc import ABC, abstractmethod
from enum import Enum
from typing import NamedTuple, Optional

from core.logging import get_logger
from utils.response import send_file

logger = get_logger(__name__)


class DecisionKind(Enum):
    SERVE_LOCAL = "serve_local"
    PROXY_REDIRECT = "proxy_redirect"
    REDIRECT = "redirect"
    FRONT_CONTROLLER = "front_controller"
    NOT_FOUND = "not_found"


class FrontController(NamedTuple):
    """Entry script chosen for a dynamic request plus its CGI-style server vars."""
    path: str
    document_root: str
    environ: dict


class Decision(NamedTuple):
    """Final disposition of one request."""
    kind: DecisionKind
    path: Optional[str] = None
    location: Optional[str] = None
    front_controller: Optional[FrontController] = None

    @classmethod
    def serve_local(cls, path: str) -> 'Decision':
        return cls(DecisionKind.SERVE_LOCAL, path=path)

    @classmethod
    def proxy_redirect(cls, location: str) -> 'Decision':
        return cls(DecisionKind.PROXY_REDIRECT, location=location)

    @classmethod
    def redirect(cls, location: str) -> 'Decision':
        return cls(DecisionKind.REDIRECT, location=location)

    @classmethod
    def front(cls, front_controller: FrontController) -> 'Decision':
        return cls(DecisionKind.FRONT_CONTROLLER, path=front_controller.path,
                   front_controller=front_controller)

    @classmethod
    def not_found(cls) -> 'Decision':
        return cls(DecisionKind.NOT_FOUND)


class ProjectRoot(NamedTuple):
    """Request-scoped context for a project the default driver serves."""
    site_path: str
    site_name: str


class Driver(ABC):
    """
    Capability interface the host calls for every request.

    classify() builds the request-scoped context once; resolve_site() takes
    that context, so nothing is re-read from disk between the two.
    """

    @abstractmethod
    def classify(self, site_path: str, site_name: str):
        """Context for the site if this driver serves it, else None."""
        ...

    @abstractmethod
    def resolve_site(self, site, uri: str, host: Optional[str] = None) -> Decision:
        ...

    def serves(self, site_path: str, site_name: str, uri: str) -> bool:
        return self.classify(site_path, site_name) is not None

    def resolve(self, site_path: str, site_name: str, uri: str,
                host: Optional[str] = None) -> Decision:
        site = self.classify(site_path, site_name)
        if site is None:
            return Decision.not_found()
        return self.resolve_site(site, uri, host)

    def send_static_file(self, handler, static_path: str) -> bool:
        """Stream a local file. Returns False if it vanished since resolution."""
        return send_file(handler, static_path)


def is_actual_file(path: str) -> bool:
    return os.path.isfile(path)


def _join_uri(root: str, uri: str) -> str:
    return root.rstrip('/') + '/' + uri.lstrip('/')


class BasicDriver(Driver):
    """
    Default behavior for any project directory.

    Static files are looked up under public/ first, then the root.
    Dynamic requests go to the first existing index script.
    """

    INDEX_FILES = ('index.php', 'index.html')

    def classify(self, site_path: str, site_name: str) -> Optional[ProjectRoot]:
        if os.path.isdir(site_path):
            return ProjectRoot(site_path=site_path, site_name=site_name)
        return None

    def is_static_file(self, site_path: str, site_name: str, uri: str) -> Optional[str]:
        """
        Return the local file for uri, or None.

        PHP scripts are never static; they always go to the front controller.
        """
        if uri.endswith('.php'):
            return None

        for candidate in (_join_uri(site_path, 'public' + uri), _join_uri(site_path, uri)):
            if is_actual_file(candidate):
                return candidate

        return None

    def front_controller_path(self, site_path: str, site_name: str, uri: str,
                              host: Optional[str] = None) -> Optional[FrontController]:
        """
        Find the script that handles a dynamic request.

        Candidates relative to the uri are tried first (the file itself,
        then an index in that directory), then fixed index files at the
        root and under public/.
        """
        trimmed = uri.strip('/')
        dynamic_candidates = [_join_uri(site_path, trimmed)] if trimmed else []
        for index in self.INDEX_FILES:
            dynamic_candidates.append(_join_uri(site_path, f"{trimmed}/{index}" if trimmed else index))

        for candidate in dynamic_candidates:
            if is_actual_file(candidate):
                return self._front_controller(candidate, site_path, uri, host)

        public_path = os.path.join(site_path, 'public')
        fixed_candidates = [(os.path.join(site_path, index), site_path) for index in self.INDEX_FILES]
        fixed_candidates += [(os.path.join(public_path, index), public_path) for index in self.INDEX_FILES]

        for candidate, document_root in fixed_candidates:
            if is_actual_file(candidate):
                return self._front_controller(candidate, document_root, uri, host)

        logger.debug(f"No front controller for {uri} under {site_path}")
        return None

    def resolve_site(self, site: ProjectRoot, uri: str, host: Optional[str] = None) -> Decision:
        static_path = self.is_static_file(site.site_path, site.site_name, uri)
        if static_path:
            return Decision.serve_local(static_path)

        front_controller = self.front_controller_path(site.site_path, site.site_name, uri, host)
        if front_controller:
            return Decision.front(front_controller)

        return Decision.not_found()

    @staticmethod
    def _front_controller(path: str, document_root: str, uri: str,
                          host: Optional[str]) -> FrontController:
        environ = {
            'PHP_SELF': uri,
            'SCRIPT_FILENAME': path,
            'SCRIPT_NAME': path[len(document_root):] or '/',
            'DOCUMENT_ROOT': document_root,
            'SERVER_ADDR': '127.0.0.1',
        }
        if host:
            environ['SERVER_NAME'] = host.split(':')[0]
        return FrontController(path=path, document_root=document_root, environ=environ)
