"""
Centralized request dispatcher for the development host.

Picks the first driver that serves the site, asks it for a Decision and
turns that Decision into an HTTP response.
"""
from typing import Any, List, Optional, Tuple

from core.logging import get_logger
from drivers.base import BasicDriver, Decision, DecisionKind, Driver
from domains.wordpress import LocalWordPressDriver
from utils.response import send_error, send_json, send_redirect

logger = get_logger(__name__)


def default_drivers() -> List[Driver]:
    """Drivers in priority order. More specific drivers come first."""
    basic = BasicDriver()
    return [LocalWordPressDriver(default=basic), basic]


def select_driver(drivers: List[Driver], site_path: str,
                  site_name: str) -> Tuple[Optional[Driver], Any]:
    """First driver that claims the site, with the site value it classified."""
    for driver in drivers:
        site = driver.classify(site_path, site_name)
        if site is not None:
            return driver, site
    return None, None


def respond(handler, driver: Driver, decision: Decision, query: str = '') -> None:
    """Write the response for decision on handler."""
    if decision.kind == DecisionKind.REDIRECT:
        location = decision.location
        if query:
            location += '?' + query
        send_redirect(handler, location)
    elif decision.kind == DecisionKind.PROXY_REDIRECT:
        send_redirect(handler, decision.location)
    elif decision.kind == DecisionKind.SERVE_LOCAL:
        if not driver.send_static_file(handler, decision.path):
            send_error(handler, 'File not found', status=404)
    elif decision.kind == DecisionKind.FRONT_CONTROLLER:
        front_controller = decision.front_controller
        logger.info(f"Front controller: {front_controller.path}")
        send_json(handler, {
            'error': 'PHP execution is not available on this host',
            'front_controller': front_controller.path,
            'document_root': front_controller.document_root,
            'environ': front_controller.environ,
        }, status=501)
    else:
        send_error(handler, 'Not Found', status=404)


def dispatch_request(handler, drivers: List[Driver], site_path: str, site_name: str,
                     uri: str, host: Optional[str] = None, query: str = '') -> Decision:
    """
    Dispatch one request through the driver list.

    This function:
    1. Selects the first driver whose classify() accepts the site
    2. If none: sends 404 and returns a NOT_FOUND decision
    3. Resolves the request against the classified site
    4. Writes the matching response (redirect, file, 501 for scripts, 404)

    Args:
        handler: The BaseHTTPRequestHandler instance
        drivers: Drivers in priority order
        site_path: Absolute project root
        site_name: Logical site name, passed through to drivers
        uri: Request path without query string
        host: Host header, used for SERVER_NAME
        query: Query string, kept on trailing-slash redirects

    Returns:
        The Decision the response was written from
    """
    driver, site = select_driver(drivers, site_path, site_name)
    if driver is None:
        logger.info(f"No driver serves {site_path}")
        send_error(handler, 'No driver serves this site', status=404)
        return Decision.not_found()

    decision = driver.resolve_site(site, uri, host)
    logger.debug(f"{type(driver).__name__} resolved {uri} -> {decision.kind.value}")
    respond(handler, driver, decision, query)
    return decision
