#!/usr/bin/env python3
"""
Local development front controller.

Every request is mapped from its Host header to a project parked under
SITES_PATH and handed to the first driver that serves that project.
"""
import http.server
import os
import socketserver
from urllib.parse import unquote, urlparse

from dotenv import load_dotenv

from api.dispatch import default_drivers, dispatch_request
from core.config import Config
from core.host_context import get_site_path, parse_host_context
from core.logging import configure_logging, get_logger, request_context
from utils.response import send_error

logger = get_logger(__name__)


class DriverRequestHandler(http.server.BaseHTTPRequestHandler):
    server_version = 'ValetWP/0.1'
    drivers = None
    sites_path = None
    tld = Config.DEFAULT_TLD
    response_started = False

    def do_GET(self):
        self.handle_site_request()

    def do_HEAD(self):
        self.handle_site_request()

    def send_response(self, code, message=None):
        self.response_started = True
        super().send_response(code, message)

    def handle_site_request(self):
        self.response_started = False
        parsed_path = urlparse(self.path)
        host_header = self.headers.get('Host', '')
        host_context = parse_host_context(host_header, self.tld)

        with request_context(site_name=host_context.site_name or None):
            try:
                site_path = get_site_path(host_context, self.sites_path)
                if site_path is None:
                    logger.info(f"No site for host {host_header!r}")
                    send_error(self, 'Site not found', status=404)
                    return

                uri = unquote(parsed_path.path) or '/'
                if '..' in uri.split('/'):
                    send_error(self, 'Bad path', status=400)
                    return

                dispatch_request(
                    self,
                    self.drivers,
                    site_path,
                    host_context.site_name,
                    uri,
                    host=host_header,
                    query=parsed_path.query
                )
            except Exception as e:
                logger.exception(f"Error handling {self.path}")
                if self.response_started:
                    # a status line is already out; a second one would corrupt the response
                    self.close_connection = True
                else:
                    send_error(self, str(e), status=500)

    def log_message(self, format, *args):
        logger.info(f"{self.address_string()} {format % args}")


class ThreadingServer(socketserver.ThreadingMixIn, http.server.HTTPServer):
    daemon_threads = True
    allow_reuse_address = True


def create_server(host: str, port: int, sites_path: str, tld: str) -> ThreadingServer:
    handler_class = type('ConfiguredDriverRequestHandler', (DriverRequestHandler,), {
        'drivers': default_drivers(),
        'sites_path': sites_path,
        'tld': tld,
    })
    return ThreadingServer((host, port), handler_class)


if __name__ == "__main__":
    load_dotenv()
    configure_logging(Config.get_log_level())

    host = Config.get_host()
    port = Config.get_port()
    sites_path = Config.get_sites_path()
    tld = Config.get_tld()

    with create_server(host, port, sites_path, tld) as httpd:
        logger.info(f"Server running at http://{host}:{port}/")
        logger.info(f"Serving *.{tld} sites from {os.path.abspath(sites_path)}")
        httpd.serve_forever()
