"""
HTTP response helpers for the development host.
Every helper takes the BaseHTTPRequestHandler and writes the full response.
NO side effects at import time.
"""
import json
import mimetypes
import os
from urllib.parse import quote

# Reserved URL characters and existing escapes pass through; anything else
# (control characters, spaces, non-ASCII) is percent-encoded as UTF-8.
LOCATION_SAFE = "/:@!$&'()*+,;=-._~%?#"


def encode_location(location: str) -> str:
    """Percent-encode a redirect target so it is a valid Location header value."""
    return quote(location, safe=LOCATION_SAFE)


def send_json(handler, data: dict, status: int = 200):
    """
    Send a JSON response.

    Usage:
        send_json(self, {'front_controller': path}, status=501)
    """
    body = json.dumps(data).encode()
    handler.send_response(status)
    handler.send_header('Content-type', 'application/json')
    handler.send_header('Content-Length', str(len(body)))
    handler.end_headers()
    if handler.command != 'HEAD':
        handler.wfile.write(body)


def send_error(handler, message: str, status: int = 500):
    """
    Send a JSON error response.

    Usage:
        send_error(self, 'Site not found', status=404)
        send_error(self, str(e), status=500)
    """
    send_json(handler, {'error': message}, status=status)


def send_file(handler, file_path: str, content_type: str | None = None):
    """
    Send a file response with appropriate content type.

    Uses mimetypes to guess content type if not provided.
    Returns False if file not found, True on success.

    Usage:
        if not send_file(self, '/srv/blog/wp-content/themes/x.css'):
            send_error(self, 'File not found', status=404)
    """
    if not os.path.isfile(file_path):
        return False

    if content_type is None:
        content_type, _ = mimetypes.guess_type(file_path)
        if content_type is None:
            content_type = 'application/octet-stream'

    with open(file_path, 'rb') as f:
        content = f.read()

    handler.send_response(200)
    handler.send_header('Content-type', content_type)
    handler.send_header('Content-Length', str(len(content)))
    handler.end_headers()
    if handler.command != 'HEAD':
        handler.wfile.write(content)
    return True


def send_redirect(handler, location: str, permanent: bool = False):
    """
    Send an HTTP redirect.

    Usage:
        send_redirect(self, '/wp-admin/', permanent=True)
        send_redirect(self, 'https://cdn.example.com/wp-content/uploads/a.jpg')
    """
    location = encode_location(location)
    status = 301 if permanent else 302
    handler.send_response(status)
    handler.send_header('Location', location)
    handler.send_header('Content-Length', '0')
    handler.end_headers()
