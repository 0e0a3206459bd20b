"""
Tests for the HTTP response helpers.
"""
from unittest.mock import MagicMock

import pytest

from utils.response import encode_location, send_json, send_redirect


def make_handler(command='GET'):
    handler = MagicMock()
    handler.command = command
    return handler


def headers_of(handler):
    return {c.args[0]: c.args[1] for c in handler.send_header.call_args_list}


class TestEncodeLocation:

    @pytest.mark.parametrize('location', [
        '/wp-admin/',
        '/wp-admin/?a=1&b=2',
        'https://cdn.example.com/wp-content/uploads/a%20b.jpg',
        "/a/b;c=1,d+e/~f@g!h$i'(j)*k#top",
    ])
    def test_valid_locations_unchanged(self, location):
        assert encode_location(location) == location

    def test_control_characters_encoded(self):
        assert encode_location('/x\r\nSet-Cookie: a=1') == '/x%0D%0ASet-Cookie:%20a=1'

    def test_non_ascii_encoded_as_utf8(self):
        assert encode_location('/wp-content/uploads/图.jpg') == '/wp-content/uploads/%E5%9B%BE.jpg'


class TestSendRedirect:

    def test_location_is_encoded(self):
        handler = make_handler()

        send_redirect(handler, '/café/wp-admin/')

        handler.send_response.assert_called_once_with(302)
        assert headers_of(handler)['Location'] == '/caf%C3%A9/wp-admin/'

    def test_permanent(self):
        handler = make_handler()

        send_redirect(handler, '/wp-admin/', permanent=True)

        handler.send_response.assert_called_once_with(301)

    def test_nothing_sent_when_location_is_not_text(self):
        handler = make_handler()

        with pytest.raises(TypeError):
            send_redirect(handler, None)

        handler.send_response.assert_not_called()


class TestSendJson:

    def test_nothing_sent_when_body_cannot_be_built(self):
        handler = make_handler()

        with pytest.raises(TypeError):
            send_json(handler, {'path': object()})

        handler.send_response.assert_not_called()

    def test_head_has_no_body(self):
        handler = make_handler('HEAD')

        send_json(handler, {'error': 'Not Found'}, status=404)

        handler.send_response.assert_called_once_with(404)
        assert headers_of(handler)['Content-Length'] == str(len(b'{"error": "Not Found"}'))
        handler.wfile.write.assert_not_called()
