"""
Test helper functions and utilities.
"""
import json
from typing import Any, Optional
from unittest.mock import Mock

import requests

from spotnotify.notifier import Notifier


def make_response(
    status_code: int = 200,
    json_data: Optional[Any] = None,
    text: Optional[str] = None,
    content: bytes = b"",
) -> Mock:
    """
    Create a mock requests.Response.

    Args:
        status_code: HTTP status
        json_data: Body serialized to JSON (takes precedence over text)
        text: Raw body text
        content: Raw body bytes
    """
    response = Mock(spec=requests.Response)
    response.status_code = status_code
    response.ok = 200 <= status_code < 400
    if json_data is not None:
        text = json.dumps(json_data)
    response.text = text if text is not None else ""
    response.content = content or response.text.encode("utf-8")
    return response


class FakeNotifier(Notifier):
    """In-memory notification backend recording calls."""

    name = "fake"
    executable = "fake-notify"

    def __init__(self, available=True):
        super().__init__()
        self.available = available
        self.calls = []

    def is_available(self):
        return self.available

    def notify(self, title, subtitle, image=None):
        self.calls.append((title, subtitle, image))


class FakeSpotifyHTTP:
    """
    Routes mocked requests.get/requests.post calls to canned responses.

    `requests.get` is shared by the track and cover lookups, so a single mock
    dispatches on the URL. Tests swap entries in `responses` to simulate
    failures.
    """

    def __init__(self, mocker, token_data, track_data, cover_bytes=b"\x89PNG cover"):
        self.responses = {
            "token": make_response(200, json_data=token_data),
            "track": make_response(200, json_data=track_data),
            "cover": make_response(200, content=cover_bytes),
        }
        self.post = mocker.patch("requests.post", side_effect=self._post)
        self.get = mocker.patch("requests.get", side_effect=self._get)

    def _respond(self, key):
        response = self.responses[key]
        if isinstance(response, Exception):
            raise response
        return response

    def _post(self, url, **kwargs):
        return self._respond("token")

    def _get(self, url, **kwargs):
        return self._respond("track" if "/tracks/" in url else "cover")

    def urls(self, method="get"):
        mock = self.get if method == "get" else self.post
        return [c.args[0] for c in mock.call_args_list]

    def track_calls(self):
        return [url for url in self.urls() if "/tracks/" in url]

    def cover_calls(self):
        return [url for url in self.urls() if "/tracks/" not in url]

    def assert_no_network(self):
        self.post.assert_not_called()
        self.get.assert_not_called()
