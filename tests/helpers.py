"""Fake HTTP session and in-memory test images."""
import io
import json

import requests
from PIL import Image
from unittest.mock import MagicMock


def make_response(status_code=200, text="", content=b"", json_data=None):
    resp = MagicMock()
    resp.status_code = status_code
    resp.text = text
    resp.content = content or text.encode()
    if json_data is not None:
        resp.json.return_value = json_data
    else:
        resp.json.side_effect = json.JSONDecodeError("Expecting value", text or " ", 0)
    return resp


class FakeSession:
    """
    Stands in for requests.Session. Responses are registered per URL for GET
    and HEAD; unknown GETs raise ConnectionError, unknown HEADs answer 404.
    Every call is recorded in order.
    """

    def __init__(self):
        self.get_responses = {}
        self.head_responses = {}
        self.calls = []
        self.closed = False

    def add_get(self, url, response):
        self.get_responses[url] = response

    def add_head(self, url, status_code):
        self.head_responses[url] = status_code

    def get(self, url, **kwargs):
        self.calls.append(("GET", url))
        resp = self.get_responses.get(url)
        if resp is None:
            raise requests.exceptions.ConnectionError(f"no route to {url}")
        if isinstance(resp, Exception):
            raise resp
        return resp

    def head(self, url, **kwargs):
        self.calls.append(("HEAD", url))
        status = self.head_responses.get(url, 404)
        if isinstance(status, Exception):
            raise status
        return make_response(status_code=status)

    def close(self):
        self.closed = True


def png_bytes(width, height, mode="RGBA", color=(200, 30, 30, 255)):
    img = Image.new(mode, (width, height), color)
    buf = io.BytesIO()
    img.save(buf, "PNG")
    return buf.getvalue()
