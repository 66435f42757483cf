import pytest
import requests

from ghbin.github_api import api_url


class FakeResponse:
    def __init__(self, payload=None, status=200, content=b"", next_url=None, stream_error=None):
        self.payload = payload
        self.status_code = status
        self.content = content
        self.links = {'next': {'url': next_url}} if next_url else {}
        self.stream_error = stream_error
        self.closed = False

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)

    def json(self):
        return self.payload

    def iter_content(self, chunk_size=1):
        for i in range(0, len(self.content), chunk_size):
            yield self.content[i:i + chunk_size]
        if self.stream_error is not None:
            raise self.stream_error

    def close(self):
        self.closed = True

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()


class FakeSession:
    """Routes GET requests by URL; a route may be a response or an exception."""

    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.calls = []

    def get(self, url, params=None, **kwargs):
        self.calls.append((url, params, kwargs))
        route = self.routes.get(url)
        if route is None:
            return FakeResponse(status=404)
        if isinstance(route, Exception):
            raise route
        return route


def repo(name, owner="alice"):
    return {'name': name, 'owner': {'login': owner}}


def asset(name, asset_id):
    return {'name': name, 'id': asset_id,
            'browser_download_url': f"https://github.com/dl/{asset_id}/{name}"}


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def url():
    return api_url
