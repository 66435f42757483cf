import os

import requests
import urllib3

API_URL = os.environ.get("GH_API_URL", "https://api.github.com").rstrip("/")
PER_PAGE = 100
REQUEST_TIMEOUT = 10


def create_session(token, insecure=False):
    session = requests.Session()
    session.headers['Authorization'] = f"token {token}"
    session.headers['Accept'] = "application/vnd.github+json"
    if insecure:
        # for proxies that re-sign TLS traffic
        session.verify = False
        urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)
    return session


def api_url(path):
    return f"{API_URL}/{path.lstrip('/')}"


def get_json(session, url, params=None):
    response = session.get(url, params=params, timeout=REQUEST_TIMEOUT)
    response.raise_for_status()
    return response.json()


def iter_pages(session, url, params=None):
    """Yield every item of a paginated list endpoint, following Link: next."""
    params = dict(params or {})
    params.setdefault('per_page', PER_PAGE)
    while url:
        with session.get(url, params=params, timeout=REQUEST_TIMEOUT) as response:
            response.raise_for_status()
            items = response.json()
            next_link = response.links.get('next')
        yield from items
        # the next link already carries the query string
        url = next_link['url'] if next_link else None
        params = None
