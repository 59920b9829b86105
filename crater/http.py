"""Blocking HTTP helpers sharing one session."""

from __future__ import annotations

import functools

import requests

MAX_REDIRECTS = 4
DEFAULT_USER_AGENT = "crater"


class InvalidStatusCode(Exception):
    """A request did not answer with 200 OK."""

    def __init__(self, url: str, status: int) -> None:
        super().__init__(f"request to {url} returned status code {status}")
        self.url = url
        self.status = status


@functools.cache
def _session() -> requests.Session:
    session = requests.Session()
    session.max_redirects = MAX_REDIRECTS
    return session


def prepare(
    method: str, url: str, user_agent: str = DEFAULT_USER_AGENT
) -> requests.PreparedRequest:
    """Build a request carrying the crater User-Agent."""
    request = requests.Request(method, url, headers={"User-Agent": user_agent})
    return _session().prepare_request(request)


def get(url: str, user_agent: str = DEFAULT_USER_AGENT) -> requests.Response:
    """Fetch ``url``, raising InvalidStatusCode unless it answers 200 OK."""
    response = _session().send(prepare("GET", url, user_agent))
    if response.status_code != 200:
        raise InvalidStatusCode(url, response.status_code)
    return response