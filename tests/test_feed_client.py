from unittest import mock

import pytest
import requests

from zh_parking.exceptions import FetchError
from zh_parking.feed_client import FeedClient
from zh_parking.user_agents import USER_AGENTS, random_user_agent

FEED_URL = "https://www.pls-zh.ch/plsFeed/rss"


def _response(status=200, content=b"<rss/>"):
    response = requests.Response()
    response.status_code = status
    response._content = content
    response.url = FEED_URL
    return response


def test_fetch_returns_body_and_sends_user_agent():
    client = FeedClient(FEED_URL, timeout=3, user_agent_factory=lambda: "TestAgent/1.0")
    with mock.patch.object(requests.Session, "get", return_value=_response(content=b"<rss>ok</rss>")) as get:
        assert client.fetch() == b"<rss>ok</rss>"

    get.assert_called_once_with(FEED_URL, headers={"User-Agent": "TestAgent/1.0"}, timeout=3)


def test_fetch_uses_random_browser_agent_by_default():
    client = FeedClient(FEED_URL)
    with mock.patch.object(requests.Session, "get", return_value=_response()) as get:
        client.fetch()
    assert get.call_args.kwargs["headers"]["User-Agent"] in USER_AGENTS


@pytest.mark.parametrize("error", [
    requests.ConnectionError("connection refused"),
    requests.Timeout("read timed out"),
    requests.exceptions.ChunkedEncodingError("connection broken"),
])
def test_fetch_transport_errors(error):
    client = FeedClient(FEED_URL)
    with mock.patch.object(requests.Session, "get", side_effect=error):
        with pytest.raises(FetchError, match="Failed to fetch"):
            client.fetch()


@pytest.mark.parametrize("status", [404, 500, 503])
def test_fetch_error_status(status):
    client = FeedClient(FEED_URL)
    with mock.patch.object(requests.Session, "get", return_value=_response(status=status)):
        with pytest.raises(FetchError):
            client.fetch()


@pytest.mark.parametrize("url", [
    "",
    "www.pls-zh.ch/plsFeed/rss",
    "ftp://www.pls-zh.ch/rss",
    "https://",
    "http://[::1",
])
def test_fetch_invalid_url(url):
    client = FeedClient(url)
    with mock.patch.object(requests.Session, "get") as get:
        with pytest.raises(FetchError, match="Invalid feed URL"):
            client.fetch()
    get.assert_not_called()


def test_random_user_agent_is_deterministic_with_seeded_rng():
    import random

    first = [random_user_agent(random.Random(7)) for _ in range(3)]
    assert len(set(first)) == 1
    assert first[0] in USER_AGENTS
