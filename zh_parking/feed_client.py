"""
Author: Ziv P.H
Date: 2026-10-17
Description:
HTTP client for the parking RSS feed.

Retrieves the raw feed bytes with a single bounded-timeout GET; every failure surfaces
as FetchError so the caller can drop the cycle.
"""

import logging
from typing import Callable
from urllib.parse import urlparse

import requests

from zh_parking.exceptions import FetchError
from zh_parking.user_agents import random_user_agent

logger = logging.getLogger(__name__)


class FeedClient:
    """
    Fetches the feed document. One short-lived requests.Session per fetch.
    """

    def __init__(
            self,
            url: str,
            timeout: float = 10.0,
            user_agent_factory: Callable[[], str] = random_user_agent,
    ):
        """
        Initialize the client.

        Args:
            url (str): Absolute http(s) URL of the feed.
            timeout (float): Connect and read timeout in seconds.
            user_agent_factory (Callable[[], str]): Produces the User-Agent header for each request.
        """
        self.url = url
        self.timeout = timeout
        self.user_agent_factory = user_agent_factory
        logger.debug("FeedClient initialized for %s (timeout %.1fs)", url, timeout)

    def _check_url(self) -> str:
        try:
            parsed = urlparse(self.url)
        except ValueError as e:
            logger.error("Could not parse feed URL '%s': %s", self.url, e)
            raise FetchError(f"Invalid feed URL '{self.url}': {e}") from e
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            logger.error("Could not parse feed URL '%s'", self.url)
            raise FetchError(f"Invalid feed URL '{self.url}'")
        return self.url

    def fetch(self) -> bytes:
        """
        Retrieve the feed body.

        Returns:
            bytes: The raw response body.

        Raises:
            FetchError: If the URL is invalid, the request fails, the server answers
                with an error status or the body cannot be read.
        """
        url = self._check_url()
        headers = {"User-Agent": self.user_agent_factory()}
        logger.debug("Requesting %s", url)
        try:
            with requests.Session() as session:
                response = session.get(url, headers=headers, timeout=self.timeout)
                logger.debug("Got response with status code %s", response.status_code)
                response.raise_for_status()
                body = response.content
        except requests.RequestException as e:
            logger.error("Could not fetch feed from %s: %s", url, e)
            raise FetchError(f"Failed to fetch {url}: {e}") from e

        logger.debug("Fetched %d bytes", len(body))
        return body
