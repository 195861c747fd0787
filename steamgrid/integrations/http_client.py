# steamgrid/integrations/http_client.py

"""
Explicitly configured HTTP client for image downloads.

Every request goes through one requests.Session carrying the response timeout,
so no module depends on process-wide transport settings.
"""
from __future__ import annotations

import logging
from typing import Any

import requests

from steamgrid.version import __app_name__, __version__

logger = logging.getLogger("steamgrid.http")

__all__ = ["HttpClient"]


class HttpClient:
    """
    Thin wrapper around requests.Session with a fixed timeout.

    Transport failures (DNS, refused connections, timeouts) propagate as
    requests.RequestException; HTTP error statuses do not raise.
    """

    def __init__(self, timeout: float = 10.0, session: requests.Session | None = None):
        """
        Initializes the client.

        Args:
            timeout (float): Seconds to wait for a connection and for the server
                             to start sending a response.
            session (requests.Session | None): Session to reuse, mainly for tests.
        """
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.setdefault("User-Agent", f"{__app_name__}/{__version__}")

    def get(self, url: str, **kwargs: Any) -> requests.Response:
        kwargs.setdefault("timeout", self.timeout)
        logger.debug("GET %s", url)
        return self.session.get(url, **kwargs)

    def get_json(self, url: str, **kwargs: Any) -> Any | None:
        """Returns the decoded JSON body of a 200 response, None otherwise."""
        response = self.get(url, **kwargs)
        if response.status_code != 200:
            logger.debug("GET %s returned %s", url, response.status_code)
            return None
        try:
            return response.json()
        except ValueError:
            return None

    def download(self, url: str, **kwargs: Any) -> bytes | None:
        """
        Downloads a resource.

        Args:
            url (str): Absolute URL.

        Returns:
            bytes | None: The body of a 200 response with content, None for any
                          other status.

        Raises:
            requests.RequestException: On transport failure or timeout.
        """
        response = self.get(url, **kwargs)
        if response.status_code != 200 or not response.content:
            logger.debug("GET %s returned %s", url, response.status_code)
            return None
        return response.content

    def close(self) -> None:
        self.session.close()
