"""
HTTP transport for the marketplace API.

The repository talks to the network only through ``Transport.send`` so that
tests can substitute an in-memory fake.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, Optional
from urllib.parse import parse_qs, urlsplit

import requests

from .exceptions import TransportError
from .logging_config import get_logger
from .version import get_user_agent

logger = get_logger('transport')


@dataclass
class HTTPRequest:
    method: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[bytes] = None

    @property
    def path(self) -> str:
        return urlsplit(self.url).path

    @property
    def query(self) -> Dict[str, str]:
        """Query parameters, first value of each."""
        return {key: values[0] for key, values in parse_qs(urlsplit(self.url).query).items()}


@dataclass
class HTTPResponse:
    """A fully read response; no stream is left open."""
    status_code: int
    body: bytes = b""
    reason: str = ""
    headers: Dict[str, str] = field(default_factory=dict)

    @property
    def text(self) -> str:
        return self.body.decode('utf-8', errors='replace')


class Transport(ABC):
    """Abstract base class for HTTP transports."""

    @abstractmethod
    def send(self, request: HTTPRequest) -> HTTPResponse:
        """
        Send a request and return the fully read response.

        Args:
            request: Request to send

        Returns:
            HTTPResponse for any status code

        Raises:
            TransportError: If no response was received
        """
        pass


class RequestsTransport(Transport):
    """Transport backed by a ``requests.Session``."""

    def __init__(self, timeout: float = 60.0, session: Optional[requests.Session] = None):
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({'User-Agent': get_user_agent()})

    def send(self, request: HTTPRequest) -> HTTPResponse:
        logger.debug(f"{request.method} {request.url}")
        try:
            with self.session.request(
                request.method,
                request.url,
                headers=request.headers,
                data=request.body,
                timeout=self.timeout,
            ) as response:
                content = response.content
                logger.debug(f"{request.method} {request.path} returned {response.status_code} "
                             f"({len(content)} bytes)")
                return HTTPResponse(
                    status_code=response.status_code,
                    body=content,
                    reason=response.reason or "",
                    headers=dict(response.headers),
                )
        except requests.RequestException as e:
            logger.debug(f"{request.method} {request.path} failed: {e}")
            raise TransportError(str(e)) from e

    def close(self) -> None:
        self.session.close()
