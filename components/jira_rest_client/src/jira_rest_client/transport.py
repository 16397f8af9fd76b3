"""
Transport binding: a requests.Session bound to one Jira account.

Dependencies:
    uv add requests
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

import requests
from requests.auth import HTTPBasicAuth

from jira_rest_client.account import JiraAccount
from jira_rest_client.request import EndpointDescriptor

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


class TransportStatus(str, Enum):
    """How far a request got on the wire."""

    COMPLETED = "Completed"
    ERROR = "Error"
    TIMED_OUT = "TimedOut"
    ABORTED = "Aborted"


@dataclass(frozen=True)
class TransportResponse:
    """What the transport reports back for one request.

    status_code, reason and content are only meaningful when the request
    completed.
    """

    status: TransportStatus
    status_code: int | None = None
    reason: str = ""
    content: str = ""
    exception: Exception | None = None

    def json(self) -> Any:
        """Decode the body. Raises ValueError when it isn't JSON.

        The body is kept as text so a failure message can include it verbatim.
        """
        return json.loads(self.content)


class JiraTransport:
    """
    Args:
        account: Server url and basic auth credentials
        timeout: Seconds to wait on connect and on read, per request
    """

    _API_PREFIX = "/rest/api/2"

    def __init__(self, account: JiraAccount, timeout: float | None = DEFAULT_TIMEOUT) -> None:
        self._base_url = account.server_url
        self._timeout = timeout
        self._session = requests.Session()
        self._session.auth = HTTPBasicAuth(account.user, account.password)
        self._session.headers.update({"Accept": "application/json", "Content-Type": "application/json"})

    @property
    def base_url(self) -> str:
        return self._base_url

    def url(self, path: str) -> str:
        return f"{self._base_url}{self._API_PREFIX}{path}"

    def send(self, descriptor: EndpointDescriptor) -> TransportResponse:
        """Make exactly one request. Network problems are reported, not raised."""
        url = self.url(descriptor.path)
        logger.debug("%s %s params=%s", descriptor.method.value, url, descriptor.params)
        try:
            response = self._session.request(
                descriptor.method.value,
                url,
                params=list(descriptor.params) or None,
                json=descriptor.body,
                timeout=self._timeout,
            )
        # ConnectTimeout is both a Timeout and a ConnectionError; Timeout wins
        except requests.Timeout as e:
            return TransportResponse(TransportStatus.TIMED_OUT, exception=e)
        except requests.ConnectionError as e:
            return TransportResponse(TransportStatus.ERROR, exception=e)
        except requests.RequestException as e:
            return TransportResponse(TransportStatus.ABORTED, exception=e)

        return TransportResponse(
            TransportStatus.COMPLETED,
            status_code=response.status_code,
            reason=response.reason or "",
            content=response.text,
        )

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> JiraTransport:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
