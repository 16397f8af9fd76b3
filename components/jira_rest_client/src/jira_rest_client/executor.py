"""Request executor: run one EndpointDescriptor and normalize every failure."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, TypeVar

from issue_tracker_interface.result import IssueTrackerApiError, Result
from jira_rest_client.request import EndpointDescriptor
from jira_rest_client.transport import JiraTransport, TransportResponse, TransportStatus

logger = logging.getLogger(__name__)

T = TypeVar("T")


def describe(response: TransportResponse) -> str:
    """Diagnostic text for a response: transport status, HTTP status, body."""
    code = response.status_code if response.status_code is not None else "-"
    text = (
        f"Transport status: {response.status.value} - HTTP response: {code}"
        f" - {response.reason} - {response.content}"
    )
    if response.exception is not None:
        text += f" - {type(response.exception).__name__}: {response.exception}"
    return text


class RequestExecutor:
    """Executes descriptors through a JiraTransport.

    One attempt per call: no retries, no backoff. The executor keeps no
    per-call state, so one instance can serve concurrent callers as long as
    the transport can.
    """

    def __init__(self, transport: JiraTransport) -> None:
        self._transport = transport

    def _check(self, descriptor: EndpointDescriptor, response: TransportResponse) -> IssueTrackerApiError | None:
        if response.status is not TransportStatus.COMPLETED or response.exception is not None:
            return IssueTrackerApiError(describe(response))
        if response.status_code != descriptor.expected_status:
            return IssueTrackerApiError(
                f"Expected HTTP {int(descriptor.expected_status)} from "
                f"{descriptor.method.value} {descriptor.path}. {describe(response)}"
            )
        return None

    def execute(self, descriptor: EndpointDescriptor, decode: Callable[[Any], T]) -> Result[T]:
        """Run descriptor and decode the JSON body with decode.

        Fails when the transport did not complete, when an exception was
        recorded, when the status isn't descriptor.expected_status, or when the
        body can't be decoded.
        """
        response = self._transport.send(descriptor)
        error = self._check(descriptor, response)
        if error is not None:
            logger.warning("Jira call failed: %s", error.message)
            return Result.failure(error)

        try:
            value = decode(response.json())
        # AttributeError: a nested value that should be an object came back as a string or list
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            message = f"Could not deserialize response of {descriptor.method.value} {descriptor.path}: {e!r}. {describe(response)}"
            logger.warning("Jira call failed: %s", message)
            return Result.failure(message)
        return Result.success(value)

    def execute_no_content(self, descriptor: EndpointDescriptor) -> Result[None]:
        """Run descriptor for an operation without a response body."""
        response = self._transport.send(descriptor)
        error = self._check(descriptor, response)
        if error is not None:
            logger.warning("Jira call failed: %s", error.message)
            return Result.failure(error)
        return Result.success(None)
