"""Endpoint descriptors: an in-memory description of one call to make."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from http import HTTPStatus
from typing import Any


class Method(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


@dataclass(frozen=True)
class EndpointDescriptor:
    """One HTTP call against the API.

    path is relative to the API prefix and may embed an identifier.
    params keeps its order; every value is already a string.
    """

    method: Method
    path: str
    expected_status: HTTPStatus
    params: tuple[tuple[str, str], ...] = ()
    body: dict[str, Any] | None = None

    def __post_init__(self) -> None:
        if not self.path.startswith("/"):
            raise ValueError(f"path must start with '/': {self.path!r}")


def to_comma_separated(names: Iterable[str] | None) -> str:
    """Flatten a list of names to 'a,b,c', or '' when there is none."""
    if names is None:
        return ""
    return ",".join(names)
