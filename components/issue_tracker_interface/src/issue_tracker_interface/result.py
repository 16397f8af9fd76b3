"""Result contract - value-or-error returned by every client operation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


class IssueTrackerApiError(Exception):
    """Raised (or carried in a Result) when a call to the tracker API fails.

    There is a single error kind. The message embeds whatever is known about
    the failure: transport status, HTTP status code and description, and the
    raw response body.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


@dataclass(frozen=True)
#opted for a frozen dataclass so a returned Result can be handed around without being altered
class Result(Generic[T]):
    """
    Either a value (success) or an IssueTrackerApiError (failure), never both.

    Operations that return no body (e.g. delete) succeed with value None.
    """

    value: T | None = None
    error: IssueTrackerApiError | None = None

    @classmethod
    def success(cls, value: T | None = None) -> Result[T]:
        return cls(value=value)

    @classmethod
    def failure(cls, message: str | IssueTrackerApiError) -> Result[T]:
        if not isinstance(message, IssueTrackerApiError):
            message = IssueTrackerApiError(message)
        return cls(error=message)

    @property
    def ok(self) -> bool:
        """True when the call succeeded."""
        return self.error is None

    def unwrap(self) -> T:
        """Return the value, or raise the carried error."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]

    def __repr__(self) -> str:
        if self.ok:
            return f"<Result ok value={self.value!r}>"
        return f"<Result error={self.error.message!r}>"
