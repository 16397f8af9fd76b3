"""Core client contract definitions and factory placeholder."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Any

from issue_tracker_interface.result import Result

__all__ = ["IssueTrackerClient", "get_client"]


class IssueTrackerClient(ABC):
    """Tracks issues.

    Every operation makes exactly one call to the remote service and returns a
    Result. Failures never escape as exceptions; the caller inspects
    Result.ok or calls Result.unwrap().
    """

    # ------------------------------------------------------------------
    # Issues
    # ------------------------------------------------------------------
    @abstractmethod
    def get_issue(self, issue_key: str, fields: Iterable[str] | None = None) -> Result[Any]:
        """Get an issue.

        Args:
            issue_key: The key of the issue (e.g. 'PROJ-42')
            fields:    Names of the fields to load. All fields when None

        Returns:
            Result carrying the issue
        """
        raise NotImplementedError

    @abstractmethod
    def get_issues_by_jql(
        self,
        jql: str,
        start_at: int,
        max_results: int,
        fields: Iterable[str] | None = None,
        ) -> Result[Any]:
        """Search issues with a query string.

        Args:
            jql:         Query, passed through untouched
            start_at:    Index of the first result to return
            max_results: Page size
            fields:      Names of the fields to load

        Notes on usage: Returns a single page. Callers page through results by moving start_at.
        """
        raise NotImplementedError

    @abstractmethod
    def get_issues_by_project(
        self,
        project_key: str,
        start_at: int,
        max_results: int,
        fields: Iterable[str] | None = None,
        ) -> Result[Any]:
        """Search the issues of one project."""
        raise NotImplementedError

    @abstractmethod
    def create_issue(
        self,
        project_key: str,
        summary: str,
        description: str,
        issue_type_id: str,
        priority_id: str,
        labels: Iterable[str] | None = None,
        ) -> Result[Any]:
        """Create an issue.

        Args:
            project_key:   Project to create the issue in
            summary:       Short title for the new issue
            description:   Long-form description
            issue_type_id: Id of the issue type
            priority_id:   Id of the priority
            labels:        Labels to attach

        Returns:
            Result carrying a summary (id, key, link) of the new issue
        """
        raise NotImplementedError

    # ------------------------------------------------------------------
    # Metadata
    # ------------------------------------------------------------------
    @abstractmethod
    def get_priorities(self) -> Result[Any]:
        """List all possible priorities."""
        raise NotImplementedError

    @abstractmethod
    def get_statuses(self) -> Result[Any]:
        """List all possible statuses."""
        raise NotImplementedError

    @abstractmethod
    def get_project_meta(self, project_key: str) -> Result[Any]:
        """Get the create-issue metadata (issue types) of exactly one project.

        Notes on usage: fails when the service does not answer with exactly one
        project whose key matches project_key, even on a successful HTTP status.
        """
        raise NotImplementedError

    @abstractmethod
    def get_application_property(self, property_key: str) -> Result[Any]:
        """Get an application property."""
        raise NotImplementedError

    @abstractmethod
    def set_application_property(self, property_key: str, value: str) -> Result[Any]:
        """Change the value of an application property."""
        raise NotImplementedError

    # ------------------------------------------------------------------
    # Attachments
    # ------------------------------------------------------------------
    @abstractmethod
    def get_attachment(self, attachment_id: str) -> Result[Any]:
        """Get attachment metadata."""
        raise NotImplementedError

    @abstractmethod
    def delete_attachment(self, attachment_id: str) -> Result[None]:
        """Delete an attachment.

        Returns:
            Result with no value on success
        """
        raise NotImplementedError


def get_client(*, interactive: bool = False) -> IssueTrackerClient:
    """Create instance of client.

    Args:
        interactive: When True, the implementation can prompt the user for missing credentials.
                     When False, it relies solely on environment variables.

    Raises:
        NotImplementedError: Until replaced by a concrete factory.
    """
    raise NotImplementedError
