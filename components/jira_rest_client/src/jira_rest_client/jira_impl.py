"""
Jira client
-----------
Every public method builds exactly one EndpointDescriptor and hands it to the
RequestExecutor. Nothing raises on a failed call: each method returns a
Result carrying either the decoded value or an IssueTrackerApiError.

See http://docs.atlassian.com/jira/REST/latest/ for the Jira API.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable
from http import HTTPStatus

from issue_tracker_interface.client import IssueTrackerClient
from issue_tracker_interface.result import Result
from jira_rest_client.account import JiraAccount, get_account
from jira_rest_client.executor import RequestExecutor
from jira_rest_client.models import (
    ApplicationProperty,
    ApplicationPropertyUpdate,
    Attachment,
    BasicIssue,
    CreateIssueRequest,
    Issue,
    IssueCreateMeta,
    Issues,
    Priority,
    ProjectMeta,
    Status,
    single_application_property,
)
from jira_rest_client.request import EndpointDescriptor, Method, to_comma_separated
from jira_rest_client.transport import DEFAULT_TIMEOUT, JiraTransport

logger = logging.getLogger(__name__)


class JiraClient(IssueTrackerClient):
    """
    Args:
        account: Server url and credentials. The url must be https, otherwise
                 Jira responds with 401 to every call.
        timeout: Per-request transport timeout in seconds
    """

    def __init__(self, account: JiraAccount, timeout: float | None = DEFAULT_TIMEOUT) -> None:
        self._account = account
        self._transport = JiraTransport(account, timeout=timeout)
        self._executor = RequestExecutor(self._transport)

    @property
    def account(self) -> JiraAccount:
        return self._account

    def close(self) -> None:
        self._transport.close()

    def __enter__(self) -> JiraClient:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Issues
    # ------------------------------------------------------------------

    def get_issue(self, issue_key: str, fields: Iterable[str] | None = None) -> Result[Issue]:
        """Return the issue with the given key, optionally loading only some fields.

        Field names are available as constants on Issue, e.g. Issue.SUMMARY.
        """
        descriptor = EndpointDescriptor(
            Method.GET,
            f"/issue/{issue_key}",
            HTTPStatus.OK,
            params=(("fields", to_comma_separated(fields)),),
        )
        return self._executor.execute(descriptor, Issue.from_dict)

    def get_issues_by_jql(
        self,
        jql: str,
        start_at: int,
        max_results: int,
        fields: Iterable[str] | None = None,
        ) -> Result[Issues]:
        """Return one page of issues matching the JQL query."""
        descriptor = EndpointDescriptor(
            Method.GET,
            "/search",
            HTTPStatus.OK,
            params=(
                ("jql", jql),
                ("fields", to_comma_separated(fields)),
                ("startAt", str(start_at)),
                ("maxResults", str(max_results)),
            ),
        )
        return self._executor.execute(descriptor, Issues.from_dict)

    def get_issues_by_project(
        self,
        project_key: str,
        start_at: int,
        max_results: int,
        fields: Iterable[str] | None = None,
        ) -> Result[Issues]:
        """Return one page of the issues of a project."""
        return self.get_issues_by_jql(f"project={project_key}", start_at, max_results, fields)

    def create_issue(
        self,
        project_key: str,
        summary: str,
        description: str,
        issue_type_id: str,
        priority_id: str,
        labels: Iterable[str] | None = None,
        ) -> Result[BasicIssue]:
        """Create a new issue. The result holds its id, key and link only."""
        payload = CreateIssueRequest(
            project_key=project_key,
            summary=summary,
            description=description,
            issue_type_id=issue_type_id,
            priority_id=priority_id,
            labels=tuple(labels or ()),
        )
        descriptor = EndpointDescriptor(Method.POST, "/issue", HTTPStatus.CREATED, body=payload.to_dict())
        return self._executor.execute(descriptor, BasicIssue.from_dict)

    # ------------------------------------------------------------------
    # Metadata
    # ------------------------------------------------------------------

    def get_priorities(self) -> Result[list[Priority]]:
        descriptor = EndpointDescriptor(Method.GET, "/priority", HTTPStatus.OK)
        return self._executor.execute(descriptor, lambda data: [Priority.from_dict(p) for p in data])

    def get_statuses(self) -> Result[list[Status]]:
        descriptor = EndpointDescriptor(Method.GET, "/status", HTTPStatus.OK)
        return self._executor.execute(descriptor, lambda data: [Status.from_dict(s) for s in data])

    def get_project_meta(self, project_key: str) -> Result[ProjectMeta]:
        """Return the create-issue metadata of a project: its available issue types.

        Field metadata is supported by Jira but not loaded here.
        """
        descriptor = EndpointDescriptor(
            Method.GET,
            "/issue/createmeta",
            HTTPStatus.OK,
            params=(("projectKeys", project_key),),
        )
        result = self._executor.execute(descriptor, IssueCreateMeta.from_dict)
        if not result.ok:
            return result

        # a 200 is not enough: the answer must be about exactly the project asked for
        projects = result.value.projects
        if len(projects) != 1 or projects[0].key != project_key:
            message = (
                f"expected exactly one project matching key {project_key}, "
                f"got {[p.key for p in projects]}"
            )
            logger.warning("Jira call failed: %s", message)
            return Result.failure(message)
        return Result.success(projects[0])

    def get_application_property(self, property_key: str) -> Result[ApplicationProperty]:
        descriptor = EndpointDescriptor(
            Method.GET,
            "/application-properties",
            HTTPStatus.OK,
            params=(("key", property_key),),
        )
        return self._executor.execute(descriptor, single_application_property)

    def set_application_property(self, property_key: str, value: str) -> Result[ApplicationProperty]:
        payload = ApplicationPropertyUpdate(property_key, value)
        descriptor = EndpointDescriptor(
            Method.PUT,
            f"/application-properties/{property_key}",
            HTTPStatus.OK,
            body=payload.to_dict(),
        )
        return self._executor.execute(descriptor, ApplicationProperty.from_dict)

    # ------------------------------------------------------------------
    # Attachments
    # ------------------------------------------------------------------

    def get_attachment(self, attachment_id: str) -> Result[Attachment]:
        descriptor = EndpointDescriptor(Method.GET, f"/attachment/{attachment_id}", HTTPStatus.OK)
        return self._executor.execute(descriptor, Attachment.from_dict)

    def delete_attachment(self, attachment_id: str) -> Result[None]:
        """Delete an attachment. Jira answers 204 No Content; anything else fails."""
        descriptor = EndpointDescriptor(Method.DELETE, f"/attachment/{attachment_id}", HTTPStatus.NO_CONTENT)
        result = self._executor.execute_no_content(descriptor)
        if not result.ok:
            return Result.failure(f"Failed to delete attachment with id={attachment_id}: {result.error.message}")
        return result


# ---------------------------------------------------------------------------
# Get client
# ---------------------------------------------------------------------------

def get_client(*, interactive: bool = False, timeout: float | None = DEFAULT_TIMEOUT) -> JiraClient:
    """Return a configured JiraClient.

    Reads credentials from environment variables. If "interactive = True" and
    any variable is missing, the user will be prompted.

    Environment variables:
        JIRA_BASE_URL:    Base URL of the Jira instance.
        JIRA_USER_EMAIL:  Atlassian account email.
        JIRA_API_TOKEN:   API token from Atlassian account settings.
    """
    return JiraClient(get_account(interactive=interactive), timeout=timeout)
