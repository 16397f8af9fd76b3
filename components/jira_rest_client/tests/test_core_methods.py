"""Unit tests for JiraClient endpoint operations.

The transport is mocked so no HTTP call leaves the process; each test checks
the descriptor an operation builds and how its response is turned into a
Result.
"""

#Run with "python -m pytest components/jira_rest_client/tests -v"

import json
from http import HTTPStatus
from unittest.mock import MagicMock

import pytest

from issue_tracker_interface.result import IssueTrackerApiError
from jira_rest_client.account import JiraAccount
from jira_rest_client.jira_impl import JiraClient
from jira_rest_client.models import BasicIssue, Issue, Issues, ProjectMeta
from jira_rest_client.request import Method
from jira_rest_client.transport import TransportResponse, TransportStatus


def _completed(status_code: int, payload=None, reason: str = "") -> TransportResponse:
    content = "" if payload is None else json.dumps(payload)
    return TransportResponse(TransportStatus.COMPLETED, status_code=status_code, reason=reason, content=content)


def _not_completed() -> TransportResponse:
    return TransportResponse(TransportStatus.ERROR, exception=ConnectionError("connection refused"))


#Fixture for mock tests
@pytest.fixture
def jira_client():
    """Returns a JiraClient whose transport never touches the network."""
    client = JiraClient(JiraAccount("https://test.atlassian.net", "test@example.com", "dummy_token"))

    # Mock send so every operation goes through the real executor
    client._transport.send = MagicMock()
    return client


def _sent(client):
    """The descriptor handed to the transport on the last call."""
    return client._transport.send.call_args[0][0]


ISSUE_PAYLOAD = {
    "id": "10001",
    "key": "TEST-1",
    "self": "https://test.atlassian.net/rest/api/2/issue/10001",
    "fields": {
        "summary": "Login fails",
        "labels": ["bug"],
        "status": {"id": "3", "name": "In Progress", "statusCategory": {"key": "indeterminate"}},
        "priority": {"id": "2", "name": "High"},
    },
}

#------------------------------ get_issue ------------------------------

def test_get_issue_decodes_issue(jira_client):
    jira_client._transport.send.return_value = _completed(200, ISSUE_PAYLOAD)

    result = jira_client.get_issue("TEST-1", [Issue.SUMMARY, Issue.STATUS])

    assert result.ok
    issue = result.unwrap()
    assert issue.key == "TEST-1"
    assert issue.fields.summary == "Login fails"
    assert issue.fields.status.name == "In Progress"
    assert issue.fields.labels == ["bug"]

    descriptor = _sent(jira_client)
    assert descriptor.method is Method.GET
    assert descriptor.path == "/issue/TEST-1"
    assert descriptor.params == (("fields", "summary,status"),)
    assert descriptor.expected_status == HTTPStatus.OK


def test_get_issue_without_fields_sends_empty_string(jira_client):
    jira_client._transport.send.return_value = _completed(200, ISSUE_PAYLOAD)

    jira_client.get_issue("TEST-1")

    assert _sent(jira_client).params == (("fields", ""),)


def test_get_issue_404_is_a_failure(jira_client):
    jira_client._transport.send.return_value = TransportResponse(
        TransportStatus.COMPLETED, status_code=404, reason="Not Found",
        content='{"errorMessages":["Issue Does Not Exist"]}',
    )

    result = jira_client.get_issue("BAD-1")

    assert not result.ok
    assert result.value is None
    assert "404" in result.error.message
    assert "Not Found" in result.error.message
    assert "Issue Does Not Exist" in result.error.message

@pytest.mark.parametrize("fields", [{"status": "Open"}, ["x"]])
def test_get_issue_malformed_fields_is_a_failure(jira_client, fields):
    # Jira answered 200 but the fields object doesn't have the documented shape
    jira_client._transport.send.return_value = _completed(200, {"id": "1", "key": "TEST-1", "fields": fields})

    result = jira_client.get_issue("TEST-1")

    assert not result.ok
    assert "Could not deserialize" in result.error.message

#------------------------------ search ------------------------------

SEARCH_PAYLOAD = {"startAt": 0, "maxResults": 50, "total": 1, "issues": [ISSUE_PAYLOAD]}


def test_get_issues_by_jql_builds_params_in_order(jira_client):
    jira_client._transport.send.return_value = _completed(200, SEARCH_PAYLOAD)

    result = jira_client.get_issues_by_jql("assignee = currentUser()", 10, 50, ["summary"])

    assert isinstance(result.unwrap(), Issues)
    assert result.value.total == 1
    assert result.value.issues[0].key == "TEST-1"

    descriptor = _sent(jira_client)
    assert descriptor.path == "/search"
    assert descriptor.params == (
        ("jql", "assignee = currentUser()"),
        ("fields", "summary"),
        ("startAt", "10"),
        ("maxResults", "50"),
    )


def test_get_issues_by_jql_empty_fields_is_empty_string(jira_client):
    jira_client._transport.send.return_value = _completed(200, SEARCH_PAYLOAD)

    jira_client.get_issues_by_jql("project=TEST", 0, 50, [])

    assert dict(_sent(jira_client).params)["fields"] == ""


def test_get_issues_by_project_derives_jql(jira_client):
    jira_client._transport.send.return_value = _completed(200, SEARCH_PAYLOAD)

    jira_client.get_issues_by_project("TEST", 0, 20)

    params = dict(_sent(jira_client).params)
    assert params["jql"] == "project=TEST"
    assert params["maxResults"] == "20"

#------------------------------ metadata ------------------------------

def test_get_priorities(jira_client):
    jira_client._transport.send.return_value = _completed(
        200, [{"id": "1", "name": "Highest", "statusColor": "#d04437"}, {"id": "2", "name": "High"}],
    )

    priorities = jira_client.get_priorities().unwrap()

    assert [p.name for p in priorities] == ["Highest", "High"]
    assert priorities[0].status_color == "#d04437"
    assert _sent(jira_client).path == "/priority"
    assert _sent(jira_client).params == ()


def test_get_statuses(jira_client):
    jira_client._transport.send.return_value = _completed(200, [{"id": "1", "name": "Open"}])

    statuses = jira_client.get_statuses().unwrap()

    assert statuses[0].name == "Open"
    assert _sent(jira_client).path == "/status"


def _createmeta(*keys):
    return {
        "projects": [
            {"id": str(i), "key": key, "name": key.title(), "issuetypes": [{"id": "1", "name": "Bug"}]}
            for i, key in enumerate(keys)
        ]
    }


def test_get_project_meta_returns_single_project(jira_client):
    jira_client._transport.send.return_value = _completed(200, _createmeta("TEST"))

    result = jira_client.get_project_meta("TEST")

    meta = result.unwrap()
    assert isinstance(meta, ProjectMeta)
    assert meta.key == "TEST"
    assert meta.issue_types[0].name == "Bug"
    descriptor = _sent(jira_client)
    assert descriptor.path == "/issue/createmeta"
    assert descriptor.params == (("projectKeys", "TEST"),)


def test_get_project_meta_fails_on_two_projects(jira_client):
    jira_client._transport.send.return_value = _completed(200, _createmeta("TEST", "OTHER"))

    result = jira_client.get_project_meta("TEST")

    assert not result.ok
    assert "expected exactly one project matching key TEST" in result.error.message


def test_get_project_meta_fails_on_mismatched_key(jira_client):
    jira_client._transport.send.return_value = _completed(200, _createmeta("OTHER"))

    result = jira_client.get_project_meta("TEST")

    assert not result.ok
    assert "OTHER" in result.error.message


def test_get_project_meta_fails_on_no_project(jira_client):
    jira_client._transport.send.return_value = _completed(200, {"projects": []})

    assert not jira_client.get_project_meta("TEST").ok


def test_get_application_property_accepts_list_answer(jira_client):
    jira_client._transport.send.return_value = _completed(
        200, [{"id": "jira.title", "key": "jira.title", "value": "My Jira", "defaultValue": "Jira"}],
    )

    prop = jira_client.get_application_property("jira.title").unwrap()

    assert prop.value == "My Jira"
    assert prop.default_value == "Jira"
    assert _sent(jira_client).params == (("key", "jira.title"),)


def test_set_application_property_puts_body(jira_client):
    jira_client._transport.send.return_value = _completed(
        200, {"id": "jira.title", "key": "jira.title", "value": "New"},
    )

    prop = jira_client.set_application_property("jira.title", "New").unwrap()

    assert prop.value == "New"
    descriptor = _sent(jira_client)
    assert descriptor.method is Method.PUT
    assert descriptor.path == "/application-properties/jira.title"
    assert descriptor.body == {"id": "jira.title", "value": "New"}

#------------------------------ create_issue ------------------------------

def test_create_issue_builds_post_body(jira_client):
    jira_client._transport.send.return_value = _completed(
        201, {"id": "10002", "key": "PROJ-2", "self": "https://test.atlassian.net/rest/api/2/issue/10002"},
    )

    result = jira_client.create_issue("PROJ", "Title", "Desc", "1", "2", ["bug"])

    assert result.unwrap() == BasicIssue("10002", "PROJ-2", "https://test.atlassian.net/rest/api/2/issue/10002")
    descriptor = _sent(jira_client)
    assert descriptor.method is Method.POST
    assert descriptor.path == "/issue"
    assert descriptor.expected_status == HTTPStatus.CREATED
    assert descriptor.body == {
        "fields": {
            "project": {"key": "PROJ"},
            "summary": "Title",
            "description": "Desc",
            "issuetype": {"id": "1"},
            "priority": {"id": "2"},
            "labels": ["bug"],
        }
    }


def test_create_issue_without_labels_sends_empty_list(jira_client):
    jira_client._transport.send.return_value = _completed(201, {"id": "1", "key": "PROJ-1"})

    jira_client.create_issue("PROJ", "Title", "Desc", "1", "2", None)

    assert _sent(jira_client).body["fields"]["labels"] == []


def test_create_issue_200_is_a_failure(jira_client):
    # Jira answers 201 on creation; a 200 is not what was asked for
    jira_client._transport.send.return_value = _completed(200, {"id": "1", "key": "PROJ-1"})

    result = jira_client.create_issue("PROJ", "Title", "Desc", "1", "2", [])

    assert not result.ok
    with pytest.raises(IssueTrackerApiError):
        result.unwrap()

#------------------------------ attachments ------------------------------

def test_get_attachment(jira_client):
    jira_client._transport.send.return_value = _completed(
        200, {"id": "77", "filename": "log.txt", "size": 120, "mimeType": "text/plain",
              "author": {"name": "jdoe", "displayName": "Jane Doe"}},
    )

    attachment = jira_client.get_attachment("77").unwrap()

    assert attachment.filename == "log.txt"
    assert attachment.mime_type == "text/plain"
    assert attachment.author.display_name == "Jane Doe"
    assert _sent(jira_client).path == "/attachment/77"


def test_get_attachment_author_as_string_is_a_failure(jira_client):
    jira_client._transport.send.return_value = _completed(200, {"id": "77", "filename": "log.txt", "author": "jdoe"})

    result = jira_client.get_attachment("77")

    assert not result.ok
    with pytest.raises(IssueTrackerApiError):
        result.unwrap()


def test_delete_attachment_204_succeeds(jira_client):
    jira_client._transport.send.return_value = _completed(204)

    result = jira_client.delete_attachment("77")

    assert result.ok
    assert result.value is None
    descriptor = _sent(jira_client)
    assert descriptor.method is Method.DELETE
    assert descriptor.expected_status == HTTPStatus.NO_CONTENT


def test_delete_attachment_200_fails(jira_client):
    jira_client._transport.send.return_value = _completed(200, {})

    result = jira_client.delete_attachment("77")

    assert not result.ok
    assert "Failed to delete attachment with id=77" in result.error.message

#-------------------- failures common to every operation --------------------

OPERATIONS = [
    ("get_issue", ("TEST-1",)),
    ("get_issues_by_jql", ("project=TEST", 0, 50)),
    ("get_issues_by_project", ("TEST", 0, 50)),
    ("get_priorities", ()),
    ("get_statuses", ()),
    ("get_project_meta", ("TEST",)),
    ("create_issue", ("PROJ", "Title", "Desc", "1", "2", ["bug"])),
    ("get_application_property", ("jira.title",)),
    ("set_application_property", ("jira.title", "New")),
    ("get_attachment", ("77",)),
    ("delete_attachment", ("77",)),
]


@pytest.mark.parametrize("name,args", OPERATIONS)
def test_every_operation_fails_when_transport_does_not_complete(jira_client, name, args):
    jira_client._transport.send.return_value = _not_completed()

    result = getattr(jira_client, name)(*args)

    assert not result.ok
    assert isinstance(result.error, IssueTrackerApiError)
    assert "Error" in result.error.message
    assert jira_client._transport.send.call_count == 1


@pytest.mark.parametrize("name,args", OPERATIONS)
def test_every_operation_fails_on_unexpected_status(jira_client, name, args):
    jira_client._transport.send.return_value = _completed(500, {"errorMessages": ["boom"]}, "Server Error")

    result = getattr(jira_client, name)(*args)

    assert not result.ok
    assert "500" in result.error.message
