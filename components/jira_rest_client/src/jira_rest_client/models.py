"""Jira REST API v2 data shapes.

Responses arrive as JSON with camelCase keys; each shape maps them onto plain
dataclasses through a from_dict() classmethod. Keys the service always sends
are read with [] so a malformed payload fails deserialization, optional keys
with .get().
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

# ---------------------------------------------------------------------------
# Shared bits
# ---------------------------------------------------------------------------


@dataclass
class User:
    name: str
    display_name: str = ""
    email_address: str | None = None
    active: bool = True

    @classmethod
    def from_dict(cls, data: dict) -> User:
        return cls(
            name=data.get("name") or data.get("accountId", ""),
            display_name=data.get("displayName", ""),
            email_address=data.get("emailAddress"),
            active=data.get("active", True),
        )


def _user_or_none(data: dict | None) -> User | None:
    return User.from_dict(data) if data else None


@dataclass
class Priority:
    id: str
    name: str
    description: str = ""
    status_color: str = ""
    icon_url: str = ""
    self_url: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> Priority:
        return cls(
            id=data["id"],
            name=data["name"],
            description=data.get("description", ""),
            status_color=data.get("statusColor", ""),
            icon_url=data.get("iconUrl", ""),
            self_url=data.get("self", ""),
        )


@dataclass
class Status:
    id: str
    name: str
    description: str = ""
    category: str = ""
    icon_url: str = ""
    self_url: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> Status:
        category = data.get("statusCategory") or {}
        return cls(
            id=data["id"],
            name=data["name"],
            description=data.get("description", ""),
            category=category.get("key", ""),
            icon_url=data.get("iconUrl", ""),
            self_url=data.get("self", ""),
        )


@dataclass
class IssueType:
    id: str
    name: str
    description: str = ""
    subtask: bool = False
    icon_url: str = ""
    self_url: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> IssueType:
        return cls(
            id=data["id"],
            name=data["name"],
            description=data.get("description", ""),
            subtask=data.get("subtask", False),
            icon_url=data.get("iconUrl", ""),
            self_url=data.get("self", ""),
        )


# ---------------------------------------------------------------------------
# Projects
# ---------------------------------------------------------------------------


@dataclass
class ProjectMeta:
    """A project as listed by the create-issue metadata, with its issue types."""

    id: str
    key: str
    name: str
    issue_types: list[IssueType] = field(default_factory=list)
    self_url: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> ProjectMeta:
        return cls(
            id=data["id"],
            key=data["key"],
            name=data.get("name", ""),
            issue_types=[IssueType.from_dict(t) for t in data.get("issuetypes", [])],
            self_url=data.get("self", ""),
        )


@dataclass
class IssueCreateMeta:
    projects: list[ProjectMeta] = field(default_factory=list)
    expand: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> IssueCreateMeta:
        return cls(
            projects=[ProjectMeta.from_dict(p) for p in data["projects"]],
            expand=data.get("expand", ""),
        )


@dataclass
class ProjectRef:
    id: str
    key: str
    name: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> ProjectRef:
        return cls(id=data.get("id", ""), key=data["key"], name=data.get("name", ""))


# ---------------------------------------------------------------------------
# Attachments
# ---------------------------------------------------------------------------


@dataclass
class Attachment:
    id: str
    filename: str
    size: int = 0
    mime_type: str = ""
    content: str = ""
    thumbnail: str | None = None
    created: str | None = None
    author: User | None = None
    self_url: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> Attachment:
        return cls(
            id=str(data["id"]),
            filename=data["filename"],
            size=int(data.get("size", 0)),
            mime_type=data.get("mimeType", ""),
            content=data.get("content", ""),
            thumbnail=data.get("thumbnail"),
            created=data.get("created"),
            author=_user_or_none(data.get("author")),
            self_url=data.get("self", ""),
        )


# ---------------------------------------------------------------------------
# Issues
# ---------------------------------------------------------------------------


@dataclass
class IssueFields:
    """The ``fields`` object of an issue.

    Every attribute is optional: a fields filter on the request limits which
    ones the service returns. Fields without a dedicated attribute (custom
    fields among them) stay available in ``raw``.
    """

    summary: str | None = None
    description: str | None = None
    labels: list[str] = field(default_factory=list)
    status: Status | None = None
    priority: Priority | None = None
    issue_type: IssueType | None = None
    project: ProjectRef | None = None
    assignee: User | None = None
    reporter: User | None = None
    created: str | None = None
    updated: str | None = None
    due_date: str | None = None
    attachments: list[Attachment] = field(default_factory=list)
    raw: dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_dict(cls, data: dict) -> IssueFields:
        def nested(key, shape):
            value = data.get(key)
            return shape.from_dict(value) if value else None

        return cls(
            summary=data.get("summary"),
            description=data.get("description"),
            labels=list(data.get("labels") or []),
            status=nested("status", Status),
            priority=nested("priority", Priority),
            issue_type=nested("issuetype", IssueType),
            project=nested("project", ProjectRef),
            assignee=_user_or_none(data.get("assignee")),
            reporter=_user_or_none(data.get("reporter")),
            created=data.get("created"),
            updated=data.get("updated"),
            due_date=data.get("duedate"),
            attachments=[Attachment.from_dict(a) for a in data.get("attachment") or []],
            raw=dict(data),
        )


@dataclass
class Issue:
    """A Jira issue.

    The class constants are the field names understood by the fields filter of
    get_issue / get_issues_by_jql, e.g. ``client.get_issue("P-1", [Issue.SUMMARY])``.
    """

    SUMMARY = "summary"
    DESCRIPTION = "description"
    LABELS = "labels"
    STATUS = "status"
    PRIORITY = "priority"
    ISSUE_TYPE = "issuetype"
    PROJECT = "project"
    ASSIGNEE = "assignee"
    REPORTER = "reporter"
    CREATED = "created"
    UPDATED = "updated"
    DUE_DATE = "duedate"
    ATTACHMENT = "attachment"

    id: str
    key: str
    fields: IssueFields = field(default_factory=IssueFields)
    expand: str = ""
    self_url: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> Issue:
        return cls(
            id=data["id"],
            key=data["key"],
            fields=IssueFields.from_dict(data.get("fields") or {}),
            expand=data.get("expand", ""),
            self_url=data.get("self", ""),
        )

    def __repr__(self) -> str:
        return f"<Issue key={self.key!r} summary={self.fields.summary!r}>"


@dataclass
class Issues:
    """One page of search results."""

    start_at: int
    max_results: int
    total: int
    issues: list[Issue] = field(default_factory=list)
    expand: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> Issues:
        return cls(
            start_at=data["startAt"],
            max_results=data["maxResults"],
            total=data["total"],
            issues=[Issue.from_dict(i) for i in data.get("issues", [])],
            expand=data.get("expand", ""),
        )


@dataclass
class BasicIssue:
    """What the service answers after creating an issue."""

    id: str
    key: str
    self_url: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> BasicIssue:
        return cls(id=data["id"], key=data["key"], self_url=data.get("self", ""))


# ---------------------------------------------------------------------------
# Application properties
# ---------------------------------------------------------------------------


@dataclass
class ApplicationProperty:
    id: str
    key: str
    value: str
    name: str = ""
    desc: str = ""
    type: str = ""
    default_value: str = ""
    allowed_values: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> ApplicationProperty:
        return cls(
            id=data["id"],
            key=data["key"],
            value=data["value"],
            name=data.get("name", ""),
            desc=data.get("desc", ""),
            type=data.get("type", ""),
            default_value=data.get("defaultValue", ""),
            allowed_values=list(data.get("allowedValues") or []),
        )


def single_application_property(data: Any) -> ApplicationProperty:
    """Jira answers a keyed lookup with either the object or a one-element list."""
    if isinstance(data, list):
        if len(data) != 1:
            raise ValueError(f"expected one application property, got {len(data)}")
        data = data[0]
    return ApplicationProperty.from_dict(data)


# ---------------------------------------------------------------------------
# Request payloads
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CreateIssueRequest:
    project_key: str
    summary: str
    description: str
    issue_type_id: str
    priority_id: str
    labels: tuple[str, ...] = ()

    def to_dict(self) -> dict:
        return {
            "fields": {
                "project": {"key": self.project_key},
                "summary": self.summary,
                "description": self.description,
                "issuetype": {"id": self.issue_type_id},
                "priority": {"id": self.priority_id},
                "labels": list(self.labels),
            }
        }


@dataclass(frozen=True)
class ApplicationPropertyUpdate:
    key: str
    value: str

    def to_dict(self) -> dict:
        return {"id": self.key, "value": self.value}
