"""Issue tracker client contract."""

from issue_tracker_interface.client import IssueTrackerClient, get_client
from issue_tracker_interface.result import IssueTrackerApiError, Result

__all__ = ["IssueTrackerApiError", "IssueTrackerClient", "Result", "get_client"]
