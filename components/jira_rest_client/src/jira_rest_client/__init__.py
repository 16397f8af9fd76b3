"""Jira REST API v2 client."""

from jira_rest_client.account import JiraAccount, get_account
from jira_rest_client.jira_impl import JiraClient, get_client

__all__ = ["JiraAccount", "JiraClient", "get_account", "get_client"]
