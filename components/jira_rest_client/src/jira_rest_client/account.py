"""
Authentication
--------------
Jira account configuration. Two credential modes:

1. get_account(interactive = True)
    User is prompted at runtime for any value missing from the environment.
2. get_account(interactive = False) - Default
        JIRA_BASE_URL   https://myorg.atlassian.net
        JIRA_USER_EMAIL me@example.com
        JIRA_API_TOKEN  <token from https://id.atlassian.com/manage-profile/security/api-tokens>

The base url needs to be https (not http), otherwise Jira answers every call
with 401 Unauthorized.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from getpass import getpass

logger = logging.getLogger(__name__)

_ENV_BASE_URL = "JIRA_BASE_URL"
_ENV_USER = "JIRA_USER_EMAIL"
_ENV_TOKEN = "JIRA_API_TOKEN"


@dataclass(frozen=True)
class JiraAccount:
    """Server address and credential pair used for every call of a client.

    Args:
        server_url: Jira instance root URL (e.g. 'https://myorg.atlassian.net')
        user:       Email (or user name) used for basic auth
        password:   API token (or password) used for basic auth
    """

    server_url: str
    user: str
    password: str = field(repr=False)

    def __post_init__(self) -> None:
        #frozen, so normalize through object.__setattr__
        object.__setattr__(self, "server_url", self.server_url.rstrip("/"))

    @property
    def is_secure(self) -> bool:
        return self.server_url.lower().startswith("https://")


def get_account(*, interactive: bool = False) -> JiraAccount:
    """Return a JiraAccount read from the environment.

    Raises:
        EnvironmentError: when a variable is missing and interactive is False.
    """
    base_url = os.environ.get(_ENV_BASE_URL, "")
    user = os.environ.get(_ENV_USER, "")
    token = os.environ.get(_ENV_TOKEN, "")

    if interactive:
        if not base_url:
            base_url = input("Jira base URL (e.g. https://myorg.atlassian.net): ").strip()
        if not user:
            user = input("Jira user email: ").strip()
        if not token:
            token = getpass("Jira API token: ")
    else:
        missing = [name for name, val in [
            (_ENV_BASE_URL, base_url),
            (_ENV_USER, user),
            (_ENV_TOKEN, token),
        ] if not val]
        if missing:
            raise EnvironmentError(
                f"Missing required environment variables: {', '.join(missing)}. "
                "Set them or call get_client(interactive=True)."
            )

    account = JiraAccount(base_url, user, token)
    if not account.is_secure:
        logger.warning("Jira base url %s is not https; the server will reject basic auth", account.server_url)
    return account
