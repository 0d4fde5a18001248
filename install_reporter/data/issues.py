"""GitHub issue tracker — opens a pre-filled new-issue page."""

from __future__ import annotations

import logging
import os
import webbrowser
from typing import Callable, Optional
from urllib.parse import urlencode

from install_reporter.core.interfaces import IssueTracker, IssueTrackerError
from install_reporter.data.settings import SettingsDB

logger = logging.getLogger(__name__)

_DEFAULT_REPO_URL = "https://github.com/ubports/ubports-installer"

# Browsers and GitHub both start failing somewhere past 8k characters.
MAX_URL_LENGTH = 8000
_TRUNCATED = "\n[...]"


def resolve_issues_url(store: Optional[SettingsDB]) -> str:
    """Resolve the repository URL: env var → settings DB → default."""
    return (
        os.environ.get("INSTALL_REPORTER_ISSUES_URL")
        or (store.get_config("issues-url") if store else None)
        or _DEFAULT_REPO_URL
    )


class GitHubIssueTracker(IssueTracker):
    def __init__(
        self,
        repo_url: str = _DEFAULT_REPO_URL,
        opener: Callable[[str], bool] = webbrowser.open,
    ):
        self.repo_url = repo_url.rstrip("/")
        self._opener = opener

    def new_issue_url(self, title: str, body: str) -> str:
        """Build the new-issue URL, trimming the end of the body to fit."""
        url = self._build_url(title, body)
        if len(url) <= MAX_URL_LENGTH:
            return url
        # Longest prefix of the body that still fits once encoded
        lo, hi = 0, len(body)
        while lo < hi:
            mid = (lo + hi + 1) // 2
            if len(self._build_url(title, body[:mid] + _TRUNCATED)) <= MAX_URL_LENGTH:
                lo = mid
            else:
                hi = mid - 1
        return self._build_url(title, body[:lo] + _TRUNCATED)

    def _build_url(self, title: str, body: str) -> str:
        return f"{self.repo_url}/issues/new?" + urlencode(
            {"title": title, "body": body}
        )

    def open_issue(self, title: str, body: str) -> None:
        url = self.new_issue_url(title, body)
        try:
            opened = self._opener(url)
        except Exception as e:
            raise IssueTrackerError(f"Could not open browser: {e}") from e
        if not opened:
            raise IssueTrackerError(f"No browser available to open {url}")
        logger.info("Opened new issue page for %r", title)
