"""Contracts for the collaborators the reporter talks to."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional

from install_reporter.core.models import OSInfo


class IssueTrackerError(RuntimeError):
    """The issue tracker could not open a new-issue form."""


class LogStore(ABC):
    """Access to the primary installer log."""

    @abstractmethod
    async def get(self) -> str:
        """Return the log content, or "" when there is none. Never raises."""


class ErrorTracker(ABC):
    """Holds errors captured earlier in the run, oldest first."""

    errors: list[str]


class SettingsStore(ABC):
    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Persist a named setting."""


class PromptService(ABC):
    """Presents a modal question to the user."""

    @abstractmethod
    async def prompt(self, spec: dict[str, Any]) -> Optional[dict[str, Any]]:
        """Show the prompt described by `spec` and return the answers.

        Returns None when the user closed the prompt. May raise.
        """


class OSInfoService(ABC):
    @abstractmethod
    async def os_info(self) -> OSInfo:
        """Return information about the host operating system. May raise."""


class OpenCutsBackend(ABC):
    """Automated test-tracking backend."""

    @abstractmethod
    async def smart_run(
        self,
        test_case_id: str,
        test_suite_id: str,
        token: str,
        record: dict[str, Any],
    ) -> None:
        """Submit a run; the backend picks the matching test run itself.

        Raises on any backend failure.
        """


class IssueTracker(ABC):
    """Manual issue tracker for free-form bug reports."""

    @abstractmethod
    def open_issue(self, title: str, body: str) -> None:
        """Open a new-issue form pre-filled with `title` and `body`."""
