"""Installer log and error history."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Iterable, Optional

from install_reporter.core.interfaces import ErrorTracker, LogStore

logger = logging.getLogger(__name__)


class FileLogStore(LogStore):
    """Reads the installer log from disk."""

    def __init__(self, path: Optional[str]):
        self.path = Path(path) if path else None

    async def get(self) -> str:
        if self.path is None:
            return ""
        return await asyncio.to_thread(self._read)

    def _read(self) -> str:
        try:
            return self.path.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            logger.debug("Log %s unreadable: %s", self.path, e)
            return ""


class ErrorHistory(ErrorTracker):
    """Errors the installer recovered from earlier in the run."""

    def __init__(self, errors: Optional[Iterable[str]] = None):
        self.errors = list(errors or [])

    def add(self, error: str) -> None:
        self.errors.append(error)
