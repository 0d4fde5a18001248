"""Debug info — one percent-encoded markdown blob per report."""

from __future__ import annotations

import asyncio
from typing import Optional
from urllib.parse import quote, unquote

from install_reporter.core.device_link import format_device_link
from install_reporter.core.environment import get_environment
from install_reporter.core.interfaces import ErrorTracker, OSInfoService
from install_reporter.core.models import ReportContext

UNKNOWN_ERROR = "Unknown Error"

# Characters encodeURIComponent leaves alone; the issue tracker and the
# prompt frontend both decode with that convention.
_URI_COMPONENT_SAFE = "-_.!~*'()"


def encode_debug_info(text: str) -> str:
    return quote(text, safe=_URI_COMPONENT_SAFE)


def decode_debug_info(encoded: str) -> str:
    return unquote(encoded)


class DebugInfoAssembler:
    """Builds the debug info attached to every report."""

    def __init__(
        self,
        context: ReportContext,
        error_tracker: ErrorTracker,
        os_info_service: OSInfoService,
    ):
        self.context = context
        self.error_tracker = error_tracker
        self.os_info_service = os_info_service

    async def assemble(
        self,
        error: Optional[str] = None,
        comment: Optional[str] = None,
    ) -> str:
        """Compose device, environment, comment and errors, then encode.

        Never raises: environment lookup failures degrade to the bare
        platform name.
        """
        device, environment = await asyncio.gather(
            self._device_link(),
            get_environment(self.os_info_service),
        )
        previous_errors = list(self.error_tracker.errors)

        text = f"{device}\n{environment}\n\n"
        if comment:
            text += f"{comment}\n\n"
        if error and error != UNKNOWN_ERROR:
            text += f"**Error:**\n```\n{error}\n```\n\n"
        if previous_errors:
            joined = "\n\n".join(previous_errors)
            text += f"**Previous Errors:**\n```\n{joined}\n```\n"
        return encode_debug_info(text)

    async def _device_link(self) -> str:
        config = self.context.config
        return format_device_link(
            config.codename if config else None, self.context
        )
