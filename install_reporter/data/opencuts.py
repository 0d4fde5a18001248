"""OPEN-CUTS client — GraphQL smartRun submissions over httpx."""

from __future__ import annotations

import logging
import os
from typing import Any, Optional

import httpx

from install_reporter.core.interfaces import OpenCutsBackend
from install_reporter.core.reporter import TOKEN_SETTING
from install_reporter.data.settings import SettingsDB

logger = logging.getLogger(__name__)

_DEFAULT_URL = "https://ubports.open-cuts.org"
# Anonymous submissions carry no account token unless one is configured.
_DEFAULT_TOKEN = ""

_SMART_RUN_MUTATION = """\
mutation smartRun($testId: ID!, $systemId: ID!, $apiKey: String!, $run: RunInput!) {
  smartRun(testId: $testId, systemId: $systemId, apiKey: $apiKey, run: $run) {
    id
  }
}
"""


class OpenCutsError(RuntimeError):
    """OPEN-CUTS rejected or never received a submission."""


def resolve_open_cuts_config(store: Optional[SettingsDB]) -> tuple[str, str]:
    """Resolve (url, token): env var → settings DB → defaults.

    A token saved by the token dialog wins over the configured
    anonymous one.
    """
    url = (
        os.environ.get("INSTALL_REPORTER_OPENCUTS_URL")
        or (store.get_config("opencuts-url") if store else None)
        or _DEFAULT_URL
    )
    token = (
        os.environ.get("INSTALL_REPORTER_OPENCUTS_TOKEN")
        or (store.get_config(TOKEN_SETTING) if store else None)
        or (store.get_config("opencuts-token") if store else None)
        or _DEFAULT_TOKEN
    )
    return url, token


class OpenCutsClient(OpenCutsBackend):
    """Submits runs to an OPEN-CUTS instance."""

    def __init__(
        self,
        url: str = _DEFAULT_URL,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    async def smart_run(
        self,
        test_case_id: str,
        test_suite_id: str,
        token: str,
        record: dict[str, Any],
    ) -> None:
        payload = {
            "query": _SMART_RUN_MUTATION,
            "variables": {
                "testId": test_case_id,
                "systemId": test_suite_id,
                "apiKey": token,
                "run": record,
            },
        }
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport
            ) as client:
                resp = await client.post(
                    f"{self.url}/graphql",
                    json=payload,
                    headers={"authorization": token},
                )
                resp.raise_for_status()
                data = resp.json()
        except httpx.HTTPStatusError as e:
            raise OpenCutsError(
                f"OPEN-CUTS returned HTTP {e.response.status_code}"
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            raise OpenCutsError(f"OPEN-CUTS request failed: {e}") from e

        errors = data.get("errors") if isinstance(data, dict) else None
        if errors:
            message = errors[0].get("message", errors[0])
            raise OpenCutsError(f"OPEN-CUTS rejected run: {message}")
        logger.debug("smartRun accepted: %s", data.get("data"))
