"""Reporter — prepares reports and routes them to OPEN-CUTS or GitHub."""

from __future__ import annotations

import logging
from typing import Any, Optional, Union

from install_reporter.core.debug_info import DebugInfoAssembler, decode_debug_info
from install_reporter.core.interfaces import (
    ErrorTracker,
    IssueTracker,
    IssueTrackerError,
    LogStore,
    OpenCutsBackend,
    OSInfoService,
    PromptService,
    SettingsStore,
)
from install_reporter.core.models import (
    CombinationEntry,
    LogEntry,
    ReportContext,
    ReportKind,
    ReportPayload,
    Result,
    SubmissionOutcome,
    SubmissionRecord,
)

logger = logging.getLogger(__name__)

TEST_CASE_ID = "5e9d746c6346e112514cfec7"
TEST_SUITE_ID = "5e9d75406346e112514cfeca"
LOG_NAME = "ubports-installer.log"
IGNORED_ERRORS_NAME = "ignored errors"
TOKEN_SETTING = "opencuts_token"

OPEN_CUTS_TEST_URL = f"https://ubports.open-cuts.org/test/{TEST_CASE_ID}"
OPEN_CUTS_ACCOUNT_URL = "https://ubports.open-cuts.org/account"
ISSUES_URL = "https://github.com/ubports/ubports-installer/issues"

# GitHub rejects new-issue URLs much past 8k characters.
MAX_ISSUE_LOG_CHARS = 4000

_RESULT_FIELD = {
    "type": "select",
    "name": "result",
    "label": "Result",
    "choices": [r.value for r in Result],
}
_TITLE_FIELD = {"type": "input", "name": "title", "label": "Title"}
_COMMENT_FIELD = {
    "type": "textarea",
    "name": "comment",
    "label": "Comment",
    "placeholder": "What happened? Anything unusual about your setup?",
}


class Reporter:
    """Assembles installer reports and submits them.

    Every collaborator is injected, so nothing here touches global state.
    """

    def __init__(
        self,
        context: ReportContext,
        log_store: LogStore,
        error_tracker: ErrorTracker,
        settings: SettingsStore,
        prompt_service: PromptService,
        os_info_service: OSInfoService,
        backend: OpenCutsBackend,
        issue_tracker: IssueTracker,
        anonymous_token: str = "",
    ):
        self.context = context
        self.log_store = log_store
        self.error_tracker = error_tracker
        self.settings = settings
        self.prompt_service = prompt_service
        self.backend = backend
        self.issue_tracker = issue_tracker
        self.anonymous_token = anonymous_token
        self.assembler = DebugInfoAssembler(
            context, error_tracker, os_info_service
        )

    # ── Report preparation ──────────────────────────────────────────

    async def prepare_error_report(self) -> ReportPayload:
        body = await self.assembler.assemble()
        return ReportPayload(
            kind=ReportKind.ERROR,
            body=body,
            title="Report an error",
            fields=(
                {**_RESULT_FIELD, "default": Result.FAIL.value},
                _TITLE_FIELD,
                _COMMENT_FIELD,
            ),
            links=(
                ("Known issues", ISSUES_URL),
                ("OPEN-CUTS test", OPEN_CUTS_TEST_URL),
            ),
        )

    async def prepare_success_report(self) -> ReportPayload:
        body = await self.assembler.assemble()
        return ReportPayload(
            kind=ReportKind.SUCCESS,
            body=body,
            title="Report a result",
            fields=(
                {**_RESULT_FIELD, "default": Result.PASS.value},
                _COMMENT_FIELD,
            ),
            links=(("OPEN-CUTS test", OPEN_CUTS_TEST_URL),),
        )

    # ── Submission ──────────────────────────────────────────────────

    async def report(
        self,
        result: Union[Result, str],
        error_message: Optional[str] = None,
    ) -> None:
        """Ask the user about the run and submit what they confirm.

        Closing the prompt, or any failure while prompting, ends the
        flow without a report.
        """
        try:
            if error_message:
                payload = await self.prepare_error_report()
            else:
                payload = await self.prepare_success_report()
            answer = await self.prompt_service.prompt(payload.to_prompt())
            if not answer:
                logger.debug("Report prompt closed without answers")
                return
            fields: dict[str, Any] = {"result": Result(result).value}
            if error_message:
                fields["error"] = error_message
            fields.update(answer)
            await self.send_bug_report(fields)
        except Exception as e:
            logger.debug("Report not sent: %s", e)

    async def send_bug_report(
        self,
        fields: dict[str, Any],
        session_id: Optional[str] = None,
    ) -> SubmissionOutcome:
        """Submit to OPEN-CUTS, falling back to a GitHub issue once."""
        if await self._try_open_cuts_run(session_id, fields):
            return SubmissionOutcome.SUBMITTED
        if await self._open_manual_issue(fields):
            return SubmissionOutcome.FALLBACK
        return SubmissionOutcome.BOTH_FAILED

    async def send_open_cuts_run(
        self,
        session_id: Optional[str],
        fields: dict[str, Any],
    ) -> None:
        """Build a run record and hand it to the backend.

        Backend failures propagate to the caller.
        """
        log_content = await self.log_store.get()
        previous_errors = list(self.error_tracker.errors)

        logs = [LogEntry(name=LOG_NAME, content=log_content or "")]
        if previous_errors:
            logs.append(LogEntry(
                name=IGNORED_ERRORS_NAME,
                content="\n\n".join(previous_errors),
            ))

        record = SubmissionRecord(
            test_case_id=TEST_CASE_ID,
            test_suite_id=TEST_SUITE_ID,
            result=fields.get("result"),
            comment=fields.get("comment"),
            combination=[
                CombinationEntry("Environment", self.context.environment_label),
                CombinationEntry("Package", self.context.package_label),
            ],
            logs=logs,
        )
        await self.backend.smart_run(
            record.test_case_id,
            record.test_suite_id,
            session_id or self.anonymous_token,
            record.to_payload(),
        )
        logger.info("OPEN-CUTS run submitted (%s)", record.result)

    async def _try_open_cuts_run(
        self, session_id: Optional[str], fields: dict[str, Any]
    ) -> bool:
        try:
            await self.send_open_cuts_run(session_id, fields)
            return True
        except Exception as e:
            logger.warning("OPEN-CUTS submission failed, opening issue: %s", e)
            return False

    async def _open_manual_issue(self, fields: dict[str, Any]) -> bool:
        title, body = await self._compose_issue(fields)
        try:
            self.issue_tracker.open_issue(title, body)
            return True
        except IssueTrackerError as e:
            logger.warning("Could not open issue: %s", e)
            return False

    async def _compose_issue(self, fields: dict[str, Any]) -> tuple[str, str]:
        debug_info = decode_debug_info(await self.assembler.assemble(
            error=fields.get("error"), comment=fields.get("comment"),
        ))
        log_content = await self.log_store.get() or ""
        if len(log_content) > MAX_ISSUE_LOG_CHARS:
            log_content = "[...]\n" + log_content[-MAX_ISSUE_LOG_CHARS:]

        result = fields.get("result")
        title = fields.get("title") or f"Installer report: {result or 'unknown'}"
        body = f"**Result:** {result or 'unknown'}\n\n{debug_info}"
        if log_content:
            body += (
                f"\n<details><summary>{LOG_NAME}</summary>\n\n"
                f"```\n{log_content}\n```\n</details>\n"
            )
        return title, body

    # ── Credentials ─────────────────────────────────────────────────

    async def token_dialog(self) -> None:
        """Ask for an OPEN-CUTS API token and store it if one is given."""
        try:
            answer = await self.prompt_service.prompt({
                "title": "OPEN-CUTS API Token",
                "description": (
                    "Link your reports to your OPEN-CUTS account. "
                    f"You can find your token at {OPEN_CUTS_ACCOUNT_URL}."
                ),
                "fields": [
                    {"type": "input", "name": "token", "label": "API Token"},
                ],
            })
        except Exception as e:
            logger.debug("Token prompt failed: %s", e)
            return
        if not isinstance(answer, dict) or not answer.get("token"):
            logger.debug("No token entered")
            return
        self.settings.set(TOKEN_SETTING, answer["token"])
