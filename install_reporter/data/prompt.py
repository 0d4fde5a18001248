"""Terminal prompts rendered with rich."""

from __future__ import annotations

import asyncio
from typing import Any, Optional

from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel
from rich.prompt import Confirm, Prompt

from install_reporter.core.debug_info import decode_debug_info
from install_reporter.core.interfaces import PromptService


class RichPrompt(PromptService):
    """Asks the prompt's fields one by one on the terminal."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    async def prompt(self, spec: dict[str, Any]) -> Optional[dict[str, Any]]:
        try:
            return await asyncio.to_thread(self._ask, spec)
        except (EOFError, KeyboardInterrupt):
            self.console.print("\n[yellow]Cancelled.[/]")
            return None

    def _ask(self, spec: dict[str, Any]) -> Optional[dict[str, Any]]:
        self.console.print(f"\n[bold]{spec.get('title', '')}[/]")
        if spec.get("description"):
            self.console.print(spec["description"])

        extra = spec.get("extra") or {}
        if extra.get("debugInfo"):
            self.console.print(Panel(
                Markdown(decode_debug_info(extra["debugInfo"])),
                title="Debug info",
                border_style="dim",
            ))
        for link in extra.get("links", []):
            self.console.print(f"[dim]{link['label']}: {link['url']}[/]")

        answers: dict[str, Any] = {}
        for f in spec.get("fields", []):
            if f.get("type") == "select":
                answers[f["name"]] = Prompt.ask(
                    f["label"],
                    choices=f["choices"],
                    default=f.get("default"),
                    console=self.console,
                )
            else:
                value = Prompt.ask(
                    f["label"], default="", show_default=False,
                    console=self.console,
                )
                if value:
                    answers[f["name"]] = value

        if not Confirm.ask("Send?", default=True, console=self.console):
            return None
        return answers
