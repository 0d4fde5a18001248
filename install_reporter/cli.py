"""CLI entry point for install-reporter."""

from __future__ import annotations

import asyncio
import logging
import platform
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

import install_reporter
from install_reporter.core.models import DeviceConfig, ReportContext, Result

app = typer.Typer(
    name="install-reporter",
    help="Report installer results to OPEN-CUTS or GitHub.",
    no_args_is_help=True,
)
console = Console()

_CONFIG_KEYS = {"opencuts-url", "opencuts-token", "issues-url"}


@app.callback()
def main(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Show debug logging"
    ),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def _build_reporter(context: ReportContext, log_file: Optional[str]):
    from install_reporter.core.environment import PlatformOSInfo
    from install_reporter.core.reporter import Reporter
    from install_reporter.data.issues import GitHubIssueTracker, resolve_issues_url
    from install_reporter.data.logs import ErrorHistory, FileLogStore
    from install_reporter.data.opencuts import OpenCutsClient, resolve_open_cuts_config
    from install_reporter.data.prompt import RichPrompt
    from install_reporter.data.settings import SettingsDB

    store = SettingsDB()
    url, token = resolve_open_cuts_config(store)
    reporter = Reporter(
        context=context,
        log_store=FileLogStore(log_file),
        error_tracker=ErrorHistory(),
        settings=store,
        prompt_service=RichPrompt(console),
        os_info_service=PlatformOSInfo(),
        backend=OpenCutsClient(url),
        issue_tracker=GitHubIssueTracker(resolve_issues_url(store)),
        anonymous_token=token,
    )
    return reporter, store


def _build_context(
    codename: Optional[str],
    device_name: Optional[str],
    os_name: Optional[str],
    config_file: Optional[str],
    package: Optional[str],
) -> ReportContext:
    config = None
    if codename:
        config = DeviceConfig(codename=codename, name=device_name or codename)
    return ReportContext(
        config=config,
        os_name=os_name,
        cli_file=config_file,
        environment_label=platform.system() or None,
        package_label=package,
    )


@app.command()
def report(
    result: Result = typer.Option(
        ..., "--result", "-r", help="Outcome of the installation"
    ),
    error: Optional[str] = typer.Option(
        None, "--error", "-e", help="Error message the installer ended with"
    ),
    log_file: Optional[str] = typer.Option(
        None, "--log-file", "-l", help="Path to the installer log"
    ),
    codename: Optional[str] = typer.Option(
        None, "--codename", "-d", help="Device codename (e.g. bacon)"
    ),
    device_name: Optional[str] = typer.Option(
        None, "--device-name", help="Device display name"
    ),
    os_name: Optional[str] = typer.Option(
        None, "--os-name", help="Installed operating system"
    ),
    config_file: Optional[str] = typer.Option(
        None, "--config-file", help="Local device config file that was used"
    ),
    package: Optional[str] = typer.Option(
        None, "--package", help="Installer package format (snap, deb, ...)"
    ),
) -> None:
    """Report the result of an installation."""
    context = _build_context(codename, device_name, os_name, config_file, package)
    reporter, store = _build_reporter(context, log_file)
    try:
        asyncio.run(reporter.report(result, error))
    finally:
        store.close()


@app.command()
def token() -> None:
    """Set the OPEN-CUTS API token used for reports."""
    reporter, store = _build_reporter(ReportContext(), None)
    try:
        asyncio.run(reporter.token_dialog())
    finally:
        store.close()


@app.command()
def environment(
    codename: Optional[str] = typer.Option(
        None, "--codename", "-d", help="Device codename"
    ),
    device_name: Optional[str] = typer.Option(
        None, "--device-name", help="Device display name"
    ),
    os_name: Optional[str] = typer.Option(
        None, "--os-name", help="Installed operating system"
    ),
) -> None:
    """Show what a report would say about this machine."""
    from install_reporter.core.device_link import format_device_link
    from install_reporter.core.environment import PlatformOSInfo, get_environment

    context = _build_context(codename, device_name, os_name, None, None)
    env = asyncio.run(get_environment(PlatformOSInfo()))

    table = Table(title="Environment")
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Environment", env)
    table.add_row("Device", format_device_link(codename, context))
    console.print(table)


def _effective_config(store) -> dict[str, str]:
    """Values in use after env var → settings DB → default resolution."""
    from install_reporter.data.issues import resolve_issues_url
    from install_reporter.data.opencuts import resolve_open_cuts_config

    url, token = resolve_open_cuts_config(store)
    return {
        "opencuts-url": url,
        "opencuts-token": token,
        "issues-url": resolve_issues_url(store),
    }


@app.command()
def config(
    action: str = typer.Argument(
        "get", help="Action: get or set"
    ),
    key: Optional[str] = typer.Argument(
        None, help="Config key (opencuts-url, opencuts-token, issues-url)"
    ),
    value: Optional[str] = typer.Argument(
        None, help="Value to set"
    ),
) -> None:
    """View or modify configuration."""
    from install_reporter.data.settings import SettingsDB

    store = SettingsDB()

    if action == "get":
        effective = _effective_config(store)
        if key:
            if key not in effective:
                console.print(f"[red]Unknown config key: {key}[/]")
                raise typer.Exit(1)
            console.print(f"{key} = {effective[key] or '(not set)'}")
        else:
            for k in sorted(effective):
                console.print(f"{k} = {effective[k] or '(not set)'}")
    elif action == "set":
        if not key or value is None:
            console.print("[red]Usage: install-reporter config set <key> <value>[/]")
            raise typer.Exit(1)
        if key not in _CONFIG_KEYS:
            console.print(
                f"[red]Unknown config key: {key}. "
                f"Valid keys: {', '.join(sorted(_CONFIG_KEYS))}[/]"
            )
            raise typer.Exit(1)
        store.set_config(key, value)
        console.print(f"[green]Set {key} = {value}[/]")
    else:
        console.print("[red]Unknown action. Use 'get' or 'set'.[/]")
        raise typer.Exit(1)

    store.close()


@app.command()
def version() -> None:
    """Print version."""
    console.print(f"install-reporter {install_reporter.__version__}")


if __name__ == "__main__":
    app()
