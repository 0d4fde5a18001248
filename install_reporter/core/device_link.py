"""Markdown references to device configuration files."""

from __future__ import annotations

from typing import Optional

from install_reporter.core.models import ReportContext

CONFIG_BASE_URL = (
    "https://github.com/ubports/installer-configs/blob/master/v2/devices/"
)
DEVICE_PAGE_URL = "https://devices.ubuntu-touch.io/device/{codename}/"
DEVICE_PAGE_OS = "Ubuntu Touch"
NOT_DEVICE_DEPENDENT = "(not device dependent)"


def format_device_link(
    codename: Optional[str], context: ReportContext
) -> str:
    """Return a markdown reference for the device.

    A local config file override wins over cached device metadata, since
    the metadata then describes a file that isn't in the config repo.
    """
    if not codename:
        return NOT_DEVICE_DEPENDENT
    if context.cli_file:
        return f"`{codename}` with local config file"
    config = context.config
    if config is None:
        return f"`{codename}`"

    config_url = f"{CONFIG_BASE_URL}{config.codename}.yml"
    if context.os_name == DEVICE_PAGE_OS:
        page_url = DEVICE_PAGE_URL.format(codename=config.codename)
        label = f"[{config.name}]({page_url})"
    else:
        label = config.name
    return f"[`{config.codename}`]({config_url}) ({label})"
