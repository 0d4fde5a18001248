"""Environment detection — OS distribution, kernel, architecture, runtime."""

from __future__ import annotations

import asyncio
import logging
import platform
import subprocess
import sys

from install_reporter.core.interfaces import OSInfoService
from install_reporter.core.models import OSInfo

logger = logging.getLogger(__name__)

RUNTIME_NAME = "Python"


async def get_environment(os_info_service: OSInfoService) -> str:
    """Describe the host in one line, or just the platform if that fails."""
    try:
        info = await os_info_service.os_info()
        return " ".join(
            info.fields() + [RUNTIME_NAME, platform.python_version()]
        )
    except Exception as e:
        logger.debug("OS info unavailable, using platform: %s", e)
        return sys.platform


class PlatformOSInfo(OSInfoService):
    """OS information read from the local machine."""

    async def os_info(self) -> OSInfo:
        return await asyncio.to_thread(_detect_os_info)


def _detect_os_info() -> OSInfo:
    system = platform.system()
    distro, release, codename = _detect_distro(system)
    servicepack = ""
    if system == "Windows":
        servicepack = platform.win32_ver()[2]
    return OSInfo(
        distro=distro,
        release=release,
        codename=codename,
        platform=sys.platform,
        kernel=platform.release(),
        arch=platform.machine(),
        build=platform.version(),
        servicepack=servicepack,
    )


def _detect_distro(system: str) -> tuple[str, str, str]:
    """Return (distro, release, codename)."""
    if system == "Linux":
        try:
            os_release = platform.freedesktop_os_release()
            return (
                os_release.get("NAME", "Linux"),
                os_release.get("VERSION_ID", ""),
                os_release.get("VERSION_CODENAME", ""),
            )
        except OSError:
            return _detect_lsb_release()
    if system == "Darwin":
        return "macOS", platform.mac_ver()[0], ""
    if system == "Windows":
        return f"Windows {platform.release()}", platform.win32_ver()[1], ""
    return system, platform.release(), ""


def _detect_lsb_release() -> tuple[str, str, str]:
    try:
        result = subprocess.run(
            ["lsb_release", "-sirc"],
            capture_output=True, text=True, timeout=5,
        )
        if result.returncode == 0:
            parts = [line.strip() for line in result.stdout.splitlines()]
            parts += [""] * (3 - len(parts))
            return parts[0] or "Linux", parts[1], parts[2]
    except Exception as e:
        logger.debug("lsb_release unavailable: %s", e)
    return "Linux", platform.release(), ""
