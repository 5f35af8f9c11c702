"""Describing the host operating system and the running revision."""

from __future__ import annotations

import subprocess
import sys
from pathlib import Path

_DOCKER_MARKER = Path("/.dockerenv")
_OS_RELEASE_KERNEL = Path("/proc/sys/kernel/osrelease")
_OS_RELEASE = Path("/etc/os-release")


def parse_os_release_id(text: str) -> str:
    """Return the value of the ``ID`` entry in os-release text.

    Raises ``ValueError`` when there is no such entry.
    """
    for line in text.splitlines():
        key, sep, value = line.partition("=")
        if sep and key == "ID":
            return value
    raise ValueError("Couldn't split OS string")


def _linux_os_string() -> str:
    if _DOCKER_MARKER.exists():
        return "Docker Container"
    try:
        kernel = _OS_RELEASE_KERNEL.read_text(encoding="utf-8", errors="replace")
    except OSError:
        kernel = ""
    if "microsoft" in kernel or "Microsoft" in kernel:
        return "Windows Subsystem for Linux"
    return parse_os_release_id(_OS_RELEASE.read_text(encoding="utf-8", errors="replace"))


def _windows_os_string() -> str:
    output = subprocess.run(
        ["wmic", "os", "get", "Caption"], capture_output=True, check=False
    ).stdout
    text = output.decode("utf-8", errors="replace")
    return text.replace("Caption", "").replace("Microsoft", "").strip()


def get_os_string() -> str:
    """Return a short human-readable name for the host system."""
    if sys.platform.startswith("linux"):
        return _linux_os_string()
    if sys.platform == "win32":
        return _windows_os_string()
    if sys.platform.startswith("freebsd"):
        return "FreeBSD"
    return "Unknown"


def get_version_string() -> str:
    """Return the short git revision of ``main``, or ``Unknown`` elsewhere."""
    if not (sys.platform.startswith("linux") or sys.platform == "win32"):
        return "Unknown"
    output = subprocess.run(
        ["git", "rev-parse", "--short", "main"], capture_output=True, check=False
    ).stdout
    return output.decode("utf-8", errors="replace").strip()