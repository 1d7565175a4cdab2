"""
Report metadata.

Reads ``__author__``, ``__date__`` and ``__project__`` markers from the
Markdown source and describes the machine the report is generated on.
"""

from __future__ import annotations

import logging
import platform
import re
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Sequence

logger = logging.getLogger(__name__)

_METADATA_PATTERNS: Dict[str, "re.Pattern[str]"] = {
    "author": re.compile(r"__author__\s*:\s*(.+)"),
    "date": re.compile(r"__date__\s*:\s*(.+)"),
    "project": re.compile(r"__project__\s*:\s*(.+)"),
}

OS_RELEASE = Path("/etc/os-release")
ISSUE = Path("/etc/issue")


@dataclass(slots=True)
class DocumentMetadata:
    author: str = ""
    date: str = ""
    project: str = ""

    @property
    def title(self) -> str:
        return self.project

    @property
    def subject(self) -> str:
        if not self.project:
            return ""
        subject = f"Project: {self.project}"
        if self.date:
            subject += f" ({self.date})"
        return subject

    def to_dict(self) -> Dict[str, str]:
        return {"author": self.author, "date": self.date, "project": self.project}


def extract_metadata(source: str) -> DocumentMetadata:
    """First match of each marker, value trimmed; missing markers stay empty."""
    values: Dict[str, str] = {}
    for key, pattern in _METADATA_PATTERNS.items():
        match = pattern.search(source or "")
        values[key] = match.group(1).strip() if match else ""
    return DocumentMetadata(**values)


def _command_output(command: Sequence[str]) -> str:
    try:
        result = subprocess.run(command, capture_output=True, text=True, timeout=5)
    except (OSError, subprocess.SubprocessError):
        return ""
    if result.returncode != 0:
        return ""
    return result.stdout.strip()


def _macos_description() -> str:
    version = _command_output(["sw_vers", "-productVersion"])

    model = ""
    for line in _command_output(["system_profiler", "SPHardwareDataType"]).splitlines():
        if "Model Name:" in line or "Model Identifier:" in line:
            model = line.split(":", 1)[1].strip()
            # Model Name is preferred over Model Identifier
            if "Model Name:" in line:
                break
    if not model:
        model = _command_output(["sysctl", "-n", "hw.model"])

    if version and model:
        return f"macOS {version} {model}"
    if version:
        return f"macOS {version}"
    if model:
        return f"macOS on {model}"
    return "macOS"


def _strip_quotes(value: str) -> str:
    return value.strip().strip('"')


def linux_description(os_release: Path = OS_RELEASE, issue: Path = ISSUE) -> str:
    try:
        content = os_release.read_text(encoding="utf-8")
    except OSError:
        content = ""

    name = version = ""
    for line in content.splitlines():
        if line.startswith("PRETTY_NAME="):
            return _strip_quotes(line[len("PRETTY_NAME="):])
        if line.startswith("NAME="):
            name = _strip_quotes(line[len("NAME="):])
        elif line.startswith("VERSION="):
            version = _strip_quotes(line[len("VERSION="):])
    if name:
        return f"{name} {version}" if version else name

    try:
        banner = issue.read_text(encoding="utf-8").strip()
    except OSError:
        banner = ""
    banner = banner.replace("\\n", "").replace("\\l", "").strip()
    return banner or "Linux"


def system_description(system: Optional[str] = None) -> str:
    """Short OS description for the page footer."""
    system = system or platform.system()
    if system == "Darwin":
        return _macos_description()
    if system == "Linux":
        return linux_description()
    if system == "Windows":
        return "Microsoft Windows"
    return system.lower() or "unknown"
