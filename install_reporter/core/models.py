"""Core data models for install-reporter."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class Result(str, Enum):
    PASS = "PASS"
    WONKY = "WONKY"
    FAIL = "FAIL"


class ReportKind(Enum):
    ERROR = "error"
    SUCCESS = "success"


class SubmissionOutcome(Enum):
    SUBMITTED = "submitted"  # automated backend accepted the run
    FALLBACK = "fallback"  # manual issue opened instead
    BOTH_FAILED = "both_failed"


@dataclass
class OSInfo:
    distro: str = ""
    release: str = ""
    codename: str = ""
    platform: str = ""
    kernel: str = ""
    arch: str = ""
    build: str = ""
    servicepack: str = ""

    def fields(self) -> list[str]:
        return [
            self.distro,
            self.release,
            self.codename,
            self.platform,
            self.kernel,
            self.arch,
            self.build,
            self.servicepack,
        ]


@dataclass
class DeviceConfig:
    codename: str
    name: str


@dataclass
class ReportContext:
    """Snapshot of the installer state a report is built from."""

    config: Optional[DeviceConfig] = None
    os_name: Optional[str] = None
    cli_file: Optional[str] = None  # local config file override
    environment_label: Optional[str] = None
    package_label: Optional[str] = None


@dataclass(frozen=True)
class ReportPayload:
    kind: ReportKind
    body: str  # encoded debug bundle
    title: str
    fields: tuple[dict[str, Any], ...] = ()
    links: tuple[tuple[str, str], ...] = ()

    def to_prompt(self) -> dict[str, Any]:
        """Render into the spec handed to a PromptService."""
        return {
            "title": self.title,
            "kind": self.kind.value,
            "fields": [dict(f) for f in self.fields],
            "extra": {
                "debugInfo": self.body,
                "links": [{"label": label, "url": url} for label, url in self.links],
            },
        }


@dataclass
class LogEntry:
    name: str
    content: str


@dataclass
class CombinationEntry:
    variable: str
    value: Optional[str]


@dataclass
class SubmissionRecord:
    test_case_id: str
    test_suite_id: str
    result: Optional[str]
    comment: Optional[str] = None
    combination: list[CombinationEntry] = field(default_factory=list)
    logs: list[LogEntry] = field(default_factory=list)

    def to_payload(self) -> dict[str, Any]:
        """Return the run body exactly as the OPEN-CUTS API expects it."""
        return {
            "combination": [
                {"variable": c.variable, "value": c.value}
                for c in self.combination
            ],
            "comment": self.comment,
            "logs": [{"name": log.name, "content": log.content} for log in self.logs],
            "result": self.result,
        }
