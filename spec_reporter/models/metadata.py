"""Models for per-spec metadata records."""

from collections.abc import Sequence
from typing import Any

from pydantic import ConfigDict, Field

from spec_reporter.models.base import Model


class BrowserInfo(Model):
    """Browser the spec ran in."""

    name: str = Field(default="", description="Browser name (e.g. 'chrome')")
    version: str = Field(default="", description="Browser version string")


class BrowserLogEntry(Model):
    """Console entry captured from the browser while the spec ran."""

    level: str = Field(default="INFO", description="Log level")
    message: str = Field(default="", description="Log message")
    timestamp: int = Field(default=0, description="Time in ms since epoch")


class SpecMetadata(Model):
    """Result data of a single test spec.

    Unknown fields are kept, so runners can attach whatever the viewer should
    show next to the well-known ones.
    """

    model_config = ConfigDict(extra="allow")

    description: str = Field(default="", description="Pipe-joined suite path")
    passed: bool = Field(default=False, description="Whether the spec passed")
    pending: bool = Field(default=False, description="Whether the spec is pending")
    disabled: bool = Field(default=False, description="Whether the spec is disabled")
    os: str = Field(default="", description="Operating system of the test host")
    session_id: str | None = Field(default=None, description="Runner session ID")
    instance_id: int | None = Field(default=None, description="Runner instance ID")
    browser: BrowserInfo = Field(default_factory=BrowserInfo)
    message: Sequence[str] = Field(
        default_factory=list, description="Failure messages"
    )
    trace: Sequence[str] = Field(default_factory=list, description="Stack traces")
    browser_logs: Sequence[BrowserLogEntry] = Field(
        default_factory=list, description="Browser console entries"
    )
    screen_shot_file: str | None = Field(
        default=None, description="Screenshot path relative to the report"
    )
    timestamp: int = Field(default=0, description="Start time in ms since epoch")
    duration: int = Field(default=0, description="Run time in ms")

    def to_record(self) -> dict[str, Any]:
        """Dump to the camelCase mapping stored in the result document."""
        return self.model_dump(mode="json", by_alias=True)
