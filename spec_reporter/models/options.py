"""Reporter options consumed by the result store and the renderer."""

from typing import Any, Literal

from pydantic import ConfigDict, Field

from spec_reporter.models.base import Model

SortFunction = Literal[
    "session-timestamp",
    "timestamp",
    "description",
    "failures-first",
    "arrival",
]


class ClientDefaults(Model):
    """Viewer settings embedded into the rendered app.js.

    Extra keys are passed through to the viewer untouched.
    """

    model_config = ConfigDict(extra="allow")

    use_ajax: bool = Field(
        default=False,
        description="Load combined.json at runtime instead of embedding results",
    )
    show_total_duration_in: str | None = Field(
        default=None, description="Where to show the total duration (e.g. 'header')"
    )
    total_duration_format: str | None = Field(
        default=None, description="Duration format (e.g. 'hms')"
    )

    def to_client_json(self) -> dict[str, Any]:
        """Dump the settings as the viewer expects them."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ReportOptions(Model):
    """Options for writing the result document and rendering the report."""

    doc_name: str = Field(default="report.html", description="HTML file name")
    doc_title: str = Field(default="Test Results", description="HTML title")
    css_override_file: str | None = Field(
        default=None, description="Stylesheet link replacing the bundled one"
    )
    custom_css_inline: str | None = Field(
        default=None, description="CSS inlined after the stylesheet link"
    )
    prepare_assets: bool = Field(
        default=True, description="Write the HTML shell and copy static assets"
    )
    client_defaults: ClientDefaults = Field(default_factory=ClientDefaults)
    sort_function: SortFunction = Field(
        default="session-timestamp", description="Ordering applied by the viewer"
    )
    lock_timeout: float | None = Field(
        default=60.0,
        ge=0,
        description="Seconds to wait for the result lock (None waits forever)",
    )
    lock_poll_interval: float = Field(
        default=0.2, gt=0, description="Seconds between lock attempts"
    )
