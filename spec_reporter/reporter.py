"""Report writer tying spec results to the shared report directory."""

import logging
from collections.abc import Mapping, MutableMapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from spec_reporter.files import generate_guid, remove_directory, store_screenshot
from spec_reporter.metadata import SuiteNode, gather_descriptions, store_metadata
from spec_reporter.models.metadata import SpecMetadata
from spec_reporter.models.options import ReportOptions
from spec_reporter.result_store import add_metadata

log = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class ReportWriter:
    """Writes the results of finished specs into one report directory.

    Several writers, possibly in separate processes, may share a directory.
    """

    directory: Path
    options: ReportOptions = field(default_factory=ReportOptions)

    @property
    def base_name(self) -> Path:
        """Path of the rendered HTML report."""
        return self.directory / self.options.doc_name

    def metadata_path(self, guid: str) -> Path:
        """Path of the standalone metadata file of one spec."""
        return self.directory / f"{guid}.json"

    def screenshot_path(self, guid: str) -> Path:
        """Path of the screenshot of one spec."""
        return self.directory / f"{guid}.png"

    def clean_destination(self) -> None:
        """Remove the report directory, e.g. before a new test run."""
        log.info("Cleaning report directory %s", self.directory)
        remove_directory(self.directory)

    async def record_spec(
        self,
        metadata: SpecMetadata | Mapping[str, Any],
        node: SuiteNode | Mapping[str, Any],
        screenshot: str | None = None,
    ) -> bool:
        """Store a finished spec and add it to the report.

        Args:
            metadata: Result data of the spec
            node: The spec itself; its description and those of its parent
                suites form the record's description
            screenshot: Base64 encoded PNG taken after the spec, if any

        Returns:
            True if the record made it into the result document

        """
        record: MutableMapping[str, Any] = (
            metadata.to_record()
            if isinstance(metadata, SpecMetadata)
            else dict(metadata)
        )
        descriptions = gather_descriptions(node, [])
        guid = generate_guid()

        if screenshot is not None:
            screenshot_file = self.screenshot_path(guid)
            if store_screenshot(screenshot, screenshot_file):
                record["screenShotFile"] = screenshot_file.name

        store_metadata(record, self.metadata_path(guid), descriptions)
        return await add_metadata(record, self.base_name, self.options)
