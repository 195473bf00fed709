"""Load reporter options from YAML or JSON files."""

from pathlib import Path

import yaml
from pydantic import ValidationError

from spec_reporter.errors import OptionsError
from spec_reporter.models.options import ReportOptions


def load_report_options(path: Path) -> ReportOptions:
    """Load reporter options from ``path``.

    JSON files are accepted as well since JSON is valid YAML. Keys may be
    written in snake_case or camelCase.

    Raises:
        FileNotFoundError: If the file does not exist
        OptionsError: If the file is empty, malformed or fails validation

    """
    if not path.exists():
        raise FileNotFoundError(f"Options file not found: {path}")

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise OptionsError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        raise OptionsError(f"Empty options file: {path}")
    if not isinstance(data, dict):
        raise OptionsError(f"Options file {path} must contain a mapping")

    try:
        return ReportOptions.model_validate(data)
    except ValidationError as e:
        raise OptionsError(f"Invalid reporter options in {path}: {e}") from e
