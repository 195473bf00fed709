"""Tests for reporter option models."""

import pytest
from pydantic import ValidationError

from spec_reporter.models.options import ClientDefaults, ReportOptions


def test_defaults() -> None:
    """Defaults render report.html with embedded results."""
    options = ReportOptions()

    assert options.doc_name == "report.html"
    assert options.doc_title == "Test Results"
    assert options.prepare_assets is True
    assert options.sort_function == "session-timestamp"
    assert options.client_defaults.use_ajax is False
    assert options.lock_timeout == 60.0
    assert options.lock_poll_interval == 0.2


def test_accepts_field_names_and_aliases() -> None:
    """Options can be given in snake_case or camelCase."""
    by_name = ReportOptions(doc_title="A", css_override_file="a.css")
    by_alias = ReportOptions.model_validate(
        {"docTitle": "A", "cssOverrideFile": "a.css"}
    )

    assert by_name == by_alias


def test_rejects_unknown_sort_function() -> None:
    """Only named orderings are accepted."""
    with pytest.raises(ValidationError):
        ReportOptions.model_validate({"sortFunction": "function (a, b) {}"})


def test_rejects_negative_lock_timeout() -> None:
    """The lock timeout cannot be negative."""
    with pytest.raises(ValidationError):
        ReportOptions(lock_timeout=-1)


def test_options_are_frozen() -> None:
    """Options cannot be changed once built."""
    options = ReportOptions()

    with pytest.raises(ValidationError):
        options.doc_name = "other.html"  # type: ignore[misc]


def test_client_json_omits_unset_values() -> None:
    """Unset viewer settings are left to the viewer's own defaults."""
    defaults = ClientDefaults.model_validate(
        {"useAjax": True, "searchSettings": {"allselected": False}}
    )

    assert defaults.to_client_json() == {
        "useAjax": True,
        "searchSettings": {"allselected": False},
    }
