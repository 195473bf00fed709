"""Tests for the static report renderer."""

import logging
from pathlib import Path

import pytest

from spec_reporter.models.options import ClientDefaults, ReportOptions
from spec_reporter.renderer import (
    CLIENT_DEFAULTS_PLACEHOLDER,
    RESULTS_PLACEHOLDER,
    SORT_FUNCTION_PLACEHOLDER,
    SORT_FUNCTIONS,
    add_html_report,
    render_app_js,
    render_index_html,
    sort_function_source,
)

RECORDS = [
    {"description": "Case A|My Tests", "passed": True, "sessionId": "s-1"},
    {"description": "Case B|My Tests", "passed": False, "sessionId": "s-1"},
]


class TestRenderAppJs:
    """Tests for render_app_js function."""

    def test_embeds_results(self) -> None:
        """Records are embedded as indented JSON."""
        app_js = render_app_js(RECORDS, ReportOptions())

        assert '"description": "Case A|My Tests"' in app_js
        assert '"description": "Case B|My Tests"' in app_js
        assert RESULTS_PLACEHOLDER not in app_js

    def test_ajax_mode_embeds_empty_results(self) -> None:
        """With useAjax the viewer loads combined.json, so nothing is embedded."""
        options = ReportOptions(client_defaults=ClientDefaults(use_ajax=True))

        app_js = render_app_js(RECORDS, options)

        assert "var results = []\n" in app_js
        assert "Case A" not in app_js
        assert '"useAjax": true' in app_js

    def test_embeds_client_defaults(self) -> None:
        """Viewer settings are written with camelCase keys, extras included."""
        options = ReportOptions.model_validate(
            {
                "clientDefaults": {
                    "showTotalDurationIn": "header",
                    "columnSettings": {"displayTime": True},
                }
            }
        )

        app_js = render_app_js([], options)

        assert '"showTotalDurationIn": "header"' in app_js
        assert '"columnSettings": {' in app_js
        assert '"useAjax": false' in app_js
        assert CLIENT_DEFAULTS_PLACEHOLDER not in app_js

    def test_embeds_default_sort_function(self) -> None:
        """The default ordering sorts by session and then by start time."""
        app_js = render_app_js([], ReportOptions())

        assert "var sortFunction = function sortFunction(a, b)" in app_js
        assert "a.sessionId < b.sessionId" in app_js
        assert SORT_FUNCTION_PLACEHOLDER not in app_js

    @pytest.mark.parametrize("name", list(SORT_FUNCTIONS))
    def test_embeds_named_sort_function(self, name: str) -> None:
        """Every named ordering is embedded verbatim."""
        options = ReportOptions.model_validate({"sortFunction": name})

        app_js = render_app_js([], options)

        assert sort_function_source(options.sort_function) in app_js

    def test_placeholder_text_in_records_is_kept(self) -> None:
        """Record content that looks like a placeholder is not substituted."""
        records = [{"description": SORT_FUNCTION_PLACEHOLDER}]

        app_js = render_app_js(records, ReportOptions())

        assert '"description": "defaultSortFunction/*<Sort Function' in app_js


class TestRenderIndexHtml:
    """Tests for render_index_html function."""

    def test_uses_bundled_stylesheet_and_title(self) -> None:
        """The bundled stylesheet and the configured title are inserted."""
        html = render_index_html(ReportOptions(doc_title="Nightly run"))

        assert '<link rel="stylesheet" href="assets/report.css">' in html
        assert "<title>Nightly run</title>" in html

    def test_uses_css_override_and_inline_css(self) -> None:
        """A custom stylesheet and inline CSS replace the defaults."""
        options = ReportOptions(
            css_override_file="custom.css",
            custom_css_inline="body { color: red; }",
        )

        html = render_index_html(options)

        assert (
            '<link rel="stylesheet" href="custom.css"> '
            '<style type="text/css">body { color: red; }</style>'
        ) in html
        assert "assets/report.css" not in html

    def test_escapes_title(self) -> None:
        """Markup in the title is escaped."""
        html = render_index_html(ReportOptions(doc_title="<b>Run</b>"))

        assert "<title>&lt;b&gt;Run&lt;/b&gt;</title>" in html


class TestAddHtmlReport:
    """Tests for add_html_report function."""

    def test_writes_viewer_and_assets(self, tmp_path: Path) -> None:
        """Writes the HTML shell, app.js and the static trees."""
        options = ReportOptions(doc_name="index.html")

        assert add_html_report(RECORDS, tmp_path / "index.html", options) is True

        assert (tmp_path / "index.html").exists()
        assert (tmp_path / "app.js").exists()
        assert (tmp_path / "assets" / "report.css").exists()
        assert (tmp_path / "fonts" / "passed.svg").exists()

    def test_only_writes_app_js_without_prepare_assets(self, tmp_path: Path) -> None:
        """Without prepare_assets only the data file is rewritten."""
        options = ReportOptions(prepare_assets=False)

        assert add_html_report(RECORDS, tmp_path / "report.html", options) is True

        assert [p.name for p in tmp_path.iterdir()] == ["app.js"]

    def test_rewrites_app_js_on_every_call(self, tmp_path: Path) -> None:
        """app.js always reflects the latest records."""
        options = ReportOptions(prepare_assets=False)

        add_html_report(RECORDS[:1], tmp_path / "report.html", options)
        add_html_report(RECORDS, tmp_path / "report.html", options)

        assert "Case B" in (tmp_path / "app.js").read_text()

    def test_keeps_existing_assets(self, tmp_path: Path) -> None:
        """Copying assets merges into an existing assets directory."""
        (tmp_path / "assets").mkdir()
        (tmp_path / "assets" / "extra.css").write_text("p {}")

        add_html_report(RECORDS, tmp_path / "report.html", ReportOptions())

        assert (tmp_path / "assets" / "extra.css").exists()
        assert (tmp_path / "assets" / "report.css").exists()

    def test_logs_failures(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Returns False and logs when the report cannot be written."""
        base_name = tmp_path / "missing" / "report.html"

        with caplog.at_level(logging.ERROR):
            rendered = add_html_report(
                RECORDS, base_name, ReportOptions(prepare_assets=False)
            )

        assert rendered is False
        assert "Could not render report for 2 record(s)" in caplog.text

    def test_rejects_non_finite_floats(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Records that cannot be written as strict JSON are not rendered."""
        options = ReportOptions(prepare_assets=False)

        with caplog.at_level(logging.ERROR):
            rendered = add_html_report(
                [{"duration": float("nan")}], tmp_path / "report.html", options
            )

        assert rendered is False
        assert not (tmp_path / "app.js").exists()
        assert "Could not render report for 1 record(s)" in caplog.text
