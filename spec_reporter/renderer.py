"""Static HTML viewer rendered from the result document."""

import html
import json
import logging
import shutil
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

from spec_reporter.models.options import ReportOptions, SortFunction

log = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "templates"
APP_JS_NAME = "app.js"
DEFAULT_CSS_LINK = "assets/report.css"

RESULTS_PLACEHOLDER = "[];//'<Results Replacement>'"
SORT_FUNCTION_PLACEHOLDER = "defaultSortFunction/*<Sort Function Replacement>*/"
CLIENT_DEFAULTS_PLACEHOLDER = "{};//'<Client Defaults Replacement>'"
CSS_PLACEHOLDER = "<!-- Here will be CSS placed -->"
TITLE_PLACEHOLDER = "<!-- Here goes title -->"

SORT_FUNCTIONS: Mapping[SortFunction, str] = {
    "session-timestamp": """function sortFunction(a, b) {
    if (a.sessionId < b.sessionId) return -1;
    else if (a.sessionId > b.sessionId) return 1;

    if (a.timestamp < b.timestamp) return -1;
    else if (a.timestamp > b.timestamp) return 1;

    return 0;
}""",
    "timestamp": """function sortFunction(a, b) {
    return (a.timestamp || 0) - (b.timestamp || 0);
}""",
    "description": """function sortFunction(a, b) {
    return String(a.description || '').localeCompare(String(b.description || ''));
}""",
    "failures-first": """function sortFunction(a, b) {
    if (a.passed !== b.passed) return a.passed ? 1 : -1;
    return (a.timestamp || 0) - (b.timestamp || 0);
}""",
    "arrival": """function sortFunction(a, b) {
    return 0;
}""",
}


def sort_function_source(name: SortFunction) -> str:
    """Return the JavaScript source of the named viewer ordering."""
    return SORT_FUNCTIONS[name]


def render_app_js(records: Sequence[Any], options: ReportOptions) -> str:
    """Fill the app.js template with results, ordering and viewer settings."""
    if options.client_defaults.use_ajax:
        results = "[]"
    else:
        results = json.dumps(records, indent=4, ensure_ascii=False, allow_nan=False)

    template = (TEMPLATES_DIR / APP_JS_NAME).read_text(encoding="utf-8")
    # Results go last so record content can never match another placeholder.
    return (
        template.replace(
            SORT_FUNCTION_PLACEHOLDER,
            sort_function_source(options.sort_function),
            1,
        )
        .replace(
            CLIENT_DEFAULTS_PLACEHOLDER,
            json.dumps(options.client_defaults.to_client_json(), indent=4),
            1,
        )
        .replace(RESULTS_PLACEHOLDER, results, 1)
    )


def render_index_html(options: ReportOptions) -> str:
    """Fill the HTML shell with the stylesheet and document title."""
    css_link = options.css_override_file or DEFAULT_CSS_LINK
    css_insert = f'<link rel="stylesheet" href="{html.escape(css_link)}">'
    if options.custom_css_inline:
        css_insert += f' <style type="text/css">{options.custom_css_inline}</style>'

    template = (TEMPLATES_DIR / "index.html").read_text(encoding="utf-8")
    return template.replace(CSS_PLACEHOLDER, css_insert, 1).replace(
        TITLE_PLACEHOLDER, html.escape(options.doc_title), 1
    )


def add_html_report(
    records: Sequence[Any],
    base_name: str | Path,
    options: ReportOptions,
) -> bool:
    """Render the viewer for ``records`` next to ``base_name``.

    app.js is rewritten on every call. The HTML shell and the static asset
    trees are only written when ``options.prepare_assets`` is set.

    Failures are logged, never raised.

    Returns:
        True if everything was written, False otherwise

    """
    base_path = Path(base_name).parent

    try:
        if options.prepare_assets:
            shutil.copytree(
                TEMPLATES_DIR / "assets", base_path / "assets", dirs_exist_ok=True
            )
            shutil.copytree(
                TEMPLATES_DIR / "fonts", base_path / "fonts", dirs_exist_ok=True
            )
            (base_path / options.doc_name).write_text(
                render_index_html(options), encoding="utf-8"
            )

        (base_path / APP_JS_NAME).write_text(
            render_app_js(records, options), encoding="utf-8"
        )
    except Exception:
        log.error(
            "Could not render report for %d record(s) in %s",
            len(records),
            base_path,
            exc_info=True,
        )
        return False

    log.debug("Rendered report for %d record(s) in %s", len(records), base_path)
    return True
