"""Cumulative result document shared by all writers of a report."""

import json
import logging
import math
import os
import tempfile
from collections.abc import Mapping, MutableMapping, Sequence, Set
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from spec_reporter.locking import DirectoryLock
from spec_reporter.models.options import ReportOptions
from spec_reporter.renderer import add_html_report

log = logging.getLogger(__name__)

RESULTS_FILE_NAME = "combined.json"


def to_serializable(value: Any) -> Any:
    """Convert ``value`` into plain JSON structures.

    A container that refers back to one of its own ancestors is replaced by
    the marker ``"[Circular <path>]"``, where path locates the ancestor from
    the root ``~`` (e.g. ``~.suite.specs.0``). Containers shared without
    forming a cycle are copied at every occurrence.
    """
    return _convert(value, "~", {})


def _convert(value: Any, path: str, ancestors: dict[int, str]) -> Any:
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, BaseModel):
        value = value.model_dump(mode="json", by_alias=True)

    if isinstance(value, Mapping):
        items: Sequence[tuple[Any, Any]] = list(value.items())
    elif isinstance(value, (Sequence, Set)) and not isinstance(
        value, (bytes, bytearray)
    ):
        items = list(enumerate(value))
    else:
        return str(value)

    if (marker := ancestors.get(id(value))) is not None:
        return f"[Circular {marker}]"

    ancestors[id(value)] = path
    try:
        converted = [
            (str(key), _convert(item, f"{path}.{key}", ancestors))
            for key, item in items
        ]
    finally:
        del ancestors[id(value)]

    if isinstance(value, Mapping):
        return dict(converted)
    return [item for _, item in converted]


def read_results(path: Path) -> list[Any]:
    """Read the result document at ``path``.

    Returns:
        Records in arrival order; empty if the document does not exist yet

    Raises:
        ValueError: If the document exists but is not a JSON array

    """
    if not path.exists():
        return []

    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise ValueError(f"Result document {path} is not a JSON array")
    return data


def write_results(path: Path, records: Sequence[Any]) -> None:
    """Replace the result document at ``path`` with ``records``.

    The document is written to a temporary file next to it and moved into
    place, so readers never see a partially written array. The document keeps
    the mode of the one it replaces; a new one gets the default mode for the
    current umask.
    """
    payload = json.dumps(
        to_serializable(records), ensure_ascii=False, allow_nan=False
    )
    mode = _document_mode(path)

    fd, tmp = tempfile.mkstemp(
        prefix=f".{path.name}-", suffix=".tmp", dir=path.parent
    )
    try:
        os.fchmod(fd, mode)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(payload)
        os.replace(tmp, path)
    except BaseException:
        Path(tmp).unlink(missing_ok=True)
        raise


def _document_mode(path: Path) -> int:
    try:
        return path.stat().st_mode & 0o7777
    except FileNotFoundError:
        pass
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


async def add_metadata(
    record: MutableMapping[str, Any],
    base_name: str | Path,
    options: ReportOptions,
) -> bool:
    """Append ``record`` to the result document and re-render the report.

    The document lives next to ``base_name`` (``<dir>/combined.json``).
    Concurrent writers, in this or other processes, are serialized by the
    ``<dir>/.lock`` directory; the lock is released on every exit path.

    Failures are logged, never raised.

    Args:
        record: Metadata record of one spec
        base_name: Any path inside the report directory
        options: Reporter options

    Returns:
        True if the record was persisted, False otherwise

    """
    base_path = Path(base_name).parent
    document = base_path / RESULTS_FILE_NAME
    lock = DirectoryLock.for_directory(
        base_path,
        poll_interval=options.lock_poll_interval,
        timeout=options.lock_timeout,
    )

    try:
        base_path.mkdir(parents=True, exist_ok=True)
        async with lock.hold():
            records = read_results(document)
            records.append(to_serializable(record))
            write_results(document, records)
            add_html_report(records, base_name, options)
    except Exception:
        log.error("Could not save JSON for record to %s", document, exc_info=True)
        return False

    log.info("Stored record #%d in %s", len(records), document)
    return True
