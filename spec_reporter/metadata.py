"""Per-spec metadata records and their suite descriptions."""

import json
import logging
from collections.abc import Iterable, Mapping, MutableMapping
from pathlib import Path
from typing import Any, Protocol, TypeVar

log = logging.getLogger(__name__)

DESCRIPTION_SEPARATOR = "|"

T = TypeVar("T")


class SuiteNode(Protocol):
    """A spec or suite that knows its enclosing suite."""

    description: str | None
    parent_suite: "SuiteNode | None"


def clean_array(values: Iterable[T]) -> list[T]:
    """Drop falsy entries, keeping the order of the rest."""
    return [value for value in values if value]


def _node_field(node: SuiteNode | Mapping[str, Any], name: str, key: str) -> Any:
    if isinstance(node, Mapping):
        return node.get(key)
    return getattr(node, name, None)


def gather_descriptions(
    node: SuiteNode | Mapping[str, Any], so_far: list[str]
) -> list[str]:
    """Collect the descriptions of ``node`` and all of its parent suites.

    For a spec ``Case A`` inside ``Module 1`` inside ``My Tests``, called with
    the spec's parent suite and ``["Case A"]`` this returns
    ``["Case A", "Module 1", "My Tests"]``.

    Nodes are objects with ``description`` and ``parent_suite`` attributes or
    mappings with ``description`` and ``parentSuite`` keys. A missing or None
    description is skipped. The parent chain must be finite and acyclic.

    Args:
        node: Suite to start from
        so_far: Descriptions gathered already; extended in place

    Returns:
        ``so_far``, leaf first and root last

    """
    current: SuiteNode | Mapping[str, Any] | None = node
    while current is not None:
        description = _node_field(current, "description", "description")
        if description is not None:
            so_far.append(description)
        current = _node_field(current, "parent_suite", "parentSuite") or None
    return so_far


def store_metadata(
    metadata: MutableMapping[str, Any],
    file: str | Path,
    descriptions: Iterable[str | None],
) -> bool:
    """Attach the joined description to ``metadata`` and write it as JSON.

    Failures are logged, never raised.

    Returns:
        True if the file was written, False otherwise

    """
    path = Path(file)
    try:
        metadata["description"] = DESCRIPTION_SEPARATOR.join(
            clean_array(descriptions)
        )
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(metadata, ensure_ascii=False), encoding="utf-8")
    except Exception:
        log.error("Could not save meta data for %s", path, exc_info=True)
        return False
    return True
