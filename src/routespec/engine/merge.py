"""Merge engine.

Reconciles a freshly generated document with the one persisted by an earlier
pass. Paths are unioned, operation tags at shared paths are unioned, component
schemas are unioned with the incoming side winning, and the schema table is
sorted so independent passes write identical files.
"""

import logging
from pathlib import Path

from routespec.spec.models import Operation, PathItem, SpecDocument
from routespec.spec.serializer import load_document

logger = logging.getLogger(__name__)


def merge(existing: SpecDocument, incoming: SpecDocument) -> SpecDocument:
    """Merge `incoming` into `existing`. merge(d, d) == d."""
    duplicates = {path: item for path, item in incoming.paths.items() if path in existing.paths}
    new_paths = {path: item for path, item in incoming.paths.items() if path not in existing.paths}

    resolved = {
        path: _resolve_conflicts(existing.paths[path], item)
        for path, item in duplicates.items()
    }

    paths = dict(existing.paths)
    paths.update(new_paths)
    paths.update(resolved)

    schemas = dict(existing.components.schemas)
    schemas.update(incoming.components.schemas)

    logger.debug("Merged %d new and %d existing paths", len(new_paths), len(resolved))

    merged = existing.model_copy(update={
        "paths": paths,
        "components": existing.components.model_copy(update={"schemas": schemas}),
    })
    return sort_schemas(merged)


def sort_schemas(doc: SpecDocument) -> SpecDocument:
    """Return the document with its component schemas ordered by name."""
    schemas = dict(sorted(doc.components.schemas.items()))
    return doc.model_copy(update={
        "components": doc.components.model_copy(update={"schemas": schemas}),
    })


def merge_with_persisted(file_path: Path, incoming: SpecDocument, fmt: str) -> SpecDocument:
    """Merge against the document stored at `file_path`.

    A missing or unparseable file means there is nothing to merge with, and
    the incoming document is used as it is.
    """
    existing = load_document(file_path, fmt)
    if existing is None:
        return sort_schemas(incoming)
    return merge(existing, incoming)


def union_tags(existing: list[str] | None, incoming: list[str] | None) -> list[str] | None:
    if existing is None and incoming is None:
        return None
    return list(dict.fromkeys([*(existing or []), *(incoming or [])]))


def _resolve_conflicts(existing: PathItem, incoming: PathItem) -> PathItem:
    resolved: PathItem = {}
    for method, value in incoming.items():
        current = existing.get(method)
        if isinstance(value, Operation) and isinstance(current, Operation):
            value = value.model_copy(update={"tags": union_tags(current.tags, value.tags)})
        resolved[method] = value
    return resolved
