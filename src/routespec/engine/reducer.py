"""Route tree reducer.

Flattens nested groups into fully-qualified route records. Paths are joined
by plain concatenation; the doubled separators this produces for empty or
"/"-only segments are collapsed in a single pass afterwards.
"""

import logging
from collections.abc import Sequence

from routespec.errors import MalformedPathError
from routespec.tree.nodes import Endpoint, Group, RouteNode, RouteRecord

logger = logging.getLogger(__name__)

ROOT_PATH = "/"


def reduce(tree: RouteNode) -> list[RouteRecord]:
    """Reduce a route tree into cleaned route records, in depth-first order."""
    if tree.kind != "group":
        tree = Group(children=[tree])

    records: list[RouteRecord] = []
    for group in wrap_root(tree.children):
        prefixed = group.model_copy(update={
            "path": _join(tree.path, group.path),
            "tags": _merge_tags(tree.tags, group.tags),
        })
        records.extend(flatten(prefixed))

    logger.debug("Reduced route tree into %d records", len(records))
    return clean_paths(records)


def wrap_root(children: Sequence[RouteNode]) -> list[Group]:
    """Move endpoints declared outside any group under a synthetic "/" group."""
    groups = [child for child in children if child.kind == "group"]
    if len(groups) == len(children):
        return groups
    strays = [child for child in children if child.kind != "group"]
    return groups + [Group(path=ROOT_PATH, children=strays)]


def flatten(group: Group) -> list[RouteRecord]:
    """Walk a group depth-first; paths are concatenated, not yet cleaned."""
    records: list[RouteRecord] = []
    for child in group.children:
        if child.kind == "group":
            nested = child.model_copy(update={
                "path": group.path + child.path,
                "tags": _merge_tags(group.tags, child.tags),
            })
            records.extend(flatten(nested))
        elif child.kind == "endpoint":
            records.append(_to_record(group, child))
        else:
            # Unclassified nodes contribute no routes
            continue
    return records


def clean_paths(records: Sequence[RouteRecord]) -> list[RouteRecord]:
    """Collapse "//" into "/" once; paths that still hold "//" are rejected."""
    cleaned = []
    for record in records:
        path = record.path.replace("//", "/")
        if "//" in path:
            raise MalformedPathError(record.path)
        cleaned.append(record.model_copy(update={"path": path}))
    return cleaned


def _to_record(group: Group, endpoint: Endpoint) -> RouteRecord:
    return RouteRecord(
        path=group.path + (endpoint.path or ""),
        method=endpoint.method,
        body=endpoint.body,
        tags=_merge_tags(group.tags, endpoint.tags),
        summary=endpoint.summary,
        description=endpoint.description,
        status=endpoint.status,
    )


def _join(prefix: str, path: str) -> str:
    # a "/" root and a "/"-led top-level group share one separator
    if prefix.endswith("/") and path.startswith("/"):
        return prefix[:-1] + path
    return prefix + path


def _merge_tags(*tag_lists: Sequence[str]) -> list[str]:
    return list(dict.fromkeys(tag for tags in tag_lists for tag in tags))
