"""Turn route records into OpenAPI path items."""

import re
from collections.abc import Iterable, Sequence

from routespec.spec import status
from routespec.spec.models import (
    PARAMETERS_KEY,
    BodyParam,
    Operation,
    Parameter,
    PathItem,
    PathParam,
    Response,
    Schema,
)
from routespec.tree.nodes import RouteRecord

PATH_PARAM_PATTERN = re.compile(r"\{([^}]*)}")
DEFINITIONS_PREFIX = "#/definitions/"

# Only POST carries an inferred request body; PUT and PATCH are left without one.
BODY_METHODS = ("post",)


def compile_routes(records: Sequence[RouteRecord]) -> dict[str, PathItem]:
    """Group records by path; each method becomes an operation.

    The "parameters" entry of a path concatenates the path and body
    parameters of every method declared under it.
    """
    paths: dict[str, PathItem] = {}
    for record in records:
        item = paths.setdefault(record.path, {})
        item[record.method] = build_operation(record)
        parameters = item.setdefault(PARAMETERS_KEY, [])
        parameters.extend(path_params(record.path))
        parameters.extend(body_params(record))
    return paths


def combine_batches(batches: Iterable[dict[str, PathItem]]) -> dict[str, PathItem]:
    """Union the output of several compile_routes calls.

    Later batches win per path + method; the "parameters" lists of a shared
    path are concatenated so every kept method keeps its parameters.
    """
    combined: dict[str, PathItem] = {}
    for batch in batches:
        for path, item in batch.items():
            merged = {**combined.get(path, {}), **item}
            if path in combined:
                merged[PARAMETERS_KEY] = [
                    *combined[path].get(PARAMETERS_KEY, []),
                    *item.get(PARAMETERS_KEY, []),
                ]
            combined[path] = merged
    return combined


def path_params(path: str) -> list[PathParam]:
    """One required string parameter per `{name}` segment, left to right."""
    return [PathParam(name=match.group(1)) for match in PATH_PARAM_PATTERN.finditer(path)]


def body_params(record: RouteRecord) -> list[Parameter]:
    if record.method not in BODY_METHODS:
        return []
    body = record.body
    ref = DEFINITIONS_PREFIX + body.name if body.name is not None else body.ref
    return [BodyParam(schema_=Schema(type=body.type, ref=ref))]


def build_operation(record: RouteRecord) -> Operation:
    responses = None
    if record.status:
        code = status.resolve(record.status)
        responses = {code: Response(description=record.status)}
    return Operation(
        tags=record.tags or None,
        summary=record.summary,
        description=record.description,
        responses=responses,
    )
