"""Route input file loader.

Reads the route trees and component table handed over by the tree producer.
Both JSON and YAML files are accepted; YAML is a superset of JSON so a single
safe_load covers both.
"""

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, ValidationError

from routespec.errors import RouteInputError
from routespec.spec.models import ObjectType
from routespec.tree.nodes import RouteNode

logger = logging.getLogger(__name__)


class RouteInput(BaseModel):
    """Everything one generation pass consumes: one tree per entry point, plus schemas."""

    routes: list[RouteNode] = []
    components: dict[str, ObjectType] = {}


def load_route_input(file_path: Path) -> RouteInput:
    """Parse a route input file into a RouteInput."""
    try:
        text = file_path.read_text(encoding="utf-8")
    except OSError as e:
        raise RouteInputError(f"Cannot read route input {file_path}: {e}") from e

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise RouteInputError(f"Route input {file_path} is not valid JSON or YAML: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise RouteInputError(f"Route input {file_path} must be a mapping with 'routes' and 'components'")

    # A bare tree is accepted as a single entry point
    if "routes" not in data and "kind" in data:
        data = {"routes": [data]}

    try:
        route_input = RouteInput.model_validate(data)
    except ValidationError as e:
        raise RouteInputError(f"Route input {file_path} is invalid:\n{e}") from e

    logger.debug("Loaded %d route trees and %d components from %s",
                 len(route_input.routes), len(route_input.components), file_path)
    return route_input
