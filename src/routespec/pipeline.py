"""One generation pass: route trees in, merged document on disk out."""

import logging
from collections.abc import Mapping, Sequence
from pathlib import Path

from routespec.config import GeneratorConfig, locate_output_file
from routespec.engine.compiler import combine_batches, compile_routes
from routespec.engine.merge import merge_with_persisted
from routespec.engine.reducer import reduce
from routespec.schemas import normalize_components
from routespec.spec.models import Components, Info, ObjectType, SpecDocument
from routespec.spec.serializer import write_document
from routespec.tree.nodes import RouteNode

logger = logging.getLogger(__name__)


def build_document(
    trees: Sequence[RouteNode],
    components: Mapping[str, ObjectType],
    config: GeneratorConfig,
) -> SpecDocument:
    """Reduce and compile each tree as its own batch, then assemble the document."""
    batches = [compile_routes(reduce(tree)) for tree in trees]
    paths = combine_batches(batches)
    logger.info("Compiled %d paths from %d route trees", len(paths), len(trees))

    return SpecDocument(
        info=Info(title=config.title, description=config.description, version=config.version),
        paths=paths,
        components=Components(schemas=normalize_components(components)),
    )


def generate(
    trees: Sequence[RouteNode],
    components: Mapping[str, ObjectType],
    config: GeneratorConfig,
) -> Path | None:
    """Build, merge with the persisted document, and overwrite it.

    Returns the written path, or None when generation is disabled.
    """
    if not config.enabled:
        logger.info("Generation disabled, nothing written")
        return None

    output = locate_output_file(config)
    doc = build_document(trees, components, config)
    merged = merge_with_persisted(output, doc, config.format)
    write_document(merged, output, config.format)
    return output
