"""Build component schemas from Python classes.

Every ObjectType is constructed fresh from the class it describes; nothing
here writes into a shared schema table.
"""

import dataclasses
import types
import typing
from collections.abc import Iterable, Mapping

from pydantic import BaseModel

from routespec.spec.models import ObjectType

PRIMITIVE_TYPES = {
    str: "string",
    int: "integer",
    float: "number",
    bool: "boolean",
}

SEQUENCE_TYPES = (list, tuple, set, frozenset)


def qualified_name(cls: type) -> str:
    """Fully-qualified name used as the component key, e.g. 'shop.models.Order'."""
    return f"{cls.__module__}.{cls.__qualname__}"


def object_type_for(cls: type) -> ObjectType:
    """Describe a dataclass, pydantic model or annotated class as an ObjectType."""
    return _describe(cls, frozenset())


def collect_components(types: Iterable[type]) -> dict[str, ObjectType]:
    """Map each class's qualified name to its schema.

    Classes without fields get no properties entry at all.
    """
    components = {}
    for cls in types:
        components[qualified_name(cls)] = normalize_object_type(object_type_for(cls))
    return components


def normalize_object_type(obj: ObjectType) -> ObjectType:
    if not obj.properties:
        return obj.model_copy(update={"properties": None})
    return obj


def normalize_components(schemas: Mapping[str, ObjectType]) -> dict[str, ObjectType]:
    return {name: normalize_object_type(obj) for name, obj in schemas.items()}


def _describe(annotation, seen: frozenset) -> ObjectType:
    origin = typing.get_origin(annotation)

    if origin is typing.Union or _is_union_type(origin):
        args = [a for a in typing.get_args(annotation) if a is not type(None)]
        if len(args) == 1:
            return _describe(args[0], seen)
        return ObjectType(type="object")

    if origin is not None:
        if origin in SEQUENCE_TYPES:
            return ObjectType(type="array")
        if origin is dict:
            return ObjectType(type="object")
        return _describe(origin, seen)

    if annotation in PRIMITIVE_TYPES:
        return ObjectType(type=PRIMITIVE_TYPES[annotation])
    if annotation in SEQUENCE_TYPES:
        return ObjectType(type="array")
    if not isinstance(annotation, type) or annotation in seen:
        return ObjectType(type="object")

    fields = _fields_of(annotation)
    seen = seen | {annotation}
    properties = {name: _describe(hint, seen) for name, hint in fields.items()}
    return ObjectType(type="object", properties=properties)


def _fields_of(cls: type) -> dict[str, typing.Any]:
    if issubclass(cls, BaseModel):
        return {name: field.annotation for name, field in cls.model_fields.items()}
    try:
        hints = typing.get_type_hints(cls)
    except (NameError, TypeError):
        hints = dict(getattr(cls, "__annotations__", {}))
    if dataclasses.is_dataclass(cls):
        return {f.name: hints.get(f.name, f.type) for f in dataclasses.fields(cls)}
    return {name: hint for name, hint in hints.items() if not name.startswith("_")}


def _is_union_type(origin) -> bool:
    return origin is types.UnionType
