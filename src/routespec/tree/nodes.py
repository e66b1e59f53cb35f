"""Route tree data model.

The tree is produced outside of routespec (by whatever walks the routing DSL)
and handed over as nested Group / Endpoint nodes. Anything the producer could
not classify arrives as an Other node and is carried along untouched.
"""

from typing import Annotated, Any, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag, field_validator

NODE_KINDS = ("group", "endpoint")


class BodyDescriptor(BaseModel):
    """Request body of an endpoint: a registered component name or a raw schema ref."""

    type: str = "object"
    name: str | None = None  # fully-qualified component name, wins over ref
    ref: str | None = None


class Endpoint(BaseModel):
    """A single HTTP handler declared inside a group."""

    kind: str = "endpoint"
    path: str | None = None
    method: str  # get / post / put / delete / patch
    body: BodyDescriptor = Field(default_factory=BodyDescriptor)
    tags: list[str] = []
    summary: str | None = None
    description: str | None = None
    status: str | None = None  # status name, e.g. "Created"

    @field_validator("method")
    @classmethod
    def lowercase_method(cls, v: str) -> str:
        return v.lower()


class Other(BaseModel):
    """A node the producer could not classify."""

    model_config = ConfigDict(extra="allow")

    kind: str = "other"


class Group(BaseModel):
    """A path prefix with nested groups and endpoints."""

    kind: str = "group"
    path: str = ""
    children: list["RouteNode"] = []
    tags: list[str] = []


def _node_kind(value: Any) -> str:
    if isinstance(value, dict):
        kind = value.get("kind")
    else:
        kind = getattr(value, "kind", None)
    return kind if kind in NODE_KINDS else "other"


RouteNode = Annotated[
    Union[
        Annotated[Group, Tag("group")],
        Annotated[Endpoint, Tag("endpoint")],
        Annotated[Other, Tag("other")],
    ],
    Discriminator(_node_kind),
]

Group.model_rebuild()


class RouteRecord(BaseModel):
    """One fully-qualified (path, method, body) entry produced by the reducer."""

    path: str
    method: str
    body: BodyDescriptor = Field(default_factory=BodyDescriptor)
    tags: list[str] = []
    summary: str | None = None
    description: str | None = None
    status: str | None = None
