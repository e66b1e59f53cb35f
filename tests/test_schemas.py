from dataclasses import dataclass, field

from pydantic import BaseModel

from routespec.schemas import collect_components, normalize_components, object_type_for, qualified_name
from routespec.spec.models import ObjectType


@dataclass
class Address:
    street: str
    number: int


@dataclass
class Customer:
    name: str
    score: float
    active: bool
    address: Address
    nickname: str | None = None
    orders: list[int] = field(default_factory=list)


class Payload(BaseModel):
    id: int
    labels: dict[str, str] = {}
    customer: Customer | None = None


@dataclass
class Node:
    value: int
    parent: "Node | None" = None


class Marker:
    pass


class TestObjectTypeFor:
    def test_primitives(self):
        obj = object_type_for(Address)
        assert obj == ObjectType(type="object", properties={
            "street": ObjectType(type="string"),
            "number": ObjectType(type="integer"),
        })

    def test_nested_and_optional(self):
        obj = object_type_for(Customer)
        props = obj.properties
        assert props["score"].type == "number"
        assert props["active"].type == "boolean"
        assert props["address"].properties["street"].type == "string"
        assert props["nickname"].type == "string"
        assert props["orders"] == ObjectType(type="array")

    def test_pydantic_model(self):
        props = object_type_for(Payload).properties
        assert props["id"].type == "integer"
        assert props["labels"] == ObjectType(type="object")
        assert props["customer"].properties["address"].type == "object"

    def test_self_reference_stops(self):
        props = object_type_for(Node).properties
        assert props["parent"] == ObjectType(type="object")

    def test_fresh_objects_per_call(self):
        first = object_type_for(Address)
        second = object_type_for(Address)
        assert first == second
        assert first is not second
        assert first.properties is not second.properties


class TestCollectComponents:
    def test_keys_are_qualified_names(self):
        components = collect_components([Address, Marker])
        assert set(components) == {qualified_name(Address), qualified_name(Marker)}
        assert qualified_name(Address).endswith("test_schemas.Address")

    def test_classes_without_fields_have_no_properties(self):
        components = collect_components([Marker])
        assert components[qualified_name(Marker)] == ObjectType(type="object", properties=None)

    def test_normalize_empty_properties(self):
        schemas = {"a.B": ObjectType(type="object", properties={})}
        assert normalize_components(schemas)["a.B"].properties is None
