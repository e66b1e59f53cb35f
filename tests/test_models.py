from routespec.spec.models import (
    BodyParam,
    ObjectType,
    Operation,
    PathParam,
    Schema,
    SpecDocument,
)
from routespec.tree.nodes import BodyDescriptor, Endpoint, Group, Other


class TestRouteNodes:
    def test_kind_selects_node_type(self):
        group = Group.model_validate({
            "path": "/api",
            "children": [
                {"kind": "group", "path": "/v1", "children": []},
                {"kind": "endpoint", "path": "/ping", "method": "get"},
                {"kind": "call", "name": "install"},
            ],
        })
        assert isinstance(group.children[0], Group)
        assert isinstance(group.children[1], Endpoint)
        assert isinstance(group.children[2], Other)

    def test_other_keeps_unknown_fields(self):
        group = Group.model_validate({"children": [{"kind": "call", "name": "install"}]})
        other = group.children[0]
        assert other.kind == "call"
        assert other.model_extra == {"name": "install"}

    def test_node_without_kind_is_other(self):
        group = Group.model_validate({"children": [{"path": "/x"}]})
        assert isinstance(group.children[0], Other)

    def test_method_is_lowercased(self):
        ep = Endpoint(path="/x", method="POST")
        assert ep.method == "post"

    def test_endpoint_defaults(self):
        ep = Endpoint(method="get")
        assert ep.path is None
        assert ep.body == BodyDescriptor(type="object")
        assert ep.tags == []

    def test_group_accepts_model_instances(self):
        group = Group(path="/a", children=[Endpoint(path="/x", method="get"), Group(path="/b")])
        assert group.children[0].kind == "endpoint"
        assert group.children[1].kind == "group"


class TestSpecModels:
    def test_path_param_serializes_with_wire_names(self):
        p = PathParam(name="id")
        assert p.model_dump(by_alias=True) == {
            "name": "id",
            "in": "path",
            "required": True,
            "type": "string",
        }

    def test_body_param_serializes_with_wire_names(self):
        p = BodyParam(schema_=Schema(type="object", ref="#/definitions/shop.User"))
        assert p.model_dump(by_alias=True) == {
            "name": "request",
            "in": "body",
            "schema": {"type": "object", "$ref": "#/definitions/shop.User"},
        }

    def test_operation_tags_are_a_set(self):
        op = Operation(tags=["b", "a", "b"])
        assert op.tags == ["b", "a"]

    def test_operation_keeps_unknown_keys(self):
        op = Operation.model_validate({"tags": ["x"], "operationId": "listPets"})
        assert op.model_dump(exclude_none=True) == {"tags": ["x"], "operationId": "listPets"}

    def test_document_roundtrip_from_wire_dict(self):
        data = {
            "openapi": "3.1.0",
            "info": {"title": "T", "version": "1"},
            "paths": {
                "/users/{id}": {
                    "post": {"tags": ["Users"]},
                    "parameters": [
                        {"name": "id", "in": "path", "required": True, "type": "string"},
                        {"name": "request", "in": "body", "schema": {"type": "object", "$ref": "#/x"}},
                    ],
                },
            },
            "components": {"schemas": {"a.B": {"type": "object", "properties": {"c": {"type": "string"}}}}},
        }
        doc = SpecDocument.model_validate(data)
        item = doc.paths["/users/{id}"]
        assert isinstance(item["post"], Operation)
        assert isinstance(item["parameters"][0], PathParam)
        assert isinstance(item["parameters"][1], BodyParam)
        assert item["parameters"][1].schema_.ref == "#/x"
        assert doc.components.schemas["a.B"].properties["c"] == ObjectType(type="string")
        assert doc.model_dump(mode="json", by_alias=True, exclude_none=True) == data
