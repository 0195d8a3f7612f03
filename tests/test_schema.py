import pytest

from tgspec.schema import (
    BearerAuth,
    CodeSample,
    Components,
    Document,
    Info,
    Media,
    Operation,
    Parameter,
    PathItem,
    Response,
    Schema,
    Security,
    SecuritySchemes,
    to_plain,
)


def test_empty_schema_is_empty_dict():
    assert to_plain(Schema()) == {}


def test_schema_uses_wire_keys():
    plain = to_plain(Schema(ref="#/components/schemas/x.Y"))
    assert plain == {"$ref": "#/components/schemas/x.Y"}


def test_zero_example_is_kept_but_zero_maximum_dropped():
    plain = to_plain(Schema(type="number", example=0, maximum=0))
    assert plain == {"type": "number", "example": 0}


def test_nested_items_and_one_of():
    schema = Schema(type="array", items=Schema(type="string"),
                    one_of=[Schema(nullable=True)])
    plain = to_plain(schema)
    assert plain["items"] == {"type": "string"}
    assert plain["oneOf"] == [{"nullable": True}]


def test_additional_properties_schema_kept_even_if_empty():
    plain = to_plain(Schema(type="object", additional_properties=Schema()))
    assert plain == {"type": "object", "additionalProperties": {}}


def test_mapping_keys_are_sorted():
    schema = Schema(properties={"b": Schema(type="string"), "a": Schema(type="string")})
    assert list(to_plain(schema)["properties"]) == ["a", "b"]


def test_parameter_in_key_and_schema_always_present():
    plain = to_plain(Parameter(in_="header", name="X-Id", required=True))
    assert plain == {"in": "header", "name": "X-Id", "required": True, "schema": {}}


def test_code_sample_fields_not_omitted():
    assert to_plain(CodeSample()) == {"lang": "", "source": ""}


def test_response_description_always_present():
    assert to_plain(Response()) == {"description": ""}


def test_response_with_content():
    response = Response(description="ok", content={"application/json": Media(Schema(type="object"))})
    assert to_plain(response)["content"] == {"application/json": {"schema": {"type": "object"}}}


def test_set_operation_case_insensitive():
    item = PathItem()
    operation = Operation(summary="s")
    item.set_operation("POST", operation)
    assert item.post is operation
    assert item.get is None
    assert to_plain(item) == {"post": {"summary": "s"}}


def test_set_operation_unknown_method():
    with pytest.raises(ValueError):
        PathItem().set_operation("TRACE", Operation())


def test_security_empty_list_kept():
    assert to_plain(Security()) == {"bearerAuth": []}


def test_default_document_to_dict():
    plain = Document().to_dict()
    assert plain["openapi"] == "3.0.0"
    assert plain["paths"] == {}
    assert plain["info"] == {}
    assert plain["components"] == {}
    assert "servers" not in plain
    assert "security" not in plain


def test_document_round_trip_structure():
    document = Document(
        info=Info(title="t", version="v"),
        paths={"/a": PathItem(get=Operation(tags=["x"]))},
        components=Components(
            schemas={"p.T": Schema(type="object")},
            security_schemes=SecuritySchemes(BearerAuth(type="http", scheme="bearer")),
        ),
        security=[Security()],
    )
    plain = document.to_dict()
    assert plain["info"] == {"title": "t", "version": "v"}
    assert plain["paths"]["/a"]["get"]["tags"] == ["x"]
    assert plain["components"]["securitySchemes"]["bearerAuth"] == {"type": "http", "scheme": "bearer"}
    assert plain["security"] == [{"bearerAuth": []}]