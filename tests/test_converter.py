"""
Тесты преобразования схем во внутреннюю модель типов
"""

import pytest

from openapi_tsgen.errors import (
    InvalidObjectNotation,
    InvalidRefLink,
    MalformedArraySchema,
    UnknownFieldType,
)
from openapi_tsgen.internal.types.models import (
    ArrayType,
    BooleanType,
    EnumType,
    FreeFormMapType,
    MapType,
    NumberType,
    ObjectCompositionType,
    ObjectType,
    RefType,
    StringType,
    UnionType,
)
from openapi_tsgen.internal.types.schema_resolver import SchemaResolver


@pytest.fixture
def resolver():
    return SchemaResolver(source=lambda locator: {})


@pytest.fixture
def convert(resolver):
    return resolver.converter.convert


class TestScalars:
    """Тесты скалярных типов"""

    def test_scalar_mapping(self, convert):
        assert isinstance(convert({"type": "string"}), StringType)
        assert isinstance(convert({"type": "number"}), NumberType)
        assert isinstance(convert({"type": "boolean"}), BooleanType)

    def test_integer_collapses_to_number(self, convert):
        assert isinstance(convert({"type": "integer", "format": "int64"}), NumberType)

    def test_string_enum(self, convert):
        node = convert({"type": "string", "enum": ["b", "a"]})

        assert isinstance(node, EnumType)
        assert node.values == ["b", "a"]
        assert node.assigned_name is None

    def test_unknown_type(self, convert):
        with pytest.raises(UnknownFieldType):
            convert({"type": "file"})


class TestArraysAndMaps:
    def test_array(self, convert):
        node = convert({"type": "array", "items": {"type": "integer"}})

        assert isinstance(node, ArrayType)
        assert isinstance(node.element_type, NumberType)

    def test_array_without_items(self, convert):
        with pytest.raises(MalformedArraySchema):
            convert({"type": "array"})

    def test_array_with_empty_items(self, convert):
        # items есть, но пустой схемы недостаточно для типа
        with pytest.raises(InvalidObjectNotation):
            convert({"type": "array", "items": {}})

    def test_free_form_map(self, convert):
        assert isinstance(convert({"type": "object", "additionalProperties": True}), FreeFormMapType)

    def test_typed_map(self, convert):
        node = convert({"additionalProperties": {"type": "string"}})

        assert isinstance(node, MapType)
        assert isinstance(node.element_type, StringType)


class TestObjects:
    """Тесты объектов и композиций"""

    def test_fields_in_order_with_required(self, convert):
        node = convert(
            {
                "type": "object",
                "properties": {
                    "user_id": {"type": "integer"},
                    "name": {"type": "string"},
                    "tags": {"type": "array", "items": {"type": "string"}},
                },
                "required": ["name", "user_id"],
            }
        )

        assert isinstance(node, ObjectType)
        assert [f.name for f in node.fields] == ["userid", "name", "tags"]
        assert [f.required for f in node.fields] == [True, True, False]

    def test_properties_without_type(self, convert):
        assert isinstance(convert({"properties": {"a": {"type": "string"}}}), ObjectType)

    def test_empty_properties(self, convert):
        node = convert({"type": "object", "properties": {}})

        assert isinstance(node, ObjectType)
        assert node.fields == []

    def test_bare_object_is_invalid(self, convert):
        with pytest.raises(InvalidObjectNotation):
            convert({"type": "object"})

    def test_no_type_no_keywords_is_invalid(self, convert):
        with pytest.raises(InvalidObjectNotation):
            convert({"description": "nothing"})

    def test_all_of_with_sibling_properties(self, convert):
        node = convert(
            {
                "allOf": [{"$ref": "#/components/schemas/Base"}],
                "properties": {"extra": {"type": "boolean"}},
            }
        )

        assert isinstance(node, ObjectCompositionType)
        assert isinstance(node.parts[0], RefType)
        assert isinstance(node.parts[-1], ObjectType)
        assert node.parts[-1].fields[0].name == "extra"


class TestRefsAndUnions:
    def test_ref_is_lazy(self, resolver, convert):
        node = convert({"$ref": "models.yaml#/components/schemas/Pet"})

        assert node == RefType(target="models.yaml#/components/schemas/Pet")
        assert resolver.pending == {"models.yaml#/components/schemas/Pet"}
        assert resolver.load_queue == ["models.yaml"]

    def test_ref_relative_to_current_file(self, convert):
        node = convert({"$ref": "#/components/schemas/Tag"}, "models.yaml")

        assert node.target == "models.yaml#/components/schemas/Tag"

    def test_invalid_ref(self, convert):
        with pytest.raises(InvalidRefLink):
            convert({"$ref": "#/definitions/Pet"})

    def test_union_with_ref_discriminator(self, convert):
        node = convert(
            {
                "type": "object",
                "properties": {
                    "kind": {"$ref": "#/components/schemas/Kind"},
                    "id": {"type": "string"},
                },
                "oneOf": [
                    {"$ref": "#/components/schemas/Cat"},
                    {"$ref": "#/components/schemas/Dog"},
                ],
                "discriminator": {
                    "propertyName": "kind",
                    "mapping": {"cat": "#/components/schemas/Cat", "dog": "Dog"},
                },
            }
        )

        assert isinstance(node, UnionType)
        assert node.discriminator_property_name == "kind"
        assert node.discriminator_mapping == {
            "cat": "#/components/schemas/Cat",
            "dog": "#/components/schemas/Dog",
        }
        assert node.discriminator_type == RefType(target="#/components/schemas/Kind")
        assert [f.name for f in node.fields_object.fields] == ["kind", "id"]

    def test_inline_enum_discriminator_is_ignored(self, convert):
        node = convert(
            {
                "properties": {"kind": {"type": "string", "enum": ["cat"]}},
                "oneOf": [{"$ref": "#/components/schemas/Cat"}],
                "discriminator": {"propertyName": "kind"},
            }
        )

        assert node.discriminator_type is None

    def test_plain_one_of(self, convert):
        node = convert({"oneOf": [{"type": "string"}, {"type": "integer"}]})

        assert isinstance(node, UnionType)
        assert node.discriminator_property_name is None
        assert node.fields_object is None
