from typing import Any, Dict, Optional, TYPE_CHECKING

from ...errors import (
    InvalidObjectNotation,
    MalformedArraySchema,
    UnknownFieldType,
)
from ..utils.naming import normalize_name
from .models import (
    ArrayType,
    BooleanType,
    EnumType,
    FreeFormMapType,
    MapType,
    NumberType,
    ObjectCompositionType,
    ObjectField,
    ObjectType,
    RefType,
    StringType,
    UnionType,
)

if TYPE_CHECKING:
    from .schema_resolver import SchemaResolver

OBJECT_KEYWORDS = ("properties", "additionalProperties", "allOf", "oneOf")


class TypeConverter:
    """Преобразование схемы OpenAPI во внутреннюю модель типов"""

    def __init__(self, resolver: "SchemaResolver"):
        self.resolver = resolver

    def convert(self, schema: Dict[str, Any], file: str = ""):
        """Получение типа из схемы"""
        if not isinstance(schema, dict):
            raise InvalidObjectNotation(schema)

        if "$ref" in schema:
            return self.resolver.reference(schema["$ref"], file)

        schema_type = schema.get("type")
        if schema_type is None and any(k in schema for k in OBJECT_KEYWORDS):
            schema_type = "object"
        elif schema_type is None and schema.get("enum"):
            schema_type = "string"

        if schema_type == "boolean":
            return BooleanType()
        if schema_type in ("number", "integer"):
            return NumberType()
        if schema_type == "string":
            if schema.get("enum"):
                return EnumType(values=[str(v) for v in schema["enum"]])
            return StringType()

        if schema_type == "array":
            if "items" not in schema:
                raise MalformedArraySchema(schema.get("title", ""))
            return ArrayType(element_type=self.convert(schema["items"], file))

        if schema_type == "object":
            return self._convert_object(schema, file)

        if schema_type is None:
            raise InvalidObjectNotation(schema)

        raise UnknownFieldType(schema_type)

    def _convert_properties(self, schema: Dict, file: str) -> Optional[ObjectType]:
        if "properties" not in schema:
            return None

        properties = schema["properties"] or {}

        required = schema.get("required") or []

        return ObjectType(
            fields=[
                ObjectField(
                    name=normalize_name(field_name),
                    type=self.convert(field_schema, file),
                    required=field_name in required,
                )
                for field_name, field_schema in properties.items()
            ]
        )

    def _convert_object(self, schema: Dict, file: str):
        properties_object = self._convert_properties(schema, file)

        if "allOf" in schema:
            parts = [self.convert(part, file) for part in schema["allOf"]]

            # Собственные свойства схемы - последняя часть пересечения
            if properties_object is not None:
                parts.append(properties_object)

            return ObjectCompositionType(parts=parts)

        if "oneOf" in schema:
            return self._convert_union(schema, file, properties_object)

        if properties_object is not None:
            return properties_object

        additional = schema.get("additionalProperties")
        if additional is True:
            return FreeFormMapType()
        if isinstance(additional, dict):
            return MapType(element_type=self.convert(additional, file))

        raise InvalidObjectNotation(schema)

    def _convert_union(
        self, schema: Dict, file: str, properties_object: Optional[ObjectType]
    ) -> UnionType:
        discriminator = schema.get("discriminator") or {}
        property_name = discriminator.get("propertyName")

        discriminator_type = None
        if properties_object is not None and property_name:
            field = properties_object.get_field(normalize_name(property_name))

            # TODO: inline enum как тип дискриминатора
            if field and isinstance(field.type, RefType):
                discriminator_type = field.type

        return UnionType(
            members=[self.convert(part, file) for part in schema["oneOf"]],
            discriminator_property_name=(
                normalize_name(property_name) if property_name else None
            ),
            discriminator_mapping={
                str(value): self.resolver.key_of(self._mapping_ref(ref), file)
                for value, ref in (discriminator.get("mapping") or {}).items()
            },
            fields_object=properties_object,
            discriminator_type=discriminator_type,
        )

    @staticmethod
    def _mapping_ref(ref: str) -> str:
        # В mapping допускается голое имя схемы
        if "#" not in ref:
            return f"#/components/schemas/{ref}"
        return ref
