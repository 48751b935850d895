from typing import Dict, List, Optional, Set

from ...errors import DiscriminatorMappingMismatch, UnresolvableSchema
from ..types.models import (
    EnumType,
    ObjectCompositionType,
    ObjectField,
    RefType,
    TypeDeclaration,
    UnionType,
)
from ..utils.naming import enum_member_names

INDENT = "  "


def literal(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


class TypeEmitter:
    """
    Генерация TypeScript типов из внутренней модели.

    Попутно собирает в used_types имена объявлений, на которые ссылается
    сгенерированный код (для списка импортов api.ts).
    """

    def __init__(
        self,
        declarations: Dict[str, TypeDeclaration],
        named_enums: bool = False,
        namespace: Optional[str] = None,
    ):
        self.declarations = declarations
        self.named_enums = named_enums
        self.namespace = namespace
        self.used_types: Set[str] = set()

    def _qualified(self, name: str) -> str:
        self.used_types.add(name)
        return f"{self.namespace}.{name}" if self.namespace else name

    def _declaration(self, key: str) -> TypeDeclaration:
        declaration = self.declarations.get(key)
        if declaration is None:
            raise UnresolvableSchema(key)
        return declaration

    def emit(self, node, depth: int = 0) -> str:
        kind = node.kind

        if kind in ("string", "number", "boolean", "void"):
            return kind

        if kind == "object":
            return self._emit_fields(node.fields, depth)

        if kind == "object-composition":
            return " & ".join(self.emit_operand(part, depth) for part in node.parts)

        if kind == "map":
            return f"Record<string, {self.emit(node.element_type, depth)}>"

        if kind == "free-form-map":
            return "Record<string, any>"

        if kind == "array":
            return f"{self.emit_operand(node.element_type, depth)}[]"

        if kind == "enum":
            if self.named_enums and node.assigned_name:
                return self._qualified(node.assigned_name)
            return " | ".join(literal(value) for value in node.values)

        if kind == "ref":
            return self._qualified(self._declaration(node.target).local_name)

        if kind == "union":
            return self._emit_union(node, depth)

        return "never"

    def _is_compound(self, node) -> bool:
        """Нужны ли скобки внутри & или []"""
        if isinstance(node, (UnionType, ObjectCompositionType)):
            return True
        if isinstance(node, EnumType):
            return not (self.named_enums and node.assigned_name) and len(node.values) > 1
        return False

    def emit_operand(self, node, depth: int) -> str:
        text = self.emit(node, depth)
        return f"({text})" if self._is_compound(node) else text

    def _emit_fields(self, fields: List[ObjectField], depth: int) -> str:
        if not fields:
            return "{}"

        gap = INDENT * depth
        inner_gap = INDENT * (depth + 1)

        lines = [
            f"{inner_gap}{field.name}{'' if field.required else '?'}: "
            f"{self.emit(field.type, depth + 1)};"
            for field in fields
        ]
        return "{\n" + "\n".join(lines) + f"\n{gap}}}"

    def _tag_literal(self, union: UnionType, value: str) -> str:
        """Значение тега: член enum дискриминатора или строковый литерал"""
        if self.named_enums and union.discriminator_type is not None:
            declaration = self._declaration(union.discriminator_type.target)

            if isinstance(declaration.type, EnumType) and value in declaration.type.values:
                member = enum_member_names(declaration.type.values)[value]
                return f"{self._qualified(declaration.local_name)}.{member}"

        return literal(value)

    def _emit_union(self, union: UnionType, depth: int) -> str:
        tag = union.discriminator_property_name

        member_keys = [m.target for m in union.members if isinstance(m, RefType)]
        tag_by_key = {}
        for value, key in union.discriminator_mapping.items():
            if key not in member_keys:
                raise DiscriminatorMappingMismatch(value, key)
            tag_by_key.setdefault(key, value)

        variants = []
        for member in union.members:
            value = tag_by_key.get(member.target) if isinstance(member, RefType) else None

            if tag is None or value is None:
                variants.append(self.emit_operand(member, depth))
                continue

            # Вариант без собственного поля тега + тег с фиксированным значением
            variants.append(
                f"Omit<{self.emit(member, depth)}, '{tag}'> & "
                f"{{ {tag}: {self._tag_literal(union, value)} }}"
            )

        disjunction = " | ".join(variants)

        shared = []
        if union.fields_object is not None:
            shared = [f for f in union.fields_object.fields if f.name != tag]

        if not shared:
            return disjunction

        return f"{self._emit_fields(shared, depth)} & ({disjunction})"

    def emit_enum(self, name: str, values: List[str]) -> str:
        members = enum_member_names(values)
        body = "\n".join(f"{INDENT}{members[value]} = {literal(value)}," for value in values)
        return f"export enum {name} {{\n{body}\n}}"

    def emit_declaration(self, declaration: TypeDeclaration) -> str:
        if self.named_enums and isinstance(declaration.type, EnumType):
            return self.emit_enum(declaration.local_name, declaration.type.values)

        return f"export type {declaration.local_name} = {self.emit(declaration.type)};"
