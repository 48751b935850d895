"""
Имена для inline enum.

Безымянные enum с одинаковым набором значений (без учета порядка) образуют
одного кандидата и получают одно имя. Имя берется из ближайшего поля/схемы;
при конфликте к нему добавляются внешние сегменты пути. Конфликт двух
кандидатов с разными значениями обнаруживается только после того, как один
из них уже занял имя, поэтому проход повторяется, пока множество конфликтных
имен растет.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Set, Tuple

from ...errors import UnresolvableEnumNameCollision
from ..utils.naming import operation_name, pascal_case
from .models import (
    ArrayType,
    EnumType,
    MapType,
    ObjectCompositionType,
    ObjectType,
    Operation,
    TypeDeclaration,
    UnionType,
)

logger = logging.getLogger(__name__)

MIN_NAME_LENGTH = 3
RESERVED_NAMES = {"Type"}


@dataclass
class EnumCandidate:
    values: frozenset
    path: Tuple[str, ...]
    nodes: List[EnumType] = field(default_factory=list)

    def name_at(self, depth: int) -> str:
        return "".join(pascal_case(segment) for segment in self.path[-depth:])


def walk_enums(node, path: Tuple[str, ...]) -> Iterator[Tuple[EnumType, Tuple[str, ...]]]:
    """Обход узла типа: (enum, путь имен до него)"""
    if isinstance(node, EnumType):
        yield node, path
    elif isinstance(node, (ArrayType, MapType)):
        yield from walk_enums(node.element_type, path)
    elif isinstance(node, ObjectType):
        for object_field in node.fields:
            yield from walk_enums(object_field.type, path + (object_field.name,))
    elif isinstance(node, ObjectCompositionType):
        for part in node.parts:
            yield from walk_enums(part, path)
    elif isinstance(node, UnionType):
        if node.fields_object is not None:
            yield from walk_enums(node.fields_object, path)
        for member in node.members:
            yield from walk_enums(member, path)


class EnumNameResolver:
    """Назначение уникальных имен всем inline enum"""

    def __init__(
        self,
        declarations: Dict[str, TypeDeclaration],
        operations: Optional[List[Operation]] = None,
    ):
        self.declarations = declarations
        self.operations = operations or []

        self.top_level = {d.local_name: d for d in declarations.values()}
        self.collisions: Set[str] = set()
        self.candidates = self._collect()

    def _enum_paths(self) -> Iterator[Tuple[EnumType, Tuple[str, ...]]]:
        for declaration in self.declarations.values():
            if isinstance(declaration.type, EnumType):
                declaration.type.assigned_name = declaration.local_name
                continue

            yield from walk_enums(declaration.type, (declaration.local_name,))

        for operation, name in zip(self.operations, self._operation_names()):
            root = (name,)

            for parameter in operation.parameters:
                yield from walk_enums(parameter.type, root + (parameter.name,))
            for flat_type in operation.flat_types:
                yield from walk_enums(flat_type, root + ("Body",))
            yield from walk_enums(operation.result_type, root + ("Result",))

    def _operation_names(self) -> List[str]:
        """Имена операций; /a-b и /a_b дают GetAB и GetAB2"""
        names = []
        used = set()

        for operation in self.operations:
            name = operation_name(operation.http_method, operation.route)

            candidate, index = name, 2
            while candidate in used:
                candidate = f"{name}{index}"
                index += 1

            used.add(candidate)
            names.append(candidate)

        return names

    def _collect(self) -> List[EnumCandidate]:
        by_values: Dict[frozenset, EnumCandidate] = {}

        for node, path in self._enum_paths():
            values = node.value_set()
            if values not in by_values:
                by_values[values] = EnumCandidate(values=values, path=path)
            by_values[values].nodes.append(node)

        return list(by_values.values())

    def resolve(self) -> Dict[str, List[str]]:
        """
        Returns:
            Новые объявления enum: имя -> значения в порядке первого появления
        """
        passes = 0

        while True:
            passes += 1
            known_collisions = len(self.collisions)
            claimed: Dict[str, frozenset] = {}
            names = [self._pick_name(candidate, claimed) for candidate in self.candidates]

            if len(self.collisions) == known_collisions:
                break

        logger.debug("Имена enum назначены за %d проход(ов)", passes)

        synthesized = {}
        for candidate, name in zip(self.candidates, names):
            for node in candidate.nodes:
                node.assigned_name = name

            if name not in self.top_level:
                synthesized[name] = list(candidate.nodes[0].values)

        return synthesized

    def _pick_name(self, candidate: EnumCandidate, claimed: Dict[str, frozenset]) -> str:
        for depth in range(1, len(candidate.path) + 1):
            name = candidate.name_at(depth)

            declaration = self.top_level.get(name)
            if declaration is not None:
                # Совпадает с объявленным enum - переиспользуем его
                if (
                    isinstance(declaration.type, EnumType)
                    and declaration.type.value_set() == candidate.values
                ):
                    return name
                continue

            if (
                name in self.collisions
                or len(name) < MIN_NAME_LENGTH
                or name in RESERVED_NAMES
            ):
                continue

            if name in claimed:
                self.collisions.add(name)
                continue

            claimed[name] = candidate.values
            return name

        raise UnresolvableEnumNameCollision(candidate.path)
