from typing import Dict, List, Optional

from ..types.models import (
    ApiDescription,
    CodeBlock,
    ObjectField,
    ObjectType,
    Operation,
    ParameterLocation,
    Project,
)
from ..utils.naming import extract_path_params, normalize_name
from .emitter import TypeEmitter
from .templates import templates

# Порядок групп в ApiService
METHOD_GROUPS = ("GET", "POST", "PUT", "PATCH", "DELETE")


class ClientGenerator:
    """Генератор types.ts и api.ts из разобранного описания API"""

    def __init__(
        self,
        api: ApiDescription,
        named_enums: bool = False,
        namespace: Optional[str] = None,
    ):
        self.api = api
        self.named_enums = named_enums
        self.namespace = namespace
        self.project = Project(name="api")

    def generate(self) -> Project:
        """Основная генерация"""
        self._generate_types()
        self._generate_api()
        return self.project

    def _generate_types(self):
        """Все объявления по алфавиту, затем синтезированные enum"""
        emitter = TypeEmitter(self.api.declarations, named_enums=self.named_enums)
        types_file = self.project.add_file("types.ts")

        for declaration in sorted(
            self.api.declarations.values(), key=lambda d: d.local_name
        ):
            types_file.add_code_block(CodeBlock(code=emitter.emit_declaration(declaration)))

        if self.named_enums:
            for name in sorted(self.api.enums):
                types_file.add_code_block(
                    CodeBlock(code=emitter.emit_enum(name, self.api.enums[name]))
                )

    def _generate_api(self):
        emitter = TypeEmitter(
            self.api.declarations,
            named_enums=self.named_enums,
            namespace=self.namespace,
        )

        grouped: Dict[str, List[Operation]] = {method: [] for method in METHOD_GROUPS}
        for operation in self.api.operations:
            grouped[operation.http_method].append(operation)

        group_classes = [
            templates.group_class.format(
                group=method.capitalize(),
                method=method,
                methods="".join(self._format_method(emitter, op) for op in operations),
            )
            for method, operations in grouped.items()
        ]

        api_file = self.project.add_file("api.ts")
        api_file.add_code_block(
            CodeBlock(
                code=templates.api_group.format(
                    imports=self._imports(emitter.used_types)
                ).replace("\n\n\n\n", "\n\n")
            )
        )
        for group_class in group_classes:
            api_file.add_code_block(CodeBlock(code=group_class))
        api_file.add_code_block(CodeBlock(code=self._api_service()))

    def _imports(self, used_types) -> str:
        if self.namespace:
            return templates.namespace_import.format(namespace=self.namespace)

        if not used_types:
            return ""

        return templates.named_imports.format(names=",\n  ".join(sorted(used_types)))

    @staticmethod
    def _format_method(emitter: TypeEmitter, operation: Operation) -> str:
        path_names = [p.name for p in operation.parameters_in(ParameterLocation.PATH)]
        query_names = [p.name for p in operation.parameters_in(ParameterLocation.QUERY)]
        extract_names = path_names + query_names

        param_types = []
        if operation.parameters:
            param_types.append(
                emitter.emit(
                    ObjectType(
                        fields=[
                            ObjectField(name=p.name, type=p.type, required=p.required)
                            for p in operation.parameters
                        ]
                    ),
                    1,
                )
            )
        param_types.extend(emitter.emit_operand(t, 1) for t in operation.flat_types)

        has_body = bool(operation.flat_types) or bool(
            operation.parameters_in(ParameterLocation.BODY)
        )

        route = f"'{operation.route}'"
        query = "undefined"

        if extract_names:
            params = "{ " + ", ".join(extract_names + (["...body"] if has_body else [])) + " }"

            if path_names:
                # Ключи подстановки совпадают с плейсхолдерами маршрута
                placeholders = {
                    normalize_name(name): name for name in extract_path_params(operation.route)
                }
                entries = [
                    name if placeholders.get(name, name) == name else f"{placeholders[name]}: {name}"
                    for name in path_names
                ]
                route = f"interpolateParams('{operation.route}', {{ {', '.join(entries)} }})"
            if query_names:
                query = "{ " + ", ".join(query_names) + " }"
        else:
            params = "body" if has_body else ""

        call_args = [route, query] + (["body"] if has_body else [])

        return templates.method.format(
            route=operation.route,
            params=f"{params}: {' & '.join(param_types)}" if params else "",
            result=emitter.emit(operation.result_type, 1),
            call_args=", ".join(call_args),
        )

    @staticmethod
    def _api_service() -> str:
        return templates.api_service.format(
            fields="\n".join(
                f"  public readonly {m.lower()}: ApiGroup{m.capitalize()};"
                for m in METHOD_GROUPS
            ),
            assignments="\n".join(
                f"    this.{m.lower()} = new ApiGroup{m.capitalize()}(middleware);"
                for m in METHOD_GROUPS
            ),
        )
