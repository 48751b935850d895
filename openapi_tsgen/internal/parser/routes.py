from typing import Any, Dict, List

from ...errors import (
    EmptyRequestBody,
    GetWithBody,
    NoSuccessResponse,
    OptionalPathParameter,
    UnboundPathParameter,
    UndeclaredPathParameter,
    UnsupportedParameterLocation,
)
from ..types.converter import TypeConverter
from ..types.models import (
    ObjectType,
    Operation,
    Parameter,
    ParameterLocation,
    StringType,
    VoidType,
)
from ..utils.naming import extract_path_params, normalize_name

HTTP_METHODS = ("get", "post", "put", "patch", "delete")


class RouteExtractor:
    """Извлечение операций из секции paths"""

    def __init__(self, converter: TypeConverter):
        self.converter = converter

    def extract(self, paths: Dict[str, Any]) -> List[Operation]:
        operations = []

        for route, path_spec in (paths or {}).items():
            shared_parameters = path_spec.get("parameters") or []

            for method, spec in path_spec.items():
                if method.lower() not in HTTP_METHODS:
                    continue

                operations.append(
                    self._extract_operation(route, method.upper(), spec or {}, shared_parameters)
                )

        return operations

    @staticmethod
    def _merge_parameters(shared: List[Dict], own: List[Dict]) -> List[Dict]:
        """Параметры пути + параметры операции (последние имеют приоритет)"""
        own_keys = {(p.get("name"), p.get("in")) for p in own}
        return [p for p in shared if (p.get("name"), p.get("in")) not in own_keys] + own

    def _extract_operation(
        self, route: str, method: str, spec: Dict, shared_parameters: List[Dict]
    ) -> Operation:
        path_params = extract_path_params(route)
        unbound = list(path_params)

        parameters = []
        flat_types = []

        for param in self._merge_parameters(shared_parameters, spec.get("parameters") or []):
            place, name = param.get("in"), param.get("name")

            if place == "path":
                if not param.get("required"):
                    raise OptionalPathParameter(route, name)

                if name not in unbound:
                    raise UndeclaredPathParameter(route, name)

                unbound.remove(name)
                parameters.append(
                    Parameter(
                        location=ParameterLocation.PATH,
                        name=normalize_name(name),
                        type=StringType(),
                        required=True,
                    )
                )
            elif place == "query":
                parameters.append(
                    Parameter(
                        location=ParameterLocation.QUERY,
                        name=normalize_name(name),
                        type=StringType(),
                        required=bool(param.get("required")),
                    )
                )
            else:
                raise UnsupportedParameterLocation(route, place)

        if unbound:
            raise UnboundPathParameter(route, unbound)

        if spec.get("requestBody"):
            if method == "GET":
                raise GetWithBody(route)

            content = spec["requestBody"].get("content") or {}
            schema = (content.get("application/json") or {}).get("schema")
            if not schema:
                raise EmptyRequestBody(route)

            body_type = self.converter.convert(schema)

            # Поля объекта становятся отдельными body параметрами
            if isinstance(body_type, ObjectType):
                parameters.extend(
                    Parameter(
                        location=ParameterLocation.BODY,
                        name=field.name,
                        type=field.type,
                        required=field.required,
                    )
                    for field in body_type.fields
                )
            else:
                flat_types.append(body_type)

        return Operation(
            http_method=method,
            route=route,
            parameters=parameters,
            flat_types=flat_types,
            result_type=self._result_type(route, spec.get("responses") or {}),
        )

    def _result_type(self, route: str, responses: Dict):
        # Коды ответов из YAML могут прийти числами
        if "200" not in responses and 200 not in responses:
            raise NoSuccessResponse(route)

        success = responses.get("200", responses.get(200))
        content = (success or {}).get("content") or {}
        schema = (content.get("application/json") or {}).get("schema")

        if not schema:
            return VoidType()

        return self.converter.convert(schema)
