"""
Ошибки генератора. Любая ошибка прерывает генерацию целиком.
"""

from typing import Iterable, Optional


class OpenApiTsgenError(Exception):
    """Базовая ошибка генератора"""

    def __init__(self, message: str, identifier: Optional[str] = None):
        self.message = message
        self.identifier = identifier
        super().__init__(message)

    @property
    def kind(self) -> str:
        return type(self).__name__


class InvalidDocument(OpenApiTsgenError):
    def __init__(self, locator: str):
        super().__init__(f'Документ "{locator}" не является объектом', locator)


class InvalidRefLink(OpenApiTsgenError):
    def __init__(self, ref: str):
        super().__init__(f'Некорректная ссылка: "{ref}"', ref)


class UnresolvableSchema(OpenApiTsgenError):
    def __init__(self, key: str):
        super().__init__(f'Схема "{key}" не может быть загружена', key)


class DuplicateTypeName(OpenApiTsgenError):
    def __init__(self, name: str, keys: Iterable[str]):
        self.keys = list(keys)
        super().__init__(
            f'Дублирующееся имя типа "{name}": {", ".join(self.keys)}', name
        )


class MalformedArraySchema(OpenApiTsgenError):
    def __init__(self, where: str = ""):
        super().__init__("Массив без описания items", where or None)


class InvalidObjectNotation(OpenApiTsgenError):
    def __init__(self, schema):
        super().__init__(f"Некорректное описание объекта: {schema!r}")


class UnknownFieldType(OpenApiTsgenError):
    def __init__(self, field_type):
        super().__init__(f'Неизвестный тип поля: "{field_type}"', str(field_type))


class MalformedRouteTemplate(OpenApiTsgenError):
    def __init__(self, route: str):
        super().__init__(f'Некорректный синтаксис параметров в пути: "{route}"', route)


class UnboundPathParameter(OpenApiTsgenError):
    def __init__(self, route: str, names: Iterable[str]):
        names = list(names)
        super().__init__(
            f'Не все параметры пути описаны в "{route}": {", ".join(names)}', route
        )


class UndeclaredPathParameter(OpenApiTsgenError):
    def __init__(self, route: str, name: str):
        super().__init__(f'Путь "{route}" не содержит параметр {{{name}}}', name)


class OptionalPathParameter(OpenApiTsgenError):
    def __init__(self, route: str, name: str):
        super().__init__(
            f'Необязательный параметр "{name}" в пути: "{route}"', name
        )


class UnsupportedParameterLocation(OpenApiTsgenError):
    def __init__(self, route: str, location: str):
        super().__init__(
            f'Неподдерживаемое значение in: "{location}" в "{route}"', route
        )


class GetWithBody(OpenApiTsgenError):
    def __init__(self, route: str):
        super().__init__(f'Тело запроса в GET запросе: "{route}"', route)


class EmptyRequestBody(OpenApiTsgenError):
    def __init__(self, route: str):
        super().__init__(f'Тело запроса без схемы в "{route}"', route)


class NoSuccessResponse(OpenApiTsgenError):
    def __init__(self, route: str):
        super().__init__(f'Нет успешного ответа в "{route}"', route)


class DiscriminatorMappingMismatch(OpenApiTsgenError):
    def __init__(self, value: str, key: str):
        super().__init__(
            f'Значение дискриминатора "{value}" ссылается на "{key}", '
            f"которого нет среди вариантов",
            key,
        )


class UnresolvableEnumNameCollision(OpenApiTsgenError):
    def __init__(self, path: Iterable[str]):
        path = ".".join(path)
        super().__init__(f'Не удалось подобрать имя для enum в "{path}"', path)
