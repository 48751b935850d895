"""
Главный модуль генератора - чистый интерфейс
"""

from typing import Any, Callable, Dict, Optional

from .internal.generator.client_generator import ClientGenerator
from .internal.parser.loader import base_of, entry_of, read_and_parse
from .internal.parser.openapi import OpenApiParser
from .internal.types.models import ApiDescription, Project


class ApiClientGenerator:
    """Чистый интерфейс для генерации TypeScript клиентов"""

    def __init__(
        self,
        openapi_spec: Dict[str, Any],
        base: str = "",
        source: Callable[[str], Dict[str, Any]] = read_and_parse,
        named_enums: bool = False,
        namespace: Optional[str] = None,
        entry: str = "",
    ):
        self.named_enums = named_enums
        self.namespace = namespace
        self.parser = OpenApiParser(
            openapi_spec,
            base=base,
            source=source,
            named_enums=named_enums,
            entry=entry,
        )

    @classmethod
    def from_locator(cls, locator: str, **kwargs) -> "ApiClientGenerator":
        """Генератор для входного файла или URL; связанные файлы ищутся рядом"""
        return cls(
            read_and_parse(locator),
            base=base_of(locator),
            entry=entry_of(locator),
            **kwargs,
        )

    def parse(self) -> ApiDescription:
        return self.parser.parse()

    def generate(self) -> Project:
        """Генерация types.ts и api.ts"""
        return ClientGenerator(
            self.parse(), named_enums=self.named_enums, namespace=self.namespace
        ).generate()


def generate_client(openapi_spec: Dict[str, Any], **kwargs) -> Project:
    """Создание API клиента из OpenAPI спецификации"""
    generator = ApiClientGenerator(openapi_spec, **kwargs)
    return generator.generate()
