import logging
from typing import Any, Callable, Dict

from ..types.enum_resolver import EnumNameResolver
from ..types.models import ApiDescription
from ..types.schema_resolver import SchemaResolver
from .loader import read_and_parse
from .routes import RouteExtractor

logger = logging.getLogger(__name__)


class OpenApiParser:
    """Парсер OpenAPI спецификации"""

    def __init__(
        self,
        openapi_dict: Dict[str, Any],
        base: str = "",
        source: Callable[[str], Dict[str, Any]] = read_and_parse,
        named_enums: bool = False,
        entry: str = "",
    ):
        self.openapi_dict = openapi_dict
        self.named_enums = named_enums
        self.resolver = SchemaResolver(source=source, base=base, entry=entry)

    def parse(self) -> ApiDescription:
        """Разбор входного документа и всех связанных файлов"""
        self.resolver.register_document(self.openapi_dict)

        operations = RouteExtractor(self.resolver.converter).extract(
            self.openapi_dict.get("paths") or {}
        )

        self.resolver.resolve()
        self.resolver.check_unique_names()

        logger.debug(
            "Разобрано %d схем и %d операций",
            len(self.resolver.registry),
            len(operations),
        )

        enums = {}
        if self.named_enums:
            enums = EnumNameResolver(self.resolver.registry, operations).resolve()

        return ApiDescription(
            declarations=self.resolver.registry,
            operations=operations,
            enums=enums,
        )
