import logging
import posixpath
from collections import defaultdict
from typing import Any, Callable, Dict, List, Set
from urllib.parse import urlsplit

from ...errors import DuplicateTypeName, InvalidRefLink, UnresolvableSchema
from ..parser.loader import is_url, join_locator, read_and_parse
from ..utils.naming import normalize_name
from .converter import TypeConverter
from .models import RefType, TypeDeclaration

logger = logging.getLogger(__name__)

SCHEMAS_PREFIX = "/components/schemas/"


class SchemaResolver:
    """
    Резолвер ссылок между файлами схем.

    Ссылка вида ``[file]#/components/schemas/Name`` сразу превращается в RefType,
    а файл ставится в очередь загрузки. resolve() загружает очередь до тех пор,
    пока она не опустеет, после чего в реестре не должно остаться ожидающих схем.
    """

    def __init__(
        self,
        source: Callable[[str], Dict[str, Any]] = read_and_parse,
        base: str = "",
        entry: str = "",
    ):
        self.source = source
        self.base = base
        # Имя входного документа относительно base
        self.entry = self.canonical_file(entry) if entry else ""

        self.registry: Dict[str, TypeDeclaration] = {}
        self.pending: Set[str] = set()
        self.load_queue: List[str] = []
        self.loaded_files: Set[str] = {""}  # "" - входной документ

        self.converter = TypeConverter(self)

    @staticmethod
    def canonical_file(file: str) -> str:
        """Единое написание файла: ./a.yaml, a.yaml и x/../a.yaml совпадают"""
        if is_url(file):
            parts = urlsplit(file)
            path = posixpath.normpath(parts.path) if parts.path else ""
            return parts._replace(path=path).geturl()
        return posixpath.normpath(file.replace("\\", "/"))

    def key_of(self, ref: str, current_file: str) -> str:
        """Ключ реестра для ссылки без побочных эффектов"""
        file, sep, pointer = ref.strip().partition("#")

        if (
            not sep
            or not pointer.startswith(SCHEMAS_PREFIX)
            or len(pointer) == len(SCHEMAS_PREFIX)
        ):
            raise InvalidRefLink(ref)

        if file:
            file = self.canonical_file(file)
            if file == self.entry:
                file = ""
        else:
            file = current_file

        return f"{file}#{pointer}"

    def reference(self, ref: str, current_file: str) -> RefType:
        """Ссылка на схему; незагруженный файл ставится в очередь"""
        key = self.key_of(ref, current_file)

        if key not in self.registry:
            file = key.partition("#")[0]
            if file not in self.loaded_files and file not in self.load_queue:
                logger.debug("Файл %s поставлен в очередь загрузки", file)
                self.load_queue.append(file)

            self.pending.add(key)

        return RefType(target=key)

    def register_document(self, document: Dict[str, Any], file: str = ""):
        """Регистрация всех схем из components/schemas документа"""
        schemas = (document.get("components") or {}).get("schemas") or {}

        for schema_name, schema in schemas.items():
            key = f"{file}#{SCHEMAS_PREFIX}{schema_name}"

            self.registry[key] = TypeDeclaration(
                local_name=normalize_name(schema_name),
                registry_key=key,
                type=self.converter.convert(schema, file),
            )
            self.pending.discard(key)

    def resolve(self):
        """Загрузка файлов из очереди до неподвижной точки"""
        while self.load_queue:
            for file in list(self.load_queue):
                self.load_queue.remove(file)
                self.loaded_files.add(file)

                logger.debug("Загрузка схем из %s", file)
                self.register_document(self.source(join_locator(self.base, file)), file)

        for key in sorted(self.pending):
            raise UnresolvableSchema(key)

    def check_unique_names(self):
        """Имена объявлений должны быть уникальны во всем графе"""
        keys_by_name = defaultdict(list)

        for key, declaration in self.registry.items():
            keys_by_name[declaration.local_name].append(key)

        for name, keys in keys_by_name.items():
            if len(keys) > 1:
                raise DuplicateTypeName(name, keys)
