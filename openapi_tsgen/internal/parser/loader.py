"""
Загрузка и разбор документов OpenAPI (локальные файлы и URL)
"""

import json
import logging
import os
import posixpath
import re
from typing import Any, Dict
from urllib.parse import urljoin, urlsplit

import httpx
import yaml

from ...errors import InvalidDocument

logger = logging.getLogger(__name__)

BOOL_TAG = "tag:yaml.org,2002:bool"


class OpenApiYamlLoader(yaml.SafeLoader):
    """SafeLoader с булевыми значениями YAML 1.2: yes/no/on/off остаются строками"""


OpenApiYamlLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != BOOL_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
OpenApiYamlLoader.add_implicit_resolver(
    BOOL_TAG,
    re.compile(r"^(?:true|True|TRUE|false|False|FALSE)$"),
    list("tTfF"),
)


def is_url(locator: str) -> bool:
    return locator.startswith(("http://", "https://"))


def read_and_parse(locator: str) -> Dict[str, Any]:
    """Чтение и разбор документа по пути или URL"""
    logger.debug("Загрузка документа %s", locator)

    if is_url(locator):
        response = httpx.get(locator)
        response.raise_for_status()
        content = response.text
    else:
        with open(locator, "r", encoding="utf-8") as f:
            content = f.read()

    if locator.endswith(".json"):
        document = json.loads(content)
    else:
        # YAML - надмножество JSON
        document = yaml.load(content, Loader=OpenApiYamlLoader)

    if not isinstance(document, dict):
        raise InvalidDocument(locator)

    return document


def join_locator(base: str, file_name: str) -> str:
    """Путь к связанному файлу относительно директории (или URL) входного документа"""
    if is_url(base):
        return urljoin(base, file_name)
    return os.path.join(base, file_name)


def base_of(locator: str) -> str:
    if is_url(locator):
        return urljoin(locator, ".")
    return os.path.dirname(os.path.abspath(locator))


def entry_of(locator: str) -> str:
    """Имя входного документа относительно base_of(locator)"""
    if is_url(locator):
        return posixpath.basename(urlsplit(locator).path)
    return os.path.basename(locator)
