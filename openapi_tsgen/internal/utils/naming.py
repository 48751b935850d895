"""Утилиты для работы с именами схем, полей и параметров"""

import re
from typing import Dict, List

from ...errors import MalformedRouteTemplate

_FORBIDDEN = re.compile(r"[.,!@#$%^&*()_-]+")
_PLACEHOLDER = re.compile(r"{([A-Za-z_][A-Za-z0-9_]*)}")


def normalize_name(name: str) -> str:
    """
    Удаляет запрещенную пунктуацию из внешнего идентификатора.

    Examples:
        >>> normalize_name("user_id")
        'userid'
        >>> normalize_name("x-request.id")
        'xrequestid'
    """
    return _FORBIDDEN.sub("", name)


def pascal_case(name: str) -> str:
    """PascalCase: первая буква каждой части заглавная, остальное без изменений"""
    return "".join(part[:1].upper() + part[1:] for part in re.split(r"[^A-Za-z0-9]+", name))


def extract_path_params(route: str) -> List[str]:
    """
    Извлекает имена параметров из шаблона пути слева направо.

    Args:
        route: Шаблон пути (например, "/users/{id}/posts/{post_id}")

    Returns:
        Имена параметров в порядке появления (["id", "post_id"])

    Raises:
        MalformedRouteTemplate: если после извлечения остались { или }
    """
    params = []
    updated = route

    while True:
        match = _PLACEHOLDER.search(updated)
        if not match:
            break

        params.append(match.group(1))
        updated = updated[: match.start()] + updated[match.end() :]

    if "{" in updated or "}" in updated:
        raise MalformedRouteTemplate(route)

    return params


def enum_member_names(values: List[str]) -> Dict[str, str]:
    """Имена членов TypeScript enum для значений"""
    result = {}
    used = set()

    for value in values:
        name = pascal_case(value)
        if not name or name[0].isdigit():
            name = f"Value{name}"

        # Разводим совпадения суффиксом
        candidate, index = name, 2
        while candidate in used:
            candidate = f"{name}{index}"
            index += 1

        used.add(candidate)
        result[value] = candidate

    return result


def operation_name(method: str, route: str) -> str:
    """GET /users/{id} -> GetUsersId"""
    return pascal_case(method.lower()) + pascal_case(route.replace("{", "").replace("}", ""))
