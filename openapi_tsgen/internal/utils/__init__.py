"""Утилиты для генератора"""

from .naming import (
    normalize_name,
    pascal_case,
    extract_path_params,
    enum_member_names,
    operation_name,
)

__all__ = [
    "normalize_name",
    "pascal_case",
    "extract_path_params",
    "enum_member_names",
    "operation_name",
]
