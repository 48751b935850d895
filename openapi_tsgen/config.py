"""
Конфигурация для генерации TypeScript клиента
"""

import os
from typing import Optional
import toml
from dataclasses import dataclass


@dataclass
class OpenApiConfig:
    """Конфигурация генератора"""

    url: Optional[str] = None
    dirname: Optional[str] = None

    # Влияют только на вывод типов
    named_enums: bool = False
    namespace: Optional[str] = None

    @classmethod
    def from_file(
        cls, config_path: str = "openapi.toml", search_dir: str = None
    ) -> Optional["OpenApiConfig"]:
        """Загрузка конфигурации из файла"""
        # Если указана директория для поиска, ищем конфиг там
        if search_dir and os.path.isdir(search_dir):
            config_in_dir = os.path.join(search_dir, "openapi.toml")
            if os.path.exists(config_in_dir):
                config_path = config_in_dir

        if not os.path.exists(config_path):
            return None

        try:
            config_data = toml.load(config_path)
        except toml.TomlDecodeError:
            return None

        return cls(
            url=config_data.get("url"),
            dirname=config_data.get("dirname", "out"),
            named_enums=bool(config_data.get("named_enums", False)),
            namespace=config_data.get("namespace"),
        )

    def save_to_file(self, config_path: str = "openapi.toml") -> None:
        """Сохранение конфигурации в файл"""
        config_data = {
            "url": self.url,
            "dirname": self.dirname,
            "named_enums": self.named_enums,
        }
        if self.namespace:
            config_data["namespace"] = self.namespace

        with open(config_path, "w") as f:
            toml.dump(config_data, f)

    def merge_with_args(self, args) -> "OpenApiConfig":
        """Объединение с аргументами командной строки"""
        return OpenApiConfig(
            url=args.url or self.url,
            dirname=args.dirname or self.dirname,
            named_enums=args.named_enums or self.named_enums,
            namespace=args.namespace or self.namespace,
        )
