import argparse
import logging
import os
import sys

import httpx
import yaml

from openapi_tsgen.config import OpenApiConfig
from openapi_tsgen.errors import OpenApiTsgenError
from openapi_tsgen.generator import ApiClientGenerator
from openapi_tsgen.internal.types.models import Project


def confirm_choice(message: str) -> bool:
    """Запрос подтверждения у пользователя"""
    while True:
        choice = input(f"{message} (y/n): ").lower().strip()
        if choice in ["y", "yes", "да", ""]:
            return True
        elif choice in ["n", "no", "нет"]:
            return False
        print("Введите y/n")


def _generate_client_core(config: OpenApiConfig) -> Project:
    """Ядро генерации клиента - только генерация без сохранения"""
    print(f"🚀 Генерация клиента из {config.url}")
    print("📥 Загрузка OpenAPI спецификации...")

    generator = ApiClientGenerator.from_locator(
        config.url, named_enums=config.named_enums, namespace=config.namespace
    )

    print("⚙️ Генерация кода...")
    return generator.generate()


def _save_project_files(project: Project, target_path: str):
    """Сохранение файлов проекта"""
    print(f"💾 Сохранение {len(project.files)} файлов...")

    os.makedirs(target_path, exist_ok=True)

    for code_file in project.files:
        path = os.path.join(target_path, code_file.file_name)

        with open(path, "w", encoding="utf-8") as f:
            f.write(str(code_file))

        print(f"   * {path}")

    print("✅ Генерация завершена успешно!")
    print(f"📦 Клиент создан в: {os.path.abspath(target_path)}")


def generate():
    """Генерация TypeScript типов и клиента из OpenAPI"""
    parser = argparse.ArgumentParser(
        description="Генерация TypeScript клиента из OpenAPI"
    )
    parser.add_argument("url", nargs="?", help="Путь или URL к входному файлу OpenAPI")
    parser.add_argument(
        "-o", "--out", "--dirname", dest="dirname", type=str, help="Директория для генерации"
    )
    parser.add_argument(
        "--named-enums", action="store_true", help="Генерировать enum как именованные типы"
    )
    parser.add_argument("--namespace", type=str, help="Пространство имен типов в api.ts")
    parser.add_argument(
        "--init-config", action="store_true", help="Создать конфиг файл openapi.toml"
    )
    parser.add_argument(
        "--force", action="store_true", help="Генерировать без подтверждения"
    )
    parser.add_argument("--verbose", action="store_true", help="Подробный лог")

    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    # Инициализация конфига
    if args.init_config:
        config = OpenApiConfig(
            url=args.url,
            dirname=args.dirname or "out",
            named_enums=args.named_enums,
            namespace=args.namespace,
        )
        config.save_to_file()
        print("✅ Создан конфиг файл openapi.toml")
        return

    file_config = OpenApiConfig.from_file()

    if file_config and (args.url or args.dirname):
        print("🔧 Найден конфиг файл openapi.toml:")
        print(f"   URL: {file_config.url}")
        print(f"   Директория: {file_config.dirname}")
        print()

        if args.force or confirm_choice("Использовать конфиг из файла?"):
            final_config = file_config
        else:
            final_config = file_config.merge_with_args(args)
    elif file_config:
        print("📋 Используется конфиг из openapi.toml")
        final_config = file_config.merge_with_args(args)
    elif args.url:
        final_config = OpenApiConfig(
            url=args.url,
            dirname=args.dirname or "out",
            named_enums=args.named_enums,
            namespace=args.namespace,
        )
    else:
        print("❌ Ошибка: Укажите входной файл или создайте конфиг с --init-config")
        sys.exit(1)

    if not final_config.url:
        print("❌ Ошибка: URL не указан ни в конфиге, ни в аргументах")
        sys.exit(1)

    print(f"📁 Директория вывода: {final_config.dirname}")

    try:
        project = _generate_client_core(final_config)
        _save_project_files(project, final_config.dirname)
    except OpenApiTsgenError as e:
        print(f"❌ {e.kind}: {e}")
        sys.exit(1)
    except (OSError, ValueError, yaml.YAMLError, httpx.HTTPError) as e:
        print(f"❌ Ошибка генерации: {e}")
        sys.exit(1)


if __name__ == "__main__":
    generate()
