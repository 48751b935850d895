"""
Интеграционные тесты для генератора
"""

import json
import os
import sys
import tempfile

import pytest
import yaml

from openapi_tsgen import ApiClientGenerator
from openapi_tsgen.cli import generate
from openapi_tsgen.errors import InvalidDocument

ENTRY = {
    "openapi": "3.0.0",
    "info": {"title": "Pets", "version": "1.0.0"},
    "components": {
        "schemas": {
            "Shop": {
                "type": "object",
                "properties": {
                    "pets": {
                        "type": "array",
                        "items": {"$ref": "models/pets.yaml#/components/schemas/Pet"},
                    }
                },
                "required": ["pets"],
            }
        }
    },
    "paths": {
        "/shops/{shop_id}": {
            "get": {
                "parameters": [{"name": "shop_id", "in": "path", "required": True}],
                "responses": {
                    "200": {
                        "content": {
                            "application/json": {
                                "schema": {"$ref": "#/components/schemas/Shop"}
                            }
                        }
                    }
                },
            }
        }
    },
}

PETS = {
    "components": {
        "schemas": {
            "Pet": {
                "type": "object",
                "properties": {
                    "kind": {"$ref": "#/components/schemas/Kind"},
                    "name": {"type": "string"},
                },
                "required": ["kind"],
                "oneOf": [
                    {"$ref": "#/components/schemas/Cat"},
                    {"$ref": "#/components/schemas/Dog"},
                ],
                "discriminator": {
                    "propertyName": "kind",
                    "mapping": {
                        "cat": "#/components/schemas/Cat",
                        "dog": "#/components/schemas/Dog",
                    },
                },
            },
            "Kind": {"type": "string", "enum": ["cat", "dog"]},
            "Cat": {
                "type": "object",
                "properties": {"kind": {"type": "string"}, "lives": {"type": "integer"}},
            },
            "Dog": {
                # Пути связанных файлов считаются от входного документа
                "allOf": [{"$ref": "common.json#/components/schemas/Animal"}],
                "properties": {"kind": {"type": "string"}, "good": {"type": "boolean"}},
            },
        }
    }
}

COMMON = {
    "components": {
        "schemas": {
            "Animal": {
                "type": "object",
                "properties": {"tags": {"type": "object", "additionalProperties": True}},
            }
        }
    }
}


@pytest.fixture
def spec_dir():
    """Спецификация из трех файлов в двух директориях"""
    with tempfile.TemporaryDirectory() as temp_dir:
        os.makedirs(os.path.join(temp_dir, "models"))

        with open(os.path.join(temp_dir, "api.yaml"), "w") as f:
            yaml.safe_dump(ENTRY, f, sort_keys=False)
        with open(os.path.join(temp_dir, "models", "pets.yaml"), "w") as f:
            yaml.safe_dump(PETS, f, sort_keys=False)
        with open(os.path.join(temp_dir, "common.json"), "w") as f:
            json.dump(COMMON, f)

        yield temp_dir


class TestIntegration:
    """Интеграционные тесты"""

    def test_complete_generation_workflow(self, spec_dir):
        project = ApiClientGenerator.from_locator(os.path.join(spec_dir, "api.yaml")).generate()
        files = {f.file_name: str(f) for f in project.files}

        types_ts = files["types.ts"]
        assert "export type Animal = {\n  tags?: Record<string, any>;\n};" in types_ts
        assert "export type Dog = Animal & {\n  kind?: string;\n  good?: boolean;\n};" in types_ts
        assert "export type Kind = 'cat' | 'dog';" in types_ts
        assert (
            "export type Pet = {\n  name?: string;\n} & "
            "(Omit<Cat, 'kind'> & { kind: 'cat' } | Omit<Dog, 'kind'> & { kind: 'dog' });"
        ) in types_ts
        assert "export type Shop = {\n  pets: Pet[];\n};" in types_ts

        api_ts = files["api.ts"]
        assert "public async '/shops/{shop_id}'({ shopid }" in api_ts
        assert "interpolateParams('/shops/{shop_id}', { shop_id: shopid })" in api_ts

    def test_named_enum_tags(self, spec_dir):
        project = ApiClientGenerator.from_locator(
            os.path.join(spec_dir, "api.yaml"), named_enums=True
        ).generate()
        types_ts = str(project.get_file("types.ts"))

        assert "export enum Kind {\n  Cat = 'cat',\n  Dog = 'dog',\n}" in types_ts
        assert "{ kind: Kind.Cat }" in types_ts

    def test_non_mapping_document(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            path = os.path.join(temp_dir, "api.yaml")
            with open(path, "w") as f:
                f.write("- just\n- a list\n")

            with pytest.raises(InvalidDocument):
                ApiClientGenerator.from_locator(path)


class TestCli:
    """Тесты командной строки"""

    def test_generates_files(self, spec_dir, monkeypatch, capsys):
        out_dir = os.path.join(spec_dir, "out")
        monkeypatch.chdir(spec_dir)
        monkeypatch.setattr(
            sys, "argv", ["openapi-tsgen", "api.yaml", "-o", out_dir, "--named-enums"]
        )

        generate()

        assert sorted(os.listdir(out_dir)) == ["api.ts", "types.ts"]
        with open(os.path.join(out_dir, "types.ts"), encoding="utf-8") as f:
            assert "export enum Kind" in f.read()
        assert "✅ Генерация завершена успешно!" in capsys.readouterr().out

    def test_reports_errors(self, spec_dir, monkeypatch, capsys):
        os.remove(os.path.join(spec_dir, "common.json"))
        monkeypatch.chdir(spec_dir)
        monkeypatch.setattr(sys, "argv", ["openapi-tsgen", "api.yaml", "--force"])

        with pytest.raises(SystemExit) as exc_info:
            generate()

        assert exc_info.value.code == 1
        assert "❌ Ошибка генерации" in capsys.readouterr().out

    def test_reports_broken_json(self, spec_dir, monkeypatch, capsys):
        with open(os.path.join(spec_dir, "broken.json"), "w") as f:
            f.write('{"paths": ')
        monkeypatch.chdir(spec_dir)
        monkeypatch.setattr(sys, "argv", ["openapi-tsgen", "broken.json", "--force"])

        with pytest.raises(SystemExit) as exc_info:
            generate()

        assert exc_info.value.code == 1
        assert "❌ Ошибка генерации" in capsys.readouterr().out

    def test_init_config(self, spec_dir, monkeypatch):
        monkeypatch.chdir(spec_dir)
        monkeypatch.setattr(
            sys, "argv", ["openapi-tsgen", "api.yaml", "--init-config", "--namespace", "Api"]
        )

        generate()

        with open(os.path.join(spec_dir, "openapi.toml")) as f:
            content = f.read()
        assert 'url = "api.yaml"' in content
        assert 'namespace = "Api"' in content
