from __future__ import annotations

from pathlib import Path

from navgen.config import GeneratorSettings
from navgen.generator import DEFAULT_NAVIGATOR_CLASS


def test_defaults():
    settings = GeneratorSettings()

    assert settings.output_dir is None
    assert settings.type_map_path == Path("type_mappings.yaml")
    assert settings.navigator_class == DEFAULT_NAVIGATOR_CLASS


def test_kapt_directory_is_rewritten(monkeypatch):
    monkeypatch.setenv("KAPT_KOTLIN_GENERATED", "/app/build/generated/source/kaptKotlin/debug")

    assert GeneratorSettings().output_dir == "/app/build/generated/source/kapt/debug"


def test_blank_kapt_directory_disables_generation(monkeypatch):
    monkeypatch.setenv("KAPT_KOTLIN_GENERATED", "   ")

    assert GeneratorSettings().output_dir is None


def test_env_file_is_read(tmp_path):
    (tmp_path / ".env").write_text(
        "KAPT_KOTLIN_GENERATED=/out/kaptKotlin\nNAVGEN_NAVIGATOR_CLASS=com.acme.Router\n",
        encoding="utf-8",
    )

    settings = GeneratorSettings()

    assert settings.output_dir == "/out/kapt"
    assert settings.navigator_class == "com.acme.Router"


def test_fields_can_be_passed_by_name():
    assert GeneratorSettings(kapt_kotlin_generated="/x/kaptKotlin").output_dir == "/x/kapt"
