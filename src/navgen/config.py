from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from navgen.generator import DEFAULT_NAVIGATOR_CLASS


class GeneratorSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore", populate_by_name=True)

    # Output root handed over by kapt; absent when kapt is not driving the build.
    kapt_kotlin_generated: str | None = Field(default=None, alias="KAPT_KOTLIN_GENERATED")

    type_map_path: Path = Field(default=Path("type_mappings.yaml"), alias="NAVGEN_TYPE_MAP")
    navigator_class: str = Field(default=DEFAULT_NAVIGATOR_CLASS, alias="NAVGEN_NAVIGATOR_CLASS")

    @property
    def output_dir(self) -> str | None:
        """Generated-sources root, or None when code generation was not requested."""
        if self.kapt_kotlin_generated is None or not self.kapt_kotlin_generated.strip():
            return None
        # kapt reports build/generated/source/kaptKotlin; the sources go to .../kapt
        return self.kapt_kotlin_generated.strip().replace("kaptKotlin", "kapt")
