"""Write rendered units under the generated-sources root."""
from __future__ import annotations

from pathlib import Path

from navgen.model import GenerationUnit
from navgen.render import render_unit


class KotlinFileWriter:
    """Writes each unit to `<output_dir>/<package path>/<FileName>.kt`."""

    def __init__(self, output_dir: Path | str) -> None:
        self.output_dir = Path(output_dir)
        self.written_paths: list[Path] = []

    def write(self, unit: GenerationUnit) -> Path:
        output_path = self.output_dir / unit.relative_path
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(render_unit(unit), encoding="utf-8")
        self.written_paths.append(output_path)
        return output_path
