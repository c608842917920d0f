from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from ..detection.section import Section


OUTPUT_DIR = Path("output") / "sections"


def ensure_dirs() -> None:
    OUTPUT_DIR.mkdir(parents=True, exist_ok=True)


@dataclass
class OutputTarget:
    directory: Path
    base_name: str

    @property
    def json_path(self) -> Path:
        return self.directory / f"{self.base_name}.sections.json"

    def page_image_path(self, page_number: int) -> Path:
        return self.directory / f"{self.base_name}.page{page_number:02d}.png"


def derive_output_target(input_pdf: Path, out_dir: Path | None = None) -> OutputTarget:
    directory = out_dir if out_dir is not None else OUTPUT_DIR
    directory.mkdir(parents=True, exist_ok=True)
    base_name = input_pdf.stem
    return OutputTarget(directory=directory, base_name=base_name)


def write_sections_json(path: Path, sections: Iterable[Section]) -> None:
    payload = {"sections": [s.to_dict() for s in sections]}
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2)
        f.write("\n")
