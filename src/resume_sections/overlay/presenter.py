from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Tuple

import numpy as np

from ..detection.boundaries import filter_by_page
from ..detection.section import Section


SECTION_COLORS: Dict[str, str] = {
    "skills": "#22c55e",
    "education": "#3b82f6",
    "experience": "#eab308",
    "certifications": "#a855f7",
    "summary": "#f97316",
    "languages": "#ec4899",
    "default": "#6b7280",
}


@dataclass
class PresenterConfig:
    fill_alpha: float = 0.2
    border_px: int = 2


def color_for(label: str) -> str:
    return SECTION_COLORS.get(label.lower(), SECTION_COLORS["default"])


def color_map(sections: Iterable[Section]) -> Dict[str, str]:
    return {s.label: color_for(s.label) for s in sections}


def _hex_to_rgb(color: str) -> Tuple[int, int, int]:
    color = color.lstrip("#")
    return int(color[0:2], 16), int(color[2:4], 16), int(color[4:6], 16)


def _pixel_box(section: Section, width: int, height: int) -> Tuple[int, int, int, int] | None:
    x0 = max(0, int(round(section.x)))
    y0 = max(0, int(round(section.y)))
    x1 = min(width, int(round(section.x + section.width)))
    y1 = min(height, int(round(section.y + section.height)))
    if x1 <= x0 or y1 <= y0:
        return None
    return x0, y0, x1, y1


def page_annotations(sections: Iterable[Section], page_number: int) -> List[Tuple[Tuple[int, int, int, int], str]]:
    """Boxes for one page in the ``(x0, y0, x1, y1), label`` form AnnotatedImage expects."""
    out = []
    for s in filter_by_page(sections, page_number):
        box = (int(round(s.x)), int(round(s.y)), int(round(s.x + s.width)), int(round(s.y + s.height)))
        out.append((box, s.label))
    return out


def draw_overlay(image: np.ndarray, sections: Iterable[Section], config: PresenterConfig | None = None) -> np.ndarray:
    """Tint and outline each section on a copy of a rendered page.

    Boxes are clipped to the image; sections with no visible area (e.g. zero
    height) are left out.
    """
    config = config or PresenterConfig()
    out = image.astype(np.float32)
    height, width = out.shape[:2]
    for s in sections:
        box = _pixel_box(s, width, height)
        if box is None:
            logging.debug("Section %s at y=%.1f has no visible area", s.label, s.y)
            continue
        x0, y0, x1, y1 = box
        rgb = np.array(_hex_to_rgb(color_for(s.label)), dtype=np.float32)
        region = out[y0:y1, x0:x1, :3]
        region[...] = region * (1.0 - config.fill_alpha) + rgb * config.fill_alpha
        b = config.border_px
        out[y0:min(y0 + b, y1), x0:x1, :3] = rgb
        out[max(y1 - b, y0):y1, x0:x1, :3] = rgb
        out[y0:y1, x0:min(x0 + b, x1), :3] = rgb
        out[y0:y1, max(x1 - b, x0):x1, :3] = rgb
    return np.clip(out, 0, 255).astype(np.uint8)


def record_entries(record: Mapping[str, Any]) -> List[Tuple[str, str]]:
    """Key/value strings for the record pane, one entry per key."""
    entries = []
    for key, value in record.items():
        if isinstance(value, str):
            shown = f'"{value}"'
        elif isinstance(value, (list, dict)):
            shown = json.dumps(value, indent=2, ensure_ascii=False)
        elif value is None or isinstance(value, (bool, int, float)):
            shown = json.dumps(value)
        else:
            shown = str(value)
        entries.append((str(key), shown))
    return entries
