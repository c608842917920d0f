from __future__ import annotations

import dataclasses
from typing import Dict, Iterable, List

from .section import Section


FALLBACK_HEIGHT = 150.0


def resolve_page(detections: Iterable[Section], fallback_height: float = FALLBACK_HEIGHT) -> List[Section]:
    """Order one page's detections top to bottom and size each one.

    A section reaches down to the next heading on the page; the last one gets
    ``fallback_height``. Headings sharing a y produce a zero-height section.
    """
    ordered = sorted(detections, key=lambda d: d.y)
    sections: List[Section] = []
    for i, current in enumerate(ordered):
        if i + 1 < len(ordered):
            height = ordered[i + 1].y - current.y
        else:
            height = fallback_height
        sections.append(dataclasses.replace(current, height=height))
    return sections


def resolve_sections(detections: Iterable[Section], fallback_height: float = FALLBACK_HEIGHT) -> List[Section]:
    by_page: Dict[int, List[Section]] = {}
    for d in detections:
        by_page.setdefault(d.page, []).append(d)
    sections: List[Section] = []
    for page_number in sorted(by_page):
        sections.extend(resolve_page(by_page[page_number], fallback_height))
    return sections


def filter_by_page(sections: Iterable[Section], page_number: int) -> List[Section]:
    return [s for s in sections if s.page == page_number]
