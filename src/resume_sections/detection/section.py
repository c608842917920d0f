from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict


@dataclass
class Section:
    """A located heading region on one page, in page pixels.

    Straight out of the matcher ``height`` is only the heading's own text
    height; the boundary resolver replaces it with the distance to the next
    heading on the same page.
    """
    label: str
    x: float
    y: float
    width: float
    height: float
    page: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
