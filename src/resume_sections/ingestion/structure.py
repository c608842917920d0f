from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Optional, Tuple


Transform = Tuple[float, float, float, float, float, float]


@dataclass
class PositionedToken:
    """One run of text on a page, in native PDF space (origin bottom-left)."""
    text: str
    transform: Optional[Transform]  # (a, b, c, d, e, f); e/f is the origin
    height: float
    page: int

    @property
    def has_position(self) -> bool:
        if self.transform is None or len(self.transform) < 6:
            return False
        values = (self.transform[4], self.transform[5], self.height)
        return all(isinstance(v, (int, float)) and math.isfinite(v) for v in values)

    @property
    def x(self) -> float:
        return float(self.transform[4])

    @property
    def y(self) -> float:
        return float(self.transform[5])


@dataclass
class PageTokens:
    number: int
    scale: float
    native_width: float
    native_height: float
    tokens: List[PositionedToken] = field(default_factory=list)

    @property
    def width(self) -> float:
        return self.native_width * self.scale

    @property
    def height(self) -> float:
        return self.native_height * self.scale
