from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..ingestion.structure import PageTokens, PositionedToken


@dataclass(frozen=True)
class MappedBox:
    """Token box in page pixels: origin top-left, y grows downward."""
    x: float
    y: float
    width: float
    height: float


def scale_for_width(native_width: float, target_width: float) -> float:
    # Every page is normalized to the same rendered width
    return target_width / native_width


def map_token(token: PositionedToken, viewport: PageTokens) -> MappedBox:
    """Convert a token from PDF space (bottom-left origin) to page pixels.

    The box spans the whole rendered page width; only its top edge and the
    token height come from the token itself.
    """
    scale = viewport.scale
    return MappedBox(
        x=token.x * scale,
        y=(viewport.native_height - token.y) * scale,
        width=viewport.width,
        height=token.height * scale,
    )
