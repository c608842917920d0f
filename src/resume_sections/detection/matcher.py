from __future__ import annotations

import logging
from typing import Callable, List, Optional, Sequence

from .coordinates import map_token
from .section import Section
from ..ingestion.structure import PageTokens


def display_label(candidate: str) -> str:
    return candidate[:1].upper() + candidate[1:]


def find_label(text: str, labels: Sequence[str]) -> Optional[str]:
    # Plain containment; the first label in order wins
    low = text.lower()
    for label in labels:
        if label in low:
            return label
    return None


def match_headings(
    page: PageTokens,
    labels: Sequence[str],
    fold: Optional[Callable[[str], str]] = None,
) -> List[Section]:
    """Raw (unsorted, unsized) detections for every token naming a label.

    A token only has to contain a label somewhere, so body text such as
    "Programming Languages" can show up as a heading too.
    """
    detections: List[Section] = []
    if not labels:
        return detections
    for token in page.tokens:
        text = fold(token.text) if fold is not None else token.text
        label = find_label(text, labels)
        if label is None:
            continue
        if not token.has_position:
            logging.debug("Page %d: skipping token %r without a usable position", page.number, token.text)
            continue
        box = map_token(token, page)
        detections.append(Section(
            label=display_label(label),
            x=box.x,
            y=box.y,
            width=box.width,
            height=box.height,
            page=page.number,
        ))
    return detections
