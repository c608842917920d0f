from __future__ import annotations

import logging
from contextlib import aclosing
from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Optional

from .boundaries import FALLBACK_HEIGHT, resolve_page
from .matcher import match_headings
from .section import Section
from ..ingestion.pdf_reader import PdfSource, iter_page_tokens_async, read_pdf
from ..errors import DocumentDecodeError
from ..ingestion.record import candidate_labels
from ..ingestion.structure import PageTokens
from ..text.cleaning import fold_text


@dataclass
class LocatorConfig:
    """Tunables for section location."""
    page_width: float = 600.0  # every page is rendered at this width
    fallback_height: float = FALLBACK_HEIGHT  # last section on a page
    fold_text: bool = False  # expand ligatures etc. before matching


def _sections_for_page(page: PageTokens, labels: List[str], config: LocatorConfig) -> List[Section]:
    fold = fold_text if config.fold_text else None
    detections = match_headings(page, labels, fold=fold)
    return resolve_page(detections, config.fallback_height)


def compute_sections(
    pages: Iterable[PageTokens],
    record: Optional[Mapping[str, Any]],
    config: Optional[LocatorConfig] = None,
) -> List[Section]:
    """Locate every record section on every page.

    Pure function of its inputs: call it again whenever the document or the
    record changes. Pages are processed independently and their sections are
    concatenated in page order.
    """
    config = config or LocatorConfig()
    labels = candidate_labels(record)
    if not labels:
        logging.info("Record has no non-empty keys; nothing to locate")
    sections: List[Section] = []
    for page in pages:
        sections.extend(_sections_for_page(page, labels, config))
    return sections


def locate_sections(
    source: PdfSource,
    record: Optional[Mapping[str, Any]],
    config: Optional[LocatorConfig] = None,
) -> List[Section]:
    config = config or LocatorConfig()
    pages = read_pdf(source, config.page_width)
    sections = compute_sections(pages, record, config)
    logging.info("Located %d sections across %d pages", len(sections), len(pages))
    return sections


async def locate_sections_async(
    source: PdfSource,
    record: Optional[Mapping[str, Any]],
    config: Optional[LocatorConfig] = None,
) -> List[Section]:
    config = config or LocatorConfig()
    labels = candidate_labels(record)
    sections: List[Section] = []
    async for page in iter_page_tokens_async(source, config.page_width):
        sections.extend(_sections_for_page(page, labels, config))
    return sections


class SectionRecomputer:
    """Recomputes sections on every input change; only the newest request wins.

    A request that is overtaken by a later one while its pages are still
    being decoded stops early and returns None, whether it was about to
    succeed or fail. Nothing partial is published, and a failed current
    request clears ``latest``.
    """

    def __init__(self, config: Optional[LocatorConfig] = None) -> None:
        self.config = config or LocatorConfig()
        self.latest: Optional[List[Section]] = None
        self.page_count = 0
        self._generation = 0

    def invalidate(self) -> None:
        self._generation += 1
        self.latest = None
        self.page_count = 0

    async def recompute(self, source: PdfSource, record: Optional[Mapping[str, Any]]) -> Optional[List[Section]]:
        self._generation += 1
        generation = self._generation
        labels = candidate_labels(record)
        sections: List[Section] = []
        page_count = 0
        try:
            async with aclosing(iter_page_tokens_async(source, self.config.page_width)) as pages:
                async for page in pages:
                    if generation != self._generation:
                        logging.info("Dropping stale recomputation at page %d", page.number)
                        return None
                    sections.extend(_sections_for_page(page, labels, self.config))
                    page_count = page.number
        except DocumentDecodeError:
            if generation != self._generation:
                logging.info("Dropping stale recomputation that failed to decode")
                return None
            self.latest = None
            self.page_count = 0
            raise
        if generation != self._generation:
            logging.info("Dropping stale recomputation")
            return None
        self.latest = sections
        self.page_count = page_count
        logging.info("Located %d sections", len(sections))
        return sections
