from __future__ import annotations

import asyncio
import logging
import threading
from pathlib import Path
from typing import AsyncIterator, List, Union

import fitz  # pymupdf
import numpy as np

from .structure import PageTokens, PositionedToken
from ..detection.coordinates import scale_for_width
from ..errors import DocumentDecodeError


PdfSource = Union[str, Path, bytes]

# MuPDF is not thread-safe; worker threads take turns
_FITZ_LOCK = threading.Lock()


def open_document(source: PdfSource) -> fitz.Document:
    try:
        if isinstance(source, (bytes, bytearray)):
            doc = fitz.open(stream=bytes(source), filetype="pdf")
        else:
            doc = fitz.open(Path(source))
    except (RuntimeError, OSError, ValueError) as e:
        raise DocumentDecodeError(f"Could not open PDF: {e}") from e
    if doc.needs_pass:
        doc.close()
        raise DocumentDecodeError("PDF is encrypted and needs a password")
    return doc


def get_page_count(document: fitz.Document) -> int:
    return document.page_count


def _extract_tokens_from_page(page: fitz.Page, page_number: int) -> List[PositionedToken]:
    # MuPDF reports baselines with a top-left origin; flip them back to PDF space
    page_height = page.rect.height
    tokens: List[PositionedToken] = []
    for block in page.get_text("dict").get("blocks", []):
        for line in block.get("lines", []):
            for span in line.get("spans", []):
                text = span.get("text", "")
                if not text.strip():
                    continue
                size = float(span.get("size", 0.0))
                origin = span.get("origin")
                transform = None
                if origin is not None:
                    transform = (size, 0.0, 0.0, size, float(origin[0]), page_height - float(origin[1]))
                tokens.append(PositionedToken(text=text, transform=transform, height=size, page=page_number))
    return tokens


def get_page_tokens(document: fitz.Document, page_number: int, target_width: float) -> PageTokens:
    """Positioned tokens of one page (1-indexed) plus its viewport at ``target_width``."""
    try:
        page = document.load_page(page_number - 1)
        native_width, native_height = page.rect.width, page.rect.height
        tokens = _extract_tokens_from_page(page, page_number)
    except (RuntimeError, ValueError) as e:
        raise DocumentDecodeError(f"Could not read page {page_number}: {e}") from e
    scale = scale_for_width(native_width, target_width)
    logging.debug("Page %d: %d tokens, scale %.4f", page_number, len(tokens), scale)
    return PageTokens(
        number=page_number,
        scale=scale,
        native_width=native_width,
        native_height=native_height,
        tokens=tokens,
    )


def read_pdf(source: PdfSource, target_width: float) -> List[PageTokens]:
    doc = open_document(source)
    try:
        return [get_page_tokens(doc, i, target_width) for i in range(1, get_page_count(doc) + 1)]
    finally:
        doc.close()


def _locked(fn, *args):
    with _FITZ_LOCK:
        return fn(*args)


async def iter_page_tokens_async(source: PdfSource, target_width: float) -> AsyncIterator[PageTokens]:
    # Pages are requested one at a time and in order; no fan-out
    doc = await asyncio.to_thread(_locked, open_document, source)
    try:
        for i in range(1, get_page_count(doc) + 1):
            yield await asyncio.to_thread(_locked, get_page_tokens, doc, i, target_width)
    finally:
        await asyncio.to_thread(_locked, doc.close)


def render_page(document: fitz.Document, page_number: int, target_width: float) -> np.ndarray:
    """Rasterize a page at the same scale the tokens were mapped with (H x W x 3, uint8)."""
    try:
        page = document.load_page(page_number - 1)
        scale = scale_for_width(page.rect.width, target_width)
        pix = page.get_pixmap(matrix=fitz.Matrix(scale, scale), alpha=False, colorspace=fitz.csRGB)
    except (RuntimeError, ValueError) as e:
        raise DocumentDecodeError(f"Could not render page {page_number}: {e}") from e
    image = np.frombuffer(pix.samples, dtype=np.uint8).reshape(pix.height, pix.width, pix.n)
    return image.copy()


def render_pdf_page(source: PdfSource, page_number: int, target_width: float) -> np.ndarray:
    """Open, rasterize one page and close, holding the MuPDF lock; safe from worker threads."""
    with _FITZ_LOCK:
        doc = open_document(source)
        try:
            return render_page(doc, page_number, target_width)
        finally:
            doc.close()
