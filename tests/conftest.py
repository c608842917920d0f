from __future__ import annotations

from typing import List, Sequence, Tuple

import fitz  # pymupdf
import pytest


def build_pdf(pages: Sequence[Sequence[Tuple[str, float]]], width: float = 600, height: float = 800) -> bytes:
    """PDF bytes with one line of text per (text, baseline_y) pair; y is top-down."""
    doc = fitz.open()
    for lines in pages:
        page = doc.new_page(width=width, height=height)
        for text, y in lines:
            page.insert_text((72, y), text, fontsize=12)
    data = doc.tobytes()
    doc.close()
    return data


@pytest.fixture
def resume_pdf() -> bytes:
    return build_pdf([
        [("Summary", 80.0), ("Experienced engineer", 100.0), ("Skills", 300.0), ("Python, SQL", 320.0)],
        [("Education", 120.0), ("Languages", 500.0)],
    ])


@pytest.fixture
def resume_record() -> dict:
    return {
        "summary": "Experienced engineer",
        "skills": ["Python", "SQL"],
        "education": {"school": "MIT"},
        "languages": [],
        "years": 7,
    }
