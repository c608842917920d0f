from __future__ import annotations

import asyncio

from resume_sections.detection.locator import SectionRecomputer
from resume_sections.overlay.presenter import SECTION_COLORS
from resume_sections.ui.app import NO_SECTIONS, parse_record_text, record_html, recompute_sections


def test_invalid_json_keeps_previous_record():
    previous = {"skills": ["Python"]}
    assert parse_record_text('{"skills": [', previous) is previous
    assert parse_record_text("", previous) is previous
    assert parse_record_text('{"summary": "Hi"}', previous) == {"summary": "Hi"}


def test_record_html_escapes_values():
    out = record_html({"skills": ["<b>C++</b>"]})
    assert "&lt;b&gt;C++&lt;/b&gt;" in out
    assert "<b>\"skills\"</b>" in out


def test_record_html_colors_known_keys_only():
    lines = record_html({"skills": ["Python"], "Skills": ["SQL"], "hobbies": ["Chess"]}).split("<br>")
    assert lines[0].startswith(f'<span style="color:{SECTION_COLORS["skills"]}">')
    # Lookup is exact; other keys stay uncolored
    assert lines[1].startswith("<span><b>")
    assert lines[2].startswith("<span><b>")


def test_recompute_needs_both_inputs():
    recomputer = SectionRecomputer()
    state, status, _, page = asyncio.run(recompute_sections(None, {"skills": ["Python"]}, recomputer))
    assert state == []
    assert page is None
    assert "Upload" in status
    assert recomputer.latest is None


def test_recompute_reports_decode_failure(tmp_path):
    pdf_path = tmp_path / "broken.pdf"
    pdf_path.write_bytes(b"not a pdf")
    state, status, _, page = asyncio.run(recompute_sections(str(pdf_path), {"skills": ["Python"]}, SectionRecomputer()))
    assert state == []
    assert status == NO_SECTIONS
    assert page is None


def test_recompute_uses_page_count_from_decoding(tmp_path, resume_pdf, resume_record):
    pdf_path = tmp_path / "resume.pdf"
    pdf_path.write_bytes(resume_pdf)
    state, status, slider, page = asyncio.run(recompute_sections(str(pdf_path), resume_record, SectionRecomputer()))
    assert [s["label"] for s in state] == ["Summary", "Skills", "Education"]
    assert "on 2 page(s)" in status
    assert slider["maximum"] == 2
    assert page["value"][0].shape[1] >= 600


def test_sessions_do_not_cancel_each_other(tmp_path, resume_pdf, resume_record):
    first = tmp_path / "a.pdf"
    second = tmp_path / "b.pdf"
    first.write_bytes(resume_pdf)
    second.write_bytes(resume_pdf)

    async def two_sessions():
        return await asyncio.gather(
            recompute_sections(str(first), resume_record, SectionRecomputer()),
            recompute_sections(str(second), {"education": {"school": "MIT"}}, SectionRecomputer()),
        )

    (state_a, *_), (state_b, *_) = asyncio.run(two_sessions())
    assert [s["label"] for s in state_a] == ["Summary", "Skills", "Education"]
    assert [s["label"] for s in state_b] == ["Education"]
