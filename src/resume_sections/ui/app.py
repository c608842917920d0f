from __future__ import annotations

import asyncio
import html
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import gradio as gr

from ..detection.boundaries import filter_by_page
from ..detection.locator import LocatorConfig, SectionRecomputer
from ..detection.matcher import display_label
from ..detection.section import Section
from ..errors import DocumentDecodeError, RecordParseError
from ..ingestion.pdf_reader import render_pdf_page
from ..ingestion.record import parse_record
from ..overlay.presenter import SECTION_COLORS, color_map, page_annotations, record_entries


CONFIG = LocatorConfig()

NO_SECTIONS = "❌ No sections available. Please upload the PDF again."


def parse_record_text(text: str, current: Optional[Dict[str, Any]]):
    """Keep the last valid record while the user is still typing."""
    if not text or not text.strip():
        return current
    try:
        return parse_record(text)
    except RecordParseError as e:
        logging.info("Invalid JSON: %s", e)
        return current


def record_html(record: Optional[Dict[str, Any]]) -> str:
    if not record:
        return "<i>No record loaded</i>"
    lines = []
    for key, shown in record_entries(record):
        # Only the known section keys are colored, matched exactly
        color = SECTION_COLORS.get(key)
        style = f' style="color:{color}"' if color else ""
        lines.append(f'<span{style}><b>"{html.escape(key)}"</b></span>: <pre style="display:inline">{html.escape(shown)}</pre>,')
    return "<br>".join(lines)


def _sections_from_state(state: List[Dict[str, Any]]) -> List[Section]:
    return [Section(**s) for s in state or []]


def show_page(pdf_path: Optional[str], sections_state: List[Dict[str, Any]], page_number: int):
    if not pdf_path:
        return None
    sections = _sections_from_state(sections_state)
    page_number = int(page_number or 1)
    try:
        image = render_pdf_page(Path(pdf_path), page_number, CONFIG.page_width)
    except DocumentDecodeError as e:
        logging.warning("Could not render page %d: %s", page_number, e)
        return None
    return gr.update(
        value=(image, page_annotations(sections, page_number)),
        color_map=color_map(filter_by_page(sections, page_number)),
    )


async def recompute_sections(
    pdf_path: Optional[str],
    record: Optional[Dict[str, Any]],
    recomputer: SectionRecomputer,
):
    """Returns (sections_state, status, page_selector, annotated_page).

    ``recomputer`` belongs to the browser session, so only that session's own
    newer uploads or record edits can supersede a run.
    """
    if not pdf_path or not record:
        recomputer.invalidate()
        return [], "⚠️ Upload a PDF and paste a resume JSON", gr.update(maximum=1, value=1), None
    try:
        sections = await recomputer.recompute(Path(pdf_path), record)
    except DocumentDecodeError as e:
        logging.error("Recomputation failed: %s", e)
        return [], NO_SECTIONS, gr.update(maximum=1, value=1), None
    if sections is None:
        # A newer upload or record took over; its own event fills the outputs
        return gr.update(), gr.update(), gr.update(), gr.update()
    num_pages = recomputer.page_count
    state = [s.to_dict() for s in sections]
    labels = sorted({s.label for s in sections})
    status = f"✅ Found {len(sections)} sections on {num_pages} page(s): {', '.join(labels) or 'none'}"
    first_page = await asyncio.to_thread(show_page, pdf_path, state, 1)
    return state, status, gr.update(maximum=max(1, num_pages), value=1), first_page


def build_ui():
    with gr.Blocks(title="Resume Section Locator", theme=gr.themes.Soft()) as demo:
        record_state = gr.State(value=None)
        sections_state = gr.State(value=[])
        # Deep-copied per browser session
        recomputer_state = gr.State(value=SectionRecomputer(CONFIG))

        gr.Markdown("""
        # 📄 Resume Section Locator
        Upload a resume PDF and paste its JSON record. Every non-empty key of the record
        is looked up on the pages and highlighted from its heading down to the next one.
        """)

        with gr.Row():
            with gr.Column(scale=1):
                gr.Markdown("### 📤 Upload PDF and JSON")
                pdf_file = gr.File(label="Resume PDF", file_types=[".pdf"], type="filepath")
                record_text = gr.Textbox(
                    label="Resume JSON",
                    placeholder="Paste resume JSON here",
                    lines=10,
                    max_lines=30,
                )
                submit_btn = gr.Button("🔍 Locate Sections", variant="primary")
                status = gr.Textbox(label="Status", interactive=False)
                gr.Markdown("### 🗂️ Record")
                record_view = gr.HTML(value=record_html(None))

            with gr.Column(scale=1):
                gr.Markdown("### 📖 Page")
                page_select = gr.Slider(minimum=1, maximum=1, step=1, value=1, label="Page")
                page_view = gr.AnnotatedImage(
                    label="Detected sections",
                    color_map={display_label(k): v for k, v in SECTION_COLORS.items()},
                )

        record_text.change(
            fn=parse_record_text,
            inputs=[record_text, record_state],
            outputs=[record_state],
        )
        record_state.change(
            fn=record_html,
            inputs=[record_state],
            outputs=[record_view],
        )

        inputs = [pdf_file, record_state, recomputer_state]
        outputs = [sections_state, status, page_select, page_view]
        submit_btn.click(fn=recompute_sections, inputs=inputs, outputs=outputs)
        pdf_file.change(fn=recompute_sections, inputs=inputs, outputs=outputs)
        record_state.change(fn=recompute_sections, inputs=inputs, outputs=outputs)

        page_select.change(
            fn=show_page,
            inputs=[pdf_file, sections_state, page_select],
            outputs=[page_view],
        )

    return demo
