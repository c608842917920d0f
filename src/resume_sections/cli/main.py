from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import fitz  # pymupdf
from tqdm import tqdm

from ..detection.boundaries import FALLBACK_HEIGHT, filter_by_page
from ..detection.locator import LocatorConfig, compute_sections
from ..errors import DocumentDecodeError, RecordParseError
from ..ingestion.pdf_reader import get_page_count, open_document, read_pdf, render_page
from ..ingestion.record import load_record
from ..overlay.presenter import PresenterConfig, draw_overlay
from ..utils.io import derive_output_target, ensure_dirs, write_sections_json
from ..utils.logging import configure_logging
from ..utils.timers import time_block


def _save_png(path: Path, image) -> None:
    height, width = image.shape[:2]
    pix = fitz.Pixmap(fitz.csRGB, width, height, image[:, :, :3].tobytes(), False)
    pix.save(path)


def run(pdf_path: Path, record_path: Path, out_dir: Path | None, config: LocatorConfig, render: bool, verbose: bool) -> Path:
    ensure_dirs()
    configure_logging(verbose=verbose)

    logging.info("Reading record: %s", record_path)
    record = load_record(record_path)

    logging.info("Reading PDF: %s", pdf_path)
    with time_block("Section location"):
        pages = read_pdf(pdf_path, config.page_width)
        sections = compute_sections(pages, record, config)
    logging.info("Located %d sections across %d pages", len(sections), len(pages))
    for s in sections:
        logging.debug("page %d: %s y=%.1f height=%.1f", s.page, s.label, s.y, s.height)

    target = derive_output_target(pdf_path, out_dir)
    write_sections_json(target.json_path, sections)
    logging.info("Wrote sections: %s", target.json_path)

    if render:
        presenter = PresenterConfig()
        doc = open_document(pdf_path)
        try:
            for page_number in tqdm(range(1, get_page_count(doc) + 1), desc="Rendering", unit="page"):
                image = render_page(doc, page_number, config.page_width)
                overlay = draw_overlay(image, filter_by_page(sections, page_number), presenter)
                _save_png(target.page_image_path(page_number), overlay)
        finally:
            doc.close()
        logging.info("Wrote page overlays to %s", target.directory)

    return target.json_path


def main() -> None:
    parser = argparse.ArgumentParser(description="Locate resume sections in a PDF")
    parser.add_argument("input_pdf", type=Path)
    parser.add_argument("record", type=Path, help="Resume record as a JSON object")
    parser.add_argument("--out-dir", type=Path, default=None)
    parser.add_argument("--page-width", type=float, default=600.0, help="Display width every page is scaled to")
    parser.add_argument("--fallback-height", type=float, default=FALLBACK_HEIGHT, help="Height of the last section on a page")
    parser.add_argument("--fold-text", action="store_true", help="Expand ligatures and letter-spacing before matching")
    parser.add_argument("--render", action="store_true", help="Also write one PNG per page with sections highlighted")
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()

    config = LocatorConfig(
        page_width=args.page_width,
        fallback_height=args.fallback_height,
        fold_text=args.fold_text,
    )
    try:
        json_path = run(
            pdf_path=args.input_pdf,
            record_path=args.record,
            out_dir=args.out_dir,
            config=config,
            render=args.render,
            verbose=args.verbose,
        )
    except RecordParseError as e:
        logging.error("Invalid record %s: %s", args.record, e)
        sys.exit(2)
    except DocumentDecodeError as e:
        logging.error("No sections available: %s", e)
        sys.exit(1)
    print(str(json_path))


if __name__ == "__main__":
    main()
