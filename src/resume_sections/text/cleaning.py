from __future__ import annotations

import re
import unicodedata

# Precompile regex patterns for performance
ZERO_WIDTH_RE = re.compile("[\u200B\u200C\u200D\u2060\uFEFF\u00AD]")
MULTI_SPACE_RE = re.compile(r"\s+")
LETTER_SPACED_WORD_RE = re.compile(r"\b(?:[A-Za-z]\s){2,}[A-Za-z]\b")
LIGATURES = {
    "ﬀ": "ff", "ﬁ": "fi", "ﬂ": "fl", "ﬃ": "ffi", "ﬄ": "ffl", "ﬅ": "ft", "ﬆ": "st",
}


def fold_text(raw: str) -> str:
    """Undo common PDF text-run artifacts before label matching.

    Handles compatibility forms, ligatures ("Certiﬁcations"), zero-width and
    soft-hyphen characters and letter-spaced headings ("S K I L L S").
    """
    text = unicodedata.normalize("NFKC", raw)
    text = ZERO_WIDTH_RE.sub("", text)
    for k, v in LIGATURES.items():
        text = text.replace(k, v)
    # Collapse letter-spaced headings like 'S k i l l s' -> 'Skills'
    def _collapse_letter_spaced(m: re.Match) -> str:
        return m.group(0).replace(" ", "")
    text = LETTER_SPACED_WORD_RE.sub(_collapse_letter_spaced, text)
    text = MULTI_SPACE_RE.sub(" ", text)
    return text.strip()
