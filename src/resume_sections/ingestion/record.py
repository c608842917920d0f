from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from ..errors import RecordParseError


def parse_record(text: str) -> Dict[str, Any]:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise RecordParseError(f"Invalid JSON: {e.msg} (line {e.lineno}, column {e.colno})") from e
    if not isinstance(data, dict):
        raise RecordParseError(f"Expected a JSON object, got {type(data).__name__}")
    return data


def load_record(path: Path) -> Dict[str, Any]:
    return parse_record(Path(path).read_text(encoding="utf-8"))


def is_present(value: Any) -> bool:
    """Whether a record value is worth looking for on the page.

    Non-empty lists and non-blank strings count, as does any mapping or other
    object value (even an empty one). Numbers, booleans and None never do.
    """
    if isinstance(value, (list, tuple)):
        return len(value) > 0
    if isinstance(value, str):
        return len(value.strip()) > 0
    if value is None or isinstance(value, (bool, int, float)):
        return False
    return True


def candidate_labels(record: Optional[Mapping[str, Any]]) -> List[str]:
    """Lower-cased keys of ``record`` whose values are present, in key order."""
    if not record:
        return []
    labels: List[str] = []
    for key, value in record.items():
        if not is_present(value):
            continue
        label = str(key).lower()
        if label in labels:
            logging.debug("Skipping key %r: same label as an earlier key", key)
            continue
        labels.append(label)
    return labels
