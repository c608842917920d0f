from __future__ import annotations

import pytest

from resume_sections.errors import RecordParseError
from resume_sections.ingestion.record import candidate_labels, is_present, load_record, parse_record


def test_empty_values_are_excluded():
    assert candidate_labels({"summary": "", "skills": ["Python"]}) == ["skills"]


def test_value_kinds():
    record = {
        "Name": "Jane Doe",
        "Blank": "   ",
        "Skills": ["Python", "SQL"],
        "Projects": [],
        "Education": {"school": "MIT"},
        "Awards": {},
        "Age": 31,
        "Remote": True,
        "Phone": None,
    }
    # Keys are lower-cased and keep their order
    assert candidate_labels(record) == ["name", "skills", "education", "awards"]


def test_is_present_rejects_scalars():
    assert not is_present(0)
    assert not is_present(1.5)
    assert not is_present(False)
    assert not is_present(None)
    assert is_present("x")


def test_extraction_is_idempotent():
    record = {"Experience": [{"title": "Engineer"}], "summary": "Hi"}
    assert candidate_labels(record) == candidate_labels(record)


def test_no_record_yields_no_candidates():
    assert candidate_labels(None) == []
    assert candidate_labels({}) == []


def test_keys_differing_only_in_case_collapse():
    assert candidate_labels({"Skills": ["a"], "skills": ["b"]}) == ["skills"]


def test_parse_record_rejects_invalid_json():
    with pytest.raises(RecordParseError):
        parse_record('{"skills": [')


def test_parse_record_rejects_non_objects():
    with pytest.raises(RecordParseError):
        parse_record('["skills"]')


def test_load_record(tmp_path):
    path = tmp_path / "resume.json"
    path.write_text('{"skills": ["Python"], "summary": ""}', encoding="utf-8")
    assert candidate_labels(load_record(path)) == ["skills"]
