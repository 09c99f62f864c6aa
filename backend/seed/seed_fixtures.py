"""
Seed dataset for DELETE /reset: Student.json and Mentor.json, both JSON arrays of documents.
The bundled fixtures satisfy the student/mentor invariant; no network calls.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Tuple

STUDENT_FIXTURE = "Student.json"
MENTOR_FIXTURE = "Mentor.json"


def _read_documents(path: Path) -> List[Dict[str, Any]]:
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, list):
        raise ValueError(f"{path.name} must contain a JSON array")
    for i, doc in enumerate(data):
        if not isinstance(doc, dict) or not isinstance(doc.get("name"), str):
            raise ValueError(f"{path.name}[{i}] must be an object with a string 'name'")
    return data


def load_seed_documents(seed_dir: str | Path) -> Tuple[List[Dict[str, Any]], List[Dict[str, Any]]]:
    """Return (student documents, mentor documents) from ``seed_dir``."""
    base = Path(seed_dir)
    students = _read_documents(base / STUDENT_FIXTURE)
    mentors = _read_documents(base / MENTOR_FIXTURE)
    return students, mentors
