"""Mentor: owns the ordered list of student names it teaches."""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class Mentor(Base):
    """
    Mentor document.

    students_teaching_json is a JSON array of student names, or NULL after a
    mentor-side clear. Always reassign it through ``set_students_teaching`` so
    the change is detected and the version bumped.
    """

    __tablename__ = "mentors"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    students_teaching_json: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    extra_json: Mapped[str] = mapped_column(Text, nullable=False, default="{}")
    version: Mapped[int] = mapped_column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}

    @property
    def students_teaching(self) -> Optional[List[str]]:
        if self.students_teaching_json is None:
            return None
        try:
            parsed = json.loads(self.students_teaching_json)
        except (json.JSONDecodeError, TypeError):
            return []
        return [str(s) for s in parsed] if isinstance(parsed, list) else []

    def set_students_teaching(self, names: Optional[List[str]]) -> None:
        self.students_teaching_json = None if names is None else json.dumps(list(names))

    def teaches(self, student_name: str) -> bool:
        return student_name in (self.students_teaching or [])

    @property
    def extra(self) -> Dict[str, Any]:
        try:
            parsed = json.loads(self.extra_json or "{}")
        except (json.JSONDecodeError, TypeError):
            return {}
        return parsed if isinstance(parsed, dict) else {}

    def to_document(self) -> Dict[str, Any]:
        doc: Dict[str, Any] = {"id": self.id}
        doc.update(self.extra)
        doc["name"] = self.name
        doc["students_teaching"] = self.students_teaching
        return doc
