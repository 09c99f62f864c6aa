"""Student: at most one current mentor plus the one held before it."""

from __future__ import annotations

import json
from typing import Any, Dict, Optional

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class Student(Base):
    """
    Student document.

    ``mentor`` and ``previous_mentor`` hold mentor names (natural keys), not ids.
    Caller-supplied fields beyond the relationship ones live in ``extra_json``.
    """

    __tablename__ = "students"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    mentor: Mapped[Optional[str]] = mapped_column(String(255), nullable=True, index=True)
    previous_mentor: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    extra_json: Mapped[str] = mapped_column(Text, nullable=False, default="{}")
    version: Mapped[int] = mapped_column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}

    @property
    def extra(self) -> Dict[str, Any]:
        try:
            parsed = json.loads(self.extra_json or "{}")
        except (json.JSONDecodeError, TypeError):
            return {}
        return parsed if isinstance(parsed, dict) else {}

    def to_document(self) -> Dict[str, Any]:
        """Serialized form returned by the API: passthrough fields plus relationship fields."""
        doc: Dict[str, Any] = {"id": self.id}
        doc.update(self.extra)
        doc["name"] = self.name
        doc["mentor"] = self.mentor
        doc["previous_mentor"] = self.previous_mentor
        return doc
