from __future__ import annotations

import json
from typing import Iterable, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from models.mentor import Mentor
from .base import BaseRepository


class MentorRepository(BaseRepository[Mentor]):
    """Repository for Mentor documents.

    push/pull mirror the array update primitives of a document store: they
    only touch ``students_teaching`` and never look at the student side.
    """

    model = Mentor

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    async def create(self, mentor: Mentor) -> Mentor:
        """Insert a new mentor (flushed so the id is assigned)."""
        await self.add(mentor)
        await self.session.flush()
        return mentor

    async def list_teaching(self, student_name: str) -> List[Mentor]:
        """Mentors whose students_teaching contains ``student_name``."""
        # The LIKE prefilter narrows candidates, teaches() makes the match exact.
        stmt = (
            select(Mentor)
            .where(Mentor.students_teaching_json.contains(json.dumps(student_name), autoescape=True))
            .order_by(Mentor.id)
        )
        result = await self.session.execute(stmt)
        return [m for m in result.scalars().all() if m.teaches(student_name)]

    async def pull(self, student_names: Iterable[str], exclude: Optional[str] = None) -> int:
        """Remove ``student_names`` from every mentor's list, except mentor ``exclude``.

        Returns the number of mentors modified.
        """
        names = set(student_names)
        if not names:
            return 0
        owners = {}
        for name in sorted(names):
            for mentor in await self.list_teaching(name):
                owners[mentor.id] = mentor

        modified = 0
        for mentor in owners.values():
            if exclude is not None and mentor.name == exclude:
                continue
            current = mentor.students_teaching or []
            remaining = [s for s in current if s not in names]
            mentor.set_students_teaching(remaining)
            self.session.add(mentor)
            modified += 1
        return modified

    async def push(self, mentor: Mentor, student_names: Iterable[str]) -> Mentor:
        """Append names to the mentor's list, skipping ones already present.

        A NULL list (after a mentor-side clear) is treated as empty.
        """
        current = list(mentor.students_teaching or [])
        for name in student_names:
            if name not in current:
                current.append(name)
        mentor.set_students_teaching(current)
        self.session.add(mentor)
        return mentor

    async def clear(self, mentor: Mentor) -> Mentor:
        """Set students_teaching to NULL."""
        mentor.set_students_teaching(None)
        self.session.add(mentor)
        return mentor
