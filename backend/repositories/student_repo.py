from __future__ import annotations

from typing import Iterable, List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from models.student import Student
from .base import BaseRepository


class StudentRepository(BaseRepository[Student]):
    """Repository for Student documents."""

    model = Student

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    async def create(self, student: Student) -> Student:
        """Insert a new student (flushed so the id is assigned)."""
        await self.add(student)
        await self.session.flush()
        return student

    async def list_by_names(self, names: Iterable[str]) -> List[Student]:
        """Students whose name is in ``names`` (missing names are simply absent)."""
        wanted = list(names)
        if not wanted:
            return []
        stmt = select(Student).where(Student.name.in_(wanted)).order_by(Student.id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_by_mentor(self, mentor_name: str) -> List[Student]:
        """Students whose current mentor is ``mentor_name``."""
        stmt = select(Student).where(Student.mentor == mentor_name).order_by(Student.id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def set_mentor(self, student: Student, mentor_name: str | None) -> Student:
        """Move the current mentor into previous_mentor and set the new one."""
        student.previous_mentor = student.mentor
        student.mentor = mentor_name
        self.session.add(student)
        return student
