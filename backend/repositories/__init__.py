"""Repository layer for DB access only (CRUD + simple queries).

Repositories are pure DB access - no business logic and no commits. They are
constructed with an AsyncSession and injected into the services.
"""

from .base import BaseRepository
from .mentor_repo import MentorRepository
from .student_repo import StudentRepository

__all__ = [
    "BaseRepository",
    "MentorRepository",
    "StudentRepository",
]
