from typing import AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from repositories.mentor_repo import MentorRepository
from repositories.student_repo import StudentRepository
from services.assignment_service import AssignmentService
from .database import get_database_manager


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency yielding an AsyncSession from the DatabaseManager."""
    manager = get_database_manager()
    async with manager.session() as session:
        yield session


def get_assignment_service(
    session: AsyncSession = Depends(get_db_session),
) -> AssignmentService:
    """AssignmentService bound to the request's session (one transaction per request)."""
    return AssignmentService(StudentRepository(session), MentorRepository(session))
