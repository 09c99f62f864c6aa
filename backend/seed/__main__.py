"""CLI entry: wipe and reseed both collections. Usage: python -m seed (from backend dir)."""
from __future__ import annotations

import asyncio
import sys

from core.config import get_settings
from core.database import dispose_database, get_database_manager, init_database
from core.logging import setup_logging
from repositories.mentor_repo import MentorRepository
from repositories.student_repo import StudentRepository
from services.assignment_service import AssignmentService


async def run_reset() -> int:
    settings = get_settings()
    setup_logging(settings)
    await init_database(settings.database_url)
    manager = get_database_manager()
    await manager.create_schema()
    async with manager.session() as session:
        service = AssignmentService(StudentRepository(session), MentorRepository(session))
        result = await service.reset_all(settings.seed_dir)
    await dispose_database()
    print("Seed complete:", result["message"])
    return 0


def main() -> None:
    exit_code = asyncio.run(run_reset())
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
