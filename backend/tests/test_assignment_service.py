"""AssignmentService: both sides of the student/mentor relationship stay consistent."""

from __future__ import annotations

from typing import Dict, List, Optional

import pytest
import pytest_asyncio

from core.database import DatabaseManager, dispose_database, get_database_manager, init_database
from repositories.mentor_repo import MentorRepository
from repositories.student_repo import StudentRepository
from services.assignee import ManyAssignees, NoAssignee, SingleAssignee
from services.assignment_service import AssignmentService
from services.errors import (
    ConcurrentModificationError,
    DuplicateEntityError,
    EntityNotFoundError,
    InvalidAssigneeError,
    InvalidRoleError,
)


def _service(session) -> AssignmentService:
    return AssignmentService(StudentRepository(session), MentorRepository(session))


async def _seed(manager: DatabaseManager) -> None:
    """Mentors Alice [Bob], Carol [], Evan [Frank]; student Grace without a mentor."""
    async with manager.session() as session:
        service = _service(session)
        for mentor in ("Alice", "Carol", "Evan"):
            await service.create_mentor({"name": mentor})
        await service.create_student({"name": "Bob", "mentor": "Alice"})
        await service.create_student({"name": "Frank", "mentor": "Evan"})
        await service.create_student({"name": "Grace"})


async def _state(manager: DatabaseManager):
    """(mentor name -> students_teaching, student name -> student document)."""
    async with manager.session() as session:
        service = _service(session)
        mentors = {m["name"]: m["students_teaching"] for m in await service.list_mentors()}
        students = {s["name"]: s for s in await service.list_students()}
    return mentors, students


def _assert_consistent(mentors: Dict[str, Optional[List[str]]], students: Dict[str, dict]) -> None:
    for name, student in students.items():
        owners = [m for m, names in mentors.items() if name in (names or [])]
        if student["mentor"] is None:
            assert owners == [], f"{name} has no mentor but is listed under {owners}"
        else:
            assert owners == [student["mentor"]], f"{name}: mentor={student['mentor']} listed under {owners}"


@pytest.mark.asyncio
async def test_student_reassignment_scenario(test_db):
    """Bob moves from Alice to Carol; previous_mentor records Alice."""
    async with test_db.session() as session:
        service = _service(session)
        await service.create_mentor({"name": "Alice"})
        await service.create_mentor({"name": "Carol"})
        await service.create_student({"name": "Bob", "mentor": "Alice"})

    async with test_db.session() as session:
        result = await _service(session).assign("student", "Bob", SingleAssignee("Carol"))
    assert result == {"action": "Success", "message": "Mentor assigned/reassigned to Student"}

    mentors, students = await _state(test_db)
    assert mentors["Alice"] == []
    assert mentors["Carol"] == ["Bob"]
    assert students["Bob"]["mentor"] == "Carol"
    assert students["Bob"]["previous_mentor"] == "Alice"


@pytest.mark.asyncio
async def test_role_is_case_insensitive(test_db):
    await _seed(test_db)
    async with test_db.session() as session:
        await _service(session).assign("STUDENT", "Grace", SingleAssignee("Carol"))
    mentors, students = await _state(test_db)
    assert mentors["Carol"] == ["Grace"]
    assert students["Grace"]["mentor"] == "Carol"


@pytest.mark.asyncio
async def test_student_null_assignee_clears_everywhere(test_db):
    """A stale entry under another mentor is removed too."""
    await _seed(test_db)
    async with test_db.session() as session:
        mentors = MentorRepository(session)
        carol = await mentors.get_by_name("Carol")
        await mentors.push(carol, ["Bob"])

    async with test_db.session() as session:
        result = await _service(session).assign("student", "Bob", NoAssignee())
    assert result["message"] == "No Mentor Assigned / Mentor Removed for a Student"

    mentors, students = await _state(test_db)
    assert all("Bob" not in (names or []) for names in mentors.values())
    assert students["Bob"]["mentor"] is None
    assert students["Bob"]["previous_mentor"] == "Alice"
    _assert_consistent(mentors, students)


@pytest.mark.asyncio
async def test_student_list_assignee_rejected_without_mutation(test_db):
    await _seed(test_db)
    before = await _state(test_db)

    async with test_db.session() as session:
        with pytest.raises(InvalidAssigneeError) as exc:
            await _service(session).assign("student", "Bob", ManyAssignees(("Carol",)))
    assert "role = 'student'" in exc.value.message

    assert await _state(test_db) == before


@pytest.mark.asyncio
async def test_unknown_role_rejected(test_db):
    await _seed(test_db)
    before = await _state(test_db)
    async with test_db.session() as session:
        with pytest.raises(InvalidRoleError) as exc:
            await _service(session).assign("teacher", "Bob", NoAssignee())
    assert exc.value.message == "Incorrect ROLE Specified"
    assert await _state(test_db) == before


@pytest.mark.asyncio
async def test_mentor_null_assignee_releases_all_students(test_db):
    await _seed(test_db)
    async with test_db.session() as session:
        await _service(session).assign("mentor", "Alice", ManyAssignees(("Grace",)))

    async with test_db.session() as session:
        result = await _service(session).assign("mentor", "Alice", NoAssignee())
    assert result["message"] == "No Students / All Students removed for the Mentor"

    mentors, students = await _state(test_db)
    assert mentors["Alice"] is None
    for name in ("Bob", "Grace"):
        assert students[name]["mentor"] is None
        assert students[name]["previous_mentor"] == "Alice"
    assert students["Frank"]["mentor"] == "Evan"
    _assert_consistent(mentors, students)


@pytest.mark.asyncio
async def test_push_after_mentor_clear(test_db):
    """A cleared (null) students_teaching list accepts new students."""
    await _seed(test_db)
    async with test_db.session() as session:
        await _service(session).assign("mentor", "Alice", NoAssignee())
    async with test_db.session() as session:
        await _service(session).assign("student", "Grace", SingleAssignee("Alice"))

    mentors, students = await _state(test_db)
    assert mentors["Alice"] == ["Grace"]
    _assert_consistent(mentors, students)


@pytest.mark.asyncio
async def test_bulk_transfer_to_mentor(test_db):
    await _seed(test_db)
    async with test_db.session() as session:
        result = await _service(session).assign("mentor", "Carol", ManyAssignees(("Bob", "Frank", "Grace")))
    assert result["message"] == "Many Students are assigned to a Mentor"

    mentors, students = await _state(test_db)
    assert mentors["Carol"] == ["Bob", "Frank", "Grace"]
    assert mentors["Alice"] == []
    assert mentors["Evan"] == []
    assert students["Bob"]["previous_mentor"] == "Alice"
    assert students["Frank"]["previous_mentor"] == "Evan"
    assert students["Grace"]["previous_mentor"] is None
    for name in ("Bob", "Frank", "Grace"):
        assert students[name]["mentor"] == "Carol"
    _assert_consistent(mentors, students)


@pytest.mark.asyncio
async def test_bulk_transfer_appends_without_duplicates(test_db):
    await _seed(test_db)
    async with test_db.session() as session:
        await _service(session).assign("mentor", "Alice", ManyAssignees(("Grace", "Bob")))

    mentors, students = await _state(test_db)
    assert mentors["Alice"] == ["Bob", "Grace"]
    # Bob was already Alice's: the bulk path still records the lookup result.
    assert students["Bob"]["previous_mentor"] == "Alice"
    _assert_consistent(mentors, students)


@pytest.mark.asyncio
async def test_single_student_to_mentor_is_idempotent(test_db):
    await _seed(test_db)
    async with test_db.session() as session:
        await _service(session).assign("mentor", "Carol", SingleAssignee("Bob"))
    mentors, students = await _state(test_db)
    assert mentors["Carol"] == ["Bob"]
    assert mentors["Alice"] == []
    assert students["Bob"]["previous_mentor"] == "Alice"

    async with test_db.session() as session:
        result = await _service(session).assign("mentor", "Carol", SingleAssignee("Bob"))
    assert result["message"] == "Student assigned/reassigned to Mentor"

    mentors, students = await _state(test_db)
    assert mentors["Carol"] == ["Bob"]
    assert students["Bob"]["mentor"] == "Carol"
    assert students["Bob"]["previous_mentor"] == "Alice"
    _assert_consistent(mentors, students)


@pytest.mark.asyncio
async def test_unknown_mentor_fails_without_mutation(test_db):
    await _seed(test_db)
    before = await _state(test_db)
    async with test_db.session() as session:
        with pytest.raises(EntityNotFoundError) as exc:
            await _service(session).assign("student", "Bob", SingleAssignee("Nobody"))
    assert exc.value.kind == "Mentor"
    assert await _state(test_db) == before


@pytest.mark.asyncio
async def test_bulk_with_unknown_student_fails_without_mutation(test_db):
    await _seed(test_db)
    before = await _state(test_db)
    async with test_db.session() as session:
        with pytest.raises(EntityNotFoundError) as exc:
            await _service(session).assign("mentor", "Carol", ManyAssignees(("Bob", "Zed")))
    assert "Zed" in exc.value.message
    assert await _state(test_db) == before


@pytest.mark.asyncio
async def test_failure_after_writes_rolls_back(test_db):
    """The session is the transaction: an error after assign() leaves no trace."""
    await _seed(test_db)
    before = await _state(test_db)
    with pytest.raises(RuntimeError):
        async with test_db.session() as session:
            await _service(session).assign("mentor", "Carol", ManyAssignees(("Bob", "Frank")))
            raise RuntimeError("boom")
    assert await _state(test_db) == before


@pytest.mark.asyncio
async def test_create_student_with_mentor(test_db):
    async with test_db.session() as session:
        service = _service(session)
        await service.create_mentor({"name": "Alice"})
        result = await service.create_student({"name": "Bob", "mentor": "Alice", "batch": "B42"})
    assert result["status"] == "Success"
    assert result["message"] == "Created Student successfully and Added student to Mentor list"
    inserted = result["insertedObject"]
    assert inserted["batch"] == "B42"
    assert inserted["mentor"] == "Alice"
    assert inserted["previous_mentor"] is None

    async with test_db.session() as session:
        assert await _service(session).students_of_mentor("Alice") == {"students_teaching": ["Bob"]}


@pytest.mark.asyncio
async def test_create_student_unknown_mentor_inserts_nothing(test_db):
    async with test_db.session() as session:
        with pytest.raises(EntityNotFoundError):
            await _service(session).create_student({"name": "Bob", "mentor": "Nobody"})
    mentors, students = await _state(test_db)
    assert students == {}


@pytest.mark.asyncio
async def test_create_mentor_ignores_students_teaching(test_db):
    async with test_db.session() as session:
        result = await _service(session).create_mentor(
            {"name": "Alice", "students_teaching": ["Bob"], "expertise": "Backend"}
        )
    assert result["message"] == "Created Mentor successfully"
    assert result["insertedObject"]["students_teaching"] == []
    assert result["insertedObject"]["expertise"] == "Backend"


@pytest.mark.asyncio
async def test_duplicate_names_rejected(test_db):
    await _seed(test_db)
    async with test_db.session() as session:
        service = _service(session)
        with pytest.raises(DuplicateEntityError):
            await service.create_mentor({"name": "Alice"})
        with pytest.raises(DuplicateEntityError):
            await service.create_student({"name": "Bob"})


@pytest.mark.asyncio
async def test_lookups_for_missing_names(test_db):
    await _seed(test_db)
    async with test_db.session() as session:
        service = _service(session)
        assert await service.students_of_mentor("Nobody") is None
        assert await service.previous_mentor_of("Nobody") is None
        assert await service.previous_mentor_of("Grace") == {"previous_mentor": None}


@pytest.mark.asyncio
async def test_reset_all_loads_consistent_seed(test_db):
    await _seed(test_db)
    async with test_db.session() as session:
        await _service(session).create_student({"name": "Temp"})

    from core.config import get_settings

    async with test_db.session() as session:
        result = await _service(session).reset_all(get_settings().seed_dir)
    assert result == {"action": "Success", "message": "RESETTED THE COLLECTION"}

    mentors, students = await _state(test_db)
    assert "Temp" not in students
    assert mentors["Alice"] == ["Bob", "Dana"]
    assert students["Dana"]["previous_mentor"] == "Evan"
    _assert_consistent(mentors, students)


@pytest_asyncio.fixture
async def file_db(tmp_path):
    """Seeded file-backed database: sessions get separate connections."""
    await init_database(f"sqlite+aiosqlite:///{(tmp_path / 'mentors.db').as_posix()}")
    manager = get_database_manager()
    await manager.create_schema()
    await _seed(manager)
    yield manager
    await dispose_database()


@pytest.mark.asyncio
async def test_concurrent_update_detected(file_db):
    """A write based on a stale mentor row is refused instead of overwriting."""
    async with file_db.session() as slow:
        slow_service = _service(slow)
        # Held so the identity map keeps the stale copy.
        carol = await slow_service.mentors.get_by_name("Carol")  # noqa: F841

        async with file_db.session() as fast:
            await _service(fast).assign("student", "Grace", SingleAssignee("Carol"))

        with pytest.raises(ConcurrentModificationError):
            await slow_service.assign("mentor", "Carol", SingleAssignee("Bob"))
        await slow.rollback()

    mentors, students = await _state(file_db)
    assert mentors["Carol"] == ["Grace"]
    assert students["Bob"]["mentor"] == "Alice"
    _assert_consistent(mentors, students)


@pytest.mark.asyncio
async def test_stale_mentor_clear_is_a_conflict(file_db):
    """Clearing a mentor whose list changed since it was loaded is refused."""
    async with file_db.session() as slow:
        slow_service = _service(slow)
        alice = await slow_service.mentors.get_by_name("Alice")  # noqa: F841

        async with file_db.session() as fast:
            await _service(fast).assign("student", "Grace", SingleAssignee("Alice"))

        with pytest.raises(ConcurrentModificationError):
            await slow_service.assign("mentor", "Alice", NoAssignee())
        await slow.rollback()

    mentors, students = await _state(file_db)
    assert mentors["Alice"] == ["Bob", "Grace"]
    assert students["Bob"]["mentor"] == "Alice"
    assert students["Grace"]["mentor"] == "Alice"
    _assert_consistent(mentors, students)
