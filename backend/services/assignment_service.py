"""Student <-> mentor assignment: keeps Student.mentor and Mentor.students_teaching mutual inverses.

Every public mutation validates its references first and then issues its
writes in "remove from prior owners, then add to new owner" order. The caller's
session is the transaction: nothing is committed here, and a failure anywhere
rolls back the whole logical operation.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.orm.exc import StaleDataError

from models.mentor import Mentor
from models.student import Student
from repositories.mentor_repo import MentorRepository
from repositories.student_repo import StudentRepository
from seed.seed_fixtures import load_seed_documents
from .assignee import Assignee, ManyAssignees, NoAssignee, SingleAssignee, invalid_assignee_message
from .errors import (
    ConcurrentModificationError,
    DuplicateEntityError,
    EntityNotFoundError,
    InvalidAssigneeError,
    InvalidRoleError,
)

logger = logging.getLogger(__name__)

ROLE_STUDENT = "student"
ROLE_MENTOR = "mentor"

# Keys owned by the service; never taken from caller-supplied passthrough fields.
_RESERVED_FIELDS = frozenset({"id", "_id", "version", "name", "mentor", "previous_mentor", "students_teaching"})


def normalize_role(role: Any) -> str:
    """Lower-case ``role`` and check it is student or mentor."""
    if not isinstance(role, str):
        raise InvalidRoleError(role)
    normalized = role.strip().lower()
    if normalized not in (ROLE_STUDENT, ROLE_MENTOR):
        raise InvalidRoleError(role)
    return normalized


def _extra_fields(fields: Dict[str, Any]) -> str:
    return json.dumps({k: v for k, v in fields.items() if k not in _RESERVED_FIELDS})


def _success(message: str) -> Dict[str, Any]:
    return {"action": "Success", "message": message}


class AssignmentService:
    """Owns every write to the student/mentor relationship fields."""

    def __init__(self, students: StudentRepository, mentors: MentorRepository) -> None:
        self.students = students
        self.mentors = mentors

    # --- reads ---------------------------------------------------------------

    async def list_students(self) -> List[Dict[str, Any]]:
        return [s.to_document() for s in await self.students.list_all()]

    async def list_mentors(self) -> List[Dict[str, Any]]:
        return [m.to_document() for m in await self.mentors.list_all()]

    async def students_of_mentor(self, mentor_name: str) -> Optional[Dict[str, Any]]:
        """``{"students_teaching": [...]}`` for one mentor, or None if it does not exist."""
        mentor = await self.mentors.get_by_name(mentor_name)
        if mentor is None:
            return None
        return {"students_teaching": mentor.students_teaching}

    async def previous_mentor_of(self, student_name: str) -> Optional[Dict[str, Any]]:
        """``{"previous_mentor": ...}`` for one student, or None if it does not exist."""
        student = await self.students.get_by_name(student_name)
        if student is None:
            return None
        return {"previous_mentor": student.previous_mentor}

    # --- creation ------------------------------------------------------------

    async def create_mentor(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        """Insert a mentor; students_teaching always starts empty."""
        name = fields["name"]
        if await self.mentors.get_by_name(name) is not None:
            raise DuplicateEntityError("Mentor", name)
        mentor = Mentor(name=name, extra_json=_extra_fields(fields))
        mentor.set_students_teaching([])
        await self.mentors.create(mentor)
        logger.info("Created mentor %s", name)
        return {
            "status": "Success",
            "message": "Created Mentor successfully",
            "insertedObject": mentor.to_document(),
        }

    async def create_student(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        """Insert a student; with an initial mentor also push onto that mentor's list.

        previous_mentor starts null either way: a fresh student has no history.
        """
        name = fields["name"]
        mentor_name = fields.get("mentor")
        if await self.students.get_by_name(name) is not None:
            raise DuplicateEntityError("Student", name)

        mentor: Optional[Mentor] = None
        if mentor_name is not None:
            mentor = await self.mentors.get_by_name(mentor_name)
            if mentor is None:
                raise EntityNotFoundError("Mentor", mentor_name)

        student = Student(
            name=name,
            mentor=mentor_name,
            previous_mentor=None,
            extra_json=_extra_fields(fields),
        )
        await self.students.create(student)
        if mentor is not None:
            await self.mentors.push(mentor, [name])
            await self._flush()
            logger.info("Created student %s under mentor %s", name, mentor_name)
            message = "Created Student successfully and Added student to Mentor list"
        else:
            logger.info("Created student %s", name)
            message = "Created Student successfully"
        return {
            "status": "Success",
            "message": message,
            "insertedObject": student.to_document(),
        }

    # --- assignment ----------------------------------------------------------

    async def assign(self, role: str, name: str, assignee: Assignee) -> Dict[str, Any]:
        """Change the relationship of the student or mentor ``name``.

        role=student: assignee is NoAssignee or SingleAssignee(mentor name).
        role=mentor: assignee is NoAssignee, SingleAssignee(student name) or
        ManyAssignees(student names).
        """
        role = normalize_role(role)
        # Queries inside the cases autoflush, so a stale row can surface before the final flush.
        try:
            result = await self._dispatch(role, name, assignee)
            await self.students.flush()
        except StaleDataError as e:
            logger.warning("Concurrent modification detected while assigning %s %s: %s", role, name, e)
            raise ConcurrentModificationError(str(e)) from e
        return result

    async def _dispatch(self, role: str, name: str, assignee: Assignee) -> Dict[str, Any]:
        if role == ROLE_STUDENT:
            if isinstance(assignee, ManyAssignees):
                logger.warning("Rejected assign for student %s: list assignee", name)
                raise InvalidAssigneeError(invalid_assignee_message(ROLE_STUDENT))
            if isinstance(assignee, SingleAssignee):
                return await self._assign_mentor_to_student(name, assignee.name)
            return await self._remove_mentor_from_student(name)
        if isinstance(assignee, ManyAssignees):
            return await self._assign_students_to_mentor(name, list(assignee.names))
        if isinstance(assignee, SingleAssignee):
            return await self._assign_student_to_mentor(name, assignee.name)
        if isinstance(assignee, NoAssignee):
            return await self._clear_mentor(name)
        raise InvalidAssigneeError(invalid_assignee_message(ROLE_MENTOR))

    async def _require_student(self, name: str) -> Student:
        student = await self.students.get_by_name(name)
        if student is None:
            logger.warning("Student not found: %s", name)
            raise EntityNotFoundError("Student", name)
        return student

    async def _require_mentor(self, name: str) -> Mentor:
        mentor = await self.mentors.get_by_name(name)
        if mentor is None:
            logger.warning("Mentor not found: %s", name)
            raise EntityNotFoundError("Mentor", name)
        return mentor

    async def _remove_mentor_from_student(self, student_name: str) -> Dict[str, Any]:
        student = await self._require_student(student_name)
        # Pull from every mentor, not only the current one, to heal stale lists.
        await self.mentors.pull([student_name])
        await self.students.set_mentor(student, None)
        logger.info("Removed mentor of student %s (was %s)", student_name, student.previous_mentor)
        return _success("No Mentor Assigned / Mentor Removed for a Student")

    async def _assign_mentor_to_student(self, student_name: str, mentor_name: str) -> Dict[str, Any]:
        student = await self._require_student(student_name)
        mentor = await self._require_mentor(mentor_name)
        await self.mentors.pull([student_name])
        await self.students.set_mentor(student, mentor_name)
        await self.mentors.push(mentor, [student_name])
        logger.info(
            "Assigned mentor %s to student %s (previous %s)",
            mentor_name, student_name, student.previous_mentor,
        )
        return _success("Mentor assigned/reassigned to Student")

    async def _clear_mentor(self, mentor_name: str) -> Dict[str, Any]:
        mentor = await self._require_mentor(mentor_name)
        affected = await self.students.list_by_mentor(mentor_name)
        await self.mentors.clear(mentor)
        for student in affected:
            await self.students.set_mentor(student, None)
        logger.info("Cleared mentor %s (%d students released)", mentor_name, len(affected))
        return _success("No Students / All Students removed for the Mentor")

    async def _assign_students_to_mentor(self, mentor_name: str, student_names: List[str]) -> Dict[str, Any]:
        mentor = await self._require_mentor(mentor_name)
        students = await self.students.list_by_names(student_names)
        found = {s.name for s in students}
        missing = [n for n in student_names if n not in found]
        if missing:
            logger.warning("Students not found for bulk assign to %s: %s", mentor_name, missing)
            raise EntityNotFoundError("Student", ", ".join(missing))

        await self.mentors.pull(student_names, exclude=mentor_name)
        await self.mentors.push(mentor, student_names)
        for student in students:
            await self.students.set_mentor(student, mentor_name)
        logger.info("Assigned %d students to mentor %s", len(students), mentor_name)
        return _success("Many Students are assigned to a Mentor")

    async def _assign_student_to_mentor(self, mentor_name: str, student_name: str) -> Dict[str, Any]:
        mentor = await self._require_mentor(mentor_name)
        student = await self._require_student(student_name)
        await self.mentors.pull([student_name])
        await self.mentors.push(mentor, [student_name])
        if student.mentor != mentor_name:
            await self.students.set_mentor(student, mentor_name)
            logger.info(
                "Assigned student %s to mentor %s (previous %s)",
                student_name, mentor_name, student.previous_mentor,
            )
        else:
            logger.info("Student %s already assigned to mentor %s", student_name, mentor_name)
        return _success("Student assigned/reassigned to Mentor")

    # --- reset ---------------------------------------------------------------

    async def reset_all(self, seed_dir: str) -> Dict[str, Any]:
        """Delete both collections and reload the seed fixtures."""
        student_docs, mentor_docs = load_seed_documents(seed_dir)
        deleted_students = await self.students.delete_all()
        deleted_mentors = await self.mentors.delete_all()
        for doc in student_docs:
            await self.students.add(Student(
                name=doc["name"],
                mentor=doc.get("mentor"),
                previous_mentor=doc.get("previous_mentor"),
                extra_json=_extra_fields(doc),
            ))
        for doc in mentor_docs:
            mentor = Mentor(name=doc["name"], extra_json=_extra_fields(doc))
            mentor.set_students_teaching(doc.get("students_teaching", []))
            await self.mentors.add(mentor)
        await self._flush()
        logger.info(
            "Reset collections: deleted %d students, %d mentors; seeded %d students, %d mentors",
            deleted_students, deleted_mentors, len(student_docs), len(mentor_docs),
        )
        return {"action": "Success", "message": "RESETTED THE COLLECTION"}

    async def _flush(self) -> None:
        try:
            await self.students.flush()
        except StaleDataError as e:
            logger.warning("Concurrent modification detected: %s", e)
            raise ConcurrentModificationError(str(e)) from e
