"""GET /students, POST /create/student, GET /show/previousMentor/{id}."""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, Field

from core.dependencies import get_assignment_service
from services.assignment_service import AssignmentService
from services.errors import AssignmentError, ConcurrentModificationError
from .responses import conflict, failed

router = APIRouter(tags=["students"])


class CreateStudentBody(BaseModel):
    """
    Body for POST /create/student.

    Fields other than name and mentor are stored and returned unchanged.
    """

    model_config = ConfigDict(
        extra="allow",
        json_schema_extra={"example": {"name": "Bob", "mentor": "Alice", "batch": "B42"}},
    )

    name: str = Field(..., min_length=1, description="Unique student name")
    mentor: Optional[str] = Field(None, description="Initial mentor name (optional)")


@router.get("/students", summary="List all students")
async def get_students(service: AssignmentService = Depends(get_assignment_service)) -> list:
    return await service.list_students()


@router.post(
    "/create/student",
    summary="Create a student",
    description="Inserts the student; with a mentor, also adds the student to that mentor's students_teaching.",
)
async def post_create_student(
    body: CreateStudentBody,
    service: AssignmentService = Depends(get_assignment_service),
):
    try:
        return await service.create_student(body.model_dump())
    except AssignmentError as e:
        return failed(e)
    except ConcurrentModificationError as e:
        raise conflict(e) from e


@router.get("/show/previousMentor/{id}", summary="Previous mentor of a student")
async def get_previous_mentor(
    id: str,
    service: AssignmentService = Depends(get_assignment_service),
) -> dict:
    """GET /show/previousMentor/{id} -> {previous_mentor} or 404."""
    data = await service.previous_mentor_of(id)
    if data is None:
        raise HTTPException(status_code=404, detail=f"Student not found: {id}")
    return data
