"""GET /mentors, POST /create/mentor, GET /show/mentorStudents/{id}."""

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, Field

from core.dependencies import get_assignment_service
from services.assignment_service import AssignmentService
from services.errors import AssignmentError
from .responses import failed

router = APIRouter(tags=["mentors"])


class CreateMentorBody(BaseModel):
    """
    Body for POST /create/mentor.

    Any students_teaching value is ignored: a new mentor starts with an empty list.
    """

    model_config = ConfigDict(
        extra="allow",
        json_schema_extra={"example": {"name": "Carol", "expertise": "Frontend"}},
    )

    name: str = Field(..., min_length=1, description="Unique mentor name")


@router.get("/mentors", summary="List all mentors")
async def get_mentors(service: AssignmentService = Depends(get_assignment_service)) -> list:
    return await service.list_mentors()


@router.post("/create/mentor", summary="Create a mentor")
async def post_create_mentor(
    body: CreateMentorBody,
    service: AssignmentService = Depends(get_assignment_service),
):
    try:
        return await service.create_mentor(body.model_dump())
    except AssignmentError as e:
        return failed(e)


@router.get("/show/mentorStudents/{id}", summary="Students taught by a mentor")
async def get_mentor_students(
    id: str,
    service: AssignmentService = Depends(get_assignment_service),
) -> dict:
    """GET /show/mentorStudents/{id} -> {students_teaching} or 404."""
    data = await service.students_of_mentor(id)
    if data is None:
        raise HTTPException(status_code=404, detail=f"Mentor not found: {id}")
    return data
