"""PUT /assign/studentMentor: reassign from the student side or the mentor side."""

from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field

from core.dependencies import get_assignment_service
from services.assignee import parse_assignee
from services.assignment_service import AssignmentService, normalize_role
from services.errors import AssignmentError, ConcurrentModificationError
from .responses import conflict, failed

router = APIRouter(tags=["assign"])


class AssignBody(BaseModel):
    """
    Body for PUT /assign/studentMentor.

    role=student: assignee is null or a mentor name.
    role=mentor: assignee is null, a student name, or a list of student names.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"role": "mentor", "name": "Carol", "assignee": ["Bob", "Grace"]}
        }
    )

    role: Any = Field(None, description="student | mentor (case-insensitive)")
    name: str = Field(..., description="Student or mentor being changed, per role")
    assignee: Any = Field(None, description="null | name | list of names")


@router.put(
    "/assign/studentMentor",
    summary="Assign or reassign students and mentors",
    description="Updates both Student.mentor/previous_mentor and Mentor.students_teaching in one transaction.",
)
async def put_assign(
    body: AssignBody,
    service: AssignmentService = Depends(get_assignment_service),
):
    try:
        role = normalize_role(body.role)
        assignee = parse_assignee(body.assignee, role)
        return await service.assign(role, body.name, assignee)
    except AssignmentError as e:
        return failed(e)
    except ConcurrentModificationError as e:
        raise conflict(e) from e
