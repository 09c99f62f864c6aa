"""Assignee variants for PUT /assign/studentMentor.

The JSON ``assignee`` is parsed once, at the edge, into exactly one of
NoAssignee / SingleAssignee / ManyAssignees. A JSON object (or a list holding
anything but names) raises InvalidAssigneeError.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Tuple, Union

from .errors import InvalidAssigneeError


@dataclass(frozen=True)
class NoAssignee:
    pass


@dataclass(frozen=True)
class SingleAssignee:
    name: str


@dataclass(frozen=True)
class ManyAssignees:
    names: Tuple[str, ...]


Assignee = Union[NoAssignee, SingleAssignee, ManyAssignees]


def invalid_assignee_message(role: str) -> str:
    if role == "student":
        return "'assignee' should not be an object or array for role = 'student'"
    return "'assignee' should be null, a student name or a list of student names for role = 'mentor'"


def _scalar_name(value: Any) -> str | None:
    # bool is an int subclass but never a name
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    return None


def parse_assignee(raw: Any, role: str = "mentor") -> Assignee:
    """Map a decoded JSON value to an Assignee variant.

    ``role`` only shapes the error message; the rule that a student has a
    single mentor is enforced by AssignmentService.assign.
    """
    if raw is None:
        return NoAssignee()
    name = _scalar_name(raw)
    if name is not None:
        return SingleAssignee(name)
    if isinstance(raw, list):
        names = []
        for item in raw:
            item_name = _scalar_name(item)
            if item_name is None:
                raise InvalidAssigneeError(invalid_assignee_message(role))
            if item_name not in names:
                names.append(item_name)
        return ManyAssignees(tuple(names))
    raise InvalidAssigneeError(invalid_assignee_message(role))
