"""Services: assignment rules on top of the student and mentor repositories."""

from .assignee import ManyAssignees, NoAssignee, SingleAssignee, parse_assignee
from .assignment_service import AssignmentService, normalize_role

__all__ = [
    "AssignmentService",
    "ManyAssignees",
    "NoAssignee",
    "SingleAssignee",
    "normalize_role",
    "parse_assignee",
]
