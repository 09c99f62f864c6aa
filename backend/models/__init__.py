"""SQLAlchemy models for the student and mentor collections.

The relationship between the two is application-enforced (by name), not a
foreign key: see services.assignment_service.
"""

from .base import Base
from .mentor import Mentor
from .student import Student

__all__ = [
    "Base",
    "Mentor",
    "Student",
]
