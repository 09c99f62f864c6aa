"""Errors raised by the assignment service.

Every validation error is raised before the first write, so a rejected
request never leaves partial state behind. The message is the text reported
in-band to the caller.
"""

from __future__ import annotations


class AssignmentError(ValueError):
    """Base class for caller errors reported as ``{"action": "FAILED", "error": ...}``."""

    status_code = 200

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidRoleError(AssignmentError):
    def __init__(self, role: object = None) -> None:
        super().__init__("Incorrect ROLE Specified")
        self.role = role


class InvalidAssigneeError(AssignmentError):
    pass


class EntityNotFoundError(AssignmentError, LookupError):
    status_code = 404

    def __init__(self, kind: str, name: str) -> None:
        super().__init__(f"{kind} not found: {name}")
        self.kind = kind
        self.name = name


class DuplicateEntityError(AssignmentError):
    status_code = 409

    def __init__(self, kind: str, name: str) -> None:
        super().__init__(f"{kind} already exists: {name}")
        self.kind = kind
        self.name = name


class ConcurrentModificationError(RuntimeError):
    """A concurrent request changed a row this transaction was updating."""
