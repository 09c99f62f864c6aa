"""GET /, GET /health, GET /meta/version."""

from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

from version import get_version

router = APIRouter(tags=["meta"])

GUIDE_HTML = """<!DOCTYPE html>
<html>
<head><meta charset="utf-8"><title>Mentor Assignment Service</title></head>
<body>
<h1>Mentor Assignment Service</h1>
<table border="1" cellpadding="4">
<tr><th>Method</th><th>Path</th><th>Description</th></tr>
<tr><td>GET</td><td>/students</td><td>List all students</td></tr>
<tr><td>GET</td><td>/mentors</td><td>List all mentors</td></tr>
<tr><td>POST</td><td>/create/mentor</td><td>Create a mentor: {"name": ...}</td></tr>
<tr><td>POST</td><td>/create/student</td><td>Create a student: {"name": ..., "mentor": null | name}</td></tr>
<tr><td>PUT</td><td>/assign/studentMentor</td><td>{"role": "student" | "mentor", "name": ..., "assignee": null | name | [names]}</td></tr>
<tr><td>GET</td><td>/show/mentorStudents/{name}</td><td>Students taught by a mentor</td></tr>
<tr><td>GET</td><td>/show/previousMentor/{name}</td><td>Previous mentor of a student</td></tr>
<tr><td>DELETE</td><td>/reset</td><td>Reset both collections to the seed dataset</td></tr>
</table>
<p>role = student: assignee is null (remove the mentor) or a mentor name.</p>
<p>role = mentor: assignee is null (release every student), a student name, or a list of student names.</p>
</body>
</html>
"""


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
def guide() -> str:
    """Usage guide."""
    return GUIDE_HTML


@router.get("/health")
async def health() -> dict:
    """Simple health check endpoint."""
    return {"status": "ok"}


@router.get("/meta/version", summary="Application version")
def meta_version() -> dict:
    return {"version": get_version()}
