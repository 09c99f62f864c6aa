"""HTTP routes: students, mentors, assignment, reset, meta."""

from fastapi import APIRouter

from .admin import router as admin_router
from .assign import router as assign_router
from .mentors import router as mentors_router
from .meta import router as meta_router
from .students import router as students_router

router = APIRouter()
router.include_router(meta_router)
router.include_router(students_router)
router.include_router(mentors_router)
router.include_router(assign_router)
router.include_router(admin_router)

api_router = router
