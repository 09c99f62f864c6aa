"""DELETE /reset: wipe both collections and reload the seed fixtures."""

from fastapi import APIRouter, Depends

from core.config import get_settings
from core.dependencies import get_assignment_service
from services.assignment_service import AssignmentService

router = APIRouter(tags=["admin"])


@router.delete("/reset", summary="Reset collections to the seed dataset")
async def delete_reset(service: AssignmentService = Depends(get_assignment_service)) -> dict:
    return await service.reset_all(get_settings().seed_dir)
