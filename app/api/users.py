"""
User API routes - preferences of the authenticated user.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from app.dependencies.auth import get_current_identity
from app.dependencies.services import get_gallery_service
from app.exceptions import UnauthenticatedError
from app.schemas import PreferencesPayload, SuccessResponse, UserInfo
from app.services.gallery_service import GalleryService

router = APIRouter(prefix="/api/user", tags=["User Preferences"])


@router.get("/preferences", response_model=PreferencesPayload)
async def get_my_preferences(
    identity: UserInfo = Depends(get_current_identity),
    gallery_service: GalleryService = Depends(get_gallery_service),
):
    """Return the caller's preferences."""
    try:
        return await gallery_service.get_preferences(identity)
    except UnauthenticatedError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail=e.reason
        ) from e


@router.post("/preferences", response_model=SuccessResponse)
async def set_my_preferences(
    preferences: PreferencesPayload,
    identity: UserInfo = Depends(get_current_identity),
    gallery_service: GalleryService = Depends(get_gallery_service),
):
    """
    Replace the caller's preferences.

    Both fields are required; this is a full replace, not a partial update.
    """
    try:
        await gallery_service.set_preferences(
            identity, preferences.default_style, preferences.auto_save
        )
    except UnauthenticatedError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail=e.reason
        ) from e
    return SuccessResponse()
