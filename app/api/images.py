"""
Gallery API routes - the authenticated user's saved images.

Ownership always comes from the session; a client-supplied image id only
selects among the caller's own images.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from app.dependencies.auth import get_current_identity
from app.dependencies.services import get_gallery_service
from app.exceptions import UnauthenticatedError
from app.schemas import SavedImageInfo, SaveImageRequest, SuccessResponse, UserInfo
from app.services.gallery_service import GalleryService

router = APIRouter(prefix="/api/images", tags=["Gallery"])


@router.get("", response_model=list[SavedImageInfo])
async def list_my_images(
    identity: UserInfo = Depends(get_current_identity),
    gallery_service: GalleryService = Depends(get_gallery_service),
):
    """List the caller's saved images, newest first."""
    return await gallery_service.list_images(identity)


@router.post("/save", response_model=SuccessResponse)
async def save_image(
    image: SaveImageRequest,
    identity: UserInfo = Depends(get_current_identity),
    gallery_service: GalleryService = Depends(get_gallery_service),
):
    """Add an image to the caller's gallery."""
    try:
        await gallery_service.save_image(identity, image.url, image.style_id)
    except UnauthenticatedError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail=e.reason
        ) from e
    return SuccessResponse()


@router.delete("/{image_id}", response_model=SuccessResponse)
async def delete_image(
    image_id: int,
    identity: UserInfo = Depends(get_current_identity),
    gallery_service: GalleryService = Depends(get_gallery_service),
):
    """Delete one of the caller's images. Succeeds even if nothing matched."""
    await gallery_service.delete_image(identity, image_id)
    return SuccessResponse()
