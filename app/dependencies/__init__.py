from app.dependencies.auth import get_current_identity, get_current_identity_optional
from app.dependencies.services import get_credential_service, get_gallery_service

__all__ = [
    "get_current_identity",
    "get_current_identity_optional",
    "get_credential_service",
    "get_gallery_service",
]
