from app.services.credential_service import CredentialService
from app.services.gallery_service import GalleryService


def get_credential_service() -> CredentialService:
    """FastAPI dependency for the credential service."""
    return CredentialService()


def get_gallery_service() -> GalleryService:
    """FastAPI dependency for the session-scoped gallery service."""
    return GalleryService()
