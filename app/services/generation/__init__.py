"""
Generation Package - Client-side style generation runs.

Core Components:
- catalog.py: The fixed, ordered style catalog
- image_generator.py: Abstract generation capability and data URL helpers
- gemini_image_client.py: Gemini implementation of the generation capability
- task_state.py: Per-style task lifecycle as pure transitions
- concurrency.py: Group-barrier concurrent mapping
- scheduler.py: GenerationSession, the run state container and batch scheduler
- auto_save.py: Account view-state and save-after-success handling
- api_client.py: HTTP client for the account and gallery API
"""

from app.services.generation.api_client import GalleryAPI, PersonaMorphAPIClient
from app.services.generation.auto_save import AutoSaveCoordinator
from app.services.generation.catalog import STYLES, get_style
from app.services.generation.concurrency import map_in_groups
from app.services.generation.image_generator import ImageGenerator
from app.services.generation.scheduler import GenerationSession
from app.services.generation.task_state import GenerationTask, TaskStatus

__all__ = [
    "STYLES",
    "get_style",
    "ImageGenerator",
    "GenerationTask",
    "TaskStatus",
    "map_in_groups",
    "GenerationSession",
    "AutoSaveCoordinator",
    "GalleryAPI",
    "PersonaMorphAPIClient",
]
