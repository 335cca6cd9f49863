"""
Batch scheduler for a generation run.

``GenerationSession`` is the client-side state container for one user's work:
the source image, one ``GenerationTask`` per catalog style and the
``is_processing`` flag. A run walks the catalog in groups of
``settings.generation_concurrency`` styles, waits for each group to finish
before dispatching the next, and hands every success to the auto-save
coordinator.

Only the session mutates its task collection, always through the pure
transitions in ``task_state``.
"""

import uuid
from collections.abc import Awaitable, Callable, Sequence

from app.config import settings
from app.exceptions import RunInProgressError
from app.schemas import StyleDescriptor
from app.services.generation import task_state
from app.services.generation.auto_save import AutoSaveCoordinator
from app.services.generation.catalog import STYLES
from app.services.generation.concurrency import map_in_groups
from app.services.generation.image_generator import ImageGenerator
from app.services.generation.task_state import GenerationTask, TaskStatus, Tasks
from app.utils.logger import setup_logger

logger = setup_logger("generation.scheduler")

GENERATION_ERROR_MESSAGE = "Failed to generate"

UpdateListener = Callable[[Tasks], Awaitable[None]]


class GenerationSession:
    def __init__(
        self,
        generator: ImageGenerator,
        coordinator: AutoSaveCoordinator,
        styles: Sequence[StyleDescriptor] = STYLES,
        concurrency: int | None = None,
        listeners: list[UpdateListener] | None = None,
    ):
        self.generator = generator
        self.coordinator = coordinator
        self.styles = tuple(styles)
        self.concurrency = (
            concurrency if concurrency is not None else settings.generation_concurrency
        )
        self.listeners = listeners or []

        self.source_image: str | None = None
        self.tasks: Tasks = task_state.initial_tasks(s.id for s in self.styles)
        self.is_processing = False

    def task(self, style_id: str) -> GenerationTask:
        return task_state.find_task(self.tasks, style_id)

    def summary(self) -> dict[str, int]:
        return task_state.count_by_status(self.tasks)

    async def _apply(self, tasks: Tasks) -> None:
        self.tasks = tasks
        for listener in self.listeners:
            try:
                await listener(tasks)
            except Exception as e:
                logger.error(f"Error in task update listener: {e}", exc_info=False)

    async def accept_source_image(self, source_image: str) -> None:
        """
        Use a new reference photo and reset every task to idle.

        Raises:
            RunInProgressError: A run is still processing the previous image.
        """
        if self.is_processing:
            raise RunInProgressError("Cannot replace the source image during a run")
        self.source_image = source_image
        await self._apply(task_state.initial_tasks(s.id for s in self.styles))

    async def run(self) -> Tasks:
        """
        Generate every catalog style for the current source image.

        Returns the final task collection once every task is terminal.

        Raises:
            ValueError: No source image has been accepted.
            RunInProgressError: Another run is in progress.
        """
        if not self.source_image:
            raise ValueError("No source image to generate from")
        if self.is_processing:
            raise RunInProgressError("A generation run is already in progress")

        run_id = uuid.uuid4().hex[:8]
        log_prefix = f"[RunID: {run_id}] "
        self.is_processing = True
        await self._apply(task_state.initial_tasks(s.id for s in self.styles))
        logger.info(
            f"{log_prefix}Starting generation of {len(self.styles)} styles, {self.concurrency} at a time"
        )
        try:
            await map_in_groups(
                self.styles,
                self.concurrency,
                lambda style: self._process_style(style, log_prefix),
                log_prefix=log_prefix,
            )
        finally:
            self.is_processing = False

        logger.info(f"{log_prefix}Generation finished: {self.summary()}")
        return self.tasks

    async def _process_style(self, style: StyleDescriptor, log_prefix: str) -> None:
        await self._apply(task_state.start_task(self.tasks, style.id))
        try:
            result = await self.generator.generate_variation(self.source_image, style.prompt)
        except Exception as e:
            logger.error(
                f"{log_prefix}Error generating '{style.id}': {type(e).__name__}: {e}",
                exc_info=False,
            )
            await self._apply(
                task_state.fail_task(self.tasks, style.id, GENERATION_ERROR_MESSAGE)
            )
            return

        await self._apply(task_state.complete_task(self.tasks, style.id, result))
        logger.debug(f"{log_prefix}Style '{style.id}' generated")

        if await self.coordinator.on_task_success(style.id, result):
            await self._apply(task_state.mark_saved(self.tasks, style.id))

    async def save_task(self, style_id: str) -> bool:
        """
        Save a successful result on explicit request.

        Returns False without doing anything when the task has no result yet
        or is already saved. If the task was reset while the save was in
        flight, the image stays saved and the new task is left alone.

        Raises:
            UnauthenticatedError: Nobody is signed in.
        """
        task = self.task(style_id)
        if task.status != TaskStatus.SUCCESS or task.is_saved:
            return False
        await self.coordinator.save(task.result, style_id)

        current = self.task(style_id)
        if current.status == TaskStatus.SUCCESS and current.result == task.result:
            await self._apply(task_state.mark_saved(self.tasks, style_id))
        else:
            logger.info(f"Task '{style_id}' changed during its save, not marking it saved")
        return True
