"""
Generation task lifecycle.

One task per catalog style per run::

    idle ──► loading ──► success
      ▲         │
      │         └──────► error
      └── (new source image resets every task)

``success`` and ``error`` are terminal for the run; dispatching a style again
moves it back to ``loading``. A successful task also carries ``is_saved``,
which only ever goes from False to True within a run.

Tasks are immutable and the collection is a tuple in catalog order. Every
transition is a pure function returning a new collection, keyed by style id.
"""

from collections.abc import Iterable
from dataclasses import dataclass, replace
from enum import Enum

from app.exceptions import InvalidTransitionError


class TaskStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


TERMINAL_STATUSES = frozenset({TaskStatus.SUCCESS, TaskStatus.ERROR})


@dataclass(frozen=True)
class GenerationTask:
    style_id: str
    status: TaskStatus = TaskStatus.IDLE
    result: str | None = None
    error: str | None = None
    is_saved: bool = False

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES


Tasks = tuple[GenerationTask, ...]


def initial_tasks(style_ids: Iterable[str]) -> Tasks:
    """Fresh idle tasks, one per style, in the given order."""
    return tuple(GenerationTask(style_id=style_id) for style_id in style_ids)


def find_task(tasks: Tasks, style_id: str) -> GenerationTask:
    for task in tasks:
        if task.style_id == style_id:
            return task
    raise KeyError(style_id)


def _replace_task(tasks: Tasks, updated: GenerationTask) -> Tasks:
    return tuple(updated if t.style_id == updated.style_id else t for t in tasks)


def start_task(tasks: Tasks, style_id: str) -> Tasks:
    """idle/success/error -> loading. Clears any previous outcome."""
    task = find_task(tasks, style_id)
    if task.status == TaskStatus.LOADING:
        raise InvalidTransitionError(style_id, task.status.value, TaskStatus.LOADING.value)
    return _replace_task(tasks, GenerationTask(style_id=style_id, status=TaskStatus.LOADING))


def complete_task(tasks: Tasks, style_id: str, result: str) -> Tasks:
    """loading -> success, recording the generated image."""
    task = find_task(tasks, style_id)
    if task.status != TaskStatus.LOADING:
        raise InvalidTransitionError(style_id, task.status.value, TaskStatus.SUCCESS.value)
    return _replace_task(
        tasks, replace(task, status=TaskStatus.SUCCESS, result=result, error=None)
    )


def fail_task(tasks: Tasks, style_id: str, error: str) -> Tasks:
    """loading -> error, recording only a human-readable message."""
    task = find_task(tasks, style_id)
    if task.status != TaskStatus.LOADING:
        raise InvalidTransitionError(style_id, task.status.value, TaskStatus.ERROR.value)
    return _replace_task(
        tasks, replace(task, status=TaskStatus.ERROR, result=None, error=error)
    )


def mark_saved(tasks: Tasks, style_id: str) -> Tasks:
    """Flag a successful task as persisted. Idempotent."""
    task = find_task(tasks, style_id)
    if task.status != TaskStatus.SUCCESS:
        raise InvalidTransitionError(style_id, task.status.value, "saved")
    if task.is_saved:
        return tasks
    return _replace_task(tasks, replace(task, is_saved=True))


def count_by_status(tasks: Tasks) -> dict[str, int]:
    counts = {status.value: 0 for status in TaskStatus}
    for task in tasks:
        counts[task.status.value] += 1
    return counts
