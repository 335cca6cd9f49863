"""Tests for the generation task state machine."""

import pytest

from app.exceptions import InvalidTransitionError
from app.services.generation import task_state
from app.services.generation.task_state import GenerationTask, TaskStatus


@pytest.fixture
def tasks():
    return task_state.initial_tasks(["a", "b", "c"])


def test_initial_tasks_are_idle_in_order(tasks):
    assert [t.style_id for t in tasks] == ["a", "b", "c"]
    assert all(t == GenerationTask(style_id=t.style_id) for t in tasks)
    assert task_state.count_by_status(tasks) == {
        "idle": 3,
        "loading": 0,
        "success": 0,
        "error": 0,
    }


def test_success_path_records_result_only_for_that_task(tasks):
    tasks = task_state.start_task(tasks, "b")
    tasks = task_state.complete_task(tasks, "b", "data:image/png;base64,AA==")

    b = task_state.find_task(tasks, "b")
    assert b.status == TaskStatus.SUCCESS
    assert b.result == "data:image/png;base64,AA=="
    assert b.error is None
    assert b.is_saved is False
    assert b.is_terminal
    assert task_state.find_task(tasks, "a").status == TaskStatus.IDLE


def test_error_path_records_message(tasks):
    tasks = task_state.start_task(tasks, "a")
    tasks = task_state.fail_task(tasks, "a", "Failed to generate")

    a = task_state.find_task(tasks, "a")
    assert a.status == TaskStatus.ERROR
    assert a.error == "Failed to generate"
    assert a.result is None
    assert a.is_terminal


def test_transitions_do_not_mutate_input(tasks):
    started = task_state.start_task(tasks, "a")

    assert task_state.find_task(tasks, "a").status == TaskStatus.IDLE
    assert task_state.find_task(started, "a").status == TaskStatus.LOADING


@pytest.mark.parametrize("terminal", ["complete", "fail"])
def test_terminal_tasks_can_be_dispatched_again(tasks, terminal):
    tasks = task_state.start_task(tasks, "a")
    if terminal == "complete":
        tasks = task_state.mark_saved(task_state.complete_task(tasks, "a", "r"), "a")
    else:
        tasks = task_state.fail_task(tasks, "a", "boom")

    tasks = task_state.start_task(tasks, "a")

    assert task_state.find_task(tasks, "a") == GenerationTask(
        style_id="a", status=TaskStatus.LOADING
    )


def test_outcomes_require_loading(tasks):
    with pytest.raises(InvalidTransitionError):
        task_state.complete_task(tasks, "a", "r")
    with pytest.raises(InvalidTransitionError):
        task_state.fail_task(tasks, "a", "boom")

    loading = task_state.start_task(tasks, "a")
    with pytest.raises(InvalidTransitionError):
        task_state.start_task(loading, "a")


def test_mark_saved_only_on_success_and_is_idempotent(tasks):
    with pytest.raises(InvalidTransitionError):
        task_state.mark_saved(tasks, "a")

    tasks = task_state.complete_task(task_state.start_task(tasks, "a"), "a", "r")
    saved = task_state.mark_saved(tasks, "a")

    assert task_state.find_task(saved, "a").is_saved is True
    assert task_state.mark_saved(saved, "a") is saved


def test_unknown_style_raises_key_error(tasks):
    with pytest.raises(KeyError):
        task_state.start_task(tasks, "zzz")
