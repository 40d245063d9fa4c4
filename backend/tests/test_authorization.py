# ruff: noqa

from uuid import uuid4

import pytest

from taskboard.core.errors import AuthorizationError
from taskboard.services.authorization import (
    Action,
    Actor,
    ProjectResource,
    TaskResource,
    can_access,
    denial_message,
    require_access,
)


def _actor(role: str = "user") -> Actor:
    return Actor(id=uuid4(), role=role)


def _task(*, owner=None, assignee=None, creator=None) -> TaskResource:
    return TaskResource(
        project_owner_id=owner or uuid4(),
        assigned_to_id=assignee,
        created_by_id=creator or uuid4(),
    )


@pytest.mark.parametrize("action", list(Action))
def test_admin_is_always_permitted(action):
    admin = _actor("admin")
    assert can_access(admin, ProjectResource(owner_id=uuid4()), action) is True
    assert can_access(admin, _task(), action) is True


@pytest.mark.parametrize("action", list(Action))
def test_project_owner_has_every_project_action(action):
    owner = _actor()
    assert can_access(owner, ProjectResource(owner_id=owner.id), action) is True


@pytest.mark.parametrize("action", list(Action))
def test_stranger_is_denied_every_project_action(action):
    assert can_access(_actor(), ProjectResource(owner_id=uuid4()), action) is False


def test_task_readers_are_owner_assignee_and_creator():
    owner, assignee, creator, stranger = _actor(), _actor(), _actor(), _actor()
    task = _task(owner=owner.id, assignee=assignee.id, creator=creator.id)
    assert can_access(owner, task, Action.READ) is True
    assert can_access(assignee, task, Action.READ) is True
    assert can_access(creator, task, Action.READ) is True
    assert can_access(stranger, task, Action.READ) is False


@pytest.mark.parametrize("action", [Action.UPDATE, Action.DELETE])
def test_assignee_can_read_but_not_mutate(action):
    assignee = _actor()
    task = _task(assignee=assignee.id)
    assert can_access(assignee, task, Action.READ) is True
    assert can_access(assignee, task, action) is False


@pytest.mark.parametrize("action", [Action.UPDATE, Action.DELETE])
def test_owner_and_creator_can_mutate_task(action):
    owner, creator = _actor(), _actor()
    task = _task(owner=owner.id, creator=creator.id)
    assert can_access(owner, task, action) is True
    assert can_access(creator, task, action) is True


def test_create_task_under_is_not_a_task_action():
    creator = _actor()
    assert can_access(creator, _task(creator=creator.id), Action.CREATE_TASK_UNDER) is False


def test_unassigned_task_does_not_match_missing_assignee():
    actor = _actor()
    task = _task(assignee=None)
    assert can_access(actor, task, Action.READ) is False


def test_task_with_missing_project_falls_back_to_creator():
    creator = _actor()
    task = TaskResource(project_owner_id=None, assigned_to_id=None, created_by_id=creator.id)
    assert can_access(creator, task, Action.UPDATE) is True
    assert can_access(_actor(), task, Action.READ) is False


def test_require_access_raises_with_resource_specific_message():
    with pytest.raises(AuthorizationError) as excinfo:
        require_access(_actor(), _task(), Action.UPDATE)
    assert excinfo.value.status_code == 403
    assert excinfo.value.message == "Not authorized to update this task"


def test_require_access_passes_silently_when_permitted():
    owner = _actor()
    require_access(owner, ProjectResource(owner_id=owner.id), Action.DELETE)


def test_denial_message_for_create_task_under():
    message = denial_message(ProjectResource(owner_id=uuid4()), Action.CREATE_TASK_UNDER)
    assert message == "Not authorized to create tasks in this project"
