from taskboard.models.projects import Project
from taskboard.models.tasks import Task
from taskboard.models.users import User

__all__ = [
    "User",
    "Project",
    "Task",
]
