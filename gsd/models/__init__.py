"""GSD Database Models"""
from gsd.models.user import User
from gsd.models.task_list import TaskList
from gsd.models.task import Task

__all__ = [
    "User",
    "TaskList",
    "Task",
]
