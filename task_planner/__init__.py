"""Task Planner - A tool to assign prioritized tasks to workers by skill and capacity."""

__version__ = "0.1.0"

from .assigner import TaskAssigner, assign_tasks
from .config import Config
from .validators import ValidationError

__all__ = ["TaskAssigner", "assign_tasks", "Config", "ValidationError"]
