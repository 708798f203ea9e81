"""simpletodo: date-partitioned plain-text todo lists."""
from .engine import archive_by_month, reschedule, toggle_task_line

__version__ = "1.0.0"
