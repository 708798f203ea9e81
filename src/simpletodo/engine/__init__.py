from .document import (
    LineDocument,
    LineKind,
    TaskLine,
    TaskStatus,
    ToggleResult,
    classify,
    is_task_line,
    is_unfinished_task_line,
    match_date_header,
    parse_task_line,
    reset_status,
    toggle_task_line,
    with_status,
)
from .tree import TaskNode, TaskTree, TaskTreeParser, is_leaf_line
from .locator import LocateResult, LocatedTask, locate
from .migrator import insert_into_target, merge, prepare_incoming
from .pruner import PruneResult, prune, prune_lines
from .normalizer import NormalizeResult, normalize
from .archive import ArchiveResult, MonthArchive, archive_by_month, group_tasks_by_month, remove_archived_lines
from .pipeline import RescheduleResult, default_header_label, reschedule
