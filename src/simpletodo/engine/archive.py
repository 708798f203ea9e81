"""Month-level archiving of completed tasks.

A month is archivable only when none of its task lines is still Todo or
InProgress. Archiving is all-or-nothing per month.
"""
from dataclasses import dataclass, field
from typing import Dict, List

from ..utils import Logger
from .document import (
    LineDocument,
    TaskStatus,
    is_unfinished_task_line,
    match_month,
    parse_task_line,
)


@dataclass
class MonthArchive:
    month: str
    archivable: bool
    completed_task_lines: List[str] = field(default_factory=list)
    unfinished_count: int = 0


@dataclass
class ArchiveResult:
    months: Dict[str, MonthArchive] = field(default_factory=dict)
    remaining_text: str = ""

    @property
    def archivable_months(self) -> List[str]:
        """Months with at least one Done line to move out."""
        return [m for m, a in self.months.items() if a.archivable and a.completed_task_lines]

    @property
    def skipped_months(self) -> List[str]:
        return [m for m, a in self.months.items() if not a.archivable]


def group_tasks_by_month(lines: List[str]) -> Dict[str, List[str]]:
    """Task lines (any depth) keyed by the ``YYYY-MM`` of their date header."""
    tasks_by_month: Dict[str, List[str]] = {}
    current_month = None
    for line in lines:
        month = match_month(line)
        if month:
            current_month = month
            tasks_by_month.setdefault(current_month, [])
            continue
        if current_month and parse_task_line(line) is not None:
            tasks_by_month[current_month].append(line)
    return tasks_by_month


def inspect_month(month: str, tasks: List[str]) -> MonthArchive:
    unfinished = sum(1 for t in tasks if is_unfinished_task_line(t))
    if unfinished:
        return MonthArchive(month=month, archivable=False, unfinished_count=unfinished)
    completed = [t for t in tasks if parse_task_line(t).status is TaskStatus.DONE]
    return MonthArchive(month=month, archivable=True, completed_task_lines=completed)


def remove_archived_lines(text: str, archived_lines: List[str]) -> str:
    """Drop every line that literally equals one of ``archived_lines``."""
    archived = set(archived_lines)
    if not archived:
        return text
    doc = LineDocument.from_text(text)
    return doc.join([line for line in doc if line not in archived])


def archive_by_month(document_text: str) -> ArchiveResult:
    doc = LineDocument.from_text(document_text)
    result = ArchiveResult(remaining_text=document_text)

    for month, tasks in group_tasks_by_month(doc.lines).items():
        entry = inspect_month(month, tasks)
        result.months[month] = entry
        if not entry.archivable:
            Logger.debug(f"archive: {month} has {entry.unfinished_count} unfinished tasks")
            continue
        result.remaining_text = remove_archived_lines(result.remaining_text, entry.completed_task_lines)

    return result
