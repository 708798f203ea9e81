from dataclasses import dataclass, field
from typing import Iterable, List, Set

from ..utils import Logger
from .document import TaskStatus, parse_task_line, with_status
from .tree import descendant_indices, nearest_ancestor_index


@dataclass
class PruneResult:
    lines: List[str]
    deleted: Set[int] = field(default_factory=set)     # 0-based, original indices
    completed: Set[int] = field(default_factory=set)   # ancestors forced to Done


def _is_done(line: str) -> bool:
    task = parse_task_line(line)
    return task is not None and task.status is TaskStatus.DONE


def prune_lines(lines: List[str], removed_line_numbers: Iterable[int]) -> PruneResult:
    """
    Remove migrated leaves (1-based line numbers) and repair their ancestors.

    Deletions are recorded against the original indices and applied in one
    go at the end, so every line number keeps pointing at the same line
    however many ancestors cascade away.

    For each removed line, the nearest ancestor is:
      - deleted when no descendant remains (then its own ancestor is checked);
      - marked Done when every remaining descendant is Done;
      - left alone otherwise (never un-completed here).
    """
    work = list(lines)
    result = PruneResult(lines=work)

    for number in sorted(set(removed_line_numbers), reverse=True):
        index = number - 1
        if index < 0 or index >= len(work) or index in result.deleted:
            continue
        result.deleted.add(index)

        parent = nearest_ancestor_index(work, index, skip=result.deleted)
        while parent is not None:
            remaining = descendant_indices(work, parent, skip=result.deleted)
            if not remaining:
                result.deleted.add(parent)
                parent = nearest_ancestor_index(work, parent, skip=result.deleted)
                continue
            if all(_is_done(work[i]) for i in remaining) and not _is_done(work[parent]):
                work[parent] = with_status(work[parent], TaskStatus.DONE)
                result.completed.add(parent)
            break

    result.lines = [line for i, line in enumerate(work) if i not in result.deleted]
    if result.deleted:
        Logger.debug(f"prune: deleted {len(result.deleted)} lines, completed {len(result.completed)} parents")
    return result


def prune(lines: List[str], removed_line_numbers: Iterable[int]) -> List[str]:
    return prune_lines(lines, removed_line_numbers).lines
