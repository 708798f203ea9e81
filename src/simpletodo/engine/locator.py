from dataclasses import dataclass, field
from typing import List, Optional, Set

from ..utils import Logger
from .tree import TaskTreeParser


@dataclass
class LocatedTask:
    line: str
    line_number: int      # 1-based
    is_leaf: bool


@dataclass
class LocateResult:
    source_date: Optional[str] = None
    tasks: List[LocatedTask] = field(default_factory=list)

    @property
    def found(self) -> bool:
        return self.source_date is not None and any(t.is_leaf for t in self.tasks)

    @property
    def unfinished_leaves(self) -> List[str]:
        return [t.line for t in self.tasks if t.is_leaf]

    @property
    def lines(self) -> List[str]:
        """Ancestors and leaves in emission order."""
        return [t.line for t in self.tasks]

    @property
    def line_numbers(self) -> List[int]:
        return [t.line_number for t in self.tasks]

    @property
    def leaf_line_numbers(self) -> List[int]:
        return [t.line_number for t in self.tasks if t.is_leaf]


def locate(lines: List[str], today: str, scan_start_line: int = 0) -> LocateResult:
    """
    Harvest the nearest date section (scanning forward from ``scan_start_line``)
    that holds unfinished leaf tasks.

    - Sections dated ``today`` are never a source.
    - Only the first qualifying section is harvested; scanning stops at the
      next date header once a leaf was found.
    - Each leaf is preceded by its ancestor chain (outermost first, any
      status). An ancestor shared by several leaves is emitted once.
    """
    result = LocateResult()
    parser = TaskTreeParser(lines)

    for section in parser.iter_sections(scan_start_line):
        if section.date == today:
            continue
        tree = parser.parse_section(section)
        leaves = [n for n in tree.leaves() if n.unfinished]
        if not leaves:
            continue

        result.source_date = section.date
        emitted: Set[int] = set()
        for leaf in leaves:
            for ancestor in reversed(tree.ancestors(leaf)):
                if ancestor.line_number in emitted:
                    continue
                emitted.add(ancestor.line_number)
                result.tasks.append(LocatedTask(ancestor.text, ancestor.line_number + 1, False))
            emitted.add(leaf.line_number)
            result.tasks.append(LocatedTask(leaf.text, leaf.line_number + 1, True))

        Logger.debug(f"locate: {len(leaves)} unfinished leaves under {section.date}")
        break

    return result
