"""Implicit task hierarchy, re-derived from indentation on demand.

Indent depth is the *length* of the leading whitespace string. A tab and a
space both count as one, so mixed indentation compares by character count,
never by visual width.
"""
from dataclasses import dataclass, field
from typing import Collection, Dict, Iterator, List, Optional, Tuple

from .document import (
    TaskStatus,
    indent_of,
    match_date_header,
    parse_task_line,
)


@dataclass
class TaskNode:
    line_number: int          # 0-based index into the document
    indent: str
    marker: str
    content: str
    text: str
    parent: Optional[int] = None      # arena index of the nearest ancestor
    children: List[int] = field(default_factory=list)
    is_leaf: bool = True

    @property
    def depth(self) -> int:
        return len(self.indent)

    @property
    def status(self) -> Optional[TaskStatus]:
        return TaskStatus.from_marker(self.marker)

    @property
    def unfinished(self) -> bool:
        status = self.status
        return status is not None and status.unfinished


@dataclass
class DateSection:
    date: str
    header_index: int
    end: int                  # exclusive


@dataclass
class TaskTree:
    section: Optional[DateSection]
    nodes: List[TaskNode] = field(default_factory=list)
    by_line: Dict[int, int] = field(default_factory=dict)

    def node_at(self, line_number: int) -> Optional[TaskNode]:
        idx = self.by_line.get(line_number)
        return self.nodes[idx] if idx is not None else None

    def ancestors(self, node: TaskNode) -> List[TaskNode]:
        """Nearest parent first."""
        chain = []
        parent = node.parent
        while parent is not None:
            ancestor = self.nodes[parent]
            chain.append(ancestor)
            parent = ancestor.parent
        return chain

    def leaves(self) -> List[TaskNode]:
        return [n for n in self.nodes if n.is_leaf]


def is_leaf_line(lines: List[str], index: int) -> bool:
    """A task is a leaf unless the very next line is a deeper task line."""
    if index + 1 >= len(lines):
        return True
    next_task = parse_task_line(lines[index + 1])
    if next_task is None:
        return True
    return len(next_task.indent) <= len(indent_of(lines[index]))


class TaskTreeParser:
    def __init__(self, lines: List[str]):
        self.lines = lines

    def iter_sections(self, start: int = 0) -> Iterator[DateSection]:
        """Date sections whose header sits at or after ``start``."""
        headers: List[Tuple[int, str]] = []
        for i in range(max(start, 0), len(self.lines)):
            date = match_date_header(self.lines[i])
            if date is not None:
                headers.append((i, date))
        for pos, (idx, date) in enumerate(headers):
            end = headers[pos + 1][0] if pos + 1 < len(headers) else len(self.lines)
            yield DateSection(date=date, header_index=idx, end=end)

    def parse_range(self, start: int, end: int, section: Optional[DateSection] = None) -> TaskTree:
        tree = TaskTree(section=section)
        stack: List[int] = []
        for i in range(start, end):
            task = parse_task_line(self.lines[i])
            if task is None:
                continue
            # 弹出缩进 >= 当前行的祖先
            while stack and tree.nodes[stack[-1]].depth >= len(task.indent):
                stack.pop()
            node = TaskNode(
                line_number=i,
                indent=task.indent,
                marker=task.marker,
                content=task.content,
                text=self.lines[i],
                parent=stack[-1] if stack else None,
                is_leaf=is_leaf_line(self.lines, i),
            )
            arena_idx = len(tree.nodes)
            tree.nodes.append(node)
            tree.by_line[i] = arena_idx
            if node.parent is not None:
                tree.nodes[node.parent].children.append(arena_idx)
            stack.append(arena_idx)
        return tree

    def parse_section(self, section: DateSection) -> TaskTree:
        return self.parse_range(section.header_index + 1, section.end, section)


def nearest_ancestor_index(lines: List[str], index: int, skip: Collection[int] = ()) -> Optional[int]:
    """Walk upward to the nearest task line with a strictly shorter indent.

    Stops at the date header that opens the section. Indices in ``skip``
    are treated as already deleted.
    """
    depth = len(indent_of(lines[index]))
    for i in range(index - 1, -1, -1):
        if i in skip:
            continue
        line = lines[i]
        if match_date_header(line) is not None:
            return None
        task = parse_task_line(line)
        if task is not None and len(task.indent) < depth:
            return i
    return None


def descendant_indices(lines: List[str], index: int, skip: Collection[int] = ()) -> List[int]:
    """Task lines below ``index`` until indentation returns to its depth."""
    depth = len(indent_of(lines[index]))
    found = []
    for j in range(index + 1, len(lines)):
        if j in skip:
            continue
        line = lines[j]
        if match_date_header(line) is not None:
            break
        task = parse_task_line(line)
        if task is None:
            continue
        if len(task.indent) <= depth:
            break
        found.append(j)
    return found
