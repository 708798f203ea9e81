"""
Merge migrated tasks into the target date section.

Identity during a merge is the ``(indent, content)`` pair: two task lines
with the same indentation string and the same content text are the same
node whatever their status markers say. The first occurrence wins.
"""
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from ..utils import Logger
from .document import (
    LineDocument,
    LineKind,
    classify,
    is_blank,
    parse_task_line,
    reset_status,
)

MergeKey = Tuple[str, str]


@dataclass
class _MergeEntry:
    line: str
    indent: str
    parent: Optional[MergeKey] = None
    children: List[MergeKey] = field(default_factory=list)


def _collect(tasks: List[str], entries: Dict[MergeKey, _MergeEntry]) -> None:
    # [Stack] 仅依据输入流自身的缩进重建层级，与原文档行号无关
    stack: List[MergeKey] = []
    for line in tasks:
        task = parse_task_line(line)
        if task is None:
            continue
        while stack and len(entries[stack[-1]].indent) >= len(task.indent):
            stack.pop()

        key = task.merge_key
        if key not in entries:
            parent = stack[-1] if stack else None
            entries[key] = _MergeEntry(line=line, indent=task.indent, parent=parent)
            if parent is not None:
                entries[parent].children.append(key)
        # A duplicate keeps its first position but still becomes the
        # current parent, so its incoming children attach to it.
        stack.append(key)


def _emit(entries: Dict[MergeKey, _MergeEntry]) -> List[str]:
    result = []

    def _walk(key):
        entry = entries[key]
        result.append(entry.line)
        for child in entry.children:
            _walk(child)

    for key, entry in entries.items():
        if entry.parent is None:
            _walk(key)
    return result


def merge(existing: List[str], incoming: List[str]) -> List[str]:
    """Existing target tasks first, then incoming, duplicates collapsed.

    Children are re-nested recursively under their parent at every level.
    """
    # dict 保持插入顺序，输出顺序即首次出现顺序
    entries: Dict[MergeKey, _MergeEntry] = {}
    _collect(existing, entries)
    _collect(incoming, entries)
    return _emit(entries)


def prepare_incoming(lines: List[str]) -> List[str]:
    """Migrated work always restarts as Todo on its new date."""
    return [reset_status(line) for line in lines]


def section_end(doc: LineDocument, header_index: int) -> int:
    """End (exclusive) of a date section: the next date header or EOF."""
    following = doc.date_header_indices(start=header_index + 1)
    return following[0] if following else len(doc)


def insert_into_target(lines: List[str], today: str, tasks: List[str],
                       insert_line: int, header_label: str) -> List[str]:
    """
    Place ``tasks`` under the ``today`` header.

    An existing header gets its whole section merged in place; otherwise a
    new ``header_label`` block is inserted at ``insert_line``. Either way the
    block is padded with one blank line against non-blank neighbours.
    """
    doc = LineDocument(lines)
    lines = list(lines)
    today_idx = doc.find_date_header(today)

    if today_idx is None:
        pos = min(max(insert_line, 0), len(lines))
        block = []
        if pos > 0 and not is_blank(lines[pos - 1]):
            block.append('')
        block.append(header_label)
        block.extend(tasks)
        if pos < len(lines) and not is_blank(lines[pos]):
            block.append('')
        lines[pos:pos] = block
        Logger.debug(f"insert: new section {header_label!r} at line {pos}")
        return lines

    end = section_end(doc, today_idx)
    section = lines[today_idx + 1:end]
    trailing = []
    while section and is_blank(section[-1]):
        trailing.append(section.pop())
    existing = [l for l in section if classify(l) is LineKind.TASK]
    # 非任务行保留在合并结果之后; 段内空行交给 normalize
    others = [l for l in section if classify(l) is LineKind.OTHER]
    merged = merge(existing, tasks) + others

    if trailing:
        merged.extend(trailing)
    elif end < len(lines):
        merged.append('')
    lines[today_idx + 1:end] = merged

    if today_idx > 0 and not is_blank(lines[today_idx - 1]):
        lines.insert(today_idx, '')

    Logger.debug_block(f"insert: merged section {today}", merged)
    return lines
