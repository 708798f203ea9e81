import datetime
from dataclasses import dataclass, field
from typing import List, Optional

from ..config import Config
from ..utils import Logger
from .document import LineDocument
from .locator import locate
from .migrator import insert_into_target, prepare_incoming
from .normalizer import normalize
from .pruner import prune_lines

WEEKDAY_LABELS = ('Mon', 'Tue', 'Wed', 'Thu', 'Fri', 'Sat', 'Sun')


@dataclass
class RescheduleResult:
    found: bool
    original_text: str
    preview_text: str
    anchor_line: int = 0
    source_date: Optional[str] = None
    migrated_lines: List[str] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return self.preview_text != self.original_text


def default_header_label(today: str) -> str:
    try:
        day = datetime.datetime.strptime(today, Config.DATE_FORMAT).date()
    except ValueError:
        return today
    return f"{today} {WEEKDAY_LABELS[day.weekday()]}"


def scan_start_for(origin: str, cursor_line: int) -> int:
    if origin == Config.SCAN_FROM_CURSOR:
        return max(cursor_line, 0)
    if origin == Config.SCAN_FROM_DOCUMENT:
        return 0
    raise ValueError(f"unknown scan origin: {origin!r}")


def reschedule(document_text: str, today: str, cursor_line: int = 0,
               scan_origin: str = Config.DEFAULT_SCAN_ORIGIN,
               header_label: Optional[str] = None) -> RescheduleResult:
    """
    Move the nearest earlier section's unfinished leaves (with their
    ancestors) under ``today`` and return the would-be document.

    Nothing is written; the caller previews ``preview_text`` and commits it
    or throws it away.

    ``cursor_line`` is 0-based. It is the scan origin when ``scan_origin``
    is ``cursor`` and, when today's header does not exist yet, the line at
    which the new section is inserted.
    """
    doc = LineDocument.from_text(document_text)
    located = locate(doc.lines, today, scan_start_for(scan_origin, cursor_line))
    if not located.found:
        return RescheduleResult(found=False, original_text=document_text,
                                preview_text=document_text, anchor_line=max(cursor_line, 0))

    incoming = prepare_incoming(located.lines)

    # --- 1. 清理源位置 (仅叶子; 祖先由级联处理) ---
    pruned = prune_lines(doc.lines, located.leaf_line_numbers)
    shift = sum(1 for i in pruned.deleted if i < cursor_line)
    insert_line = cursor_line - shift

    # --- 2. 合并到目标日期 ---
    label = header_label if header_label is not None else default_header_label(today)
    merged = insert_into_target(pruned.lines, today, incoming, insert_line, label)

    # --- 3. 空行规范化 + 光标锚点 ---
    normalized = normalize(merged, today)

    Logger.debug_block(f"reschedule {located.source_date} -> {today}", incoming)
    return RescheduleResult(
        found=True,
        original_text=document_text,
        preview_text=doc.join(normalized.lines),
        anchor_line=normalized.anchor_line,
        source_date=located.source_date,
        migrated_lines=incoming,
    )
