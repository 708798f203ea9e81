"""Line classification for the date-partitioned todo document.

A document is a flat list of lines. Every line is exactly one of:

* a date header    ``2024-01-02 Tue`` (``YYYY-MM-DD`` prefix, free trailing text)
* a task line      ``<indent>- [<status>] <content>``
* a blank line     (whitespace only)
* anything else    preserved verbatim, never touched by task logic
"""
import re
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

DATE_HEADER_PATTERN = re.compile(r'^(\d{4}-\d{2}-\d{2})')
MONTH_PATTERN = re.compile(r'^(\d{4}-\d{2})-\d{2}')
# 通用任务行: 任意单字符状态标记 (含非法标记)
TASK_LINE_PATTERN = re.compile(r'^([\t ]*)-\s*\[(.)\]\s*(.*)$')
INDENT_PATTERN = re.compile(r'^[\t ]*')


class TaskStatus(Enum):
    TODO = ' '
    IN_PROGRESS = '/'
    DONE = 'x'

    @classmethod
    def from_marker(cls, marker: str) -> Optional['TaskStatus']:
        for status in cls:
            if status.value == marker:
                return status
        return None

    @property
    def unfinished(self) -> bool:
        return self is not TaskStatus.DONE

    def next(self) -> 'TaskStatus':
        # Todo -> InProgress -> Done -> Todo
        if self is TaskStatus.TODO:
            return TaskStatus.IN_PROGRESS
        if self is TaskStatus.IN_PROGRESS:
            return TaskStatus.DONE
        return TaskStatus.TODO


class LineKind(Enum):
    DATE = 'date'
    TASK = 'task'
    BLANK = 'blank'
    OTHER = 'other'


@dataclass(frozen=True)
class TaskLine:
    indent: str
    marker: str
    content: str
    marker_pos: int

    @property
    def status(self) -> Optional[TaskStatus]:
        return TaskStatus.from_marker(self.marker)

    @property
    def unfinished(self) -> bool:
        status = self.status
        return status is not None and status.unfinished

    @property
    def merge_key(self):
        # 状态不参与身份判断
        return (self.indent, self.content)


@dataclass(frozen=True)
class ToggleResult:
    line: str
    previous: Optional[TaskStatus]
    current: TaskStatus


def match_date_header(line: str) -> Optional[str]:
    m = DATE_HEADER_PATTERN.match(line)
    return m.group(1) if m else None


def match_month(line: str) -> Optional[str]:
    m = MONTH_PATTERN.match(line)
    return m.group(1) if m else None


def parse_task_line(line: str) -> Optional[TaskLine]:
    """Match a task line with any single-character status marker."""
    m = TASK_LINE_PATTERN.match(line)
    if not m:
        return None
    return TaskLine(indent=m.group(1), marker=m.group(2), content=m.group(3), marker_pos=m.start(2))


def is_task_line(line: str) -> bool:
    return parse_task_line(line) is not None


def is_unfinished_task_line(line: str) -> bool:
    task = parse_task_line(line)
    return task is not None and task.unfinished


def is_blank(line: str) -> bool:
    return not line.strip()


def indent_of(line: str) -> str:
    return INDENT_PATTERN.match(line).group(0)


def classify(line: str) -> LineKind:
    if match_date_header(line) is not None:
        return LineKind.DATE
    if is_blank(line):
        return LineKind.BLANK
    task = parse_task_line(line)
    if task is not None and task.status is not None:
        return LineKind.TASK
    # [NOTE] 非法状态标记按普通文本处理
    return LineKind.OTHER


def with_status(line: str, status: TaskStatus) -> str:
    """Rewrite only the marker character; every other byte is kept."""
    task = parse_task_line(line)
    if task is None:
        return line
    return line[:task.marker_pos] + status.value + line[task.marker_pos + 1:]


def reset_status(line: str) -> str:
    task = parse_task_line(line)
    if task is None or task.status is TaskStatus.TODO:
        return line
    return with_status(line, TaskStatus.TODO)


def toggle_task_line(line: str) -> Optional[ToggleResult]:
    task = parse_task_line(line)
    if task is None:
        return None
    previous = task.status
    current = previous.next() if previous is not None else TaskStatus.TODO
    return ToggleResult(line=f"{task.indent}- [{current.value}] {task.content}",
                        previous=previous, current=current)


class LineDocument:
    """Index-addressable view over the lines of one document.

    The text itself stays the source of truth; splitting on the detected
    line terminator and joining back is lossless, so untouched lines
    round-trip byte for byte. A document is CRLF only when every ``\\n`` is
    preceded by ``\\r``; mixed endings are split on ``\\n`` and left alone.
    """

    def __init__(self, lines: List[str], newline: str = '\n'):
        self.lines = list(lines)
        self.newline = newline

    @staticmethod
    def detect_newline(text: str) -> str:
        crlf = text.count('\r\n')
        if crlf and crlf == text.count('\n'):
            return '\r\n'
        return '\n'

    @classmethod
    def from_text(cls, text: str) -> 'LineDocument':
        newline = cls.detect_newline(text)
        return cls(text.split(newline), newline=newline)

    def join(self, lines: List[str]) -> str:
        """Join lines with this document's terminator."""
        return self.newline.join(lines)

    def to_text(self) -> str:
        return self.join(self.lines)

    def __len__(self):
        return len(self.lines)

    def __getitem__(self, index):
        return self.lines[index]

    def __iter__(self):
        return iter(self.lines)

    def kind(self, index: int) -> LineKind:
        return classify(self.lines[index])

    def date_at(self, index: int) -> Optional[str]:
        return match_date_header(self.lines[index])

    def task_at(self, index: int) -> Optional[TaskLine]:
        return parse_task_line(self.lines[index])

    def find_date_header(self, date: str, start: int = 0) -> Optional[int]:
        for i in range(max(start, 0), len(self.lines)):
            if match_date_header(self.lines[i]) == date:
                return i
        return None

    def date_header_indices(self, start: int = 0) -> List[int]:
        return [i for i in range(max(start, 0), len(self.lines))
                if match_date_header(self.lines[i]) is not None]
