from dataclasses import dataclass
from typing import List

from .document import LineKind, classify, match_date_header


@dataclass
class NormalizeResult:
    lines: List[str]
    anchor_line: int


def collapse_blank_lines(lines: List[str]) -> List[str]:
    """
    Exactly one blank line between date blocks, no stray blanks elsewhere.

    - a blank survives only right after a date header or a task line, once;
    - a date header gets one synthetic blank in front of it when the
      previous emitted line is not blank;
    - every other line passes through unchanged.
    """
    result: List[str] = []
    last_kind = None
    last_was_blank = False

    for line in lines:
        kind = classify(line)
        if kind is LineKind.BLANK:
            if not last_was_blank and last_kind in (LineKind.DATE, LineKind.TASK):
                result.append(line)
                last_was_blank = True
            continue

        if kind is LineKind.DATE and result and not last_was_blank:
            result.append('')
        result.append(line)
        last_kind = kind
        last_was_blank = False

    return result


def find_anchor_line(lines: List[str], date: str) -> int:
    """Last line of the ``date`` block (0 when the header is missing)."""
    for i, line in enumerate(lines):
        if match_date_header(line) != date:
            continue
        anchor = i
        for j in range(i + 1, len(lines)):
            if classify(lines[j]) in (LineKind.DATE, LineKind.BLANK):
                break
            anchor = j
        return anchor
    return 0


def normalize(lines: List[str], today: str) -> NormalizeResult:
    normalized = collapse_blank_lines(lines)
    return NormalizeResult(lines=normalized, anchor_line=find_anchor_line(normalized, today))
