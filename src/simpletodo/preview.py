import difflib
import itertools

_COLORS = {'+': "\033[92m", '-': "\033[91m", '@': "\033[96m"}
_RESET = "\033[0m"


def diff_lines(old_content, new_content, context=2):
    """Unified diff of two document texts, without file headers."""
    diff = difflib.unified_diff(old_content.splitlines(), new_content.splitlines(),
                                n=context, lineterm='')
    # 跳过 difflib 固定输出的 ---/+++ 两行文件头
    return list(itertools.islice(diff, 2, None))


def render_diff(old_content, new_content, title=None, color=True, context=2):
    lines = diff_lines(old_content, new_content, context=context)
    if not lines:
        return ""
    out = []
    if title:
        out.append(f"--- {title} ---")
    for line in lines:
        prefix = _COLORS.get(line[:1]) if color else None
        out.append(f"{prefix}{line}{_RESET}" if prefix else line)
    return "\n".join(out)
