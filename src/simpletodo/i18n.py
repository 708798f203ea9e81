import datetime
import re

from .config import Config

LOCALES = {
    'en': {
        'status': {
            'todo': "Todo",
            'inProgress': "In progress",
            'done': "Done",
            'unknown': "Unknown status",
        },
        'weekday': {
            'sunday': "Sun",
            'monday': "Mon",
            'tuesday': "Tue",
            'wednesday': "Wed",
            'thursday': "Thu",
            'friday': "Fri",
            'saturday': "Sat",
        },
        'settings': {
            'language': {'changed': "Language changed successfully"},
            'saved': "Settings saved",
        },
        'commands': {
            'toggleTodo': {
                'notice': "Task status changed: {from} -> {to}",
                'notTask': "Line {line} is not a task",
            },
            'rescheduleTodos': {
                'notice': {
                    'noTasks': "No unfinished tasks found",
                    'success': "Tasks have been rescheduled",
                    'cancelled': "Reschedule cancelled, nothing written",
                    'confirm': "Apply these changes? [y/N] ",
                },
            },
            'archiveTodos': {
                'header': "# {month} archived tasks",
                'notice': {
                    'hasUnfinished': "{month} has unfinished tasks, skipping...",
                    'archived': "{month}: archived {count} tasks to {path}",
                    'archiveFailed': "Failed to create/update archive file {path}",
                    'updateFailed': "Failed to update file",
                    'nothing': "Nothing to archive",
                },
            },
        },
        'diffViewer': {
            'title': "Changes before/after",
        },
    },
    'zh-CN': {
        'status': {
            'todo': "待办",
            'inProgress': "进行中",
            'done': "已完成",
            'unknown': "未知状态",
        },
        'weekday': {
            'sunday': "周日",
            'monday': "周一",
            'tuesday': "周二",
            'wednesday': "周三",
            'thursday': "周四",
            'friday': "周五",
            'saturday': "周六",
        },
        'settings': {
            'language': {'changed': "语言切换成功"},
            'saved': "设置已保存",
        },
        'commands': {
            'toggleTodo': {
                'notice': "任务状态已更改: {from} -> {to}",
                'notTask': "第 {line} 行不是任务",
            },
            'rescheduleTodos': {
                'notice': {
                    'noTasks': "没有找到未完成的任务",
                    'success': "任务已重新规划",
                    'cancelled': "已取消重新规划，未写入任何内容",
                    'confirm': "确认应用这些变更? [y/N] ",
                },
            },
            'archiveTodos': {
                'header': "# {month} 已归档任务",
                'notice': {
                    'hasUnfinished': "{month} 还有未完成的任务，无法归档该月份的任务",
                    'archived': "{month}: 已归档 {count} 个任务到 {path}",
                    'archiveFailed': "归档文件 {path} 创建/更新失败",
                    'updateFailed': "更新文件失败",
                    'nothing': "没有可归档的任务",
                },
            },
        },
        'diffViewer': {
            'title': "变更前后对比",
        },
    },
}

_ZH_ALIASES = ('zh-cn', 'zh', 'zh-hans', 'zh_cn', 'zh_hans')
_WEEKDAY_KEYS = ('monday', 'tuesday', 'wednesday', 'thursday', 'friday', 'saturday', 'sunday')
_PLACEHOLDER = re.compile(r'\{(\w+)\}')


def normalize_locale(locale):
    if locale and locale.lower() in _ZH_ALIASES:
        return 'zh-CN'
    return Config.DEFAULT_LANGUAGE


class I18n:
    def __init__(self, locale=None):
        self.locale = normalize_locale(locale)
        self.translations = LOCALES[self.locale]

    def t(self, key, **params):
        value = self.translations
        for part in key.split('.'):
            if not isinstance(value, dict) or part not in value:
                return key
            value = value[part]
        if not isinstance(value, str):
            return key
        if params:
            return _PLACEHOLDER.sub(
                lambda m: str(params[m.group(1)]) if m.group(1) in params else m.group(0), value)
        return value

    def status_text(self, status):
        # status: TaskStatus | None
        key = {' ': 'todo', '/': 'inProgress', 'x': 'done'}.get(getattr(status, 'value', None), 'unknown')
        return self.t(f'status.{key}')

    def weekday(self, date_str):
        try:
            day = datetime.datetime.strptime(date_str, Config.DATE_FORMAT).date()
        except ValueError:
            return ""
        return self.t(f'weekday.{_WEEKDAY_KEYS[day.weekday()]}')

    def header_label(self, date_str):
        label = self.weekday(date_str)
        return f"{date_str} {label}" if label else date_str
