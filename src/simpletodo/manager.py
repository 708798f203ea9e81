"""
Command layer around the pure engine.

Reads the document once, computes the new text, optionally shows a diff and
asks for confirmation, then writes once. There is no locking: an edit made
to the file between the read and the write is overwritten.
"""
import os
import datetime
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from .config import Config
from .errors import MonthNotArchivable, NoActiveContext, NoUnfinishedTasks, StorageWriteFailure
from .engine import LineDocument, RescheduleResult, ToggleResult, archive_by_month, remove_archived_lines, reschedule, toggle_task_line
from .i18n import I18n
from .preview import render_diff
from .settings import Settings
from .utils import FileUtils, Logger


@dataclass
class RescheduleReport:
    result: RescheduleResult
    committed: bool = False
    notice: Optional[NoUnfinishedTasks] = None


@dataclass
class ArchiveReport:
    archived: Dict[str, int] = field(default_factory=dict)
    skipped: List[MonthNotArchivable] = field(default_factory=list)
    failed: List[StorageWriteFailure] = field(default_factory=list)
    document_written: bool = False


class TodoManager:
    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or Settings()
        self.i18n = I18n(self.settings.language)

    @staticmethod
    def today():
        return datetime.date.today().strftime(Config.DATE_FORMAT)

    def _read(self, path):
        if not os.path.isfile(path):
            raise NoActiveContext(path, "file not found")
        content = FileUtils.read_content(path)
        if content is None:
            raise NoActiveContext(path, "unreadable")
        return content

    def _resolve_archive_dir(self, path, archive_dir=None):
        archive_dir = archive_dir or self.settings.archive_dir
        if os.path.isabs(archive_dir):
            return archive_dir
        return os.path.join(os.path.dirname(os.path.abspath(path)), archive_dir)

    # -------------------- reschedule --------------------
    def reschedule_file(self, path, today=None, cursor_line=0,
                        confirm: Optional[Callable[[RescheduleResult], bool]] = None) -> RescheduleReport:
        content = self._read(path)
        today = today or self.today()

        result = reschedule(content, today, cursor_line,
                            scan_origin=self.settings.scan_origin,
                            header_label=self.i18n.header_label(today))
        report = RescheduleReport(result=result)
        if not result.found:
            report.notice = NoUnfinishedTasks(self.i18n.t('commands.rescheduleTodos.notice.noTasks'))
            Logger.info(str(report.notice))
            return report

        Logger.info(f"{result.source_date} -> {today}: {len(result.migrated_lines)} lines")

        if self.settings.preview:
            print(render_diff(result.original_text, result.preview_text,
                              title=self.i18n.t('diffViewer.title')))
            if confirm is not None and not confirm(result):
                Logger.info(self.i18n.t('commands.rescheduleTodos.notice.cancelled'))
                return report

        if not FileUtils.write_file(path, result.preview_text):
            raise StorageWriteFailure(path)
        report.committed = True
        Logger.info(self.i18n.t('commands.rescheduleTodos.notice.success'))
        return report

    # -------------------- archive --------------------
    def _append_archive(self, archive_path, month, lines):
        existing = FileUtils.read_content(archive_path) if os.path.exists(archive_path) else None
        if existing is not None:
            content = existing + '\n' + '\n'.join(lines)
        else:
            header = self.i18n.t('commands.archiveTodos.header', month=month)
            content = header + '\n\n' + '\n'.join(lines)
        return FileUtils.write_file(archive_path, content)

    def archive_file(self, path, archive_dir=None) -> ArchiveReport:
        content = self._read(path)
        target_dir = self._resolve_archive_dir(path, archive_dir)
        plan = archive_by_month(content)
        report = ArchiveReport()

        for month in plan.skipped_months:
            report.skipped.append(MonthNotArchivable(month))
            Logger.info(self.i18n.t('commands.archiveTodos.notice.hasUnfinished', month=month))

        for month in plan.archivable_months:
            entry = plan.months[month]
            if not FileUtils.ensure_dir(target_dir):
                Logger.error_once(f"archive_dir_{target_dir}",
                                  self.i18n.t('commands.archiveTodos.notice.archiveFailed', path=target_dir))
                break

            archive_path = os.path.join(target_dir, Config.ARCHIVE_FILE_PATTERN.format(month=month))
            if not self._append_archive(archive_path, month, entry.completed_task_lines):
                report.failed.append(StorageWriteFailure(archive_path))
                Logger.error_once(f"archive_{archive_path}",
                                  self.i18n.t('commands.archiveTodos.notice.archiveFailed', path=archive_path))
                continue

            # 只有归档成功的月份才从原文件中删除
            content = remove_archived_lines(content, entry.completed_task_lines)
            report.archived[month] = len(entry.completed_task_lines)
            Logger.info(self.i18n.t('commands.archiveTodos.notice.archived', month=month,
                                    count=len(entry.completed_task_lines), path=archive_path))

        if not report.archived:
            Logger.info(self.i18n.t('commands.archiveTodos.notice.nothing'))
            return report

        if not FileUtils.write_file(path, content):
            Logger.error_once(f"update_{path}", self.i18n.t('commands.archiveTodos.notice.updateFailed'))
            raise StorageWriteFailure(path)
        report.document_written = True
        return report

    # -------------------- toggle --------------------
    def toggle_line(self, path, line_number) -> Optional[ToggleResult]:
        content = self._read(path)
        doc = LineDocument.from_text(content)
        lines = doc.lines
        if line_number < 0 or line_number >= len(lines):
            raise NoActiveContext(path, f"line {line_number} out of range")

        toggled = toggle_task_line(lines[line_number])
        if toggled is None:
            Logger.info(self.i18n.t('commands.toggleTodo.notTask', line=line_number))
            return None

        lines[line_number] = toggled.line
        if not FileUtils.write_file(path, doc.join(lines)):
            raise StorageWriteFailure(path)
        Logger.info(self.i18n.t('commands.toggleTodo.notice', **{
            'from': self.i18n.status_text(toggled.previous),
            'to': self.i18n.status_text(toggled.current),
        }))
        return toggled
