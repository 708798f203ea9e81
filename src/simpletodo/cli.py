import argparse
import sys
from dataclasses import asdict

from .config import Config
from .errors import SimpleTodoError
from .i18n import I18n
from .manager import TodoManager
from .settings import SettingsManager
from .utils import Logger


def _truthy(value):
    return value.strip().lower() in ('1', 'true', 'yes', 'on', 'y')


def build_parser():
    parser = argparse.ArgumentParser(prog='simple-todo',
                                     description='Date-partitioned plain-text todo list tools')
    parser.add_argument('--settings', default=None, help='settings file (default: %(default)s)')
    sub = parser.add_subparsers(dest='command', required=True)

    p = sub.add_parser('reschedule', help='move the latest unfinished tasks to today')
    p.add_argument('file')
    p.add_argument('--today', default=None, help='YYYY-MM-DD (default: system date)')
    p.add_argument('--cursor', type=int, default=0, help='0-based cursor line')
    p.add_argument('--scan-from', choices=[Config.SCAN_FROM_DOCUMENT, Config.SCAN_FROM_CURSOR], default=None)
    p.add_argument('--yes', '-y', action='store_true', help='apply without asking')
    p.add_argument('--no-preview', action='store_true')

    p = sub.add_parser('archive', help='archive completed months')
    p.add_argument('file')
    p.add_argument('--archive-dir', default=None)

    p = sub.add_parser('toggle', help='cycle the status of one task line')
    p.add_argument('file')
    p.add_argument('line', type=int, help='0-based line number')

    p = sub.add_parser('settings', help='show or change persisted settings')
    p.add_argument('--language', default=None)
    p.add_argument('--archive-dir', default=None)
    p.add_argument('--preview', default=None, help='on/off')
    p.add_argument('--scan-origin', choices=[Config.SCAN_FROM_DOCUMENT, Config.SCAN_FROM_CURSOR], default=None)
    return parser


def _ask(prompt):
    def _confirm(_result):
        try:
            return input(prompt).strip().lower() in ('y', 'yes')
        except EOFError:
            return False
    return _confirm


def _run_settings(args, sm):
    changes = {}
    if args.language is not None: changes['language'] = args.language
    if args.archive_dir is not None: changes['archive_dir'] = args.archive_dir
    if args.preview is not None: changes['preview'] = _truthy(args.preview)
    if args.scan_origin is not None: changes['scan_origin'] = args.scan_origin
    if changes:
        sm.update(**changes)
        if not sm.save():
            return 1
        i18n = I18n(sm.settings.language)
        key = 'settings.language.changed' if 'language' in changes else 'settings.saved'
        Logger.info(i18n.t(key))
    for key, value in asdict(sm.settings).items():
        print(f"{key} = {value}")
    return 0


def main(argv=None):
    args = build_parser().parse_args(argv)
    sm = SettingsManager(args.settings)

    if args.command == 'settings':
        return _run_settings(args, sm)

    settings = sm.settings
    if args.command == 'reschedule':
        if args.scan_from:
            settings.scan_origin = args.scan_from
        if args.no_preview:
            settings.preview = False
    manager = TodoManager(settings)

    try:
        if args.command == 'reschedule':
            confirm = None if args.yes else _ask(manager.i18n.t('commands.rescheduleTodos.notice.confirm'))
            report = manager.reschedule_file(args.file, today=args.today,
                                             cursor_line=args.cursor, confirm=confirm)
            if report.committed:
                print(f"cursor: {report.result.anchor_line}")
        elif args.command == 'archive':
            report = manager.archive_file(args.file, archive_dir=args.archive_dir)
            if report.failed:
                return 1
        elif args.command == 'toggle':
            manager.toggle_line(args.file, args.line)
    except SimpleTodoError as e:
        Logger.error_once(type(e).__name__, str(e))
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
