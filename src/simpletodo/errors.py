"""Failure taxonomy for the command layer.

The engine itself never raises on malformed input: unknown lines fall
through as plain text. These exceptions only leave ``TodoManager``.
"""


class SimpleTodoError(Exception):
    """Base class for every error raised by the command layer."""


class NoActiveContext(SimpleTodoError):
    """No readable document (or no usable cursor) to operate on."""

    def __init__(self, path, reason=None):
        self.path = path
        self.reason = reason
        msg = f"No active document: {path}"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg)


class NoUnfinishedTasks(SimpleTodoError):
    """The locator found no earlier date section with unfinished leaves."""


class MonthNotArchivable(SimpleTodoError):
    def __init__(self, month):
        self.month = month
        super().__init__(f"{month} still has unfinished tasks")


class StorageWriteFailure(SimpleTodoError):
    def __init__(self, path):
        self.path = path
        super().__init__(f"Failed to write {path}")
