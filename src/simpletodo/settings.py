import os
import json
import shutil
from dataclasses import asdict, dataclass, fields

from .config import Config
from .utils import Logger, FileUtils


@dataclass
class Settings:
    language: str = Config.DEFAULT_LANGUAGE
    archive_dir: str = Config.ARCHIVE_DIR
    preview: bool = Config.DEFAULT_PREVIEW
    scan_origin: str = Config.DEFAULT_SCAN_ORIGIN

    @classmethod
    def from_dict(cls, data):
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in (data or {}).items() if k in known})


class SettingsManager:
    def __init__(self, path=None):
        self.path = path or Config.SETTINGS_FILE
        self.settings = Settings()
        self.load()

    def load(self):
        backup_file = self.path + ".bak"

        # 1. 尝试主文件
        if os.path.exists(self.path):
            try:
                with open(self.path, 'r', encoding='utf-8') as f:
                    self.settings = Settings.from_dict(json.load(f))
                return
            except (OSError, ValueError, TypeError):
                Logger.error_once("settings_load_main", "设置文件损坏，尝试读取备份...")

        # 2. 尝试备份文件
        if os.path.exists(backup_file):
            try:
                with open(backup_file, 'r', encoding='utf-8') as f:
                    self.settings = Settings.from_dict(json.load(f))
                Logger.info("成功从备份文件恢复设置。")
                return
            except (OSError, ValueError, TypeError):
                Logger.error_once("settings_load_bak", "备份文件也损坏！")

        # 3. 完全失败 -> 默认值
        if os.path.exists(self.path) or os.path.exists(backup_file):
            Logger.warn("设置文件无法恢复，已重置为默认设置。")

        self.settings = Settings()

    def save(self):
        if not FileUtils.ensure_dir(os.path.dirname(self.path) or '.'):
            return False
        # 1. 先创建备份
        if os.path.exists(self.path):
            try:
                shutil.copy2(self.path, self.path + ".bak")
            except OSError:
                pass
        # 2. 写入新设置
        content = json.dumps(asdict(self.settings), ensure_ascii=False, indent=2)
        return FileUtils.write_file(self.path, content)

    def update(self, **changes):
        unknown = set(changes) - {f.name for f in fields(Settings)}
        if unknown:
            raise KeyError(f"unknown settings: {', '.join(sorted(unknown))}")
        if changes.get('scan_origin') not in (None, Config.SCAN_FROM_DOCUMENT, Config.SCAN_FROM_CURSOR):
            raise ValueError(f"invalid scan origin: {changes['scan_origin']!r}")
        for key, value in changes.items():
            setattr(self.settings, key, value)
        return self.settings
