import os


class Config:
    VERSION = "v1.0"

    # ==========================
    # 1. 归档配置
    # ==========================
    # 相对路径以待办文档所在目录为基准
    ARCHIVE_DIR = r'simple-todo'
    ARCHIVE_FILE_PATTERN = r'archive-{month}.md'

    # ==========================
    # 2. 设置文件
    # ==========================
    SETTINGS_DIR = os.path.join(os.path.expanduser('~'), '.simple-todo')
    SETTINGS_FILE = os.path.join(SETTINGS_DIR, 'settings.json')

    # ==========================
    # 3. 行为参数
    # ==========================
    DATE_FORMAT = '%Y-%m-%d'
    DEFAULT_LANGUAGE = 'en'
    DEFAULT_PREVIEW = True

    # 扫描起点: 'document' = 从文档开头, 'cursor' = 从光标行向后
    SCAN_FROM_DOCUMENT = 'document'
    SCAN_FROM_CURSOR = 'cursor'
    DEFAULT_SCAN_ORIGIN = SCAN_FROM_DOCUMENT

    DEBUG_MODE = os.environ.get('SIMPLETODO_DEBUG', '').strip().lower() in ('1', 'true', 'yes', 'on')
