import os
import datetime
import tempfile
import inspect
from .config import Config


class Logger:
    _shown_errors = set()

    @staticmethod
    def _get_caller_info():
        # Stack: 0=here, 1=caller(info/debug), 2=actual caller
        try:
            stack = inspect.stack()
            # Find the first frame outside of utils.py/Logger
            for frame in stack[1:]:
                fn = os.path.basename(frame.filename)
                if fn != 'utils.py':
                    func = frame.function
                    if func == '<module>': func = 'Main'
                    return f"[{fn}:{func}]"
            return "[Unknown:Unknown]"
        except Exception:
            return "[Unknown:Unknown]"

    @staticmethod
    def error_once(key, message):
        if key not in Logger._shown_errors:
            caller = Logger._get_caller_info()
            print(f"\033[91m[ERROR] {caller} {message}\033[0m")
            Logger._shown_errors.add(key)

    @staticmethod
    def warn(message):
        t = datetime.datetime.now().strftime('%H:%M:%S')
        print(f"\033[93m[{t} WARN] {message}\033[0m")

    @staticmethod
    def info(message):
        t = datetime.datetime.now().strftime('%H:%M:%S')
        print(f"\033[92m[{t} INFO] {message}\033[0m")

    @staticmethod
    def debug(message):
        if Config.DEBUG_MODE:
            caller = Logger._get_caller_info()
            print(f"\033[90m[DEBUG] {caller} {message}\033[0m")

    @staticmethod
    def debug_block(title, lines):
        if Config.DEBUG_MODE:
            caller = Logger._get_caller_info()
            print(f"\033[96m--- [DEBUG] {caller} {title} ---\033[0m")
            for line in lines:
                print(f"  | {line.rstrip()}")
            print(f"\033[96m-----------------------\033[0m")


class FileUtils:
    @staticmethod
    def read_content(filepath):
        try:
            with open(filepath, 'r', encoding='utf-8', newline='') as f:
                return f.read()
        except Exception:
            return None

    @staticmethod
    def ensure_dir(dir_path):
        try:
            os.makedirs(dir_path, exist_ok=True)
            return True
        except OSError as e:
            Logger.error_once(f"mkdir_{dir_path}", f"无法创建目录 {dir_path}: {e}")
            return False

    @staticmethod
    def write_file(filepath, lines_or_content):
        # [原子性] 使用 tempfile + os.replace 以确保原子写入
        dir_name = os.path.dirname(filepath) or '.'
        temp_name = None

        if lines_or_content is None:
            final_content = ""
        elif isinstance(lines_or_content, list):
            final_content = "\n".join([str(l) for l in lines_or_content if l is not None])
        else:
            final_content = str(lines_or_content)

        try:
            # 在同一目录中创建临时文件（原子重命名所需）
            with tempfile.NamedTemporaryFile('w', dir=dir_name, delete=False, encoding='utf-8', newline='') as tf:
                temp_name = tf.name
                tf.write(final_content)

                # 刷新并 fsync 以确保数据物理写入
                tf.flush()
                os.fsync(tf.fileno())

            # 原子交换
            os.replace(temp_name, filepath)
            return True

        except Exception as e:
            Logger.error_once(f"write_{filepath}", f"写入失败 {filepath}: {e}")
            # 如果临时文件存在，则清理
            if temp_name and os.path.exists(temp_name):
                try:
                    os.remove(temp_name)
                except OSError:
                    pass
            return False
