import os
import sys
from pathlib import Path
from typing import Mapping, Optional

from .exceptions import StorageError, ErrorCodes, handle_exception


# 项目根目录（即包含 main.py 的目录）
BASE_DIR = Path(__file__).resolve().parents[1]

# 常用子目录路径
CONFIG_DIR = BASE_DIR / 'config'
WEB_DIR = BASE_DIR / 'web'
STATIC_DIR = WEB_DIR / 'static'

# 应用数据目录名
APP_DIR_NAME = 'quotes'

# 存储文件名
QUOTES_FILENAME = 'quotes.json'

# 日志子目录名
LOG_DIR_NAME = 'log'


@handle_exception
def get_data_dir(platform: Optional[str] = None,
                 environ: Optional[Mapping[str, str]] = None,
                 home: Optional[Path] = None) -> Path:
    """
    返回当前平台的用户级应用数据目录

    - Windows: %APPDATA%\\quotes，未设置时为 <home>\\AppData\\Roaming\\quotes
    - macOS: <home>/Library/Application Support/quotes
    - Linux 及其他: $XDG_DATA_HOME/quotes，未设置时为 <home>/.local/share/quotes

    QUOTES_DATA_DIR 设置时优先于以上所有规则。
    """
    platform = platform or sys.platform
    environ = os.environ if environ is None else environ
    home = Path(home) if home is not None else Path.home()

    override = environ.get('QUOTES_DATA_DIR')
    if override:
        return Path(override)

    if platform == 'win32':
        base = environ.get('APPDATA') or str(home / 'AppData' / 'Roaming')
        return Path(base) / APP_DIR_NAME

    if platform == 'darwin':
        return home / 'Library' / 'Application Support' / APP_DIR_NAME

    base = environ.get('XDG_DATA_HOME') or str(home / '.local' / 'share')
    return Path(base) / APP_DIR_NAME


def ensure_data_dir(path: Path) -> Path:
    """确保数据目录存在（幂等）"""
    path = Path(path)
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise StorageError(
            f"Cannot create data directory {path}: {e}",
            ErrorCodes.STORAGE_DIR_UNAVAILABLE,
            {"path": str(path)}
        ) from e
    return path


if __name__ == "__main__":
    print("BASE_DIR:", BASE_DIR)
    print("CONFIG_DIR:", CONFIG_DIR)
    print("STATIC_DIR:", STATIC_DIR)
    print("DATA_DIR:", get_data_dir())
