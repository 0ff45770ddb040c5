"""
JSON file persistence for the quote store.
Reads and atomically rewrites the single document holding the quote collection.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Dict

from utils import store_logger
from utils.exceptions import StorageError, ErrorCodes


def default_document() -> Dict[str, Any]:
    """空集合的默认文档"""
    return {"quotes": []}


class JsonFileAdapter:
    """JSON 文件适配器"""

    def __init__(self, path):
        self.path = Path(path)

    def read(self) -> Dict[str, Any]:
        """读取文件；文件不存在时返回默认文档"""
        if not self.path.exists():
            store_logger.debug(f"[Store] {self.path} does not exist, starting with an empty collection")
            return default_document()

        try:
            text = self.path.read_text(encoding="utf-8")
        except OSError as e:
            raise StorageError(
                f"Cannot read {self.path}: {e}",
                ErrorCodes.STORAGE_READ_FAILED,
                {"path": str(self.path)}
            ) from e
        except UnicodeDecodeError as e:
            raise StorageError(
                f"{self.path} is not valid UTF-8: {e}",
                ErrorCodes.STORAGE_CORRUPTED,
                {"path": str(self.path)}
            ) from e

        # 空文件按空集合处理
        if not text.strip():
            return default_document()

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise StorageError(
                f"{self.path} is not valid JSON: {e}",
                ErrorCodes.STORAGE_CORRUPTED,
                {"path": str(self.path)}
            ) from e

        if not isinstance(data, dict) or not isinstance(data.get("quotes", []), list):
            raise StorageError(
                f"{self.path} does not contain a 'quotes' array",
                ErrorCodes.STORAGE_CORRUPTED,
                {"path": str(self.path)}
            )

        data.setdefault("quotes", [])
        return data

    def write(self, data: Dict[str, Any]) -> None:
        """整体重写文件（先写临时文件再原子替换）"""
        payload = json.dumps(data, ensure_ascii=False, indent=2)
        tmp_path = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=str(self.path.parent)
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp_path, self.path)
            tmp_path = None
        except OSError as e:
            raise StorageError(
                f"Cannot write {self.path}: {e}",
                ErrorCodes.STORAGE_WRITE_FAILED,
                {"path": str(self.path)}
            ) from e
        finally:
            if tmp_path is not None and os.path.exists(tmp_path):
                os.unlink(tmp_path)
