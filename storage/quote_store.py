"""
Quote store for the quote system.
Owns the in-memory quote collection and its persisted JSON file.

The store assumes a single writer process: every mutation rewrites the whole
file, so two processes mutating the same file concurrently can lose updates
(last write wins). Callers must not run concurrent writers against one file.
"""

import json
from pathlib import Path
from typing import Any, Dict, Iterator, List, Sequence, Set, Union

from utils import store_logger, log_execution
from utils.exceptions import StorageError, ValidationError, ImportFormatError, ErrorCodes
from .connection import JsonFileAdapter
from .models import QuoteRecord, ImportResult


class QuoteStore:
    """语录存储"""

    def __init__(self, adapter: Union[JsonFileAdapter, str, Path]):
        if not isinstance(adapter, JsonFileAdapter):
            adapter = JsonFileAdapter(adapter)
        self.adapter = adapter
        self._quotes: List[QuoteRecord] = []
        self._metadata: Dict[str, Any] = {}
        self.reload()

    @property
    def path(self) -> Path:
        return self.adapter.path

    def reload(self) -> None:
        """从文件重新加载集合"""
        document = self.adapter.read()
        quotes = []
        for index, item in enumerate(document.get("quotes", [])):
            try:
                quotes.append(QuoteRecord.from_dict(item))
            except ValidationError as e:
                raise StorageError(
                    f"{self.path} holds an invalid quote at position {index}: {e.message}",
                    ErrorCodes.STORAGE_CORRUPTED,
                    {"path": str(self.path), "index": index}
                ) from e

        self._quotes = quotes
        self._metadata = {k: v for k, v in document.items() if k != "quotes"}
        store_logger.debug(f"[Store] Loaded {len(quotes)} quotes from {self.path}")

    def _save(self) -> None:
        """整体写回文件"""
        self.adapter.write(self.export_all())

    @log_execution("Store", "add")
    def add(self, quote_text: str, author: str) -> QuoteRecord:
        """新增语录并持久化"""
        record = QuoteRecord.create(quote_text, author)
        self._quotes.append(record)
        try:
            self._save()
        except StorageError:
            self._quotes.pop()
            raise
        return record

    @log_execution("Store", "delete")
    def delete(self, quote_id: str) -> bool:
        """按ID删除第一条匹配的语录；不存在时返回 False"""
        for index, record in enumerate(self._quotes):
            if record.id == quote_id:
                break
        else:
            store_logger.info(f"[Store] No quote found with ID {quote_id}")
            return False

        removed = self._quotes.pop(index)
        try:
            self._save()
        except StorageError:
            self._quotes.insert(index, removed)
            raise
        return True

    def list_quotes(self) -> List[QuoteRecord]:
        """按插入顺序返回全部语录"""
        return list(self._quotes)

    def import_from(self, records: Sequence[Any]) -> ImportResult:
        """
        导入一组记录，跳过已存在的ID

        输入必须是列表，且每一项都必须是完整的语录对象，否则整体拒绝，
        集合保持不变。重复判断只看ID：文本相同但ID不同的语录都会保留。
        """
        if not isinstance(records, list):
            raise ImportFormatError(
                "Invalid file format: 'quotes' should be an array.",
                ErrorCodes.IMPORT_NOT_AN_ARRAY,
                {"type": type(records).__name__}
            )

        candidates = []
        for index, item in enumerate(records):
            try:
                candidates.append(QuoteRecord.from_dict(item))
            except ValidationError as e:
                raise ImportFormatError(
                    f"Invalid quote at position {index}: {e.message}",
                    ErrorCodes.IMPORT_INVALID_RECORD,
                    {"index": index}
                ) from e

        existing_ids: Set[str] = {record.id for record in self._quotes}
        new_quotes = []
        for record in candidates:
            if record.id in existing_ids:
                continue
            existing_ids.add(record.id)
            new_quotes.append(record)

        result = ImportResult(imported=len(new_quotes), skipped=len(candidates) - len(new_quotes))
        if new_quotes:
            previous = self._quotes
            self._quotes = previous + new_quotes
            try:
                self._save()
            except StorageError:
                self._quotes = previous
                raise

        store_logger.info(f"[Store] Imported {result.imported} quotes, skipped {result.skipped} duplicates")
        return result

    def import_file(self, path: Union[str, Path]) -> ImportResult:
        """从 JSON 文件导入语录"""
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ImportFormatError(
                f"Cannot read {path}: {e.strerror or e}",
                ErrorCodes.IMPORT_FILE_UNREADABLE,
                {"path": str(path)}
            ) from e
        except UnicodeDecodeError as e:
            raise ImportFormatError(
                f"{path} is not valid UTF-8: {e}",
                ErrorCodes.IMPORT_FILE_UNREADABLE,
                {"path": str(path)}
            ) from e

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ImportFormatError(
                f"{path} is not valid JSON: {e}",
                ErrorCodes.IMPORT_INVALID_JSON,
                {"path": str(path)}
            ) from e

        if not isinstance(data, dict):
            raise ImportFormatError(
                "Invalid file format: 'quotes' should be an array.",
                ErrorCodes.IMPORT_NOT_AN_ARRAY,
                {"path": str(path)}
            )

        return self.import_from(data.get("quotes"))

    def export_all(self) -> Dict[str, Any]:
        """导出当前集合的快照"""
        snapshot = dict(self._metadata)
        snapshot["quotes"] = [record.to_dict() for record in self._quotes]
        return snapshot

    def export_to(self, path: Union[str, Path]) -> Path:
        """将快照写入外部文件"""
        path = Path(path)
        JsonFileAdapter(path).write(self.export_all())
        store_logger.info(f"[Store] Exported {len(self._quotes)} quotes to {path}")
        return path

    def __len__(self) -> int:
        return len(self._quotes)

    def __iter__(self) -> Iterator[QuoteRecord]:
        return iter(list(self._quotes))
