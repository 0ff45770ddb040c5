"""
Data models for the quote store.
Defines the quote record and the import result shapes.
"""

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Mapping

from utils.exceptions import ValidationError, ErrorCodes

# 持久化文件中的字段名（与导入/导出文件格式一致）
RECORD_FIELDS = ("id", "quote", "author", "createdAt")


def generate_quote_id() -> str:
    """生成新的语录ID（UUID4）"""
    return str(uuid.uuid4())


def utc_timestamp() -> str:
    """当前 UTC 时间的 ISO-8601 字符串，精确到毫秒，例如 2024-05-01T10:20:30.123Z"""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(value: str) -> datetime:
    """解析 ISO-8601 时间戳（兼容 Z 后缀）"""
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


@dataclass(frozen=True)
class QuoteRecord:
    """语录记录"""
    id: str
    quote: str
    author: str
    created_at: str

    @classmethod
    def create(cls, quote: str, author: str) -> "QuoteRecord":
        """创建新记录，生成ID与时间戳"""
        quote = quote or ""
        author = author or ""
        if not quote.strip():
            raise ValidationError("Quote text must not be empty",
                                  ErrorCodes.VALIDATION_EMPTY_FIELD, {"field": "quote"})
        if not author.strip():
            raise ValidationError("Author must not be empty",
                                  ErrorCodes.VALIDATION_EMPTY_FIELD, {"field": "author"})

        return cls(id=generate_quote_id(), quote=quote, author=author, created_at=utc_timestamp())

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "QuoteRecord":
        """从持久化格式构建记录"""
        if not isinstance(data, Mapping):
            raise ValidationError(
                f"Quote record must be an object, got {type(data).__name__}",
                ErrorCodes.VALIDATION_INVALID_RECORD
            )

        missing = [name for name in RECORD_FIELDS
                   if not isinstance(data.get(name), str) or not data.get(name).strip()]
        if missing:
            raise ValidationError(
                f"Quote record is missing or has invalid fields: {', '.join(missing)}",
                ErrorCodes.VALIDATION_INVALID_RECORD,
                {"id": data.get("id"), "fields": missing}
            )

        return cls(
            id=data["id"],
            quote=data["quote"],
            author=data["author"],
            created_at=data["createdAt"]
        )

    def to_dict(self) -> Dict[str, str]:
        """转换为持久化格式"""
        return {
            "id": self.id,
            "quote": self.quote,
            "author": self.author,
            "createdAt": self.created_at,
        }


@dataclass(frozen=True)
class ImportResult:
    """导入结果"""
    imported: int = 0
    skipped: int = 0
