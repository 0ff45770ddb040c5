"""
Storage module for the quote system.
Provides the JSON-file backed quote store.
"""

from pathlib import Path
from typing import Optional

from utils import StorageConfig, get_data_dir, ensure_data_dir
from .connection import JsonFileAdapter
from .models import QuoteRecord, ImportResult
from .quote_store import QuoteStore


def resolve_data_dir(storage_config: Optional[StorageConfig] = None) -> Path:
    """解析数据目录并确保其存在"""
    storage_config = storage_config or StorageConfig()
    data_dir = Path(storage_config.data_dir) if storage_config.data_dir else get_data_dir()
    return ensure_data_dir(data_dir)


__all__ = ['models', 'connection', 'quote_store', 'QuoteStore', 'QuoteRecord',
           'ImportResult', 'JsonFileAdapter', 'resolve_data_dir']
