"""
统一的配置管理模块
整合底层配置操作和应用层类型安全访问
"""

import json
import os
import logging
from typing import Any, Optional, Dict, List, Mapping, TypeVar
from dataclasses import dataclass, field
from pathlib import Path

from .exceptions import ConfigurationError, ErrorCodes
from .path_utils import CONFIG_DIR, QUOTES_FILENAME

# 获取配置专用日志器
config_logger = logging.getLogger("Config")

# 为泛型类型定义一个TypeVar
T = TypeVar('T')

DEVELOPMENT_MODE = "development"
PRODUCTION_MODE = "production"

# ============================================================================
# 配置数据类型定义
# ============================================================================

@dataclass
class LoggingModuleConfig:
    """模块日志配置"""
    level: str = "INFO"
    enabled: bool = True

@dataclass
class FileLoggingConfig:
    """文件日志配置"""
    enabled: bool = False
    directory: Optional[str] = None  # 为空时使用 <data_dir>/log
    filename: str = "quotes.log"
    rotation: Optional[Dict[str, Any]] = None

@dataclass
class ConsoleLoggingConfig:
    """控制台日志配置"""
    enabled: bool = True
    level: str = "WARNING"

@dataclass
class LoggingConfig:
    """完整日志配置"""
    level: str = "INFO"
    format: str = "[%(levelname)s][%(asctime)s][%(filename)s:%(lineno)d] - %(message)s"
    date_format: str = "%Y-%m-%d %H:%M:%S"
    file_config: FileLoggingConfig = field(default_factory=FileLoggingConfig)
    console_config: ConsoleLoggingConfig = field(default_factory=ConsoleLoggingConfig)
    modules: Dict[str, LoggingModuleConfig] = field(default_factory=dict)

@dataclass
class StorageConfig:
    """存储配置"""
    data_dir: Optional[str] = None  # 为空时按平台规则解析
    filename: str = QUOTES_FILENAME
    export_filename: str = QUOTES_FILENAME

@dataclass
class WebConfig:
    """Web 服务配置"""
    host: str = "127.0.0.1"
    port: int = 3000
    mode: str = PRODUCTION_MODE
    static_dir: Optional[str] = None  # 为空时使用 web/static
    dev_server_url: str = "http://localhost:5173"
    cors_origins: List[str] = field(default_factory=lambda: ["*"])

    @property
    def is_development(self) -> bool:
        return self.mode == DEVELOPMENT_MODE


# ============================================================================
# 统一配置管理器
# ============================================================================

class UnifiedConfigManager:
    """统一配置管理器 - 整合配置文件和环境变量"""

    def __init__(self, config_dir: Optional[str] = None,
                 environ: Optional[Mapping[str, str]] = None):
        self._environ = os.environ if environ is None else environ
        if config_dir is None:
            config_dir = self._environ.get("QUOTES_CONFIG_DIR") or str(CONFIG_DIR)
        self._config_dir = Path(config_dir)
        self._config_data: Dict[str, Any] = {}

        # 类型化配置缓存
        self._typed_cache: Dict[str, Any] = {}

        # 初始化配置
        self._load_config()

    def _load_config(self) -> None:
        """加载配置文件（目录不存在时使用默认配置）"""
        merged_config: Dict[str, Any] = {}

        if not self._config_dir.is_dir():
            config_logger.debug(f"Configuration directory not found, using defaults: {self._config_dir}")
            self._config_data = merged_config
            self._typed_cache.clear()
            return

        # 按文件名排序加载，确保加载顺序一致
        config_files = sorted(self._config_dir.glob('*.json'))
        for config_file in config_files:
            try:
                with open(config_file, 'r', encoding='utf-8') as f:
                    data = json.load(f)
            except json.JSONDecodeError as e:
                raise ConfigurationError(
                    f"Invalid JSON in configuration file {config_file.name}: {e}",
                    ErrorCodes.CONFIG_INVALID_FORMAT
                ) from e
            except OSError as e:
                raise ConfigurationError(
                    f"Cannot read configuration file {config_file.name}: {e}",
                    ErrorCodes.CONFIG_NOT_FOUND
                ) from e

            if not isinstance(data, dict):
                raise ConfigurationError(
                    f"Configuration file {config_file.name} must contain a JSON object",
                    ErrorCodes.CONFIG_INVALID_FORMAT
                )
            merged_config.update(data)
            config_logger.debug(f"Loaded and merged: {config_file.name}")

        self._config_data = merged_config
        config_logger.debug(f"Configuration loaded and merged from {len(config_files)} files.")
        # 清除类型化缓存
        self._typed_cache.clear()

    def reload_config(self) -> None:
        """重新加载配置"""
        config_logger.info("Reloading configuration...")
        self._load_config()

    # ========================================================================
    # 底层访问方法
    # ========================================================================

    def get(self, key: str, default: Optional[T] = None) -> Optional[T]:
        """获取配置值"""
        return self._config_data.get(key, default)

    def get_nested(self, path: str, default: Optional[T] = None) -> Optional[T]:
        """获取嵌套配置值，支持点分隔路径"""
        keys = path.split('.')
        current = self._config_data

        for key in keys:
            if isinstance(current, dict) and key in current:
                current = current[key]
            else:
                return default

        return current

    def set(self, key: str, value: Any) -> None:
        """设置配置值"""
        self._config_data[key] = value
        # 清除相关缓存
        self._typed_cache.pop(key, None)

    def __contains__(self, key: str) -> bool:
        return key in self._config_data

    def __getitem__(self, key: str) -> Any:
        return self._config_data[key]

    # ========================================================================
    # 类型安全访问方法
    # ========================================================================

    def get_logging_config(self) -> LoggingConfig:
        """获取日志配置（类型安全）"""
        if 'logging_config' not in self._typed_cache:
            logging_data = self.get_nested('logging_config', {})

            file_data = logging_data.get('file_config', {})
            file_config = FileLoggingConfig(
                enabled=file_data.get('enabled', False),
                directory=file_data.get('directory'),
                filename=file_data.get('filename', 'quotes.log'),
                rotation=file_data.get('rotation')
            )

            console_data = logging_data.get('console_config', {})
            console_config = ConsoleLoggingConfig(
                enabled=console_data.get('enabled', True),
                level=console_data.get('level', 'WARNING')
            )

            modules = {}
            for module_name, module_data in logging_data.get('modules', {}).items():
                modules[module_name] = LoggingModuleConfig(
                    level=module_data.get('level', 'INFO'),
                    enabled=module_data.get('enabled', True)
                )

            defaults = LoggingConfig()
            self._typed_cache['logging_config'] = LoggingConfig(
                level=self._environ.get('QUOTES_LOG_LEVEL') or logging_data.get('level', defaults.level),
                format=logging_data.get('format', defaults.format),
                date_format=logging_data.get('date_format', defaults.date_format),
                file_config=file_config,
                console_config=console_config,
                modules=modules
            )

        return self._typed_cache['logging_config']

    def get_storage_config(self) -> StorageConfig:
        """获取存储配置（类型安全）"""
        if 'storage_config' not in self._typed_cache:
            storage_data = self.get_nested('storage_config', {})
            self._typed_cache['storage_config'] = StorageConfig(
                data_dir=storage_data.get('data_dir'),
                filename=storage_data.get('filename', QUOTES_FILENAME),
                export_filename=storage_data.get('export_filename', QUOTES_FILENAME)
            )

        return self._typed_cache['storage_config']

    def get_web_config(self) -> WebConfig:
        """获取Web配置（类型安全），环境变量优先"""
        if 'web_config' not in self._typed_cache:
            web_data = self.get_nested('web_config', {})
            defaults = WebConfig()

            port = self._environ.get('PORT') or web_data.get('port', defaults.port)
            try:
                port = int(port)
            except (TypeError, ValueError) as e:
                raise ConfigurationError(
                    f"Invalid HTTP port: {port!r}",
                    ErrorCodes.CONFIG_INVALID_FORMAT
                ) from e

            mode = self._environ.get('QUOTES_ENV') or web_data.get('mode', defaults.mode)

            self._typed_cache['web_config'] = WebConfig(
                host=web_data.get('host', defaults.host),
                port=port,
                mode=mode.strip().lower(),
                static_dir=web_data.get('static_dir'),
                dev_server_url=self._environ.get('QUOTES_DEV_SERVER') or web_data.get('dev_server_url', defaults.dev_server_url),
                cors_origins=web_data.get('cors_origins', defaults.cors_origins)
            )

        return self._typed_cache['web_config']

