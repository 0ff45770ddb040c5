"""
统一的日志管理模块
整合基础日志配置和高级日志功能
"""

import logging
import sys
import time
import functools
import traceback
import threading
from pathlib import Path
from logging.handlers import RotatingFileHandler
from typing import Optional, Dict, Any, Callable
from dataclasses import dataclass
from collections import defaultdict

from .config_manager import LoggingConfig
from .exceptions import ValidationError
from .path_utils import LOG_DIR_NAME

# 获取 logging_manager 模块的专用日志器
logger = logging.getLogger("LoggingManager")


@dataclass
class LogConfig:
    """日志配置"""
    level: str = "INFO"
    console_level: str = "WARNING"
    format: str = "[%(levelname)s][%(asctime)s][%(filename)s:%(lineno)d] - %(message)s"
    date_format: str = "%Y-%m-%d %H:%M:%S"
    file_max_bytes: int = 10 * 1024 * 1024  # 10MB
    file_backup_count: int = 5
    enable_console: bool = True
    enable_file: bool = False
    log_directory: Optional[str] = None
    log_filename: str = "quotes.log"


class LoggingManager:
    """统一的日志管理器"""

    _instance = None
    _lock = threading.Lock()

    def __new__(cls):
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if hasattr(self, '_initialized'):
            return

        self._initialized = True
        self._loggers: Dict[str, logging.Logger] = {}
        self._config = LogConfig()
        self._metrics = defaultdict(int)

    def configure(self, config: LogConfig = None):
        """配置日志系统"""
        if config:
            self._config = config

        root_logger = logging.getLogger()
        root_logger.setLevel(getattr(logging, self._config.level.upper(), logging.INFO))

        self._clear_handlers(root_logger)

        if self._config.enable_console:
            self._add_console_handler(root_logger)

        if self._config.enable_file and self._config.log_directory:
            self._add_file_handler(root_logger)

    def configure_from_config(self, logging_config: LoggingConfig, data_dir: Optional[Path] = None):
        """从类型化配置加载日志配置"""
        file_config = logging_config.file_config
        rotation = file_config.rotation or {}

        log_directory = file_config.directory
        if log_directory is None and data_dir is not None:
            log_directory = str(Path(data_dir) / LOG_DIR_NAME)

        config = LogConfig(
            level=logging_config.level,
            console_level=logging_config.console_config.level,
            format=logging_config.format,
            date_format=logging_config.date_format,
            file_max_bytes=rotation.get('max_bytes_mb', 10) * 1024 * 1024,
            file_backup_count=rotation.get('backup_count', 5),
            enable_console=logging_config.console_config.enabled,
            enable_file=file_config.enabled,
            log_directory=log_directory,
            log_filename=file_config.filename
        )
        self.configure(config)

        for module_name, module_config in logging_config.modules.items():
            module_logger = self.get_logger(module_name)
            if module_config.enabled:
                module_logger.setLevel(getattr(logging, module_config.level.upper(), logging.INFO))
            else:
                # 模块被禁用时设置为 CRITICAL 级别
                module_logger.setLevel(logging.CRITICAL)

        return config

    def _clear_handlers(self, logger: logging.Logger):
        """清除现有处理器"""
        for handler in logger.handlers[:]:
            handler.close()
            logger.removeHandler(handler)

    def _add_console_handler(self, logger: logging.Logger):
        """添加控制台处理器（输出到 stderr，stdout 留给命令输出）"""
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(getattr(logging, self._config.console_level.upper(), logging.WARNING))
        console_handler.setFormatter(logging.Formatter(
            self._config.format,
            datefmt=self._config.date_format
        ))
        logger.addHandler(console_handler)

    def _add_file_handler(self, logger: logging.Logger):
        """添加文件处理器"""
        log_dir = Path(self._config.log_directory)
        log_dir.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            filename=log_dir / self._config.log_filename,
            maxBytes=self._config.file_max_bytes,
            backupCount=self._config.file_backup_count,
            encoding="utf-8"
        )
        file_handler.setFormatter(logging.Formatter(
            self._config.format,
            datefmt=self._config.date_format
        ))
        logger.addHandler(file_handler)

    def get_logger(self, name: str = None) -> logging.Logger:
        """获取日志记录器"""
        if name is None:
            name = "quoteme"

        if name not in self._loggers:
            self._loggers[name] = logging.getLogger(name)

        return self._loggers[name]

    def get_metrics(self) -> Dict[str, int]:
        """获取日志统计指标"""
        return dict(self._metrics)

    def reset_metrics(self):
        """重置统计指标"""
        self._metrics.clear()


class LogContext:
    """日志上下文管理器"""

    def __init__(self, module: str, operation: str = None,
                 extra_context: Dict[str, Any] = None):
        self.module = module
        self.operation = operation
        self.extra_context = dict(extra_context or {})
        self.start_time = None
        self.logger = logging_manager.get_logger(module)

    def __enter__(self):
        self.start_time = time.time()
        self._log_start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        duration = time.time() - self.start_time
        if exc_type is not None:
            self._log_error(exc_val, duration, exc_tb)
        else:
            self._log_success(duration)

    def _get_context_str(self) -> str:
        """获取上下文字符串"""
        parts = [self.module]

        if self.operation:
            parts.append(self.operation)

        for key, value in self.extra_context.items():
            parts.append(f"{key}:{value}")

        return ".".join(parts)

    def _log_start(self):
        context = self._get_context_str()
        self.logger.debug(f"[{context}] Starting operation")
        logging_manager._metrics[f"{self.module}.{self.operation}_started"] += 1

    def _log_success(self, duration: float):
        context = self._get_context_str()
        self.logger.info(f"[{context}] Operation completed in {duration:.3f}s")
        logging_manager._metrics[f"{self.module}.{self.operation}_completed"] += 1

    def _log_error(self, error: Exception, duration: float, tb):
        context = self._get_context_str()
        error_msg = f"[{context}] Operation failed in {duration:.3f}s: {str(error)}"

        # 输入校验失败属于预期情况，不按错误记录
        if isinstance(error, ValidationError):
            self.logger.info(error_msg)
        else:
            self.logger.error(error_msg)
        self.logger.debug(f"[{context}] Traceback: {''.join(traceback.format_tb(tb))}")
        logging_manager._metrics[f"{self.module}.{self.operation}_failed"] += 1


def log_execution(module: str, operation: str = None):
    """日志装饰器"""
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            with LogContext(module, operation or func.__name__):
                return func(*args, **kwargs)

        return wrapper

    return decorator


# 全局日志管理器实例
logging_manager = LoggingManager()

# 兼容性：保持原有的 logger 接口
logger = logging_manager.get_logger()


class ModuleLoggers:
    """模块专用日志器集合"""

    Store = logging_manager.get_logger("Store")
    CLI = logging_manager.get_logger("CLI")
    API = logging_manager.get_logger("API")
    Config = logging_manager.get_logger("Config")


# 便捷的模块日志器别名
store_logger = ModuleLoggers.Store
cli_logger = ModuleLoggers.CLI
api_logger = ModuleLoggers.API
config_logger = ModuleLoggers.Config


def initialize_logging(logging_config: Optional[LoggingConfig] = None,
                       data_dir: Optional[Path] = None) -> LogConfig:
    """初始化日志系统"""
    if logging_config is None:
        logging_manager.configure()
        logger.debug("Logging system initialized with default config")
        return logging_manager._config

    config = logging_manager.configure_from_config(logging_config, data_dir)
    logger.debug("Logging system initialized from config")
    return config
