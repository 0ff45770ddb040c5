"""
工具模块包
提供项目所需的通用工具和功能
"""

# 导出核心工具
from .config_manager import (
    UnifiedConfigManager,
    LoggingConfig,
    LoggingModuleConfig,
    StorageConfig,
    WebConfig
)
from .exceptions import (
    QuoteMeError,
    ConfigurationError,
    StorageError,
    ValidationError,
    ImportFormatError,
    APIError,
    ErrorCodes,
    create_error_response,
    handle_exception
)
from .logging_manager import (
    LogContext,
    log_execution,
    logging_manager,
    logger,
    LogConfig,
    initialize_logging,
    ModuleLoggers,
    store_logger,
    cli_logger,
    api_logger,
    config_logger
)
from .path_utils import (
    BASE_DIR,
    CONFIG_DIR,
    STATIC_DIR,
    QUOTES_FILENAME,
    get_data_dir,
    ensure_data_dir
)

# 版本信息
__version__ = "1.0.0"

__all__ = [
    # 配置管理
    "UnifiedConfigManager",
    "LoggingConfig",
    "LoggingModuleConfig",
    "StorageConfig",
    "WebConfig",

    # 异常处理
    "QuoteMeError",
    "ConfigurationError",
    "StorageError",
    "ValidationError",
    "ImportFormatError",
    "APIError",
    "ErrorCodes",
    "create_error_response",
    "handle_exception",

    # 日志工具
    "LogContext",
    "log_execution",
    "logging_manager",
    "logger",
    "LogConfig",
    "initialize_logging",
    "ModuleLoggers",
    "store_logger",
    "cli_logger",
    "api_logger",
    "config_logger",

    # 路径工具
    "BASE_DIR",
    "CONFIG_DIR",
    "STATIC_DIR",
    "QUOTES_FILENAME",
    "get_data_dir",
    "ensure_data_dir",
]
