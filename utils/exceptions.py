"""
统一异常定义模块
提供项目特定的异常类和错误处理机制
"""

import functools
from typing import Optional, Dict, Any


class QuoteMeError(Exception):
    """语录系统基础异常类"""

    def __init__(self, message: str, error_code: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.context = context or {}

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"


class ConfigurationError(QuoteMeError):
    """配置相关错误"""
    pass


class StorageError(QuoteMeError):
    """存储文件或数据目录相关错误"""
    pass


class ValidationError(QuoteMeError):
    """数据验证错误"""
    pass


class ImportFormatError(ValidationError):
    """导入文件格式错误"""
    pass


class APIError(QuoteMeError):
    """API相关错误"""
    pass


# 错误代码常量
class ErrorCodes:
    """错误代码常量"""

    # 配置错误
    CONFIG_NOT_FOUND = "CONFIG_001"
    CONFIG_INVALID_FORMAT = "CONFIG_002"

    # 存储错误
    STORAGE_DIR_UNAVAILABLE = "STORE_001"
    STORAGE_READ_FAILED = "STORE_002"
    STORAGE_WRITE_FAILED = "STORE_003"
    STORAGE_CORRUPTED = "STORE_004"

    # 验证错误
    VALIDATION_EMPTY_FIELD = "VAL_001"
    VALIDATION_INVALID_RECORD = "VAL_002"

    # 导入错误
    IMPORT_FILE_UNREADABLE = "IMP_001"
    IMPORT_INVALID_JSON = "IMP_002"
    IMPORT_NOT_AN_ARRAY = "IMP_003"
    IMPORT_INVALID_RECORD = "IMP_004"

    # 网络错误
    PROXY_UPSTREAM_FAILED = "NET_001"


def create_error_response(error: QuoteMeError,
                          include_traceback: bool = False) -> Dict[str, Any]:
    """创建标准化的错误响应"""
    response = {
        "error": True,
        "error_code": error.error_code,
        "message": error.message,
        "context": error.context
    }

    if include_traceback:
        import traceback
        response["traceback"] = traceback.format_exc()

    return response


def handle_exception(func):
    """统一异常处理装饰器"""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except QuoteMeError:
            # 已经是系统异常，直接重新抛出
            raise
        except Exception as e:
            # 转换为系统异常
            raise QuoteMeError(
                f"Unexpected error in {func.__name__}: {str(e)}",
                error_code="UNEXPECTED_ERROR"
            ) from e

    return wrapper
