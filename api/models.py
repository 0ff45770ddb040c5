"""
API data models for the quote system.
Pydantic models for response validation.
"""

from typing import Any, Dict, Optional
from pydantic import BaseModel, Field


class QuoteResponse(BaseModel):
    """语录响应模型（字段名与存储文件一致）"""
    id: str = Field(..., description="语录ID")
    quote: str = Field(..., description="语录内容")
    author: str = Field(..., description="作者")
    createdAt: str = Field(..., description="创建时间 (ISO-8601)")


class HealthResponse(BaseModel):
    """健康检查响应模型"""
    status: str = Field(..., description="服务状态")
    timestamp: str = Field(..., description="检查时间")
    version: str = Field(..., description="版本号")
    quotes: int = Field(..., description="当前语录数量")


class ErrorResponse(BaseModel):
    """错误响应模型"""
    error: bool = Field(True, description="是否为错误")
    error_code: str = Field(..., description="错误代码")
    message: str = Field(..., description="错误信息")
    context: Optional[Dict[str, Any]] = Field(None, description="错误上下文")
