"""
Middleware for the quote system API.
Provides CORS, request logging, per-request error isolation and security headers.
"""

import time
from typing import Callable
from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.middleware.cors import CORSMiddleware

from utils import api_logger, WebConfig
from utils.exceptions import QuoteMeError, create_error_response


class LoggingMiddleware(BaseHTTPMiddleware):
    """日志中间件"""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.time()

        api_logger.debug(f"[API] {request.method} {request.url.path}")

        try:
            response = await call_next(request)

            process_time = time.time() - start_time
            api_logger.info(f"[API] {request.method} {request.url.path} - {response.status_code} - {process_time:.3f}s")

            # 添加处理时间到响应头
            response.headers["X-Process-Time"] = f"{process_time:.6f}"

            return response

        except Exception as e:
            process_time = time.time() - start_time
            api_logger.error(f"[API] {request.method} {request.url.path} - ERROR - {process_time:.3f}s - {str(e)}")
            raise


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """错误处理中间件：单个请求的异常不影响服务进程"""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)

        except QuoteMeError as e:
            api_logger.error(f"[API] {e}")
            return JSONResponse(status_code=500, content=create_error_response(e))

        except Exception as e:
            api_logger.error(f"[API] Unexpected error: {str(e)}", exc_info=True)
            return JSONResponse(
                status_code=500,
                content={
                    "error": True,
                    "error_code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred",
                    "context": {}
                }
            )


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """安全头中间件"""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"

        return response


def setup_cors(app, web_config: WebConfig):
    """设置CORS"""
    cors_origins = web_config.cors_origins

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials="*" not in cors_origins,
        allow_methods=["GET", "HEAD", "OPTIONS"],
        allow_headers=["*"],
    )


def setup_middleware(app, web_config: WebConfig):
    """设置所有中间件"""
    setup_cors(app, web_config)

    # 添加中间件（后添加的在外层）
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(ErrorHandlingMiddleware)
    app.add_middleware(LoggingMiddleware)
