"""
FastAPI application for the quote system.
Builds the read-only web interface around an explicitly passed quote store.
"""

from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from storage import QuoteStore
from utils import api_logger, WebConfig, STATIC_DIR, __version__
from utils.exceptions import APIError, create_error_response

from .routes import router
from .middleware import setup_middleware
from .models import HealthResponse, ErrorResponse
from .proxy import DevServerProxy

PROXY_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def create_app(store: QuoteStore, web_config: Optional[WebConfig] = None) -> FastAPI:
    """创建 FastAPI 应用"""
    web_config = web_config or WebConfig()

    app = FastAPI(
        title="Quote Me",
        description="Read-only web interface for the quote store",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url="/openapi.json" if web_config.is_development else None,
    )
    app.state.store = store
    app.state.web_config = web_config

    # 设置中间件
    setup_middleware(app, web_config)

    # 添加路由
    app.include_router(router, prefix="/api")

    @app.get("/health", response_model=HealthResponse, tags=["System"])
    async def health_check():
        """健康检查端点"""
        return HealthResponse(
            status="healthy",
            timestamp=datetime.now(timezone.utc).isoformat(),
            version=__version__,
            quotes=len(store)
        )

    if web_config.is_development:
        _setup_dev_proxy(app, web_config)
    else:
        _setup_static_files(app, web_config)

    return app


def _setup_dev_proxy(app: FastAPI, web_config: WebConfig) -> None:
    """开发模式：其余路径转发到前端开发服务器"""
    proxy = DevServerProxy(web_config.dev_server_url)
    app.state.proxy = proxy

    @app.api_route("/{path:path}", methods=PROXY_METHODS, include_in_schema=False,
                   responses={502: {"model": ErrorResponse}})
    async def proxy_to_dev_server(request: Request, path: str):
        try:
            return await proxy.forward(request)
        except APIError as e:
            return JSONResponse(status_code=502, content=create_error_response(e))


def _setup_static_files(app: FastAPI, web_config: WebConfig) -> None:
    """生产模式：其余路径由静态资源目录提供"""
    static_dir = Path(web_config.static_dir) if web_config.static_dir else STATIC_DIR
    if not static_dir.is_dir():
        api_logger.warning(f"[API] Static directory not found, serving API only: {static_dir}")
        return

    app.mount("/", StaticFiles(directory=str(static_dir), html=True), name="static")


async def start_web_server(store: QuoteStore, web_config: Optional[WebConfig] = None) -> None:
    """启动 Web 服务器（阻塞直到进程被终止）"""
    web_config = web_config or WebConfig()
    app = create_app(store, web_config)

    config = uvicorn.Config(
        app,
        host=web_config.host,
        port=web_config.port,
        log_level="warning",
    )
    server = uvicorn.Server(config)

    print(f"Server is running on http://localhost:{web_config.port}")
    if web_config.is_development:
        print(f"Development mode: proxying to {web_config.dev_server_url}")
    api_logger.info(f"[API] Starting server on {web_config.host}:{web_config.port} ({web_config.mode})")

    await server.serve()
