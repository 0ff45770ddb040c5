"""
Development proxy for the quote system web interface.
Forwards non-API requests to a separate front-end development server.
"""

import asyncio
from fastapi import Request, Response
import aiohttp

from utils import api_logger
from utils.exceptions import APIError, ErrorCodes

# 不转发的逐跳头部（以及由 aiohttp 重新计算的头部）
HOP_BY_HOP_HEADERS = {
    "connection",
    "keep-alive",
    "proxy-authenticate",
    "proxy-authorization",
    "te",
    "trailers",
    "transfer-encoding",
    "upgrade",
    "host",
    "content-length",
    "content-encoding",
}


class DevServerProxy:
    """开发服务器代理"""

    def __init__(self, target_url: str, timeout: float = 30.0):
        self.target_url = target_url.rstrip("/")
        self.timeout = aiohttp.ClientTimeout(total=timeout, connect=5)

    def build_url(self, request: Request) -> str:
        url = f"{self.target_url}{request.url.path}"
        if request.url.query:
            url = f"{url}?{request.url.query}"
        return url

    @staticmethod
    def _filter_headers(headers) -> dict:
        return {k: v for k, v in headers.items() if k.lower() not in HOP_BY_HOP_HEADERS}

    async def forward(self, request: Request) -> Response:
        """转发请求到开发服务器并返回其响应"""
        url = self.build_url(request)
        body = await request.body()

        try:
            async with aiohttp.ClientSession(timeout=self.timeout) as session:
                async with session.request(
                    request.method,
                    url,
                    headers=self._filter_headers(request.headers),
                    data=body or None,
                    allow_redirects=False
                ) as upstream:
                    content = await upstream.read()
                    return Response(
                        content=content,
                        status_code=upstream.status,
                        headers=self._filter_headers(upstream.headers)
                    )

        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            api_logger.warning(f"[Proxy] {request.method} {url} failed: {e}")
            raise APIError(
                f"Development server unavailable at {self.target_url}",
                ErrorCodes.PROXY_UPSTREAM_FAILED,
                {"url": url}
            ) from e
