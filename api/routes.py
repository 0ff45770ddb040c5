"""
API routes for the quote system.
Read-only endpoints over the quote store.
"""

from typing import List
from fastapi import APIRouter, HTTPException, Depends, Request

from storage import QuoteStore
from utils import api_logger
from utils.exceptions import StorageError
from .models import QuoteResponse

router = APIRouter()


def get_store(request: Request) -> QuoteStore:
    """从应用状态中取出语录存储"""
    return request.app.state.store


@router.get("/quotes", response_model=List[QuoteResponse], tags=["Quotes"])
async def get_quotes(store: QuoteStore = Depends(get_store)):
    """获取全部语录（每次请求重新读取存储文件，保证与命令行修改同步）"""
    try:
        store.reload()
    except StorageError as e:
        api_logger.error(f"[API] Failed to reload quotes: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to load quotes: {e.message}")

    return [QuoteResponse(**record.to_dict()) for record in store.list_quotes()]
