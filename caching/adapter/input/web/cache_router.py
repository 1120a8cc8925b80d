from fastapi import APIRouter, Depends

from app.context import AppContext, get_app_context
from caching.adapter.input.web.request import InvalidateCacheRequest

cache_router = APIRouter(tags=["cache"])


@cache_router.get("/stats")
async def get_cache_stats(context: AppContext = Depends(get_app_context)):
    return await context.cache.stats()


@cache_router.post("/invalidate")
async def invalidate_cache(request: InvalidateCacheRequest, context: AppContext = Depends(get_app_context)):
    """
    패턴과 일치하는 캐시 키를 삭제한다. 캐시가 꺼져 있으면 0.
    """
    deleted = await context.cache.invalidate(request.pattern)
    return {"pattern": request.pattern, "deleted": deleted}
