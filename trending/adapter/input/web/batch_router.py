import logging
import time

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app.batch.trending_batch import run_trending_batch_once
from app.context import AppContext, get_app_context

logger = logging.getLogger(__name__)

batch_router = APIRouter(tags=["batch"])


@batch_router.post("/collect-trending")
async def collect_trending(context: AppContext = Depends(get_app_context)):
    """
    스케줄러(3시간 주기 등)가 호출하는 배치 트리거.
    - 일부 파티션이 실패해도 200 과 요약을 돌려준다.
    - 실행 자체를 시작할 수 없을 때만 500.
    """
    started = time.perf_counter()
    try:
        report = await run_trending_batch_once(context)
    except Exception as exc:
        logger.exception("[TRENDING-BATCH] fatal error during collection")
        return JSONResponse(
            {
                "success": False,
                "error": str(exc),
                "durationMs": int((time.perf_counter() - started) * 1000),
            },
            status_code=500,
        )
    return JSONResponse(report.to_dict())
