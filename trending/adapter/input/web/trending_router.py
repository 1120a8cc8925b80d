import logging

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from app.context import AppContext, get_app_context
from trending.adapter.input.web.request.query_params import (
    parse_anchor_date,
    parse_category,
    parse_content_type,
    parse_period,
    to_http_exception,
)
from trending.application.exceptions import InvalidParameterError

logger = logging.getLogger(__name__)

trending_router = APIRouter(tags=["trending"])


@trending_router.get("/snapshots")
async def get_trending_snapshot(
    regionCode: str = Query(default="GLOBAL", description="지역 코드 (GLOBAL, KR, US ...)"),
    categoryId: str | None = Query(default=None, description="카테고리 ID (생략 시 전체)"),
    contentType: str | None = Query(default="short", description="short | long"),
    period: str | None = Query(default="all", description="daily | weekly | monthly | yearly | yearEnd | all"),
    date: str | None = Query(default=None, description="기준일 (YYYY-MM-DD)"),
    context: AppContext = Depends(get_app_context),
):
    """
    배치로 저장된 파티션 스냅샷을 순위 순으로 조회한다.
    데이터가 없으면 404 가 아니라 빈 목록을 돌려준다.
    """
    try:
        result = await context.query_usecase().get_partition(
            region_code=regionCode,
            category_id=parse_category(categoryId),
            content_type=parse_content_type(contentType),
            period=parse_period(period),
            anchor=parse_anchor_date(date),
        )
    except InvalidParameterError as exc:
        logger.info("[TRENDING] bad request: %s", exc)
        raise to_http_exception(exc)
    except Exception as exc:
        logger.exception("[TRENDING] snapshot query failed")
        raise to_http_exception(exc)
    return JSONResponse(result)
