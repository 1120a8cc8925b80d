import logging

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from app.context import AppContext, get_app_context
from trending.adapter.input.web.request.query_params import (
    parse_anchor_date,
    parse_content_type,
    parse_period,
    to_http_exception,
)
from trending.application.exceptions import InvalidParameterError

logger = logging.getLogger(__name__)

home_router = APIRouter(tags=["home"])


@home_router.get("/rankings")
async def get_home_rankings(
    contentType: str | None = Query(default="short", description="short | long"),
    period: str | None = Query(default="all"),
    regionCode: str = Query(default="GLOBAL"),
    date: str | None = Query(default=None),
    context: AppContext = Depends(get_app_context),
):
    """
    홈 화면용 종합 랭킹 (최다 조회, 떠오르는 영상, 참여율, 인기/활발한 채널, 최신).
    """
    try:
        result = await context.query_usecase().get_home_rankings(
            content_type=parse_content_type(contentType),
            period=parse_period(period),
            region_code=regionCode,
            anchor=parse_anchor_date(date),
        )
    except InvalidParameterError as exc:
        logger.info("[HOME] bad request: %s", exc)
        raise to_http_exception(exc)
    except Exception as exc:
        logger.exception("[HOME] rankings query failed")
        raise to_http_exception(exc)
    return JSONResponse(result)
