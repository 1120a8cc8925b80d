import logging

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from app.context import AppContext, get_app_context
from trending.adapter.input.web.request.query_params import parse_category, to_http_exception
from trending.application.exceptions import ChannelNotFoundError, InvalidParameterError
from trending.domain.content_type import ContentType

logger = logging.getLogger(__name__)

youtube_router = APIRouter(tags=["youtube"])


async def _live_trending(context: AppContext, content_type: ContentType, region_code, category_id, page_token):
    try:
        result = await context.query_usecase().get_live_trending(
            region_code=region_code,
            category_id=parse_category(category_id),
            content_type=content_type,
            page_token=page_token,
        )
    except InvalidParameterError as exc:
        raise to_http_exception(exc)
    except Exception as exc:
        logger.exception("[YOUTUBE] live trending (%s) failed", content_type.value)
        raise to_http_exception(exc)
    return JSONResponse(result)


@youtube_router.get("/trending")
async def get_trending_videos(
    regionCode: str = Query(default="US"),
    videoCategoryId: str | None = Query(default=None),
    pageToken: str | None = Query(default=None),
    context: AppContext = Depends(get_app_context),
):
    """
    인기 급상승 일반 동영상(60초 초과)을 업스트림에서 바로 조회한다.
    """
    return await _live_trending(context, ContentType.LONG, regionCode, videoCategoryId, pageToken)


@youtube_router.get("/shorts/trending")
async def get_trending_shorts(
    regionCode: str = Query(default="US"),
    videoCategoryId: str | None = Query(default=None),
    pageToken: str | None = Query(default=None),
    context: AppContext = Depends(get_app_context),
):
    """
    인기 급상승 쇼츠를 업스트림에서 바로 조회한다.
    """
    return await _live_trending(context, ContentType.SHORT, regionCode, videoCategoryId, pageToken)


@youtube_router.get("/channel")
async def get_channel_analysis(
    channelId: str | None = Query(default=None),
    context: AppContext = Depends(get_app_context),
):
    """
    채널 성과표: 채널 지표, 상위 영상, 히든 젬, 성과 점수.
    """
    try:
        result = await context.channel_usecase().analyze_channel(channelId)
    except InvalidParameterError as exc:
        logger.info("[YOUTUBE] bad request: %s", exc)
        raise to_http_exception(exc)
    except ChannelNotFoundError as exc:
        raise to_http_exception(exc)
    except Exception as exc:
        logger.exception("[YOUTUBE] channel analysis failed")
        raise to_http_exception(exc)
    return JSONResponse(result)


@youtube_router.get("/search")
async def search_channels(
    q: str | None = Query(default=None),
    context: AppContext = Depends(get_app_context),
):
    try:
        result = await context.channel_usecase().search_channels(q)
    except InvalidParameterError as exc:
        logger.info("[YOUTUBE] bad request: %s", exc)
        raise to_http_exception(exc)
    except Exception as exc:
        logger.exception("[YOUTUBE] channel search failed")
        raise to_http_exception(exc)
    return JSONResponse(result)
