import asyncio
import logging

from app.context import AppContext, build_app_context
from config.database.session import init_db_schema
from trending.domain.batch_report import BatchReport

logger = logging.getLogger(__name__)


async def run_trending_batch_once(context: AppContext) -> BatchReport:
    """
    인기 영상 스냅샷 배치의 단일 실행 진입점.
    업스트림 클라이언트를 만들 수 없으면 UpstreamUnavailableError 를 그대로 올린다.
    """
    usecase = context.collection_usecase()
    return await usecase.run()


async def start_trending_scheduler(context: AppContext):
    """
    간단한 asyncio 기반 스케줄러.

    - ENABLE_TRENDING_BATCH=true 인 경우에만 동작
    - BATCH_TRENDING_INTERVAL_MINUTES (기본 180분) 주기로 run_trending_batch_once 실행
    """
    batch = context.settings.batch
    if not batch.enabled:
        return

    logger.info("[TRENDING-BATCH] scheduler started | interval=%dm", batch.interval_minutes)
    try:
        while True:
            try:
                report = await run_trending_batch_once(context)
                logger.info("[TRENDING-BATCH] run success: %s", report.to_dict())
            except Exception as exc:  # pylint: disable=broad-except
                # 한 번 실패해도 다음 주기에 다시 시도한다.
                logger.exception("[TRENDING-BATCH] run failed: %s", exc)
            await asyncio.sleep(batch.interval_minutes * 60)
    except asyncio.CancelledError:
        logger.info("[TRENDING-BATCH] scheduler stopped")
        raise


async def _main() -> None:
    context = build_app_context()
    try:
        await init_db_schema(context.engine)
        report = await run_trending_batch_once(context)
        print(report.to_dict())
    finally:
        await context.aclose()


if __name__ == "__main__":
    # 수동 실행: python -m app.batch.trending_batch
    logging.basicConfig(level=logging.INFO)
    asyncio.run(_main())
