import asyncio
import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.batch.trending_batch import start_trending_scheduler
from app.context import build_app_context
from caching.adapter.input.web.cache_router import cache_router
from config.database.session import init_db_schema
from config.settings import AppSettings
from trending.adapter.input.web.batch_router import batch_router
from trending.adapter.input.web.home_router import home_router
from trending.adapter.input.web.trending_router import trending_router
from trending.adapter.input.web.youtube_router import youtube_router

load_dotenv()

app_settings = AppSettings()

logging.basicConfig(
    level=getattr(logging, app_settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    FastAPI lifespan 훅에서 AppContext 를 만들고 배치 스케줄러를 관리합니다.
    """
    owns_context = getattr(app.state, "context", None) is None
    if owns_context:
        app.state.context = build_app_context()
    context = app.state.context
    # DB 스키마 미존재 시 자동 생성하여 UndefinedTable 오류를 예방합니다.
    await init_db_schema(context.engine)
    app.state.trending_task = asyncio.create_task(start_trending_scheduler(context))
    try:
        yield
    finally:
        task = getattr(app.state, "trending_task", None)
        if task:
            task.cancel()
        if owns_context:
            await context.aclose()


app = FastAPI(title="Trendscope Server", version="0.1.0", lifespan=lifespan)

origins = [origin for origin in app_settings.cors_origins.split(",") if origin]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(trending_router, prefix="/trending")
app.include_router(youtube_router, prefix="/youtube")
app.include_router(home_router, prefix="/home")
app.include_router(batch_router, prefix="/batch")
app.include_router(cache_router, prefix="/cache")


@app.get("/health")
def health_check() -> dict[str, str]:
    """
    헬스체크 엔드포인트입니다.
    """
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=app_settings.host, port=app_settings.port)
