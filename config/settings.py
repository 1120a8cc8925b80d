import os
import urllib.parse
from dataclasses import dataclass, field
from dotenv import load_dotenv

load_dotenv()

# 수집 대상 지역 (GLOBAL 은 regionCode 없이 호출)
DEFAULT_REGIONS = ("GLOBAL", "KR", "US", "JP", "TW", "VN")

# 수집 대상 카테고리 (None = 전체)
DEFAULT_CATEGORIES = (
    "10",  # Music
    "20",  # Gaming
    "25",  # News & Politics
    "22",  # People & Blogs
    "1",  # Film & Animation
    "17",  # Sports
    "27",  # Education
    "28",  # Science & Technology
    "24",  # Entertainment
    "26",  # Howto & Style
    "23",  # Comedy
    "19",  # Travel & Events
    "15",  # Pets & Animals
    "2",  # Autos & Vehicles
)


def _env_list(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    raw = os.getenv(name)
    if not raw:
        return default
    return tuple(part.strip() for part in raw.split(",") if part.strip())


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


@dataclass
class YouTubeSettings:
    api_key: str = os.getenv("YOUTUBE_API_KEY", "")
    quota_user: str | None = os.getenv("YOUTUBE_QUOTA_USER")
    timeout_seconds: float = float(os.getenv("YOUTUBE_TIMEOUT_SECONDS", "10"))


@dataclass
class RedisSettings:
    # 빈 값이면 캐시 비활성화 (기동 실패 아님)
    url: str = os.getenv("REDIS_URL", "")
    socket_timeout: float = float(os.getenv("REDIS_SOCKET_TIMEOUT", "2.0"))


def _default_database_url() -> str:
    explicit = os.getenv("DATABASE_URL")
    if explicit:
        return explicit
    password = urllib.parse.quote_plus(os.getenv("SQL_PASSWORD", ""))
    return (
        f"postgresql+asyncpg://{os.getenv('SQL_USER', 'postgres')}:{password}"
        f"@{os.getenv('SQL_HOST', 'localhost')}:{os.getenv('SQL_PORT', '5432')}"
        f"/{os.getenv('SQL_DATABASE', 'trendscope')}"
    )


@dataclass
class DatabaseSettings:
    url: str = field(default_factory=_default_database_url)
    echo: bool = _env_bool("SQL_ECHO", "false")


@dataclass
class BatchSettings:
    enabled: bool = _env_bool("ENABLE_TRENDING_BATCH", "false")
    interval_minutes: int = int(os.getenv("BATCH_TRENDING_INTERVAL_MINUTES", "180"))
    concurrency: int = int(os.getenv("BATCH_CONCURRENCY", "3"))
    page_size: int = int(os.getenv("BATCH_PAGE_SIZE", "50"))
    max_pages: int = int(os.getenv("BATCH_MAX_PAGES", "10"))
    regions: tuple[str, ...] = field(default_factory=lambda: _env_list("BATCH_REGIONS", DEFAULT_REGIONS))
    categories: tuple[str, ...] = field(
        default_factory=lambda: _env_list("BATCH_CATEGORIES", DEFAULT_CATEGORIES)
    )
    invalidate_cache: bool = _env_bool("BATCH_INVALIDATE_CACHE", "true")


@dataclass
class AppSettings:
    cors_origins: str = os.getenv("CORS_ORIGINS", "http://localhost:3000")
    host: str = os.getenv("APP_HOST", "0.0.0.0")
    port: int = int(os.getenv("APP_PORT", "8000"))
    log_level: str = os.getenv("LOG_LEVEL", "INFO")


@dataclass
class Settings:
    app: AppSettings = field(default_factory=AppSettings)
    youtube: YouTubeSettings = field(default_factory=YouTubeSettings)
    redis: RedisSettings = field(default_factory=RedisSettings)
    database: DatabaseSettings = field(default_factory=DatabaseSettings)
    batch: BatchSettings = field(default_factory=BatchSettings)
