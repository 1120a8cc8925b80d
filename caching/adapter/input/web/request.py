from pydantic import BaseModel, Field


class InvalidateCacheRequest(BaseModel):
    pattern: str = Field(min_length=1, description="glob 패턴 (예: youtube:channel:*)")
