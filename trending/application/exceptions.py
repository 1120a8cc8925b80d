class TrendingError(Exception):
    pass


class InvalidParameterError(TrendingError, ValueError):
    """필수 파라미터 누락/형식 오류 (400)."""


class ChannelNotFoundError(TrendingError, LookupError):
    def __init__(self, channel_id: str):
        super().__init__("Channel not found")
        self.channel_id = channel_id


class UpstreamError(TrendingError, RuntimeError):
    """업스트림 API 호출 실패."""


class UpstreamUnavailableError(TrendingError):
    """업스트림 클라이언트를 만들 수 없는 상태 (API 키 미설정 등)."""
