import pytest

from trending.application.exceptions import ChannelNotFoundError, InvalidParameterError
from trending.application.usecase.channel_analysis_usecase import ChannelAnalysisUseCase
from trending.domain.channel_profile import ChannelProfile, ChannelSearchResult
from trending.domain.content_type import ContentType

from factories import FakePlatformClient, make_item

PROFILE = ChannelProfile(
    channel_id="UC-test",
    title="Test Channel",
    subscriber_count=1_000,
    view_count=2_000_000,
    video_count=120,
)


def _client(**kwargs):
    videos = [
        make_item("v1", content_type=ContentType.LONG, view_count=500, like_count=40, comment_count=10),
        make_item("v2", content_type=ContentType.LONG, view_count=8_000, like_count=0, comment_count=0),
        make_item("v3", content_type=ContentType.SHORT, view_count=2_000, like_count=100, comment_count=100),
    ]
    return FakePlatformClient(channel=PROFILE, channel_videos=videos, **kwargs)


@pytest.mark.asyncio
async def test_analyze_channel(disabled_cache):
    result = await ChannelAnalysisUseCase(_client(), disabled_cache).analyze_channel("UC-test")

    assert result["channel"]["id"] == "UC-test"
    assert result["analytics"]["viewsPerSubscriber"] == pytest.approx(2_000.0)
    assert result["analytics"]["avgViewsPerVideo"] == pytest.approx(2_000_000 / 120)
    assert result["analytics"]["engagementRate"] == pytest.approx((10.0 + 0.0 + 10.0) / 3)
    assert [video["id"] for video in result["topVideos"]] == ["v2", "v3", "v1"]
    assert [gem["id"] for gem in result["hiddenGems"]] == ["v2", "v3"]
    assert result["performance"]["score"] == 100


@pytest.mark.asyncio
async def test_analyze_channel_requires_id(disabled_cache):
    usecase = ChannelAnalysisUseCase(_client(), disabled_cache)

    with pytest.raises(InvalidParameterError):
        await usecase.analyze_channel("")
    with pytest.raises(InvalidParameterError):
        await usecase.analyze_channel("   ")


@pytest.mark.asyncio
async def test_unknown_channel_is_not_cached(cache, fake_redis):
    client = _client()
    usecase = ChannelAnalysisUseCase(client, cache)

    with pytest.raises(ChannelNotFoundError):
        await usecase.analyze_channel("UC-missing")
    await cache.drain()

    assert fake_redis.store == {}


@pytest.mark.asyncio
async def test_channel_analysis_is_cached(cache):
    client = _client()
    usecase = ChannelAnalysisUseCase(client, cache)

    await usecase.analyze_channel("UC-test")
    await cache.drain()
    await usecase.analyze_channel("UC-test")

    assert client.channel_calls == 1


@pytest.mark.asyncio
async def test_search_channels(cache, fake_redis):
    client = _client(search_results=[ChannelSearchResult(channel_id="UC-1", title="Cats")])
    usecase = ChannelAnalysisUseCase(client, cache)

    result = await usecase.search_channels(" cats ")
    await cache.drain()

    assert result == {
        "channels": [
            {
                "id": "UC-1",
                "title": "Cats",
                "description": None,
                "thumbnails": {"default": None, "medium": None, "high": None},
            }
        ]
    }
    assert "youtube:search:channels:cats" in fake_redis.store


@pytest.mark.asyncio
async def test_search_requires_query(disabled_cache):
    with pytest.raises(InvalidParameterError):
        await ChannelAnalysisUseCase(_client(), disabled_cache).search_channels(None)
