from datetime import datetime
from unittest.mock import MagicMock

import httplib2
import pytest
from googleapiclient.errors import HttpError

from config.settings import YouTubeSettings
from trending.application.exceptions import ChannelNotFoundError, UpstreamError, UpstreamUnavailableError
from trending.domain.content_type import ContentType
from trending.infrastructure.client.youtube_client import YouTubeClient

VIDEO_RESPONSE = {
    "items": [
        {
            "id": "short-1",
            "snippet": {
                "title": "A short",
                "channelId": "UC-1",
                "channelTitle": "Channel One",
                "publishedAt": "2024-01-01T09:00:00Z",
                "thumbnails": {"high": {"url": "https://img/high.jpg"}},
            },
            "contentDetails": {"duration": "PT45S"},
            "statistics": {"viewCount": "1000", "likeCount": "50", "commentCount": "5"},
        },
        {
            "id": "long-1",
            "snippet": {"title": "A video", "channelId": "UC-1", "publishedAt": "2024-01-02T00:00:00+09:00"},
            "contentDetails": {"duration": "PT10M"},
            "statistics": {"viewCount": "20"},
        },
    ],
    "nextPageToken": "NEXT",
}

CHANNEL_RESPONSE = {
    "items": [
        {
            "id": "UC-1",
            "snippet": {
                "title": "Channel One",
                "customUrl": "@one",
                "publishedAt": "2020-05-01T00:00:00Z",
                "thumbnails": {"default": {"url": "https://img/channel.jpg"}},
            },
            "statistics": {"subscriberCount": "300", "viewCount": "90000", "videoCount": "12"},
        }
    ]
}


def _service(videos=VIDEO_RESPONSE, channels=CHANNEL_RESPONSE):
    service = MagicMock()
    service.videos.return_value.list.return_value.execute.return_value = videos
    service.channels.return_value.list.return_value.execute.return_value = channels
    return service


def _client(service, quota_user=None):
    return YouTubeClient(YouTubeSettings(api_key="", quota_user=quota_user, timeout_seconds=5), service=service)


def test_missing_api_key_is_unavailable():
    with pytest.raises(UpstreamUnavailableError):
        YouTubeClient(YouTubeSettings(api_key=""))


@pytest.mark.asyncio
async def test_fetch_trending_page_parses_items():
    service = _service()

    page = await _client(service).fetch_trending_page("KR", "10", "TOKEN")

    assert page.next_page_token == "NEXT"
    short, long_video = page.items
    assert short.content_type is ContentType.SHORT
    assert long_video.content_type is ContentType.LONG
    assert short.view_count == 1000
    assert long_video.like_count == 0
    assert short.subscriber_count == 300
    assert short.channel_thumbnail_url == "https://img/channel.jpg"
    assert short.thumbnail_url == "https://img/high.jpg"
    assert short.published_at == datetime(2024, 1, 1, 9, 0)
    assert long_video.published_at == datetime(2024, 1, 1, 15, 0)
    assert (short.region_code, short.category_id) == ("KR", "10")

    params = service.videos.return_value.list.call_args.kwargs
    assert params["chart"] == "mostPopular"
    assert params["regionCode"] == "KR"
    assert params["videoCategoryId"] == "10"
    assert params["pageToken"] == "TOKEN"
    # 채널 보강은 중복 없이 한 번만 호출
    assert service.channels.return_value.list.call_args.kwargs["id"] == "UC-1"


@pytest.mark.asyncio
async def test_global_region_omits_region_code():
    service = _service()

    await _client(service, quota_user="batch").fetch_trending_page("GLOBAL")

    params = service.videos.return_value.list.call_args.kwargs
    assert "regionCode" not in params
    assert "videoCategoryId" not in params
    assert params["quotaUser"] == "batch"


@pytest.mark.asyncio
async def test_http_error_becomes_upstream_error():
    service = _service()
    service.videos.return_value.list.return_value.execute.side_effect = HttpError(
        httplib2.Response({"status": "403"}), b"quotaExceeded"
    )

    with pytest.raises(UpstreamError):
        await _client(service).fetch_trending_page("KR")


@pytest.mark.asyncio
async def test_fetch_channel():
    profile = await _client(_service()).fetch_channel("UC-1")

    assert profile.title == "Channel One"
    assert profile.custom_url == "@one"
    assert profile.subscriber_count == 300
    assert profile.to_dict()["statistics"]["videoCount"] == 12


@pytest.mark.asyncio
async def test_fetch_unknown_channel():
    with pytest.raises(ChannelNotFoundError):
        await _client(_service(channels={"items": []})).fetch_channel("UC-none")


@pytest.mark.asyncio
async def test_fetch_channel_videos_follows_uploads_playlist():
    service = _service(
        channels={"items": [{"id": "UC-1", "contentDetails": {"relatedPlaylists": {"uploads": "UU-1"}}}]}
    )
    service.playlistItems.return_value.list.return_value.execute.return_value = {
        "items": [{"contentDetails": {"videoId": "short-1"}}, {"contentDetails": {"videoId": "long-1"}}]
    }

    videos = await _client(service).fetch_channel_videos("UC-1", max_results=20)

    assert [video.id for video in videos] == ["short-1", "long-1"]
    assert service.playlistItems.return_value.list.call_args.kwargs["playlistId"] == "UU-1"
    assert service.videos.return_value.list.call_args.kwargs["id"] == "short-1,long-1"


@pytest.mark.asyncio
async def test_search_channels():
    service = _service()
    service.search.return_value.list.return_value.execute.return_value = {
        "items": [
            {"id": {"channelId": "UC-9"}, "snippet": {"title": "Cats", "thumbnails": {}}},
            {"id": {}, "snippet": {"title": "no id"}},
        ]
    }

    results = await _client(service).search_channels("cats", max_results=5)

    assert [result.channel_id for result in results] == ["UC-9"]
    assert service.search.return_value.list.call_args.kwargs["type"] == "channel"


@pytest.mark.asyncio
@pytest.mark.parametrize("error", [TimeoutError("timed out"), httplib2.ServerNotFoundError("no dns")])
async def test_transport_error_becomes_upstream_error(error):
    service = _service()
    service.videos.return_value.list.return_value.execute.side_effect = error

    with pytest.raises(UpstreamError):
        await _client(service).fetch_trending_page("KR")
