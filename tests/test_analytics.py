import pytest

from trending.domain.analytics import (
    avg_views_per_video,
    channel_performance_score,
    engagement_rate,
    find_hidden_gems,
    is_hidden_gem,
    sort_items,
    views_per_subscriber,
)

from factories import make_item


class TestRatios:
    def test_engagement_rate(self):
        assert engagement_rate(40, 10, 1000) == pytest.approx(5.0)

    def test_engagement_rate_zero_views(self):
        assert engagement_rate(40, 10, 0) == 0.0

    def test_engagement_rate_treats_missing_counts_as_zero(self):
        assert engagement_rate(None, None, None) == 0.0
        assert engagement_rate(None, 5, 100) == pytest.approx(5.0)

    def test_views_per_subscriber_zero_subscribers(self):
        assert views_per_subscriber(5000, 0) == 0.0
        assert views_per_subscriber(5000, 100) == pytest.approx(50.0)

    def test_avg_views_per_video_zero_videos(self):
        assert avg_views_per_video(5000, 0) == 0.0
        assert avg_views_per_video(5000, 50) == pytest.approx(100.0)


class TestHiddenGem:
    def test_threshold_is_inclusive(self):
        assert is_hidden_gem(2.0) is True
        assert is_hidden_gem(1.999) is False

    def test_custom_threshold(self):
        assert is_hidden_gem(3.0, threshold=5.0) is False

    def test_find_hidden_gems_sorted_by_ratio(self):
        items = [
            make_item("low", view_count=150),
            make_item("mid", view_count=300),
            make_item("high", view_count=900),
        ]

        gems = find_hidden_gems(items, subscriber_count=100)

        assert [gem.item.id for gem in gems] == ["high", "mid"]
        assert gems[0].views_to_subscriber_ratio == pytest.approx(9.0)
        assert gems[0].to_dict()["viewsToSubscriberRatio"] == pytest.approx(9.0)

    def test_find_hidden_gems_without_subscribers(self):
        assert find_hidden_gems([make_item(view_count=10_000)], subscriber_count=0) == []


class TestPerformanceScore:
    def test_top_bands_reach_100(self):
        score = channel_performance_score(150, 20_000, 200, 5_000_000)

        assert score.score == 100
        assert len(score.insights) == 4

    def test_medium_bands(self):
        score = channel_performance_score(60, 6_000, 60, 200_000)

        assert score.score == 20 + 20 + 15 + 15

    def test_bottom_bands(self):
        score = channel_performance_score(0, 0, 0, 0)

        assert score.score == 30

    def test_boundaries_are_exclusive(self):
        # 정확히 경계값이면 한 단계 아래 구간이다.
        score = channel_performance_score(100, 10_000, 100, 1_000_000)

        assert score.score == 20 + 20 + 15 + 15
        assert score.to_dict()["score"] == 70


class TestSortItems:
    def test_ties_keep_input_order(self):
        items = [
            make_item("a", view_count=10),
            make_item("b", view_count=30),
            make_item("c", view_count=10),
            make_item("d", view_count=30),
        ]

        assert [item.id for item in sort_items(items, "views")] == ["b", "d", "a", "c"]
        assert [item.id for item in sort_items(items, "views", descending=False)] == ["a", "c", "b", "d"]

    def test_derived_fields(self):
        items = [
            make_item("engaged", view_count=100, like_count=50, comment_count=0, subscriber_count=1000),
            make_item("viral", view_count=10_000, like_count=10, comment_count=0, subscriber_count=100),
        ]

        assert [item.id for item in sort_items(items, "engagement")] == ["engaged", "viral"]
        assert [item.id for item in sort_items(items, "ratio")] == ["viral", "engaged"]

    def test_item_getter(self):
        wrapped = [{"item": make_item("a", like_count=1)}, {"item": make_item("b", like_count=2)}]

        result = sort_items(wrapped, "likes", item_getter=lambda value: value["item"])

        assert [value["item"].id for value in result] == ["b", "a"]

    def test_unknown_field(self):
        with pytest.raises(ValueError):
            sort_items([make_item()], "shares")
