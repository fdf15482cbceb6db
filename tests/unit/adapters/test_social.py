"""
Social feed adapter unit tests
"""

import pytest
from reliefhub.adapters.social import BlueskySource, SeededReportSource, TwitterSource
from reliefhub.adapters.social.twitter import build_query
from reliefhub.core.errors import ProviderError
from tests.factories import FIXED_NOW, make_session


class TestBuildQuery:
    """X query builder tests"""

    def test_default_query(self):
        assert build_query(None, None) == "(disaster OR emergency) -is:retweet"

    def test_keywords_are_ored(self):
        assert build_query("Food, water", None) == "(food OR water) -is:retweet"

    def test_single_keyword_and_disaster_type(self):
        assert build_query("food", " Flood ") == "food flood -is:retweet"

    def test_phrases_are_quoted(self):
        assert build_query("clean water", None) == '"clean water" -is:retweet'


class TestTwitterSource:
    """X recent search adapter tests"""

    PAYLOAD = {
        "data": [
            {"id": "111", "text": "Need water #flood", "author_id": "9", "created_at": "2024-06-01T11:00:00.000Z"},
            {"id": "112", "text": "Anonymous post", "author_id": "404"},
        ],
        "includes": {"users": [{"id": "9", "username": "resident", "verified": True, "location": "Queens"}]},
    }

    @pytest.mark.asyncio
    async def test_maps_tweets_and_authors(self):
        session = make_session(self.PAYLOAD)
        source = TwitterSource(session, "token", clock=lambda: FIXED_NOW)

        reports = await source.fetch("water", "flood", 20)

        assert [r.id for r in reports] == ["111", "112"]
        first = reports[0]
        assert first.user == "resident"
        assert first.verified is True
        assert first.location == "Queens"
        assert first.hashtags == ["#flood"]
        assert reports[1].user == ""
        assert reports[1].timestamp == FIXED_NOW

        kwargs = session.get.call_args.kwargs
        assert kwargs["headers"] == {"Authorization": "Bearer token"}
        assert kwargs["params"]["query"] == "water flood -is:retweet"
        assert kwargs["params"]["max_results"] == 20

    @pytest.mark.asyncio
    async def test_max_results_is_clamped(self):
        session = make_session({"data": []})
        await TwitterSource(session, "token").fetch(None, None, 3)
        assert session.get.call_args.kwargs["params"]["max_results"] == 10

    @pytest.mark.asyncio
    async def test_no_results(self):
        assert await TwitterSource(make_session({"meta": {"result_count": 0}}), "token").fetch(None, None, 20) == []

    @pytest.mark.asyncio
    async def test_unauthorized(self):
        with pytest.raises(ProviderError):
            await TwitterSource(make_session(text="Unauthorized", status=401), "bad").fetch(None, None, 20)


class TestBlueskySource:
    """Bluesky adapter tests"""

    @pytest.mark.asyncio
    async def test_maps_posts(self):
        session = make_session({"posts": [{
            "uri": "at://did:plc:abc/app.bsky.feed.post/1",
            "author": {"handle": "helper.bsky.social"},
            "record": {"text": "Offering shelter #help", "createdAt": "2024-06-01T10:00:00Z"},
        }]})
        source = BlueskySource(session, "token", clock=lambda: FIXED_NOW)

        reports = await source.fetch("shelter", "flood", 20)

        assert len(reports) == 1
        assert reports[0].user == "helper.bsky.social"
        assert reports[0].hashtags == ["#help"]
        assert session.get.call_args.kwargs["params"]["q"] == "shelter flood"

    @pytest.mark.asyncio
    async def test_empty(self):
        assert await BlueskySource(make_session({"posts": []}), "token").fetch(None, None, 20) == []


class TestSeededReportSource:
    """Seeded feed tests"""

    @pytest.mark.asyncio
    async def test_no_filters_returns_everything(self, dataset):
        reports = await SeededReportSource(dataset, clock=lambda: FIXED_NOW).fetch(None, None, 20)
        assert len(reports) == 6

    @pytest.mark.asyncio
    async def test_keyword_and_disaster_type_filter(self, dataset):
        source = SeededReportSource(dataset, clock=lambda: FIXED_NOW)

        assert {r.id for r in await source.fetch("food", None, 20)} == {"1"}
        assert {r.id for r in await source.fetch(None, "earthquake", 20)} == {"4"}
        assert await source.fetch("food", "earthquake", 20) == []

    @pytest.mark.asyncio
    async def test_reports_carry_no_priority(self, dataset):
        reports = await SeededReportSource(dataset).fetch(None, None, 20)
        assert all(not hasattr(r, "priority") for r in reports)
