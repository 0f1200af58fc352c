"""Tests for the listing and article fetchers."""

import asyncio

import httpx
import pytest

from devsync.errors import ArticleFetchError, ListingFetchError
from devsync.ingestion import ArticleFetcher, ArticleSummary, ListingFetcher


class TestListingFetcher:
    """Tests for ListingFetcher."""

    def test_returns_summaries_in_order(self, fake_api):
        fetcher = ListingFetcher(transport=fake_api.transport)

        summaries = fetcher.fetch_listing("jane")

        assert [s.slug for s in summaries] == ["a", "b", "c"]
        assert [s.title for s in summaries] == ["A", "B", "C"]

    def test_sends_username_query(self, fake_api):
        fetcher = ListingFetcher(transport=fake_api.transport)

        fetcher.fetch_listing("jane")

        request = fake_api.requests[0]
        assert request.url.path == "/api/articles/latest"
        assert request.url.params["username"] == "jane"
        assert "authorization" not in request.headers

    def test_http_error_is_fatal(self, make_api, articles):
        api = make_api(articles, listing_status=500)
        fetcher = ListingFetcher(transport=api.transport)

        with pytest.raises(ListingFetchError, match="HTTP 500"):
            fetcher.fetch_listing("jane")

    def test_network_error_is_fatal(self):
        def handler(request):
            raise httpx.ConnectError("down", request=request)

        fetcher = ListingFetcher(transport=httpx.MockTransport(handler))

        with pytest.raises(ListingFetchError):
            fetcher.fetch_listing("jane")

    def test_non_list_payload_is_fatal(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(200, json={"error": "x"}))
        fetcher = ListingFetcher(transport=transport)

        with pytest.raises(ListingFetchError, match="JSON array"):
            fetcher.fetch_listing("jane")

    def test_invalid_json_is_fatal(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(200, text="<html>"))
        fetcher = ListingFetcher(transport=transport)

        with pytest.raises(ListingFetchError, match="JSON"):
            fetcher.fetch_listing("jane")

    def test_entry_without_slug_is_fatal(self):
        transport = httpx.MockTransport(
            lambda request: httpx.Response(200, json=[{"title": "No slug"}])
        )
        fetcher = ListingFetcher(transport=transport)

        with pytest.raises(ListingFetchError, match="unusable entry"):
            fetcher.fetch_listing("jane")

    def test_empty_listing(self, make_api):
        fetcher = ListingFetcher(transport=make_api([]).transport)

        assert fetcher.fetch_listing("jane") == []


class TestArticleFetcher:
    """Tests for ArticleFetcher."""

    @pytest.fixture
    def summaries(self, articles):
        return [ArticleSummary(slug=a["slug"], title=a["title"]) for a in articles]

    def test_same_length_and_order(self, fake_api, summaries):
        fetcher = ArticleFetcher("jane", transport=fake_api.transport)

        details = fetcher.fetch_articles_sync(summaries)

        assert len(details) == len(summaries)
        assert [d.slug for d in details] == ["a", "b", "c"]

    def test_requests_detail_endpoint(self, fake_api, summaries):
        fetcher = ArticleFetcher("jane", transport=fake_api.transport)

        fetcher.fetch_articles_sync(summaries)

        paths = sorted(r.url.path for r in fake_api.requests)
        assert paths == [
            "/api/articles/jane/a",
            "/api/articles/jane/b",
            "/api/articles/jane/c",
        ]

    def test_failure_leaves_none_in_place(self, make_api, articles, summaries):
        api = make_api(articles, failing={"b"})
        fetcher = ArticleFetcher("jane", transport=api.transport)

        details = fetcher.fetch_articles_sync(summaries)

        assert len(details) == 3
        assert details[0].slug == "a"
        assert details[1] is None
        assert details[2].slug == "c"

    def test_missing_article_is_skipped(self, articles, summaries, make_api):
        api = make_api(articles[:2])
        fetcher = ArticleFetcher("jane", transport=api.transport)

        details = fetcher.fetch_articles_sync(summaries)

        assert details[2] is None

    def test_all_failures_do_not_raise(self, make_api, articles, summaries):
        api = make_api(articles, failing={"a", "b", "c"})
        fetcher = ArticleFetcher("jane", transport=api.transport)

        assert fetcher.fetch_articles_sync(summaries) == [None, None, None]

    def test_empty_input(self, fake_api):
        fetcher = ArticleFetcher("jane", transport=fake_api.transport)

        assert fetcher.fetch_articles_sync([]) == []
        assert fake_api.requests == []

    def test_concurrency_is_capped(self, articles, summaries):
        in_flight = 0
        peak = 0
        by_slug = {a["slug"]: a for a in articles}

        async def handler(request):
            nonlocal in_flight, peak
            in_flight += 1
            peak = max(peak, in_flight)
            await asyncio.sleep(0.01)
            in_flight -= 1
            return httpx.Response(200, json=by_slug[request.url.path.rsplit("/", 1)[-1]])

        fetcher = ArticleFetcher("jane", max_concurrent=1, transport=httpx.MockTransport(handler))

        details = fetcher.fetch_articles_sync(summaries)

        assert all(d is not None for d in details)
        assert peak == 1

    def test_fetch_article_reports_status(self, summaries):
        transport = httpx.MockTransport(lambda request: httpx.Response(503))
        fetcher = ArticleFetcher("jane", transport=transport)

        async def fetch_one():
            async with httpx.AsyncClient(transport=transport) as client:
                return await fetcher.fetch_article(client, summaries[0])

        with pytest.raises(ArticleFetchError) as excinfo:
            asyncio.run(fetch_one())

        assert excinfo.value.slug == "a"
        assert excinfo.value.reason == "Server error (503)"

    def test_unusable_payload_is_skipped(self, summaries):
        transport = httpx.MockTransport(lambda request: httpx.Response(200, json={"id": 1}))
        fetcher = ArticleFetcher("jane", transport=transport)

        assert fetcher.fetch_articles_sync(summaries[:1]) == [None]

    def test_unexpected_error_is_skipped(self, make_api, make_article):
        api = make_api([make_article("a", "A"), make_article("b\nx", "B")])
        summaries = [ArticleSummary(slug="a", title="A"), ArticleSummary(slug="b\nx", title="B")]
        fetcher = ArticleFetcher("jane", transport=api.transport)

        details = fetcher.fetch_articles_sync(summaries)

        assert details[0].slug == "a"
        assert details[1] is None

    def test_failure_is_logged(self, make_api, articles, summaries, capsys):
        api = make_api(articles, failing={"b"})
        fetcher = ArticleFetcher("jane", transport=api.transport)

        fetcher.fetch_articles_sync(summaries)

        out = capsys.readouterr().out
        assert "Skipping b: Request failed: connection refused" in out
        assert "Skipping a" not in out

    def test_non_http_exception_is_skipped(self, articles, summaries):
        by_slug = {a["slug"]: a for a in articles}

        def handler(request):
            slug = request.url.path.rsplit("/", 1)[-1]
            if slug == "b":
                raise RuntimeError("decoder blew up")
            return httpx.Response(200, json=by_slug[slug])

        fetcher = ArticleFetcher("jane", transport=httpx.MockTransport(handler))

        details = fetcher.fetch_articles_sync(summaries)

        assert [d.slug if d else None for d in details] == ["a", None, "c"]
