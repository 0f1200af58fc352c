"""Shared fixtures: a fake dev.to API served through httpx.MockTransport."""

import httpx
import pytest

API = "https://dev.to/api"
USERNAME = "jane"


def article_payload(slug: str, title: str, **overrides) -> dict:
    payload = {
        "type_of": "article",
        "id": 1000 + len(slug),
        "slug": slug,
        "title": title,
        "description": f"All about {title}",
        "created_at": "2021-05-02T10:15:30Z",
        "readable_publish_date": "May 2",
        "reading_time_minutes": 4,
        "public_reactions_count": 12,
        "comments_count": 3,
        "url": f"https://dev.to/{USERNAME}/{slug}",
        "body_markdown": f"# {title}\n\nSome text about {title}.\n",
        "tags": ["python"],
    }
    payload.update(overrides)
    return payload


class FakeApi:
    """Serves a listing and per-slug details; slugs in ``failing`` error out."""

    def __init__(self, articles, failing=(), listing_status=200):
        self.articles = list(articles)
        self.failing = set(failing)
        self.listing_status = listing_status
        self.requests = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if path == "/api/articles/latest":
            if self.listing_status != 200:
                return httpx.Response(self.listing_status, json={"error": "nope"})
            listing = [
                {"slug": a["slug"], "title": a["title"], "tag_list": []}
                for a in self.articles
            ]
            return httpx.Response(200, json=listing)

        prefix = f"/api/articles/{USERNAME}/"
        if path.startswith(prefix):
            slug = path[len(prefix):]
            if slug in self.failing:
                raise httpx.ConnectError("connection refused", request=request)
            for article in self.articles:
                if article["slug"] == slug:
                    return httpx.Response(200, json=article)

        return httpx.Response(404, json={"error": "not found"})

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def articles():
    return [
        article_payload("a", "A"),
        article_payload("b", "B"),
        article_payload("c", "C"),
    ]


@pytest.fixture
def fake_api(articles):
    return FakeApi(articles)


@pytest.fixture
def output_dir(tmp_path):
    path = tmp_path / "posts"
    path.mkdir()
    return path


@pytest.fixture
def make_api():
    return FakeApi


@pytest.fixture
def make_article():
    return article_payload
