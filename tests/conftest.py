import os
import tempfile

import pytest

# Settings are read when main.config is imported
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_DIR", os.path.join(tempfile.gettempdir(), "markt-search-logs"))
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("DOOFINDER_ENABLED", "no")

from external.doofinder import RankedResultSet  # noqa: E402
from app.libs.errors import SearchUnavailable  # noqa: E402
from app.search.banners import BannerStore  # noqa: E402
from app.search.config import InternalSearchConfig  # noqa: E402


class StubSearchClient:
    """Stands in for DoofinderClient and records every call."""

    def __init__(self, ids=None, banner=None, error=None, total=None):
        self.ids = list(ids or [])
        self.banner = banner
        self.error = error
        self.total = total
        self.queries = []
        self.displays = []
        self.clicks = []

    def query(self, term, filters=None, options=None):
        self.queries.append((term, filters, options))
        if self.error:
            raise self.error
        total = self.total if self.total is not None else len(self.ids)
        return RankedResultSet(ids=list(self.ids), total=total, banner=self.banner)

    def register_banner_display(self, banner_id):
        if self.error:
            raise self.error
        self.displays.append(banner_id)

    def register_banner_click(self, banner_id):
        if self.error:
            raise self.error
        self.clicks.append(banner_id)


class StubProductQuery:
    """Local store that knows a fixed set of product IDs."""

    def __init__(self, local_ids=None, error=None):
        self.local_ids = set(local_ids or [])
        self.error = error
        self.calls = []

    def __call__(self, args):
        self.calls.append(dict(args))
        if self.error:
            raise self.error
        ids = [pid for pid in args["id_filter"] if pid in self.local_ids]
        return {
            "items": ids,
            "pagination": {
                "page": 1,
                "per_page": 20,
                "total_items": len(ids),
                "total_pages": 1 if ids else 0,
            },
        }


class StubBannerBackend:
    """Dict-backed replacement for the redis banner helpers."""

    def __init__(self):
        self.banners = {}

    def cache_banner(self, request_key, banner, ttl):
        self.banners[request_key] = banner

    def get_banner(self, request_key):
        return self.banners.get(request_key)

    def clear_banner(self, request_key):
        self.banners.pop(request_key, None)

    def ping(self):
        return True


@pytest.fixture
def enabled_config():
    return InternalSearchConfig(
        enabled=True, api_key="eu1-secretkey1234", hashid="abc123", results_per_page=500
    )


@pytest.fixture
def banner_backend():
    return StubBannerBackend()


@pytest.fixture
def banner_store(banner_backend):
    return BannerStore(backend=banner_backend, ttl=60)


@pytest.fixture
def make_client():
    return StubSearchClient


@pytest.fixture
def make_product_query():
    return StubProductQuery


@pytest.fixture
def unavailable():
    return SearchUnavailable("boom")


@pytest.fixture(scope="session")
def app():
    from main.setup import create_app

    return create_app({"TESTING": True, "SQLALCHEMY_DATABASE_URI": "sqlite://"})


@pytest.fixture
def db(app):
    from external.database import db as _db, create_tables

    with app.app_context():
        create_tables()
        yield _db
        _db.session.remove()
        _db.drop_all()


@pytest.fixture
def client(app, db):
    return app.test_client()


@pytest.fixture
def search_settings(monkeypatch):
    """Turn internal search on through the global settings object."""
    from main.config import settings

    monkeypatch.setattr(settings, "DOOFINDER_ENABLED", "yes")
    monkeypatch.setattr(settings, "DOOFINDER_API_KEY", "eu1-secretkey1234")
    monkeypatch.setattr(settings, "DOOFINDER_HASHID", "abc123")
    return settings


@pytest.fixture
def redis_stub(monkeypatch, banner_backend):
    import external.redis

    monkeypatch.setattr(external.redis, "redis_client", banner_backend)
    return banner_backend
