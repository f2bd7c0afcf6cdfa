import logging
import uuid

from flask import g, has_request_context, request
from redis.exceptions import RedisError

from main.config import settings

logger = logging.getLogger(__name__)


def current_request_key():
    """Identity the stored banner is keyed by.

    An explicit `X-Request-ID` header wins, then the storefront session
    cookie; otherwise a key is minted once per request.
    """
    if not has_request_context():
        return None

    key = request.headers.get("X-Request-ID") or request.cookies.get(
        settings.DOOFINDER_BANNER_SESSION_COOKIE
    )
    if key:
        return key

    if "search_request_key" not in g:
        g.search_request_key = uuid.uuid4().hex
    return g.search_request_key


def remember_request_key(response):
    """Send a minted request key back as the session cookie.

    Without it the banner of a search could not be found again by the
    impression and click calls that follow.
    """
    cookie = settings.DOOFINDER_BANNER_SESSION_COOKIE
    if (
        "search_request_key" in g
        and not request.headers.get("X-Request-ID")
        and not request.cookies.get(cookie)
    ):
        response.set_cookie(
            cookie,
            g.search_request_key,
            max_age=settings.DOOFINDER_BANNER_TTL,
            httponly=True,
            samesite="Lax",
        )
    return response


class BannerStore:
    """Keeps the banner of the last search per request key, with a TTL."""

    def __init__(self, backend=None, ttl=None):
        if backend is None:
            from external.redis import redis_client

            backend = redis_client
        self.backend = backend
        self.ttl = ttl if ttl is not None else settings.DOOFINDER_BANNER_TTL

    def save(self, request_key, banner):
        if not request_key:
            return
        try:
            if banner:
                self.backend.cache_banner(request_key, banner, self.ttl)
            else:
                self.backend.clear_banner(request_key)
        except RedisError as e:
            logger.warning(f"Could not store search banner: {str(e)}")

    def load(self, request_key):
        if not request_key:
            return None
        try:
            return self.backend.get_banner(request_key)
        except RedisError as e:
            logger.warning(f"Could not load search banner: {str(e)}")
            return None

    def clear(self, request_key):
        if not request_key:
            return
        try:
            self.backend.clear_banner(request_key)
        except RedisError as e:
            logger.warning(f"Could not clear search banner: {str(e)}")
