import json
import logging

import redis
from main.config import settings

logger = logging.getLogger(__name__)


class RedisClient:
    def __init__(self, client=None):
        self.client = client or redis.Redis(
            host=settings.REDIS_HOST, port=settings.REDIS_PORT, decode_responses=True
        )
        logger.info("Redis client initialized")

    # Basic operations
    def get(self, name):
        """Wrapper for Redis get command"""
        return self.client.get(name)

    def set(self, name, value, ex=None, px=None, nx=False, xx=False):
        """Wrapper for Redis set command"""
        return self.client.set(name, value, ex=ex, px=px, nx=nx, xx=xx)

    def setex(self, name, time, value):
        """Wrapper for Redis setex command"""
        return self.client.setex(name, time, value)

    def delete(self, *names):
        """Wrapper for Redis delete command"""
        return self.client.delete(*names)

    def exists(self, *names):
        """Wrapper for Redis exists command"""
        return self.client.exists(*names)

    def ttl(self, name):
        """Wrapper for Redis ttl command"""
        return self.client.ttl(name)

    # JSON helpers
    def set_json(self, name, value, ex=None):
        """Store a JSON-serialisable value, optionally with an expiry"""
        return self.client.set(name, json.dumps(value), ex=ex)

    def get_json(self, name):
        raw = self.client.get(name)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except (TypeError, ValueError):
            logger.warning(f"Discarding undecodable JSON value at {name}")
            return None

    # Search banners
    def cache_banner(self, request_key, banner, ttl):
        self.set_json(f"doofinder:banner:{request_key}", banner, ex=ttl)

    def get_banner(self, request_key):
        return self.get_json(f"doofinder:banner:{request_key}")

    def clear_banner(self, request_key):
        self.client.delete(f"doofinder:banner:{request_key}")

    # Ping operation
    def ping(self):
        """Wrapper for Redis ping command"""
        return self.client.ping()

    # Close connection
    def close(self):
        """Wrapper for Redis close command"""
        self.client.close()


redis_client = RedisClient()
