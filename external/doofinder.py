"""
Thin client for the hosted Doofinder search API (v5).

Only the calls internal search needs are wrapped: a ranked query and the two
banner statistics endpoints. Transport errors, timeouts, non-2xx answers and
responses that do not look like a result set are all raised as
`SearchUnavailable`; retrying is left to the caller.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import requests
from marshmallow import EXCLUDE, INCLUDE, Schema, fields
from marshmallow import ValidationError as SchemaValidationError

from app.libs.errors import SearchUnavailable

logger = logging.getLogger(__name__)

API_VERSION = "5"
DEFAULT_TIMEOUT = 5.0


class ResultItemSchema(Schema):
    class Meta:
        unknown = INCLUDE

    id = fields.Int(required=True)


class BannerSchema(Schema):
    class Meta:
        unknown = INCLUDE

    id = fields.Int(required=False, allow_none=True)


class SearchResponseSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    results = fields.List(fields.Nested(ResultItemSchema), required=True)
    total = fields.Int(load_default=None)
    page = fields.Int(load_default=1)
    results_per_page = fields.Int(load_default=None)
    query_name = fields.Str(load_default=None, allow_none=True)
    banner = fields.Nested(BannerSchema, load_default=None, allow_none=True)


@dataclass
class RankedResultSet:
    """Identifiers in the order the API ranked them, plus metadata."""

    ids: List[int]
    total: int
    banner: Optional[Dict[str, Any]] = None
    raw: Dict[str, Any] = field(default_factory=dict)

    def get_property(self, name, default=None):
        return self.raw.get(name, default)


class DoofinderClient:
    def __init__(
        self,
        hashid: str,
        api_key: str,
        api_url: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ) -> None:
        if not hashid or not api_key:
            raise ValueError("Doofinder client needs both a hashid and an API key")

        self.hashid = hashid
        self.zone, self.token = self._split_key(api_key)
        self.base_url = (
            api_url or f"https://{self.zone}-search.doofinder.com"
        ).rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"Authorization": f"Token {self.token}"})

    @staticmethod
    def _split_key(api_key):
        """API keys look like '<zone>-<secret>', e.g. 'eu1-abc123'."""
        zone, sep, token = api_key.partition("-")
        if not sep or not zone or not token:
            raise ValueError("Doofinder API key must have the form '<zone>-<secret>'")
        return zone, token

    def query(
        self,
        term: Optional[str],
        filters: Optional[Dict[str, Any]] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> RankedResultSet:
        """Run a search and return the ranked identifiers.

        A `None` term matches every indexed item; the API refuses an empty
        string, so those are sent as no term at all.
        """
        options = options or {}
        params: Dict[str, Any] = {"hashid": self.hashid}
        if term:
            params["query"] = term
        if "rpp" in options:
            params["rpp"] = int(options["rpp"])
        if "page" in options:
            params["page"] = int(options["page"])
        for key, value in (filters or {}).items():
            if isinstance(value, (list, tuple)):
                params[f"filter[{key}][]"] = list(value)
            else:
                params[f"filter[{key}]"] = value

        payload = self._get("search", params)

        try:
            data = SearchResponseSchema().load(payload)
        except SchemaValidationError as e:
            logger.error(f"Malformed Doofinder response: {e.messages}")
            raise SearchUnavailable("Malformed response from search API")

        ids = [item["id"] for item in data["results"]]
        total = data["total"] if data["total"] is not None else len(ids)
        banner = payload.get("banner") if data["banner"] is not None else None

        return RankedResultSet(ids=ids, total=total, banner=banner, raw=payload)

    def register_banner_display(self, banner_id: int) -> None:
        self._get("stats/banner_display", {"hashid": self.hashid, "banner_id": banner_id})

    def register_banner_click(self, banner_id: int) -> None:
        self._get("stats/banner_click", {"hashid": self.hashid, "banner_id": banner_id})

    def _get(self, endpoint, params):
        url = f"{self.base_url}/{API_VERSION}/{endpoint}"
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
        except requests.Timeout:
            logger.error(f"Doofinder request timed out: {endpoint}")
            raise SearchUnavailable("Search API timed out")
        except requests.RequestException as e:
            logger.error(f"Doofinder request failed: {endpoint}: {str(e)}")
            raise SearchUnavailable("Search API request failed")

        if not response.content:
            return {}

        try:
            payload = response.json()
        except ValueError:
            logger.error(f"Doofinder returned non-JSON body for {endpoint}")
            raise SearchUnavailable("Malformed response from search API")

        if not isinstance(payload, dict):
            raise SearchUnavailable("Malformed response from search API")
        return payload
