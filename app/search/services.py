# python imports
import logging
from typing import Any, Callable, Dict, Optional

# project imports
from external.doofinder import DoofinderClient
from app.libs.errors import SearchUnavailable
from app.products.constants import (
    PRODUCT_FILTER_KEYS,
    SEARCHABLE_TYPES,
    FIELDS_IDS,
    ORDER_BY_ID_FILTER,
)

# app imports
from .banners import BannerStore, current_request_key
from .config import InternalSearchConfig
from .guard import nested_search
from .language import Multilanguage

logger = logging.getLogger(__name__)


class InternalSearch:
    """Replaces native product search with Doofinder results.

    Doofinder ranks the products, the local store only restricts and
    paginates them: the native free-text filter is dropped and the local
    query is told to keep the order of the ID list it is given.

    One instance serves one request. The search client is built on first
    use and reused afterwards.
    """

    def __init__(
        self,
        config: Optional[InternalSearchConfig] = None,
        client_factory: Optional[Callable[[InternalSearchConfig], Any]] = None,
        product_query: Optional[Callable[[Dict[str, Any]], Dict[str, Any]]] = None,
        banner_store: Optional[BannerStore] = None,
        request_key: Optional[str] = None,
    ) -> None:
        self.config = config or InternalSearchConfig.from_settings()
        self.client = None
        self.search_term: Optional[str] = None
        self.banner: Optional[Dict[str, Any]] = None

        self._client_factory = client_factory or self._create_client
        self._product_query = product_query
        self._banner_store = banner_store
        self._request_key = request_key

    @classmethod
    def for_request(cls, **kwargs):
        """Build an instance with credentials for the current language."""
        language = Multilanguage().get_current_language()
        config = InternalSearchConfig.from_settings(language=language["prefix"])
        return cls(config=config, **kwargs)

    def is_enabled(self) -> bool:
        return self.config.is_enabled()

    @property
    def banner_store(self) -> BannerStore:
        if self._banner_store is None:
            self._banner_store = BannerStore()
        return self._banner_store

    @property
    def request_key(self) -> Optional[str]:
        if self._request_key is None:
            self._request_key = current_request_key()
        return self._request_key

    def get_client(self):
        """Return the search client, creating it on first use."""
        if self.client is None:
            logger.info(
                f"Creating Doofinder search client: {self.config.hashid}, "
                f"{self.config.masked_api_key}"
            )
            try:
                self.client = self._client_factory(self.config)
            except ValueError as e:
                logger.error(f"Invalid Doofinder credentials: {str(e)}")
                raise SearchUnavailable("Search service is misconfigured")
        return self.client

    @staticmethod
    def _create_client(config: InternalSearchConfig) -> DoofinderClient:
        return DoofinderClient(
            config.hashid,
            config.api_key,
            api_url=config.api_url,
            timeout=config.timeout,
        )

    def search(
        self, args: Dict[str, Any], is_search: Optional[bool] = None
    ) -> Optional[Dict[str, Any]]:
        """Run a Doofinder search and the ID-restricted product query.

        Args:
            args: Native product query arguments. Not modified.
            is_search: Whether the request is a search request at all.
                Defaults to whether `args` carries a search key.

        Returns:
            None when there is nothing to reconcile (not a search request,
            or an empty term), otherwise a dict with:
            - ids: product IDs of the requested page, in Doofinder order
            - found_items: number of matching local products
            - total_pages: number of local pages

        Raises:
            SearchUnavailable: the search API failed; callers should fall
                back to the native search.
            LocalQueryError: the local product query failed.
        """
        logger.debug("Start Doofinder search")

        self.search_term = self._parse_search_term(args, is_search)
        if self.search_term is None:
            logger.debug("Search term not found. Aborting.")
            return None

        results = self.get_client().query(
            self.search_term, None, {"rpp": self.config.results_per_page}
        )
        logger.debug(
            f"Doofinder returned {len(results.ids)} of {results.total} results"
        )
        if results.total > len(results.ids):
            logger.warning(
                f"Doofinder results truncated to {len(results.ids)} of "
                f"{results.total}; raise DOOFINDER_RESULTS_PER_PAGE to see more"
            )

        self.banner = results.banner
        self.banner_store.save(self.request_key, self.banner)

        ids = list(results.ids)
        logger.debug(f"Extracted ids: {', '.join(str(i) for i in ids)}")

        query_args = dict(args)
        # Doofinder already matched the term; the local store must not
        # filter or score by it again.
        query_args.pop(PRODUCT_FILTER_KEYS["SEARCH"], None)
        query_args.pop("sort", None)
        query_args.pop(PRODUCT_FILTER_KEYS["SORT_BY"], None)

        query_args[PRODUCT_FILTER_KEYS["ID_FILTER"]] = ids
        query_args[PRODUCT_FILTER_KEYS["TYPE_FILTER"]] = list(SEARCHABLE_TYPES)
        query_args[PRODUCT_FILTER_KEYS["FIELDS"]] = FIELDS_IDS
        query_args[PRODUCT_FILTER_KEYS["ORDER_BY"]] = ORDER_BY_ID_FILTER

        logger.debug("Start nested search")
        with nested_search():
            result = self._run_product_query(query_args)
        logger.debug("End nested search")

        logger.info(f"Doofinder search completed for '{self.search_term}'")

        pagination = result.get("pagination", {})
        return {
            "ids": list(result.get("items", [])),
            "found_items": pagination.get("total_items", 0),
            "total_pages": pagination.get("total_pages", 0),
        }

    def _run_product_query(self, query_args):
        if self._product_query is None:
            from app.products.services import ProductService

            self._product_query = ProductService.search_products
        return self._product_query(query_args)

    def _parse_search_term(self, args, is_search):
        """Grab the term and turn it into a value the API accepts."""
        key = PRODUCT_FILTER_KEYS["SEARCH"]
        if is_search is None:
            is_search = key in args

        if not is_search:
            logger.debug("Not a search request")
            return None

        term = args.get(key)
        if isinstance(term, str):
            term = term.strip()

        # The API rejects an empty string; no term means "everything"
        if not term:
            logger.debug("Found empty search")
            return None

        return term

    def get_banner(self) -> Optional[Dict[str, Any]]:
        """Banner returned by the last search for this request, if any."""
        if self.banner is None:
            self.banner = self.banner_store.load(self.request_key)
        return self.banner

    def track_banner_impression(self) -> None:
        banner = self.get_banner()
        if not banner or not banner.get("id"):
            return

        try:
            self.get_client().register_banner_display(int(banner["id"]))
        except (SearchUnavailable, TypeError, ValueError) as e:
            logger.warning(f"Failed to register banner impression: {str(e)}")

    def track_banner_click(self, banner_id: int) -> None:
        try:
            self.get_client().register_banner_click(int(banner_id))
        except (SearchUnavailable, TypeError, ValueError) as e:
            logger.warning(f"Failed to register banner click: {str(e)}")
