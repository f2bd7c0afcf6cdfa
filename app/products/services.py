# python imports
import logging
from typing import Any, Dict, List

# package imports
from sqlalchemy import case, false, or_
from sqlalchemy.exc import SQLAlchemyError

# project imports
from app.libs.session import read_scope, session_scope
from app.libs.pagination import Paginator
from app.libs.errors import (
    APIError,
    LocalQueryError,
    NotFoundError,
    SearchUnavailable,
    ValidationError,
)
from app.search.guard import is_nested_search
from app.search.services import InternalSearch

# app imports
from .models import Product, ProductType
from .constants import (
    PRODUCT_FILTER_KEYS,
    DEFAULT_TYPE_FILTER,
    FIELDS_IDS,
    ORDER_BY_ID_FILTER,
)

logger = logging.getLogger(__name__)


class ProductQuery:
    """Native product query built from request-style arguments.

    Besides the storefront filters it understands the restriction keys set
    by internal search: `id_filter`, `type_filter`, `fields` and `order_by`.
    """

    SORT_MAP = {
        "newest": (Product.created_at.desc(), Product.id.desc()),
        "price_asc": (Product.price.asc(), Product.id.asc()),
        "price_desc": (Product.price.desc(), Product.id.asc()),
        "name": (Product.name.asc(), Product.id.asc()),
    }

    def __init__(self, args: Dict[str, Any], session) -> None:
        self.args = args
        self.session = session

        self.id_filter = args.get(PRODUCT_FILTER_KEYS["ID_FILTER"])
        self.search = args.get(PRODUCT_FILTER_KEYS["SEARCH"])
        if self.id_filter is not None and self.search:
            raise ValueError("id_filter and search cannot be combined")

        self.ids_only = args.get(PRODUCT_FILTER_KEYS["FIELDS"]) == FIELDS_IDS

    def build(self):
        entity = Product.id if self.ids_only else Product
        query = self.session.query(entity).filter(
            Product.status == Product.Status.ACTIVE
        )

        types = self.args.get(PRODUCT_FILTER_KEYS["TYPE_FILTER"]) or DEFAULT_TYPE_FILTER
        try:
            query = query.filter(Product.type.in_([ProductType(t) for t in types]))
        except ValueError:
            raise ValidationError(f"Unknown product type in {types}")

        if self.id_filter is not None:
            if self.id_filter:
                query = query.filter(Product.id.in_(self.id_filter))
            else:
                # An empty restriction matches nothing
                query = query.filter(false())

        if self.search:
            pattern = f"%{self.search}%"
            query = query.filter(
                or_(Product.name.ilike(pattern), Product.description.ilike(pattern))
            )

        if PRODUCT_FILTER_KEYS["MIN_PRICE"] in self.args:
            query = query.filter(
                Product.price >= self.args[PRODUCT_FILTER_KEYS["MIN_PRICE"]]
            )

        if PRODUCT_FILTER_KEYS["MAX_PRICE"] in self.args:
            query = query.filter(
                Product.price <= self.args[PRODUCT_FILTER_KEYS["MAX_PRICE"]]
            )

        if self.args.get(PRODUCT_FILTER_KEYS["IN_STOCK"]):
            query = query.filter(Product.stock > 0)

        return self._apply_ordering(query)

    def _apply_ordering(self, query):
        """Returns (query, ordered) where ordered means paginator must keep it."""
        order_by = self.args.get(PRODUCT_FILTER_KEYS["ORDER_BY"])
        if order_by == ORDER_BY_ID_FILTER:
            if not self.id_filter:
                return query, True
            positions = {}
            for position, product_id in enumerate(self.id_filter):
                positions.setdefault(product_id, position)
            return query.order_by(case(positions, value=Product.id)), True

        sort_by = self.args.get(PRODUCT_FILTER_KEYS["SORT_BY"])
        if sort_by in self.SORT_MAP:
            return query.order_by(*self.SORT_MAP[sort_by]), True

        return query, False

    def execute(self) -> Dict[str, Any]:
        query, ordered = self.build()
        paginator = Paginator(
            query,
            page=self.args.get("page", 1),
            per_page=self.args.get("per_page", 20),
            preserve_order=ordered,
        )
        result = paginator.paginate()

        items = result["items"]
        if self.ids_only:
            items = [row[0] for row in items]

        return {
            "items": items,
            "pagination": {
                "page": result["page"],
                "per_page": result["per_page"],
                "total_items": result["total_items"],
                "total_pages": result["total_pages"],
            },
        }


class ProductService:
    @staticmethod
    def get_product(product_id):
        try:
            with read_scope() as session:
                product = session.get(Product, product_id)
                if not product:
                    raise NotFoundError("Product not found")
                return product
        except SQLAlchemyError as e:
            logger.error(f"Database error fetching product {product_id}: {str(e)}")
            raise APIError("Failed to fetch product", 500)

    @staticmethod
    def get_products_by_ids(product_ids: List[int]) -> List[Product]:
        """Load products keeping the order of `product_ids`."""
        if not product_ids:
            return []
        try:
            with read_scope() as session:
                products = (
                    session.query(Product).filter(Product.id.in_(product_ids)).all()
                )
        except SQLAlchemyError as e:
            logger.error(f"Database error loading products by id: {str(e)}")
            raise LocalQueryError()

        by_id = {product.id: product for product in products}
        return [by_id[pid] for pid in product_ids if pid in by_id]

    @staticmethod
    def search_products(args):
        """List products, answering search requests through Doofinder.

        When internal search is enabled and the request carries a search
        term, Doofinder picks and orders the products. If the search API is
        down the native search runs instead. Queries issued by internal
        search itself always run natively.
        """
        if PRODUCT_FILTER_KEYS["SEARCH"] in args and not is_nested_search():
            internal_search = InternalSearch.for_request()
            if internal_search.is_enabled():
                try:
                    reconciled = internal_search.search(args)
                except SearchUnavailable as e:
                    logger.warning(
                        f"Doofinder unavailable, using native search: {e.message}"
                    )
                    reconciled = None

                if reconciled is not None:
                    return {
                        "items": ProductService.get_products_by_ids(reconciled["ids"]),
                        "pagination": {
                            "page": args.get("page", 1),
                            "per_page": args.get("per_page", 20),
                            "total_items": reconciled["found_items"],
                            "total_pages": reconciled["total_pages"],
                        },
                        "banner": internal_search.banner,
                    }

        return ProductService.query_products(args)

    @staticmethod
    def query_products(args):
        try:
            with read_scope() as session:
                return ProductQuery(args, session).execute()
        except ValueError as e:
            raise ValidationError(str(e))
        except SQLAlchemyError as e:
            logger.error(f"Database error searching products: {str(e)}")
            raise LocalQueryError()

    @staticmethod
    def create_product(product_data):
        try:
            with session_scope() as session:
                product = Product(
                    name=product_data["name"],
                    description=product_data.get("description"),
                    price=product_data["price"],
                    stock=product_data.get("stock", 0),
                    sku=product_data.get("sku"),
                    type=ProductType(product_data.get("type", "product")),
                    parent_id=product_data.get("parent_id"),
                    product_metadata=product_data.get("product_metadata"),
                )
                if "status" in product_data:
                    product.status = Product.Status(product_data["status"])
                session.add(product)
                session.flush()
                return product
        except SQLAlchemyError as e:
            logger.error(f"Database error creating product: {str(e)}")
            raise APIError("Failed to create product", 500)
