"""
Tests for the local product query used by native and internal search.
"""

import pytest
from werkzeug.exceptions import HTTPException

from app.libs.errors import ValidationError
from app.libs.pagination import Paginator
from app.products.models import Product, ProductType
from app.products.services import ProductService
from app.search.guard import nested_search
from app.search.services import InternalSearch


@pytest.fixture
def products(db):
    rows = [
        Product(id=1, name="Red shoe", description="Running shoe", price=50),
        Product(id=2, name="Blue shoe", description="Walking shoe", price=40),
        Product(id=3, name="Green hat", description="Wool hat", price=20),
        Product(
            id=4,
            name="Red shoe - size 42",
            price=50,
            type=ProductType.VARIATION,
            parent_id=1,
        ),
        Product(id=5, name="Old shoe", price=10, status=Product.Status.ARCHIVED),
    ]
    db.session.add_all(rows)
    db.session.commit()
    return rows


class TestProductQuery:
    def test_id_filter_order_is_preserved(self, products):
        result = ProductService.query_products(
            {
                "id_filter": [3, 1, 2],
                "type_filter": ["product", "product_variation"],
                "fields": "ids",
                "order_by": "id_filter",
            }
        )

        assert result["items"] == [3, 1, 2]
        assert result["pagination"]["total_items"] == 3
        assert result["pagination"]["total_pages"] == 1

    def test_missing_and_inactive_ids_are_dropped(self, products):
        result = ProductService.query_products(
            {"id_filter": [99, 5, 2, 1], "fields": "ids", "order_by": "id_filter"}
        )

        assert result["items"] == [2, 1]

    def test_empty_id_filter_matches_nothing(self, products):
        result = ProductService.query_products(
            {"id_filter": [], "fields": "ids", "order_by": "id_filter"}
        )

        assert result["items"] == []
        assert result["pagination"]["total_items"] == 0
        assert result["pagination"]["total_pages"] == 0

    def test_variations_need_type_filter(self, products):
        base = {"id_filter": [4, 1], "fields": "ids", "order_by": "id_filter"}

        only_products = ProductService.query_products(dict(base))
        with_variations = ProductService.query_products(
            dict(base, type_filter=["product", "product_variation"])
        )

        assert only_products["items"] == [1]
        assert with_variations["items"] == [4, 1]

    def test_id_order_paginates_locally(self, products):
        args = {
            "id_filter": [2, 3, 1],
            "fields": "ids",
            "order_by": "id_filter",
            "per_page": 2,
        }

        first = ProductService.query_products(dict(args, page=1))
        second = ProductService.query_products(dict(args, page=2))

        assert first["items"] == [2, 3]
        assert second["items"] == [1]
        assert first["pagination"]["total_pages"] == 2

    def test_duplicate_ids_keep_first_position(self, products):
        result = ProductService.query_products(
            {"id_filter": [2, 1, 2], "fields": "ids", "order_by": "id_filter"}
        )

        assert result["items"] == [2, 1]

    def test_full_records_when_fields_not_ids(self, products):
        result = ProductService.query_products(
            {"id_filter": [3, 1], "order_by": "id_filter"}
        )

        assert [p.name for p in result["items"]] == ["Green hat", "Red shoe"]

    def test_search_and_id_filter_are_exclusive(self, products):
        with pytest.raises(ValidationError):
            ProductService.query_products({"search": "shoe", "id_filter": [1]})

    def test_native_search(self, products):
        result = ProductService.query_products({"search": "shoe", "sort_by": "price_asc"})

        assert [p.id for p in result["items"]] == [2, 1]

    def test_unknown_type_rejected(self, products):
        with pytest.raises(ValidationError):
            ProductService.query_products({"type_filter": ["service"]})


class TestProductsByIds:
    def test_keeps_requested_order(self, products):
        loaded = ProductService.get_products_by_ids([3, 1, 42, 2])
        assert [p.id for p in loaded] == [3, 1, 2]

    def test_empty(self, products):
        assert ProductService.get_products_by_ids([]) == []


class TestPaginator:
    def test_newest_first_by_default(self, db, products):
        query = db.session.query(Product).filter(Product.id.in_([1, 2, 3]))

        result = Paginator(query, page=1, per_page=10).paginate()

        assert [p.id for p in result["items"]] == [3, 2, 1]
        assert result["total_items"] == 3
        assert result["total_pages"] == 1

    def test_preserve_order_keeps_query_ordering(self, db, products):
        query = (
            db.session.query(Product)
            .filter(Product.id.in_([1, 2, 3]))
            .order_by(Product.price.asc())
        )

        result = Paginator(query, per_page=2, preserve_order=True).paginate()

        assert [p.id for p in result["items"]] == [3, 2]
        assert result["total_pages"] == 2

    @pytest.mark.parametrize("page, per_page", [(0, 10), (1, 0), (1, 101)])
    def test_rejects_out_of_range_params(self, db, products, page, per_page):
        query = db.session.query(Product)

        with pytest.raises(HTTPException):
            Paginator(query, page=page, per_page=per_page).paginate()


class TestSearchHook:
    @pytest.fixture
    def stub_client(self, monkeypatch, make_client):
        client = make_client(ids=[3])
        monkeypatch.setattr(
            InternalSearch, "_create_client", staticmethod(lambda config: client)
        )
        return client

    def test_nested_search_stays_native(
        self, products, search_settings, redis_stub, stub_client
    ):
        with nested_search():
            result = ProductService.search_products({"search": "shoe"})

        assert stub_client.queries == []
        assert {p.id for p in result["items"]} == {1, 2}
        assert "banner" not in result

    def test_top_level_search_goes_through_doofinder(
        self, products, search_settings, redis_stub, stub_client
    ):
        result = ProductService.search_products({"search": "shoe"})

        assert len(stub_client.queries) == 1
        assert [p.id for p in result["items"]] == [3]
