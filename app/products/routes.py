import logging

# package imports
from flask_smorest import Blueprint
from flask.views import MethodView

# app imports
from .services import ProductService
from .schemas import (
    ProductSchema,
    ProductCreateSchema,
    ProductSearchSchema,
    ProductSearchResultSchema,
)

logger = logging.getLogger(__name__)

bp = Blueprint(
    "products", __name__, description="Product operations", url_prefix="/products"
)


@bp.route("/")
class ProductList(MethodView):
    @bp.arguments(ProductSearchSchema, location="query")
    @bp.response(200, ProductSearchResultSchema)
    def get(self, args):
        """List products; searches are ranked by Doofinder when enabled"""
        return ProductService.search_products(args)

    @bp.arguments(ProductCreateSchema)
    @bp.response(201, ProductSchema)
    def post(self, product_data):
        """Create a product or a product variation"""
        return ProductService.create_product(product_data)


@bp.route("/<int:product_id>")
class ProductDetail(MethodView):
    @bp.response(200, ProductSchema)
    def get(self, product_id):
        """Get product details"""
        return ProductService.get_product(product_id)
