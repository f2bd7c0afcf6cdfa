from marshmallow import Schema, fields, validate
from app.libs.schemas import PaginationSchema
from .constants import SORT_OPTIONS


class ProductCreateSchema(Schema):
    name = fields.Str(required=True, validate=validate.Length(min=2, max=100))
    description = fields.Str()
    price = fields.Float(required=True, validate=validate.Range(min=0.01))
    stock = fields.Int(validate=validate.Range(min=0))
    sku = fields.Str()
    type = fields.Str(
        load_default="product",
        validate=validate.OneOf(["product", "product_variation"]),
    )
    parent_id = fields.Int(allow_none=True)
    status = fields.Str(
        validate=validate.OneOf(["active", "draft", "archived", "out_of_stock"])
    )
    product_metadata = fields.Dict()


class ProductSchema(Schema):
    id = fields.Int(dump_only=True)
    name = fields.Str()
    description = fields.Str()
    price = fields.Float()
    stock = fields.Int()
    sku = fields.Str()
    type = fields.Function(lambda obj: obj.type.value if obj.type else None)
    parent_id = fields.Int(allow_none=True)
    status = fields.Function(lambda obj: obj.status.value if obj.status else None)
    product_metadata = fields.Dict(allow_none=True)
    created_at = fields.DateTime(dump_only=True)
    updated_at = fields.DateTime(dump_only=True)


class ProductSearchSchema(Schema):
    page = fields.Int(load_default=1, validate=validate.Range(min=1))
    per_page = fields.Int(load_default=20, validate=validate.Range(min=1, max=100))
    search = fields.Str(required=False)
    min_price = fields.Float(required=False)
    max_price = fields.Float(required=False)
    in_stock = fields.Bool(required=False)
    sort_by = fields.Str(required=False, validate=validate.OneOf(SORT_OPTIONS))
    lang = fields.Str(required=False)


class ProductSearchResultSchema(Schema):
    items = fields.List(fields.Nested(ProductSchema))
    pagination = fields.Nested(PaginationSchema)
    banner = fields.Dict(allow_none=True)
