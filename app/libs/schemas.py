from marshmallow import Schema, fields


class PaginationSchema(Schema):
    page = fields.Int()
    per_page = fields.Int()
    total_items = fields.Int()
    total_pages = fields.Int()
