from marshmallow import Schema, fields


class BannerResponseSchema(Schema):
    banner = fields.Dict(allow_none=True)


class BannerClickArgs(Schema):
    redirect = fields.Bool(load_default=False)


class SearchStatusSchema(Schema):
    enabled = fields.Bool(required=True)
    language = fields.Str(required=True)
    hashid = fields.Str(allow_none=True)
    results_per_page = fields.Int()
