# Filter Keys
PRODUCT_FILTER_KEYS = {
    "MIN_PRICE": "min_price",
    "MAX_PRICE": "max_price",
    "IN_STOCK": "in_stock",
    "SEARCH": "search",
    "SORT_BY": "sort_by",
    # Set by internal search only
    "ID_FILTER": "id_filter",
    "TYPE_FILTER": "type_filter",
    "FIELDS": "fields",
    "ORDER_BY": "order_by",
}

# Marker values understood by ProductQuery
FIELDS_IDS = "ids"
ORDER_BY_ID_FILTER = "id_filter"

# Item types searched by default and by internal search. Split variations are
# indexed as separate entries, so reconciled queries must match them too.
DEFAULT_TYPE_FILTER = ["product"]
SEARCHABLE_TYPES = ["product", "product_variation"]

SORT_OPTIONS = ["newest", "price_asc", "price_desc", "name"]
