import logging

# package imports
from flask import redirect
from flask_smorest import Blueprint
from flask.views import MethodView

# app imports
from .banners import remember_request_key
from .services import InternalSearch
from .schemas import BannerClickArgs, BannerResponseSchema, SearchStatusSchema

logger = logging.getLogger(__name__)

bp = Blueprint(
    "search",
    __name__,
    description="Doofinder internal search: status and banner tracking",
    url_prefix="/search",
)
bp.after_app_request(remember_request_key)


@bp.route("/status")
class SearchStatus(MethodView):
    @bp.response(200, SearchStatusSchema)
    def get(self):
        """Whether internal search is active for the current language"""
        config = InternalSearch.for_request().config
        return {
            "enabled": config.is_enabled(),
            "language": config.language,
            "hashid": config.hashid or None,
            "results_per_page": config.results_per_page,
        }


@bp.route("/banner")
class SearchBanner(MethodView):
    @bp.response(200, BannerResponseSchema)
    def get(self):
        """Banner returned by the last search of this session"""
        return {"banner": InternalSearch.for_request().get_banner()}


@bp.route("/banner/impression")
class BannerImpression(MethodView):
    @bp.response(204)
    def post(self):
        """Register that the stored banner was displayed"""
        internal_search = InternalSearch.for_request()
        if internal_search.is_enabled():
            internal_search.track_banner_impression()


@bp.route("/banner/<int:banner_id>/click")
class BannerClick(MethodView):
    @bp.arguments(BannerClickArgs, location="query")
    @bp.response(204)
    def post(self, args, banner_id):
        """Register a banner click, optionally redirecting to its link"""
        internal_search = InternalSearch.for_request()
        if internal_search.is_enabled():
            internal_search.track_banner_click(banner_id)

        if args["redirect"]:
            banner = internal_search.get_banner() or {}
            if str(banner.get("id")) == str(banner_id) and banner.get("link"):
                return redirect(banner["link"])
        return None
