# package imports
from flask_smorest import Blueprint
from flask.views import MethodView
from flask import current_app
import time
from redis.exceptions import RedisError
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

# project imports
from external.redis import redis_client
from external.database import db
from app.search.config import InternalSearchConfig

bp = Blueprint(
    "health", __name__, description="Health check endpoints", url_prefix="/health"
)


@bp.route("/")
class HealthCheck(MethodView):
    def get(self):
        """Basic health check endpoint"""
        return {
            "status": "healthy",
            "timestamp": time.time(),
            "environment": current_app.config.get("ENV", "development"),
        }


@bp.route("/detailed")
class DetailedHealthCheck(MethodView):
    def get(self):
        """Detailed health check with all search dependencies"""
        health_status = {
            "status": "healthy",
            "timestamp": time.time(),
            "environment": current_app.config.get("ENV", "development"),
            "components": {},
        }

        # Database health check
        start_time = time.time()
        try:
            db.session.execute(text("SELECT 1"))
            health_status["components"]["database"] = {
                "status": "healthy",
                "response_time": round((time.time() - start_time) * 1000, 2),
            }
        except SQLAlchemyError as e:
            health_status["components"]["database"] = {
                "status": "unhealthy",
                "error": str(e),
            }
            health_status["status"] = "unhealthy"

        # Redis only stores search banners, so it degrades rather than fails
        start_time = time.time()
        try:
            redis_client.ping()
            health_status["components"]["redis"] = {
                "status": "healthy",
                "response_time": round((time.time() - start_time) * 1000, 2),
            }
        except RedisError as e:
            health_status["components"]["redis"] = {
                "status": "degraded",
                "error": str(e),
            }

        config = InternalSearchConfig.from_settings()
        health_status["components"]["doofinder"] = {
            "status": "enabled" if config.is_enabled() else "disabled",
            "hashid": config.hashid or None,
        }

        health_status["components"]["application"] = {
            "uptime": time.time() - current_app.start_time
            if hasattr(current_app, "start_time")
            else None,
        }

        return health_status


@bp.route("/live")
class LivenessCheck(MethodView):
    def get(self):
        """Liveness check for Kubernetes/container orchestration"""
        return {"alive": True, "timestamp": time.time()}
