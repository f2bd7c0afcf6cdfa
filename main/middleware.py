import logging
import time

logger = logging.getLogger(__name__)


class RequestLogMiddleware:
    def __init__(self, app):
        self.app = app

    def __call__(self, environ, start_response):
        started = time.time()
        request_id = environ.get("HTTP_X_REQUEST_ID", "-")
        logger.info(
            f"Incoming request: {environ['REQUEST_METHOD']} {environ['PATH_INFO']} "
            f"[{request_id}]"
        )

        def _start_response(status, headers, exc_info=None):
            elapsed = (time.time() - started) * 1000
            logger.debug(f"Responded {status} in {elapsed:.1f}ms [{request_id}]")
            return start_response(status, headers, exc_info)

        return self.app(environ, _start_response)
