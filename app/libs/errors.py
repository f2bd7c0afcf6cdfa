class APIError(Exception):
    """Base API error with status code and message"""

    def __init__(self, message, status_code=400, payload=None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload

    def to_dict(self):
        rv = dict(self.payload or ())
        rv["message"] = self.message
        return rv


class ValidationError(APIError):
    """Invalid request data"""

    def __init__(self, message, status_code=400):
        super().__init__(message, status_code)


class NotFoundError(APIError):
    """Resource not found errors"""

    def __init__(self, message="Resource not found", status_code=404):
        super().__init__(message, status_code)


class SearchUnavailable(APIError):
    """The hosted search API could not be reached or returned garbage.

    Callers are expected to fall back to the native product search.
    """

    def __init__(self, message="Search service unavailable", status_code=503):
        super().__init__(message, status_code)


class LocalQueryError(APIError):
    """The local product store failed while running a restricted query"""

    def __init__(self, message="Failed to query products", status_code=500):
        super().__init__(message, status_code)
