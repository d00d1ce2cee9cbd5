# quizapp/services/errors.py
"""Error taxonomy shared by the quiz services.

Endpoints never build these into HTTP responses themselves; the handlers
registered in ``quizapp.main`` map each class onto a status code.
"""


class ServiceError(Exception):
    status_code = 400

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class ValidationError(ServiceError):
    """Malformed or out-of-range input."""
    status_code = 422


class NotFoundError(ServiceError):
    """Quiz, question or attempt absent."""
    status_code = 404


class PermissionDenied(ServiceError):
    """Caller is authenticated but does not own the resource."""
    status_code = 403


class StorageError(ServiceError):
    """The database is unreachable or rejected a write."""
    status_code = 503
