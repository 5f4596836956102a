"""
Custom error classes and error handling.
"""
from functools import wraps
from django.http import JsonResponse
from recruiting.core.logging import get_logger

logger = get_logger(__name__)


class APIError(Exception):
    """Base API error class."""
    code = "error"

    def __init__(self, message: str, status_code: int = 400):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"error": self.message, "code": self.code}


class ValidationError(APIError):
    """Request payload failed validation."""
    code = "invalid_request"

    def __init__(self, message: str = "Invalid request", details=None):
        self.details = details or []
        super().__init__(message, status_code=400)

    def to_dict(self) -> dict:
        payload = super().to_dict()
        if self.details:
            payload["details"] = self.details
        return payload


class AuthenticationError(APIError):
    """Authentication error."""
    code = "unauthenticated"

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, status_code=401)


class AuthorizationError(APIError):
    """Authorization error."""
    code = "forbidden"

    def __init__(self, message: str = "Not authorized"):
        super().__init__(message, status_code=403)


class NotFoundError(APIError):
    """Resource not found error."""
    code = "not_found"

    def __init__(self, message: str = "Resource not found"):
        super().__init__(message, status_code=404)


class ConfigurationError(APIError):
    """An AI-backed feature was requested while its backend is not configured."""
    code = "feature_unavailable"

    def __init__(self, message: str = "This feature is not available. Contact your administrator to enable it."):
        super().__init__(message, status_code=412)


class EmbeddingBackendError(APIError):
    """The embedding backend failed or returned an unusable vector."""
    code = "embedding_backend_error"

    def __init__(self, message: str = "Embedding backend request failed"):
        super().__init__(message, status_code=502)


class AnalysisGenerationError(APIError):
    """The generative backend did not produce a usable analysis."""
    code = "analysis_generation_failed"

    def __init__(self, message: str = "Failed to generate player analysis"):
        super().__init__(message, status_code=502)


class InternalError(APIError):
    """Opaque failure surfaced to callers; details stay in server logs."""
    code = "internal_error"

    def __init__(self, message: str = "Something went wrong. Please try again later."):
        super().__init__(message, status_code=500)


def handle_api_errors(view):
    """
    Translate errors raised by a view into JSON responses.

    APIError subclasses keep their status and message; anything else is
    logged and returned as an opaque InternalError.
    """
    @wraps(view)
    def wrapper(request, *args, **kwargs):
        try:
            return view(request, *args, **kwargs)
        except APIError as e:
            if e.status_code >= 500:
                logger.error(f"{view.__name__} failed: {e.message}")
            return JsonResponse(e.to_dict(), status=e.status_code)
        except Exception as e:
            logger.error(f"Unhandled error in {view.__name__}: {e}", exc_info=True)
            error = InternalError()
            return JsonResponse(error.to_dict(), status=error.status_code)
    return wrapper
