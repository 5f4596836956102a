"""
Health check endpoint.
"""
from django.db import connection
from django.http import JsonResponse
from django.views.decorators.http import require_http_methods
from recruiting.core import config
from recruiting.core.config import load_talent_search_config
from recruiting.observability.tracing import get_langfuse_client


def _status(status: str, message: str) -> dict:
    return {"status": status, "message": message}


def _check_database() -> dict:
    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
            cursor.fetchone()
    except Exception as e:
        return _status("unhealthy", f"Database connection failed: {e}")
    return _status("healthy", "Database connection successful")


def _check_talent_search() -> dict:
    # Optional feature: unconfigured is degraded, a broken config is unhealthy
    try:
        talent_config = load_talent_search_config()
    except ValueError as e:
        return _status("unhealthy", f"Invalid talent search configuration: {e}")
    if not talent_config.embeddings_configured:
        return _status("degraded", "AI search is not configured")
    return _status("healthy", f"AI search enabled ({talent_config.embedding_backend} embeddings)")


def _check_langfuse() -> dict:
    if not config.LANGFUSE_ENABLED:
        return _status("degraded", "Langfuse is disabled")
    if get_langfuse_client():
        return _status("healthy", "Langfuse client initialized")
    return _status("degraded", "Langfuse enabled but client not available (check configuration)")


@require_http_methods(["GET"])
def health_check(request):
    """
    Health check endpoint for monitoring.

    Overall status is unhealthy when any service is unhealthy; degraded
    optional services do not change it.
    """
    services = {
        "database": _check_database(),
        "talent_search": _check_talent_search(),
        "langfuse": _check_langfuse(),
    }
    unhealthy = any(service["status"] == "unhealthy" for service in services.values())

    return JsonResponse({
        "status": "unhealthy" if unhealthy else "healthy",
        "services": services,
    })
