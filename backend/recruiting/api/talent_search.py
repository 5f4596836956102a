"""
Talent search endpoints.
"""
import json
from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods
from pydantic import ValidationError as PydanticValidationError
from recruiting.core.dependencies import admin_required, onboarded_coach_required
from recruiting.core.errors import ValidationError, handle_api_errors
from recruiting.core.logging import get_logger
from recruiting.schemas.talent_search import RefreshEmbeddingsRequest, SearchFilterSet
from recruiting.services.factory import (
    build_analysis_service,
    build_embedding_service,
    build_talent_search_service,
)

logger = get_logger(__name__)


def _parse_body(request, schema):
    """Decode a JSON body and validate it against a pydantic schema."""
    try:
        data = json.loads(request.body) if request.body else {}
    except json.JSONDecodeError:
        raise ValidationError("Invalid JSON")

    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")

    try:
        return schema.model_validate(data)
    except PydanticValidationError as e:
        details = [
            {"field": ".".join(str(part) for part in error["loc"]), "message": error["msg"]}
            for error in e.errors()
        ]
        raise ValidationError("Invalid request", details=details)


@csrf_exempt
@require_http_methods(["POST"])
@handle_api_errors
@onboarded_coach_required
def search(request):
    """
    Semantic search for players.

    Request body:
    {
        "query": "aggressive duelist with high GPA",
        "game_id": "uuid",            # optional
        "class_years": ["2026"],      # optional
        "school_types": ["COLLEGE"],  # optional
        "locations": ["Texas"],       # optional
        "min_gpa": 3.5,               # optional
        "max_gpa": 4.0,               # optional
        "roles": ["Duelist"],         # optional
        "limit": 10,                  # optional, 1-100
        "min_similarity": 0.3         # optional, 0-1
    }

    Returns:
    {
        "results": [...],
        "total_count": 3,
        "query": "aggressive duelist with high GPA"
    }
    """
    filter_set = _parse_body(request, SearchFilterSet)
    response = build_talent_search_service().search(filter_set, request.coach.id)
    return JsonResponse(response.model_dump(mode="json"))


@csrf_exempt
@require_http_methods(["GET"])
@handle_api_errors
@onboarded_coach_required
def player_analysis(request, player_id):
    """Generate an AI overview with pros and cons for one player."""
    analysis = build_analysis_service().generate_analysis(player_id, request.coach.id)
    return JsonResponse(analysis.model_dump(mode="json"))


@csrf_exempt
@require_http_methods(["GET"])
@handle_api_errors
@onboarded_coach_required
def availability(request):
    status = build_talent_search_service().is_available()
    return JsonResponse(status.model_dump(mode="json"))


@csrf_exempt
@require_http_methods(["POST"])
@handle_api_errors
@admin_required
def refresh_embeddings(request):
    """
    Rebuild player embeddings in batches.

    Request body:
    {
        "only_missing": true,   # optional
        "batch_size": 10,       # optional, 1-50
        "batch_delay": 1.0      # optional, seconds between batches
    }
    """
    options = _parse_body(request, RefreshEmbeddingsRequest)
    logger.info(f"Embedding refresh requested by admin {request.admin_user.id}")
    result = build_embedding_service().refresh_all(
        only_missing=options.only_missing,
        batch_size=options.batch_size,
        batch_delay=options.batch_delay,
    )
    return JsonResponse({"success": True, **result.model_dump(mode="json")})


@csrf_exempt
@require_http_methods(["GET"])
@handle_api_errors
@admin_required
def embedding_stats(request):
    stats = build_talent_search_service().get_embedding_stats()
    return JsonResponse(stats.model_dump(mode="json"))


@csrf_exempt
@require_http_methods(["POST"])
@handle_api_errors
@admin_required
def update_player_embedding(request, player_id):
    """Refresh one player's embedding; failures are reported, not raised."""
    result = build_embedding_service().update_player_embedding(player_id)
    return JsonResponse(result.model_dump(mode="json"))
