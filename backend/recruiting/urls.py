"""
URL configuration for the recruiting backend.
"""

from django.contrib import admin
from django.urls import path
from recruiting.api import health, talent_search

urlpatterns = [
    # Admin
    path("admin/", admin.site.urls),
    # Health check
    path("api/health/", health.health_check, name="health"),
    # Talent search
    path("api/talent-search/search/", talent_search.search, name="talent_search"),
    path(
        "api/talent-search/players/<uuid:player_id>/analysis/",
        talent_search.player_analysis,
        name="talent_search_player_analysis",
    ),
    path(
        "api/talent-search/availability/",
        talent_search.availability,
        name="talent_search_availability",
    ),
    # Talent search administration
    path(
        "api/talent-search/admin/embeddings/refresh/",
        talent_search.refresh_embeddings,
        name="talent_search_refresh_embeddings",
    ),
    path(
        "api/talent-search/admin/embeddings/stats/",
        talent_search.embedding_stats,
        name="talent_search_embedding_stats",
    ),
    path(
        "api/talent-search/admin/embeddings/<uuid:player_id>/update/",
        talent_search.update_player_embedding,
        name="talent_search_update_player_embedding",
    ),
]
