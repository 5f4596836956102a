"""
PostgreSQL vector store using pgvector.
"""
from typing import List, Optional, Tuple
from uuid import UUID

import numpy as np
from django.db import connection
from django.db.models import Exists, OuterRef, Q, QuerySet
from pgvector.django import CosineDistance

from recruiting.core.logging import get_logger
from recruiting.db.models import GameProfile, Player, PlayerEmbedding
from recruiting.schemas.talent_search import PlayerFilters
from .base import PlayerVectorStoreBase

logger = get_logger(__name__)


def apply_player_filters(queryset: QuerySet, filters: Optional[PlayerFilters], prefix: str = '') -> QuerySet:
    """
    Restrict a queryset to players matching every supplied facet.

    Args:
        queryset: Queryset over Player, or over a model pointing at Player
        filters: Facets to apply; empty facets are ignored
        prefix: Lookup path from the queryset's model to Player (e.g. ``'player__'``)
    """
    if filters is None or filters.is_empty:
        return queryset

    player_ref = OuterRef(f'{prefix}id' if prefix else 'pk')

    if filters.game_id:
        queryset = queryset.filter(Exists(
            GameProfile.objects.filter(player_id=player_ref, game_id=filters.game_id)
        ))

    if filters.roles:
        queryset = queryset.filter(Exists(
            GameProfile.objects.filter(player_id=player_ref, role__in=filters.roles)
        ))

    if filters.class_years:
        queryset = queryset.filter(**{f'{prefix}class_year__in': filters.class_years})

    if filters.school_types:
        queryset = queryset.filter(**{f'{prefix}school_ref__type__in': filters.school_types})

    if filters.locations:
        location_query = Q()
        for location in filters.locations:
            location_query |= Q(**{f'{prefix}location__icontains': location})
        queryset = queryset.filter(location_query)

    if filters.min_gpa is not None:
        queryset = queryset.filter(**{f'{prefix}gpa__gte': filters.min_gpa})

    if filters.max_gpa is not None:
        queryset = queryset.filter(**{f'{prefix}gpa__lte': filters.max_gpa})

    return queryset


def ranked_by_distance(embeddings: QuerySet, query_vector: List[float], limit: int, min_similarity: float) -> QuerySet:
    """
    Rank embeddings by pgvector cosine distance, nearest first.

    Yields ``(player_id, distance)`` rows within the similarity floor, at
    most ``limit`` of them, with player id breaking ties.
    """
    # Cosine distance is in [0, 2]; similarity = 1 - distance
    max_distance = 1.0 - min_similarity
    return (
        embeddings
        .annotate(distance=CosineDistance('embedding', query_vector))
        .filter(distance__lte=max_distance)
        .order_by('distance', 'player_id')
        .values_list('player_id', 'distance')[:limit]
    )


class PgVectorStore(PlayerVectorStoreBase):
    """PostgreSQL vector store implementation using pgvector."""

    def upsert(
        self,
        player_id: UUID,
        embedding: List[float],
        embedding_text: str,
        embedding_model: str
    ) -> None:
        """
        Upsert the embedding of one player.
        """
        PlayerEmbedding.objects.update_or_create(
            player_id=player_id,
            defaults={
                'embedding': embedding,
                'embedding_text': embedding_text,
                'embedding_model': embedding_model,
            }
        )

    def delete(self, player_id: UUID) -> bool:
        deleted, _ = PlayerEmbedding.objects.filter(player_id=player_id).delete()
        return deleted > 0

    def exists(self, player_id: UUID) -> bool:
        return PlayerEmbedding.objects.filter(player_id=player_id).exists()

    def query(
        self,
        query_vector: List[float],
        limit: int,
        min_similarity: float,
        filters: Optional[PlayerFilters] = None
    ) -> List[Tuple[UUID, float]]:
        """
        Query for similar players using cosine similarity.
        """
        embeddings = apply_player_filters(PlayerEmbedding.objects.all(), filters, prefix='player__')

        if connection.vendor == 'postgresql':
            return self._query_sql(embeddings, query_vector, limit, min_similarity)
        return self._query_in_process(embeddings, query_vector, limit, min_similarity)

    def _query_sql(self, embeddings, query_vector, limit, min_similarity):
        rows = ranked_by_distance(embeddings, query_vector, limit, min_similarity)
        return [(player_id, _clamp(1.0 - float(distance))) for player_id, distance in rows]

    def _query_in_process(self, embeddings, query_vector, limit, min_similarity):
        rows = list(embeddings.values_list('player_id', 'embedding'))
        if not rows:
            return []

        query = np.asarray(query_vector, dtype=float)
        query_norm = np.linalg.norm(query)
        if query_norm == 0:
            return []

        matrix = np.vstack([np.asarray(vector, dtype=float) for _, vector in rows])
        norms = np.linalg.norm(matrix, axis=1)
        norms[norms == 0] = np.inf
        similarities = (matrix @ query) / (norms * query_norm)

        scored = [
            (player_id, float(similarity))
            for (player_id, _), similarity in zip(rows, similarities)
            if similarity >= min_similarity
        ]
        scored.sort(key=lambda item: (-item[1], str(item[0])))
        return [(player_id, _clamp(similarity)) for player_id, similarity in scored[:limit]]

    def count(self) -> int:
        return PlayerEmbedding.objects.count()

    def count_missing(self) -> int:
        return Player.objects.filter(embedding__isnull=True).count()

    def player_ids(self, only_missing: bool = False) -> List[UUID]:
        players = Player.objects.all()
        if only_missing:
            players = players.filter(embedding__isnull=True)
        return list(players.order_by('created_at', 'id').values_list('id', flat=True))


def _clamp(similarity: float) -> float:
    return max(0.0, min(1.0, similarity))
