"""
Similarity search: natural-language query plus structured facets to ranked player IDs.
"""
from typing import List, Optional, Tuple
from uuid import UUID

from recruiting.core.config import TalentSearchConfig
from recruiting.core.errors import APIError, EmbeddingBackendError
from recruiting.core.logging import get_logger
from recruiting.embeddings import EmbeddingsClientBase, build_embeddings_client
from recruiting.observability.tracing import langfuse_trace
from recruiting.schemas.talent_search import PlayerFilters
from recruiting.vectorstore import PgVectorStore, PlayerVectorStoreBase

logger = get_logger(__name__)


class SimilaritySearchEngine:
    """
    Ranks players by cosine similarity to a query.

    Query and player texts go through the same embedding client, so both
    live in one vector space. Facets are applied before ranking.
    """

    def __init__(
        self,
        config: TalentSearchConfig,
        embeddings_client: Optional[EmbeddingsClientBase] = None,
        vector_store: Optional[PlayerVectorStoreBase] = None,
    ):
        self.config = config
        self._embeddings_client = embeddings_client
        self.vector_store = vector_store or PgVectorStore()

    @property
    def embeddings_client(self) -> EmbeddingsClientBase:
        if self._embeddings_client is None:
            self._embeddings_client = build_embeddings_client(self.config)
        return self._embeddings_client

    def resolve_limit(self, limit: Optional[int]) -> int:
        if limit is None:
            limit = self.config.default_limit
        return max(1, min(limit, self.config.max_limit))

    def resolve_min_similarity(self, min_similarity: Optional[float]) -> float:
        if min_similarity is None:
            min_similarity = self.config.default_min_similarity
        return max(0.0, min(1.0, min_similarity))

    def search(
        self,
        query: str,
        filters: Optional[PlayerFilters] = None,
        limit: Optional[int] = None,
        min_similarity: Optional[float] = None,
    ) -> List[Tuple[UUID, float]]:
        """
        Find the players most similar to a query.

        Args:
            query: Natural language query
            filters: Structured facets every result must satisfy
            limit: Maximum results (clamped to 1..max_limit)
            min_similarity: Similarity floor (clamped to 0..1)

        Returns:
            List of (player_id, similarity) tuples, most similar first

        Raises:
            EmbeddingBackendError: the query could not be embedded
        """
        limit = self.resolve_limit(limit)
        min_similarity = self.resolve_min_similarity(min_similarity)

        # Fresh system: nothing to rank against
        if self.vector_store.count() == 0:
            logger.info("Similarity search skipped: no player embeddings stored")
            return []

        with langfuse_trace("embed_query"):
            try:
                query_vector = self.embeddings_client.embed_query(query)
            except APIError:
                raise
            except Exception as e:
                raise EmbeddingBackendError(f"Failed to generate query embedding: {e}") from e

        if query_vector is None or not len(query_vector):
            raise EmbeddingBackendError("Empty embedding returned for query")

        with langfuse_trace("vector_search", {"limit": limit, "min_similarity": min_similarity}):
            rows = self.vector_store.query(
                query_vector=list(query_vector),
                limit=limit,
                min_similarity=min_similarity,
                filters=filters,
            )

        logger.info(
            f"Similarity search returned {len(rows)} players "
            f"(limit={limit}, min_similarity={min_similarity})"
        )
        return rows
