"""
Base class for player vector stores.
"""
from abc import ABC, abstractmethod
from typing import List, Optional, Tuple
from uuid import UUID
from recruiting.schemas.talent_search import PlayerFilters


class PlayerVectorStoreBase(ABC):
    """Base interface for player embedding storage and similarity search."""

    @abstractmethod
    def upsert(
        self,
        player_id: UUID,
        embedding: List[float],
        embedding_text: str,
        embedding_model: str
    ) -> None:
        """
        Write or overwrite the embedding of one player.

        Args:
            player_id: Player the embedding belongs to
            embedding: Embedding vector
            embedding_text: Canonical text the vector was computed from
            embedding_model: Name of embedding model used
        """
        pass

    @abstractmethod
    def delete(self, player_id: UUID) -> bool:
        """
        Delete the embedding of one player.

        Returns:
            True if an embedding existed
        """
        pass

    @abstractmethod
    def exists(self, player_id: UUID) -> bool:
        """Whether the player has a stored embedding."""
        pass

    @abstractmethod
    def query(
        self,
        query_vector: List[float],
        limit: int,
        min_similarity: float,
        filters: Optional[PlayerFilters] = None
    ) -> List[Tuple[UUID, float]]:
        """
        Find the players nearest to a query vector.

        Filters are applied before ranking, so ``limit`` is filled with
        filter-eligible players only.

        Args:
            query_vector: Query embedding vector
            limit: Maximum number of results
            min_similarity: Similarity floor in [0, 1]
            filters: Optional structured facets (AND semantics)

        Returns:
            List of (player_id, similarity) tuples, most similar first
        """
        pass

    @abstractmethod
    def count(self) -> int:
        """Number of stored embeddings."""
        pass

    @abstractmethod
    def count_missing(self) -> int:
        """Number of players without a stored embedding."""
        pass

    @abstractmethod
    def player_ids(self, only_missing: bool = False) -> List[UUID]:
        """
        Player IDs to (re)embed, in a stable order.

        Args:
            only_missing: Restrict to players without an embedding
        """
        pass
