"""
Embedding store: keeps each player's search embedding in sync with the profile.
"""
import time
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional
from uuid import UUID

from django.db import connections

from recruiting.core.config import TalentSearchConfig
from recruiting.core.errors import APIError, ConfigurationError, EmbeddingBackendError, NotFoundError
from recruiting.core.logging import get_logger
from recruiting.embeddings import EmbeddingsClientBase, build_embeddings_client
from recruiting.observability.tracing import langfuse_trace
from recruiting.schemas.talent_search import EmbeddingBatchResult, EmbeddingUpdateResult
from recruiting.services.profile_text import build_player_embedding_text, load_player_document
from recruiting.vectorstore import PgVectorStore, PlayerVectorStoreBase

logger = get_logger(__name__)

NOT_CONFIGURED_MESSAGE = "Embedding generation is not available. The AI backend is not configured."


class EmbeddingService:
    """
    Creates, refreshes and counts player embeddings.

    The player row is the source of truth; a stored embedding is a cache
    that is overwritten on every upsert (at most one per player).
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
        # Built lazily so an unconfigured service never constructs a backend client
        if self._embeddings_client is None:
            self._embeddings_client = build_embeddings_client(self.config)
        return self._embeddings_client

    def _require_configured(self) -> None:
        if not self.config.embeddings_configured:
            raise ConfigurationError(NOT_CONFIGURED_MESSAGE)

    def upsert_embedding(self, player_id: UUID) -> str:
        """
        Recompute and store the embedding of one player.

        Args:
            player_id: Player to embed

        Returns:
            The canonical text that was embedded

        Raises:
            ConfigurationError: AI backend not configured
            NotFoundError: player does not exist
            EmbeddingBackendError: the embedding backend failed
        """
        self._require_configured()

        document = load_player_document(player_id)
        if document is None:
            raise NotFoundError(f"Player not found: {player_id}")

        embedding_text = build_player_embedding_text(document)

        with langfuse_trace("embed_player", {"player_id": str(player_id)}):
            try:
                vectors = self.embeddings_client.embed_texts([embedding_text])
            except APIError:
                raise
            except Exception as e:
                raise EmbeddingBackendError(f"Failed to generate player embedding: {e}") from e

        if not vectors or not len(vectors[0]):
            raise EmbeddingBackendError("Empty embedding returned from backend")

        self.vector_store.upsert(
            player_id=document.id,
            embedding=list(vectors[0]),
            embedding_text=embedding_text,
            embedding_model=self.embeddings_client.model_name,
        )
        logger.info(f"Upserted embedding for player {player_id} ({len(embedding_text)} chars)")
        return embedding_text

    def delete_embedding(self, player_id: UUID) -> bool:
        deleted = self.vector_store.delete(player_id)
        if deleted:
            logger.info(f"Deleted embedding for player {player_id}")
        return deleted

    def has_embedding(self, player_id: UUID) -> bool:
        return self.vector_store.exists(player_id)

    def update_player_embedding(self, player_id: UUID) -> EmbeddingUpdateResult:
        """
        Opportunistic refresh after a profile change.

        Never raises: failures are reported in the result so the triggering
        profile save is unaffected.
        """
        if not self.config.embeddings_configured:
            return EmbeddingUpdateResult(success=False, reason="AI backend is not configured")

        try:
            self.upsert_embedding(player_id)
        except APIError as e:
            logger.warning(f"Embedding update skipped for player {player_id}: {e.message}")
            return EmbeddingUpdateResult(success=False, reason=e.message)
        except Exception as e:
            logger.error(f"Embedding update failed for player {player_id}: {e}", exc_info=True)
            return EmbeddingUpdateResult(success=False, reason=str(e) or e.__class__.__name__)

        return EmbeddingUpdateResult(success=True)

    def refresh_all(
        self,
        only_missing: bool = True,
        batch_size: Optional[int] = None,
        batch_delay: Optional[float] = None,
    ) -> EmbeddingBatchResult:
        """
        Re-embed all players, or only those without an embedding.

        Players are processed in batches with a pause between batches to
        respect backend rate limits. One player's failure is counted and
        never aborts the run.

        Args:
            only_missing: Restrict to players lacking an embedding
            batch_size: Players per batch (defaults to config)
            batch_delay: Seconds to sleep between batches (defaults to config)

        Returns:
            EmbeddingBatchResult with processed/succeeded/failed counts
        """
        self._require_configured()

        batch_size = batch_size or self.config.refresh_batch_size
        batch_delay = self.config.refresh_batch_delay if batch_delay is None else batch_delay
        workers = min(batch_size, self.config.refresh_max_workers)

        player_ids = self.vector_store.player_ids(only_missing=only_missing)
        result = EmbeddingBatchResult()
        logger.info(
            f"Refreshing embeddings for {len(player_ids)} players "
            f"(only_missing={only_missing}, batch_size={batch_size}, workers={workers})"
        )

        for start in range(0, len(player_ids), batch_size):
            batch = player_ids[start:start + batch_size]

            if workers > 1:
                with ThreadPoolExecutor(max_workers=workers) as executor:
                    outcomes = list(executor.map(self._embed_in_worker, batch))
            else:
                outcomes = [self._embed_one(player_id) for player_id in batch]

            for player_id, succeeded in zip(batch, outcomes):
                result.processed += 1
                if succeeded:
                    result.succeeded += 1
                else:
                    result.failed += 1
                    result.failed_ids.append(player_id)

            if start + batch_size < len(player_ids) and batch_delay > 0:
                time.sleep(batch_delay)

        logger.info(
            f"Embedding refresh finished: {result.succeeded}/{result.processed} succeeded, "
            f"{result.failed} failed"
        )
        return result

    def _embed_one(self, player_id: UUID) -> bool:
        try:
            self.upsert_embedding(player_id)
            return True
        except Exception as e:
            logger.warning(f"Failed to generate embedding for player {player_id}: {e}")
            return False

    def _embed_in_worker(self, player_id: UUID) -> bool:
        try:
            return self._embed_one(player_id)
        finally:
            # Worker threads get their own DB connections
            connections.close_all()

    def get_embedding_count(self) -> int:
        return self.vector_store.count()

    def get_missing_embedding_count(self) -> int:
        return self.vector_store.count_missing()

    def player_ids_to_refresh(self, only_missing: bool = True) -> List[UUID]:
        """Players a refresh would touch; used for dry runs."""
        return self.vector_store.player_ids(only_missing=only_missing)
