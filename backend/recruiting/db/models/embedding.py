"""
Player search embeddings stored with pgvector.
"""
from django.db import models
from pgvector.django import VectorField
from recruiting.core.config import DEFAULT_EMBEDDING_DIMENSIONS

EMBEDDING_DIMENSIONS = DEFAULT_EMBEDDING_DIMENSIONS


class PlayerEmbedding(models.Model):
    """
    One embedding per player, derived from the player's canonical profile text.

    Rows are overwritten on refresh (upsert), never versioned.
    """

    player = models.OneToOneField(
        'Player',
        on_delete=models.CASCADE,
        related_name='embedding',
    )
    embedding = VectorField(dimensions=EMBEDDING_DIMENSIONS)
    embedding_text = models.TextField()
    embedding_model = models.CharField(max_length=100, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'player_embeddings'
        # HNSW index (vector_cosine_ops) is created in the initial migration on PostgreSQL only

    def __str__(self):
        return f"Embedding for {self.player_id} ({self.embedding_model})"
