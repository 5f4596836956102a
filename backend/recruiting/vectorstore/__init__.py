"""
Vector store implementations.
"""
from .base import PlayerVectorStoreBase
from .pgvector_store import PgVectorStore, apply_player_filters, ranked_by_distance

__all__ = ['PlayerVectorStoreBase', 'PgVectorStore', 'apply_player_filters', 'ranked_by_distance']
