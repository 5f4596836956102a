"""
Embedding client implementations.
"""
from recruiting.core.config import TalentSearchConfig
from .client_base import EmbeddingsClientBase
from .openai_client import OpenAIEmbeddingsClient
from .mock_client import MockEmbeddingsClient


def build_embeddings_client(config: TalentSearchConfig) -> EmbeddingsClientBase:
    """Pick the embedding client named by ``config.embedding_backend``."""
    if config.embedding_backend == 'mock':
        return MockEmbeddingsClient(dimensions=config.embedding_dimensions)
    return OpenAIEmbeddingsClient(
        api_key=config.openai_api_key,
        model_name=config.embedding_model,
        dimensions=config.embedding_dimensions,
        timeout=config.request_timeout,
        max_retries=config.max_retries,
    )


__all__ = [
    'EmbeddingsClientBase',
    'OpenAIEmbeddingsClient',
    'MockEmbeddingsClient',
    'build_embeddings_client',
]
