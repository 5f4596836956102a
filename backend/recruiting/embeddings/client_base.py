"""
Base class for embedding clients.
"""
from abc import ABC, abstractmethod
from typing import List


class EmbeddingsClientBase(ABC):
    """Base interface for embedding providers.

    The same client embeds player profile text and search queries so both
    land in one vector space.
    """

    @property
    @abstractmethod
    def model_name(self) -> str:
        """Name of the embedding model."""
        pass

    @property
    @abstractmethod
    def dimensions(self) -> int:
        """Dimension of embedding vectors."""
        pass

    @property
    @abstractmethod
    def max_batch_size(self) -> int:
        """Maximum number of texts to embed in a single batch."""
        pass

    @abstractmethod
    def embed_texts(self, texts: List[str]) -> List[List[float]]:
        """
        Embed multiple texts.

        Args:
            texts: List of text strings to embed

        Returns:
            List of embedding vectors (each is a list of floats)

        Raises:
            EmbeddingBackendError: if the provider fails
        """
        pass

    @abstractmethod
    def embed_query(self, text: str) -> List[float]:
        """
        Embed a single query text.

        Args:
            text: Query text to embed

        Returns:
            Embedding vector as list of floats

        Raises:
            EmbeddingBackendError: if the provider fails
        """
        pass
