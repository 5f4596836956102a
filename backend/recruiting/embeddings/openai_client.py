"""
OpenAI embedding client backed by langchain-openai.
"""
from typing import List
from langchain_openai import OpenAIEmbeddings
from recruiting.core.errors import EmbeddingBackendError
from recruiting.core.logging import get_logger
from .client_base import EmbeddingsClientBase

logger = get_logger(__name__)


class OpenAIEmbeddingsClient(EmbeddingsClientBase):
    """Embeds text with an OpenAI embedding model."""

    def __init__(
        self,
        api_key: str,
        model_name: str = "text-embedding-3-small",
        dimensions: int = 1536,
        timeout: float = 30.0,
        max_retries: int = 2,
    ):
        self._model_name = model_name
        self._dimensions = dimensions
        self._max_batch_size = 256
        self._client = OpenAIEmbeddings(
            model=model_name,
            api_key=api_key,
            dimensions=dimensions,
            timeout=timeout,
            max_retries=max_retries,
        )

    @property
    def model_name(self) -> str:
        return self._model_name

    @property
    def dimensions(self) -> int:
        return self._dimensions

    @property
    def max_batch_size(self) -> int:
        return self._max_batch_size

    def embed_texts(self, texts: List[str]) -> List[List[float]]:
        try:
            vectors = self._client.embed_documents(texts)
        except Exception as e:
            logger.error(f"Embedding request failed for {len(texts)} texts: {e}")
            raise EmbeddingBackendError(f"Failed to generate embeddings: {e}") from e

        if len(vectors) != len(texts):
            raise EmbeddingBackendError(
                f"Embedding backend returned {len(vectors)} vectors for {len(texts)} texts"
            )
        for vector in vectors:
            self._check_vector(vector)
        return vectors

    def embed_query(self, text: str) -> List[float]:
        try:
            vector = self._client.embed_query(text)
        except Exception as e:
            logger.error(f"Query embedding request failed: {e}")
            raise EmbeddingBackendError(f"Failed to generate query embedding: {e}") from e

        self._check_vector(vector)
        return vector

    def _check_vector(self, vector: List[float]) -> None:
        if not vector:
            raise EmbeddingBackendError("Empty embedding returned from backend")
        if len(vector) != self._dimensions:
            raise EmbeddingBackendError(
                f"Expected {self._dimensions}-dimensional embedding, got {len(vector)}"
            )
