"""
Mock embedding client for local development without an API key.
"""
import hashlib
import random
from typing import List
from .client_base import EmbeddingsClientBase


class MockEmbeddingsClient(EmbeddingsClientBase):
    """Returns pseudo-random unit vectors seeded from the text."""

    def __init__(self, model_name: str = "mock-embedding", dimensions: int = 1536):
        self._model_name = model_name
        self._dimensions = dimensions
        self._max_batch_size = 1000

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
        return [self._vector_for(text) for text in texts]

    def embed_query(self, text: str) -> List[float]:
        return self._vector_for(text)

    def _vector_for(self, text: str) -> List[float]:
        # Seeded per text so the same text always maps to the same vector
        seed = int(hashlib.sha256(text.encode("utf-8")).hexdigest()[:16], 16)
        rng = random.Random(seed)
        embedding = [rng.gauss(0, 1) for _ in range(self._dimensions)]
        norm = sum(x**2 for x in embedding) ** 0.5
        return [x / norm for x in embedding]
