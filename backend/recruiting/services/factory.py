"""
Service construction from environment configuration.
"""
from typing import Optional

from recruiting.core.config import TalentSearchConfig, load_talent_search_config
from recruiting.services.analysis_service import AnalysisService
from recruiting.services.embedding_service import EmbeddingService
from recruiting.services.similarity_search import SimilaritySearchEngine
from recruiting.services.talent_search_service import TalentSearchService


def build_embedding_service(config: Optional[TalentSearchConfig] = None) -> EmbeddingService:
    return EmbeddingService(config or load_talent_search_config())


def build_talent_search_service(config: Optional[TalentSearchConfig] = None) -> TalentSearchService:
    config = config or load_talent_search_config()
    return TalentSearchService(
        config,
        search_engine=SimilaritySearchEngine(config),
        embedding_service=EmbeddingService(config),
    )


def build_analysis_service(config: Optional[TalentSearchConfig] = None) -> AnalysisService:
    return AnalysisService(config or load_talent_search_config())
