from .talent_search import (
    PlayerFilters,
    SearchFilterSet,
    TalentGameProfile,
    TalentSchool,
    TalentAcademicInfo,
    TalentMainGame,
    TalentSearchResult,
    TalentSearchResponse,
    CoachContext,
    AnalysisContent,
    PlayerAnalysis,
    RefreshEmbeddingsRequest,
    EmbeddingBatchResult,
    EmbeddingStats,
    EmbeddingUpdateResult,
    AvailabilityStatus,
)

__all__ = [
    'PlayerFilters',
    'SearchFilterSet',
    'TalentGameProfile',
    'TalentSchool',
    'TalentAcademicInfo',
    'TalentMainGame',
    'TalentSearchResult',
    'TalentSearchResponse',
    'CoachContext',
    'AnalysisContent',
    'PlayerAnalysis',
    'RefreshEmbeddingsRequest',
    'EmbeddingBatchResult',
    'EmbeddingStats',
    'EmbeddingUpdateResult',
    'AvailabilityStatus',
]
