"""
Pydantic schemas for talent search requests and responses.

Request models validate caller input at the API boundary; response models
define the JSON shapes the views return.
"""
from datetime import datetime
from typing import Any, Dict, List, Literal, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

SchoolTypeName = Literal["HIGH_SCHOOL", "COLLEGE", "UNIVERSITY"]


# =============================================================================
# Search input
# =============================================================================


class PlayerFilters(BaseModel):
    """Structured facets applied before similarity ranking (AND across facets)."""

    model_config = ConfigDict(frozen=True)

    game_id: Optional[UUID] = None
    class_years: List[str] = Field(default_factory=list)
    school_types: List[SchoolTypeName] = Field(default_factory=list)
    locations: List[str] = Field(default_factory=list)
    min_gpa: Optional[float] = None
    max_gpa: Optional[float] = None
    roles: List[str] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (
            self.game_id
            or self.class_years
            or self.school_types
            or self.locations
            or self.min_gpa is not None
            or self.max_gpa is not None
            or self.roles
        )


class SearchFilterSet(BaseModel):
    """
    A coach's talent search request.

    ``limit`` and ``min_similarity`` are optional; when omitted the
    configured defaults apply.
    """

    query: str = Field(..., min_length=1, description="Natural language search query")
    game_id: Optional[UUID] = Field(None, description="Only players with a profile in this game")
    class_years: List[str] = Field(default_factory=list)
    school_types: List[SchoolTypeName] = Field(default_factory=list)
    locations: List[str] = Field(default_factory=list)
    min_gpa: Optional[float] = Field(None, ge=0, le=5)
    max_gpa: Optional[float] = Field(None, ge=0, le=5)
    roles: List[str] = Field(default_factory=list)
    limit: Optional[int] = Field(None, ge=1, le=100)
    min_similarity: Optional[float] = Field(None, ge=0, le=1)

    @field_validator("query")
    @classmethod
    def query_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Search query is required")
        return value

    @field_validator("class_years", "locations", "roles")
    @classmethod
    def drop_blank_values(cls, values: List[str]) -> List[str]:
        return [v.strip() for v in values if v and v.strip()]

    @model_validator(mode="after")
    def gpa_range_ordered(self) -> "SearchFilterSet":
        if self.min_gpa is not None and self.max_gpa is not None and self.min_gpa > self.max_gpa:
            raise ValueError("min_gpa must be less than or equal to max_gpa")
        return self

    def to_player_filters(self) -> PlayerFilters:
        return PlayerFilters(
            game_id=self.game_id,
            class_years=self.class_years,
            school_types=self.school_types,
            locations=self.locations,
            min_gpa=self.min_gpa,
            max_gpa=self.max_gpa,
            roles=self.roles,
        )


# =============================================================================
# Search output
# =============================================================================


class TalentGameProfile(BaseModel):
    game_id: UUID
    game_name: str
    game_short_name: str
    username: str
    rank: Optional[str] = None
    rating: Optional[int] = None
    role: Optional[str] = None
    agents: List[str] = Field(default_factory=list)
    play_style: Optional[str] = None
    combine_score: Optional[float] = None
    league_score: Optional[float] = None
    attributes: Dict[str, Any] = Field(default_factory=dict)


class TalentSchool(BaseModel):
    id: Optional[UUID] = None
    name: Optional[str] = None
    type: Optional[SchoolTypeName] = None
    state: Optional[str] = None


class TalentAcademicInfo(BaseModel):
    class_year: Optional[str] = None
    gpa: Optional[float] = None
    graduation_date: Optional[str] = None
    intended_major: Optional[str] = None


class TalentMainGame(BaseModel):
    id: UUID
    name: str
    short_name: str
    icon: Optional[str] = None
    color: Optional[str] = None


class TalentSearchResult(BaseModel):
    """A hydrated player with its similarity score and the coach's favorite flag."""

    id: UUID
    first_name: str
    last_name: str
    username: Optional[str] = None
    image_url: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None
    school: TalentSchool
    academic_info: TalentAcademicInfo
    main_game: Optional[TalentMainGame] = None
    game_profiles: List[TalentGameProfile] = Field(default_factory=list)
    similarity_score: float = Field(..., ge=0, le=1)
    is_favorited: bool = False


class TalentSearchResponse(BaseModel):
    results: List[TalentSearchResult] = Field(default_factory=list)
    total_count: int = 0
    query: str


# =============================================================================
# Analysis
# =============================================================================


class CoachContext(BaseModel):
    """What the analysis prompt knows about the requesting coach."""

    school_name: Optional[str] = None
    school_type: Optional[SchoolTypeName] = None
    games: List[str] = Field(default_factory=list)


class AnalysisContent(BaseModel):
    """The three-part structure the generative backend must return."""

    overview: str = Field(..., min_length=1)
    pros: List[str]
    cons: List[str]

    @field_validator("overview")
    @classmethod
    def overview_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("overview must not be empty")
        return value

    @field_validator("pros", "cons")
    @classmethod
    def items_not_blank(cls, values: List[str]) -> List[str]:
        cleaned = [v.strip() for v in values]
        if any(not v for v in cleaned):
            raise ValueError("list items must be non-empty strings")
        return cleaned


class PlayerAnalysis(AnalysisContent):
    generated_at: datetime
    is_cached: bool = False


# =============================================================================
# Embedding administration
# =============================================================================


class RefreshEmbeddingsRequest(BaseModel):
    only_missing: bool = True
    batch_size: int = Field(10, ge=1, le=50)
    batch_delay: float = Field(1.0, ge=0, le=10, description="Seconds to pause between batches")


class EmbeddingBatchResult(BaseModel):
    processed: int = 0
    succeeded: int = 0
    failed: int = 0
    failed_ids: List[UUID] = Field(default_factory=list)


class EmbeddingStats(BaseModel):
    total_embeddings: int
    missing_embeddings: int
    total_players: int
    coverage_percent: int
    is_configured: bool


class EmbeddingUpdateResult(BaseModel):
    success: bool
    reason: Optional[str] = None


class AvailabilityStatus(BaseModel):
    is_available: bool
    message: str
