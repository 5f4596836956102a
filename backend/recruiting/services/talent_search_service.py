"""
Talent search orchestration: gate, rank, hydrate, annotate, sort.
"""
from typing import Dict, Optional
from uuid import UUID

from recruiting.core.config import TalentSearchConfig
from recruiting.core.errors import ConfigurationError
from recruiting.core.logging import get_logger
from recruiting.db.models import CoachFavorite, Player
from recruiting.schemas.talent_search import (
    AvailabilityStatus,
    EmbeddingStats,
    SearchFilterSet,
    TalentAcademicInfo,
    TalentGameProfile,
    TalentMainGame,
    TalentSchool,
    TalentSearchResponse,
    TalentSearchResult,
)
from recruiting.services.embedding_service import EmbeddingService
from recruiting.services.similarity_search import SimilaritySearchEngine

logger = get_logger(__name__)

AVAILABLE_MESSAGE = "AI-powered talent search is available"
UNAVAILABLE_MESSAGE = "AI search is not configured. Contact your administrator to enable this feature."


class TalentSearchService:
    """The coach-facing entry point for semantic talent search."""

    def __init__(
        self,
        config: TalentSearchConfig,
        search_engine: Optional[SimilaritySearchEngine] = None,
        embedding_service: Optional[EmbeddingService] = None,
    ):
        self.config = config
        self.search_engine = search_engine or SimilaritySearchEngine(config)
        self.embedding_service = embedding_service or EmbeddingService(config)

    def is_available(self) -> AvailabilityStatus:
        if self.config.embeddings_configured:
            return AvailabilityStatus(is_available=True, message=AVAILABLE_MESSAGE)
        return AvailabilityStatus(is_available=False, message=UNAVAILABLE_MESSAGE)

    def search(self, filter_set: SearchFilterSet, coach_id: UUID) -> TalentSearchResponse:
        """
        Run a semantic search for a coach.

        Steps:
        1. Check the AI backend is configured
        2. Rank player IDs by similarity under the filters
        3. Hydrate exactly those players from the database
        4. Attach similarity and the coach's favorite flag
        5. Sort by similarity, descending

        Players deleted between ranking and hydration are dropped.

        Raises:
            ConfigurationError: AI backend not configured
            EmbeddingBackendError: the query could not be embedded
        """
        if not self.config.embeddings_configured:
            raise ConfigurationError(UNAVAILABLE_MESSAGE)

        ranked = self.search_engine.search(
            filter_set.query,
            filters=filter_set.to_player_filters(),
            limit=filter_set.limit,
            min_similarity=filter_set.min_similarity,
        )

        if not ranked:
            return TalentSearchResponse(results=[], total_count=0, query=filter_set.query)

        player_ids = [player_id for player_id, _ in ranked]
        similarity_by_id: Dict[UUID, float] = dict(ranked)
        rank_by_id = {player_id: index for index, player_id in enumerate(player_ids)}

        players = (
            Player.objects
            .filter(id__in=player_ids)
            .select_related('school_ref', 'main_game')
            .prefetch_related('game_profiles__game')
        )
        favorited_ids = set(
            CoachFavorite.objects
            .filter(coach_id=coach_id, player_id__in=player_ids)
            .values_list('player_id', flat=True)
        )

        # Bulk fetch order is arbitrary; restore engine order, then stable-sort by score
        hydrated = sorted(players, key=lambda p: rank_by_id[p.id])
        results = [
            self._to_result(player, similarity_by_id[player.id], player.id in favorited_ids)
            for player in hydrated
        ]
        results.sort(key=lambda r: r.similarity_score, reverse=True)

        if len(results) < len(ranked):
            logger.info(f"Dropped {len(ranked) - len(results)} ranked players no longer in the database")

        logger.info(f"Talent search for coach {coach_id} returned {len(results)} results")
        return TalentSearchResponse(results=results, total_count=len(results), query=filter_set.query)

    def get_embedding_stats(self) -> EmbeddingStats:
        total_embeddings = self.embedding_service.get_embedding_count()
        missing_embeddings = self.embedding_service.get_missing_embedding_count()
        total_players = total_embeddings + missing_embeddings
        coverage = round(total_embeddings / total_players * 100) if total_players else 0

        return EmbeddingStats(
            total_embeddings=total_embeddings,
            missing_embeddings=missing_embeddings,
            total_players=total_players,
            coverage_percent=coverage,
            is_configured=self.config.embeddings_configured,
        )

    @staticmethod
    def _to_result(player: Player, similarity: float, is_favorited: bool) -> TalentSearchResult:
        school_ref = player.school_ref
        main_game = player.main_game

        return TalentSearchResult(
            id=player.id,
            first_name=player.first_name,
            last_name=player.last_name,
            username=player.username,
            image_url=player.image_url,
            location=player.location,
            bio=player.bio,
            school=TalentSchool(
                id=school_ref.id if school_ref else None,
                name=school_ref.name if school_ref else player.school,
                type=school_ref.type if school_ref else None,
                state=school_ref.state if school_ref else None,
            ),
            academic_info=TalentAcademicInfo(
                class_year=player.class_year,
                gpa=float(player.gpa) if player.gpa is not None else None,
                graduation_date=player.graduation_date,
                intended_major=player.intended_major,
            ),
            main_game=TalentMainGame(
                id=main_game.id,
                name=main_game.name,
                short_name=main_game.short_name,
                icon=main_game.icon,
                color=main_game.color,
            ) if main_game else None,
            game_profiles=[_to_game_profile(profile) for profile in player.game_profiles.all()],
            similarity_score=similarity,
            is_favorited=is_favorited,
        )


def _to_game_profile(profile) -> TalentGameProfile:
    return TalentGameProfile(
        game_id=profile.game.id,
        game_name=profile.game.name,
        game_short_name=profile.game.short_name,
        username=profile.username,
        rank=profile.rank,
        rating=profile.rating,
        role=profile.role,
        agents=[str(agent) for agent in profile.agents or [] if agent is not None],
        play_style=profile.play_style,
        combine_score=profile.combine_score,
        league_score=profile.league_score,
        attributes=dict(profile.attributes or {}),
    )
