"""
AI-generated player analysis for coaches.
"""
import json
from typing import Optional
from uuid import UUID

from django.utils import timezone
from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import HumanMessage, SystemMessage
from pydantic import ValidationError as PydanticValidationError

from recruiting.core.config import TalentSearchConfig
from recruiting.core.errors import AnalysisGenerationError, ConfigurationError, NotFoundError
from recruiting.core.logging import get_logger
from recruiting.db.models import Coach
from recruiting.llm import build_chat_model
from recruiting.observability.tracing import get_callback_handler, langfuse_trace
from recruiting.schemas.talent_search import AnalysisContent, CoachContext, PlayerAnalysis
from recruiting.services.profile_text import (
    PlayerDocument,
    build_player_embedding_text,
    load_player_document,
)

logger = get_logger(__name__)

UNAVAILABLE_MESSAGE = "AI analysis is not configured. Contact your administrator to enable this feature."

SYSTEM_PROMPT = (
    "You are an esports recruiting assistant. You write balanced, constructive "
    "player assessments for coaches and always answer with a single JSON object."
)

COACH_SCHOOL_TYPE_LABELS = {
    "HIGH_SCHOOL": "high school",
    "COLLEGE": "college",
    "UNIVERSITY": "university",
}


def build_analysis_prompt(player: PlayerDocument, coach: CoachContext) -> str:
    """Build the user prompt for one player and coach."""
    coach_info = "a coach"
    if coach.school_name:
        coach_info = f"a coach at {coach.school_name}"
        if coach.school_type:
            coach_info += f" ({COACH_SCHOOL_TYPE_LABELS.get(coach.school_type, coach.school_type)})"

    games_context = ""
    if coach.games:
        games_context = f"The coach's team competes in: {', '.join(coach.games)}.\n"

    return (
        f"You are helping {coach_info} evaluate a potential player.\n"
        f"{games_context}\n"
        "Analyze the following player profile and provide a structured assessment:\n\n"
        f"{build_player_embedding_text(player)}\n\n"
        "Respond in the following JSON format (no markdown, just pure JSON):\n"
        "{\n"
        '  "overview": "A 2-3 sentence overview of the player highlighting their key attributes '
        'and potential fit for collegiate/scholastic esports.",\n'
        '  "pros": ["strength 1", "strength 2", "strength 3"],\n'
        '  "cons": ["area for improvement 1", "area for improvement 2"]\n'
        "}\n\n"
        "Focus on:\n"
        "- Competitive gaming experience and achievements\n"
        "- Academic standing and potential\n"
        "- Game-specific skills and versatility\n"
        "- Team fit and coachability indicators\n"
        "- Frame cons as growth areas rather than weaknesses\n\n"
        "Important: Return ONLY the JSON object, no additional text or formatting."
    )


def strip_code_fences(text: str) -> str:
    cleaned = text.strip()
    if cleaned.startswith("```json"):
        cleaned = cleaned[len("```json"):]
    elif cleaned.startswith("```"):
        cleaned = cleaned[3:]
    if cleaned.endswith("```"):
        cleaned = cleaned[:-3]
    return cleaned.strip()


def parse_analysis_response(text: str) -> AnalysisContent:
    """
    Parse a model reply into overview/pros/cons.

    Raises:
        AnalysisGenerationError: reply is not a JSON object of the expected shape
    """
    cleaned = strip_code_fences(text or "")
    try:
        payload = json.loads(cleaned)
    except json.JSONDecodeError as e:
        logger.error(f"Analysis response is not valid JSON: {e}. Raw text: {text[:500]!r}")
        raise AnalysisGenerationError("AI returned an analysis that could not be parsed") from e

    if not isinstance(payload, dict):
        raise AnalysisGenerationError("AI returned an analysis that could not be parsed")

    try:
        return AnalysisContent.model_validate(payload)
    except PydanticValidationError as e:
        logger.error(f"Analysis response has the wrong shape: {e}")
        raise AnalysisGenerationError("AI returned an incomplete analysis") from e


def _message_text(content) -> str:
    if isinstance(content, str):
        return content
    # Content blocks: keep the text parts
    parts = []
    for block in content or []:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, dict) and block.get("type") == "text":
            parts.append(block.get("text", ""))
    return "".join(parts)


class AnalysisService:
    """Generates an overview plus pros and cons for one player, for one coach."""

    def __init__(self, config: TalentSearchConfig, chat_model: Optional[BaseChatModel] = None):
        self.config = config
        self._chat_model = chat_model

    @property
    def chat_model(self) -> BaseChatModel:
        if self._chat_model is None:
            self._chat_model = build_chat_model(self.config)
        return self._chat_model

    def get_coach_context(self, coach_id: UUID) -> CoachContext:
        coach = (
            Coach.objects
            .select_related('school_ref')
            .prefetch_related('teams__game')
            .filter(pk=coach_id)
            .first()
        )
        if coach is None:
            return CoachContext()

        games = []
        for team in coach.teams.all():
            if team.game.name not in games:
                games.append(team.game.name)

        return CoachContext(
            school_name=coach.school_ref.name if coach.school_ref else coach.school,
            school_type=coach.school_ref.type if coach.school_ref else None,
            games=games,
        )

    def generate_analysis(self, player_id: UUID, coach_id: UUID) -> PlayerAnalysis:
        """
        Generate a fresh analysis of a player for the requesting coach.

        Raises:
            ConfigurationError: AI backend not configured
            NotFoundError: player does not exist
            AnalysisGenerationError: backend failed or replied in the wrong shape
        """
        if not self.config.is_configured:
            raise ConfigurationError(UNAVAILABLE_MESSAGE)

        player = load_player_document(player_id)
        if player is None:
            raise NotFoundError("Player not found")

        coach_context = self.get_coach_context(coach_id)
        messages = [
            SystemMessage(content=SYSTEM_PROMPT),
            HumanMessage(content=build_analysis_prompt(player, coach_context)),
        ]

        callbacks = [h for h in [get_callback_handler()] if h]

        with langfuse_trace("player_analysis", {"player_id": str(player_id)}):
            try:
                response = self.chat_model.invoke(messages, config={"callbacks": callbacks})
            except Exception as e:
                logger.error(f"Analysis backend call failed for player {player_id}: {e}", exc_info=True)
                raise AnalysisGenerationError("Failed to generate player analysis") from e

        content = parse_analysis_response(_message_text(response.content))
        logger.info(
            f"Generated analysis for player {player_id}: "
            f"{len(content.pros)} pros, {len(content.cons)} cons"
        )
        return PlayerAnalysis(
            overview=content.overview,
            pros=content.pros,
            cons=content.cons,
            generated_at=timezone.now(),
            is_cached=False,
        )
