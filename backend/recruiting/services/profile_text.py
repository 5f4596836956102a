"""
Canonical text representation of a player profile.

The same text feeds the embedding model and the analysis prompt. It is a
readable summary ("Label: value" sentences), not JSON, so the embedding
captures meaning rather than field names.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from recruiting.db.models import GameProfile, Player, School

SCHOOL_TYPE_LABELS = dict(School.SchoolType.choices)


@dataclass
class GameProfileDocument:
    game: str
    username: str
    rank: Optional[str] = None
    role: Optional[str] = None
    agents: List[str] = field(default_factory=list)
    play_style: Optional[str] = None
    attributes: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_profile(cls, profile: GameProfile) -> "GameProfileDocument":
        return cls(
            game=profile.game.name,
            username=profile.username,
            rank=profile.rank,
            role=profile.role,
            agents=[str(agent) for agent in profile.agents or [] if agent is not None],
            play_style=profile.play_style,
            attributes=dict(profile.attributes or {}),
        )


@dataclass
class PlayerDocument:
    """The subset of a player profile that is embedded and analysed."""

    id: Any
    first_name: str
    last_name: str
    username: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None
    school: Optional[str] = None
    school_type: Optional[str] = None
    class_year: Optional[str] = None
    gpa: Optional[float] = None
    intended_major: Optional[str] = None
    main_game: Optional[str] = None
    game_profiles: List[GameProfileDocument] = field(default_factory=list)

    @classmethod
    def from_player(cls, player: Player) -> "PlayerDocument":
        """
        Build a document from a player row.

        Callers should load ``school_ref``, ``main_game`` and
        ``game_profiles__game`` up front to avoid per-field queries.
        """
        school_ref = player.school_ref
        return cls(
            id=player.id,
            first_name=player.first_name,
            last_name=player.last_name,
            username=player.username,
            location=player.location,
            bio=player.bio,
            school=school_ref.name if school_ref else player.school,
            school_type=school_ref.type if school_ref else None,
            class_year=player.class_year,
            gpa=_to_float(player.gpa),
            intended_major=player.intended_major,
            main_game=player.main_game.name if player.main_game else None,
            game_profiles=[GameProfileDocument.from_profile(p) for p in player.game_profiles.all()],
        )


def load_player_document(player_id) -> Optional[PlayerDocument]:
    """Fetch one player with its relations and build its document."""
    player = (
        Player.objects
        .select_related('school_ref', 'main_game')
        .prefetch_related('game_profiles__game')
        .filter(pk=player_id)
        .first()
    )
    if player is None:
        return None
    return PlayerDocument.from_player(player)


def build_player_embedding_text(player: PlayerDocument) -> str:
    """Serialize a player into its canonical, deterministic text."""
    parts = [f"Player: {player.first_name} {player.last_name}"]

    if player.username:
        parts.append(f"Username: {player.username}")
    if player.location:
        parts.append(f"Location: {player.location}")
    if player.school:
        parts.append(f"School: {player.school}")
    if player.school_type:
        parts.append(f"School Type: {school_type_label(player.school_type)}")
    if player.class_year:
        parts.append(f"Class Year: {player.class_year}")
    if player.gpa is not None:
        parts.append(f"GPA: {player.gpa:g}")
    if player.intended_major:
        parts.append(f"Intended Major: {player.intended_major}")
    if player.bio:
        parts.append(f"Bio: {player.bio}")
    if player.main_game:
        parts.append(f"Main Game: {player.main_game}")

    if player.game_profiles:
        games = "; ".join(_game_profile_text(profile) for profile in player.game_profiles)
        parts.append(f"Games: {games}")

    return ". ".join(parts)


def school_type_label(school_type: str) -> str:
    return SCHOOL_TYPE_LABELS.get(school_type, humanize_key(school_type))


def humanize_key(key: str) -> str:
    """``peak_rank`` -> ``Peak Rank``"""
    return " ".join(word.capitalize() for word in str(key).replace("-", "_").split("_") if word)


def _game_profile_text(profile: GameProfileDocument) -> str:
    details = [profile.game]
    if profile.rank:
        details.append(f"Rank: {profile.rank}")
    if profile.role:
        details.append(f"Role: {profile.role}")
    if profile.agents:
        details.append(f"Plays: {', '.join(profile.agents)}")
    if profile.play_style:
        details.append(f"Style: {profile.play_style}")

    # Game-specific fields, in key order so the text is stable
    for key in sorted(profile.attributes):
        value = _format_value(profile.attributes[key])
        if value:
            details.append(f"{humanize_key(key)}: {value}")

    return ", ".join(details)


def _format_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if isinstance(value, (list, tuple)):
        return ", ".join(_format_value(v) for v in value if _format_value(v))
    if isinstance(value, dict):
        return ", ".join(
            f"{humanize_key(k)} {_format_value(value[k])}" for k in sorted(value) if _format_value(value[k])
        )
    if isinstance(value, float):
        return f"{value:g}"
    return str(value).strip()


def _to_float(value) -> Optional[float]:
    return None if value is None else float(value)
