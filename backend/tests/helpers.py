"""
Shared fixtures for talent search tests.
"""
import hashlib
import re
from decimal import Decimal
from typing import Iterable, List, Optional

from django.contrib.auth import get_user_model

from recruiting.core.config import TalentSearchConfig
from recruiting.db.models import (
    EMBEDDING_DIMENSIONS,
    Coach,
    Game,
    GameProfile,
    Player,
    School,
)
from recruiting.embeddings import EmbeddingsClientBase

TOKEN_PATTERN = re.compile(r"[a-z0-9]+")

CONFIGURED = TalentSearchConfig(
    openai_api_key="test-key",
    refresh_batch_delay=0,
)
UNCONFIGURED = TalentSearchConfig(openai_api_key="")


class KeywordEmbeddingsClient(EmbeddingsClientBase):
    """
    Bag-of-words embeddings: each token is hashed into one dimension.

    Texts sharing words are similar, texts sharing none score 0.
    """

    def __init__(self, fail_on: Iterable[str] = (), dimensions: int = EMBEDDING_DIMENSIONS):
        self.fail_on = [marker.lower() for marker in fail_on]
        self._dimensions = dimensions
        self.embedded_texts: List[str] = []
        self.queries: List[str] = []

    @property
    def model_name(self) -> str:
        return "keyword-test"

    @property
    def dimensions(self) -> int:
        return self._dimensions

    @property
    def max_batch_size(self) -> int:
        return 100

    def _vector(self, text: str) -> List[float]:
        vector = [0.0] * self._dimensions
        for token in TOKEN_PATTERN.findall(text.lower()):
            bucket = int(hashlib.md5(token.encode("utf-8")).hexdigest(), 16) % self._dimensions
            vector[bucket] += 1.0
        return vector

    def embed_texts(self, texts):
        for text in texts:
            if any(marker in text.lower() for marker in self.fail_on):
                raise RuntimeError("embedding backend unavailable")
        self.embedded_texts.extend(texts)
        return [self._vector(text) for text in texts]

    def embed_query(self, text):
        self.queries.append(text)
        return self._vector(text)


def make_game(name: str = "Valorant", short_name: str = "VAL") -> Game:
    game, _ = Game.objects.get_or_create(name=name, defaults={"short_name": short_name})
    return game


def make_school(name: str = "Lincoln High", type: str = School.SchoolType.HIGH_SCHOOL, state: str = "TX") -> School:
    return School.objects.create(name=name, type=type, state=state)


def make_player(first_name: str = "Alex", last_name: str = "Rivera", gpa=None, **fields) -> Player:
    if gpa is not None:
        gpa = Decimal(str(gpa))
    return Player.objects.create(first_name=first_name, last_name=last_name, gpa=gpa, **fields)


def make_profile(player: Player, game: Optional[Game] = None, **fields) -> GameProfile:
    fields.setdefault("username", f"{player.first_name.lower()}#{player.last_name.lower()}")
    return GameProfile.objects.create(player=player, game=game or make_game(), **fields)


def make_user(username: str, is_staff: bool = False):
    return get_user_model().objects.create_user(
        username=username,
        email=f"{username}@example.com",
        password="password123",
        is_staff=is_staff,
    )


def make_coach(username: str = "coach", school: Optional[School] = None, onboarded: bool = True) -> Coach:
    if onboarded and school is None:
        school = make_school(name=f"{username.title()} University", type=School.SchoolType.UNIVERSITY)
    return Coach.objects.create(
        user=make_user(username),
        first_name="Casey",
        last_name="Coach",
        school_ref=school if onboarded else None,
    )
