from .game import Game, School
from .player import Player, GameProfile
from .coach import Coach, Team, CoachFavorite
from .embedding import PlayerEmbedding, EMBEDDING_DIMENSIONS

__all__ = [
    'Game',
    'School',
    'Player',
    'GameProfile',
    'Coach',
    'Team',
    'CoachFavorite',
    'PlayerEmbedding',
    'EMBEDDING_DIMENSIONS',
]
