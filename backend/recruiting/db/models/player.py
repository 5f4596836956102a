"""
Player and per-game profile models.
"""
import uuid
from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models


class Player(models.Model):
    """
    A recruitable player profile.

    The player row is the source of truth; the search embedding derived
    from it lives in PlayerEmbedding.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='player',
    )

    # Identity
    first_name = models.CharField(max_length=100)
    last_name = models.CharField(max_length=100)
    username = models.CharField(max_length=50, unique=True, null=True, blank=True)
    image_url = models.URLField(null=True, blank=True)
    location = models.CharField(max_length=255, null=True, blank=True)
    bio = models.TextField(null=True, blank=True)

    # School (free text kept for players whose school is not in the directory)
    school = models.CharField(max_length=255, null=True, blank=True)
    school_ref = models.ForeignKey(
        'School',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='players',
    )

    # Academics
    class_year = models.CharField(max_length=20, null=True, blank=True, db_index=True)
    gpa = models.DecimalField(
        max_digits=3,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(0), MaxValueValidator(5)],
    )
    graduation_date = models.CharField(max_length=20, null=True, blank=True)
    intended_major = models.CharField(max_length=255, null=True, blank=True)

    main_game = models.ForeignKey(
        'Game',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='main_players',
    )

    class Meta:
        db_table = 'players'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['last_name', 'first_name'], name='players_name_idx'),
        ]

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def __str__(self):
        return self.username or self.full_name


class GameProfile(models.Model):
    """
    A player's profile in one game.

    Common fields are columns; anything game-specific (peak rank, main
    lane, preferred map...) goes into ``attributes``.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    player = models.ForeignKey(
        Player,
        on_delete=models.CASCADE,
        related_name='game_profiles',
    )
    game = models.ForeignKey(
        'Game',
        on_delete=models.CASCADE,
        related_name='profiles',
    )
    username = models.CharField(max_length=100)
    rank = models.CharField(max_length=50, null=True, blank=True)
    rating = models.IntegerField(null=True, blank=True)
    role = models.CharField(max_length=50, null=True, blank=True, db_index=True)
    agents = models.JSONField(default=list, blank=True)  # ["Jett", "Reyna"]
    play_style = models.CharField(max_length=255, null=True, blank=True)
    combine_score = models.FloatField(null=True, blank=True)
    league_score = models.FloatField(null=True, blank=True)
    attributes = models.JSONField(default=dict, blank=True)  # {"peak_rank": "Immortal 2"}
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'player_game_profiles'
        ordering = ['created_at']
        unique_together = [['player', 'game']]

    def __str__(self):
        return f"{self.username} ({self.game_id})"
