"""
Coach, team and favorites models.
"""
import uuid
from django.conf import settings
from django.db import models


class Coach(models.Model):
    """A coach account that searches for talent."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='coach',
    )
    first_name = models.CharField(max_length=100, blank=True, default='')
    last_name = models.CharField(max_length=100, blank=True, default='')
    school = models.CharField(max_length=255, null=True, blank=True)
    school_ref = models.ForeignKey(
        'School',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='coaches',
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'coaches'
        ordering = ['-created_at']

    @property
    def is_onboarded(self) -> bool:
        """Onboarding completes when the coach is associated with a school."""
        return self.school_ref_id is not None

    def __str__(self):
        return f"{self.first_name} {self.last_name}".strip() or str(self.user)


class Team(models.Model):
    """A team run by a coach in a single game."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    coach = models.ForeignKey(Coach, on_delete=models.CASCADE, related_name='teams')
    game = models.ForeignKey('Game', on_delete=models.CASCADE, related_name='teams')
    name = models.CharField(max_length=100)

    class Meta:
        db_table = 'teams'
        ordering = ['name']

    def __str__(self):
        return self.name


class CoachFavorite(models.Model):
    """A player bookmarked by a coach."""

    coach = models.ForeignKey(Coach, on_delete=models.CASCADE, related_name='favorites')
    player = models.ForeignKey('Player', on_delete=models.CASCADE, related_name='favorited_by')
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'coach_favorites'
        unique_together = [['coach', 'player']]

    def __str__(self):
        return f"{self.coach_id} -> {self.player_id}"
