"""
Game and school reference models.
"""
import uuid
from django.db import models


class Game(models.Model):
    """A competitive title players and teams compete in."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=100, unique=True)
    short_name = models.CharField(max_length=20)
    icon = models.URLField(null=True, blank=True)
    color = models.CharField(max_length=20, null=True, blank=True)

    class Meta:
        db_table = 'games'
        ordering = ['name']

    def __str__(self):
        return self.name


class School(models.Model):
    """A high school, college or university."""

    class SchoolType(models.TextChoices):
        HIGH_SCHOOL = 'HIGH_SCHOOL', 'High School'
        COLLEGE = 'COLLEGE', 'College'
        UNIVERSITY = 'UNIVERSITY', 'University'

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255, db_index=True)
    type = models.CharField(max_length=20, choices=SchoolType.choices, db_index=True)
    state = models.CharField(max_length=50, null=True, blank=True)

    class Meta:
        db_table = 'schools'
        ordering = ['name']

    def __str__(self):
        return f"{self.name} ({self.get_type_display()})"
