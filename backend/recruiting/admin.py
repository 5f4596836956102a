"""
Django admin configuration.
"""
from django.contrib import admin
from recruiting.db.models import (
    Coach,
    CoachFavorite,
    Game,
    GameProfile,
    Player,
    PlayerEmbedding,
    School,
    Team,
)


@admin.register(Game)
class GameAdmin(admin.ModelAdmin):
    list_display = ('name', 'short_name', 'color')
    search_fields = ('name', 'short_name')


@admin.register(School)
class SchoolAdmin(admin.ModelAdmin):
    list_display = ('name', 'type', 'state')
    list_filter = ('type', 'state')
    search_fields = ('name',)


class GameProfileInline(admin.TabularInline):
    model = GameProfile
    extra = 0
    fields = ('game', 'username', 'rank', 'role', 'agents', 'play_style', 'attributes')


@admin.register(Player)
class PlayerAdmin(admin.ModelAdmin):
    """Player admin with embedding coverage."""
    list_display = ('id', 'first_name', 'last_name', 'username', 'class_year', 'gpa', 'has_embedding', 'created_at')
    list_filter = ('class_year', 'school_ref__type', 'main_game')
    search_fields = ('first_name', 'last_name', 'username', 'location')
    readonly_fields = ('created_at', 'updated_at')
    inlines = [GameProfileInline]

    def get_queryset(self, request):
        return super().get_queryset(request).select_related('embedding')

    def has_embedding(self, obj):
        return hasattr(obj, 'embedding')
    has_embedding.boolean = True
    has_embedding.short_description = 'Embedding'


@admin.register(Coach)
class CoachAdmin(admin.ModelAdmin):
    list_display = ('id', 'user', 'first_name', 'last_name', 'school_ref', 'created_at')
    search_fields = ('first_name', 'last_name', 'user__username', 'user__email')


@admin.register(Team)
class TeamAdmin(admin.ModelAdmin):
    list_display = ('name', 'coach', 'game')
    list_filter = ('game',)


@admin.register(CoachFavorite)
class CoachFavoriteAdmin(admin.ModelAdmin):
    list_display = ('coach', 'player', 'created_at')


@admin.register(PlayerEmbedding)
class PlayerEmbeddingAdmin(admin.ModelAdmin):
    """Embeddings are derived data; only the text and model are shown."""
    list_display = ('player', 'embedding_model', 'text_preview', 'updated_at')
    list_filter = ('embedding_model',)
    search_fields = ('embedding_text',)
    readonly_fields = ('player', 'embedding_text', 'embedding_model', 'created_at', 'updated_at')
    exclude = ('embedding',)

    def text_preview(self, obj):
        return obj.embedding_text[:80] + '...' if len(obj.embedding_text) > 80 else obj.embedding_text
    text_preview.short_description = 'Text'
