"""
Player profile change events.

Profile edits publish ``player_profile_changed``; the embedding store
subscribes and refreshes the player's embedding after the transaction
commits. A failed refresh never affects the edit that triggered it.
"""
import threading
from concurrent.futures import ThreadPoolExecutor

from django.db import connections, transaction
from django.db.models.signals import post_delete, post_save
from django.dispatch import Signal, receiver

from recruiting.core.config import TalentSearchConfig, load_talent_search_config
from recruiting.core.logging import get_logger
from recruiting.db.models import GameProfile, Player

logger = get_logger(__name__)

# Sent with ``player_id``
player_profile_changed = Signal()

_executor = None
_executor_lock = threading.Lock()


def publish_player_profile_changed(player_id) -> None:
    player_profile_changed.send(sender=Player, player_id=player_id)


def _get_executor() -> ThreadPoolExecutor:
    global _executor
    with _executor_lock:
        if _executor is None:
            _executor = ThreadPoolExecutor(max_workers=2, thread_name_prefix="embedding-update")
        return _executor


def _run_update(player_id, config: TalentSearchConfig) -> None:
    from recruiting.services.factory import build_embedding_service

    result = build_embedding_service(config).update_player_embedding(player_id)
    if result.success:
        logger.debug(f"Embedding refreshed after profile change for player {player_id}")
    else:
        logger.warning(f"Embedding not refreshed for player {player_id}: {result.reason}")


def _run_update_in_worker(player_id, config: TalentSearchConfig) -> None:
    try:
        _run_update(player_id, config)
    finally:
        connections.close_all()


def dispatch_embedding_update(player_id) -> None:
    """Refresh one player's embedding inline or on the worker pool."""
    config = load_talent_search_config()
    if not config.embeddings_configured:
        logger.debug(f"Skipping embedding update for player {player_id}: AI backend not configured")
        return

    if config.async_embedding_updates:
        _get_executor().submit(_run_update_in_worker, player_id, config)
    else:
        _run_update(player_id, config)


@receiver(player_profile_changed)
def schedule_embedding_update(sender, player_id, **kwargs):
    transaction.on_commit(lambda: dispatch_embedding_update(player_id), robust=True)


@receiver(post_save, sender=Player)
def player_saved(sender, instance, raw=False, **kwargs):
    if raw:
        return
    publish_player_profile_changed(instance.pk)


@receiver(post_save, sender=GameProfile)
@receiver(post_delete, sender=GameProfile)
def game_profile_changed(sender, instance, raw=False, **kwargs):
    if raw:
        return
    publish_player_profile_changed(instance.player_id)
