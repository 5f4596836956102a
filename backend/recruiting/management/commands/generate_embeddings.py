"""
Generate or refresh player search embeddings.

    python manage.py generate_embeddings --only-missing --batch-size 20
"""
from django.core.management.base import BaseCommand, CommandError
from recruiting.core.config import load_talent_search_config
from recruiting.core.errors import APIError
from recruiting.observability.tracing import flush_traces
from recruiting.services.factory import build_embedding_service


class Command(BaseCommand):
    help = "Generate embeddings for players (all players, or only those missing one)."

    def add_arguments(self, parser):
        parser.add_argument(
            '--only-missing',
            action='store_true',
            help='Only embed players that have no embedding yet',
        )
        parser.add_argument(
            '--batch-size',
            type=int,
            default=None,
            help='Players per batch (default: EMBEDDING_REFRESH_BATCH_SIZE)',
        )
        parser.add_argument(
            '--batch-delay',
            type=float,
            default=None,
            help='Seconds to pause between batches (default: EMBEDDING_REFRESH_BATCH_DELAY)',
        )
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Report what would be embedded without calling the backend',
        )

    def handle(self, *args, **options):
        batch_size = options['batch_size']
        batch_delay = options['batch_delay']
        if batch_size is not None and batch_size < 1:
            raise CommandError("--batch-size must be at least 1")
        if batch_delay is not None and batch_delay < 0:
            raise CommandError("--batch-delay must not be negative")

        try:
            config = load_talent_search_config()
        except ValueError as e:
            raise CommandError(str(e))

        service = build_embedding_service(config)
        only_missing = options['only_missing']

        embedded = service.get_embedding_count()
        missing = service.get_missing_embedding_count()
        self.stdout.write(f"Players: {embedded + missing}, with embeddings: {embedded}, missing: {missing}")

        if options['dry_run']:
            player_ids = service.player_ids_to_refresh(only_missing=only_missing)
            self.stdout.write(f"Dry run: {len(player_ids)} players would be embedded")
            return

        if not config.embeddings_configured:
            raise CommandError("AI backend is not configured. Set OPENAI_API_KEY or EMBEDDING_BACKEND=mock.")

        try:
            result = service.refresh_all(
                only_missing=only_missing,
                batch_size=batch_size,
                batch_delay=batch_delay,
            )
        except APIError as e:
            raise CommandError(e.message)
        finally:
            flush_traces()

        self.stdout.write(
            f"Processed: {result.processed}, succeeded: {result.succeeded}, failed: {result.failed}"
        )
        if result.failed_ids:
            self.stdout.write(self.style.WARNING(
                "Failed player IDs: " + ", ".join(str(player_id) for player_id in result.failed_ids)
            ))
        else:
            self.stdout.write(self.style.SUCCESS("All embeddings generated"))
