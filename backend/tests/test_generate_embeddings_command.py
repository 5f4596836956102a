"""
Tests for the generate_embeddings management command.
"""
from io import StringIO
from unittest.mock import patch

from django.core.management import CommandError, call_command
from django.test import TestCase

from recruiting.db.models import PlayerEmbedding
from recruiting.services.embedding_service import EmbeddingService
from tests.helpers import CONFIGURED, UNCONFIGURED, KeywordEmbeddingsClient, make_player

COMMAND_MODULE = "recruiting.management.commands.generate_embeddings"


class TestGenerateEmbeddingsCommand(TestCase):

    def setUp(self):
        self.first = make_player("Jordan", "Lee", bio="Aggressive duelist")
        self.second = make_player("Sam", "Park", bio="Calm support shotcaller")
        self.client_embeddings = KeywordEmbeddingsClient()

    def run_command(self, config, *args):
        service = EmbeddingService(config, embeddings_client=self.client_embeddings)
        out = StringIO()
        with (
            patch(f"{COMMAND_MODULE}.load_talent_search_config", return_value=config),
            patch(f"{COMMAND_MODULE}.build_embedding_service", return_value=service),
            patch(f"{COMMAND_MODULE}.flush_traces") as mock_flush,
        ):
            call_command("generate_embeddings", *args, stdout=out)
        self.flush_calls = mock_flush.call_count
        return out.getvalue()

    def test_generates_embeddings(self):
        output = self.run_command(CONFIGURED, "--batch-delay", "0")

        self.assertIn("Players: 2, with embeddings: 0, missing: 2", output)
        self.assertIn("Processed: 2, succeeded: 2, failed: 0", output)
        self.assertEqual(PlayerEmbedding.objects.count(), 2)
        self.assertEqual(self.flush_calls, 1)

    def test_only_missing(self):
        EmbeddingService(CONFIGURED, embeddings_client=self.client_embeddings).upsert_embedding(self.first.id)

        output = self.run_command(CONFIGURED, "--only-missing", "--batch-delay", "0")

        self.assertIn("Processed: 1, succeeded: 1, failed: 0", output)

    def test_reports_failed_players(self):
        self.client_embeddings.fail_on = ["shotcaller"]

        output = self.run_command(CONFIGURED, "--batch-delay", "0")

        self.assertIn("Processed: 2, succeeded: 1, failed: 1", output)
        self.assertIn(str(self.second.id), output)

    def test_dry_run_does_not_embed(self):
        output = self.run_command(UNCONFIGURED, "--dry-run")

        self.assertIn("Dry run: 2 players would be embedded", output)
        self.assertFalse(PlayerEmbedding.objects.exists())
        self.assertEqual(self.client_embeddings.embedded_texts, [])

    def test_unconfigured_backend(self):
        with self.assertRaisesMessage(CommandError, "AI backend is not configured"):
            self.run_command(UNCONFIGURED)

    def test_invalid_arguments(self):
        for args in [("--batch-size", "0"), ("--batch-delay", "-1")]:
            with self.subTest(args=args):
                with self.assertRaises(CommandError):
                    self.run_command(CONFIGURED, *args)

    def test_invalid_configuration(self):
        with patch(f"{COMMAND_MODULE}.load_talent_search_config", side_effect=ValueError("bad limit")):
            with self.assertRaisesMessage(CommandError, "bad limit"):
                call_command("generate_embeddings", stdout=StringIO())
