"""
Tests for Langfuse client caching and span helpers.
"""

import unittest
from unittest.mock import patch, MagicMock
from recruiting.observability.tracing import (
    get_langfuse_client,
    get_callback_handler,
    langfuse_trace,
    flush_traces,
    cleanup_all_clients,
    _langfuse_clients,
    _callback_handlers,
)

PUBLIC_KEY = "pk-lf-test-123"
SECRET_KEY = "sk-lf-test-456"


@patch("recruiting.core.config.LANGFUSE_BASE_URL", "http://test.langfuse.com")
@patch("recruiting.core.config.LANGFUSE_SECRET_KEY", SECRET_KEY)
@patch("recruiting.core.config.LANGFUSE_PUBLIC_KEY", PUBLIC_KEY)
@patch("recruiting.core.config.LANGFUSE_ENABLED", True)
class TestLangfuseCaching(unittest.TestCase):
    """Test Langfuse client caching functionality."""

    def setUp(self):
        """Clear caches before each test."""
        _langfuse_clients.clear()
        _callback_handlers.clear()

    def tearDown(self):
        """Clean up after each test."""
        _langfuse_clients.clear()
        _callback_handlers.clear()

    def test_client_is_created_once(self):
        with patch("recruiting.observability.tracing.Langfuse") as mock_langfuse:
            mock_client = MagicMock()
            mock_langfuse.return_value = mock_client

            client1 = get_langfuse_client()
            client2 = get_langfuse_client()

            self.assertEqual(client1, mock_client)
            self.assertEqual(client1, client2)
            self.assertEqual(mock_langfuse.call_count, 1)
            mock_langfuse.assert_called_once_with(
                public_key=PUBLIC_KEY,
                secret_key=SECRET_KEY,
                host="http://test.langfuse.com",
            )
            self.assertEqual(_langfuse_clients[PUBLIC_KEY], mock_client)

    def test_callback_handler_caching(self):
        """Callback handlers are cached and reuse the client."""
        with (
            patch("recruiting.observability.tracing.Langfuse") as mock_langfuse,
            patch("recruiting.observability.tracing.CallbackHandler") as mock_callback_handler,
        ):
            mock_handler = MagicMock()
            mock_callback_handler.return_value = mock_handler

            handler1 = get_callback_handler()
            handler2 = get_callback_handler()

            self.assertEqual(handler1, mock_handler)
            self.assertEqual(handler1, handler2)
            self.assertEqual(mock_langfuse.call_count, 1)
            self.assertEqual(mock_callback_handler.call_count, 1)

    def test_client_creation_failure_returns_none(self):
        with patch("recruiting.observability.tracing.Langfuse", side_effect=RuntimeError("bad host")):
            self.assertIsNone(get_langfuse_client())
            self.assertNotIn(PUBLIC_KEY, _langfuse_clients)

    def test_trace_opens_span_on_client(self):
        with patch("recruiting.observability.tracing.Langfuse") as mock_langfuse:
            mock_client = MagicMock()
            mock_langfuse.return_value = mock_client

            with langfuse_trace("embed_query", {"limit": 5}):
                pass

            mock_client.start_as_current_span.assert_called_once_with(
                name="embed_query", metadata={"limit": 5}
            )

    def test_flush_traces(self):
        with patch("recruiting.observability.tracing.Langfuse") as mock_langfuse:
            mock_client = MagicMock()
            mock_langfuse.return_value = mock_client

            flush_traces()

            mock_client.flush.assert_called_once()

    def test_cleanup_all_clients(self):
        with patch("recruiting.observability.tracing.Langfuse") as mock_langfuse:
            mock_client = MagicMock()
            mock_langfuse.return_value = mock_client
            get_langfuse_client()
            self.assertEqual(len(_langfuse_clients), 1)

            cleanup_all_clients()

            mock_client.flush.assert_called_once()
            mock_client.shutdown.assert_called_once()
            self.assertEqual(len(_langfuse_clients), 0)
            self.assertEqual(len(_callback_handlers), 0)


class TestLangfuseDisabled(unittest.TestCase):
    """Without tracing everything degrades to no-ops."""

    def setUp(self):
        _langfuse_clients.clear()
        _callback_handlers.clear()

    @patch("recruiting.core.config.LANGFUSE_ENABLED", False)
    def test_disabled_langfuse_returns_none(self):
        with patch("recruiting.observability.tracing.Langfuse") as mock_langfuse:
            self.assertIsNone(get_langfuse_client())
            self.assertIsNone(get_callback_handler())
            mock_langfuse.assert_not_called()

    @patch("recruiting.core.config.LANGFUSE_ENABLED", True)
    def test_empty_keys_return_none(self):
        test_cases = [
            ("", SECRET_KEY),
            (PUBLIC_KEY, ""),
        ]

        for public_key, secret_key in test_cases:
            with self.subTest(public_key=public_key, secret_key=secret_key):
                with (
                    patch("recruiting.core.config.LANGFUSE_PUBLIC_KEY", public_key),
                    patch("recruiting.core.config.LANGFUSE_SECRET_KEY", secret_key),
                ):
                    self.assertIsNone(get_langfuse_client())
                    self.assertIsNone(get_callback_handler())

    @patch("recruiting.core.config.LANGFUSE_ENABLED", False)
    def test_trace_is_a_no_op(self):
        with langfuse_trace("vector_search") as span:
            self.assertIsNotNone(span)
        flush_traces()


if __name__ == "__main__":
    unittest.main()
