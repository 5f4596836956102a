"""
Langfuse AI tracing and observability hooks (v3 SDK).

SDK v3 uses OpenTelemetry and works with Langfuse server v3+.
Reference: https://python.reference.langfuse.com/langfuse
"""

import threading
from typing import Any, Dict, Optional
from langfuse import Langfuse
from langfuse.langchain import CallbackHandler
from recruiting.core import config
from recruiting.core.logging import get_logger

logger = get_logger(__name__)

# Thread-safe cache for Langfuse clients (keyed by public_key)
_langfuse_clients: Dict[str, Any] = {}
_callback_handlers: Dict[str, CallbackHandler] = {}
_client_lock = threading.Lock()


def _credentials():
    return config.LANGFUSE_PUBLIC_KEY, config.LANGFUSE_SECRET_KEY


def get_langfuse_client():
    """
    Get or create the cached Langfuse client for the configured keys.

    Returns None when tracing is disabled or keys are missing.
    """
    if not config.LANGFUSE_ENABLED:
        return None

    public_key, secret_key = _credentials()
    if not public_key or not secret_key:
        return None

    with _client_lock:
        if public_key in _langfuse_clients:
            return _langfuse_clients[public_key]

        try:
            client = Langfuse(
                public_key=public_key,
                secret_key=secret_key,
                host=config.LANGFUSE_BASE_URL,
            )
            _langfuse_clients[public_key] = client
            logger.debug(f"Created and cached Langfuse client for key: {public_key[:8]}...")
            return client
        except Exception as e:
            logger.error(f"Failed to create Langfuse client: {e}", exc_info=True)
            return None


def get_callback_handler() -> Optional[CallbackHandler]:
    """
    Get a LangChain CallbackHandler bound to the cached client.

    Returns None when tracing is unavailable, so callers can pass
    ``[h for h in [handler] if h]`` straight into ``callbacks``.
    """
    client = get_langfuse_client()
    if not client:
        return None

    public_key, _ = _credentials()

    with _client_lock:
        if public_key in _callback_handlers:
            return _callback_handlers[public_key]

        try:
            handler = CallbackHandler(public_key=public_key)
        except Exception as e:
            logger.error(f"Failed to create CallbackHandler: {e}", exc_info=True)
            return None

        _callback_handlers[public_key] = handler
        return handler


class _NoOpContext:
    def __enter__(self):
        return self

    def __exit__(self, *args):
        return False


def langfuse_trace(name: str, metadata: Optional[Dict[str, Any]] = None):
    """
    Span context manager; a no-op when Langfuse is not available.
    """
    langfuse = get_langfuse_client()
    if langfuse:
        try:
            return langfuse.start_as_current_span(name=name, metadata=metadata)
        except (AttributeError, TypeError):
            pass
    return _NoOpContext()


def flush_traces():
    """
    Flush pending traces to Langfuse.

    Call from short-lived processes such as management commands.
    """
    client = get_langfuse_client()
    if not client:
        return
    try:
        client.flush()
        logger.debug("Flushed Langfuse traces")
    except Exception as e:
        logger.error(f"Failed to flush Langfuse traces: {e}", exc_info=True)


def cleanup_all_clients():
    """
    Flush and shutdown all cached Langfuse clients.

    Call this during application shutdown.
    """
    with _client_lock:
        for key, client in list(_langfuse_clients.items()):
            try:
                client.flush()
                client.shutdown()
                logger.debug(f"Cleaned up Langfuse client: {key[:8]}...")
            except Exception as e:
                logger.warning(f"Error cleaning up client {key[:8]}: {e}")

        _langfuse_clients.clear()
        _callback_handlers.clear()
