"""
Configuration management.
"""
import os
from dataclasses import dataclass
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

BASE_DIR = Path(__file__).resolve().parent.parent.parent

# Django settings
SECRET_KEY = os.getenv('DJANGO_SECRET_KEY', 'django-insecure-change-this-in-production')
DEBUG = os.getenv('DEBUG', 'True') == 'True'
ALLOWED_HOSTS = [h.strip() for h in os.getenv('ALLOWED_HOSTS', '*').split(',') if h.strip()]

# Database configuration
DB_NAME = os.getenv('DB_NAME', 'recruiting_db')
DB_USER = os.getenv('DB_USER', 'postgres')
DB_PASSWORD = os.getenv('DB_PASSWORD', 'postgres')
DB_HOST = os.getenv('DB_HOST', 'db')
DB_PORT = os.getenv('DB_PORT', '5432')

# Langfuse configuration
LANGFUSE_ENABLED = os.getenv('LANGFUSE_ENABLED', 'false').lower() == 'true'
LANGFUSE_PUBLIC_KEY = os.getenv('LANGFUSE_PUBLIC_KEY', '')
LANGFUSE_SECRET_KEY = os.getenv('LANGFUSE_SECRET_KEY', '')
LANGFUSE_BASE_URL = os.getenv('LANGFUSE_BASE_URL', 'https://cloud.langfuse.com')

# Talent search defaults
DEFAULT_EMBEDDING_MODEL = 'text-embedding-3-small'
DEFAULT_EMBEDDING_DIMENSIONS = 1536
DEFAULT_ANALYSIS_MODEL = 'gpt-4o-mini'
DEFAULT_ANALYSIS_TEMPERATURE = 0.4
DEFAULT_SEARCH_LIMIT = 50
MAX_SEARCH_LIMIT = 100
DEFAULT_MIN_SIMILARITY = 0.3
DEFAULT_REQUEST_TIMEOUT = 30.0
DEFAULT_MAX_RETRIES = 2
DEFAULT_REFRESH_BATCH_SIZE = 10
DEFAULT_REFRESH_BATCH_DELAY = 1.0
DEFAULT_REFRESH_MAX_WORKERS = 1

EMBEDDING_BACKENDS = ('openai', 'mock')


@dataclass(frozen=True)
class TalentSearchConfig:
    """Resolved settings for the talent search services.

    Built once per caller and passed into the services, so tests can
    construct an "unconfigured" instance instead of touching the environment.
    """

    openai_api_key: str = ''
    embedding_backend: str = 'openai'
    embedding_model: str = DEFAULT_EMBEDDING_MODEL
    embedding_dimensions: int = DEFAULT_EMBEDDING_DIMENSIONS
    analysis_model: str = DEFAULT_ANALYSIS_MODEL
    analysis_temperature: float = DEFAULT_ANALYSIS_TEMPERATURE
    default_limit: int = DEFAULT_SEARCH_LIMIT
    max_limit: int = MAX_SEARCH_LIMIT
    default_min_similarity: float = DEFAULT_MIN_SIMILARITY
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    max_retries: int = DEFAULT_MAX_RETRIES
    refresh_batch_size: int = DEFAULT_REFRESH_BATCH_SIZE
    refresh_batch_delay: float = DEFAULT_REFRESH_BATCH_DELAY
    refresh_max_workers: int = DEFAULT_REFRESH_MAX_WORKERS
    async_embedding_updates: bool = True

    @property
    def is_configured(self) -> bool:
        """Whether the OpenAI backend (chat and embeddings) has credentials to run."""
        return bool(self.openai_api_key)

    @property
    def embeddings_configured(self) -> bool:
        """Whether embedding and search can run; the mock backend needs no key."""
        return self.embedding_backend == 'mock' or self.is_configured


def _read_str(name: str, default: str) -> str:
    value = os.getenv(name, default).strip()
    return value or default


def _read_positive_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == '':
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}.") from exc
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}.")
    return value


def _read_non_negative_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == '':
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}.") from exc
    if value < 0:
        raise ValueError(f"{name} must not be negative, got {value}.")
    return value


def _read_non_negative_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == '':
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {raw!r}.") from exc
    if value < 0:
        raise ValueError(f"{name} must not be negative, got {value}.")
    return value


def _read_probability(name: str, default: float) -> float:
    value = _read_non_negative_float(name, default)
    if value > 1:
        raise ValueError(f"{name} must be between 0 and 1, got {value}.")
    return value


def _read_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == '':
        return default
    normalized = raw.strip().lower()
    if normalized in {'1', 'true', 't', 'yes', 'y', 'on'}:
        return True
    if normalized in {'0', 'false', 'f', 'no', 'n', 'off'}:
        return False
    raise ValueError(f"{name} must be a boolean-like value, got {raw!r}.")


def load_talent_search_config() -> TalentSearchConfig:
    """Load and validate talent search configuration from the environment."""
    backend = _read_str('EMBEDDING_BACKEND', 'openai').lower()
    if backend not in EMBEDDING_BACKENDS:
        raise ValueError(f"EMBEDDING_BACKEND must be one of {EMBEDDING_BACKENDS}, got {backend!r}.")

    # The player_embeddings column is a fixed-width vector
    embedding_dimensions = _read_positive_int('EMBEDDING_DIMENSIONS', DEFAULT_EMBEDDING_DIMENSIONS)
    if embedding_dimensions != DEFAULT_EMBEDDING_DIMENSIONS:
        raise ValueError(
            f"EMBEDDING_DIMENSIONS must be {DEFAULT_EMBEDDING_DIMENSIONS} to match the stored vectors, "
            f"got {embedding_dimensions}."
        )

    default_limit = _read_positive_int('TALENT_SEARCH_DEFAULT_LIMIT', DEFAULT_SEARCH_LIMIT)
    if default_limit > MAX_SEARCH_LIMIT:
        raise ValueError(f"TALENT_SEARCH_DEFAULT_LIMIT must be at most {MAX_SEARCH_LIMIT}, got {default_limit}.")

    return TalentSearchConfig(
        openai_api_key=os.getenv('OPENAI_API_KEY', '').strip(),
        embedding_backend=backend,
        embedding_model=_read_str('EMBEDDING_MODEL', DEFAULT_EMBEDDING_MODEL),
        embedding_dimensions=embedding_dimensions,
        analysis_model=_read_str('ANALYSIS_MODEL', DEFAULT_ANALYSIS_MODEL),
        analysis_temperature=_read_non_negative_float('ANALYSIS_TEMPERATURE', DEFAULT_ANALYSIS_TEMPERATURE),
        default_limit=default_limit,
        default_min_similarity=_read_probability('TALENT_SEARCH_MIN_SIMILARITY', DEFAULT_MIN_SIMILARITY),
        request_timeout=_read_non_negative_float('AI_REQUEST_TIMEOUT', DEFAULT_REQUEST_TIMEOUT),
        max_retries=_read_non_negative_int('AI_MAX_RETRIES', DEFAULT_MAX_RETRIES),
        refresh_batch_size=_read_positive_int('EMBEDDING_REFRESH_BATCH_SIZE', DEFAULT_REFRESH_BATCH_SIZE),
        refresh_batch_delay=_read_non_negative_float('EMBEDDING_REFRESH_BATCH_DELAY', DEFAULT_REFRESH_BATCH_DELAY),
        refresh_max_workers=_read_positive_int('EMBEDDING_REFRESH_MAX_WORKERS', DEFAULT_REFRESH_MAX_WORKERS),
        async_embedding_updates=_read_bool('EMBEDDING_UPDATES_ASYNC', True),
    )
