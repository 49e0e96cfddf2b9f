from enum import StrEnum

from pydantic import Field
from pydantic_settings import BaseSettings

from docseq.core.modules.counter.models import DocumentType
from docseq.core.modules.numbering.models import NumberingScheme


class StoreKind(StrEnum):
    """Backends available for the counter store."""

    MONGO = "mongo"
    MEMORY = "memory"  # Single-process deployments and tests only


class Config(BaseSettings):
    """Application configuration loaded from environment variables."""

    store: StoreKind = StoreKind.MONGO
    database_url: str = "mongodb://localhost:27017/docseq"
    database_timeout_ms: int = 5000  # Server selection / connect timeout for MongoDB
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False
    cors_origins: list[str] = []
    api_token: str | None = None  # Static bearer token; endpoints are open when unset
    allocation_timeout: float = Field(default=10.0, gt=0)  # Seconds, used when the caller supplies none
    conflict_max_attempts: int = Field(default=5, ge=1)
    conflict_min_wait: float = Field(default=0.05, ge=0)  # Seconds before the first conflict retry
    conflict_max_wait: float = Field(default=1.0, ge=0)
    schemes: dict[DocumentType, NumberingScheme] = {}  # Per-type overrides of the default numbering schemes
    # Build metadata injected during Docker build via environment variables
    git_commit_hash: str = "unknown"
    git_commit_date: str = "unknown"
    build_time: str = "unknown"

    model_config = {
        "env_file": [".env"],
        "env_prefix": "DOCSEQ_",
        "extra": "ignore",
    }
