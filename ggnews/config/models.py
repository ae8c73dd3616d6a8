"""Configuration models."""

from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from ..models.article import REGIONS


class PostgresConfig(BaseModel):
    """Postgres configuration."""

    host: str = Field("localhost", description="Database host")
    port: int = Field(5432, description="Database port")
    database: str = Field("ggnews", description="Database name")
    user: str = Field("ggnews", description="Database user")
    password: Optional[str] = Field(None, description="Database password")
    password_env: Optional[str] = Field(None, description="Environment variable for password")


class IngestionConfig(BaseModel):
    """Feed polling and retention parameters."""

    request_timeout: float = Field(15.0, description="Per-feed request timeout in seconds", gt=0.0, le=120.0)
    user_agent: str = Field("ggLobby-NewsBot/1.0", description="User-Agent sent to feeds")
    max_items_per_source: int = Field(30, description="Items considered per source per run", ge=1, le=500)
    keep_pending_per_game: int = Field(5, description="Pending fetched articles kept per game after a run", ge=0)
    excerpt_length: int = Field(280, description="Excerpt length in characters", ge=1)
    content_max_chars: int = Field(5000, description="Stored original content length", ge=1)


class ClassifierConfig(BaseModel):
    """Article classifier selection."""

    mode: Literal["keyword", "llm"] = Field("keyword", description="Classifier implementation")
    summarize: bool = Field(False, description="Rewrite title/summary/excerpt with the LLM")
    cache_ttl_seconds: float = Field(3600.0, description="How long LLM answers are cached", ge=0.0)


class LLMConfig(BaseModel):
    """LLM provider configuration."""

    provider: str = Field("openai", description="LLM provider (openai, mock)")
    model: str = Field("gpt-4o-mini", description="Model name")
    api_key_env: Optional[str] = Field("OPENAI_API_KEY", description="Environment variable for API key")
    api_key: Optional[str] = Field(None, description="API key (prefer api_key_env)")
    base_url: Optional[str] = Field(None, description="Base URL for API")
    timeout: float = Field(30.0, description="Request timeout in seconds", gt=0.0)


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field("INFO", description="Root log level")
    rich_tracebacks: bool = Field(True, description="Render tracebacks with Rich")


class ConfigModel(BaseModel):
    """Main configuration model."""

    postgres: PostgresConfig = Field(default_factory=PostgresConfig)
    ingestion: IngestionConfig = Field(default_factory=IngestionConfig)
    classifier: ClassifierConfig = Field(default_factory=ClassifierConfig)
    llm: LLMConfig = Field(default_factory=LLMConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


class SourceConfig(BaseModel):
    """Source configuration from sources.yaml."""

    name: str = Field(..., description="Source name")
    url: str = Field(..., description="RSS feed URL")
    region: Optional[str] = Field(None, description="Region override")
    is_active: bool = Field(True, description="Whether source is polled")

    @field_validator("region")
    @classmethod
    def validate_region(cls, v: Optional[str]) -> Optional[str]:
        """Validate that a region override is a known region."""
        if v is not None and v not in REGIONS:
            raise ValueError(f"Unknown region '{v}', expected one of {', '.join(REGIONS)}")
        return v
