"""Application settings and configuration management."""

from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..core.scoring import CaseMatching, Normalization, ScoringConfig


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    # Application
    app_name: str = Field(default="Fuzzy Ranker")
    app_version: str = Field(default="1.0.0")
    debug: bool = Field(default=False)

    # Server
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)
    workers: int = Field(default=1)

    # Request limits
    max_query_length: int = Field(default=256)
    max_candidates: int = Field(default=100000)
    max_results: int = Field(default=50)

    # Ranker
    parallel_workers: int = Field(default=1)
    parallel_threshold: int = Field(default=10000)

    # Default scoring options
    prefer_prefix: bool = Field(default=False)
    path_aware_boundaries: bool = Field(default=False)
    case_matching: CaseMatching = Field(default=CaseMatching.IGNORE)
    normalization: Normalization = Field(default=Normalization.NFC)

    # Logging
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="json")

    # CORS
    cors_origins: List[str] = Field(
        default=["http://localhost:3000", "http://localhost:8080", "http://localhost:8000"]
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="FUZZY_RANKER_",
        case_sensitive=False,
        extra="ignore",
    )

    def scoring_config(self) -> ScoringConfig:
        """Build the default scoring configuration from these settings."""
        return ScoringConfig(
            prefer_prefix=self.prefer_prefix,
            path_aware_boundaries=self.path_aware_boundaries,
            case_matching=self.case_matching,
            normalization=self.normalization,
            max_needle_length=self.max_query_length,
        )


@lru_cache()
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
