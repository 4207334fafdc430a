"""Centralized configuration for hymnal-search using Pydantic Settings."""

import logging
from pathlib import Path
from types import MappingProxyType

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from hymnal_search.search.engine import ScoringWeights
from hymnal_search.search.query import MAX_PREFIX_EXPANSIONS


logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Strictly typed configuration loaded from environment variables.

    Scoring defaults reproduce the stock ranking; override them only to
    experiment with relevance.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_default=True,
        extra="ignore",  # Ignore extra env vars not defined in model
    )

    # Logging
    log_level: str = Field(default="info", description="Logging level")
    log_json: bool = Field(default=False, description="Emit structured JSON logs")

    # Dataset catalog
    catalog_path: Path = Field(default=Path("config.json"), description="Path to the dataset catalog JSON file")

    # Field weights
    weight_title: float = Field(default=3.5, ge=0.0, description="Weight of title term matches")
    weight_lyrics: float = Field(default=1.0, ge=0.0, description="Weight of lyrics term matches")
    weight_author: float = Field(default=1.4, ge=0.0, description="Weight of author term matches")
    weight_tune: float = Field(default=1.4, ge=0.0, description="Weight of tune term matches")
    weight_scripture: float = Field(default=0.8, ge=0.0, description="Weight of scripture term matches")
    weight_meter: float = Field(default=0.6, ge=0.0, description="Weight of meter term matches")

    # Flat bonuses
    phrase_title_boost: float = Field(default=12.0, ge=0.0, description="Bonus per phrase found in the title")
    phrase_lyrics_boost: float = Field(default=6.0, ge=0.0, description="Bonus per phrase found in the lyrics")
    exact_number_boost: float = Field(default=1000.0, ge=0.0, description="Bonus for an exact hymn number mention")

    # Query expansion
    max_prefix_expansions: int = Field(
        default=MAX_PREFIX_EXPANSIONS, ge=1, description="Maximum vocabulary terms a typed prefix expands to"
    )

    # Output
    result_limit: int = Field(default=25, ge=1, description="Maximum results printed by the CLI")

    def field_weights(self) -> dict[str, float]:
        return {
            "title": self.weight_title,
            "lyrics": self.weight_lyrics,
            "author": self.weight_author,
            "tune": self.weight_tune,
            "scripture": self.weight_scripture,
            "meter": self.weight_meter,
        }

    def scoring_weights(self) -> ScoringWeights:
        """Build the immutable weights passed to the search engine.

        Zero weights are allowed, but documents whose only evidence comes from
        a zero-weighted field score 0 and are dropped from results.
        """
        fields = self.field_weights()
        zeroed = sorted(name for name, weight in fields.items() if weight == 0)
        if zeroed:
            logger.warning("Zero field weights configured for %s; matches only in these fields are dropped", zeroed)
        return ScoringWeights(
            fields=MappingProxyType(fields),
            phrase_title=self.phrase_title_boost,
            phrase_lyrics=self.phrase_lyrics_boost,
            exact_number=self.exact_number_boost,
        )
