"""App configuration."""

from pathlib import Path

from pydantic import BaseModel, Field

from ..common.pydantic import DEFAULT_DEBOUNCE_DELAY_MS
from .data_sources import DEFAULT_WORDS, DelayedSource, WordListSource, load_words


class AppConfig(BaseModel):
    """Demo app settings, persisted between runs."""

    words_path: Path | None = None
    debounce_delay_ms: int = Field(default=DEFAULT_DEBOUNCE_DELAY_MS, gt=0)
    latency_ms: int = Field(default=0, ge=0)
    rigid: bool = True
    change_on_blur: bool = True


def build_data_source(config: AppConfig) -> WordListSource | DelayedSource:
    """Build the data source described by `config`."""
    words = load_words(config.words_path) if config.words_path else DEFAULT_WORDS
    source = WordListSource(words)
    if config.latency_ms:
        return DelayedSource(source, config.latency_ms / 1000)
    return source
