"""Pydantic base model and typeahead options."""

from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .cell import Cell

DEFAULT_DEBOUNCE_DELAY_MS = 250


class FrozenBaseModel(BaseModel):
    """Pydantic frozen base model."""

    model_config = ConfigDict(frozen=True, strict=True)


class TypeaheadOptions(FrozenBaseModel):
    """Typeahead configuration.

    `rigid`, `change_on_blur` and `model` may be plain values or `Cell`s; cells
    are re-read every time the typeahead makes a decision that depends on them.
    """

    model_config = ConfigDict(frozen=True, strict=True, extra="forbid", arbitrary_types_allowed=True)

    data_source: Callable[..., Any]
    model: Any = None
    on_change: Callable[[Any], Any] | None = None
    suggestion_to_string: Callable[[Any], str | None] | None = None
    render_suggestion: Callable[[str, Any], Any] | None = None
    rigid: bool | Cell = True
    change_on_blur: bool | Cell = True
    debounce_delay_ms: int = Field(default=DEFAULT_DEBOUNCE_DELAY_MS, gt=0)

    @property
    def debounce_delay(self) -> float:
        """Debounce delay in seconds."""
        return self.debounce_delay_ms / 1000
