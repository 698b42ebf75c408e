"""Typeahead events."""

from typing import Any

from . import Event


class TypeaheadEvent(Event):
    """Typeahead event."""


class InputTextChanged(TypeaheadEvent):
    """The user edited the input text."""

    text: str


class SearchDispatched(TypeaheadEvent):
    """A debounced search was sent to the data source."""

    text: str
    generation: int


class SuggestionsReceived(TypeaheadEvent):
    """The data source answered the current search."""

    text: str
    generation: int
    count: int


class StaleSuggestionsDropped(TypeaheadEvent):
    """An answer arrived for a search that is no longer current."""

    text: str
    generation: int


class SearchAbandoned(TypeaheadEvent):
    """An outstanding search was given up before it answered."""

    text: str
    generation: int


class SearchFailed(TypeaheadEvent):
    """The data source raised."""

    text: str
    error: str


class ModelCommitted(TypeaheadEvent):
    """The committed model value changed."""

    model: Any


class TypeaheadReset(TypeaheadEvent):
    """The typeahead was cleared."""
