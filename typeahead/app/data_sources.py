"""Demo data sources."""

import asyncio
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any

DEFAULT_WORDS = [
    "apple",
    "apricot",
    "avocado",
    "banana",
    "blackberry",
    "blueberry",
    "cherry",
    "coconut",
    "cranberry",
    "date",
    "dragonfruit",
    "elderberry",
    "fig",
    "grape",
    "grapefruit",
    "guava",
    "kiwi",
    "lemon",
    "lime",
    "lychee",
    "mango",
    "melon",
    "nectarine",
    "orange",
    "papaya",
    "peach",
    "pear",
    "pineapple",
    "plum",
    "pomegranate",
    "raspberry",
    "strawberry",
    "tangerine",
    "watermelon",
]


def load_words(path: Path) -> list[str]:
    """Read one word per line, skipping blanks."""
    return [line.strip() for line in path.read_text().splitlines() if line.strip()]


class WordListSource:
    """Synchronous data source matching words by prefix first, then by substring."""

    def __init__(self, words: Iterable[str], limit: int = 10):
        """Initialize the data source."""
        self.words = sorted(set(words))
        self.limit = limit

    def __call__(self, text: str) -> list[str]:
        """Return matching words."""
        query = text.strip().lower()
        if not query:
            return []
        prefix = [w for w in self.words if w.lower().startswith(query)]
        inner = [w for w in self.words if query in w.lower() and w not in prefix]
        return (prefix + inner)[: self.limit]


class DelayedSource:
    """Callback-style data source answering after `latency` seconds."""

    def __init__(self, inner: Callable[[str], Any], latency: float):
        """Initialize the data source."""
        self.inner = inner
        self.latency = latency

    def __call__(self, text: str, callback: Callable[[Any], None]) -> None:
        """Schedule the answer and return nothing."""
        suggestions = self.inner(text)
        asyncio.get_running_loop().call_later(self.latency, callback, suggestions)
