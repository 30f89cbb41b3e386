"""Cached phrase vocabulary used for board generation."""
import json
import logging
import threading
from typing import Any, Callable, Iterable, List, Optional

from .board import usable_phrases

logger = logging.getLogger(__name__)

SAMPLE_PHRASES = [
    'Defeat a miniboss',
    'Get a rare drop',
    'Finish a side quest',
    'Find a secret shortcut',
    'Win a duel',
    'Collect 100 gold',
    'Upgrade an item',
    'Visit a new town',
    'Recruit a companion',
    'Finish a timed mission',
    'Discover a hidden location',
    'Use a rare potion',
    'Train a skill',
    'Beat an enemy without taking damage',
    'Catch a rare monster',
    'Loot from a raid',
    'Win a tournament',
    'Find a treasure',
    'Solve a puzzle',
    'Clear a dungeon',
    'Complete a quest chain',
    'Take out an elite',
    'Plan a strategy',
    'Trade with a player',
    'Buy a legendary item',
]


def load_phrases_file(path: str) -> List[str]:
    """Read a JSON list of phrases, raising ValueError if it is not a list."""
    with open(path, encoding='utf-8') as fh:
        data = json.load(fh)
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a JSON list, got {type(data).__name__}")
    return usable_phrases(data)


class PhrasePool:
    """Loads the phrase list once and hands out copies.

    A failed or malformed load is logged and yields an empty pool for that
    call only; the next call tries again.
    """

    def __init__(self, loader: Callable[[], Iterable[Any]]):
        self._loader = loader
        self._lock = threading.Lock()
        self._phrases: Optional[List[str]] = None

    def get(self) -> List[str]:
        with self._lock:
            cached = self._phrases
        if cached is not None:
            return list(cached)
        phrases = self._load()
        if phrases is None:
            return []
        with self._lock:
            self._phrases = phrases
        return list(phrases)

    def refresh(self) -> List[str]:
        with self._lock:
            self._phrases = None
        return self.get()

    def _load(self) -> Optional[List[str]]:
        try:
            raw = self._loader()
            if isinstance(raw, (str, bytes)) or raw is None:
                raise TypeError(f"phrase loader returned {type(raw).__name__}")
            phrases = usable_phrases(list(raw))
        except Exception as exc:
            logger.warning(f"[board] phrases unavailable: {exc}")
            return None
        logger.info(f"[board] loaded {len(phrases)} phrases")
        return phrases
