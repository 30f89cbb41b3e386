"""Board generation from a phrase pool."""
import random
from typing import Any, Dict, Iterable, List, Optional

from .lines import DEFAULT_SIZE

PLACEHOLDER_PREFIX = 'Task'


class Tile:
    __slots__ = ('label', 'owner_id', 'color')

    def __init__(self, label: str, owner_id: Optional[str] = None, color: Optional[str] = None):
        self.label = label
        self.owner_id = owner_id
        self.color = color

    @property
    def is_owned(self) -> bool:
        return self.owner_id is not None

    def claim(self, owner_id: str, color: str) -> None:
        self.owner_id = owner_id
        self.color = color

    def release(self) -> None:
        self.owner_id = None
        self.color = None

    def to_dict(self) -> Dict[str, Any]:
        # owner_id stays server side
        return {'label': self.label, 'color': self.color}

    def __repr__(self):
        return f"Tile({self.label!r}, owner_id={self.owner_id!r}, color={self.color!r})"


def usable_phrases(phrases: Iterable[Any]) -> List[str]:
    """Trim, drop blanks and non-strings, dedupe keeping first occurrence."""
    seen = set()
    result = []
    for item in phrases or []:
        if not isinstance(item, str):
            continue
        text = item.strip()
        if not text or text in seen:
            continue
        seen.add(text)
        result.append(text)
    return result


def pick_unique(items: List[str], count: int, rng: Optional[random.Random] = None) -> List[str]:
    """Uniform random sample of `count` items via a Fisher-Yates shuffle."""
    rng = rng or random
    copy = list(items)
    rng.shuffle(copy)
    return copy[:count]


def generate_labels(phrases: Iterable[Any], size: int = DEFAULT_SIZE,
                    rng: Optional[random.Random] = None) -> List[str]:
    total = size * size
    pool = usable_phrases(phrases)
    if len(pool) >= total:
        return pick_unique(pool, total, rng)
    missing = total - len(pool)
    return pool + [f"{PLACEHOLDER_PREFIX} {len(pool) + i + 1}" for i in range(missing)]


def generate_board(phrases: Iterable[Any], size: int = DEFAULT_SIZE,
                   rng: Optional[random.Random] = None) -> List[Tile]:
    """Build a fresh, unclaimed board of size*size tiles.

    With enough unique phrases a random subset is used; otherwise every
    phrase is used and the remaining slots get numbered placeholders.
    """
    return [Tile(label) for label in generate_labels(phrases, size, rng)]
