# --- pdfsift_lib/models.py ---
"""
pdfsift_lib/models.py: Value records shared by the layout and search stages.
"""
from dataclasses import dataclass, field, asdict
from typing import List


@dataclass(frozen=True)
class Rect:
    """An axis-aligned box in page coordinates (y grows upward)."""

    min_x: float
    max_x: float
    min_y: float
    max_y: float

    @property
    def mid_x(self) -> float:
        return (self.min_x + self.max_x) / 2

    @property
    def mid_y(self) -> float:
        return (self.min_y + self.max_y) / 2

    @property
    def width(self) -> float:
        return self.max_x - self.min_x


@dataclass(frozen=True)
class PositionedWord:
    """A single word and the box it occupies on the page."""

    text: str
    bounds: Rect


@dataclass(frozen=True)
class Match:
    """One matching line and its context window.

    Field names follow the JSON shape emitted by the search command.
    """

    page: int
    line: int
    text: str
    contextBefore: List[str] = field(default_factory=list)
    contextAfter: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Returns a JSON-serializable dict of the match record."""
        return asdict(self)
