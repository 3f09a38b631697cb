"""
Nankan Settlement - Role Assignments

Prediction role tags (印) and their umatan axis/companion classification.
"""

from enum import Enum
from typing import Optional


class Assignment(Enum):
    """Role tag given to a horse by the prediction."""
    PRIMARY = "本命"
    RIVAL = "対抗"
    DARK_HORSE = "単穴"
    TOP_LONGSHOT = "連下最上位"
    LONGSHOT = "連下"
    ALTERNATE = "補欠"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value) -> Optional["Assignment"]:
        """Return the matching tag, or None for empty/unknown tags."""
        if isinstance(value, cls):
            return value
        if not value:
            return None
        try:
            return cls(value)
        except ValueError:
            return None

    @property
    def is_longshot_family(self) -> bool:
        """True for every tag containing 連下."""
        return "連下" in self.value


# Axis (軸): horses expected to finish first or second
AXIS_ASSIGNMENTS = frozenset({
    Assignment.PRIMARY,
    Assignment.RIVAL,
    Assignment.DARK_HORSE,
})

# Companion (ヒモ): horses completing the combination.
# 対抗 and 単穴 are in both sets.
COMPANION_ASSIGNMENTS = frozenset({
    Assignment.RIVAL,
    Assignment.DARK_HORSE,
    Assignment.TOP_LONGSHOT,
    Assignment.LONGSHOT,
    Assignment.ALTERNATE,
})

# Display marks used by the prediction page
ASSIGNMENT_MARKS = {
    Assignment.PRIMARY: "◎",
    Assignment.RIVAL: "○",
    Assignment.DARK_HORSE: "▲",
    Assignment.TOP_LONGSHOT: "△",
    Assignment.LONGSHOT: "△",
}
