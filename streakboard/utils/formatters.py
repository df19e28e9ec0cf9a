"""Presentation helpers for ranked entries"""

import math
from typing import Optional

PODIUM = {1: "gold", 2: "silver", 3: "bronze"}


def display_score(total_score: float) -> int:
    """Nearest integer, halves rounded up"""
    return int(math.floor(total_score + 0.5))


def multiplier_label(streak_multiplier: float) -> Optional[str]:
    """``"1.70x"`` for boosted entries, None when there is no bonus"""
    if streak_multiplier > 1:
        return f"{streak_multiplier:.2f}x"
    return None


def podium_for_rank(rank: int) -> Optional[str]:
    return PODIUM.get(rank)
