"""Progression Calculator: level and experience-to-next-level from accumulated experience.

Invariants:
    - Completing level L costs 50*(L+1) experience, so reaching level L needs 50*L*(L+1) total
    - level_from_experience(e) is the largest L with 50*L*(L+1) <= e
    - experience_to_next_level(level_from_experience(e), e) > 0 for every e >= 0

Design Decisions:
    - math.isqrt instead of float sqrt: floor((isqrt(x) - 50) / 100) equals
      floor((sqrt(x) - 50) / 100) for x >= 2500 and is exact for any experience
    - Negative experience is rejected upstream by the validator, never here
"""

import math


def level_from_experience(experience: int) -> int:
    """floor((sqrt(2500 + 200 * experience) - 50) / 100)."""
    return (math.isqrt(2500 + 200 * experience) - 50) // 100


def experience_to_next_level(level: int, experience: int) -> int:
    """Experience still missing to reach level + 1. Pass the freshly computed level."""
    return 50 * (level + 1) * (level + 2) - experience


def derive_progression(experience: int) -> tuple[int, int]:
    """(level, until_next_level) for the given experience."""
    level = level_from_experience(experience)
    return level, experience_to_next_level(level, experience)
