"""
Characteristic generation roll.

Each 2d6 roll gives two characteristic values: roll + 6 and 19 - roll,
so every pair sums to 25.
"""

import random

ROLLS_NEEDED = 3


def roll_2d6(rng: random.Random | None = None) -> int:
    """Roll 2d6."""
    rng = rng or random
    return rng.randint(1, 6) + rng.randint(1, 6)


def roll_stats(values: list[int] | None = None, rng: random.Random | None = None) -> list[int]:
    """
    Compute characteristic values from 2d6 rolls.

    Args:
        values: Rolls already made (values outside 2-12 are ignored)
        rng: Random source for the missing rolls

    Returns:
        Two values per roll, at least six values
    """
    rolls = [v for v in values or [] if 1 < v < 13]
    while len(rolls) < ROLLS_NEEDED:
        rolls.append(roll_2d6(rng))

    stats = []
    for roll in rolls:
        stats.append(roll + 6)
        stats.append(19 - roll)
    return stats


def render_stats(stats: list[int]) -> str:
    """Chat block showing the values as inline rolls."""
    desc = "".join(f"[[{stat}]] " for stat in stats)
    return f"&{{template:co1}} {{{{subtags=Tirage}}}} {{{{name=Caractéristiques}}}} {{{{desc={desc}}}}}"
