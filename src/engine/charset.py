"""Unique character sampling for game boards."""

import random
from typing import List, Optional, Sequence


class CharacterSetError(ValueError):
    """A character set could not be built for the requested board."""


class InvalidSizeError(CharacterSetError):
    """The requested number of characters is not positive."""


class InsufficientPoolError(CharacterSetError):
    """The pools hold fewer characters than requested."""


def sample_characters(
    size: int,
    pools: Sequence[str],
    rng: Optional[random.Random] = None,
) -> List[str]:
    """
    Draw `size` distinct characters from the concatenated pools.

    Pools are concatenated, not merged: the result is only duplicate-free
    if the pools do not overlap.

    Args:
        size: Number of characters to draw (must be > 0)
        pools: Candidate character pools, in order
        rng: Random source; the module-level generator is used when omitted

    Returns:
        List of `size` characters

    Raises:
        InsufficientPoolError: If the pools hold fewer than `size` characters
        InvalidSizeError: If `size` is zero or negative
    """
    candidates: List[str] = []
    for pool in pools:
        candidates.extend(pool)

    if size > len(candidates):
        raise InsufficientPoolError(
            f"The character set can't be bigger than {len(candidates)}; you passed {size}"
        )

    if size <= 0:
        raise InvalidSizeError("The requested amount of characters must be greater than 0")

    (rng or random).shuffle(candidates)
    return candidates[:size]
