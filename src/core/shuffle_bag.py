"""
Shuffle Bag Module

Keeps the queue indexes not yet played in the current shuffle cycle and
draws the next one at random.
"""

from __future__ import annotations

import logging
import random
from typing import Callable, Iterable, Optional, Set, Tuple

logger = logging.getLogger(__name__)

# Returns an integer in [0, n)
RandomIndex = Callable[[int], int]


class ShuffleBag:
    """
    Shuffle Bag

    No index is drawn twice until every index of the queue has been drawn.
    Indexes are positions in the queue, so the owner must report every
    structural edit (`add`, `remove_index`, `reset`).

    Example:
        bag = ShuffleBag()
        bag.reset(len(tracks))

        next_index = bag.take_next(current_index, len(tracks), refill=True)
    """

    def __init__(self, random_index: Optional[RandomIndex] = None):
        self._random_index: RandomIndex = random_index or random.randrange
        self._not_played: Set[int] = set()

    @property
    def indices(self) -> Tuple[int, ...]:
        """Indexes not played yet, ascending"""
        return tuple(sorted(self._not_played))

    def __len__(self) -> int:
        return len(self._not_played)

    def __contains__(self, index: int) -> bool:
        return index in self._not_played

    def reset(self, count: int) -> None:
        """Start a new cycle over indexes 0..count-1"""
        self._not_played = set(range(count))

    def clear(self) -> None:
        self._not_played.clear()

    def add(self, indices: Iterable[int]) -> None:
        """Make newly appended indexes eligible in the current cycle"""
        self._not_played.update(indices)

    def discard(self, index: int) -> None:
        self._not_played.discard(index)

    def remove_index(self, index: int) -> None:
        """
        Follow the removal of queue position `index`

        The index itself leaves the set and every greater index moves down by one.
        """
        self._not_played = {
            i - 1 if i > index else i
            for i in self._not_played
            if i != index
        }

    def take_next(self, current: int, count: int, refill: bool) -> Optional[int]:
        """
        Mark `current` as played and draw the next index

        Args:
            current: Index that has just been played
            count: Current queue length
            refill: Start a new cycle over all `count` indexes when this
                one is exhausted

        Returns:
            The drawn index, or None when the cycle is exhausted and
            `refill` is False
        """
        self._not_played.discard(current)

        if not self._not_played:
            if not refill:
                logger.debug("Shuffle cycle exhausted")
                return None
            logger.debug("Shuffle cycle exhausted, starting a new one")
            self.reset(count)

        if not self._not_played:
            return None

        candidates = sorted(self._not_played)
        return candidates[self._random_index(len(candidates))]
