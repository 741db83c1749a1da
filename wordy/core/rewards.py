"""Sources of extra hints offered once the hint budget runs out."""

from __future__ import annotations

import logging
from typing import Callable

logger = logging.getLogger(__name__)

DEFAULT_REWARD_HINTS = 1

GrantCallback = Callable[[int], None]


class RewardSource:
    """Hands out rewarded hints, e.g. after the player watches an ad.

    ``request`` returns False when no reward is ready. Otherwise the grant is
    reported through ``on_granted``, possibly later than the call itself.
    """

    def is_ready(self) -> bool:
        return True

    def request(self, on_granted: GrantCallback) -> bool:
        raise NotImplementedError


class FixedReward(RewardSource):
    """Grants a fixed number of hints straight away on every request."""

    def __init__(self, amount: int = DEFAULT_REWARD_HINTS) -> None:
        if amount < 1:
            raise ValueError(f"reward amount must be positive, got {amount}")
        self._amount = amount

    @property
    def amount(self) -> int:
        return self._amount

    def request(self, on_granted: GrantCallback) -> bool:
        logger.info("Granting %d rewarded hint(s)", self._amount)
        on_granted(self._amount)
        return True
