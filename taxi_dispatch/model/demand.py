"""Seeded passenger demand: periodic spawn checks with occasional bursts."""

import logging
from typing import List, TYPE_CHECKING

from .city import City
from .passenger import Passenger, spawn_passenger
from .prng import LCG

if TYPE_CHECKING:
    from ..config import DemandConfig

logger = logging.getLogger(__name__)


class DemandGenerator:
    """
    Host-side passenger source.

    Owns its own generator and id counter, so independent runs in one
    process never share ids or random draws.
    """

    def __init__(self, config: "DemandConfig", seed: int):
        self.config = config
        self.seed = seed
        self.rng = LCG(seed)
        self.next_id = 0
        self.burst_fired = False

    def _new_passenger(self, city: City, tick: int) -> Passenger:
        passenger = spawn_passenger(city, tick, self.rng, f"passenger-{self.next_id}")
        self.next_id += 1
        return passenger

    def spawn(self, city: City, tick: int) -> List[Passenger]:
        """Passengers arriving at this tick (possibly none)."""
        cfg = self.config
        if tick % cfg.ticks_per_spawn_check != 0:
            return []

        burst_roll = self.rng.next()
        burst_allowed = not (cfg.single_burst and self.burst_fired)
        if burst_allowed and burst_roll < cfg.burst_probability:
            self.burst_fired = True
            size = cfg.burst_min_size + self.rng.randint(
                cfg.burst_max_size - cfg.burst_min_size + 1)
            logger.info("Demand burst at tick %d: %d passengers", tick, size)
            return [self._new_passenger(city, tick) for _ in range(size)]

        if self.rng.next() < cfg.spawn_probability:
            return [self._new_passenger(city, tick)]
        return []

    def reset(self) -> None:
        self.rng.reset()
        self.next_id = 0
        self.burst_fired = False
