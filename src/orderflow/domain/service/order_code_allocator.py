"""Domain service: sequential, human-readable order codes.

Codes come from one shared counter, incremented atomically.  Values below
``CODE_FLOOR`` are lifted to exactly the floor, which makes the sequence
jump the first time the counter is used; from then on it grows by one.
Allocation happens outside the order's unit of work, so an order that is
rolled back leaves a gap: a code may be skipped, never reused.
"""

from __future__ import annotations

import logging

from orderflow.domain.repository.sequence_counter import SequenceCounter

logger = logging.getLogger(__name__)

ORDER_COUNTER = "order-id"
# Codes below 30 were reserved by an earlier numbering scheme.
CODE_FLOOR = 30


class OrderCodeAllocator:

    def __init__(
        self,
        counter: SequenceCounter,
        name: str = ORDER_COUNTER,
        floor: int = CODE_FLOOR,
    ) -> None:
        self._counter = counter
        self._name = name
        self._floor = floor

    def next_code(self) -> str:
        value = self._counter.increment(self._name)
        if value < self._floor:
            logger.info(
                "Order counter at %d is below %d, moving it up", value, self._floor
            )
            value = self._counter.set(self._name, self._floor)
        return str(value)
