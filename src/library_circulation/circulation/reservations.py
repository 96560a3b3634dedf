"""
Reservation queues for the library circulation desk.

Each item gets its own FIFO of waiting patron IDs, created the first time
someone reserves it and dropped again once it empties. A queue holds at most
``capacity`` patrons and never the same patron twice. When an item comes
back, the desk pops the head of its queue and tells that patron the item is
free; the notification is advisory and does not reserve a loan.
"""

import logging

from ..exceptions import DuplicateReservationError, ReservationQueueFullError
from ..models.item import CatalogItem
from ..models.patron import Patron

logger = logging.getLogger(__name__)

DEFAULT_CAPACITY = 10


class ReservationQueue:
    """Per-item bounded FIFO of patrons waiting for an item."""

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError("Reservation capacity must be at least 1")
        self.capacity = capacity
        self._queues: dict[int, list[int]] = {}

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._queues

    def waiting(self, item_id: int) -> list[int]:
        """Patron IDs waiting for an item, head first."""
        return list(self._queues.get(item_id, []))

    def position(self, item_id: int, patron_id: int) -> int | None:
        """1-based position of a patron in an item's queue, or None."""
        queue = self._queues.get(item_id, [])
        if patron_id not in queue:
            return None
        return queue.index(patron_id) + 1

    def reserve(self, item: CatalogItem, patron: Patron) -> int:
        """
        Add a patron to the tail of an item's queue.

        Returns:
            The patron's 1-based position in the queue

        Raises:
            ReservationQueueFullError: If the queue is at capacity
            DuplicateReservationError: If the patron is already waiting
        """
        queue = self._queues.get(item.id, [])

        if len(queue) >= self.capacity:
            logger.info("Reservation refused - queue for item %s is full", item.id)
            raise ReservationQueueFullError(
                f"Reservation queue for item {item.id} is full ({self.capacity} patrons)"
            )

        if patron.id in queue:
            logger.info("Reservation refused - patron %s already waiting for item %s",
                        patron.id, item.id)
            raise DuplicateReservationError(
                f"Patron {patron.id} has already reserved item {item.id}"
            )

        queue.append(patron.id)
        self._queues[item.id] = queue

        logger.info("Patron %s reserved item %s (position %d)", patron.id, item.id, len(queue))
        return len(queue)

    def notify_next(self, item: CatalogItem) -> int | None:
        """
        Pop the patron at the head of an item's queue.

        Returns:
            The patron ID to notify, or None if nobody is waiting
        """
        queue = self._queues.get(item.id)
        if not queue:
            return None

        patron_id = queue.pop(0)
        if not queue:
            del self._queues[item.id]
        logger.info("Notifying patron %s that item %s is available", patron_id, item.id)
        return patron_id

    def cancel(self, item: CatalogItem, patron: Patron) -> None:
        """Remove a patron from an item's queue. Missing entries are ignored."""
        queue = self._queues.get(item.id)
        if not queue:
            return

        remaining = [patron_id for patron_id in queue if patron_id != patron.id]
        if len(remaining) != len(queue):
            logger.info("Patron %s cancelled reservation for item %s", patron.id, item.id)
        if remaining:
            queue[:] = remaining
        else:
            del self._queues[item.id]
