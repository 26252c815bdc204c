"""Set of addresses watched by the poller."""

import logging
import threading
from typing import Iterable, Iterator, Union

logger = logging.getLogger(__name__)


class WatchSet:
    """Grow-only set of addresses, compared by exact string.

    Iteration walks a snapshot, so adding an address while a cycle is
    running is safe and the new address is picked up on the next cycle.
    """

    def __init__(self, addresses: Iterable[str] = ()):
        # dict keeps insertion order
        self._addresses: dict[str, None] = {}
        self._lock = threading.Lock()
        self.add(addresses)

    def add(self, address: Union[str, Iterable[str]]) -> int:
        """Add one address or an iterable of addresses.

        Returns:
            Number of addresses that were not already watched
        """
        addresses = [address] if isinstance(address, str) else list(address)

        added = 0
        with self._lock:
            for addr in addresses:
                if addr not in self._addresses:
                    self._addresses[addr] = None
                    added += 1

        if added:
            logger.debug(f"Watching {added} new address(es), {len(self)} total")
        return added

    def snapshot(self) -> list[str]:
        """Current members, fixed for one poll cycle."""
        with self._lock:
            return list(self._addresses)

    def __contains__(self, address: object) -> bool:
        return address in self._addresses

    def __len__(self) -> int:
        return len(self._addresses)

    def __iter__(self) -> Iterator[str]:
        return iter(self.snapshot())

    def __repr__(self) -> str:
        return f"WatchSet(size={len(self)})"
