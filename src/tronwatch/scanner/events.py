"""Minimal publish/subscribe channel between the poller and its consumers."""

import inspect
import logging
from collections import defaultdict
from typing import Any, Callable

logger = logging.getLogger(__name__)

TRANSACTIONS_EVENT = "transactions"

Handler = Callable[[Any], Any]


class EventChannel:
    """Named events delivered to subscribers in subscription order.

    Handlers may be plain functions or coroutine functions; both complete
    before `emit` returns. A failing handler is logged and skipped.
    """

    def __init__(self):
        self._handlers: dict[str, list[Handler]] = defaultdict(list)

    def subscribe(self, event: str, handler: Handler) -> None:
        self._handlers[event].append(handler)

    def unsubscribe(self, event: str, handler: Handler) -> bool:
        """Remove a handler. Returns False if it was not subscribed."""
        handlers = self._handlers.get(event, [])
        if handler in handlers:
            handlers.remove(handler)
            return True
        return False

    def handler_count(self, event: str) -> int:
        return len(self._handlers.get(event, []))

    async def emit(self, event: str, payload: Any) -> int:
        """Deliver `payload` to every handler of `event`.

        Returns:
            Number of handlers that completed without error
        """
        delivered = 0
        for handler in list(self._handlers.get(event, [])):
            try:
                result = handler(payload)
                if inspect.isawaitable(result):
                    await result
                delivered += 1
            except Exception as e:
                logger.error(f"Event handler error for '{event}': {e}")
        return delivered
