"""Polling engine for watched TRON addresses.

Each cycle walks a snapshot of the watch set and, per address, asks
TronGrid for confirmed TRX and TRC20 transactions newer than the cursor.
When something new shows up the account balance is fetched and a
`transactions` event is emitted.

The cursor is not a high-water mark. At the end of every cycle it is
reset to the cycle's start time minus a backdating window, so the
trailing window is queried again on the next cycle to cover indexing
lag. Consumers may see the same transaction twice and should de-duplicate
on its txID.

Cycles run back to back in one asyncio task, separated by a fixed delay
counted from the end of the previous cycle, so a slow cycle delays the
next one instead of overlapping it.
"""

import asyncio
import logging
import time
from typing import Callable, Optional

from tronwatch.scanner.base import (
    AccountBalance,
    NetworkQueryError,
    PollerState,
    TransactionEvent,
    TransactionSet,
)
from tronwatch.scanner.events import TRANSACTIONS_EVENT, EventChannel
from tronwatch.scanner.trongrid import TronGridClient
from tronwatch.scanner.watchset import WatchSet

logger = logging.getLogger(__name__)

# How long to wait before running the next cycle
DEFAULT_INTERVAL_SECONDS = 60.0

# Confirmation typically takes 19 blocks (~90 seconds), plus a buffer
DEFAULT_BACKDATE_MS = 3 * 60 * 1000


class PollingEngine:
    """Recurring scan of a watch set with a rolling time cursor."""

    def __init__(
        self,
        client: TronGridClient,
        watch_set: WatchSet,
        events: EventChannel,
        interval_seconds: float = DEFAULT_INTERVAL_SECONDS,
        backdate_ms: int = DEFAULT_BACKDATE_MS,
        clock: Callable[[], float] = time.time,
    ):
        """Initialize polling engine.

        Args:
            client: TronGrid client
            watch_set: Addresses to scan
            events: Channel receiving `transactions` events
            interval_seconds: Delay between the end of a cycle and the next
            backdate_ms: Trailing window subtracted from now for the next cursor
            clock: Returns current time in seconds
        """
        self.client = client
        self.watch_set = watch_set
        self.events = events
        self.interval_seconds = interval_seconds
        self.backdate_ms = backdate_ms
        self._clock = clock

        self._state = PollerState.STOPPED
        self._cursor: Optional[int] = None
        self._stop_event: Optional[asyncio.Event] = None
        self._task: Optional[asyncio.Task] = None
        self.cycles_completed = 0

    @property
    def state(self) -> PollerState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state is PollerState.RUNNING

    @property
    def cursor(self) -> Optional[int]:
        """Lower bound (ms) used by the next query."""
        return self._cursor

    def start(self, initial_cursor: int) -> None:
        """Start polling from `initial_cursor` (ms since epoch).

        Must be called from a running event loop. The first cycle starts
        immediately.

        Raises:
            RuntimeError: If already running
        """
        if self._state is PollerState.RUNNING:
            raise RuntimeError("Polling already running")

        # Fails before any state change when there is no loop
        asyncio.get_running_loop()

        self._cursor = int(initial_cursor)
        self._state = PollerState.RUNNING
        self._stop_event = asyncio.Event()
        self._task = asyncio.create_task(self._run(self._stop_event, self._task))

        logger.info(
            f"Starting TRON poller for {len(self.watch_set)} address(es) "
            f"(interval: {self.interval_seconds}s, cursor: {self._cursor})"
        )

    def stop(self) -> None:
        """Stop polling.

        The address in flight is finished, remaining addresses of the cycle
        are skipped and no new cycle is scheduled.
        """
        if self._state is PollerState.STOPPED:
            return

        self._state = PollerState.STOPPED
        if self._stop_event is not None:
            self._stop_event.set()
        logger.info("Stopping TRON poller")

    async def wait_stopped(self) -> None:
        """Wait for the polling task to finish after `stop()`."""
        if self._task is not None:
            await self._task

    async def _run(
        self, stop_event: asyncio.Event, previous: Optional[asyncio.Task]
    ) -> None:
        # A stopped loop may still be finishing its address
        if previous is not None and not previous.done():
            await previous

        while not stop_event.is_set():
            try:
                await self._cycle(stop_event)
            except Exception:
                logger.exception("TRON poll cycle error")

            if stop_event.is_set():
                break

            try:
                await asyncio.wait_for(stop_event.wait(), timeout=self.interval_seconds)
            except asyncio.TimeoutError:
                pass

    async def run_cycle(self, cursor: Optional[int] = None) -> int:
        """Run a single cycle while the engine is stopped.

        Args:
            cursor: Replaces the current cursor before scanning

        Returns:
            Number of events emitted

        Raises:
            RuntimeError: If the polling loop is running
        """
        if self._state is PollerState.RUNNING:
            raise RuntimeError("Polling already running")

        if cursor is not None:
            self._cursor = int(cursor)
        return await self._cycle(None)

    async def _cycle(self, stop_event: Optional[asyncio.Event]) -> int:
        # Taken before scanning so the time spent in this cycle is re-queried
        next_cursor = self._now_ms() - self.backdate_ms
        cursor = self._cursor if self._cursor is not None else next_cursor

        emitted = 0
        for address in self.watch_set.snapshot():
            if stop_event is not None and stop_event.is_set():
                logger.debug(f"Poller stopped, skipping {address}")
                continue

            try:
                event = await self._process_address(address, cursor)
            except Exception:
                logger.exception(f"Error processing {address}")
                continue

            if event is None:
                continue

            logger.info(
                f"New activity for {address}: {len(event.transactions.native)} TRX, "
                f"{len(event.transactions.token)} TRC20"
            )
            await self.events.emit(TRANSACTIONS_EVENT, event)
            emitted += 1

        # A restarted engine owns the cursor now
        if stop_event is None or stop_event is self._stop_event:
            self._cursor = next_cursor
        self.cycles_completed += 1

        return emitted

    async def _process_address(
        self, address: str, cursor: int
    ) -> Optional[TransactionEvent]:
        try:
            native = await self.client.get_transactions(address, cursor)
        except NetworkQueryError as e:
            logger.error(f"TRX transaction query failed for {address}: {e}")
            return None

        try:
            token = await self.client.get_trc20_transactions(address, cursor)
        except NetworkQueryError as e:
            logger.error(f"TRC20 transaction query failed for {address}: {e}")
            return None

        if not (native.has_data or token.has_data):
            logger.debug(f"No new transactions for {address}")
            return None

        try:
            account = await self.client.get_account(address)
            balance = AccountBalance.from_response(account)
        except NetworkQueryError as e:
            logger.error(f"Balance query failed for {address}: {e}")
            return None

        return TransactionEvent(
            address=address,
            transactions=TransactionSet(
                native=native.data if native.success else [],
                token=token.data if token.success else [],
            ),
            balance=balance,
        )

    def _now_ms(self) -> int:
        return int(self._clock() * 1000)
