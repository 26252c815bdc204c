"""Transaction poller for watched TRON addresses."""

from tronwatch.scanner.base import (
    AccountBalance,
    ApiResponse,
    NetworkQueryError,
    PollerState,
    TransactionEvent,
    TransactionSet,
)
from tronwatch.scanner.events import TRANSACTIONS_EVENT, EventChannel
from tronwatch.scanner.poller import PollingEngine
from tronwatch.scanner.trongrid import TronGridClient
from tronwatch.scanner.watchset import WatchSet

__all__ = [
    "AccountBalance",
    "ApiResponse",
    "EventChannel",
    "NetworkQueryError",
    "PollerState",
    "PollingEngine",
    "TRANSACTIONS_EVENT",
    "TransactionEvent",
    "TransactionSet",
    "TronGridClient",
    "WatchSet",
]
