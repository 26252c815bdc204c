"""tronwatch - HD wallet, transfers and transaction polling for TRON."""

from tronwatch.hdwallet import DerivationError, InvalidSeedError, KeyRecord, KeyStore
from tronwatch.scanner import (
    TRANSACTIONS_EVENT,
    NetworkQueryError,
    PollingEngine,
    TransactionEvent,
)
from tronwatch.signing import BroadcastError, BuildError, Receipt, SignError
from tronwatch.wallet import TronWallet

__version__ = "0.1.0"

__all__ = [
    "TronWallet",
    "KeyStore",
    "KeyRecord",
    "PollingEngine",
    "TransactionEvent",
    "Receipt",
    "TRANSACTIONS_EVENT",
    "InvalidSeedError",
    "DerivationError",
    "NetworkQueryError",
    "BuildError",
    "SignError",
    "BroadcastError",
]
