"""HD Wallet module for deterministic TRON key derivation."""

from tronwatch.hdwallet.base import (
    DerivationError,
    InvalidSeedError,
    KeyRecord,
    derivation_path,
    normalize_index,
)
from tronwatch.hdwallet.keystore import KeyStore

__all__ = [
    "KeyStore",
    "KeyRecord",
    "InvalidSeedError",
    "DerivationError",
    "derivation_path",
    "normalize_index",
]
