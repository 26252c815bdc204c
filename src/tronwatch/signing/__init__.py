"""Transaction signing and broadcast."""

from tronwatch.signing.base import (
    BroadcastError,
    BuildError,
    Receipt,
    SignError,
    SignerError,
)
from tronwatch.signing.sdk import TronSDK
from tronwatch.signing.signer import TransactionSigner

__all__ = [
    "TransactionSigner",
    "TronSDK",
    "Receipt",
    "SignerError",
    "BuildError",
    "SignError",
    "BroadcastError",
]
