"""Base types for transaction signing.

Signing flow:
1. Resolve the sender index to an address
2. Build unsigned transaction through the SDK
3. Sign with the index's private key
4. Broadcast signed transaction

Each step has its own error type so callers can tell where a send failed.
Nothing is retried.
"""

from dataclasses import dataclass, field


@dataclass
class Receipt:
    """Result of a broadcast.

    Attributes:
        result: Whether the node accepted the transaction
        txid: Transaction ID
        raw: Full response returned by the SDK
    """
    result: bool
    txid: str
    raw: dict = field(default_factory=dict)

    @classmethod
    def from_response(cls, response: dict) -> "Receipt":
        return cls(
            result=bool(response.get("result", False)),
            txid=response.get("txid", ""),
            raw=dict(response),
        )


class SignerError(Exception):
    """Base exception for send failures."""
    pass


class BuildError(SignerError):
    """Exception raised when the SDK cannot build the transaction."""
    pass


class SignError(SignerError):
    """Exception raised when signing fails."""
    pass


class BroadcastError(SignerError):
    """Exception raised when broadcast fails or is rejected."""
    pass
