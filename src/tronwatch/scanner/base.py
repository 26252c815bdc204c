"""Base types for the transaction poller.

The poller watches TRON addresses through the TronGrid indexing API and
emits one `transactions` event per address per cycle when new confirmed
activity shows up.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

# Raw TronGrid transaction objects
NativeTx = dict[str, Any]
TokenTx = dict[str, Any]


class NetworkQueryError(Exception):
    """Raised when an indexing API call fails (transport, status or body)."""

    pass


class PollerState(str, Enum):
    """Polling engine state."""
    STOPPED = "stopped"
    RUNNING = "running"


@dataclass
class ApiResponse:
    """Parsed `{success, data}` envelope returned by TronGrid."""

    success: bool
    data: list = field(default_factory=list)

    @property
    def has_data(self) -> bool:
        """Successful and non-empty."""
        return self.success and len(self.data) > 0

    @classmethod
    def from_json(cls, body: Any) -> "ApiResponse":
        if not isinstance(body, dict):
            return cls(success=False)

        data = body.get("data")
        if not isinstance(data, list):
            data = []

        return cls(success=bool(body.get("success", False)), data=data)


@dataclass
class AccountBalance:
    """Balance snapshot of an account."""

    trx: int  # SUN
    trc20: list = field(default_factory=list)

    @classmethod
    def from_response(cls, response: ApiResponse) -> Optional["AccountBalance"]:
        """Build from an account response, or None if it has no data.

        Raises:
            NetworkQueryError: If the account entry is not an object
        """
        if not response.has_data:
            return None

        account = response.data[0]
        if not isinstance(account, dict):
            raise NetworkQueryError(f"Malformed account entry: {account!r}")

        return cls(
            trx=account.get("balance", 0),
            trc20=account.get("trc20", []),
        )


@dataclass
class TransactionSet:
    """Transactions found for one address in one cycle."""

    native: list[NativeTx] = field(default_factory=list)
    token: list[TokenTx] = field(default_factory=list)

    @property
    def txids(self) -> list[str]:
        """Unique identifiers, for de-duplication by consumers."""
        ids = [tx.get("txID", "") for tx in self.native]
        ids.extend(tx.get("transaction_id", "") for tx in self.token)
        return [txid for txid in ids if txid]


@dataclass
class TransactionEvent:
    """Payload of the `transactions` event."""

    address: str
    transactions: TransactionSet
    balance: Optional[AccountBalance] = None
