"""tronpy adapter.

Wraps the handful of tronpy calls the key store and signer need, so the
rest of the package never touches tronpy directly. All methods are
blocking; async callers run them in a worker thread.
"""

import logging
from typing import Any, Optional

from tronpy import Tron
from tronpy.keys import PrivateKey
from tronpy.providers import HTTPProvider

from tronwatch.config import NetworkConfig

logger = logging.getLogger(__name__)


class TronSDK:
    """Thin wrapper around a tronpy client for one network."""

    def __init__(
        self,
        network: NetworkConfig,
        api_key: Optional[str] = None,
        timeout: float = 30.0,
    ):
        """Initialize SDK adapter.

        Args:
            network: Endpoints to use
            api_key: Optional TronGrid API key for higher rate limits
            timeout: Per-request timeout for node calls
        """
        self.network = network
        self.api_key = api_key or None
        self.timeout = timeout
        self._client: Optional[Tron] = None

    @property
    def client(self) -> Tron:
        """tronpy client, created on first use."""
        if self._client is None:
            provider = HTTPProvider(
                self.network.full_node,
                timeout=self.timeout,
                api_key=self.api_key,
            )
            self._client = Tron(provider)
        return self._client

    @staticmethod
    def address_from_private_key(private_key_hex: str) -> str:
        """Convert a hex private key to a base58check T... address."""
        priv_key = PrivateKey(bytes.fromhex(private_key_hex))
        return priv_key.public_key.to_base58check_address()

    def build_native_transfer(self, to: str, amount: int, from_: str) -> Any:
        """Build an unsigned TRX transfer (amount in SUN)."""
        return self.client.trx.transfer(from_, to, amount).build()

    def build_contract_call(
        self,
        contract_address: str,
        signature: str,
        options: dict,
        args: list,
        owner: str,
    ) -> Any:
        """Build an unsigned smart contract call.

        Args:
            contract_address: Contract to trigger
            signature: Function signature, e.g. "transfer(address,uint256)"
            options: fee_limit (SUN) and call_value (SUN)
            args: Positional function arguments
            owner: Address paying for and sending the call
        """
        name = signature.split("(", 1)[0]
        contract = self.client.get_contract(contract_address)
        method = getattr(contract.functions, name)

        call_value = options.get("call_value", 0)
        if call_value:
            method = method.with_transfer(call_value)

        builder = method(*args).with_owner(owner)

        fee_limit = options.get("fee_limit")
        if fee_limit:
            builder = builder.fee_limit(fee_limit)

        return builder.build()

    @staticmethod
    def sign(transaction: Any, private_key_hex: str) -> Any:
        """Sign a built transaction."""
        return transaction.sign(PrivateKey(bytes.fromhex(private_key_hex)))

    @staticmethod
    def broadcast(signed_transaction: Any) -> dict:
        """Broadcast a signed transaction and return the node response."""
        return signed_transaction.broadcast()
