"""TRX and TRC20 transfers signed with HD-derived keys."""

import asyncio
import logging
from typing import Any

from tronwatch.hdwallet.base import Index
from tronwatch.hdwallet.keystore import KeyStore
from tronwatch.signing.base import BroadcastError, BuildError, Receipt, SignError
from tronwatch.signing.sdk import TronSDK

logger = logging.getLogger(__name__)

TRC20_TRANSFER = "transfer(address,uint256)"
DEFAULT_TRC20_FEE_LIMIT = 40_000_000  # 40 TRX max fee


class TransactionSigner:
    """Sends TRX and TRC20 tokens from derived accounts.

    Each call is a single attempt. Duplicate submissions are the caller's
    responsibility to avoid.
    """

    def __init__(
        self,
        key_store: KeyStore,
        sdk: TronSDK,
        trc20_fee_limit: int = DEFAULT_TRC20_FEE_LIMIT,
    ):
        self.key_store = key_store
        self.sdk = sdk
        self.trc20_fee_limit = trc20_fee_limit

    async def send_native(self, from_index: Index, amount: int, to_address: str) -> Receipt:
        """Send TRX.

        Args:
            from_index: HD index of the sender
            amount: Amount in SUN (1 TRX = 1,000,000 SUN)
            to_address: Destination address

        Returns:
            Receipt of the broadcast

        Raises:
            DerivationError: If the sender key cannot be derived
            BuildError, SignError, BroadcastError: On SDK failure
        """
        from_address = await self.key_store.get_address(from_index)

        try:
            transaction = await asyncio.to_thread(
                self.sdk.build_native_transfer, to_address, amount, from_address
            )
        except Exception as e:
            raise BuildError(f"Failed to build TRX transfer: {e}") from e

        logger.info(f"Sending {amount} SUN from {from_address} to {to_address}")
        return await self._sign_and_broadcast(from_index, transaction)

    async def send_token(
        self,
        from_index: Index,
        amount: int,
        to_address: str,
        contract_address: str,
    ) -> Receipt:
        """Send a TRC20 token.

        Args:
            from_index: HD index of the sender
            amount: Amount in the token's smallest unit
            to_address: Destination address
            contract_address: TRC20 contract address

        Returns:
            Receipt of the broadcast
        """
        from_address = await self.key_store.get_address(from_index)
        options = {"fee_limit": self.trc20_fee_limit, "call_value": 0}

        try:
            transaction = await asyncio.to_thread(
                self.sdk.build_contract_call,
                contract_address,
                TRC20_TRANSFER,
                options,
                [to_address, amount],
                from_address,
            )
        except Exception as e:
            raise BuildError(f"Failed to build TRC20 transfer: {e}") from e

        logger.info(
            f"Sending {amount} of {contract_address} from {from_address} to {to_address}"
        )
        return await self._sign_and_broadcast(from_index, transaction)

    # Chain-named aliases
    send_trx = send_native
    send_trc20 = send_token

    async def _sign_and_broadcast(self, from_index: Index, transaction: Any) -> Receipt:
        private_key_hex = await self.key_store.get_private_key(from_index)

        try:
            signed = self.sdk.sign(transaction, private_key_hex)
        except Exception as e:
            raise SignError(f"Failed to sign transaction: {e}") from e

        try:
            response = await asyncio.to_thread(self.sdk.broadcast, signed)
        except Exception as e:
            raise BroadcastError(f"Failed to broadcast transaction: {e}") from e

        receipt = Receipt.from_response(response)
        if not receipt.result:
            message = response.get("message", "Unknown error")
            raise BroadcastError(f"Broadcast rejected: {message}")

        logger.info(f"Broadcast {receipt.txid}")
        return receipt
