"""TRON helper combining HD keys, transfers and the transaction poller.

Usage:
    async with TronWallet(seed_phrase, network="shasta") as tron:
        tron.on("transactions", handle_event)
        address = await tron.get_hd_address(100)
        tron.start_polling(timestamp_ms)
"""

import logging
from typing import Iterable, Optional, Union

from tronwatch.config import Settings, get_network, get_settings
from tronwatch.hdwallet.base import Index
from tronwatch.hdwallet.keystore import KeyStore
from tronwatch.scanner.events import EventChannel, Handler
from tronwatch.scanner.poller import PollingEngine
from tronwatch.scanner.trongrid import TronGridClient
from tronwatch.scanner.watchset import WatchSet
from tronwatch.signing.base import Receipt
from tronwatch.signing.sdk import TronSDK
from tronwatch.signing.signer import TransactionSigner

logger = logging.getLogger(__name__)


class TronWallet:
    """One seed phrase, one network.

    Addresses derived through `get_hd_address` are watched automatically;
    other addresses can be added with `add_wallet`.
    """

    def __init__(
        self,
        mnemonic: str,
        network: Optional[str] = None,
        settings: Optional[Settings] = None,
        client: Optional[TronGridClient] = None,
        sdk: Optional[TronSDK] = None,
    ):
        """Initialize the helper.

        Args:
            mnemonic: 12 word seed phrase
            network: "main" or "shasta" (defaults to the configured network)
            settings: Settings override
            client: TronGrid client override
            sdk: SDK adapter override

        Raises:
            InvalidSeedError: If the phrase is not 12 words long
            ValueError: If the network is unknown
        """
        self.settings = settings or get_settings()
        self.network = get_network(network or self.settings.tron_network)
        api_key = self.settings.trongrid_api_key or None

        self.sdk = sdk or TronSDK(
            self.network, api_key=api_key, timeout=self.settings.request_timeout
        )
        self.key_manager = KeyStore(mnemonic, self.sdk)
        self.signer = TransactionSigner(
            self.key_manager, self.sdk, trc20_fee_limit=self.settings.trc20_fee_limit
        )

        self.client = client or TronGridClient(
            self.network,
            api_key=api_key,
            timeout=self.settings.request_timeout,
            limit=self.settings.page_limit,
        )
        self.wallets = WatchSet()
        self.events = EventChannel()
        self.poller = PollingEngine(
            self.client,
            self.wallets,
            self.events,
            interval_seconds=self.settings.poll_interval_seconds,
            backdate_ms=self.settings.backdate_ms,
        )

    async def ready(self) -> None:
        """Wait for the key tree to be built."""
        await self.key_manager.initialize()

    async def get_hd_address(self, index: Index) -> str:
        """Derive the address for `index` and start watching it."""
        address = await self.key_manager.get_address(index)
        self.wallets.add(address)
        return address

    def add_wallet(self, wallet: Union[str, Iterable[str]]) -> int:
        """Watch one or more addresses."""
        return self.wallets.add(wallet)

    def on(self, event: str, handler: Handler) -> None:
        self.events.subscribe(event, handler)

    def off(self, event: str, handler: Handler) -> bool:
        return self.events.unsubscribe(event, handler)

    def start_polling(self, timestamp: int) -> None:
        """Start polling for transactions newer than `timestamp` (ms)."""
        self.poller.start(timestamp)

    def stop_polling(self) -> None:
        """Gracefully stop the poller."""
        self.poller.stop()

    async def send_trx(self, from_index: Index, amount: int, to: str) -> Receipt:
        """Send `amount` SUN from a derived account."""
        return await self.signer.send_native(from_index, amount, to)

    async def send_trc20(
        self, from_index: Index, amount: int, to: str, contract: str
    ) -> Receipt:
        """Send a TRC20 token from a derived account."""
        return await self.signer.send_token(from_index, amount, to, contract)

    async def close(self) -> None:
        """Stop polling and release the HTTP client."""
        self.poller.stop()
        await self.poller.wait_stopped()
        await self.client.close()

    async def __aenter__(self) -> "TronWallet":
        await self.ready()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
        return False
