"""Pytest configuration and fixtures."""

import os
from typing import Union

import pytest

# Set test environment
os.environ["TRON_NETWORK"] = "shasta"
os.environ["TRONGRID_API_KEY"] = ""
os.environ.pop("WALLET_SEED_PHRASE", None)

from tronwatch.config import NETWORKS, Settings, get_settings
from tronwatch.hdwallet.keystore import KeyStore
from tronwatch.scanner.base import ApiResponse, NetworkQueryError
from tronwatch.signing.sdk import TronSDK

# Known derived addresses (funded on Shasta). DO NOT USE THESE KEYS LIVE.
TEST_MNEMONIC = (
    "season predict random cool daughter predict squeeze use mosquito smart around panic"
)
KNOWN_ADDRESSES = {
    100: "TUfzSqg7C5ED2EnaXTTocTxPwFwXRxnhsp",
    1000: "TSHjEK1QXeipenKk7TZT5Tqr1zpSa5Jce1",
}


class FakeTronGrid:
    """Scripted stand-in for TronGridClient.

    Responses are queued per (kind, address); an empty queue answers with
    a successful empty response. Queued exceptions are raised.
    """

    def __init__(self):
        self._queues: dict[tuple[str, str], list] = {}
        self.calls: list[tuple[str, str, object]] = []
        self.closed = False

    def queue(self, kind: str, address: str, *responses: Union[ApiResponse, Exception]):
        self._queues.setdefault((kind, address), []).extend(responses)

    def calls_for(self, kind: str, address: str) -> list:
        return [c for c in self.calls if c[0] == kind and c[1] == address]

    def _next(self, kind: str, address: str) -> ApiResponse:
        queue = self._queues.get((kind, address))
        item = queue.pop(0) if queue else ApiResponse(success=True, data=[])
        if isinstance(item, Exception):
            raise item
        return item

    async def get_transactions(self, address: str, min_timestamp: int) -> ApiResponse:
        self.calls.append(("native", address, min_timestamp))
        return self._next("native", address)

    async def get_trc20_transactions(self, address: str, min_timestamp: int) -> ApiResponse:
        self.calls.append(("token", address, min_timestamp))
        return self._next("token", address)

    async def get_account(self, address: str) -> ApiResponse:
        self.calls.append(("account", address, None))
        return self._next("account", address)

    async def close(self) -> None:
        self.closed = True


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Settings are cached; reset between tests."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, tron_network="shasta", poll_interval_seconds=0.01)


@pytest.fixture
def sdk() -> TronSDK:
    """Real adapter; only offline address conversion is used."""
    return TronSDK(NETWORKS["shasta"])


@pytest.fixture
def key_store(sdk) -> KeyStore:
    return KeyStore(TEST_MNEMONIC, sdk)


@pytest.fixture
def fake_grid() -> FakeTronGrid:
    return FakeTronGrid()


@pytest.fixture
def query_error() -> NetworkQueryError:
    return NetworkQueryError("TronGrid API error 503 for /accounts")
