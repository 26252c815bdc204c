"""TronGrid v1 client for account transactions and balances.

API Docs: https://developers.tron.network/reference/background
"""

import logging
from typing import Optional

import httpx

from tronwatch.config import NetworkConfig
from tronwatch.scanner.base import ApiResponse, NetworkQueryError

logger = logging.getLogger(__name__)

DEFAULT_PAGE_LIMIT = 200


class TronGridClient:
    """Confirmed-only queries against the TronGrid indexing API."""

    def __init__(
        self,
        network: NetworkConfig,
        api_key: Optional[str] = None,
        timeout: float = 30.0,
        limit: int = DEFAULT_PAGE_LIMIT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize TronGrid client.

        Args:
            network: Network whose event server is queried
            api_key: Optional TronGrid API key for higher rate limits
            timeout: Per-request timeout in seconds
            limit: Page size for transaction queries
            transport: Custom httpx transport (tests)
        """
        self.network = network
        self.base_url = network.api_base
        self.limit = limit

        headers = {"Accept": "application/json"}
        if api_key:
            headers["TRON-PRO-API-KEY"] = api_key

        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    async def get_transactions(self, address: str, min_timestamp: int) -> ApiResponse:
        """Get confirmed TRX transactions since `min_timestamp` (ms)."""
        return await self._get(
            f"/accounts/{address}/transactions",
            self._history_params(min_timestamp),
        )

    async def get_trc20_transactions(self, address: str, min_timestamp: int) -> ApiResponse:
        """Get confirmed TRC20 transfers since `min_timestamp` (ms)."""
        return await self._get(
            f"/accounts/{address}/transactions/trc20",
            self._history_params(min_timestamp),
        )

    async def get_account(self, address: str) -> ApiResponse:
        """Get account info (balance and TRC20 holdings)."""
        return await self._get(f"/accounts/{address}/", {"only_confirmed": "true"})

    def _history_params(self, min_timestamp: int) -> dict:
        return {
            "only_confirmed": "true",
            "limit": self.limit,
            "min_timestamp": int(min_timestamp),
        }

    async def _get(self, path: str, params: dict) -> ApiResponse:
        try:
            response = await self._client.get(path, params=params)
        except httpx.HTTPError as e:
            raise NetworkQueryError(f"TronGrid request {path} failed: {e!r}") from e

        if not response.is_success:
            raise NetworkQueryError(
                f"TronGrid API error {response.status_code} for {path}"
            )

        try:
            body = response.json()
        except ValueError as e:
            raise NetworkQueryError(f"TronGrid returned invalid JSON for {path}") from e

        result = ApiResponse.from_json(body)
        if not result.success:
            logger.debug(f"TronGrid unsuccessful response for {path}")
        return result

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "TronGridClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
        return False
