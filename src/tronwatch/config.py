"""Application configuration using pydantic-settings.

Network endpoints are fixed per TRON network; everything else can be
overridden from the environment or a `.env` file.
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


@dataclass(frozen=True)
class NetworkConfig:
    """Endpoints for one TRON network."""

    name: str
    full_node: str
    solidity_node: str
    event_server: str

    @property
    def api_base(self) -> str:
        """Base URL of the TronGrid v1 indexing API."""
        return f"{self.event_server}/v1"


TRONGRID_MAINNET = "https://api.trongrid.io"
TRONGRID_TESTNET = "https://api.shasta.trongrid.io"  # Shasta testnet

NETWORKS: dict[str, NetworkConfig] = {
    "main": NetworkConfig(
        name="main",
        full_node=TRONGRID_MAINNET,
        solidity_node=TRONGRID_MAINNET,
        event_server=TRONGRID_MAINNET,
    ),
    "shasta": NetworkConfig(
        name="shasta",
        full_node=TRONGRID_TESTNET,
        solidity_node=TRONGRID_TESTNET,
        event_server=TRONGRID_TESTNET,
    ),
}

DEFAULT_NETWORK = "shasta"


def get_network(name: str) -> NetworkConfig:
    """Look up a network by name.

    Raises:
        ValueError: If the network is not known
    """
    try:
        return NETWORKS[name]
    except KeyError:
        raise ValueError(
            f"Unknown TRON network '{name}'. Expected one of {sorted(NETWORKS)}"
        ) from None


class Settings(BaseSettings):
    """Settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ======================
    # HD Wallet
    # ======================
    wallet_seed_phrase: Optional[str] = Field(
        default=None, description="12 word seed phrase for HD derivation"
    )

    # ======================
    # Network
    # ======================
    tron_network: str = Field(default=DEFAULT_NETWORK, description="main or shasta")
    trongrid_api_key: str = Field(default="", description="TronGrid API key")
    request_timeout: float = Field(
        default=30.0, description="Per-request timeout in seconds"
    )

    # ======================
    # Polling
    # ======================
    poll_interval_seconds: float = Field(
        default=60.0, description="Delay between the end of one cycle and the next"
    )
    backdate_minutes: float = Field(
        default=3.0, description="Trailing window re-queried every cycle"
    )
    page_limit: int = Field(default=200, description="Transactions per query")

    # ======================
    # Signing
    # ======================
    trc20_fee_limit: int = Field(
        default=40_000_000, description="Fee ceiling for TRC20 transfers (SUN)"
    )

    log_level: str = Field(default="INFO", description="Logging level for runners")

    @property
    def has_wallet(self) -> bool:
        """Check if a 12 word seed phrase is configured."""
        return bool(
            self.wallet_seed_phrase and len(self.wallet_seed_phrase.split(" ")) == 12
        )

    @property
    def backdate_ms(self) -> int:
        """Backdating window in milliseconds."""
        return int(self.backdate_minutes * 60 * 1000)

    def network_config(self, name: Optional[str] = None) -> NetworkConfig:
        """Get endpoints for `name`, or for the configured network."""
        return get_network(name or self.tron_network)

    def get_safe_dict(self) -> dict:
        """Return settings dict with secrets redacted."""
        network = self.network_config()
        return {
            "network": network.name,
            "full_node": network.full_node,
            "api_base": network.api_base,
            "trongrid_api_key": "***" if self.trongrid_api_key else "(not set)",
            "wallet_configured": self.has_wallet,
            "polling": {
                "interval_seconds": self.poll_interval_seconds,
                "backdate_minutes": self.backdate_minutes,
                "page_limit": self.page_limit,
            },
            "request_timeout": self.request_timeout,
            "trc20_fee_limit": self.trc20_fee_limit,
        }


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
