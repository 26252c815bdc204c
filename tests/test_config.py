"""Tests for settings and network selection."""

import pytest

from tests.conftest import TEST_MNEMONIC
from tronwatch.config import NETWORKS, Settings, get_network, get_settings


class TestSettings:
    """Defaults and environment overrides."""

    def test_defaults(self):
        settings = Settings(_env_file=None)

        assert settings.tron_network == "shasta"
        assert settings.poll_interval_seconds == 60.0
        assert settings.backdate_ms == 180_000
        assert settings.page_limit == 200
        assert settings.trc20_fee_limit == 40_000_000
        assert not settings.has_wallet

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("TRON_NETWORK", "main")
        monkeypatch.setenv("POLL_INTERVAL_SECONDS", "15")
        monkeypatch.setenv("BACKDATE_MINUTES", "1.5")
        monkeypatch.setenv("WALLET_SEED_PHRASE", TEST_MNEMONIC)

        settings = get_settings()

        assert settings.network_config().name == "main"
        assert settings.poll_interval_seconds == 15.0
        assert settings.backdate_ms == 90_000
        assert settings.has_wallet

    def test_safe_dict_redacts_secrets(self):
        settings = Settings(
            _env_file=None, trongrid_api_key="secret", wallet_seed_phrase=TEST_MNEMONIC
        )

        data = settings.get_safe_dict()

        assert data["trongrid_api_key"] == "***"
        assert data["wallet_configured"] is True
        assert TEST_MNEMONIC not in str(data)
        assert "secret" not in str(data)


class TestNetworks:
    """Endpoint tables."""

    def test_networks_have_distinct_endpoints(self):
        assert NETWORKS["main"].full_node == "https://api.trongrid.io"
        assert NETWORKS["shasta"].full_node == "https://api.shasta.trongrid.io"
        assert NETWORKS["main"].solidity_node == NETWORKS["main"].event_server

    def test_unknown_network(self):
        with pytest.raises(ValueError):
            get_network("testnet")
