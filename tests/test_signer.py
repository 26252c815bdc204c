"""Tests for TRX/TRC20 signing and broadcast."""

from unittest.mock import MagicMock

import pytest

from tests.conftest import KNOWN_ADDRESSES
from tronwatch.hdwallet import DerivationError
from tronwatch.signing import (
    BroadcastError,
    BuildError,
    Receipt,
    SignError,
    SignerError,
    TransactionSigner,
)
from tronwatch.signing.signer import TRC20_TRANSFER

DESTINATION = KNOWN_ADDRESSES[1000]
USDT_TESTNET = "TG3XXyExBkPp9nzdajDZsozEu4BkaSJozs"


@pytest.fixture
def mock_sdk():
    sdk = MagicMock()
    sdk.build_native_transfer.return_value = "unsigned-trx"
    sdk.build_contract_call.return_value = "unsigned-trc20"
    sdk.sign.return_value = "signed"
    sdk.broadcast.return_value = {"result": True, "txid": "abc123"}
    return sdk


@pytest.fixture
def signer(key_store, mock_sdk):
    return TransactionSigner(key_store, mock_sdk)


class TestSendNative:
    """TRX transfers."""

    @pytest.mark.asyncio
    async def test_send_native(self, signer, key_store, mock_sdk):
        receipt = await signer.send_native(100, 10, DESTINATION)

        assert receipt == Receipt(
            result=True, txid="abc123", raw={"result": True, "txid": "abc123"}
        )
        mock_sdk.build_native_transfer.assert_called_once_with(
            DESTINATION, 10, KNOWN_ADDRESSES[100]
        )
        private_key = await key_store.get_private_key(100)
        mock_sdk.sign.assert_called_once_with("unsigned-trx", private_key)
        mock_sdk.broadcast.assert_called_once_with("signed")

    @pytest.mark.asyncio
    async def test_trx_alias(self, signer):
        receipt = await signer.send_trx("100", 10, DESTINATION)
        assert receipt.txid == "abc123"

    @pytest.mark.asyncio
    async def test_build_failure(self, signer, mock_sdk):
        mock_sdk.build_native_transfer.side_effect = RuntimeError("account not found")

        with pytest.raises(BuildError) as exc_info:
            await signer.send_native(100, 10, DESTINATION)

        assert isinstance(exc_info.value.__cause__, RuntimeError)
        mock_sdk.sign.assert_not_called()
        mock_sdk.broadcast.assert_not_called()

    @pytest.mark.asyncio
    async def test_sign_failure(self, signer, mock_sdk):
        mock_sdk.sign.side_effect = ValueError("bad key")

        with pytest.raises(SignError):
            await signer.send_native(100, 10, DESTINATION)

        mock_sdk.broadcast.assert_not_called()

    @pytest.mark.asyncio
    async def test_broadcast_failure(self, signer, mock_sdk):
        mock_sdk.broadcast.side_effect = ConnectionError("node down")

        with pytest.raises(BroadcastError):
            await signer.send_native(100, 10, DESTINATION)

    @pytest.mark.asyncio
    async def test_broadcast_rejected(self, signer, mock_sdk):
        mock_sdk.broadcast.return_value = {"result": False, "message": "BANDWITH_ERROR"}

        with pytest.raises(BroadcastError, match="BANDWITH_ERROR"):
            await signer.send_native(100, 10, DESTINATION)

    @pytest.mark.asyncio
    async def test_no_retry(self, signer, mock_sdk):
        mock_sdk.broadcast.side_effect = ConnectionError("node down")

        with pytest.raises(SignerError):
            await signer.send_native(100, 10, DESTINATION)

        assert mock_sdk.broadcast.call_count == 1

    @pytest.mark.asyncio
    async def test_invalid_index(self, signer, mock_sdk):
        with pytest.raises(DerivationError):
            await signer.send_native("bogus", 10, DESTINATION)

        mock_sdk.build_native_transfer.assert_not_called()


class TestSendToken:
    """TRC20 transfers."""

    @pytest.mark.asyncio
    async def test_send_token(self, signer, mock_sdk):
        receipt = await signer.send_token(100, 5_000_000, DESTINATION, USDT_TESTNET)

        assert receipt.result is True
        mock_sdk.build_contract_call.assert_called_once_with(
            USDT_TESTNET,
            TRC20_TRANSFER,
            {"fee_limit": 40_000_000, "call_value": 0},
            [DESTINATION, 5_000_000],
            KNOWN_ADDRESSES[100],
        )
        mock_sdk.broadcast.assert_called_once_with("signed")

    @pytest.mark.asyncio
    async def test_custom_fee_limit(self, key_store, mock_sdk):
        signer = TransactionSigner(key_store, mock_sdk, trc20_fee_limit=15_000_000)

        await signer.send_trc20(100, 1, DESTINATION, USDT_TESTNET)

        options = mock_sdk.build_contract_call.call_args.args[2]
        assert options["fee_limit"] == 15_000_000

    @pytest.mark.asyncio
    async def test_build_failure(self, signer, mock_sdk):
        mock_sdk.build_contract_call.side_effect = ValueError("contract not found")

        with pytest.raises(BuildError):
            await signer.send_token(100, 1, DESTINATION, USDT_TESTNET)


class TestReceipt:
    """Receipt parsing."""

    def test_from_response_defaults(self):
        receipt = Receipt.from_response({})

        assert receipt.result is False
        assert receipt.txid == ""
        assert receipt.raw == {}
