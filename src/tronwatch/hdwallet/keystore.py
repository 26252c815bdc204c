"""In-memory HD key store for TRON.

Derivation path: m/44'/195'/{index}'/0/0
Address format: T... (base58check, converted by the SDK)

The seed is expanded once (BIP39 PBKDF2, off the event loop) and every
derivation awaits that initialization, so no caller can derive from an
unset key tree. Derived pairs are memoized per index for the lifetime of
the store.
"""

import asyncio
import logging
from typing import Optional, Protocol

from bip_utils import Bip32KeyError, Bip32PathError, Bip32Secp256k1
from mnemonic import Mnemonic

from tronwatch.hdwallet.base import (
    DerivationError,
    Index,
    KeyRecord,
    derivation_path,
    normalize_index,
    validate_seed_phrase,
)

logger = logging.getLogger(__name__)


class AddressConverter(Protocol):
    """Anything that can turn a private key into a TRON address."""

    def address_from_private_key(self, private_key_hex: str) -> str: ...


class KeyStore:
    """Seed-derived key pairs, cached by index.

    Example:
        store = KeyStore(phrase, sdk)
        await store.initialize()
        addr = await store.get_address(100)
    """

    def __init__(self, mnemonic: str, sdk: AddressConverter):
        """Validate the phrase and prepare the store.

        Args:
            mnemonic: 12 word seed phrase
            sdk: Address converter (see TronSDK)

        Raises:
            InvalidSeedError: If the phrase is not 12 words long
        """
        validate_seed_phrase(mnemonic)

        self._mnemonic = mnemonic
        self._sdk = sdk
        self._master: Optional[Bip32Secp256k1] = None
        self._keys: dict[str, KeyRecord] = {}
        self._init_lock = asyncio.Lock()
        self._cache_lock = asyncio.Lock()

    @property
    def is_ready(self) -> bool:
        """True once the key tree has been built."""
        return self._master is not None

    async def initialize(self) -> None:
        """Build the master node from the seed phrase (idempotent)."""
        if self._master is not None:
            return

        async with self._init_lock:
            if self._master is not None:
                return

            seed = await asyncio.to_thread(Mnemonic.to_seed, self._mnemonic)
            self._master = Bip32Secp256k1.FromSeed(seed)
            logger.info("HD key tree initialized")

    async def derive_or_get(self, index: Index) -> KeyRecord:
        """Return the cached key pair for `index`, deriving it on first use.

        Raises:
            DerivationError: If the index is invalid or derivation yields no key
        """
        key = normalize_index(index)

        record = self._keys.get(key)
        if record is not None:
            return record

        await self.initialize()

        async with self._cache_lock:
            record = self._keys.get(key)
            if record is None:
                record = self._derive(key)
                self._keys[key] = record
                logger.debug(f"Derived key for index {key}: {record.address}")

        return record

    def _derive(self, key: str) -> KeyRecord:
        path = derivation_path(key)

        try:
            child = self._master.DerivePath(path)
            private_key_hex = child.PrivateKey().Raw().ToHex()
        except (Bip32KeyError, Bip32PathError) as e:
            raise DerivationError(f"Node derive failed for {path}: {e}") from e

        if not private_key_hex:
            raise DerivationError(f"Node derive failed for {path}: no private key")

        address = self._sdk.address_from_private_key(private_key_hex)
        return KeyRecord(address=address, private_key_hex=private_key_hex)

    async def get_address(self, index: Index) -> str:
        """Get the TRON address for an index."""
        return (await self.derive_or_get(index)).address

    async def get_private_key(self, index: Index) -> str:
        """Get the private key (hex) for an index."""
        return (await self.derive_or_get(index)).private_key_hex

    def cached_indices(self) -> list[str]:
        """Normalized indices derived so far."""
        return list(self._keys)

    def __len__(self) -> int:
        return len(self._keys)

    def __contains__(self, index: object) -> bool:
        try:
            return normalize_index(index) in self._keys
        except DerivationError:
            return False
