"""HD wallet base types.

Keys are derived from a BIP39 seed phrase along the TRON SLIP-44 path
m/44'/195'/{index}'/0/0, one account per index.
"""

from dataclasses import dataclass
from typing import Union

PURPOSE = 44
COIN_TYPE = 195  # SLIP-44 for TRON
SEED_WORD_COUNT = 12

# Hardened segment, so index must fit below the hardened offset
MAX_INDEX = 2**31 - 1

Index = Union[int, str]


class InvalidSeedError(ValueError):
    """Raised when the seed phrase is not exactly 12 words."""

    pass


class DerivationError(Exception):
    """Raised when no usable key can be derived for an index."""

    pass


@dataclass(frozen=True)
class KeyRecord:
    """Derived key pair for one index."""

    address: str
    private_key_hex: str

    def __repr__(self) -> str:
        return f"KeyRecord(address={self.address!r}, private_key_hex='***')"


def validate_seed_phrase(mnemonic: str) -> None:
    """Check the seed phrase has exactly 12 space separated words.

    Raises:
        InvalidSeedError: If the word count is wrong
    """
    if not isinstance(mnemonic, str) or len(mnemonic.split(" ")) != SEED_WORD_COUNT:
        raise InvalidSeedError(f"Phrase not {SEED_WORD_COUNT} words long")


def normalize_index(index: Index) -> str:
    """Normalize an index to the string key used by the cache.

    `1` and `"1"` map to the same key.

    Raises:
        DerivationError: If the index is not a valid path segment
    """
    if isinstance(index, bool):
        raise DerivationError(f"Invalid derivation index: {index!r}")

    if isinstance(index, int):
        value = index
    elif isinstance(index, str) and index.strip().isascii() and index.strip().isdigit():
        value = int(index.strip())
    else:
        raise DerivationError(f"Invalid derivation index: {index!r}")

    if value < 0 or value > MAX_INDEX:
        raise DerivationError(f"Derivation index out of range: {value}")

    return str(value)


def derivation_path(index: Index) -> str:
    """Get the full derivation path for an index."""
    return f"m/{PURPOSE}'/{COIN_TYPE}'/{normalize_index(index)}'/0/0"
