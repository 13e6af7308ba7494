"""Chain specifications: Ethereum forks, EIP-2124 fork IDs and Bor hardforks."""

from __future__ import annotations

import enum
import zlib
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import ClassVar, Optional, Union

from polybor.constants import AMOY_CHAIN_ID, MAINNET_CHAIN_ID
from polybor.hardfork import BorHardfork

ZERO_HASH = bytes(32)

# Berlin and London activated together on Polygon PoS mainnet.
_MAINNET_BERLIN_BLOCK = 29_231_616
_MAINNET_LONDON_BLOCK = 29_231_616


class EthereumHardfork(enum.Enum):
    """Standard Ethereum hardforks."""

    FRONTIER = "Frontier"
    HOMESTEAD = "Homestead"
    DAO = "Dao"
    TANGERINE = "Tangerine"
    SPURIOUS_DRAGON = "SpuriousDragon"
    BYZANTIUM = "Byzantium"
    CONSTANTINOPLE = "Constantinople"
    PETERSBURG = "Petersburg"
    ISTANBUL = "Istanbul"
    MUIR_GLACIER = "MuirGlacier"
    BERLIN = "Berlin"
    LONDON = "London"
    ARROW_GLACIER = "ArrowGlacier"
    GRAY_GLACIER = "GrayGlacier"
    PARIS = "Paris"
    SHANGHAI = "Shanghai"
    CANCUN = "Cancun"
    PRAGUE = "Prague"
    OSAKA = "Osaka"

    def __str__(self) -> str:
        return self.value


Hardfork = Union[EthereumHardfork, BorHardfork]


class _BlockActivated:
    """Shared activation check; subclasses name the attribute holding the start block."""

    _start_attr: ClassVar[Optional[str]] = None

    def active_at_block(self, number: int) -> bool:
        attr = self._start_attr
        if attr is None:
            return False
        return number >= getattr(self, attr)


@dataclass(frozen=True)
class ForkBlock(_BlockActivated):
    """Fork activated at a block number."""

    _start_attr: ClassVar[Optional[str]] = "block"

    block: int


@dataclass(frozen=True)
class ForkTTD(_BlockActivated):
    """Fork activated by reaching a total difficulty."""

    _start_attr: ClassVar[Optional[str]] = "activation_block_number"

    total_difficulty: int
    fork_block: int | None = None
    activation_block_number: int = 0


@dataclass(frozen=True)
class ForkNever(_BlockActivated):
    """Fork that never activates."""


ForkCondition = Union[ForkBlock, ForkTTD, ForkNever]


@dataclass(frozen=True)
class Head:
    """The current head of a chain."""

    number: int = 0
    hash: bytes = ZERO_HASH
    timestamp: int = 0


@dataclass(frozen=True)
class ForkHash:
    """CRC32 checksum over the genesis hash and past fork blocks (EIP-2124)."""

    value: bytes

    @classmethod
    def from_genesis(cls, genesis_hash: bytes) -> ForkHash:
        return cls(zlib.crc32(genesis_hash).to_bytes(4, "big"))

    def add(self, block: int) -> ForkHash:
        """Return the checksum extended with a fork block number."""
        crc = zlib.crc32(block.to_bytes(8, "big"), int.from_bytes(self.value, "big"))
        return ForkHash(crc.to_bytes(4, "big"))

    def __add__(self, block: int) -> ForkHash:
        return self.add(block)

    def __str__(self) -> str:
        return "0x" + self.value.hex()


@dataclass(frozen=True)
class ForkId:
    """EIP-2124 fork identifier."""

    hash: ForkHash
    next: int


def _fork_id_for(genesis_hash: bytes, blocks: Iterable[int], number: int) -> ForkId:
    forkhash = ForkHash.from_genesis(genesis_hash)
    for block in blocks:
        if number >= block:
            forkhash = forkhash.add(block)
        else:
            return ForkId(forkhash, block)
    return ForkId(forkhash, 0)


def _normalise_blocks(blocks: Iterable[int]) -> list[int]:
    return sorted({block for block in blocks if block != 0})


class ForkFilter:
    """Tracks the local fork ID for a head over a set of block-based forks."""

    def __init__(
        self,
        head: Head,
        genesis_hash: bytes,
        genesis_timestamp: int,
        forks: Iterable[int],
    ) -> None:
        self.head = head
        self.genesis_hash = genesis_hash
        self.genesis_timestamp = genesis_timestamp
        self.forks = _normalise_blocks(forks)

    def set_head(self, head: Head) -> None:
        self.head = head

    def current(self) -> ForkId:
        """The fork ID at the current head."""
        return _fork_id_for(self.genesis_hash, self.forks, self.head.number)


def _block_of(condition: ForkCondition) -> int | None:
    if isinstance(condition, ForkBlock):
        return condition.block
    if isinstance(condition, ForkTTD) and condition.fork_block is not None:
        return condition.fork_block
    return None


@dataclass
class ChainSpec:
    """Ethereum chain specification: chain ID, genesis and Ethereum hardforks."""

    chain_id: int
    hardforks: list[tuple[EthereumHardfork, ForkCondition]] = field(default_factory=list)
    genesis_hash: bytes = ZERO_HASH
    genesis_timestamp: int = 0

    def fork(self, fork: Hardfork) -> ForkCondition:
        """The activation condition of a fork, or ForkNever if unknown."""
        name = str(fork)
        for known, condition in self.hardforks:
            if str(known) == name:
                return condition
        return ForkNever()

    def forks_iter(self) -> Iterator[tuple[Hardfork, ForkCondition]]:
        yield from self.hardforks

    def _fork_blocks(self) -> list[int]:
        blocks = (_block_of(condition) for _, condition in self.hardforks)
        return _normalise_blocks(block for block in blocks if block is not None)

    def fork_id(self, head: Head) -> ForkId:
        return _fork_id_for(self.genesis_hash, self._fork_blocks(), head.number)


class BorChainSpec:
    """Ethereum chain spec extended with Polygon Bor hardforks."""

    def __init__(
        self, inner: ChainSpec, bor_hardforks: Mapping[BorHardfork, ForkCondition]
    ) -> None:
        ordered = dict(sorted(bor_hardforks.items()))
        previous: int | None = None
        for fork, condition in ordered.items():
            if isinstance(condition, ForkBlock):
                if previous is not None and condition.block < previous:
                    raise ValueError(
                        f"Bor hardfork {fork} activates at block {condition.block} "
                        f"which is before previous fork at block {previous}"
                    )
                previous = condition.block
        self.inner = inner
        self._bor_hardforks = ordered

    @property
    def bor_hardforks(self) -> Mapping[BorHardfork, ForkCondition]:
        return MappingProxyType(self._bor_hardforks)

    @property
    def chain_id(self) -> int:
        return self.inner.chain_id

    @property
    def genesis_hash(self) -> bytes:
        return self.inner.genesis_hash

    @property
    def genesis_timestamp(self) -> int:
        return self.inner.genesis_timestamp

    def is_bor_fork_active_at_block(self, fork: BorHardfork, block: int) -> bool:
        condition = self._bor_hardforks.get(fork)
        return isinstance(condition, ForkBlock) and block >= condition.block

    def fork(self, fork: Hardfork) -> ForkCondition:
        """Activation condition, looking in Bor forks first by name."""
        name = str(fork)
        for bor_fork, condition in self._bor_hardforks.items():
            if str(bor_fork) == name:
                return condition
        return self.inner.fork(fork)

    def forks_iter(self) -> Iterator[tuple[Hardfork, ForkCondition]]:
        yield from self.inner.forks_iter()
        yield from self._bor_hardforks.items()

    def _eth_fork_blocks(self) -> list[int]:
        # Bor forks are left out: peers only checksum Ethereum forks.
        return self.inner._fork_blocks()

    def fork_id(self, head: Head) -> ForkId:
        return _fork_id_for(self.genesis_hash, self._eth_fork_blocks(), head.number)

    def latest_fork_id(self) -> ForkId:
        blocks = self._eth_fork_blocks()
        number = blocks[-1] if blocks else 0
        return self.fork_id(Head(number=number))

    def fork_filter(self, head: Head) -> ForkFilter:
        return ForkFilter(
            head, self.genesis_hash, self.genesis_timestamp, self._eth_fork_blocks()
        )

    def __repr__(self) -> str:
        return f"BorChainSpec(chain_id={self.chain_id}, bor_hardforks={self._bor_hardforks!r})"


def bor_mainnet_chainspec(inner: ChainSpec) -> BorChainSpec:
    """Wrap a chain spec with the Polygon PoS mainnet Bor hardforks."""
    return BorChainSpec(
        inner, {fork: ForkBlock(fork.mainnet_block()) for fork in BorHardfork.all()}
    )


def bor_amoy_chainspec(inner: ChainSpec) -> BorChainSpec:
    """Wrap a chain spec with the Amoy testnet Bor hardforks."""
    return BorChainSpec(
        inner, {fork: ForkBlock(fork.amoy_block()) for fork in BorHardfork.all()}
    )


def bor_mainnet_genesis() -> BorChainSpec:
    """The Polygon PoS mainnet (chain 137) specification."""
    genesis_forks = (
        EthereumHardfork.FRONTIER,
        EthereumHardfork.HOMESTEAD,
        EthereumHardfork.TANGERINE,
        EthereumHardfork.SPURIOUS_DRAGON,
        EthereumHardfork.BYZANTIUM,
        EthereumHardfork.CONSTANTINOPLE,
        EthereumHardfork.PETERSBURG,
        EthereumHardfork.ISTANBUL,
        EthereumHardfork.MUIR_GLACIER,
    )
    hardforks: list[tuple[EthereumHardfork, ForkCondition]] = [
        (fork, ForkBlock(0)) for fork in genesis_forks
    ]
    hardforks.append((EthereumHardfork.BERLIN, ForkBlock(_MAINNET_BERLIN_BLOCK)))
    hardforks.append((EthereumHardfork.LONDON, ForkBlock(_MAINNET_LONDON_BLOCK)))
    return bor_mainnet_chainspec(ChainSpec(chain_id=MAINNET_CHAIN_ID, hardforks=hardforks))


__all__ = [
    "AMOY_CHAIN_ID",
    "BorChainSpec",
    "ChainSpec",
    "EthereumHardfork",
    "ForkBlock",
    "ForkCondition",
    "ForkFilter",
    "ForkHash",
    "ForkId",
    "ForkNever",
    "ForkTTD",
    "Head",
    "bor_amoy_chainspec",
    "bor_mainnet_chainspec",
    "bor_mainnet_genesis",
]