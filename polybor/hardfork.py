"""Polygon Bor hardfork definitions."""

from __future__ import annotations

import enum
import functools


@functools.total_ordering
class BorHardfork(enum.Enum):
    """All Polygon Bor hardforks, declared in activation order."""

    DELHI = "Delhi"
    INDORE = "Indore"
    AGRA = "Agra"
    NAPOLI = "Napoli"
    AHMEDABAD = "Ahmedabad"
    BHILAI = "Bhilai"
    RIO = "Rio"
    MADHUGIRI = "Madhugiri"
    DANDELI = "Dandeli"
    LISOVO = "Lisovo"

    def mainnet_block(self) -> int:
        """Activation block on Polygon PoS mainnet (chain 137)."""
        return _MAINNET_BLOCKS[self.value]

    def amoy_block(self) -> int:
        """Activation block on the Amoy testnet (chain 80002)."""
        return _AMOY_BLOCKS[self.value]

    @classmethod
    def all(cls) -> tuple[BorHardfork, ...]:
        """Every hardfork in activation order."""
        return tuple(cls)

    @classmethod
    def parse(cls, s: str) -> BorHardfork:
        """Parse a hardfork name case-insensitively; raise ValueError if unknown."""
        wanted = s.lower()
        for fork in cls:
            if fork.value.lower() == wanted:
                return fork
        raise ValueError(f"unknown Bor hardfork: {s}")

    def __str__(self) -> str:
        return self.value

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, BorHardfork):
            return NotImplemented
        order = _ORDER
        return order[self.value] < order[other.value]

    def __hash__(self) -> int:
        return hash(self.value)


_MAINNET_BLOCKS = {
    "Delhi": 38_189_056,
    "Indore": 44_934_656,
    "Agra": 50_523_000,
    "Napoli": 68_195_328,
    "Ahmedabad": 73_100_000,
    "Bhilai": 76_000_000,
    "Rio": 77_414_656,
    "Madhugiri": 80_084_800,
    "Dandeli": 81_900_000,
    "Lisovo": 83_756_500,
}

_AMOY_BLOCKS = {
    "Delhi": 73_100,
    "Indore": 73_100,
    "Agra": 73_100,
    "Napoli": 73_100,
    "Ahmedabad": 11_865_856,
    "Bhilai": 22_765_056,
    "Rio": 26_272_256,
    "Madhugiri": 28_899_616,
    "Dandeli": 31_890_000,
    "Lisovo": 33_634_700,
}

_ORDER = {fork.value: index for index, fork in enumerate(BorHardfork)}