"""Recent block signers, used to stop a validator signing twice in a window."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType


def _window(validator_count: int) -> int:
    return validator_count // 2 + 1


class Recents:
    """Recent signers by block number.

    The window is ``validator_count // 2 + 1`` blocks.
    """

    def __init__(self) -> None:
        self._signers: dict[int, bytes] = {}

    @property
    def signers(self) -> Mapping[int, bytes]:
        """A read-only view of block number to signer."""
        return MappingProxyType(self._signers)

    def __len__(self) -> int:
        return len(self._signers)

    def is_recently_signed(
        self, signer: bytes, current_block: int, validator_count: int
    ) -> bool:
        """Whether the signer sealed a block in the window before the current block."""
        start = max(0, current_block - _window(validator_count))
        return any(
            recent == signer
            for block, recent in self._signers.items()
            if start <= block < current_block
        )

    def add_signer(self, block: int, signer: bytes) -> None:
        """Record the signer of a block."""
        self._signers[block] = signer

    def prune(self, current_block: int, validator_count: int) -> None:
        """Drop entries older than the window."""
        cutoff = max(0, current_block - _window(validator_count))
        self._signers = {
            block: signer for block, signer in self._signers.items() if block >= cutoff
        }

    def __repr__(self) -> str:
        return f"Recents({self._signers!r})"