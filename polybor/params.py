"""Fork-dependent chain parameters for Polygon Bor mainnet."""

from bisect import bisect_right

from polybor.hardfork import BorHardfork

# Each schedule lists (first block, value) pairs in ascending block order.
_SPRINT_SIZES = ((0, 64), (BorHardfork.DELHI.mainnet_block(), 16))
_SPAN_SIZES = ((0, 6400), (BorHardfork.RIO.mainnet_block(), 1600))
_GAS_LIMITS = ((0, 30_000_000), (BorHardfork.BHILAI.mainnet_block(), 45_000_000))
_BASE_FEE_DENOMINATORS = (
    (0, 8),
    (BorHardfork.DELHI.mainnet_block(), 16),
    (BorHardfork.BHILAI.mainnet_block(), 64),
)
# EIP-170 limit; no Bor fork has changed it.
_MAX_CODE_SIZES = ((0, 24_576),)


def _scheduled(block: int, schedule: tuple[tuple[int, int], ...]) -> int:
    """The value in force at a block under a fork schedule."""
    starts = [start for start, _ in schedule]
    index = max(bisect_right(starts, block) - 1, 0)
    return schedule[index][1]


def sprint_size(block: int) -> int:
    """Blocks per sprint: 64 before Delhi, 16 from Delhi on."""
    return _scheduled(block, _SPRINT_SIZES)


def span_size(block: int) -> int:
    """Blocks per span: 6400 before Rio, 1600 from Rio on."""
    return _scheduled(block, _SPAN_SIZES)


def block_gas_limit(block: int) -> int:
    """Block gas limit: 30M before Bhilai, 45M from Bhilai on."""
    return _scheduled(block, _GAS_LIMITS)


def base_fee_change_denominator(block: int) -> int:
    """Base fee change denominator: 8, then 16 from Delhi, then 64 from Bhilai."""
    return _scheduled(block, _BASE_FEE_DENOMINATORS)


def is_sprint_start(block: int) -> bool:
    """Whether the block is the first block of a sprint."""
    return block % sprint_size(block) == 0


def is_span_start(block: int, span_size: int) -> bool:
    """Whether the block starts a span of the given size."""
    return block % span_size == 0


def max_code_size(block: int) -> int:
    """Maximum contract code size; always the EIP-170 limit."""
    return _scheduled(block, _MAX_CODE_SIZES)