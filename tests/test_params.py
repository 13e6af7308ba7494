import pytest

from polybor.hardfork import BorHardfork
from polybor.params import (
    base_fee_change_denominator,
    block_gas_limit,
    is_span_start,
    is_sprint_start,
    max_code_size,
    span_size,
    sprint_size,
)

DELHI = 38_189_056


def test_sprint_size_pre_delhi():
    assert sprint_size(38_189_055) == 64


def test_sprint_size_at_delhi():
    assert sprint_size(38_189_056) == 16


def test_sprint_size_post_delhi():
    assert sprint_size(38_189_057) == 16


def test_sprint_size_unchanged_around_agra():
    assert sprint_size(50_522_999) == 16
    assert sprint_size(50_523_000) == 16
    assert sprint_size(50_523_001) == 16


def test_params_at_lisovo_block():
    block = 83_756_500
    assert sprint_size(block) == 16
    assert span_size(block) == 1600
    assert block_gas_limit(block) == 45_000_000
    assert base_fee_change_denominator(block) == 64


def test_span_size_pre_rio():
    assert span_size(77_414_655) == 6400


def test_span_size_at_rio():
    assert span_size(77_414_656) == 1600


def test_span_size_post_rio():
    assert span_size(77_414_657) == 1600


def test_first_post_rio_span_boundary():
    rio = BorHardfork.RIO.mainnet_block()
    new_span = span_size(rio)
    assert new_span == 1600
    first_boundary = -(-rio // new_span) * new_span
    assert first_boundary >= rio
    assert is_span_start(first_boundary, new_span)
    assert not is_span_start(first_boundary - 1, new_span)


def test_span_id_calculation_pre_rio():
    block = 77_414_655
    span = span_size(block)
    assert span == 6400
    assert block // span == 12_096


def test_gas_limit_pre_bhilai():
    assert block_gas_limit(75_999_999) == 30_000_000


def test_gas_limit_at_bhilai():
    assert block_gas_limit(76_000_000) == 45_000_000


def test_gas_limit_post_bhilai():
    assert block_gas_limit(76_000_001) == 45_000_000


def test_gas_limit_at_genesis():
    assert block_gas_limit(0) == 30_000_000


def test_base_fee_denom_evolution():
    assert base_fee_change_denominator(1) == 8
    assert base_fee_change_denominator(38_189_056) == 16
    assert base_fee_change_denominator(76_000_000) == 64


@pytest.mark.parametrize("block", [0, 1, 38_189_055])
def test_base_fee_denom_pre_delhi(block):
    assert base_fee_change_denominator(block) == 8


@pytest.mark.parametrize("block", [38_189_056, 38_189_057, 50_000_000, 75_999_999])
def test_base_fee_denom_between_delhi_and_bhilai(block):
    assert base_fee_change_denominator(block) == 16


@pytest.mark.parametrize("block", [76_000_000, 76_000_001, 100_000_000])
def test_base_fee_denom_post_bhilai(block):
    assert base_fee_change_denominator(block) == 64


@pytest.mark.parametrize(
    "fork, block, sprint, span, gas, denom",
    [
        (BorHardfork.DELHI, 38_189_056, 16, 6400, 30_000_000, 16),
        (BorHardfork.INDORE, 44_934_656, 16, 6400, 30_000_000, 16),
        (BorHardfork.AGRA, 50_523_000, 16, 6400, 30_000_000, 16),
        (BorHardfork.NAPOLI, 68_195_328, 16, 6400, 30_000_000, 16),
        (BorHardfork.AHMEDABAD, 73_100_000, 16, 6400, 30_000_000, 16),
        (BorHardfork.BHILAI, 76_000_000, 16, 6400, 45_000_000, 64),
        (BorHardfork.RIO, 77_414_656, 16, 1600, 45_000_000, 64),
        (BorHardfork.MADHUGIRI, 80_084_800, 16, 1600, 45_000_000, 64),
        (BorHardfork.DANDELI, 81_900_000, 16, 1600, 45_000_000, 64),
        (BorHardfork.LISOVO, 83_756_500, 16, 1600, 45_000_000, 64),
    ],
)
def test_all_params_correct_at_each_boundary(fork, block, sprint, span, gas, denom):
    assert fork.mainnet_block() == block
    assert sprint_size(block) == sprint
    assert span_size(block) == span
    assert block_gas_limit(block) == gas
    assert base_fee_change_denominator(block) == denom


def test_is_sprint_start():
    assert is_sprint_start(0)
    assert is_sprint_start(64)
    assert not is_sprint_start(65)
    assert is_sprint_start(38_189_056)


def test_is_sprint_start_pre_delhi():
    assert is_sprint_start(0)
    assert is_sprint_start(64)
    assert is_sprint_start(128)
    assert not is_sprint_start(1)
    assert not is_sprint_start(63)
    assert not is_sprint_start(65)


def test_is_sprint_start_at_delhi_boundary():
    assert is_sprint_start(DELHI)


def test_is_sprint_start_post_delhi():
    assert is_sprint_start(DELHI + 16)
    assert not is_sprint_start(DELHI + 1)
    assert not is_sprint_start(DELHI + 15)


@pytest.mark.parametrize("block", [64, 128, 192, 256, DELHI - 64])
def test_is_sprint_start_pre_delhi_multiples(block):
    assert is_sprint_start(block)


@pytest.mark.parametrize("block", [1, 32, 63, 65, 100])
def test_is_sprint_start_pre_delhi_non_multiples(block):
    assert not is_sprint_start(block)


def test_pre_delhi_uses_64_not_16():
    assert not is_sprint_start(16)
    assert not is_sprint_start(DELHI - 16)


@pytest.mark.parametrize("offset", [0, 16, 32, 48, 64, 1600])
def test_is_sprint_start_post_delhi_multiples(offset):
    assert is_sprint_start(DELHI + offset)


@pytest.mark.parametrize("offset", [1, 8, 15, 17])
def test_is_sprint_start_post_delhi_non_multiples(offset):
    assert not is_sprint_start(DELHI + offset)


def test_is_span_start_various():
    assert is_span_start(0, 6400)
    assert is_span_start(6400, 6400)
    assert not is_span_start(6401, 6400)
    assert is_span_start(0, 1600)
    assert is_span_start(1600, 1600)
    assert not is_span_start(1601, 1600)


def test_is_span_start_with_6400():
    assert is_span_start(12800, 6400)
    assert not is_span_start(1, 6400)
    assert not is_span_start(6399, 6400)


def test_is_span_start_with_1600():
    assert is_span_start(3200, 1600)
    assert not is_span_start(1, 1600)
    assert not is_span_start(1599, 1600)


@pytest.mark.parametrize(
    "block", [0, 1, 38_189_056, 76_000_000, 83_756_500, 100_000_000, 2**64 - 1]
)
def test_max_code_size_always_24576(block):
    assert max_code_size(block) == 24_576