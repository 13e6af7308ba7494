import pytest

from polybor.difficulty import (
    calculate_difficulty,
    diff_inturn,
    diff_noturn,
    is_inturn,
)


def make_validators(count):
    return [bytes([i + 1]) * 20 for i in range(count)]


@pytest.mark.parametrize("count", [5, 1, 100])
def test_diff_inturn(count):
    assert diff_inturn(count) == count


def test_diff_noturn():
    assert diff_noturn(5, 1) == 4
    assert diff_noturn(5, 4) == 1


def test_diff_minimum():
    assert diff_noturn(5, 5) == 1
    assert diff_noturn(5, 10) == 1
    assert diff_noturn(1, 1) == 1


def test_is_inturn():
    validators = make_validators(3)
    assert is_inturn(validators[0], validators, 0)
    assert not is_inturn(validators[1], validators, 0)
    assert is_inturn(validators[1], validators, 1)
    assert is_inturn(validators[2], validators, 2)
    assert is_inturn(validators[0], validators, 3)


def test_calculate_difficulty_inturn():
    validators = make_validators(5)
    assert calculate_difficulty(validators[0], validators, 0) == 5


def test_calculate_difficulty_noturn():
    validators = make_validators(5)
    assert calculate_difficulty(validators[1], validators, 0) == 4
    assert calculate_difficulty(validators[4], validators, 0) == 1


def test_diff_at_span_boundary():
    small_set = make_validators(3)
    large_set = make_validators(10)
    assert calculate_difficulty(small_set[1], small_set, 6400) == 3
    assert calculate_difficulty(large_set[0], large_set, 6400) == 10


def test_signer_not_in_set():
    validators = make_validators(3)
    assert calculate_difficulty(b"\xff" * 20, validators, 0) == 1


def test_empty_validators():
    assert calculate_difficulty(bytes(20), [], 0) == 1
    assert not is_inturn(bytes(20), [], 0)


def test_circular_distance():
    validators = make_validators(5)
    assert calculate_difficulty(validators[1], validators, 3) == 2


def test_difficulties_form_permutation():
    validators = make_validators(7)
    for block in range(20):
        diffs = sorted(calculate_difficulty(v, validators, block) for v in validators)
        assert diffs == list(range(1, 8))