import pytest

from polybor.proposer import (
    Validator,
    ValidatorSet,
    get_sprint_producer,
    select_proposer,
)


def _addr(byte):
    return bytes([byte]) * 20


def _validator(vid, byte, power):
    return Validator(
        id=vid, address=_addr(byte), voting_power=power, signer=_addr(byte)
    )


def test_proposer_single_validator():
    vs = ValidatorSet([_validator(1, 0xAA, 100)])
    assert select_proposer(vs) == _addr(0xAA)
    assert select_proposer(vs) == _addr(0xAA)


def test_proposer_equal_power():
    vs = ValidatorSet(
        [_validator(1, 0xAA, 100), _validator(2, 0xBB, 100), _validator(3, 0xCC, 100)]
    )
    selected = [select_proposer(vs) for _ in range(3)]
    assert sorted(selected) == [_addr(0xAA), _addr(0xBB), _addr(0xCC)]


def test_proposer_weighted():
    vs = ValidatorSet([_validator(1, 0xAA, 300), _validator(2, 0xBB, 100)])
    selected = [select_proposer(vs) for _ in range(400)]
    assert selected.count(_addr(0xAA)) == 300
    assert selected.count(_addr(0xBB)) == 100


def test_proposer_deterministic():
    def make_set():
        return ValidatorSet([_validator(1, 0xAA, 200), _validator(2, 0xBB, 100)])

    vs1, vs2 = make_set(), make_set()
    for _ in range(20):
        assert select_proposer(vs1) == select_proposer(vs2)


def test_proposer_field_is_set_and_priorities_balance():
    vs = ValidatorSet([_validator(1, 0xAA, 300), _validator(2, 0xBB, 100)])
    address = select_proposer(vs)
    assert vs.proposer is not None
    assert vs.proposer.signer == address
    # Priorities always sum to zero after a round.
    assert sum(v.proposer_priority for v in vs.validators) == 0


def test_empty_set_raises():
    with pytest.raises(ValueError):
        select_proposer(ValidatorSet())


def test_get_sprint_producer_advances_set():
    vs = ValidatorSet([_validator(1, 0xAA, 100), _validator(2, 0xBB, 100)])
    first = get_sprint_producer(vs, 0)
    second = get_sprint_producer(vs, 1)
    assert {first, second} == {_addr(0xAA), _addr(0xBB)}