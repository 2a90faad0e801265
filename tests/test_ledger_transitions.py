import pytest

from drawledger.ledger.transitions import InvalidTransitionError, check_transition


@pytest.mark.parametrize("target", ["Approved", "Rejected"])
def test_pending_can_be_decided(target):
    check_transition("Pending", target)


@pytest.mark.parametrize(
    "current, target",
    [
        ("Approved", "Pending"),
        ("Rejected", "Pending"),
        ("Approved", "Rejected"),
        ("Rejected", "Approved"),
        ("Approved", "Approved"),
        ("Pending", "Pending"),
    ],
)
def test_other_transitions_are_refused(current, target):
    with pytest.raises(InvalidTransitionError) as excinfo:
        check_transition(current, target)

    assert excinfo.value.current == current
    assert excinfo.value.target == target
