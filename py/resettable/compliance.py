"""Implementation-agnostic compliance suite for Resettable types.

Implementors (ResettableValue itself, or any composite) provide a
fixture dict:

    fixture = {
        "create": lambda: ...,       # fresh, clean instance
        "mutate": lambda obj: ...,   # mutate through write access, return obj
        "state": lambda obj: ...,    # comparable view of the observable state
    }

mutate must change the observable state of a clean instance.

Usage with pytest:

    from resettable.compliance import run_compliance_tests

    def test_compliance():
        run_compliance_tests(FORM_FIXTURE)
"""

import copy
from typing import Dict, Any

from resettable.protocols import Resettable


# ============================================================
# Clean instances
# ============================================================

def test_is_resettable(fix: Dict[str, Any]) -> None:
    """create returns an object carrying the capability."""
    obj = fix["create"]()
    assert isinstance(obj, Resettable), "instance should implement Resettable"


def test_reset_returns_same_type(fix: Dict[str, Any]) -> None:
    """reset returns an instance of the same type."""
    obj = fix["create"]()
    reset = obj.reset()
    assert type(reset) is type(obj), "reset should return the same type"


def test_reset_clean_is_noop(fix: Dict[str, Any]) -> None:
    """Resetting without an intervening write leaves the state unchanged."""
    obj = fix["create"]()
    before = fix["state"](obj)
    obj = obj.reset()
    assert fix["state"](obj) == before, "reset of a clean instance should be a no-op"


# ============================================================
# Dirty instances
# ============================================================

def test_mutation_is_observable(fix: Dict[str, Any]) -> None:
    """The fixture's mutate changes the observable state."""
    obj = fix["create"]()
    before = fix["state"](obj)
    obj = fix["mutate"](obj)
    assert fix["state"](obj) != before, "mutate should change the state"


def test_reset_restores_mutation(fix: Dict[str, Any]) -> None:
    """reset after one mutation restores the pre-mutation state."""
    obj = fix["create"]()
    before = fix["state"](obj)
    obj = fix["mutate"](obj)
    obj = obj.reset()
    assert fix["state"](obj) == before, "reset should restore the pre-mutation state"


def test_reset_restores_repeated_mutation(fix: Dict[str, Any]) -> None:
    """reset after several mutations restores the state before the first one."""
    obj = fix["create"]()
    before = fix["state"](obj)
    for _ in range(3):
        obj = fix["mutate"](obj)
    obj = obj.reset()
    assert fix["state"](obj) == before, \
        "reset should ignore intermediate mutated states"


def test_double_reset(fix: Dict[str, Any]) -> None:
    """A second reset in a row is a no-op."""
    obj = fix["create"]()
    obj = fix["mutate"](obj)
    obj = obj.reset()
    once = fix["state"](obj)
    obj = obj.reset()
    assert fix["state"](obj) == once, "second reset should be a no-op"


def test_checkpoint_per_dirty_period(fix: Dict[str, Any]) -> None:
    """Each dirty period takes its own checkpoint."""
    obj = fix["create"]()
    before = fix["state"](obj)
    obj = fix["mutate"](obj)
    obj = obj.reset()
    obj = fix["mutate"](obj)
    obj = fix["mutate"](obj)
    obj = obj.reset()
    assert fix["state"](obj) == before, \
        "checkpoint should be recomputed after each reset"


def test_clone_isolation(fix: Dict[str, Any]) -> None:
    """A deep copy taken before mutation is unaffected by mutation and reset."""
    obj = fix["create"]()
    clone = copy.deepcopy(obj)
    before = fix["state"](clone)
    obj = fix["mutate"](obj)
    assert fix["state"](clone) == before, "clone should not see mutations"
    obj.reset()
    assert fix["state"](clone) == before, "clone should not see resets"


# ============================================================
# Full test suite
# ============================================================

ALL_TESTS = {
    "clean": [
        test_is_resettable,
        test_reset_returns_same_type,
        test_reset_clean_is_noop,
    ],
    "dirty": [
        test_mutation_is_observable,
        test_reset_restores_mutation,
        test_reset_restores_repeated_mutation,
        test_double_reset,
        test_checkpoint_per_dirty_period,
        test_clone_isolation,
    ],
}


def run_compliance_tests(fixture: Dict[str, Any]) -> None:
    """Run all compliance tests for the given fixture.

    Required fixture keys:
        create  - () -> resettable instance
        mutate  - (instance) -> instance
        state   - (instance) -> comparable value
    """
    for group, tests in ALL_TESTS.items():
        for test_fn in tests:
            test_fn(fixture)
