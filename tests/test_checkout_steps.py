import itertools
import logging

import pytest

from shopfront.app.common.errors import ConfigurationError, InvariantViolation
from shopfront.modules.checkout.steps import (
    DEFAULT_STEPS,
    StepConfig,
    position,
    reduce_steps,
    sequence_steps,
)

STEPS = ("address", "delivery", "payment", "summary", "process")


def cfg(onepage=(), default="summary", steps=STEPS):
    return StepConfig(steps=tuple(steps), onepage=tuple(onepage), default=default)


def is_subsequence(sub, seq):
    it = iter(seq)
    return all(item in it for item in sub)


# STEP-001: default step without any validation result
def test_default_step_is_active():
    seq = sequence_steps(cfg())

    assert seq.active == "summary"
    assert seq.before == ("address", "delivery", "payment")
    assert seq.after == ("process",)
    assert seq.back == "payment"
    assert seq.next == "process"


# STEP-002: requested one-page step falls back to the first navigable step
def test_onepage_requested_step_falls_back(caplog):
    with caplog.at_level(logging.DEBUG):
        seq = sequence_steps(cfg(onepage=["address", "delivery"]), requested="delivery")

    assert seq.steps == ("payment", "summary", "process")
    assert seq.active == "payment"
    assert seq.before == ()
    assert seq.back is None
    assert seq.next == "summary"
    assert "address" in caplog.text
    # collapsed steps are expected, not a misconfiguration
    assert not [rec for rec in caplog.records if rec.levelno >= logging.WARNING]


# STEP-003: a later requested step can't skip the validated one
def test_requested_step_after_validated_step_is_ignored():
    seq = sequence_steps(cfg(), requested="process", active="summary")

    assert seq.active == "summary"
    assert seq.next == "process"


def test_requested_step_before_validated_step_wins():
    seq = sequence_steps(cfg(), requested="address", active="payment")

    assert seq.active == "address"
    assert seq.back is None
    assert seq.next == "delivery"
    assert seq.after == ("delivery", "payment", "summary", "process")


# STEP-004: configuration errors
def test_empty_steps_raise():
    with pytest.raises(ConfigurationError):
        sequence_steps(cfg(steps=()))


def test_duplicate_steps_raise():
    with pytest.raises(ConfigurationError) as exc:
        sequence_steps(cfg(steps=("address", "payment", "address")))
    assert exc.value.details == {"duplicates": ["address"]}


def test_all_steps_onepage_raise():
    with pytest.raises(ConfigurationError):
        sequence_steps(cfg(onepage=STEPS))


def test_strict_mode_raises_on_unavailable_step():
    with pytest.raises(InvariantViolation):
        sequence_steps(cfg(onepage=["address", "delivery"]), requested="delivery", strict=True)


def test_onepage_reduction():
    config = cfg(onepage=["address", "delivery"])

    assert reduce_steps(config) == ("payment", "summary", "process")
    assert config.onestep == "address"


def test_onestep_defaults_to_default_step():
    assert cfg(default="payment").onestep == "payment"


def test_default_not_navigable_uses_first_step():
    seq = sequence_steps(cfg(onepage=["summary"], default="summary"))

    # default "summary" is collapsed, so "address" is the first step left
    assert seq.active == "address"


def test_unknown_requested_step_uses_onestep():
    seq = sequence_steps(cfg(), requested="unknown")

    assert seq.active == "summary"


def test_validated_onepage_step_is_replaced():
    # "delivery" needs data but is collapsed into the one-page view
    seq = sequence_steps(cfg(onepage=["summary", "delivery"]), active="delivery", requested="process")

    assert seq.steps == ("address", "payment", "process")
    assert seq.active == "address"


def test_both_steps_unknown_keeps_validated_step_and_falls_back():
    seq = sequence_steps(cfg(onepage=["delivery"]), requested="bogus", active="also-bogus")

    assert seq.active == "address"


def test_validated_step_unknown_keeps_it_and_falls_back(caplog):
    with caplog.at_level(logging.WARNING):
        seq = sequence_steps(cfg(), requested="payment", active="gone")

    assert seq.active == "address"
    assert "gone" in caplog.text


def test_from_mapping_uses_defaults():
    config = StepConfig.from_mapping({})

    assert config.steps == DEFAULT_STEPS
    assert config.onepage == ()
    assert config.default == "summary"


def test_position():
    assert position(STEPS, "payment") == 2
    assert position(STEPS, "address") == 0
    assert position(STEPS, "nope") is None
    assert position(STEPS, None) is None


def test_same_input_same_output():
    config = cfg(onepage=["delivery"])

    assert sequence_steps(config, "payment", "summary") == sequence_steps(config, "payment", "summary")


ONEPAGES = [(), ("address",), ("address", "delivery"), ("delivery", "payment"), ("summary",)]
CANDIDATES = [None, "unknown", *STEPS]


@pytest.mark.parametrize("onepage", ONEPAGES)
def test_sequence_properties(onepage):
    config = cfg(onepage=onepage)

    for requested, active in itertools.product(CANDIDATES, CANDIDATES):
        seq = sequence_steps(config, requested=requested, active=active)

        assert is_subsequence(seq.steps, STEPS)
        assert seq.active in seq.steps
        assert seq.before + (seq.active,) + seq.after == seq.steps
        assert seq.back == (seq.before[-1] if seq.before else None)
        assert seq.next == (seq.after[0] if seq.after else None)


def test_validated_step_is_not_skipped():
    steps = reduce_steps(cfg())

    for requested, active in itertools.product(STEPS, STEPS):
        seq = sequence_steps(cfg(), requested=requested, active=active)
        if steps.index(requested) < steps.index(active):
            assert seq.active == requested
        else:
            assert seq.active == active
