"""Checkout step sequencing.

Decides which checkout step is shown, which steps come before and after it
and where the "back" and "next" controls point. The calculation is a pure
function of the step configuration and two request scoped values:

- the step requested by the customer (``c_step`` parameter)
- the step flagged by the step validation, i.e. the first step whose data
  is still missing

Steps listed in the one-page configuration are collapsed into one page and
are not navigable on their own. A requested step that is not navigable is
replaced by the first one-page step.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence

from shopfront.app.common.errors import ConfigurationError, InvariantViolation

logger = logging.getLogger(__name__)

DEFAULT_STEPS = ("address", "delivery", "payment", "summary", "process")


@dataclass(frozen=True)
class StepConfig:
    steps: tuple[str, ...]
    onepage: tuple[str, ...] = ()
    default: str = "summary"

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any]) -> StepConfig:
        return cls(
            steps=tuple(config.get("CHECKOUT_STANDARD_SUBPARTS", DEFAULT_STEPS)),
            onepage=tuple(config.get("CHECKOUT_STANDARD_ONEPAGE", ())),
            default=config.get("CHECKOUT_STANDARD_STEP_ACTIVE", "summary"),
        )

    @property
    def onestep(self) -> str:
        """Step that stands in for all one-page steps."""
        return self.onepage[0] if self.onepage else self.default

    def validate(self) -> None:
        if not self.steps:
            raise ConfigurationError("No checkout steps configured")

        duplicates = [name for name, count in Counter(self.steps).items() if count > 1]
        if duplicates:
            raise ConfigurationError("Checkout steps must be unique", {"duplicates": duplicates})


@dataclass(frozen=True)
class StepSequence:
    steps: tuple[str, ...]
    active: str
    before: tuple[str, ...]
    after: tuple[str, ...]
    back: Optional[str]  # None: leave the checkout (basket page)
    next: Optional[str]  # None: no further step


def position(steps: Sequence[str], name: Optional[str]) -> Optional[int]:
    """Return the index of ``name`` in ``steps`` or None if it isn't there."""
    if name is None:
        return None
    try:
        return steps.index(name)
    except ValueError:
        return None


def reduce_steps(config: StepConfig) -> tuple[str, ...]:
    """Remove the one-page steps from the navigable steps."""
    onepage = set(config.onepage)
    return tuple(step for step in config.steps if step not in onepage)


def sequence_steps(
    config: StepConfig,
    requested: Optional[str] = None,
    active: Optional[str] = None,
    strict: bool = False,
) -> StepSequence:
    """Compute the active checkout step and the navigation around it.

    ``requested`` is the step the customer asked for, ``active`` the step the
    step validation wants to show. The validated step wins unless the
    requested one comes strictly earlier, so customers can go back to
    completed steps but never skip a step that still needs data.

    Raises ConfigurationError if no navigable step is left. If the resolved
    step isn't navigable, the first step is used instead, or
    InvariantViolation is raised when ``strict`` is set.
    """
    config.validate()

    steps = reduce_steps(config)
    if not steps:
        raise ConfigurationError(
            "All checkout steps are configured as one-page steps",
            {"steps": list(config.steps), "onepage": list(config.onepage)},
        )

    onestep = config.onestep
    default = config.default if config.default in steps else steps[0]

    current = requested or default
    if current not in steps:
        current = onestep

    if active is not None and active in config.onepage:
        active = onestep

    cpos = position(steps, current)
    apos = position(steps, active)

    if active is None or (cpos is not None and apos is not None and cpos < apos):
        active = current

    pos = position(steps, active)
    if pos is None:
        if strict:
            raise InvariantViolation(
                f'Checkout step "{active}" is not available',
                {"steps": list(steps), "onestep": onestep},
            )
        if active in config.onepage:
            # collapsed steps are rendered with the first step
            logger.debug('One-page step "%s" shown with "%s"', active, steps[0])
        else:
            logger.warning('Checkout step "%s" not in %s, using "%s"', active, list(steps), steps[0])
        pos = 0
        active = steps[0]

    return StepSequence(
        steps=steps,
        active=active,
        before=steps[:pos],
        after=steps[pos + 1:],
        back=steps[pos - 1] if pos > 0 else None,
        next=steps[pos + 1] if pos + 1 < len(steps) else None,
    )
