"""Run a steppable layout to completion under an explicit stopping policy.

Algorithms that finish on their own stop when ``finished`` flips. Stress
majorization never does, so the policy also bounds the step count and can
stop once no node moves more than a tolerance in one step.
"""

from __future__ import annotations

__all__ = ["RunSummary", "StoppingPolicy", "run_layout"]

import logging
import math
from dataclasses import dataclass

from force_lab.layout.base import Steppable
from force_lab.layout.constants import DEFAULT_MAX_STEPS

logger = logging.getLogger(__name__)


@dataclass
class StoppingPolicy:
    """When to stop stepping, besides the algorithm finishing."""

    max_steps: int = DEFAULT_MAX_STEPS
    # Stop once the largest per-node displacement of a step is below this
    tolerance: float | None = None


@dataclass
class RunSummary:
    steps: int
    finished: bool
    converged: bool
    # Largest per-node displacement of the last step
    displacement: float


def max_displacement(before: list[tuple[float, float]], algorithm: Steppable) -> float:
    return max(
        (
            math.hypot(node.x - x, node.y - y)
            for node, (x, y) in zip(algorithm.graph.node_list(), before)
        ),
        default=0.0,
    )


def run_layout(algorithm: Steppable, policy: StoppingPolicy | None = None) -> RunSummary:
    """Step ``algorithm`` until it finishes or ``policy`` says stop."""
    policy = policy or StoppingPolicy()
    steps = 0
    converged = False
    displacement = math.inf

    while not algorithm.finished and steps < policy.max_steps:
        before = [(n.x, n.y) for n in algorithm.graph.node_list()]
        algorithm.step()
        steps += 1
        displacement = max_displacement(before, algorithm)
        if policy.tolerance is not None and displacement < policy.tolerance:
            converged = True
            break

    logger.debug(
        "%s stopped after %d steps (finished=%s, converged=%s)",
        algorithm.name, steps, algorithm.finished, converged,
    )
    return RunSummary(
        steps=steps,
        finished=algorithm.finished,
        converged=converged,
        displacement=displacement if steps else 0.0,
    )
