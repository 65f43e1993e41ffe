# Repayment simulation: project a score forward over planned repayments
# using the same point rule as the score registry. Pure, no state.

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from remitlend.services.score_registry import points_for_repayment


@dataclass(frozen=True)
class SimulationStep:
    repayment_amount: int
    points: int
    score: int


@dataclass(frozen=True)
class SimulationResult:
    starting_score: int
    projected_score: int
    steps: tuple[SimulationStep, ...]

    @property
    def points_gained(self) -> int:
        return self.projected_score - self.starting_score


def simulate_repayments(starting_score: int, repayments: Iterable[int]) -> SimulationResult:
    """Apply each repayment in order and record the score after every step."""
    score = starting_score
    steps: list[SimulationStep] = []
    for amount in repayments:
        points = points_for_repayment(amount)
        score += points
        steps.append(SimulationStep(repayment_amount=amount, points=points, score=score))
    return SimulationResult(starting_score=starting_score, projected_score=score, steps=tuple(steps))
