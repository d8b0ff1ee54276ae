"""
Distribution engine.

Validates probability distributions returned by the quantum simulation
service and reduces them to descriptive statistics for dashboard
visualisation.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from numbers import Real
from typing import Any

from app.config import DOMINANT_STATE_LIMIT, SIGNIFICANCE_THRESHOLD
from app.schemas import AnalysisResult, StateProbability


class InvalidDistributionError(ValueError):
    """Raised when a distribution is empty or malformed."""


def validate_distribution(raw: Any) -> dict[str, float]:
    """
    Return a clean ``{state: probability}`` copy of *raw*.

    Rejects non-mappings, empty mappings, non-string keys, and values
    that are not finite real numbers in [0, 1].
    """
    if not isinstance(raw, Mapping):
        raise InvalidDistributionError(
            f"Distribution must be a mapping, got {type(raw).__name__}"
        )
    if not raw:
        raise InvalidDistributionError("Distribution is empty")

    clean: dict[str, float] = {}
    for state, prob in raw.items():
        if not isinstance(state, str):
            raise InvalidDistributionError(f"State label must be a string: {state!r}")
        # bool is an int subclass but never a probability
        if isinstance(prob, bool) or not isinstance(prob, Real):
            raise InvalidDistributionError(
                f"Probability for state {state!r} is not a number: {prob!r}"
            )
        value = float(prob)
        if not math.isfinite(value):
            raise InvalidDistributionError(
                f"Probability for state {state!r} is not finite: {value}"
            )
        if value < 0:
            raise InvalidDistributionError(
                f"Probability for state {state!r} is negative: {value}"
            )
        if value > 1:
            raise InvalidDistributionError(
                f"Probability for state {state!r} exceeds 1: {value}"
            )
        clean[state] = value
    return clean


def analyze(distribution: Mapping[str, float]) -> AnalysisResult:
    """
    Compute summary statistics for *distribution*.

    Variance is the population variance and entropy is measured in bits.
    Dominant states are ordered by descending probability; ties keep
    their input order. The input mapping is never mutated.
    """
    states = list(validate_distribution(distribution).items())
    probs = [prob for _, prob in states]

    total_states = len(states)
    total = math.fsum(probs)
    mean = total / total_states
    variance = math.fsum((p - mean) ** 2 for p in probs) / total_states

    # + 0.0 turns -0.0 into 0.0 for single-state distributions
    entropy = -math.fsum(p * math.log2(p) for p in probs if p > 0) + 0.0

    significant = sum(1 for p in probs if p > SIGNIFICANCE_THRESHOLD)

    ranked = sorted(states, key=lambda item: item[1], reverse=True)

    return AnalysisResult(
        total_states=total_states,
        total_probability=total,
        mean=mean,
        variance=variance,
        std_dev=math.sqrt(variance),
        entropy=entropy,
        significant_states=significant,
        dominant_states=[
            StateProbability(state=state, probability=prob)
            for state, prob in ranked[:DOMINANT_STATE_LIMIT]
        ],
        min_probability=ranked[-1][1],
        max_probability=ranked[0][1],
    )
