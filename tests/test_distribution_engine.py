import math

import pytest
from pydantic import ValidationError

from app.services.distribution_engine import (
    InvalidDistributionError,
    analyze,
    validate_distribution,
)


def test_three_state_example() -> None:
    result = analyze({"00": 0.5, "01": 0.25, "10": 0.25})

    assert result.total_states == 3
    assert result.total_probability == pytest.approx(1.0)
    assert result.mean == pytest.approx(1 / 3)
    assert result.max_probability == 0.5
    assert result.min_probability == 0.25
    assert result.entropy == pytest.approx(1.5)
    assert result.significant_states == 3
    assert [(s.state, s.probability) for s in result.dominant_states] == [
        ("00", 0.5),
        ("01", 0.25),
        ("10", 0.25),
    ]


def test_variance_is_population_variance() -> None:
    probs = [0.5, 0.25, 0.25]
    result = analyze({"00": 0.5, "01": 0.25, "10": 0.25})

    mean = sum(probs) / 3
    expected = sum((p - mean) ** 2 for p in probs) / 3
    assert result.variance == pytest.approx(expected)
    assert result.std_dev == pytest.approx(math.sqrt(expected))


def test_uniform_fifteen_states() -> None:
    dist = {format(i, "04b"): 1 / 15 for i in range(15)}
    result = analyze(dist)

    assert result.total_states == 15
    assert result.entropy == pytest.approx(math.log2(15))
    assert result.entropy == pytest.approx(3.9069, abs=1e-4)
    assert len(result.dominant_states) == 10
    assert {s.probability for s in result.dominant_states} == {1 / 15}
    assert result.variance == pytest.approx(0.0)


def test_ties_keep_input_order() -> None:
    dist = {format(i, "04b"): 1 / 15 for i in range(15)}
    result = analyze(dist)

    assert [s.state for s in result.dominant_states] == list(dist)[:10]


def test_dominant_states_sorted_and_truncated() -> None:
    dist = {f"s{i}": (i + 1) / 210 for i in range(20)}
    result = analyze(dist)

    probs = [s.probability for s in result.dominant_states]
    assert len(probs) == 10
    assert probs == sorted(probs, reverse=True)
    assert result.dominant_states[0].state == "s19"
    assert result.max_probability == max(dist.values())
    assert result.min_probability == min(dist.values())


def test_fewer_than_ten_states() -> None:
    result = analyze({"0": 0.3, "1": 0.7})

    assert len(result.dominant_states) == 2
    assert result.dominant_states[0].state == "1"


def test_significance_threshold_is_strict() -> None:
    dist = {"a": 0.001, "b": 0.0011, "c": 0.0, "d": 0.9979}
    result = analyze(dist)

    assert result.significant_states == 2


def test_entropy_zero_for_certain_state() -> None:
    result = analyze({"00": 1.0, "01": 0.0, "10": 0.0, "11": 0.0})

    assert result.entropy == 0.0
    assert math.copysign(1.0, result.entropy) == 1.0
    assert result.min_probability == 0.0
    assert result.max_probability == 1.0


def test_zero_probabilities_do_not_produce_nan() -> None:
    result = analyze({"0": 0.5, "1": 0.5, "2": 0.0})

    assert result.entropy == pytest.approx(1.0)
    assert not math.isnan(result.variance)


def test_all_zero_distribution_is_degenerate_not_nan() -> None:
    result = analyze({"0": 0.0, "1": 0.0})

    assert result.total_probability == 0.0
    assert result.mean == 0.0
    assert result.variance == 0.0
    assert result.entropy == 0.0
    assert result.significant_states == 0


def test_empty_distribution_raises() -> None:
    with pytest.raises(InvalidDistributionError, match="empty"):
        analyze({})


def test_probability_above_one_raises() -> None:
    with pytest.raises(InvalidDistributionError, match="exceeds 1"):
        analyze({"a": 0.5, "b": 2.0})


def test_entropy_is_not_clamped() -> None:
    dist = {"a": 0.7, "b": 0.2, "c": 0.1}
    expected = -sum(p * math.log2(p) for p in dist.values())

    assert analyze(dist).entropy == pytest.approx(expected)


def test_input_not_mutated() -> None:
    dist = {"10": 0.25, "00": 0.5, "01": 0.25}
    snapshot = list(dist.items())

    analyze(dist)

    assert list(dist.items()) == snapshot


def test_result_is_frozen() -> None:
    result = analyze({"0": 1.0})

    with pytest.raises(ValidationError):
        result.mean = 0.5


def test_serializes_with_camel_case_keys() -> None:
    body = analyze({"0": 0.5, "1": 0.5}).model_dump(by_alias=True)

    assert body["totalStates"] == 2
    assert body["stdDev"] == 0.0
    assert body["dominantStates"][0] == {"state": "0", "probability": 0.5}
    assert set(body) >= {"minProbability", "maxProbability", "significantStates"}


def test_validate_coerces_ints() -> None:
    assert validate_distribution({"0": 1, "1": 0}) == {"0": 1.0, "1": 0.0}


@pytest.mark.parametrize(
    "raw",
    [
        [("0", 0.5)],
        None,
        {"0": -0.1},
        {"0": 0.5, "1": 2.0},
        {"0": 1.0000001},
        {"0": "0.5"},
        {"0": None},
        {"0": True},
        {"0": float("nan")},
        {"0": float("inf")},
        {"0": {"p": 0.5}},
        {0: 0.5},
    ],
)
def test_validate_rejects_malformed(raw) -> None:
    with pytest.raises(InvalidDistributionError):
        validate_distribution(raw)
