"""
Pydantic request / response schemas for the analysis endpoints.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class AnalyzeRequest(BaseModel):
    probabilities: dict[str, Any] = Field(
        ...,
        description="Mapping of state label to probability.",
    )


class StateProbability(BaseModel):
    model_config = ConfigDict(frozen=True)

    state: str
    probability: float


class AnalysisResult(BaseModel):
    """Descriptive statistics over a probability distribution.

    Serialized with camelCase keys (``totalStates``, ``stdDev`` ...).
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    total_states: int
    total_probability: float
    mean: float
    variance: float
    std_dev: float
    entropy: float
    significant_states: int
    dominant_states: list[StateProbability]
    min_probability: float
    max_probability: float


class QuantumAnalysisResponse(BaseModel):
    data: dict[str, Any]
    analysis: AnalysisResult


class ErrorResponse(BaseModel):
    error: str
    details: str
