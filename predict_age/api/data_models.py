"""Package with data models for the API."""

from typing import Any

from pydantic import BaseModel, Field

from predict_age.data_models import AgeResult


class HealthcheckResponse(BaseModel):
    """Response from the healthcheck endpoint indicating the status of the system."""

    is_healthy: bool
    lexicon_terms: int


class AgePredictionRequest(BaseModel):
    """API request for an age prediction."""

    text: str
    options: dict[str, Any] = Field(default_factory=dict)


class AgePredictionResponse(BaseModel):
    """Response sent when a client requests an age prediction."""

    result: AgeResult
    estimated_age: int | None = None
