"""Module with endpoints of the API."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import APIRouter, FastAPI, HTTPException, Request
from loguru import logger
from pydantic import ValidationError

from predict_age.api.data_models import (
    AgePredictionRequest,
    AgePredictionResponse,
    HealthcheckResponse,
)
from predict_age.api.rate_limiter import RateLimiter
from predict_age.api.utils import get_ip_address_or_raise
from predict_age.configuration import config
from predict_age.data_models import FullResult, Options, ScoreResult
from predict_age.predictor import AgePredictor, get_predictor
from predict_age.scoring.scorer import round_to_age

router = APIRouter()
rate_limiter = RateLimiter()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Load the lexicon once, before the first request is served."""
    predictor = getattr(app.state, "predictor", None) or get_predictor()
    app.state.predictor = predictor
    logger.info(f"Serving predictions with {len(predictor.lexicon)} lexicon terms.")
    yield


def _get_predictor(request: Request) -> AgePredictor:
    predictor = getattr(request.app.state, "predictor", None)
    return predictor if predictor is not None else get_predictor()


@router.get("/health")
async def healthcheck(request: Request) -> HealthcheckResponse:
    """Check whether the lexicon is loaded and predictions can be served."""
    predictor = _get_predictor(request)
    return HealthcheckResponse(
        is_healthy=len(predictor.lexicon) > 0, lexicon_terms=len(predictor.lexicon)
    )


@router.post("/age")
async def predict(
    prediction_request: AgePredictionRequest, request: Request
) -> AgePredictionResponse:
    """Predict the age of the author of a text."""
    rate_limiter(get_ip_address_or_raise(request))

    if len(prediction_request.text) > config.max_text_length:
        raise HTTPException(
            status_code=422,
            detail=f"The text is longer than {config.max_text_length} characters.",
        )
    try:
        options = Options.build(prediction_request.options)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e

    result = await _get_predictor(request).predict_async(
        prediction_request.text, options
    )
    if result is None:
        raise HTTPException(
            status_code=422,
            detail="The text does not contain any words to predict age from.",
        )

    estimated_age = None
    if isinstance(result, ScoreResult | FullResult):
        estimated_age = round_to_age(result.score)
    return AgePredictionResponse(result=result, estimated_age=estimated_age)
